"""API tests for review submission and the user's own reviews."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.apps import apps
from django.conf import settings
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.reviews.models import Review
from apps.reviews.rate_limit import RateLimiter
from apps.trips.models import Trip
from apps.users.models import User

CLEAN_COMMENT = "Captain knew every spot, we landed a dozen snapper."


class ReviewAPITestCase(APITestCase):
    def setUp(self) -> None:
        apps.get_app_config("reviews").rate_limiter = RateLimiter()
        self.today = timezone.localdate()
        self.trip = Trip.objects.create(
            title="Grouper Grounds",
            description="Bottom fishing over wrecks.",
            location_name="Clearwater, FL",
            latitude=27.97,
            longitude=-82.8,
            duration=6,
            base_price=Decimal("180.00"),
            max_guests=6,
            boat_type="Sport Fisher",
        )
        self.user = User.objects.create_user(email="reviewer@example.com", password="ReviewPass123", name="Rev")
        self.client.force_authenticate(self.user)

    def _payload(self, **overrides) -> dict:
        payload = {
            "trip_id": str(self.trip.id),
            "rating": 5,
            "comment": CLEAN_COMMENT,
            "trip_date": str(self.today - timedelta(days=2)),
        }
        payload.update(overrides)
        return payload


class ReviewSubmissionTests(ReviewAPITestCase):
    def test_clean_review_is_published(self) -> None:
        response = self.client.post(reverse("review-list"), self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertFalse(response.data["needs_approval"])
        review = Review.objects.get()
        self.assertTrue(review.is_approved)
        self.assertEqual(review.user, self.user)
        self.assertEqual(review.moderation_reasons, [])

    def test_requires_authentication(self) -> None:
        self.client.force_authenticate(None)
        response = self.client.post(reverse("review-list"), self._payload(), format="json")
        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))

    def test_suspicious_review_waits_for_approval(self) -> None:
        comment = "Winner of the lottery? No, but this limited time charter was superb."

        response = self.client.post(reverse("review-list"), self._payload(comment=comment), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertTrue(response.data["needs_approval"])
        review = Review.objects.get()
        self.assertFalse(review.is_approved)
        self.assertEqual(review.moderation_reasons, ["Contains spam keywords: lottery, winner, limited time"])

    def test_inappropriate_review_is_rejected(self) -> None:
        response = self.client.post(
            reverse("review-list"),
            self._payload(comment="I hate this captain, it felt like a threat"),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["reasons"], ["Contains inappropriate content: hate, threat"])
        self.assertFalse(Review.objects.exists())

    def test_validation_messages(self) -> None:
        url = reverse("review-list")

        future = self.client.post(
            url, self._payload(trip_date=str(self.today + timedelta(days=1))), format="json", REMOTE_ADDR="10.1.0.1"
        )
        self.assertEqual(future.data["trip_date"][0], "Trip date cannot be in the future")

        bad_rating = self.client.post(url, self._payload(rating=6), format="json", REMOTE_ADDR="10.1.0.2")
        self.assertEqual(bad_rating.data["rating"][0], "Rating cannot exceed 5 stars")

        images = [f"https://img.example.com/{i}.jpg" for i in range(6)]
        too_many_images = self.client.post(url, self._payload(images=images), format="json", REMOTE_ADDR="10.1.0.3")
        self.assertEqual(too_many_images.data["images"][0], "Maximum 5 images allowed")

        long_comment = self.client.post(url, self._payload(comment="a" * 1001), format="json", REMOTE_ADDR="10.1.0.4")
        self.assertEqual(long_comment.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(long_comment.data["comment"][0], "Comment must be less than 1000 characters")

    def test_unknown_trip(self) -> None:
        response = self.client.post(
            reverse("review-list"),
            self._payload(trip_id="0b7d3f52-2222-4222-8222-222222222222"),
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["trip_id"][0], "Trip not found")

    def test_rate_limited_per_client_ip(self) -> None:
        url = reverse("review-list")
        for _ in range(3):
            response = self.client.post(url, self._payload(), format="json", REMOTE_ADDR="10.0.0.1")
            self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

        limited = self.client.post(url, self._payload(), format="json", REMOTE_ADDR="10.0.0.1")
        self.assertEqual(limited.status_code, status.HTTP_429_TOO_MANY_REQUESTS)
        self.assertIn("reset_time", limited.data)
        self.assertEqual(Review.objects.count(), 3)

        other_ip = self.client.post(url, self._payload(), format="json", REMOTE_ADDR="10.0.0.2")
        self.assertEqual(other_ip.status_code, status.HTTP_201_CREATED, other_ip.data)

    def test_forwarded_for_header_cannot_dodge_limit(self) -> None:
        url = reverse("review-list")
        for i in range(3):
            response = self.client.post(
                url, self._payload(), format="json", REMOTE_ADDR="10.0.0.1", HTTP_X_FORWARDED_FOR=f"1.2.3.{i}"
            )
            self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

        limited = self.client.post(
            url, self._payload(), format="json", REMOTE_ADDR="10.0.0.1", HTTP_X_FORWARDED_FOR="1.2.3.99"
        )
        self.assertEqual(limited.status_code, status.HTTP_429_TOO_MANY_REQUESTS)

    def test_trusted_proxy_hop_identifies_client(self) -> None:
        url = reverse("review-list")
        with self.settings(REST_FRAMEWORK={**settings.REST_FRAMEWORK, "NUM_PROXIES": 1}):
            for i in range(3):
                response = self.client.post(
                    url, self._payload(), format="json", HTTP_X_FORWARDED_FOR=f"1.2.3.{i}, 203.0.113.9"
                )
                self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

            limited = self.client.post(
                url, self._payload(), format="json", HTTP_X_FORWARDED_FOR="1.2.3.99, 203.0.113.9"
            )
            self.assertEqual(limited.status_code, status.HTTP_429_TOO_MANY_REQUESTS)

            other = self.client.post(url, self._payload(), format="json", HTTP_X_FORWARDED_FOR="203.0.113.10")
            self.assertEqual(other.status_code, status.HTTP_201_CREATED, other.data)


class UserReviewTests(ReviewAPITestCase):
    def setUp(self) -> None:
        super().setUp()
        self.review = Review.objects.create(
            trip=self.trip,
            user=self.user,
            rating=4,
            comment=CLEAN_COMMENT,
            trip_date=self.today - timedelta(days=5),
        )
        self.other = User.objects.create_user(email="someone@example.com")
        self.foreign = Review.objects.create(
            trip=self.trip,
            user=self.other,
            rating=2,
            comment="Too choppy for me, but the crew did their best.",
            trip_date=self.today - timedelta(days=5),
        )

    def _detail_url(self, review: Review) -> str:
        return reverse("my-review-detail", args=[review.id])

    def test_lists_only_own_reviews(self) -> None:
        response = self.client.get(reverse("my-review-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item["id"] for item in response.data], [str(self.review.id)])
        self.assertEqual(response.data[0]["trip"]["title"], "Grouper Grounds")

    def test_update_rating_and_comment(self) -> None:
        response = self.client.patch(
            self._detail_url(self.review),
            {"rating": 5, "comment": "Even better the second time out with this crew."},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.review.refresh_from_db()
        self.assertEqual(self.review.rating, 5)
        self.assertTrue(self.review.is_approved)

    def test_update_requires_valid_rating(self) -> None:
        response = self.client.patch(self._detail_url(self.review), {"comment": "Changed my mind"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["rating"][0], "Rating must be between 1 and 5")

    def test_updated_comment_is_moderated(self) -> None:
        response = self.client.patch(
            self._detail_url(self.review),
            {"rating": 1, "comment": "Racist remarks and violence on board"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.review.refresh_from_db()
        self.assertEqual(self.review.comment, CLEAN_COMMENT)

    def test_delete_own_review(self) -> None:
        response = self.client.delete(self._detail_url(self.review))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["message"], "Review deleted successfully")
        self.assertFalse(Review.objects.filter(pk=self.review.pk).exists())

    def test_cannot_touch_other_users_review(self) -> None:
        response = self.client.delete(self._detail_url(self.foreign))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(Review.objects.filter(pk=self.foreign.pk).exists())

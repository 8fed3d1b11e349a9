from django.apps import AppConfig  # type: ignore
from django.conf import settings  # type: ignore


class ReviewsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.reviews"
    label = "reviews"

    def ready(self) -> None:
        from .rate_limit import RateLimiter

        # One limiter per process, shared by all review submissions
        self.rate_limiter = RateLimiter()
        interval = getattr(settings, "RATE_LIMIT_SWEEP_INTERVAL", 0)
        if interval > 0:
            self.rate_limiter.start_sweeper(interval)

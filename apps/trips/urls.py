"""URL routing for the trips domain."""

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import TripViewSet

router = DefaultRouter()
router.register(r"", TripViewSet, basename="trip")

urlpatterns = [path("", include(router.urls))]

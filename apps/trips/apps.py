from django.apps import AppConfig  # type: ignore


class TripsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.trips"
    label = "trips"

    def ready(self) -> None:
        from . import signals  # noqa: F401

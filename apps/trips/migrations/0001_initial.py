import uuid
from decimal import Decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="FishingType",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, unique=True)),
            ],
            options={
                "verbose_name": "Fishing type",
                "verbose_name_plural": "Fishing types",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Trip",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField()),
                ("location_name", models.CharField(db_index=True, max_length=255)),
                ("latitude", models.FloatField()),
                ("longitude", models.FloatField()),
                (
                    "duration",
                    models.PositiveSmallIntegerField(
                        help_text="Trip length in hours.",
                        validators=[django.core.validators.MinValueValidator(1)],
                    ),
                ),
                (
                    "base_price",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Price per guest.",
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.01"))],
                    ),
                ),
                (
                    "max_guests",
                    models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1)]),
                ),
                ("boat_type", models.CharField(max_length=100)),
                ("images", models.JSONField(blank=True, default=list)),
                ("inclusions", models.JSONField(blank=True, default=list)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "fishing_types",
                    models.ManyToManyField(blank=True, related_name="trips", to="trips.fishingtype"),
                ),
            ],
            options={
                "verbose_name": "Trip",
                "verbose_name_plural": "Trips",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["boat_type"], name="trips_trip_boat_ty_6c0f1e_idx"),
                    models.Index(fields=["base_price"], name="trips_trip_base_pr_1d9b4a_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("base_price__gt", 0)), name="trip_positive_base_price"),
                    models.CheckConstraint(condition=models.Q(("max_guests__gt", 0)), name="trip_positive_max_guests"),
                ],
            },
        ),
    ]

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("users", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Listing",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=200)),
                ("description", models.TextField(max_length=2000)),
                ("price_per_day", models.PositiveIntegerField(help_text="Smallest currency unit.")),
                ("currency", models.CharField(default="BRL", max_length=3)),
                ("max_pets", models.PositiveSmallIntegerField(default=1)),
                ("accepts_dogs", models.BooleanField(default=True)),
                ("accepts_cats", models.BooleanField(default=True)),
                ("accepts_small_pets", models.BooleanField(default=True)),
                ("accepts_medium_pets", models.BooleanField(default=True)),
                ("accepts_large_pets", models.BooleanField(default=False)),
                ("has_yard", models.BooleanField(default=False)),
                ("allows_walks", models.BooleanField(default=True)),
                ("provides_medication", models.BooleanField(default=False)),
                ("photos", models.JSONField(blank=True, default=list)),
                ("policies", models.TextField(blank=True, max_length=1000)),
                ("cancellation_policy", models.TextField(blank=True, max_length=500)),
                ("is_active", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "host",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="listings",
                        to="users.host",
                    ),
                ),
            ],
            options={
                "verbose_name": "Listing",
                "verbose_name_plural": "Listings",
                "ordering": ["-created_at"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(price_per_day__gt=0),
                        name="listing_positive_price",
                    ),
                ],
                "indexes": [
                    models.Index(fields=["is_active"], name="listing_active_idx"),
                    models.Index(fields=["host", "is_active"], name="listing_host_active_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="HostAvailability",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                ("is_blocked", models.BooleanField(default=True)),
                ("reason", models.CharField(blank=True, max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "host",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="availability",
                        to="users.host",
                    ),
                ),
            ],
            options={
                "verbose_name": "Host availability",
                "verbose_name_plural": "Host availability",
                "ordering": ["date"],
                "constraints": [
                    models.UniqueConstraint(fields=("host", "date"), name="host_availability_unique_day"),
                ],
            },
        ),
    ]

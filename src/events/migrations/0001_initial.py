import decimal
import uuid

import django.core.validators
import django.db.models.deletion
import django.db.models.expressions
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Event",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("title_zh", models.CharField(max_length=255)),
                ("title_en", models.CharField(max_length=255)),
                ("description_zh", models.TextField(blank=True, null=True)),
                ("description_en", models.TextField(blank=True, null=True)),
                ("event_date", models.DateField(db_index=True)),
                ("start_time", models.TimeField(blank=True, null=True)),
                ("end_time", models.TimeField(blank=True, null=True)),
                ("location", models.CharField(max_length=255)),
                (
                    "fee",
                    models.DecimalField(
                        decimal_places=2,
                        default=decimal.Decimal("0"),
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(0)],
                    ),
                ),
                (
                    "member_fee",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        max_digits=10,
                        null=True,
                        validators=[django.core.validators.MinValueValidator(0)],
                    ),
                ),
                ("capacity", models.PositiveIntegerField(blank=True, help_text="Empty means unlimited.", null=True)),
                (
                    "access_type",
                    models.CharField(
                        blank=True,
                        choices=[("members-only", "Members only"), ("all-welcome", "All welcome")],
                        max_length=20,
                        null=True,
                    ),
                ),
                (
                    "image_type",
                    models.CharField(
                        blank=True,
                        choices=[("unsplash", "Unsplash"), ("upload", "Upload")],
                        max_length=20,
                        null=True,
                    ),
                ),
                ("image_keyword", models.CharField(blank=True, max_length=255, null=True)),
                ("image_url", models.URLField(blank=True, max_length=1024, null=True)),
                ("published", models.BooleanField(db_index=True, default=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="events",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": [
                    "event_date",
                    django.db.models.expressions.OrderBy(
                        django.db.models.expressions.F("start_time"), nulls_first=True
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="EventRegistration",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("name", models.CharField(max_length=255)),
                ("phone", models.CharField(blank=True, default="", max_length=50)),
                ("email", models.EmailField(blank=True, max_length=254, null=True)),
                (
                    "tickets",
                    models.PositiveIntegerField(
                        default=1, validators=[django.core.validators.MinValueValidator(1)]
                    ),
                ),
                (
                    "payment_method",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("card", "Card"),
                            ("cash", "Cash"),
                            ("transfer", "Bank transfer"),
                            ("payid", "PayID"),
                        ],
                        max_length=20,
                        null=True,
                    ),
                ),
                (
                    "payment_status",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("pending", "Pending"),
                            ("confirmed", "Confirmed"),
                            ("cancelled", "Cancelled"),
                        ],
                        db_index=True,
                        max_length=20,
                        null=True,
                    ),
                ),
                (
                    "payment_proof",
                    models.CharField(
                        blank=True, help_text="Storage path of the proof.", max_length=512, null=True
                    ),
                ),
                ("notes", models.TextField(blank=True, null=True)),
                (
                    "member_email",
                    models.EmailField(
                        blank=True,
                        help_text="Verified member the discount was given to.",
                        max_length=254,
                        null=True,
                    ),
                ),
                ("amount_paid", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("stripe_session_id", models.CharField(blank=True, max_length=255, null=True)),
                ("registration_date", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="registrations",
                        to="events.event",
                    ),
                ),
            ],
            options={
                "ordering": ["-registration_date"],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("stripe_session_id__isnull", False)),
                        fields=("stripe_session_id",),
                        name="unique_registration_stripe_session",
                    )
                ],
            },
        ),
    ]

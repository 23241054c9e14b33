from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

ASSIGNMENT_STATUS_CHOICES = [("active", "Active"), ("cancelled", "Cancelled")]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("addons", "0001_initial"),
        ("clients", "0001_initial"),
        ("rooms", "0001_initial"),
        ("surf_camps", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("booking_code", models.CharField(editable=False, max_length=12, unique=True)),
                (
                    "booking_type",
                    models.CharField(
                        choices=[("room", "Room"), ("surf_week", "Surf week")],
                        default="room",
                        max_length=20,
                    ),
                ),
                ("check_in", models.DateField()),
                ("check_out", models.DateField()),
                ("guests", models.PositiveSmallIntegerField(default=1)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("confirmed", "Confirmed"),
                            ("cancelled", "Cancelled"),
                            ("completed", "Completed"),
                            ("expired", "Expired"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                (
                    "payment_status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("paid", "Paid"),
                            ("refunded", "Refunded"),
                            ("failed", "Failed"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                (
                    "payment_method",
                    models.CharField(
                        choices=[
                            ("stripe", "Card (Stripe)"),
                            ("cash", "Cash"),
                            ("transfer", "Bank transfer"),
                            ("other", "Other"),
                        ],
                        default="stripe",
                        max_length=20,
                    ),
                ),
                ("subtotal", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("taxes", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("fees", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("discount_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("total_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("currency", models.CharField(default="EUR", max_length=3)),
                ("is_peak_season", models.BooleanField(default=False)),
                (
                    "source",
                    models.CharField(
                        choices=[("web", "Website"), ("wordpress", "WordPress widget"), ("admin", "Admin dashboard")],
                        default="web",
                        max_length=20,
                    ),
                ),
                ("source_url", models.URLField(blank=True, max_length=500)),
                ("notes", models.TextField(blank=True)),
                (
                    "expires_at",
                    models.DateTimeField(
                        blank=True,
                        help_text="Unpaid pending bookings expire after this moment.",
                        null=True,
                    ),
                ),
                ("cancelled_at", models.DateTimeField(blank=True, null=True)),
                ("cancellation_reason", models.CharField(blank=True, max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("clients", models.ManyToManyField(blank=True, related_name="bookings", to="clients.client")),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="created_bookings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "room",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bookings",
                        to="rooms.room",
                    ),
                ),
                (
                    "surf_camp",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bookings",
                        to="surf_camps.surfcamp",
                    ),
                ),
            ],
            options={
                "verbose_name": "Booking",
                "verbose_name_plural": "Bookings",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["room", "check_in", "check_out"], name="booking_room_dates_idx"),
                    models.Index(fields=["surf_camp", "status"], name="booking_camp_status_idx"),
                    models.Index(fields=["status", "payment_status"], name="booking_status_payment_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(check_out__gt=models.F("check_in")),
                        name="booking_valid_dates",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="BookingAddOn",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("quantity", models.PositiveSmallIntegerField(default=1)),
                ("unit_price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("total_price", models.DecimalField(decimal_places=2, max_digits=12)),
                (
                    "add_on",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="booking_items",
                        to="addons.addon",
                    ),
                ),
                (
                    "booking",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="add_on_items",
                        to="bookings.booking",
                    ),
                ),
            ],
            options={
                "verbose_name": "Booking add-on",
                "verbose_name_plural": "Booking add-ons",
                "constraints": [
                    models.UniqueConstraint(fields=("booking", "add_on"), name="unique_booking_add_on"),
                ],
            },
        ),
        migrations.CreateModel(
            name="RoomAssignment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("check_in", models.DateField()),
                ("check_out", models.DateField()),
                ("status", models.CharField(choices=ASSIGNMENT_STATUS_CHOICES, default="active", max_length=20)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "booking",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="room_assignments",
                        to="bookings.booking",
                    ),
                ),
                (
                    "client",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="room_assignments",
                        to="clients.client",
                    ),
                ),
                (
                    "room",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="assignments",
                        to="rooms.room",
                    ),
                ),
            ],
            options={
                "verbose_name": "Room assignment",
                "verbose_name_plural": "Room assignments",
                "ordering": ["check_in", "room_id"],
                "constraints": [
                    models.UniqueConstraint(fields=("booking", "client"), name="unique_room_assignment_client"),
                ],
            },
        ),
        migrations.CreateModel(
            name="SurfCampAssignment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("status", models.CharField(choices=ASSIGNMENT_STATUS_CHOICES, default="active", max_length=20)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "booking",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="camp_assignments",
                        to="bookings.booking",
                    ),
                ),
                (
                    "client",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="camp_assignments",
                        to="clients.client",
                    ),
                ),
                (
                    "room",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="camp_assignments",
                        to="rooms.room",
                    ),
                ),
                (
                    "surf_camp",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="assignments",
                        to="surf_camps.surfcamp",
                    ),
                ),
            ],
            options={
                "verbose_name": "Surf camp assignment",
                "verbose_name_plural": "Surf camp assignments",
                "ordering": ["surf_camp_id", "id"],
                "constraints": [
                    models.UniqueConstraint(fields=("booking", "client"), name="unique_camp_assignment_client"),
                ],
            },
        ),
    ]

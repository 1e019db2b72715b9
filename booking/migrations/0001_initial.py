import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


WEEKDAY_CHOICES = [
    (0, "Monday"),
    (1, "Tuesday"),
    (2, "Wednesday"),
    (3, "Thursday"),
    (4, "Friday"),
    (5, "Saturday"),
    (6, "Sunday"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Salon",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("working_hours", models.JSONField(blank=True, default=dict)),
                ("booking_slot_interval", models.PositiveSmallIntegerField(
                    blank=True,
                    choices=[(15, "15 min"), (30, "30 min"), (45, "45 min"), (60, "60 min")],
                    default=30,
                    null=True,
                )),
            ],
        ),
        migrations.CreateModel(
            name="Service",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True)),
                ("duration_minutes", models.PositiveIntegerField(default=30)),
                ("price", models.DecimalField(
                    decimal_places=2,
                    max_digits=8,
                    validators=[django.core.validators.MinValueValidator(0)],
                )),
                ("active", models.BooleanField(default=True)),
                ("salon", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="services",
                    to="booking.salon",
                )),
            ],
        ),
        migrations.CreateModel(
            name="Staff",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("role", models.CharField(blank=True, max_length=100)),
                ("working_hours", models.JSONField(blank=True, default=dict)),
                ("is_active", models.BooleanField(default=True)),
                ("is_public", models.BooleanField(default=True)),
                ("accepts_bookings", models.BooleanField(default=True)),
                ("salon", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="staff_members",
                    to="booking.salon",
                )),
                ("services", models.ManyToManyField(
                    blank=True,
                    related_name="staff_members",
                    to="booking.service",
                )),
            ],
        ),
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                ("start_time", models.TimeField()),
                ("end_time", models.TimeField()),
                ("status", models.CharField(
                    choices=[
                        ("pending", "Pending"),
                        ("confirmed", "Confirmed"),
                        ("in_progress", "In progress"),
                        ("completed", "Completed"),
                        ("cancelled", "Cancelled"),
                        ("no_show", "No show"),
                    ],
                    default="pending",
                    max_length=20,
                )),
                ("client_name", models.CharField(max_length=200)),
                ("client_email", models.EmailField(blank=True, max_length=254)),
                ("client_phone", models.CharField(blank=True, max_length=20)),
                ("notes", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("cancellation_time", models.DateTimeField(blank=True, null=True)),
                ("services", models.ManyToManyField(related_name="bookings", to="booking.service")),
                ("staff", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="bookings",
                    to="booking.staff",
                )),
            ],
            options={
                "ordering": ["date", "start_time"],
                "indexes": [models.Index(fields=["staff", "date"], name="booking_staff_date_idx")],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("status__in", ["confirmed", "in_progress", "pending"])),
                        fields=("staff", "date", "start_time"),
                        name="booking_no_double_booking",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="SalonBreak",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("day_of_week", models.PositiveSmallIntegerField(blank=True, choices=WEEKDAY_CHOICES, null=True)),
                ("date", models.DateField(blank=True, null=True)),
                ("start_time", models.TimeField()),
                ("end_time", models.TimeField()),
                ("reason", models.CharField(blank=True, max_length=200)),
                ("is_active", models.BooleanField(default=True)),
                ("salon", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="breaks",
                    to="booking.salon",
                )),
            ],
            options={"abstract": False},
        ),
        migrations.CreateModel(
            name="SalonVacation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("start_date", models.DateField()),
                ("end_date", models.DateField()),
                ("reason", models.CharField(blank=True, max_length=200)),
                ("is_active", models.BooleanField(default=True)),
                ("salon", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="vacations",
                    to="booking.salon",
                )),
            ],
            options={"abstract": False},
        ),
    ]

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

    dependencies = [
        ("booking", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="StaffBreak",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("day_of_week", models.PositiveSmallIntegerField(blank=True, choices=WEEKDAY_CHOICES, null=True)),
                ("date", models.DateField(blank=True, null=True)),
                ("start_time", models.TimeField()),
                ("end_time", models.TimeField()),
                ("reason", models.CharField(blank=True, max_length=200)),
                ("is_active", models.BooleanField(default=True)),
                ("staff", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="breaks",
                    to="booking.staff",
                )),
            ],
            options={"ordering": ["staff_id", "start_time"]},
        ),
        migrations.CreateModel(
            name="StaffVacation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("start_date", models.DateField()),
                ("end_date", models.DateField()),
                ("reason", models.CharField(blank=True, max_length=200)),
                ("is_active", models.BooleanField(default=True)),
                ("staff", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="vacations",
                    to="booking.staff",
                )),
            ],
            options={"ordering": ["staff_id", "start_date"]},
        ),
    ]

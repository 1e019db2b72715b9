"""
seed_demo_salon.py
------------------
Seeds (creates or updates) a demo salon with one stylist and a small service
catalog, including weekly schedules. Safe to run repeatedly; rows are upserted
by name/email.

Usage:
    python manage.py seed_demo_salon
"""

from decimal import Decimal
from django.core.management.base import BaseCommand
from booking.models import Salon, Service, Staff


WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

SALON_HOURS = {
    day: {"is_open": day != "sunday", "open": "08:00", "close": "20:00"} for day in WEEKDAYS
}

STAFF_HOURS = {
    day: {"is_working": day not in ("saturday", "sunday"), "start": "09:00", "end": "17:00"}
    for day in WEEKDAYS
}

CATALOG = [
    {"name": "Haircut",            "description": "Wash, cut and style", "duration_minutes": 30,  "price": Decimal("25.00")},
    {"name": "Colouring",          "description": "Full colour",         "duration_minutes": 90,  "price": Decimal("70.00")},
    {"name": "Blow-dry",           "description": "Extra",               "duration_minutes": 45,  "price": Decimal("20.00")},
    {"name": "Extra length add-on", "description": "Extra",              "duration_minutes": 0,   "price": Decimal("10.00")},
]


class Command(BaseCommand):
    help = "Seed or update a demo salon, stylist and service catalog."

    def handle(self, *args, **options):
        salon, _ = Salon.objects.update_or_create(
            name="Demo Salon",
            defaults={"working_hours": SALON_HOURS, "booking_slot_interval": 30},
        )

        created = 0
        services = []
        for item in CATALOG:
            svc, is_created = Service.objects.update_or_create(
                salon=salon,
                name=item["name"],
                defaults={
                    "description": item["description"],
                    "duration_minutes": item["duration_minutes"],
                    "price": item["price"],
                    "active": True,
                },
            )
            created += int(is_created)
            services.append(svc)

        staff, _ = Staff.objects.update_or_create(
            email="stylist@demo-salon.test",
            defaults={
                "salon": salon,
                "name": "Demo Stylist",
                "role": "Stylist",
                "working_hours": STAFF_HOURS,
                "is_active": True,
                "is_public": True,
                "accepts_bookings": True,
            },
        )
        staff.services.set(services)

        self.stdout.write(self.style.SUCCESS(
            f"Seed complete. Salon={salon.id}, Staff={staff.id}, new services={created}"
        ))

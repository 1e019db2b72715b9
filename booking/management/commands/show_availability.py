# booking/management/commands/show_availability.py
from django.core.management.base import BaseCommand, CommandError

from booking.exceptions import AvailabilityError
from booking.services.availability_engine import AvailabilityEngine
from booking.services.slot_utils import normalize_date
from booking.services.snapshots import service_requests


class Command(BaseCommand):
    help = "Print the bookable start times for a staff member on one day."

    def add_arguments(self, parser):
        parser.add_argument("--staff", type=int, required=True, help="Staff id")
        parser.add_argument("--date", required=True, help="YYYY-MM-DD or DD.MM.YYYY")
        group = parser.add_mutually_exclusive_group(required=True)
        group.add_argument("--duration", type=int, help="Total duration in minutes")
        group.add_argument("--services", help="Comma-separated service ids, performed back-to-back")
        parser.add_argument("--step", type=int, default=None, help="Slot step (defaults to the salon's)")

    def handle(self, *args, **opts):
        engine = AvailabilityEngine()
        try:
            day = normalize_date(opts["date"])
            if opts["services"]:
                ids = [int(i) for i in opts["services"].split(",") if i.strip()]
                services = service_requests(opts["staff"], ids)
                slots = engine.available_slots_for_services(opts["staff"], day, services, opts["step"])
            else:
                slots = engine.available_slots(opts["staff"], day, opts["duration"], opts["step"])
        except (AvailabilityError, ValueError) as e:
            raise CommandError(str(e))

        if not slots:
            self.stdout.write(f"No availability on {day}.")
            return
        self.stdout.write(self.style.SUCCESS(f"{len(slots)} slot(s) on {day}:"))
        self.stdout.write(", ".join(slots))

# staff/models.py
#
# Staff-level exclusions. Salon-level breaks/vacations apply on top of these
# to every staff member of the salon (see booking.models).
from django.db import models

from booking.models import BreakBase, VacationBase


class StaffBreak(BreakBase):
    """
    Recurring (weekday) or one-off (date) break for a staff member.
    Points to booking.Staff to avoid having two Staff models.
    """
    staff = models.ForeignKey(
        "booking.Staff",                 # ← reference booking app model
        on_delete=models.CASCADE,
        related_name="breaks",
    )

    class Meta:
        ordering = ["staff_id", "start_time"]

    def __str__(self):
        return f"{self.staff.name}: break {self.start_time:%H:%M} - {self.end_time:%H:%M}"


class StaffVacation(VacationBase):
    staff = models.ForeignKey(
        "booking.Staff",
        on_delete=models.CASCADE,
        related_name="vacations",
    )

    class Meta:
        ordering = ["staff_id", "start_date"]

    def __str__(self):
        return f"{self.staff.name}: off {self.start_date} - {self.end_date}"

# salon_booking/urls.py
#
# Purpose:
# - Project URL router.
# - All JSON APIs live under /api/ via the booking app's DRF router.
#
from django.contrib import admin
from django.urls import path, include


urlpatterns = [
    # Django admin (salons, staff, schedules, breaks, vacations, settings)
    path("admin/", admin.site.urls),

    # =====
    # API's
    # =====
    path("api/", include("booking.urls")),
]

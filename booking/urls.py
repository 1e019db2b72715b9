# booking/urls.py
#
# Purpose:
# - Expose the availability and booking REST endpoints via DRF router.
#
# Routes (mounted under /api/ by salon_booking/urls.py):
#   GET  availability/slots/      bookable start times
#   GET  availability/check/      single start time check
#   GET  availability/board/      grid with availability flags
#   GET  availability/capacity/   month capacity
#   GET  bookings/                list (filter with ?staff=&date=)
#   POST bookings/                create
#   POST bookings/{id}/cancel/    cancel
#   GET  services/                active service catalog (filter with ?salon=&staff=)

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import AvailabilityViewSet, BookingViewSet, ServiceViewSet

# --------------------------
# DRF Router registrations
# --------------------------
router = DefaultRouter()
router.register(r"availability", AvailabilityViewSet, basename="availability")
router.register(r"bookings", BookingViewSet, basename="booking")
router.register(r"services", ServiceViewSet, basename="service")

urlpatterns = [
    path("", include(router.urls)),
]

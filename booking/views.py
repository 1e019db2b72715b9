# booking/views.py
#
# Purpose:
# - Availability endpoints backed by AvailabilityEngine:
#     GET /api/availability/slots/     bookable start times for a day
#     GET /api/availability/check/     is one start time free?
#     GET /api/availability/board/     every grid start with an "available" flag (public staff only)
#     GET /api/availability/capacity/  per-day capacity for a month
# - Booking API: list/retrieve, create (via BookingManager), cancel.
# - Read-only service catalog.
#
# Notes:
# - Dates accept YYYY-MM-DD or DD.MM.YYYY; times are HH:MM.
# - "No availability" is a normal answer (empty list / false), never an error.
#   Malformed input -> 400, unknown staff/service -> 404.
#
import logging

from django.shortcuts import get_object_or_404

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from .exceptions import InvalidInput, InvalidReference
from .models import Booking, Service
from .serializers import BookingCreateSerializer, BookingSerializer, ServiceSerializer
from .services.availability_engine import AvailabilityEngine, total_duration
from .services.booking_manager import BookingManager
from .services.capacity import month_capacity
from .services.slot_utils import normalize_date, parse_time
from .services.snapshots import service_requests

logger = logging.getLogger(__name__)


# -------------------- Query helpers --------------------
def _param(request, name, required=True):
    value = (request.query_params.get(name) or "").strip()
    if required and not value:
        raise InvalidInput(f"Missing '{name}'.")
    return value or None


def _int_param(request, name, required=True):
    value = _param(request, name, required)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        raise InvalidInput(f"'{name}' must be a whole number.")


def _requested_services(staff_id, raw):
    """
    Resolve "1,2,3" to ServiceRequests: active services the staff member performs.
    """
    try:
        ids = [int(part) for part in raw.split(",") if part.strip()]
    except ValueError:
        raise InvalidInput("'services' must be a comma-separated list of ids.")
    if not ids:
        raise InvalidInput("Missing 'services'.")
    return service_requests(staff_id, ids)


def _error_response(exc):
    if isinstance(exc, InvalidReference):
        return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
    return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)


# -------------------- ViewSets --------------------
class ServiceViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Service catalog (read-only). Only active services are listed.
    Filter with ?salon=ID or ?staff=ID to see what one staff member performs.
    """
    serializer_class = ServiceSerializer

    def get_queryset(self):
        qs = Service.objects.filter(active=True).order_by("id")
        for param, lookup in (("salon", "salon_id"), ("staff", "staff_members__id")):
            value = self.request.query_params.get(param)
            if value:
                if not value.isdigit():
                    return qs.none()
                qs = qs.filter(**{lookup: value})
        return qs


class AvailabilityViewSet(viewsets.ViewSet):
    """
    Read-only availability queries. Every request reads fresh data.
    """
    engine_class = AvailabilityEngine

    def get_engine(self):
        return self.engine_class()

    @action(detail=False, methods=["get"])
    def slots(self, request):
        """
        GET /api/availability/slots/?staff=ID&date=D&services=1,2[&step=N]
        or  /api/availability/slots/?staff=ID&date=D&duration=N[&step=N]
        """
        try:
            staff_id = _int_param(request, "staff")
            day = normalize_date(_param(request, "date"))
            step = _int_param(request, "step", required=False)
            engine = self.get_engine()

            raw_services = _param(request, "services", required=False)
            if raw_services:
                duration = total_duration(_requested_services(staff_id, raw_services))
            else:
                duration = _int_param(request, "duration")
            slots, used_step = engine.available_slots_with_step(staff_id, day, duration, step)
        except (InvalidInput, InvalidReference) as e:
            return _error_response(e)

        return Response({
            "date": day.isoformat(),
            "staff": staff_id,
            "duration_minutes": duration,
            "step_minutes": used_step,
            "slots": slots,
        })

    @action(detail=False, methods=["get"])
    def check(self, request):
        """GET /api/availability/check/?staff=ID&date=D&time=HH:MM&duration=N"""
        try:
            staff_id = _int_param(request, "staff")
            day = normalize_date(_param(request, "date"))
            at = parse_time(_param(request, "time"))
            duration = _int_param(request, "duration")
            available = self.get_engine().is_available(staff_id, day, at, duration)
        except (InvalidInput, InvalidReference) as e:
            return _error_response(e)

        return Response({"available": available})

    @action(detail=False, methods=["get"])
    def board(self, request):
        """
        GET /api/availability/board/?staff=ID&date=D&duration=N
        Public staff listing: every start on the grid with an availability flag.
        """
        try:
            staff_id = _int_param(request, "staff")
            day = normalize_date(_param(request, "date"))
            duration = _int_param(request, "duration")
            engine = self.get_engine()
            if not engine.source.load(staff_id, day).is_public:
                raise InvalidReference(f"Unknown staff member {staff_id!r}.")
            board = engine.slot_board(staff_id, day, duration)
        except (InvalidInput, InvalidReference) as e:
            return _error_response(e)

        return Response({"date": day.isoformat(), "staff": staff_id, "slots": board})

    @action(detail=False, methods=["get"])
    def capacity(self, request):
        """GET /api/availability/capacity/?staff=ID&month=YYYY-MM[&duration=N]"""
        try:
            staff_id = _int_param(request, "staff")
            month = _param(request, "month")
            duration = _int_param(request, "duration", required=False)
            data = month_capacity(self.get_engine(), staff_id, month,
                                  duration if duration is not None else 30)
        except (InvalidInput, InvalidReference) as e:
            return _error_response(e)

        return Response(data)


class BookingViewSet(viewsets.ModelViewSet):
    """
    Endpoints:
    - GET    /api/bookings/?staff=ID&date=D   list
    - POST   /api/bookings/                   create (re-checks availability under a lock)
    - POST   /api/bookings/{id}/cancel/       cancel with cutoff
    """
    queryset = Booking.objects.all().prefetch_related("services").order_by("date", "start_time")
    serializer_class = BookingSerializer
    http_method_names = ["get", "post", "head", "options"]
    manager_class = BookingManager

    def get_queryset(self):
        qs = super().get_queryset()
        staff_id = self.request.query_params.get("staff")
        if staff_id:
            if not staff_id.isdigit():
                return qs.none()
            qs = qs.filter(staff_id=staff_id)
        date_raw = self.request.query_params.get("date")
        if date_raw:
            try:
                qs = qs.filter(date=normalize_date(date_raw))
            except InvalidInput:
                return qs.none()
        return qs

    def create(self, request, *args, **kwargs):
        """
        Create a booking for one staff member covering one or more services back-to-back.
        The slot is re-validated with AvailabilityEngine inside the insert transaction.
        """
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            booking = self.manager_class().create_booking(
                staff=data["staff"],
                services=data["services"],
                day=data["date"],
                start_time=data["start_time"],
                client_name=data["client_name"],
                client_email=data["client_email"],
                client_phone=data["client_phone"],
                notes=data["notes"],
            )
        except (ValueError, InvalidReference) as e:
            # Business rule rejections (slot taken, zero duration, empty schedule)
            logger.info("Booking rejected for staff %s: %s", data["staff"].pk, e)
            return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        out = BookingSerializer(booking)
        headers = self.get_success_headers(out.data)
        return Response(out.data, status=status.HTTP_201_CREATED, headers=headers)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):
        """Cancel a booking. Respects the configured cutoff."""
        booking = get_object_or_404(Booking, pk=pk)
        try:
            self.manager_class().cancel_booking(booking)
        except ValueError as e:
            return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response({"detail": "Booking cancelled."}, status=status.HTTP_200_OK)

from rest_framework import serializers

from .exceptions import InvalidInput
from .models import Booking, Service, Staff
from .services.slot_utils import normalize_date, parse_time


class ServiceSerializer(serializers.ModelSerializer):
    class Meta:
        model = Service
        fields = ["id", "salon", "name", "description", "duration_minutes", "price"]


class BookingSerializer(serializers.ModelSerializer):
    start_time = serializers.TimeField(format="%H:%M")
    end_time = serializers.TimeField(format="%H:%M")

    class Meta:
        model = Booking
        fields = [
            "id",
            "staff",
            "services",
            "date",
            "start_time",
            "end_time",
            "status",
            "client_name",
            "client_email",
            "client_phone",
            "notes",
            "created_at",
        ]
        read_only_fields = fields


class BookingCreateSerializer(serializers.Serializer):
    """
    Input for POST /api/bookings/.
    date accepts YYYY-MM-DD or DD.MM.YYYY; start_time is HH:MM.
    """
    staff = serializers.PrimaryKeyRelatedField(queryset=Staff.objects.all())
    services = serializers.PrimaryKeyRelatedField(queryset=Service.objects.all(), many=True)
    date = serializers.CharField()
    start_time = serializers.CharField()
    client_name = serializers.CharField(max_length=200)
    client_email = serializers.EmailField(required=False, allow_blank=True, default="")
    client_phone = serializers.CharField(max_length=20, required=False, allow_blank=True, default="")
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_date(self, value):
        try:
            return normalize_date(value)
        except InvalidInput as e:
            raise serializers.ValidationError(str(e))

    def validate_start_time(self, value):
        try:
            return parse_time(value)
        except InvalidInput as e:
            raise serializers.ValidationError(str(e))

    def validate(self, attrs):
        staff = attrs["staff"]
        services = attrs["services"]
        if not services:
            raise serializers.ValidationError("At least one service is required.")
        offered = set(staff.services.values_list("id", flat=True))
        missing = [s.name for s in services if s.id not in offered]
        if missing:
            raise serializers.ValidationError(
                f"{staff.name} does not perform: {', '.join(missing)}."
            )
        return attrs

# apps/bookingapp/serializers.py
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from core.exceptions import InvalidInputException
from utils.config import booking_setting
from utils.validators import TIME_RE, normalize_seating_category


class AvailabilitySearchQuerySerializer(serializers.Serializer):
    """Query parameters of the availability search"""

    latitude = serializers.FloatField(min_value=-90, max_value=90)
    longitude = serializers.FloatField(min_value=-180, max_value=180)
    radius_meters = serializers.FloatField()
    date = serializers.DateField(input_formats=["%Y-%m-%d"])
    time = serializers.CharField(max_length=5)
    party_size = serializers.IntegerField()
    seating_category = serializers.CharField(required=False, allow_blank=True, default=None, allow_null=True)

    def validate_radius_meters(self, value):
        maximum = booking_setting("MAX_SEARCH_RADIUS_METERS")
        if value <= 0:
            raise serializers.ValidationError(_("Radius must be greater than zero"))
        if value > maximum:
            raise serializers.ValidationError(_("Radius must not exceed %(max)s meters") % {"max": f"{maximum:g}"})
        return value

    def validate_time(self, value):
        if not TIME_RE.match(value):
            raise serializers.ValidationError(_("Invalid time format (HH:MM)"))
        return value

    def validate_party_size(self, value):
        if value < booking_setting("MIN_PARTY_SIZE"):
            raise serializers.ValidationError(_("Party size too small"))
        if value > booking_setting("MAX_PARTY_SIZE"):
            raise serializers.ValidationError(_("Party size too large"))
        return value

    def validate_seating_category(self, value):
        try:
            return normalize_seating_category(value)
        except InvalidInputException as e:
            raise serializers.ValidationError(str(e.message))


class AvailableTableSerializer(serializers.Serializer):
    """Read-only representation of an AvailableTable"""

    table_id = serializers.CharField()
    table_number = serializers.CharField()
    capacity = serializers.IntegerField()
    seating_category = serializers.CharField()
    location_id = serializers.CharField()
    location_name = serializers.CharField()
    address = serializers.CharField()
    latitude = serializers.FloatField()
    longitude = serializers.FloatField()
    distance_meters = serializers.SerializerMethodField()

    def get_distance_meters(self, obj):
        if obj.distance_meters is None:
            return None
        return round(obj.distance_meters, 1)

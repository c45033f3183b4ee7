import uuid

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import F, Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.geoapp.models import Location
from core.enums import DayOfWeek, SeatingCategory, TableStatus
from utils.config import booking_setting


class Table(models.Model):
    """A bookable table at a location. Never deleted; deactivated via soft_delete()."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    location = models.ForeignKey(
        Location,
        on_delete=models.CASCADE,
        related_name="tables",
        verbose_name=_("Location"),
    )
    table_number = models.CharField(_("Table Number"), max_length=20)
    capacity = models.PositiveIntegerField(_("Capacity"), validators=[MinValueValidator(1)])
    status = models.CharField(
        _("Status"),
        max_length=20,
        choices=TableStatus.choices,
        default=TableStatus.AVAILABLE,
    )
    seating_category = models.CharField(
        _("Seating Category"),
        max_length=20,
        choices=SeatingCategory.choices,
        default=SeatingCategory.INDOOR,
    )
    is_active = models.BooleanField(_("Active"), default=True)
    deleted_at = models.DateTimeField(_("Deleted At"), null=True, blank=True)
    created_at = models.DateTimeField(_("Created At"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated At"), auto_now=True)

    class Meta:
        verbose_name = _("Table")
        verbose_name_plural = _("Tables")
        db_table = "restaurant_table"
        ordering = ["location", "table_number"]
        constraints = [
            models.UniqueConstraint(
                fields=["location", "table_number"], name="uniq_location_table_number"
            ),
            models.CheckConstraint(condition=Q(capacity__gte=1), name="table_capacity_positive"),
        ]
        indexes = [
            models.Index(fields=["location", "status", "is_active"]),
            models.Index(fields=["capacity"]),
        ]

    def __str__(self):
        return f"{self.location.name} - Table {self.table_number} ({self.capacity})"

    def clean(self):
        max_capacity = booking_setting("MAX_TABLE_CAPACITY")
        if self.capacity is not None and self.capacity > max_capacity:
            raise ValidationError(
                {"capacity": _("Capacity cannot exceed %(max)s") % {"max": max_capacity}}
            )

    def soft_delete(self):
        """Deactivate the table; history keeps pointing at it."""
        self.is_active = False
        self.deleted_at = timezone.now()
        self.save(update_fields=["is_active", "deleted_at", "updated_at"])


class BookingTimeSlot(models.Model):
    """Recurring weekly window during which a location accepts bookings for a party-size range"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    location = models.ForeignKey(
        Location,
        on_delete=models.CASCADE,
        related_name="time_slots",
        verbose_name=_("Location"),
    )
    day_of_week = models.IntegerField(_("Day of Week"), choices=DayOfWeek.choices)
    start_time = models.TimeField(_("Start Time"))
    end_time = models.TimeField(_("End Time"))
    min_party_size = models.PositiveIntegerField(
        _("Minimum Party Size"), default=1, validators=[MinValueValidator(1)]
    )
    max_party_size = models.PositiveIntegerField(
        _("Maximum Party Size"), validators=[MinValueValidator(1)]
    )
    is_active = models.BooleanField(_("Active"), default=True)
    created_at = models.DateTimeField(_("Created At"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated At"), auto_now=True)

    class Meta:
        verbose_name = _("Booking Time Slot")
        verbose_name_plural = _("Booking Time Slots")
        db_table = "booking_time_slot"
        ordering = ["day_of_week", "start_time"]
        constraints = [
            models.CheckConstraint(
                condition=Q(start_time__lt=F("end_time")), name="time_slot_window_valid"
            ),
            models.CheckConstraint(
                condition=Q(min_party_size__lte=F("max_party_size")),
                name="time_slot_party_size_valid",
            ),
        ]
        indexes = [
            models.Index(fields=["location", "day_of_week", "is_active"]),
        ]

    def __str__(self):
        return (
            f"{self.location.name} - {self.get_day_of_week_display()}: "
            f"{self.start_time.strftime('%H:%M')}-{self.end_time.strftime('%H:%M')} "
            f"({self.min_party_size}-{self.max_party_size})"
        )

    def clean(self):
        errors = {}
        if self.start_time and self.end_time and self.start_time >= self.end_time:
            errors["end_time"] = _("End time must be after start time")
        if (
            self.min_party_size is not None
            and self.max_party_size is not None
            and self.min_party_size > self.max_party_size
        ):
            errors["max_party_size"] = _("Maximum party size must not be below the minimum")
        if errors:
            raise ValidationError(errors)

    def covers(self, target_time, party_size):
        """True when this window includes the time (inclusive) and party size."""
        return (
            self.start_time <= target_time <= self.end_time
            and self.min_party_size <= party_size <= self.max_party_size
        )


class BookingBlackout(models.Model):
    """
    A period during which a location takes no bookings at all.

    One-off blackouts apply on ``blackout_date``; recurring ones apply on every
    date sharing its weekday. Null start/end times mean the whole day.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    location = models.ForeignKey(
        Location,
        on_delete=models.CASCADE,
        related_name="blackouts",
        verbose_name=_("Location"),
    )
    blackout_date = models.DateField(_("Blackout Date"))
    start_time = models.TimeField(_("Start Time"), null=True, blank=True)
    end_time = models.TimeField(_("End Time"), null=True, blank=True)
    is_recurring = models.BooleanField(_("Recurring Weekly"), default=False)
    reason = models.CharField(_("Reason"), max_length=255, blank=True)
    is_active = models.BooleanField(_("Active"), default=True)
    created_at = models.DateTimeField(_("Created At"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated At"), auto_now=True)

    class Meta:
        verbose_name = _("Booking Blackout")
        verbose_name_plural = _("Booking Blackouts")
        db_table = "booking_blackout"
        ordering = ["blackout_date", "start_time"]
        constraints = [
            models.CheckConstraint(
                condition=Q(start_time__isnull=True)
                | Q(end_time__isnull=True)
                | Q(start_time__lte=F("end_time")),
                name="blackout_window_valid",
            ),
        ]
        indexes = [
            models.Index(fields=["location", "blackout_date"]),
            models.Index(fields=["is_recurring", "is_active"]),
        ]

    def __str__(self):
        kind = "weekly" if self.is_recurring else "once"
        return f"{self.location.name} - {self.blackout_date} ({kind})"

    @property
    def is_all_day(self):
        return self.start_time is None and self.end_time is None

    def clean(self):
        if self.start_time and self.end_time and self.start_time > self.end_time:
            raise ValidationError({"end_time": _("End time must not be before start time")})

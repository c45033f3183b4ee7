# apps/bookingapp/models.py
import uuid

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.geoapp.models import Location
from apps.tableapp.models import Table
from core.enums import BLOCKING_RESERVATION_STATUSES, ReservationStatus


def generate_reservation_reference():
    """Human-readable booking reference, e.g. BK-20261018193000-4F9A2C"""
    return f"BK-{timezone.now():%Y%m%d%H%M%S}-{uuid.uuid4().hex[:6].upper()}"


class Reservation(models.Model):
    """
    A booking for a location at a (date, time) slot.

    The table may be unassigned until the restaurant seats the party.
    Created by the reservation flow; the availability search only reads it.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    reference = models.CharField(
        _("Reference"), max_length=40, unique=True, default=generate_reservation_reference
    )
    location = models.ForeignKey(
        Location,
        on_delete=models.CASCADE,
        related_name="reservations",
        verbose_name=_("Location"),
    )
    table = models.ForeignKey(
        Table,
        on_delete=models.SET_NULL,
        related_name="reservations",
        verbose_name=_("Table"),
        null=True,
        blank=True,
    )
    reservation_date = models.DateField(_("Date"))
    reservation_time = models.TimeField(_("Time"))
    party_size = models.PositiveIntegerField(
        _("Party Size"), default=1, validators=[MinValueValidator(1)]
    )
    status = models.CharField(
        _("Status"),
        max_length=20,
        choices=ReservationStatus.choices,
        default=ReservationStatus.PENDING,
    )
    deleted_at = models.DateTimeField(_("Deleted At"), null=True, blank=True)
    created_at = models.DateTimeField(_("Created At"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated At"), auto_now=True)

    class Meta:
        verbose_name = _("Reservation")
        verbose_name_plural = _("Reservations")
        db_table = "reservation"
        ordering = ["reservation_date", "reservation_time"]
        indexes = [
            models.Index(fields=["table", "reservation_date", "reservation_time"]),
            models.Index(fields=["location", "reservation_date", "reservation_time"]),
            models.Index(fields=["status"]),
        ]

    def __str__(self):
        return f"{self.reference} - {self.reservation_date} {self.reservation_time:%H:%M}"

    def clean(self):
        if self.table_id and self.location_id and self.table.location_id != self.location_id:
            raise ValidationError({"table": _("Table belongs to a different location")})

    @property
    def is_blocking(self):
        """True while the reservation still holds its slot."""
        return self.deleted_at is None and self.status in BLOCKING_RESERVATION_STATUSES

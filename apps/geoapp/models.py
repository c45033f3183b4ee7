import uuid

from django.db import models
from django.utils.translation import gettext_lazy as _

from .utils.geo_validators import validate_latitude, validate_longitude


class Location(models.Model):
    """A restaurant branch: the physical site that owns tables and booking rules"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(_("Name"), max_length=255)
    address_line1 = models.CharField(_("Address Line 1"), max_length=255)
    address_line2 = models.CharField(_("Address Line 2"), max_length=255, blank=True)
    city = models.CharField(_("City"), max_length=100, blank=True)
    postal_code = models.CharField(_("Postal Code"), max_length=20, blank=True)
    latitude = models.FloatField(_("Latitude"), validators=[validate_latitude])
    longitude = models.FloatField(_("Longitude"), validators=[validate_longitude])
    is_active = models.BooleanField(_("Active"), default=True)
    created_at = models.DateTimeField(_("Created At"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated At"), auto_now=True)

    class Meta:
        verbose_name = _("Location")
        verbose_name_plural = _("Locations")
        db_table = "location"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["latitude", "longitude"]),
            models.Index(fields=["is_active"]),
        ]

    def __str__(self):
        return self.name

    @property
    def address(self):
        """Single-line postal address"""
        parts = [self.address_line1, self.address_line2, self.city, self.postal_code]
        return ", ".join(part for part in parts if part)

    @property
    def coordinates(self):
        return (self.latitude, self.longitude)

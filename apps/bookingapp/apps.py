from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class BookingAppConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.bookingapp"
    label = "bookingapp"
    verbose_name = _("Reservations & Availability")

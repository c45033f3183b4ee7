from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class TableAppConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.tableapp"
    label = "tableapp"
    verbose_name = _("Tables & Booking Rules")

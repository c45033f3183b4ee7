# apps/bookingapp/urls.py
from django.urls import path

from apps.bookingapp.views import AvailabilitySearchView

urlpatterns = [
    path("search/", AvailabilitySearchView.as_view(), name="availability-search"),
]

"""TableBooking project main URL configuration."""

from django.http import JsonResponse
from django.urls import include, path


def health(request):
    """Health check for load balancers and uptime monitors."""
    return JsonResponse({"status": "ok"})


urlpatterns = [
    path("health/", health, name="health"),
    path("api/v1/availability/", include("apps.bookingapp.urls")),
]

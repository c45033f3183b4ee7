"""
Booking app views for the TableBooking platform
Handles the public availability search endpoint
"""

import logging

from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.bookingapp.serializers import AvailabilitySearchQuerySerializer, AvailableTableSerializer
from apps.bookingapp.services.availability_service import AvailabilityService

logger = logging.getLogger(__name__)


class AvailabilitySearchView(APIView):
    """
    Search bookable tables near a point.

    Query parameters: latitude, longitude, radius_meters, date (YYYY-MM-DD),
    time (HH:MM), party_size and an optional seating_category.
    """

    permission_classes = [permissions.AllowAny]

    def get(self, request):
        serializer = AvailabilitySearchQuerySerializer(data=request.query_params)
        if not serializer.is_valid():
            return Response(
                {
                    "message": "Invalid search parameters.",
                    "status_code": status.HTTP_400_BAD_REQUEST,
                    "code": "invalid_input",
                    "errors": serializer.errors,
                },
                status=status.HTTP_400_BAD_REQUEST,
            )

        params = serializer.validated_data
        results = AvailabilityService.search_available(
            latitude=params["latitude"],
            longitude=params["longitude"],
            radius_meters=params["radius_meters"],
            target_date=params["date"],
            target_time=params["time"],
            party_size=params["party_size"],
            seating_category=params.get("seating_category"),
        )

        return Response(
            {
                "count": len(results),
                "results": AvailableTableSerializer(results, many=True).data,
            }
        )

"""API views for the booking domain."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.api.pagination import paginate

from . import services
from .serializers import (
    BookingCreateSerializer,
    BookingListQuerySerializer,
    BookingSerializer,
    BookingStatusSerializer,
)


class BookingViewSet(viewsets.ViewSet):
    """Create, read, transition and delete bookings for the authenticated user."""

    permission_classes = [permissions.IsAuthenticated]
    lookup_value_regex = r"\d+"

    def list(self, request):  # type: ignore
        query = BookingListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data
        bookings = services.list_bookings(request.user, status=params.get("status"), role=params.get("role"))
        page, info = paginate(bookings, params["page"], params["limit"])
        return Response(
            {
                "bookings": BookingSerializer(page, many=True).data,
                "pagination": info.as_dict(),
            }
        )

    def create(self, request):  # type: ignore
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        booking = services.create_booking(
            request.user,
            listing_id=data["listing_id"],
            start=data["start_date"],
            end=data["end_date"],
            total_price=data["total_price"],
            notes=data.get("notes", ""),
        )
        return Response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):  # type: ignore
        booking = services.get_booking(int(pk), request.user)
        return Response(BookingSerializer(booking).data)

    def destroy(self, request, pk=None):  # type: ignore
        services.delete_booking(int(pk), request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["patch"], url_path="status")
    def update_status(self, request, pk=None):  # type: ignore
        serializer = BookingStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = services.update_status(
            int(pk),
            request.user,
            serializer.validated_data["status"],
            serializer.validated_data.get("cancellation_reason") or None,
        )
        return Response(BookingSerializer(booking).data)

"""Listing API views."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.exceptions import NotFound
from apps.search.serializers import SearchCriteriaSerializer
from apps.search.services import search_listings

from . import services
from .filters import HostAvailabilityFilterSet
from .models import HostAvailability, Listing
from .serializers import (
    HostAvailabilitySerializer,
    ListingSerializer,
    ListingWriteSerializer,
    ToggleActiveSerializer,
)


class ListingViewSet(viewsets.ModelViewSet):
    """Listing CRUD. The list route is the public search with availability filtering."""

    queryset = Listing.objects.select_related("host__user")
    permission_classes = [permissions.IsAuthenticated]
    lookup_value_regex = r"\d+"
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]

    def get_permissions(self):  # type: ignore
        if self.action in {"list", "retrieve"}:
            return [permissions.AllowAny()]
        return super().get_permissions()

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "partial_update"}:
            return ListingWriteSerializer
        if self.action == "toggle_active":
            return ToggleActiveSerializer
        return ListingSerializer

    def get_object(self):  # type: ignore
        listing = services.get_listing(self.kwargs[self.lookup_field])
        user = self.request.user
        # Inactive listings are visible to their owner only.
        if not listing.is_active and listing.host.user_id != getattr(user, "id", None):
            raise NotFound("Listing not found.")
        return listing

    def list(self, request, *args, **kwargs):  # type: ignore
        criteria = SearchCriteriaSerializer(data=request.query_params)
        criteria.is_valid(raise_exception=True)
        listings, page_info = search_listings(criteria.validated_data)
        return Response(
            {
                "listings": ListingSerializer(listings, many=True).data,
                "pagination": page_info.as_dict(),
            }
        )

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        listing = services.create_listing(request.user, serializer.validated_data)
        return Response(ListingSerializer(listing).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, *args, **kwargs):  # type: ignore
        listing = services.get_listing(kwargs[self.lookup_field])
        serializer = self.get_serializer(listing, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        listing = services.update_listing(listing, request.user, serializer.validated_data)
        return Response(ListingSerializer(listing).data)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        listing = services.get_listing(kwargs[self.lookup_field])
        services.delete_listing(listing, request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["patch"], url_path="toggle-active")
    def toggle_active(self, request, pk=None):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        listing = services.get_listing(pk)
        listing = services.set_listing_active(listing, request.user, serializer.validated_data["is_active"])
        return Response(ListingSerializer(listing).data)

    @action(detail=False, methods=["get"])
    def mine(self, request):  # type: ignore
        host = services.get_host_profile(request.user)
        listings = self.get_queryset().filter(host=host).order_by("-created_at")
        return Response({"listings": ListingSerializer(listings, many=True).data})


class HostAvailabilityViewSet(viewsets.ModelViewSet):
    """Blocked days on the authenticated host's calendar."""

    serializer_class = HostAvailabilitySerializer
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_class = HostAvailabilityFilterSet
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]

    def initial(self, request, *args, **kwargs):  # type: ignore
        super().initial(request, *args, **kwargs)
        self.host = services.get_host_profile(request.user)

    def get_queryset(self):  # type: ignore
        host = getattr(self, "host", None)
        if host is None:
            return HostAvailability.objects.none()
        return HostAvailability.objects.filter(host=host).order_by("date")

    def get_serializer_context(self):  # type: ignore
        context = super().get_serializer_context()
        context["host"] = getattr(self, "host", None)
        return context

    def perform_create(self, serializer):  # type: ignore
        serializer.save(host=self.host)

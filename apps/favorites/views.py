"""API views for favorites management."""

from __future__ import annotations

import logging

from django.db import IntegrityError, transaction  # type: ignore
from django.db.models import Avg, Count, Q  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.exceptions import ValidationError  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.exceptions import NotFound
from apps.listings.models import Listing

from .models import Favorite
from .serializers import FavoriteSerializer

logger = logging.getLogger(__name__)


class FavoriteViewSet(viewsets.GenericViewSet):
    """
    Viewset to add, list and remove favorite listings.

    Endpoints:
    - GET /api/v1/favorites/ - favorites of the current user
    - POST /api/v1/favorites/{listing_id}/ - add a listing
    - DELETE /api/v1/favorites/{listing_id}/ - remove a listing (idempotent)
    - GET /api/v1/favorites/{listing_id}/check/ - is the listing a favorite
    - GET /api/v1/favorites/{listing_id}/count/ - how many users saved it
    """

    serializer_class = FavoriteSerializer
    permission_classes = [permissions.IsAuthenticated]
    lookup_field = 'listing_id'
    lookup_value_regex = r'\d+'

    def get_permissions(self):  # type: ignore
        if self.action == 'count':
            return [permissions.AllowAny()]
        return super().get_permissions()

    def get_queryset(self):  # type: ignore
        return (
            Favorite.objects.filter(user=self.request.user)
            .select_related('listing__host__user')
            .annotate(
                average_rating=Avg('listing__reviews__rating', filter=Q(listing__reviews__is_visible=True)),
                review_count=Count('listing__reviews', filter=Q(listing__reviews__is_visible=True)),
            )
        )

    def list(self, request):  # type: ignore
        favorites = list(self.get_queryset())
        # Ratings are annotated on the favorite row; expose them on the listing.
        for favorite in favorites:
            favorite.listing.average_rating = favorite.average_rating
            favorite.listing.review_count = favorite.review_count
        return Response(
            {
                'favorites': FavoriteSerializer(favorites, many=True).data,
                'total': len(favorites),
            }
        )

    def create(self, request, listing_id=None):  # type: ignore
        try:
            listing = Listing.objects.select_related('host__user').get(pk=listing_id)
        except Listing.DoesNotExist:
            raise NotFound('Listing not found.')
        if not listing.is_active:
            raise ValidationError({'detail': 'Cannot favorite an inactive listing.'})

        try:
            with transaction.atomic():
                favorite = Favorite.objects.create(user=request.user, listing=listing)
        except IntegrityError:
            raise ValidationError({'detail': 'Listing is already in favorites.'})

        logger.info(f"User {request.user.id} favorited listing {listing.id}")
        return Response(FavoriteSerializer(favorite).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, listing_id=None):  # type: ignore
        # Removing a favorite that does not exist is a success.
        Favorite.objects.filter(user=request.user, listing_id=listing_id).delete()
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['get'])
    def check(self, request, listing_id=None):  # type: ignore
        is_favorite = Favorite.objects.filter(user=request.user, listing_id=listing_id).exists()
        return Response({'is_favorite': is_favorite})

    @action(detail=True, methods=['get'])
    def count(self, request, listing_id=None):  # type: ignore
        return Response({'count': Favorite.objects.filter(listing_id=listing_id).count()})

"""Search API views."""

from __future__ import annotations

from rest_framework import generics, permissions  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.listings.serializers import ListingSerializer

from .serializers import SearchCriteriaSerializer, ShortlistQuerySerializer
from .services import popular_listings, search_listings, suggested_listings


class SearchListingsView(generics.GenericAPIView):
    """Search active listings with filters, availability window, sorting and pagination."""

    permission_classes = [permissions.AllowAny]
    serializer_class = ListingSerializer

    def get(self, request):  # type: ignore
        criteria = SearchCriteriaSerializer(data=request.query_params)
        criteria.is_valid(raise_exception=True)
        listings, page_info = search_listings(criteria.validated_data)
        return Response(
            {
                "listings": ListingSerializer(listings, many=True).data,
                "pagination": page_info.as_dict(),
            }
        )


class PopularListingsView(generics.GenericAPIView):
    permission_classes = [permissions.AllowAny]
    serializer_class = ListingSerializer

    def get(self, request):  # type: ignore
        query = ShortlistQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        listings = popular_listings(query.validated_data["limit"])
        return Response({"listings": ListingSerializer(listings, many=True).data})


class SuggestedListingsView(generics.GenericAPIView):
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = ListingSerializer

    def get(self, request):  # type: ignore
        query = ShortlistQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        listings = suggested_listings(request.user, query.validated_data["limit"])
        return Response({"listings": ListingSerializer(listings, many=True).data})

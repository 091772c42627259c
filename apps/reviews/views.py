"""API views for managing reviews."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.serializers import BookingSerializer
from shared.api.pagination import paginate

from . import services
from .serializers import (
    ReviewCreateSerializer,
    ReviewListQuerySerializer,
    ReviewSerializer,
    ReviewUpdateSerializer,
)


class ReviewViewSet(viewsets.GenericViewSet):
    """Public listing and retrieval; authors create, update and delete their reviews."""

    permission_classes = [permissions.IsAuthenticated]
    serializer_class = ReviewSerializer
    lookup_value_regex = r'\d+'

    def get_permissions(self):  # type: ignore
        if self.action in {'list', 'retrieve'}:
            return [permissions.AllowAny()]
        return super().get_permissions()

    def get_queryset(self):  # type: ignore
        return services.visible_reviews()

    def list(self, request):  # type: ignore
        query = ReviewListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        qs = self.get_queryset()
        if params.get('user_id'):
            qs = qs.filter(receiver_id=params['user_id'])
        if params.get('listing_id'):
            qs = qs.filter(listing_id=params['listing_id'])
        if params.get('min_rating'):
            qs = qs.filter(rating__gte=params['min_rating'])

        page, info = paginate(qs.order_by('-created_at'), params['page'], params['limit'])
        return Response({'reviews': ReviewSerializer(page, many=True).data, 'pagination': info.as_dict()})

    def retrieve(self, request, pk=None):  # type: ignore
        return Response(ReviewSerializer(services.get_review(int(pk))).data)

    def create(self, request):  # type: ignore
        serializer = ReviewCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        review = services.create_review(
            request.user,
            serializer.validated_data['booking_id'],
            serializer.validated_data['rating'],
            serializer.validated_data.get('comment', ''),
        )
        return Response(ReviewSerializer(review).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):  # type: ignore
        review = services.get_review(int(pk))
        services.ensure_author(review, request.user)
        serializer = ReviewUpdateSerializer(review, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(ReviewSerializer(review).data)

    def destroy(self, request, pk=None):  # type: ignore
        review = services.get_review(int(pk))
        services.ensure_author(review, request.user)
        review.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['get'])
    def received(self, request):  # type: ignore
        reviews = self.get_queryset().filter(receiver=request.user)
        return Response(
            {
                'reviews': ReviewSerializer(reviews, many=True).data,
                **services.rating_summary(reviews),
            }
        )

    @action(detail=False, methods=['get'])
    def given(self, request):  # type: ignore
        reviews = self.get_queryset().filter(author=request.user)
        return Response({'reviews': ReviewSerializer(reviews, many=True).data})

    @action(detail=False, methods=['get'])
    def reviewable(self, request):  # type: ignore
        bookings = services.reviewable_bookings(request.user)
        return Response({'bookings': BookingSerializer(bookings, many=True).data})

"""Review operations on completed bookings."""

from __future__ import annotations

import logging

from django.db import IntegrityError, transaction  # type: ignore
from django.db.models import Avg, Count, Q, QuerySet  # type: ignore

from apps.bookings.domain.roles import ActorRole
from apps.bookings.exceptions import Forbidden, InvalidState, NotFound
from apps.bookings.models import Booking

from .models import Review

logger = logging.getLogger(__name__)


def visible_reviews() -> QuerySet:
    return Review.objects.filter(is_visible=True).select_related('author', 'receiver', 'listing', 'booking')


def create_review(user, booking_id: int, rating: int, comment: str = '') -> Review:  # type: ignore
    """Either party of a completed booking reviews the other party, once."""

    try:
        booking = Booking.objects.select_related('tutor__user', 'listing__host__user').get(pk=booking_id)
    except Booking.DoesNotExist:
        raise NotFound('Booking not found.')

    if booking.status != Booking.Status.COMPLETED:
        raise InvalidState('You can only review completed bookings.')
    if Review.objects.filter(booking=booking).exists():
        raise InvalidState('This booking has already been reviewed.')

    tutor_user = booking.tutor.user
    host_user = booking.listing.host.user
    role = ActorRole.resolve(user.id, tutor_user.id, host_user.id)
    if not role.is_party:
        raise Forbidden('You are not part of this booking.')
    receiver = host_user if role & ActorRole.TUTOR else tutor_user

    try:
        with transaction.atomic():
            review = Review.objects.create(
                booking=booking,
                author=user,
                receiver=receiver,
                listing=booking.listing,
                rating=rating,
                comment=comment,
            )
    except IntegrityError:
        raise InvalidState('This booking has already been reviewed.')

    logger.info(f"Review {review.id} created for booking {booking.id} by user {user.id}")
    return review


def get_review(review_id: int) -> Review:
    try:
        return visible_reviews().get(pk=review_id)
    except Review.DoesNotExist:
        raise NotFound('Review not found.')


def ensure_author(review: Review, user) -> None:  # type: ignore
    if review.author_id != user.id:
        raise Forbidden('You can only change your own reviews.')


def reviewable_bookings(user) -> QuerySet:  # type: ignore
    """Completed bookings of the user, on either side, that have no review yet."""

    return (
        Booking.objects.filter(status=Booking.Status.COMPLETED, review__isnull=True)
        .filter(Q(tutor__user=user) | Q(listing__host__user=user))
        .select_related('listing__host__user', 'tutor__user')
        .order_by('-end_date')
    )


def rating_summary(reviews: QuerySet) -> dict:
    summary = reviews.aggregate(average=Avg('rating'), total=Count('id'))
    return {
        'average_rating': round(float(summary['average'] or 0), 2),
        'total_reviews': summary['total'],
    }

"""Models for the review domain.

Defines the ``Review`` entity: a rating with an optional comment left by
one party of a completed booking about the other party. Each booking can
be reviewed once. Visible reviews feed the listing rating used by search.
"""

from __future__ import annotations

from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Review(models.Model):
    """Feedback on a completed booking."""

    booking = models.OneToOneField(
        'bookings.Booking',
        on_delete=models.CASCADE,
        related_name='review',
    )
    author = models.ForeignKey(
        'users.CustomUser', on_delete=models.CASCADE, related_name='reviews_given'
    )
    receiver = models.ForeignKey(
        'users.CustomUser', on_delete=models.CASCADE, related_name='reviews_received'
    )
    listing = models.ForeignKey(
        'listings.Listing', on_delete=models.CASCADE, related_name='reviews'
    )
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)],
        help_text=_('Rating from 1 to 5'),
    )
    comment = models.TextField(blank=True, max_length=1000)
    is_visible = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Review')
        verbose_name_plural = _('Reviews')
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(rating__gte=1) & models.Q(rating__lte=5),
                name='review_rating_range',
            ),
        ]
        indexes = [
            models.Index(fields=['listing', 'is_visible'], name='review_listing_visible_idx'),
        ]

    def __str__(self) -> str:
        return f"Review {self.rating}/5 on booking {self.booking_id}"

"""Model definition for favorites.

The ``Favorite`` model represents a bookmark created by a user for a
particular listing. Duplicate favorites are prevented via a unique
constraint.
"""

from __future__ import annotations

from django.db import models  # type: ignore


class Favorite(models.Model):
    """A user's favorite listing."""

    user = models.ForeignKey(
        'users.CustomUser', on_delete=models.CASCADE, related_name='favorites'
    )
    listing = models.ForeignKey(
        'listings.Listing', on_delete=models.CASCADE, related_name='favorited_by'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['user', 'listing'], name='favorite_unique_user_listing'),
        ]

    def __str__(self) -> str:
        return f"Favorite listing {self.listing_id} by user {self.user_id}"

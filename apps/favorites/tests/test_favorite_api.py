"""API tests for favorites."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.favorites.models import Favorite
from apps.listings.tests.builders import make_host, make_listing, make_tutor


class FavoriteAPITests(APITestCase):
    def setUp(self) -> None:
        self.tutor = make_tutor()
        self.listing = make_listing(make_host())
        self.client.force_authenticate(self.tutor.user)
        self.detail = reverse("favorite-detail", args=[self.listing.id])

    def test_add_list_and_check(self) -> None:
        response = self.client.post(self.detail)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

        listing = self.client.get(reverse("favorite-list"))
        self.assertEqual(listing.data["total"], 1)
        self.assertEqual(listing.data["favorites"][0]["listing"]["id"], self.listing.id)

        check = self.client.get(reverse("favorite-check", args=[self.listing.id]))
        self.assertTrue(check.data["is_favorite"])

    def test_duplicate_is_validation_error(self) -> None:
        self.client.post(self.detail)

        response = self.client.post(self.detail)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Favorite.objects.count(), 1)

    def test_inactive_or_missing_listing(self) -> None:
        inactive = make_listing(self.listing.host, is_active=False)

        response = self.client.post(reverse("favorite-detail", args=[inactive.id]))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.post(reverse("favorite-detail", args=[999999]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_remove_is_idempotent(self) -> None:
        self.client.post(self.detail)

        self.assertEqual(self.client.delete(self.detail).status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(self.client.delete(self.detail).status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Favorite.objects.exists())

    def test_count_is_public(self) -> None:
        Favorite.objects.create(user=self.tutor.user, listing=self.listing)
        self.client.force_authenticate(None)

        response = self.client.get(reverse("favorite-count", args=[self.listing.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 1)

"""Integration tests for booking API endpoints."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.listings.tests.builders import aware, make_host, make_listing, make_tutor


class BookingAPITestBase(APITestCase):
    def setUp(self) -> None:
        self.host = make_host()
        self.tutor = make_tutor()
        self.listing = make_listing(self.host, price_per_day=5000)
        self.list_url = reverse("booking-list")

    def _payload(self, start, end, **extra) -> dict:  # type: ignore
        payload = {
            "listing_id": self.listing.id,
            "start_date": start.isoformat(),
            "end_date": end.isoformat(),
            "total_price": 20000,
        }
        payload.update(extra)
        return payload

    def _booking(self, start, end, booking_status=Booking.Status.PENDING, tutor=None) -> Booking:  # type: ignore
        return Booking.objects.create(
            tutor=tutor or self.tutor,
            listing=self.listing,
            start_date=start,
            end_date=end,
            total_price=20000,
            status=booking_status,
        )

    def _status_url(self, booking: Booking) -> str:
        return reverse("booking-update-status", args=[booking.id])


class BookingCreateTests(BookingAPITestBase):
    def setUp(self) -> None:
        super().setUp()
        self.client.force_authenticate(self.tutor.user)

    def test_tutor_creates_pending_booking_with_display_fields(self) -> None:
        response = self.client.post(
            self.list_url,
            self._payload(aware(2025, 6, 1), aware(2025, 6, 5), notes="Two small dogs"),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["status"], "pending")
        self.assertEqual(response.data["listing_title"], self.listing.title)
        self.assertEqual(response.data["host"]["name"], self.host.user.name)
        self.assertEqual(response.data["tutor"]["email"], self.tutor.user.email)
        booking = Booking.objects.get()
        self.assertEqual(booking.tutor, self.tutor)
        self.assertEqual(booking.notes, "Two small dogs")

    def test_overlapping_confirmed_booking_conflicts(self) -> None:
        self._booking(aware(2025, 6, 1), aware(2025, 6, 5), Booking.Status.CONFIRMED)

        response = self.client.post(
            self.list_url, self._payload(aware(2025, 6, 3), aware(2025, 6, 7)), format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertEqual(Booking.objects.count(), 1)

    def test_touching_boundary_counts_as_conflict(self) -> None:
        self._booking(aware(2025, 6, 1), aware(2025, 6, 5), Booking.Status.CONFIRMED)

        response = self.client.post(
            self.list_url, self._payload(aware(2025, 6, 5), aware(2025, 6, 10)), format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)

    def test_pending_and_canceled_bookings_do_not_block(self) -> None:
        self._booking(aware(2025, 6, 1), aware(2025, 6, 5), Booking.Status.PENDING)
        self._booking(aware(2025, 6, 1), aware(2025, 6, 5), Booking.Status.CANCELED)

        response = self.client.post(
            self.list_url, self._payload(aware(2025, 6, 2), aware(2025, 6, 4)), format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

    def test_inactive_listing_rejects_bookings(self) -> None:
        self.listing.is_active = False
        self.listing.save()

        response = self.client.post(
            self.list_url, self._payload(aware(2025, 6, 1), aware(2025, 6, 5)), format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Booking.objects.exists())

    def test_unknown_listing_is_not_found(self) -> None:
        payload = self._payload(aware(2025, 6, 1), aware(2025, 6, 5), listing_id=999999)

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_end_must_follow_start(self) -> None:
        response = self.client.post(
            self.list_url, self._payload(aware(2025, 6, 5), aware(2025, 6, 5)), format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("end_date", response.data)

    def test_total_price_must_be_positive(self) -> None:
        response = self.client.post(
            self.list_url,
            self._payload(aware(2025, 6, 1), aware(2025, 6, 5), total_price=0),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("total_price", response.data)

    def test_user_without_tutor_profile_cannot_book(self) -> None:
        self.client.force_authenticate(self.host.user)

        response = self.client.post(
            self.list_url, self._payload(aware(2025, 6, 1), aware(2025, 6, 5)), format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(Booking.objects.exists())

    def test_anonymous_requests_are_rejected(self) -> None:
        self.client.force_authenticate(None)

        response = self.client.post(
            self.list_url, self._payload(aware(2025, 6, 1), aware(2025, 6, 5)), format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class BookingStatusTests(BookingAPITestBase):
    def test_host_confirms_pending_and_tutor_cannot(self) -> None:
        booking = self._booking(aware(2025, 6, 1), aware(2025, 6, 5))

        self.client.force_authenticate(self.tutor.user)
        response = self.client.patch(self._status_url(booking), {"status": "confirmed"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.host.user)
        response = self.client.patch(self._status_url(booking), {"status": "confirmed"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.Status.CONFIRMED)

    def test_confirm_only_from_pending(self) -> None:
        booking = self._booking(aware(2025, 6, 1), aware(2025, 6, 5), Booking.Status.CANCELED)
        self.client.force_authenticate(self.host.user)

        response = self.client.patch(self._status_url(booking), {"status": "confirmed"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"].code, "invalid_transition")

    def test_stranger_cannot_update(self) -> None:
        booking = self._booking(aware(2025, 6, 1), aware(2025, 6, 5))
        self.client.force_authenticate(make_tutor(email="stranger@example.com").user)

        response = self.client.patch(self._status_url(booking), {"status": "canceled"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_tutor_cancels_confirmed_with_reason(self) -> None:
        booking = self._booking(aware(2025, 6, 1), aware(2025, 6, 5), Booking.Status.CONFIRMED)
        self.client.force_authenticate(self.tutor.user)

        response = self.client.patch(
            self._status_url(booking),
            {"status": "canceled", "cancellation_reason": "trip canceled"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.Status.CANCELED)
        self.assertEqual(booking.notes, "trip canceled")

    def test_cancel_rejected_once_ongoing(self) -> None:
        booking = self._booking(aware(2025, 6, 1), aware(2025, 6, 5), Booking.Status.ONGOING)
        self.client.force_authenticate(self.host.user)

        response = self.client.patch(self._status_url(booking), {"status": "canceled"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_scheduled_statuses_cannot_be_requested(self) -> None:
        booking = self._booking(aware(2025, 6, 1), aware(2025, 6, 5), Booking.Status.CONFIRMED)
        self.client.force_authenticate(self.host.user)

        for target in ("ongoing", "completed", "pending"):
            response = self.client.patch(self._status_url(booking), {"status": target}, format="json")
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, target)
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.Status.CONFIRMED)

    def test_confirming_overlapping_pending_booking_conflicts(self) -> None:
        other_tutor = make_tutor(email="second@example.com")
        first = self._booking(aware(2025, 6, 1), aware(2025, 6, 5))
        second = self._booking(aware(2025, 6, 4), aware(2025, 6, 8), tutor=other_tutor)
        self.client.force_authenticate(self.host.user)

        ok = self.client.patch(self._status_url(first), {"status": "confirmed"}, format="json")
        self.assertEqual(ok.status_code, status.HTTP_200_OK, ok.data)

        clash = self.client.patch(self._status_url(second), {"status": "confirmed"}, format="json")
        self.assertEqual(clash.status_code, status.HTTP_409_CONFLICT)
        second.refresh_from_db()
        self.assertEqual(second.status, Booking.Status.PENDING)

        blocking = Booking.objects.filter(listing=self.listing, status__in=Booking.BLOCKING_STATUSES)
        self.assertEqual(blocking.count(), 1)


class BookingReadDeleteTests(BookingAPITestBase):
    def test_delete_requires_pending_or_canceled(self) -> None:
        booking = self._booking(aware(2025, 6, 1), aware(2025, 6, 5), Booking.Status.CONFIRMED)
        self.client.force_authenticate(self.tutor.user)
        url = reverse("booking-detail", args=[booking.id])

        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"].code, "invalid_state")

        self.client.patch(self._status_url(booking), {"status": "canceled"}, format="json")
        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Booking.objects.filter(pk=booking.pk).exists())

    def test_host_cannot_delete(self) -> None:
        booking = self._booking(aware(2025, 6, 1), aware(2025, 6, 5))
        self.client.force_authenticate(self.host.user)

        response = self.client.delete(reverse("booking-detail", args=[booking.id]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_retrieve_restricted_to_parties(self) -> None:
        booking = self._booking(aware(2025, 6, 1), aware(2025, 6, 5))
        url = reverse("booking-detail", args=[booking.id])

        self.client.force_authenticate(self.host.user)
        self.assertEqual(self.client.get(url).status_code, status.HTTP_200_OK)

        self.client.force_authenticate(make_tutor(email="stranger@example.com").user)
        self.assertEqual(self.client.get(url).status_code, status.HTTP_403_FORBIDDEN)

        self.assertEqual(
            self.client.get(reverse("booking-detail", args=[999999])).status_code,
            status.HTTP_404_NOT_FOUND,
        )

    def test_list_scoped_by_role_and_status_newest_first(self) -> None:
        older = self._booking(aware(2025, 6, 1), aware(2025, 6, 5))
        newer = self._booking(aware(2025, 7, 1), aware(2025, 7, 5), Booking.Status.CONFIRMED)
        other_listing = make_listing(make_host(email="other@example.com"))
        Booking.objects.create(
            tutor=make_tutor(email="else@example.com"),
            listing=other_listing,
            start_date=aware(2025, 6, 1),
            end_date=aware(2025, 6, 2),
            total_price=5000,
        )

        self.client.force_authenticate(self.tutor.user)
        response = self.client.get(self.list_url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([row["id"] for row in response.data["bookings"]], [newer.id, older.id])
        self.assertEqual(response.data["pagination"]["total"], 2)

        response = self.client.get(self.list_url, {"status": "confirmed"})
        self.assertEqual([row["id"] for row in response.data["bookings"]], [newer.id])

        response = self.client.get(self.list_url, {"role": "host"})
        self.assertEqual(response.data["pagination"]["total"], 0)

        self.client.force_authenticate(self.host.user)
        response = self.client.get(self.list_url, {"role": "host", "limit": 1, "page": 2})
        self.assertEqual([row["id"] for row in response.data["bookings"]], [older.id])
        self.assertEqual(response.data["pagination"]["totalPages"], 2)

    def test_user_without_profiles_gets_empty_page(self) -> None:
        from apps.users.models import User

        admin_like = User.objects.create_user(email="plain@example.com", password="PlainPass123", name="Plain")
        self.client.force_authenticate(admin_like)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["bookings"], [])
        self.assertEqual(response.data["pagination"]["total"], 0)

"""Availability engine: pure interval rules and the ORM-backed queries."""

from __future__ import annotations

from datetime import date
from unittest.mock import patch

from django.test import SimpleTestCase, TestCase

from apps.bookings import services
from apps.bookings.domain.availability import (
    Occupancy,
    conflicting_listing_ids,
    filter_available,
    has_conflict,
)
from apps.bookings.models import Booking
from apps.listings.tests.builders import aware, make_host, make_listing, make_tutor
from shared.domain.value_objects import DateRange


def _range(start_day: int, end_day: int, month: int = 6) -> DateRange:
    return DateRange(date(2025, month, start_day), date(2025, month, end_day))


class DateRangeTests(SimpleTestCase):
    def test_rejects_empty_or_inverted_range(self) -> None:
        with self.assertRaises(ValueError):
            _range(5, 5)
        with self.assertRaises(ValueError):
            _range(6, 5)

    def test_overlap_is_inclusive(self) -> None:
        self.assertTrue(_range(1, 5).overlaps_with(_range(3, 7)))
        self.assertTrue(_range(1, 5).overlaps_with(_range(5, 10)))
        self.assertTrue(_range(5, 10).overlaps_with(_range(1, 5)))
        self.assertFalse(_range(1, 5).overlaps_with(_range(6, 10)))

    def test_nights(self) -> None:
        self.assertEqual(_range(1, 5).nights, 4)


class PureAvailabilityTests(SimpleTestCase):
    def setUp(self) -> None:
        self.occupancies = [
            Occupancy(listing_id=1, dates=_range(1, 5), status="confirmed", booking_id=10),
            Occupancy(listing_id=1, dates=_range(20, 25), status="pending", booking_id=11),
            Occupancy(listing_id=2, dates=_range(10, 12), status="ongoing", booking_id=12),
            Occupancy(listing_id=3, dates=_range(1, 30), status="canceled", booking_id=13),
            Occupancy(listing_id=3, dates=_range(2, 3), status="completed", booking_id=14),
        ]

    def test_only_blocking_statuses_conflict(self) -> None:
        self.assertTrue(has_conflict(self.occupancies, 1, _range(3, 7)))
        self.assertFalse(has_conflict(self.occupancies, 1, _range(21, 22)))
        self.assertFalse(has_conflict(self.occupancies, 3, _range(2, 3)))

    def test_shared_boundary_conflicts(self) -> None:
        self.assertTrue(has_conflict(self.occupancies, 1, _range(5, 10)))
        self.assertFalse(has_conflict(self.occupancies, 1, _range(6, 10)))

    def test_excluding_booking_ignores_itself(self) -> None:
        self.assertFalse(has_conflict(self.occupancies, 1, _range(1, 5), excluding_booking_id=10))

    def test_empty_history_never_conflicts(self) -> None:
        self.assertFalse(has_conflict([], 1, _range(1, 5)))
        self.assertEqual(filter_available([], {1, 2}, _range(1, 5)), {1, 2})

    def test_batch_matches_single_checks(self) -> None:
        listing_ids = {1, 2, 3, 4}
        for dates in (_range(1, 2), _range(4, 11), _range(12, 19), _range(26, 30)):
            expected = {lid for lid in listing_ids if not has_conflict(self.occupancies, lid, dates)}
            self.assertEqual(filter_available(self.occupancies, listing_ids, dates), expected, dates)

    def test_conflicting_ids_single_pass(self) -> None:
        self.assertEqual(conflicting_listing_ids(self.occupancies, _range(1, 30)), {1, 2})


class OrmAvailabilityTests(TestCase):
    @classmethod
    def setUpTestData(cls) -> None:
        host = make_host()
        tutor = make_tutor()
        cls.busy = make_listing(host)
        cls.ongoing = make_listing(host)
        cls.free = make_listing(host)
        cls.confirmed = Booking.objects.create(
            tutor=tutor,
            listing=cls.busy,
            start_date=aware(2025, 6, 1),
            end_date=aware(2025, 6, 5),
            total_price=20000,
            status=Booking.Status.CONFIRMED,
        )
        Booking.objects.create(
            tutor=tutor,
            listing=cls.ongoing,
            start_date=aware(2025, 6, 10),
            end_date=aware(2025, 6, 12),
            total_price=10000,
            status=Booking.Status.ONGOING,
        )
        Booking.objects.create(
            tutor=tutor,
            listing=cls.free,
            start_date=aware(2025, 6, 1),
            end_date=aware(2025, 6, 30),
            total_price=90000,
            status=Booking.Status.PENDING,
        )

    def test_has_conflict(self) -> None:
        self.assertTrue(services.has_conflict(self.busy.id, aware(2025, 6, 3), aware(2025, 6, 7)))
        self.assertTrue(services.has_conflict(self.busy.id, aware(2025, 6, 5), aware(2025, 6, 10)))
        self.assertFalse(services.has_conflict(self.busy.id, aware(2025, 6, 6), aware(2025, 6, 10)))
        self.assertFalse(services.has_conflict(self.free.id, aware(2025, 6, 3), aware(2025, 6, 7)))

    def test_has_conflict_excluding_booking(self) -> None:
        self.assertFalse(
            services.has_conflict(
                self.busy.id,
                aware(2025, 6, 1),
                aware(2025, 6, 5),
                excluding_booking_id=self.confirmed.id,
            )
        )

    def test_repeated_checks_agree(self) -> None:
        args = (self.busy.id, aware(2025, 6, 2), aware(2025, 6, 3))
        self.assertEqual(services.has_conflict(*args), services.has_conflict(*args))

    def test_filter_available_matches_has_conflict(self) -> None:
        ids = {self.busy.id, self.ongoing.id, self.free.id}
        windows = [
            (aware(2025, 5, 1), aware(2025, 5, 5)),
            (aware(2025, 6, 4), aware(2025, 6, 10)),
            (aware(2025, 6, 6), aware(2025, 6, 9)),
            (aware(2025, 6, 12), aware(2025, 6, 20)),
        ]
        for start, end in windows:
            expected = {lid for lid in ids if not services.has_conflict(lid, start, end)}
            self.assertEqual(services.filter_available(ids, start, end), expected, (start, end))

    def test_filter_available_empty_input(self) -> None:
        self.assertEqual(services.filter_available([], aware(2025, 6, 1), aware(2025, 6, 2)), set())

    @patch("apps.bookings.domain.availability.has_conflict", wraps=has_conflict)
    def test_has_conflict_is_decided_by_interval_rules(self, rules) -> None:  # type: ignore
        self.assertTrue(services.has_conflict(self.busy.id, aware(2025, 6, 5), aware(2025, 6, 10)))

        rules.assert_called_once()
        occupancies, listing_id, dates = rules.call_args.args
        self.assertEqual(listing_id, self.busy.id)
        self.assertEqual([item.booking_id for item in occupancies], [self.confirmed.id])
        self.assertEqual(dates, DateRange(aware(2025, 6, 5), aware(2025, 6, 10)))

    @patch("apps.bookings.domain.availability.filter_available", wraps=filter_available)
    def test_filter_available_is_decided_by_interval_rules(self, rules) -> None:  # type: ignore
        ids = {self.busy.id, self.ongoing.id, self.free.id}

        available = services.filter_available(ids, aware(2025, 6, 4), aware(2025, 6, 10))

        self.assertEqual(available, {self.free.id})
        rules.assert_called_once()

    def test_bookings_ended_before_the_window_are_not_loaded(self) -> None:
        occupancies = services._occupancies([self.busy.id, self.ongoing.id], aware(2025, 6, 6))

        self.assertEqual([item.listing_id for item in occupancies], [self.ongoing.id])

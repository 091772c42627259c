"""Transition rules and actor role resolution."""

from __future__ import annotations

from django.test import SimpleTestCase

from apps.bookings.domain.lifecycle import (
    TransitionDenied,
    TransitionInvalid,
    authorize_delete,
    authorize_transition,
)
from apps.bookings.domain.roles import ActorRole

STATUSES = ("pending", "confirmed", "ongoing", "completed", "canceled")


class ActorRoleTests(SimpleTestCase):
    def test_resolve(self) -> None:
        self.assertEqual(ActorRole.resolve(1, 1, 2), ActorRole.TUTOR)
        self.assertEqual(ActorRole.resolve(2, 1, 2), ActorRole.HOST)
        self.assertEqual(ActorRole.resolve(3, 1, 2), ActorRole.NEITHER)
        self.assertEqual(ActorRole.resolve(None, 1, 2), ActorRole.NEITHER)

    def test_same_user_on_both_sides(self) -> None:
        role = ActorRole.resolve(1, 1, 1)
        self.assertTrue(role & ActorRole.TUTOR)
        self.assertTrue(role & ActorRole.HOST)
        self.assertTrue(role.is_party)
        self.assertFalse(ActorRole.NEITHER.is_party)


class TransitionTests(SimpleTestCase):
    def test_confirm_succeeds_only_for_host_from_pending(self) -> None:
        for current in STATUSES:
            for role in (ActorRole.TUTOR, ActorRole.HOST, ActorRole.NEITHER):
                allowed = current == "pending" and role == ActorRole.HOST
                if allowed:
                    authorize_transition(current, "confirmed", role)
                    continue
                expected = TransitionInvalid if role == ActorRole.HOST else TransitionDenied
                with self.assertRaises(expected, msg=(current, role)):
                    authorize_transition(current, "confirmed", role)

    def test_cancel_from_pending_or_confirmed_by_either_party(self) -> None:
        for role in (ActorRole.TUTOR, ActorRole.HOST):
            authorize_transition("pending", "canceled", role)
            authorize_transition("confirmed", "canceled", role)
            for current in ("ongoing", "completed", "canceled"):
                with self.assertRaises(TransitionInvalid):
                    authorize_transition(current, "canceled", role)

    def test_stranger_is_denied_before_state_checks(self) -> None:
        with self.assertRaises(TransitionDenied):
            authorize_transition("completed", "canceled", ActorRole.NEITHER)

    def test_scheduled_targets_are_not_requestable(self) -> None:
        for target in ("ongoing", "completed", "pending"):
            with self.assertRaises(TransitionInvalid):
                authorize_transition("confirmed", target, ActorRole.HOST)

    def test_delete_rules(self) -> None:
        authorize_delete("pending", ActorRole.TUTOR)
        authorize_delete("canceled", ActorRole.TUTOR)
        with self.assertRaises(TransitionInvalid):
            authorize_delete("confirmed", ActorRole.TUTOR)
        with self.assertRaises(TransitionDenied):
            authorize_delete("pending", ActorRole.HOST)

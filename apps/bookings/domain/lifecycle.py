"""
Booking Status State Machine

    pending ──confirm (host)──> confirmed ──(clock)──> ongoing ──(clock)──> completed
       │                            │
       └──────cancel (either)───────┴──> canceled

Requests can only produce ``confirmed`` and ``canceled``. ``ongoing`` and
``completed`` are reached by the scheduled tasks.
"""

from __future__ import annotations

from .roles import ActorRole

PENDING = "pending"
CONFIRMED = "confirmed"
ONGOING = "ongoing"
COMPLETED = "completed"
CANCELED = "canceled"

REQUESTABLE_TARGETS = frozenset({CONFIRMED, CANCELED})
DELETABLE_STATUSES = frozenset({PENDING, CANCELED})

# Transitions driven by the clock rather than by an actor.
SCHEDULED_TRANSITIONS = {
    CONFIRMED: ONGOING,
    ONGOING: COMPLETED,
}


class TransitionDenied(Exception):
    """Actor is not allowed to request the transition."""


class TransitionInvalid(Exception):
    """Transition is not possible from the current status."""


def authorize_transition(current: str, target: str, role: ActorRole) -> None:
    """Raise unless ``role`` may move a booking from ``current`` to ``target``."""

    if not role.is_party:
        raise TransitionDenied("Only the tutor or the host can update this booking.")
    if target not in REQUESTABLE_TARGETS:
        raise TransitionInvalid(f"Status '{target}' cannot be requested directly.")

    if target == CONFIRMED:
        if not role & ActorRole.HOST:
            raise TransitionDenied("Only the host can confirm bookings.")
        if current != PENDING:
            raise TransitionInvalid("Only pending bookings can be confirmed.")
        return

    if current not in (PENDING, CONFIRMED):
        raise TransitionInvalid("Only pending or confirmed bookings can be canceled.")


def authorize_delete(current: str, role: ActorRole) -> None:
    if not role & ActorRole.TUTOR:
        raise TransitionDenied("Only the tutor who created the booking can delete it.")
    if current not in DELETABLE_STATUSES:
        raise TransitionInvalid("Only pending or canceled bookings can be deleted.")

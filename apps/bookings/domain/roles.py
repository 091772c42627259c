"""Actor relationship to a booking, resolved once per operation."""

from __future__ import annotations

import enum


class ActorRole(enum.Flag):
    NEITHER = 0
    TUTOR = enum.auto()
    HOST = enum.auto()

    @classmethod
    def resolve(cls, user_id, tutor_user_id, host_user_id) -> "ActorRole":  # type: ignore
        role = cls.NEITHER
        if user_id is not None and user_id == tutor_user_id:
            role |= cls.TUTOR
        if user_id is not None and user_id == host_user_id:
            role |= cls.HOST
        return role

    @property
    def is_party(self) -> bool:
        return bool(self & (ActorRole.TUTOR | ActorRole.HOST))

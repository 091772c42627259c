"""Error taxonomy for booking and listing operations.

Every error is an ``APIException`` so DRF renders it as ``{"detail": ...}``
with the matching status code. Errors are terminal for the request.
"""

from __future__ import annotations

from rest_framework import status  # type: ignore
from rest_framework.exceptions import APIException  # type: ignore


class NotFound(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found."
    default_code = "not_found"


class Forbidden(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You do not have permission to perform this action."
    default_code = "forbidden"


class Conflict(APIException):
    """Requested dates overlap a booking that still blocks the listing."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Listing not available for selected dates."
    default_code = "conflict"


class InvalidTransition(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Status transition not allowed."
    default_code = "invalid_transition"


class InvalidState(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Operation not allowed in the current state."
    default_code = "invalid_state"

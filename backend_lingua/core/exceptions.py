"""
Application-level exceptions.

Every error the services raise is a LinguaError carrying the HTTP status the API
layer should answer with. Validation and authentication errors are raised before
any store access; StoreFailure wraps errors from the database.
"""

from __future__ import annotations


class LinguaError(Exception):
    """Base error: message plus HTTP status code."""

    status_code = 500

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class Unauthenticated(LinguaError):
    """No valid session for the request."""

    status_code = 401


class ValidationError(LinguaError):
    """Missing or malformed input, self-rating, out-of-range rating value."""

    status_code = 400


class Forbidden(LinguaError):
    """Session wallet may not act on the requested wallet."""

    status_code = 403


class NotFound(LinguaError):
    """Referenced wallet or edge is absent where resolution is mandatory."""

    status_code = 404


class StoreFailure(LinguaError):
    """Underlying store call errored."""

    status_code = 500


class UpstreamFailure(LinguaError):
    """External host (e.g. notification API) rejected the call."""

    status_code = 502

    def __init__(self, message: str, *, details: object = None, status_code: int | None = None) -> None:
        super().__init__(message, status_code=status_code)
        self.details = details

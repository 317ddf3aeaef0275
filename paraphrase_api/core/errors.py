from __future__ import annotations

from fastapi import status


class ParaphraseError(Exception):
    """Base for failures that are reported to the caller as ``{"error": message}``."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidRequestError(ParaphraseError):
    """Malformed or missing request fields, raised before any generation call."""

    status_code = status.HTTP_400_BAD_REQUEST


class GenerationError(ParaphraseError):
    """The generation service call failed (network, auth, quota, ...)."""


class ResponseParseError(ParaphraseError):
    """A humanize reply contained an array span that is not a JSON array of strings."""

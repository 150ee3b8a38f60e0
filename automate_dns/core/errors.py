"""Error taxonomy shared by the store, the service and the HTTP layer.

Every error carries the HTTP status it maps to and an optional list of
detail strings rendered as ``errors`` in the JSON body.
"""

from __future__ import annotations

from fastapi import status


class ResolverApiError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal Server Error"

    def __init__(self, message: str | None = None, errors: list[str] | None = None) -> None:
        self.message = message or self.default_message
        self.errors = list(errors or [])
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body: dict = {"error": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class MalformedRequestError(ResolverApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Malformed request"


class NotFoundError(ResolverApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resolver not found"


class ConflictError(ResolverApiError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "A resolver with the same provider and hostname already exists"


class ValidationFailedError(ResolverApiError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_message = "Validation failed"


class SyncFailureError(ResolverApiError):
    """The local mutation is committed but the DNS provider rejected the change."""

    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Resolver saved but DNS sync failed"

from __future__ import annotations

from typing import Optional


class ValidationError(Exception):
    """A required draft field is empty."""


class GatewayError(Exception):
    """The news resource could not be reached or answered with a non-2xx status."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class FetchError(GatewayError):
    pass


class CreateError(GatewayError):
    pass


class UpdateError(GatewayError):
    pass


class DeleteError(GatewayError):
    pass

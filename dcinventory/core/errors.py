"""Domain error taxonomy.

Every error aborts only the operation that raised it. Services raise these;
the API layer renders them through a single exception handler, so routers
never translate them by hand.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse


class InventoryError(Exception):
    """Base class for recoverable domain errors."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"detail": self.message, "error": type(self).__name__}
        for key, value in self.context.items():
            # UUIDs and other ids are rendered as strings
            if value is None or isinstance(value, (int, str)):
                body[key] = value
            else:
                body[key] = str(value)
        return body


class ConfigError(InventoryError):
    """Bad pool parameters (network, prefix, gateway, DNS)."""

    # Literal: the starlette constant for 422 was renamed between releases
    status_code = 422


class ValidationError(InventoryError):
    """A required field is missing or blank."""

    status_code = 422


class NotFoundError(InventoryError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(InventoryError):
    """Address already taken, rack span occupied, duplicate name, ..."""

    status_code = status.HTTP_409_CONFLICT


class FitError(InventoryError):
    """Asset span falls outside the rack."""

    status_code = 422


class PoolSeedError(InventoryError):
    """Address records could not be written; the pool was rolled back."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def inventory_error_handler(request: Request, exc: InventoryError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

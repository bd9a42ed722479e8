"""Client-Schicht für den Reservierungs-Server (requests)."""

from client.api import ApiClient
from client.errors import (
    ApiError,
    DuplicateRecordError,
    ServiceUnavailableError,
    UnauthorizedError,
)
from client.session import SessionContext

__all__ = [
    "ApiClient",
    "ApiError",
    "DuplicateRecordError",
    "ServiceUnavailableError",
    "UnauthorizedError",
    "SessionContext",
]

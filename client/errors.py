"""Fehlerklassen für die Kommunikation mit dem Reservierungs-Server."""

from typing import Optional


class ApiError(Exception):
    """Basisklasse für alle Server-Fehler."""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 details: Optional[dict] = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ServiceUnavailableError(ApiError):
    """Server nicht erreichbar (Verbindungsfehler, Timeout)."""

    def __init__(self, message: str):
        super().__init__(message, status_code=None)


class UnauthorizedError(ApiError):
    """HTTP 401: Token fehlt oder ist abgelaufen."""

    def __init__(self, message: str = "Nicht angemeldet oder Sitzung abgelaufen."):
        super().__init__(message, status_code=401)


class DuplicateRecordError(ApiError):
    """Server lehnt das Speichern wegen einer Eindeutigkeitsverletzung ab.

    Tritt bei der Konflikterkennung auf, wenn bereits Konflikt-Datensätze
    existieren.
    """

"""HTTP-Client für den Reservierungs-Server (requests).

Jeder Service-Bereich (Konflikte, Events, Räume, Kurse, Wochenpläne) ist ein
eigenes kleines Objekt über einer gemeinsamen ApiClient-Instanz.
"""

import logging
from typing import Any, Optional

import requests

from client.errors import (
    ApiError,
    DuplicateRecordError,
    ServiceUnavailableError,
    UnauthorizedError,
)
from client.session import SessionContext
from models.conflict import ConflictRecord
from models.course import Course
from models.event import Event, EventId
from models.room import Room
from models.schedule import (
    ChangeRoomRequest,
    RescheduleRequest,
)

logger = logging.getLogger(__name__)


class ApiClient:
    """Gemeinsame HTTP-Schicht: Basis-URL, Timeout, Auth-Header, Fehlerabbildung."""

    def __init__(
        self,
        base_url: str,
        session_context: Optional[SessionContext] = None,
        timeout_seconds: float = 15,
        http: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session_context = session_context or SessionContext()
        self.timeout_seconds = timeout_seconds
        self.http = http or requests.Session()
        self.http.headers.update({"Content-Type": "application/json"})

        self.conflicts = ConflictsAPI(self)
        self.events = EventsAPI(self)
        self.rooms = RoomsAPI(self)
        self.courses = CoursesAPI(self)
        self.weekly_schedule = WeeklyScheduleAPI(self)

    def request(self, method: str, path: str, json: Any = None) -> Any:
        """Führt eine Anfrage aus und gibt den JSON-Body zurück (None wenn leer).

        Raises:
            ServiceUnavailableError: Verbindungsfehler oder Timeout.
            UnauthorizedError: HTTP 401 (Sitzung wird verworfen).
            DuplicateRecordError: HTTP 400/409 mit "duplicate" in der Meldung.
            ApiError: alle übrigen HTTP-Fehler.
        """
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")
        try:
            response = self.http.request(
                method,
                url,
                json=json,
                headers=self.session_context.auth_headers(),
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as e:
            raise ServiceUnavailableError(f"Server nicht erreichbar: {url} ({e})") from e

        if response.status_code == 401:
            self.session_context.clear()
            raise UnauthorizedError()

        if response.status_code >= 400:
            message = _error_message(response)
            if response.status_code in (400, 409) and "duplicate" in message.lower():
                raise DuplicateRecordError(message, status_code=response.status_code)
            raise ApiError(message, status_code=response.status_code)

        if not response.content:
            return None
        return response.json()


def _error_message(response: requests.Response) -> str:
    """Fehlermeldung aus dem JSON-Feld "message", sonst Rohtext."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text or f"HTTP {response.status_code}"


class ConflictsAPI:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def get_all(self) -> list[ConflictRecord]:
        """Alle gespeicherten Konflikte."""
        data = self._client.request("GET", "/conflicts") or []
        return [ConflictRecord.model_validate(item) for item in data]

    def detect(self) -> list[ConflictRecord]:
        """Erkennung auf dem Server neu ausführen und speichern."""
        data = self._client.request("POST", "/conflicts/detect") or []
        return [ConflictRecord.model_validate(item) for item in data]

    def preview(self) -> list[ConflictRecord]:
        """Erkennung ohne Speichern (Ausweichweg bei DuplicateRecordError)."""
        data = self._client.request("GET", "/conflicts/preview") or []
        return [ConflictRecord.model_validate(item) for item in data]


class EventsAPI:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def reschedule(self, event_id: EventId, request: RescheduleRequest) -> Event:
        data = self._client.request(
            "PUT", f"/events/{event_id}/reschedule", json=request.model_dump(by_alias=True)
        )
        return Event.model_validate(data)

    def change_room(self, event_id: EventId, request: ChangeRoomRequest) -> Event:
        data = self._client.request(
            "PUT", f"/events/{event_id}/change-room", json=request.model_dump(by_alias=True)
        )
        return Event.model_validate(data)


class RoomsAPI:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def get_all(self) -> list[Room]:
        data = self._client.request("GET", "/rooms") or []
        return [Room.model_validate(item) for item in data]


class CoursesAPI:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def get_all(self) -> list[Course]:
        data = self._client.request("GET", "/courses") or []
        return [Course.model_validate(item) for item in data]


class WeeklyScheduleAPI:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def create(self, endpoint: str, payload: Any) -> Any:
        """Sendet eine fertig serialisierte Wochenplan-Anfrage.

        Endpunkt, Payload und Antwortformat bestimmt der RequestBuilder;
        zurückgegeben wird der rohe JSON-Body.
        """
        return self._client.request("POST", endpoint, json=payload) or {}

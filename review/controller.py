"""ConflictReviewController – Zustand und Ablauf der Konfliktansicht.

Ablauf: Konflikte laden → nach Suchbegriff filtern → gruppieren → anzeigen →
Maßnahme auf ein einzelnes Event anwenden → Erkennung erneut ausführen.

Nach jeder Maßnahme wird die Erkennung immer neu gestartet statt den
Konflikt lokal zu entfernen: eine Änderung kann Konflikte auflösen und an
anderer Stelle neue erzeugen.
"""

import logging
from typing import TYPE_CHECKING, Callable, Optional, Union

from pydantic import BaseModel

from analysis.conflict_grouping import count_by_type, filter_conflicts, group_conflicts
from analysis.resolution import describe_group, suggest_resolutions
from client.errors import ApiError, DuplicateRecordError
from models.conflict import ConflictGroup, ConflictRecord, ConflictType
from models.event import Event, EventId
from models.schedule import ChangeRoomRequest, RescheduleRequest

if TYPE_CHECKING:
    from client.api import ApiClient

logger = logging.getLogger(__name__)

# Statische Meldung, wenn weder detect noch preview funktionieren
DETECTION_UNAVAILABLE = (
    "Konflikterkennung fehlgeschlagen: Der Server konnte die Konflikte weder "
    "speichern noch eine Vorschau liefern. Bitte bestehende Konflikt-Datensätze "
    "prüfen oder den Administrator kontaktieren."
)


class GroupView(BaseModel):
    """Eine Konfliktgruppe mit Beschreibung und Lösungshinweisen."""

    group: ConflictGroup
    description: str
    suggestions: list[str]


class ConflictReviewController:
    """Hält Konfliktliste, Suchbegriff und Ansichtsmodus einer Review-Sitzung."""

    def __init__(self, api: "ApiClient", grouped_view: bool = True) -> None:
        self.api = api
        self.grouped_view = grouped_view
        self.conflicts: list[ConflictRecord] = []
        self.search_term = ""
        self.error: Optional[str] = None
        self.notice: Optional[str] = None
        # True wenn die aktuelle Liste nur eine Vorschau (nicht gespeichert) ist
        self.is_preview = False
        self._disposed = False
        self._last_fetch: Optional[Callable[[], bool]] = None

    # ─── Laden ───

    def load(self) -> bool:
        """Lädt die gespeicherten Konflikte. Bei Fehler bleibt die alte Liste."""
        self._last_fetch = self.load
        try:
            conflicts = self.api.conflicts.get_all()
        except ApiError as e:
            logger.warning(f"Konflikte konnten nicht geladen werden: {e.message}")
            return self._fail(f"Konflikte konnten nicht geladen werden: {e.message}")
        return self._apply(conflicts, preview=False)

    def detect(self) -> bool:
        """Startet die Erkennung auf dem Server (mit Speichern).

        Bei DuplicateRecordError wird automatisch die Vorschau ohne Speichern
        geladen; scheitert auch diese, wird eine statische Diagnose gesetzt.
        """
        self._last_fetch = self.detect
        try:
            conflicts = self.api.conflicts.detect()
        except DuplicateRecordError as e:
            logger.warning(f"Konflikterkennung konnte nicht speichern, nutze Vorschau: {e.message}")
            return self._preview_fallback()
        except ApiError as e:
            logger.warning(f"Konflikterkennung fehlgeschlagen: {e.message}")
            return self._fail(f"Konflikterkennung fehlgeschlagen: {e.message}")
        return self._apply(conflicts, preview=False)

    def _preview_fallback(self) -> bool:
        try:
            conflicts = self.api.conflicts.preview()
        except ApiError as e:
            logger.warning(f"Konflikt-Vorschau fehlgeschlagen: {e.message}")
            return self._fail(DETECTION_UNAVAILABLE)
        if not self._apply(conflicts, preview=True):
            return False
        self.notice = (
            "Konflikte wurden erkannt, aber wegen bestehender Datensätze nicht gespeichert."
        )
        return True

    def retry(self) -> bool:
        """Wiederholt den letzten Ladevorgang (Standard: load)."""
        fetch = self._last_fetch or self.load
        return fetch()

    def _apply(self, conflicts: list[ConflictRecord], preview: bool) -> bool:
        if self._disposed:
            logger.debug("Antwort nach dispose() verworfen")
            return False
        self.conflicts = list(conflicts)
        self.is_preview = preview
        self.error = None
        self.notice = None
        return True

    def _fail(self, message: str) -> bool:
        if not self._disposed:
            self.error = message
        return False

    # ─── Ansicht ───

    def set_search(self, term: str) -> None:
        self.search_term = term

    def toggle_view(self) -> bool:
        """Wechselt zwischen gruppierter und Einzelansicht."""
        self.grouped_view = not self.grouped_view
        return self.grouped_view

    @property
    def filtered_conflicts(self) -> list[ConflictRecord]:
        """Konflikte nach Suchbegriff (Lehrkraft oder Raum)."""
        return filter_conflicts(self.conflicts, self.search_term)

    @property
    def groups(self) -> list[ConflictGroup]:
        """Gruppen über den gefilterten Konflikten."""
        return group_conflicts(self.filtered_conflicts)

    def group_views(self) -> list[GroupView]:
        return [
            GroupView(
                group=g,
                description=describe_group(g),
                suggestions=suggest_resolutions(g),
            )
            for g in self.groups
        ]

    def statistics(self) -> dict[ConflictType, int]:
        """Anzahl gefilterter Konflikte pro Typ."""
        return count_by_type(self.filtered_conflicts)

    def member_events(self, target: Union[ConflictGroup, ConflictRecord]) -> list[Event]:
        """Events, aus denen für eine Maßnahme genau eines gewählt wird."""
        if isinstance(target, ConflictGroup):
            return target.member_events()
        return target.events

    def find_event(self, event_id: EventId) -> Event:
        for conflict in self.conflicts:
            for event in conflict.events:
                if event.id == event_id:
                    return event
        raise ValueError(f"Event {event_id} ist an keinem aktuellen Konflikt beteiligt.")

    # ─── Maßnahmen ───

    def reschedule(self, event_id: EventId, date: str, start_time: str,
                   end_time: str) -> Event:
        """Verschiebt ein Event und startet danach die Erkennung neu.

        Raises:
            ValueError: event_id gehört zu keinem aktuellen Konflikt.
            ApiError: Server lehnt die Änderung ab (Konfliktliste unverändert).
        """
        self.find_event(event_id)
        request = RescheduleRequest(date=date, start_time=start_time, end_time=end_time)
        updated = self.api.events.reschedule(event_id, request)
        logger.info(f"Event {event_id} verschoben auf {date} {start_time}-{end_time}")
        self._redetect_after_change()
        return updated

    def change_room(self, event_id: EventId, room_id: Union[int, str]) -> Event:
        """Weist einem Event einen anderen Raum zu und startet die Erkennung neu."""
        self.find_event(event_id)
        updated = self.api.events.change_room(event_id, ChangeRoomRequest(room_id=room_id))
        logger.info(f"Event {event_id} in Raum {room_id} verlegt")
        self._redetect_after_change()
        return updated

    def _redetect_after_change(self) -> None:
        """Erkennung nach einer Änderung; bei Fehler nur die Liste neu laden."""
        try:
            conflicts = self.api.conflicts.detect()
        except ApiError as e:
            logger.warning(f"Erneute Erkennung fehlgeschlagen, lade gespeicherte Konflikte: {e.message}")
            if self.load():
                self.notice = (
                    "Änderung übernommen. Bitte die Konflikterkennung erneut starten, "
                    "um die Liste zu aktualisieren."
                )
            return
        if self._apply(conflicts, preview=False):
            if conflicts:
                self.notice = f"Änderung übernommen. Verbleibende Konflikte: {len(conflicts)}"
            else:
                self.notice = "Alle Konflikte wurden aufgelöst."

    def ignore(self, conflict_id: Union[int, str]) -> bool:
        """Blendet einen Konflikt lokal aus (wird nicht gespeichert)."""
        before = len(self.conflicts)
        self.conflicts = [c for c in self.conflicts if c.id != conflict_id]
        return len(self.conflicts) < before

    def ignore_group(self, group_id: str) -> int:
        """Blendet alle Konflikte einer Gruppe lokal aus."""
        group = next((g for g in self.groups if g.id == group_id), None)
        if group is None:
            return 0
        member_ids = {c.id for c in group.conflicts}
        self.conflicts = [c for c in self.conflicts if c.id not in member_ids]
        return len(member_ids)

    # ─── Lebenszyklus ───

    def dispose(self) -> None:
        """Beendet die Sitzung; spätere Antworten werden nicht mehr übernommen."""
        self._disposed = True

    @property
    def is_disposed(self) -> bool:
        return self._disposed

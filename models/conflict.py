"""Konflikt-Datenmodelle: Server-Konflikte und clientseitige Gruppen (Pydantic v2)."""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from models.event import Event, EventId


class ConflictType(str, Enum):
    ROOM = "ROOM"
    TEACHER = "TEACHER"
    CAPACITY = "CAPACITY"


class ConflictRecord(BaseModel):
    """Ein vom Server erkannter Konflikt zwischen zwei Events.

    event2 fehlt bei Einzel-Event-Konflikten (z.B. Kapazitätsüberschreitung).
    event1 ist laut Server immer gesetzt; fehlt es trotzdem, landet der
    Datensatz beim Gruppieren in einem "Unknown"-Bucket statt zu scheitern.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Union[int, str]
    conflict_type: ConflictType = Field(alias="conflictType")
    event1: Optional[Event] = None
    event2: Optional[Event] = None
    description: str = ""

    @property
    def events(self) -> list[Event]:
        """Alle beteiligten Events (1 oder 2)."""
        return [e for e in (self.event1, self.event2) if e is not None]


class ConflictGroup(BaseModel):
    """Gruppe von Konflikten mit gleicher Ressource, Datum und Zeitspanne.

    Wird bei jedem Gruppierungsdurchlauf neu berechnet, nie persistiert.
    """

    id: str                                    # Gruppenschlüssel
    type: ConflictType
    resource: str                              # Raumname oder Lehrkraft
    date: str
    time_range: str                            # "08:30-09:30"
    event_ids: list[EventId] = []              # dedupliziert, Einfügereihenfolge
    conflicts: list[ConflictRecord] = []       # Eingabereihenfolge

    def member_events(self) -> list[Event]:
        """Alle verschiedenen Events der Gruppe, in Reihenfolge von event_ids."""
        by_id: dict = {}
        for c in self.conflicts:
            for e in c.events:
                by_id.setdefault(e.id, e)
        return [by_id[eid] for eid in self.event_ids if eid in by_id]

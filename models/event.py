"""Datenmodell für Veranstaltungen (Events) und ihre Lehrkraft (Pydantic v2)."""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from models.room import Room

EventId = Union[int, str]


class EventType(str, Enum):
    COURSE = "COURSE"
    DEFENSE = "DEFENSE"
    MEETING = "MEETING"


class EventStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class TeacherRef(BaseModel):
    """Verweis auf die Lehrkraft eines Events."""

    id: Union[int, str]
    name: str
    email: Optional[str] = None


class Event(BaseModel):
    """Eine eingeplante Veranstaltung.

    Datum und Uhrzeiten bleiben Strings im Server-Format ("2025-08-19",
    "08:30"), da sie unverändert in Gruppenschlüssel einfließen.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: EventId
    type: EventType = EventType.COURSE
    title: Optional[str] = None
    date: str
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")
    teacher: TeacherRef
    room: Optional[Room] = None
    status: Optional[EventStatus] = None
    description: Optional[str] = None
    expected_participants: Optional[int] = Field(default=None, alias="expectedParticipants")

    @property
    def label(self) -> str:
        """Anzeigename: Titel oder ersatzweise der Event-Typ."""
        return self.title or self.type.value

    @property
    def time_range(self) -> str:
        return f"{self.start_time}-{self.end_time}"

"""Datenmodell für Kurse und die Kursauswahl im Wochenplan-Editor (Pydantic v2)."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Course(BaseModel):
    """Ein Kurs aus dem Server-Katalog (schreibgeschützter Snapshot)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Union[int, str]
    name: str
    subject: str
    duration_hours: int = Field(alias="durationHours")
    sessions_per_week: int = Field(1, alias="sessionsPerWeek")
    min_capacity: int = Field(0, alias="minCapacity")
    max_capacity: Optional[int] = Field(default=None, alias="maxCapacity")
    preferred_room_type: Optional[str] = Field(default=None, alias="preferredRoomType")
    department: Optional[str] = None

    @field_validator("sessions_per_week", "min_capacity", mode="before")
    @classmethod
    def null_to_default(cls, v, info):
        # Nullable Spalten auf dem Server
        if v is None:
            return cls.model_fields[info.field_name].default
        return v


class CourseSelection(BaseModel):
    """Auswahlzustand eines Kurses: ausgewählt, Priorität, Teilnehmerzahl.

    Wird beim Laden des Katalogs einmal pro Kurs angelegt und danach in-place
    verändert. Zuweisungen werden validiert (priority/student_count ≥ 1).
    """

    model_config = ConfigDict(validate_assignment=True)

    course: Course
    selected: bool = False
    # 1 = höchste Priorität (wird zuerst eingeplant)
    priority: int = Field(1, ge=1)
    student_count: int = Field(20, ge=1)

    @property
    def course_id(self) -> Union[int, str]:
        return self.course.id

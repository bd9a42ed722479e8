"""Anfrage- und Ergebnis-Modelle für den Scheduling-Service (Pydantic v2)."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from models.event import Event, TeacherRef
from models.room import Room


class CourseAssignment(BaseModel):
    """Ein Kurs in der strukturierten Wochenplan-Anfrage."""

    model_config = ConfigDict(populate_by_name=True)

    course_id: Union[int, str] = Field(alias="courseId")
    priority: int
    student_count: int = Field(alias="studentCount")


class ScheduleRequest(BaseModel):
    """Strukturierte Anfrage: Wochenbeginn + Kurse mit Priorität."""

    model_config = ConfigDict(populate_by_name=True)

    week_start_date: str = Field(alias="weekStartDate")
    courses: list[CourseAssignment]


class ScheduledEvent(BaseModel):
    """Eine vom Server platzierte Kurs-Sitzung."""

    model_config = ConfigDict(populate_by_name=True)

    course_id: Optional[Union[int, str]] = Field(default=None, alias="courseId")
    course_name: Optional[str] = Field(default=None, alias="courseName")
    teacher: Optional[TeacherRef] = None
    room: Optional[Room] = None
    start_date_time: str = Field(alias="startDateTime")
    end_date_time: str = Field(alias="endDateTime")
    student_count: Optional[int] = Field(default=None, alias="studentCount")
    priority: Optional[int] = None
    session_number: Optional[int] = Field(default=None, alias="sessionNumber")

    @classmethod
    def from_event(cls, event: Event) -> "ScheduledEvent":
        """Event aus der "professional"-Antwort (Datum + Uhrzeiten getrennt)."""
        return cls(
            course_name=event.title,
            teacher=event.teacher,
            room=event.room,
            start_date_time=f"{event.date}T{event.start_time}",
            end_date_time=f"{event.date}T{event.end_time}",
            student_count=event.expected_participants,
        )


class ScheduleResult(BaseModel):
    """Ergebnis einer Wochenplan-Erstellung.

    Teilweises Scheitern (failed_courses > 0) ist ein normales Ergebnis,
    kein Fehler.
    """

    model_config = ConfigDict(populate_by_name=True)

    week_start_date: Optional[str] = Field(default=None, alias="weekStartDate")
    week_end_date: Optional[str] = Field(default=None, alias="weekEndDate")
    total_courses: int = Field(0, alias="totalCourses")
    successful_courses: int = Field(0, alias="successfulCourses")
    failed_courses: int = Field(0, alias="failedCourses")
    success: bool = False
    scheduled_events: list[ScheduledEvent] = Field(default=[], alias="scheduledEvents")
    errors: list[str] = []
    message: Optional[str] = None

    @property
    def is_partial(self) -> bool:
        """True wenn einige, aber nicht alle Kurse eingeplant wurden."""
        return self.failed_courses > 0 and bool(self.scheduled_events)


class ProfessionalScheduleResult(BaseModel):
    """Antwort von /weekly-schedule/create-professional.

    Der Server liefert fertige Events und eine Textliste der nicht
    eingeplanten Kurse, aber keine Kurszähler.
    """

    model_config = ConfigDict(populate_by_name=True)

    scheduled_events: list[Event] = Field(default=[], alias="scheduledEvents")
    unscheduled_courses: list[str] = Field(default=[], alias="unscheduledCourses")
    message: Optional[str] = None
    success: bool = True

    def to_schedule_result(self, total_courses: int) -> ScheduleResult:
        """Gemeinsames Ergebnisformat; Zähler aus der Anzahl gesendeter Kurs-IDs."""
        failed = min(len(self.unscheduled_courses), total_courses)
        return ScheduleResult(
            total_courses=total_courses,
            successful_courses=total_courses - failed,
            failed_courses=failed,
            success=self.success and failed == 0,
            scheduled_events=[ScheduledEvent.from_event(e) for e in self.scheduled_events],
            errors=list(self.unscheduled_courses),
            message=self.message,
        )


class RescheduleRequest(BaseModel):
    date: str
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")

    model_config = ConfigDict(populate_by_name=True)


class ChangeRoomRequest(BaseModel):
    room_id: Union[int, str] = Field(alias="roomId")

    model_config = ConfigDict(populate_by_name=True)

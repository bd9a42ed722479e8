"""Serialisierung der Kursauswahl in das Anfrageformat des Scheduling-Service.

Zwei benannte Varianten hinter einer gemeinsamen Schnittstelle:
StructuredRequestBuilder (Wochenbeginn + Kurse mit Priorität) und
IdListRequestBuilder (reine Kurs-ID-Liste für den "professional"-Endpunkt).
Welche verwendet wird, entscheidet die Konfiguration.
"""

from typing import Any

from config.schema import RequestMode
from models.course import CourseSelection
from models.schedule import (
    CourseAssignment,
    ProfessionalScheduleResult,
    ScheduleRequest,
    ScheduleResult,
)


class RequestBuilder:
    """Schnittstelle: Endpunkt + Payload aus Wochenbeginn und Auswahl."""

    mode: RequestMode
    endpoint: str

    def build(self, week_start_date: str, selections: list[CourseSelection]) -> Any:
        raise NotImplementedError

    def payload(self, week_start_date: str, selections: list[CourseSelection]) -> Any:
        """JSON-fähige Darstellung von build()."""
        raise NotImplementedError

    def parse_result(self, data: Any, payload: Any) -> ScheduleResult:
        """Wertet die Server-Antwort auf die gesendete Payload aus."""
        raise NotImplementedError


class StructuredRequestBuilder(RequestBuilder):
    mode = RequestMode.STRUCTURED
    endpoint = "/weekly-schedule/create"

    def build(self, week_start_date: str,
              selections: list[CourseSelection]) -> ScheduleRequest:
        return ScheduleRequest(
            week_start_date=week_start_date,
            courses=[
                CourseAssignment(
                    course_id=s.course_id,
                    priority=s.priority,
                    student_count=s.student_count,
                )
                for s in selections if s.selected
            ],
        )

    def payload(self, week_start_date: str, selections: list[CourseSelection]) -> dict:
        return self.build(week_start_date, selections).model_dump(by_alias=True)

    def parse_result(self, data: Any, payload: dict) -> ScheduleResult:
        return ScheduleResult.model_validate(data or {})


class IdListRequestBuilder(RequestBuilder):
    """Nur die IDs der ausgewählten Kurse; der Wochenbeginn entfällt."""

    mode = RequestMode.ID_LIST
    endpoint = "/weekly-schedule/create-professional"

    def build(self, week_start_date: str, selections: list[CourseSelection]) -> list:
        return [s.course_id for s in selections if s.selected]

    def payload(self, week_start_date: str, selections: list[CourseSelection]) -> list:
        return self.build(week_start_date, selections)

    def parse_result(self, data: Any, payload: list) -> ScheduleResult:
        """Die Antwort hat keine Zähler; Gesamtzahl = Anzahl gesendeter IDs."""
        result = ProfessionalScheduleResult.model_validate(data or {})
        return result.to_schedule_result(total_courses=len(payload))


_BUILDERS: dict[RequestMode, type[RequestBuilder]] = {
    RequestMode.STRUCTURED: StructuredRequestBuilder,
    RequestMode.ID_LIST: IdListRequestBuilder,
}


def request_builder_for(mode: RequestMode) -> RequestBuilder:
    """Liefert den RequestBuilder für den konfigurierten Modus."""
    return _BUILDERS[RequestMode(mode)]()


def serialize_request(
    week_start_date: str,
    selections: list[CourseSelection],
    mode: RequestMode = RequestMode.STRUCTURED,
) -> Any:
    """Kurzform: serialisiert die Auswahl im gewünschten Format."""
    return request_builder_for(mode).payload(week_start_date, selections)

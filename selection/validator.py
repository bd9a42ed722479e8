"""Prüfung der Kursauswahl vor dem Absenden an den Scheduling-Service.

Die Prüfung ist lokal und synchron; schlägt sie fehl, wird keine Anfrage
gesendet.
"""

from collections import Counter
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from models.course import CourseSelection


class ValidationIssue(str, Enum):
    MISSING_WEEK_START = "missing_week_start"
    NO_COURSES_SELECTED = "no_courses_selected"
    DUPLICATE_PRIORITY = "duplicate_priority"


ISSUE_MESSAGES: dict[ValidationIssue, str] = {
    ValidationIssue.MISSING_WEEK_START: "Bitte einen Wochenbeginn (Datum) angeben.",
    ValidationIssue.NO_COURSES_SELECTED: "Bitte mindestens einen Kurs auswählen.",
    ValidationIssue.DUPLICATE_PRIORITY: "Jeder Kurs braucht eine eindeutige Priorität.",
}


class ValidationResult(BaseModel):
    """Ergebnis der Auswahlprüfung."""

    ok: bool
    issue: Optional[ValidationIssue] = None
    reason: Optional[str] = None
    # Nur bei DUPLICATE_PRIORITY: die mehrfach vergebenen Werte
    duplicate_priorities: list[int] = []

    @classmethod
    def passed(cls) -> "ValidationResult":
        return cls(ok=True)

    @classmethod
    def failed(cls, issue: ValidationIssue, **extra) -> "ValidationResult":
        return cls(ok=False, issue=issue, reason=ISSUE_MESSAGES[issue], **extra)


def duplicate_priorities(selections: list[CourseSelection]) -> list[int]:
    """Mehrfach vergebene Prioritäten unter den ausgewählten Kursen (sortiert)."""
    counts = Counter(s.priority for s in selections if s.selected)
    return sorted(p for p, n in counts.items() if n > 1)


def validate_selection(
    selections: list[CourseSelection], week_start_date: Optional[str]
) -> ValidationResult:
    """Prüft in fester Reihenfolge und bricht beim ersten Fehler ab.

    1. Wochenbeginn gesetzt
    2. Mindestens ein Kurs ausgewählt
    3. Prioritäten der ausgewählten Kurse paarweise verschieden
    """
    if not week_start_date or not week_start_date.strip():
        return ValidationResult.failed(ValidationIssue.MISSING_WEEK_START)

    if not any(s.selected for s in selections):
        return ValidationResult.failed(ValidationIssue.NO_COURSES_SELECTED)

    duplicates = duplicate_priorities(selections)
    if duplicates:
        return ValidationResult.failed(
            ValidationIssue.DUPLICATE_PRIORITY, duplicate_priorities=duplicates
        )

    return ValidationResult.passed()


class ScheduleValidationError(ValueError):
    """Die Auswahl ist ungültig; enthält das ValidationResult."""

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(result.reason)

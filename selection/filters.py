"""Filterkriterien für den Kurskatalog im Wochenplan-Editor.

Filtern ändert nur die Sichtbarkeit: die zugrunde liegende Auswahlliste
wird nie verkleinert, zurückgegeben werden dieselben Objekte.
"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

from models.course import CourseSelection

# Sentinel "kein Filter" (wie im Auswahlfeld "All")
ALL = "All"


class SelectionFilter(BaseModel):
    """UND-verknüpfte Filterkriterien. ALL/None überspringt ein Kriterium."""

    subject: str = ALL
    # Untergrenze auf course.min_capacity
    min_capacity: int = Field(0, ge=0)
    # Obergrenze auf course.max_capacity (nur wenn der Kurs eine hat)
    max_capacity: Optional[int] = Field(None, ge=0)
    duration_hours: Union[int, Literal["All"]] = ALL
    sessions_per_week: Union[int, Literal["All"]] = ALL
    search_term: str = ""


def matches(selection: CourseSelection, criteria: SelectionFilter) -> bool:
    """Prüft einen einzelnen Kurs gegen alle Kriterien."""
    course = selection.course

    if criteria.subject != ALL and course.subject != criteria.subject:
        return False
    if course.min_capacity < criteria.min_capacity:
        return False
    if (criteria.max_capacity is not None and course.max_capacity
            and course.max_capacity > criteria.max_capacity):
        return False
    if criteria.duration_hours != ALL and course.duration_hours != criteria.duration_hours:
        return False
    if (criteria.sessions_per_week != ALL
            and course.sessions_per_week != criteria.sessions_per_week):
        return False
    term = criteria.search_term.strip().lower()
    if term and term not in course.name.lower():
        return False
    return True


def filter_selections(
    selections: list[CourseSelection], criteria: SelectionFilter
) -> list[CourseSelection]:
    """Gibt die sichtbaren Einträge zurück (gleiche Objekte, gleiche Reihenfolge)."""
    return [s for s in selections if matches(s, criteria)]


def available_subjects(selections: list[CourseSelection]) -> list[str]:
    """Verschiedene Fächer des Katalogs in Reihenfolge des ersten Auftretens."""
    subjects: list[str] = []
    for s in selections:
        if s.course.subject not in subjects:
            subjects.append(s.course.subject)
    return subjects

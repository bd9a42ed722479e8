"""SelectionModel – Kursauswahl des Wochenplan-Editors, nach Kurs-ID geführt.

Wird einmal pro Katalog-Ladevorgang aus den Kursen erzeugt und danach nur
noch in-place verändert.
"""

from typing import Iterator, Optional, Union

from config.defaults import FALLBACK_STUDENT_COUNT
from config.schema import SchedulePreset
from models.course import Course, CourseSelection

CourseId = Union[int, str]


class SelectionModel:
    """Verwaltet eine CourseSelection pro Kurs in Katalogreihenfolge."""

    def __init__(self, selections: Optional[list[CourseSelection]] = None,
                 fallback_student_count: int = FALLBACK_STUDENT_COUNT) -> None:
        self._selections: list[CourseSelection] = list(selections or [])
        self.fallback_student_count = fallback_student_count

    @classmethod
    def from_courses(
        cls,
        courses: list[Course],
        default_priority: int = 1,
        fallback_student_count: int = FALLBACK_STUDENT_COUNT,
    ) -> "SelectionModel":
        """Legt für jeden Kurs eine nicht ausgewählte CourseSelection an."""
        selections = [
            CourseSelection(
                course=course,
                selected=False,
                priority=default_priority,
                student_count=course.min_capacity or fallback_student_count,
            )
            for course in courses
        ]
        return cls(selections, fallback_student_count=fallback_student_count)

    @property
    def selections(self) -> list[CourseSelection]:
        """Die zugrunde liegende Liste (nicht kopiert, in-place veränderbar)."""
        return self._selections

    def get(self, course_id: CourseId) -> CourseSelection:
        for s in self._selections:
            if s.course_id == course_id:
                return s
        raise KeyError(f"Kurs {course_id} ist nicht im Katalog.")

    def update(self, course_id: CourseId, **fields) -> CourseSelection:
        """Setzt selected/priority/student_count eines Kurses (validiert)."""
        allowed = {"selected", "priority", "student_count"}
        unknown = set(fields) - allowed
        if unknown:
            raise ValueError(f"Unbekannte Felder: {sorted(unknown)}")
        selection = self.get(course_id)
        for name, value in fields.items():
            setattr(selection, name, value)
        return selection

    def selected(self) -> list[CourseSelection]:
        """Ausgewählte Kurse in Katalogreihenfolge."""
        return [s for s in self._selections if s.selected]

    def selected_by_priority(self) -> list[CourseSelection]:
        """Ausgewählte Kurse nach Priorität sortiert (Zusammenfassung)."""
        return sorted(self.selected(), key=lambda s: s.priority)

    def apply_preset(self, preset: SchedulePreset) -> int:
        """Ersetzt die Auswahl durch die Kurse des Presets.

        Priorität = Position im Preset (1-basiert), Teilnehmerzahl wird auf
        die Mindestkapazität zurückgesetzt. Unbekannte IDs werden übersprungen.
        Gibt die Anzahl ausgewählter Kurse zurück.
        """
        for s in self._selections:
            s.selected = False
        by_id = {s.course_id: s for s in self._selections}
        applied = 0
        for course_id in preset.course_ids:
            s = by_id.get(course_id)
            if s is None:
                continue
            applied += 1
            s.selected = True
            s.priority = applied
            s.student_count = s.course.min_capacity or self.fallback_student_count
        return applied

    def reset(self, default_priority: int = 1) -> None:
        """Alles abwählen und Prioritäten zurücksetzen."""
        for s in self._selections:
            s.selected = False
            s.priority = default_priority

    def __iter__(self) -> Iterator[CourseSelection]:
        return iter(self._selections)

    def __len__(self) -> int:
        return len(self._selections)

    def __repr__(self) -> str:
        return f"SelectionModel({len(self._selections)} Kurse, {len(self.selected())} ausgewählt)"

"""Tests für Kursfilter, Sammeloperationen, Presets und das SelectionModel."""

import random

import pytest
from pydantic import ValidationError

from config.schema import SchedulePreset
from models.course import Course, CourseSelection
from selection.bulk_ops import (
    apply_bulk_priority,
    deselect_all,
    select_all_filtered,
    shuffle_priorities,
)
from selection.filters import ALL, SelectionFilter, available_subjects, filter_selections
from selection.model import SelectionModel
from selection.validator import ValidationIssue, validate_selection


# ─── Testdaten-Hilfsfunktionen ────────────────────────────────────────────────

def _course(cid, subject="Math", min_cap=10, max_cap=40, hours=2, sessions=2,
            name=None) -> Course:
    return Course(
        id=cid,
        name=name or f"{subject} {cid}",
        subject=subject,
        duration_hours=hours,
        sessions_per_week=sessions,
        min_capacity=min_cap,
        max_capacity=max_cap,
    )


def _catalog() -> list[Course]:
    """10 Kurse, davon genau 3 mit Fach Math und Mindestkapazität ≥ 30."""
    return [
        _course(1, "Math", min_cap=30, name="Linear Algebra"),
        _course(2, "Math", min_cap=10, name="Statistics"),
        _course(3, "Math", min_cap=35, hours=3, name="Calculus I"),
        _course(4, "Physics", min_cap=40, name="Mechanics"),
        _course(5, "Math", min_cap=50, max_cap=80, sessions=3, name="Calculus II"),
        _course(6, "Computer Science", min_cap=30, name="Algorithms"),
        _course(7, "Math", min_cap=0, max_cap=None, name="Discrete Math"),
        _course(8, "Business", min_cap=25, name="Accounting"),
        _course(9, "Physics", min_cap=15, name="Optics"),
        _course(10, "Computer Science", min_cap=20, hours=3, name="Databases"),
    ]


def _selections() -> list[CourseSelection]:
    return SelectionModel.from_courses(_catalog()).selections


# ─── FILTER ───────────────────────────────────────────────────────────────────

class TestFilter:
    def test_subject_and_min_capacity(self):
        """Fach Math + Mindestkapazität 30 → genau 3 Kurse."""
        selections = _selections()
        visible = filter_selections(selections, SelectionFilter(subject="Math", min_capacity=30))
        assert [s.course_id for s in visible] == [1, 3, 5]

    def test_returns_same_objects(self):
        selections = _selections()
        visible = filter_selections(selections, SelectionFilter(subject="Physics"))
        assert all(any(v is s for s in selections) for v in visible)

    def test_default_filter_shows_all(self):
        selections = _selections()
        assert len(filter_selections(selections, SelectionFilter())) == 10

    def test_max_capacity_skips_courses_without_max(self):
        """Kurse ohne max_capacity werden vom Maximum-Filter nicht ausgeschlossen."""
        visible = filter_selections(_selections(), SelectionFilter(max_capacity=50))
        ids = [s.course_id for s in visible]
        assert 5 not in ids
        assert 7 in ids

    def test_duration_and_sessions(self):
        selections = _selections()
        assert [s.course_id for s in filter_selections(
            selections, SelectionFilter(duration_hours=3))] == [3, 10]
        assert [s.course_id for s in filter_selections(
            selections, SelectionFilter(sessions_per_week=3))] == [5]

    def test_search_term_case_insensitive(self):
        visible = filter_selections(_selections(), SelectionFilter(search_term="CALCULUS"))
        assert [s.course_id for s in visible] == [3, 5]

    def test_adding_criterion_never_grows_result(self):
        """Jedes zusätzliche Kriterium verkleinert oder erhält die Ergebnismenge."""
        selections = _selections()
        steps = [
            SelectionFilter(),
            SelectionFilter(subject="Math"),
            SelectionFilter(subject="Math", min_capacity=30),
            SelectionFilter(subject="Math", min_capacity=30, duration_hours=2),
            SelectionFilter(subject="Math", min_capacity=30, duration_hours=2,
                            search_term="algebra"),
        ]
        previous = None
        for criteria in steps:
            ids = {s.course_id for s in filter_selections(selections, criteria)}
            if previous is not None:
                assert ids <= previous
            previous = ids

    def test_available_subjects_first_occurrence(self):
        assert available_subjects(_selections()) == [
            "Math", "Physics", "Computer Science", "Business",
        ]

    def test_all_sentinel(self):
        assert SelectionFilter().subject == ALL


# ─── SAMMELOPERATIONEN ────────────────────────────────────────────────────────

class TestBulkOps:
    def test_select_filtered_then_deselect_all(self):
        """Auswählen der gefilterten Kurse, danach alle wieder abwählen."""
        selections = _selections()
        criteria = SelectionFilter(subject="Math", min_capacity=30)
        assert select_all_filtered(selections, criteria) == 3
        assert [s.course_id for s in selections if s.selected] == [1, 3, 5]

        deselect_all(selections)
        assert len(selections) == 10
        assert not any(s.selected for s in selections)

    def test_select_filtered_leaves_hidden_unchanged(self):
        selections = _selections()
        selections[1].selected = True  # Statistics, nicht im Filter
        select_all_filtered(selections, SelectionFilter(subject="Physics"))
        assert selections[1].selected is True
        assert [s.course_id for s in selections if s.selected] == [2, 4, 9]

    def test_duplicate_priorities_then_bulk_priority(self):
        """Prioritäten [1, 1, 2] scheitern; nach Bulk-Priorität ab 1 → [1, 2, 3]."""
        selections = _selections()[:3]
        for s, p in zip(selections, [1, 1, 2]):
            s.selected = True
            s.priority = p

        result = validate_selection(selections, "2025-08-18")
        assert not result.ok
        assert result.issue == ValidationIssue.DUPLICATE_PRIORITY

        assert apply_bulk_priority(selections, 1) == 3
        assert [s.priority for s in selections] == [1, 2, 3]
        assert validate_selection(selections, "2025-08-18").ok

    def test_bulk_priority_only_selected(self):
        selections = _selections()
        selections[0].selected = True
        selections[4].selected = True
        selections[7].selected = True
        apply_bulk_priority(selections, 5)
        assert [s.priority for s in selections if s.selected] == [5, 6, 7]
        assert selections[1].priority == 1

    def test_bulk_priority_start_below_one(self):
        with pytest.raises(ValueError):
            apply_bulk_priority(_selections(), 0)

    def test_shuffle_is_permutation(self):
        """Zufällige Prioritäten sind eine Permutation von 1..N der Auswahl."""
        selections = _selections()
        for s in selections[:6]:
            s.selected = True
        assert shuffle_priorities(selections, rng=random.Random(42)) == 6
        assert sorted(s.priority for s in selections if s.selected) == [1, 2, 3, 4, 5, 6]
        assert all(s.priority == 1 for s in selections[6:])

    def test_shuffle_reproducible_with_seed(self):
        a, b = _selections(), _selections()
        for s in a[:5] + b[:5]:
            s.selected = True
        shuffle_priorities(a, rng=random.Random(1))
        shuffle_priorities(b, rng=random.Random(1))
        assert [s.priority for s in a] == [s.priority for s in b]


# ─── SELECTION MODEL ──────────────────────────────────────────────────────────

class TestSelectionModel:
    def test_from_courses_student_count(self):
        """Teilnehmerzahl = Mindestkapazität, sonst Fallback."""
        model = SelectionModel.from_courses(_catalog(), fallback_student_count=12)
        assert model.get(1).student_count == 30
        assert model.get(7).student_count == 12
        assert len(model) == 10
        assert not model.selected()

    def test_update_validates(self):
        model = SelectionModel.from_courses(_catalog())
        model.update(2, selected=True, priority=4, student_count=25)
        s = model.get(2)
        assert (s.selected, s.priority, s.student_count) == (True, 4, 25)
        with pytest.raises(ValidationError):
            model.update(2, priority=0)

    def test_update_unknown_field(self):
        model = SelectionModel.from_courses(_catalog())
        with pytest.raises(ValueError):
            model.update(2, name="x")

    def test_get_unknown_course(self):
        with pytest.raises(KeyError):
            SelectionModel.from_courses(_catalog()).get(999)

    def test_selected_by_priority(self):
        model = SelectionModel.from_courses(_catalog())
        model.update(3, selected=True, priority=2)
        model.update(8, selected=True, priority=1)
        assert [s.course_id for s in model.selected_by_priority()] == [8, 3]

    def test_apply_preset(self):
        """Preset ersetzt die Auswahl; Priorität = Position, unbekannte IDs übersprungen."""
        model = SelectionModel.from_courses(_catalog(), fallback_student_count=20)
        model.update(9, selected=True, student_count=99)
        model.update(7, student_count=50)
        preset = SchedulePreset(name="Mix", course_ids=[5, 999, 7, 1])
        assert model.apply_preset(preset) == 3
        assert [(s.course_id, s.priority) for s in model.selected()] == [(1, 3), (5, 1), (7, 2)]
        assert model.get(7).student_count == 20
        assert model.get(5).student_count == 50
        assert not model.get(9).selected

    def test_reset(self):
        model = SelectionModel.from_courses(_catalog())
        model.update(1, selected=True, priority=5)
        model.reset()
        assert not model.selected()
        assert model.get(1).priority == 1

"""Tests für Auswahlprüfung und Serialisierung der Wochenplan-Anfrage."""

import pytest

from config.schema import RequestMode
from models.course import Course, CourseSelection
from selection.request_builder import (
    IdListRequestBuilder,
    StructuredRequestBuilder,
    request_builder_for,
    serialize_request,
)
from selection.validator import (
    ISSUE_MESSAGES,
    ScheduleValidationError,
    ValidationIssue,
    duplicate_priorities,
    validate_selection,
)


def _sel(cid, selected=True, priority=1, students=20) -> CourseSelection:
    course = Course(id=cid, name=f"Kurs {cid}", subject="Math",
                    duration_hours=2, sessions_per_week=2)
    return CourseSelection(course=course, selected=selected, priority=priority,
                           student_count=students)


# ─── PRÜFUNG ──────────────────────────────────────────────────────────────────

class TestValidateSelection:
    def test_missing_week_start_checked_first(self):
        """Fehlender Wochenbeginn wird vor allen anderen Fehlern gemeldet."""
        result = validate_selection([], None)
        assert not result.ok
        assert result.issue == ValidationIssue.MISSING_WEEK_START
        assert result.reason == ISSUE_MESSAGES[ValidationIssue.MISSING_WEEK_START]

    def test_blank_week_start(self):
        assert validate_selection([_sel(1)], "  ").issue == ValidationIssue.MISSING_WEEK_START

    def test_no_courses_selected(self):
        result = validate_selection([_sel(1, selected=False)], "2025-08-18")
        assert result.issue == ValidationIssue.NO_COURSES_SELECTED

    def test_duplicate_priority(self):
        selections = [_sel(1, priority=2), _sel(2, priority=2), _sel(3, priority=1)]
        result = validate_selection(selections, "2025-08-18")
        assert result.issue == ValidationIssue.DUPLICATE_PRIORITY
        assert result.duplicate_priorities == [2]

    def test_unselected_duplicates_ignored(self):
        """Nur ausgewählte Kurse zählen für die Eindeutigkeit."""
        selections = [_sel(1, priority=1), _sel(2, selected=False, priority=1)]
        assert validate_selection(selections, "2025-08-18").ok
        assert duplicate_priorities(selections) == []

    def test_valid_selection(self):
        result = validate_selection([_sel(1, priority=1), _sel(2, priority=2)], "2025-08-18")
        assert result.ok
        assert result.issue is None

    def test_validation_error_carries_result(self):
        result = validate_selection([], "2025-08-18")
        err = ScheduleValidationError(result)
        assert err.result is result
        assert str(err) == ISSUE_MESSAGES[ValidationIssue.NO_COURSES_SELECTED]


# ─── SERIALISIERUNG ───────────────────────────────────────────────────────────

class TestRequestBuilders:
    @pytest.fixture
    def selections(self):
        return [
            _sel(1, priority=2, students=30),
            _sel(2, selected=False),
            _sel(3, priority=1, students=15),
        ]

    def test_structured_payload(self, selections):
        """Strukturierte Anfrage: camelCase, nur ausgewählte Kurse, Katalogreihenfolge."""
        payload = StructuredRequestBuilder().payload("2025-08-18", selections)
        assert payload == {
            "weekStartDate": "2025-08-18",
            "courses": [
                {"courseId": 1, "priority": 2, "studentCount": 30},
                {"courseId": 3, "priority": 1, "studentCount": 15},
            ],
        }

    def test_id_list_payload(self, selections):
        assert IdListRequestBuilder().payload("2025-08-18", selections) == [1, 3]

    def test_endpoints(self):
        assert StructuredRequestBuilder.endpoint == "/weekly-schedule/create"
        assert IdListRequestBuilder.endpoint == "/weekly-schedule/create-professional"

    def test_builder_for_mode(self):
        assert isinstance(request_builder_for(RequestMode.STRUCTURED), StructuredRequestBuilder)
        assert isinstance(request_builder_for("id_list"), IdListRequestBuilder)

    def test_serialize_request_default_structured(self, selections):
        payload = serialize_request("2025-08-18", selections)
        assert [c["courseId"] for c in payload["courses"]] == [1, 3]

    def test_serialize_request_id_list(self, selections):
        assert serialize_request("2025-08-18", selections, RequestMode.ID_LIST) == [1, 3]

    def test_serialize_does_not_modify_selection(self, selections):
        before = [s.model_dump() for s in selections]
        serialize_request("2025-08-18", selections)
        assert [s.model_dump() for s in selections] == before

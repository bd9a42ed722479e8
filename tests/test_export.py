"""Tests für die Terminal-Ausgabe (Zeilen-Renderer und Hilfsfunktionen)."""

from export.helpers import conflict_badge, format_date_time, format_event
from export.tui_renderer import (
    render_conflict_rows,
    render_group_rows,
    render_result_rows,
    render_selection_rows,
    render_statistics_row,
)
from models.conflict import ConflictGroup, ConflictRecord, ConflictType
from models.course import Course, CourseSelection
from models.event import Event, TeacherRef
from models.room import Room
from models.schedule import ScheduleResult, ScheduledEvent
from review.controller import GroupView


def _event(eid, room="E06") -> Event:
    return Event(
        id=eid, title=f"Event {eid}", date="2025-08-19",
        start_time="08:30", end_time="09:30",
        teacher=TeacherRef(id=1, name="Dr. Smith"),
        room=Room(id=room, name=room) if room else None,
    )


class TestHelpers:
    def test_badge_colored(self):
        assert conflict_badge(ConflictType.ROOM) == "[red]ROOM[/red]"

    def test_format_event_without_room(self):
        text = format_event(_event(3, room=None))
        assert "Event 3 (ID: 3)" in text
        assert "N/A" in text

    def test_format_date_time(self):
        assert format_date_time("2025-08-19T08:30:00") == "2025-08-19 08:30"
        assert format_date_time("2025-08-19") == "2025-08-19"


class TestRenderers:
    def test_group_rows(self):
        conflict = ConflictRecord(id=1, conflict_type=ConflictType.ROOM,
                                  event1=_event(3), event2=_event(4))
        group = ConflictGroup(id="k", type=ConflictType.ROOM, resource="E06",
                              date="2025-08-19", time_range="08:30-09:30",
                              event_ids=[3, 4], conflicts=[conflict])
        rows = render_group_rows([GroupView(group=group, description="d",
                                            suggestions=["a", "b"])])
        assert rows[0][1:5] == ["E06", "2025-08-19", "08:30-09:30", "3, 4"]
        assert rows[0][6] == "• a\n• b"

    def test_conflict_rows_single_event(self):
        conflict = ConflictRecord(id=7, conflict_type=ConflictType.CAPACITY,
                                  event1=_event(5), description="Too many")
        row = render_conflict_rows([conflict])[0]
        assert row[0] == "7"
        assert "Event 5 (ID: 5)" in row[2]
        assert row[3] == "Too many"

    def test_statistics_row(self):
        row = render_statistics_row({ConflictType.ROOM: 2, ConflictType.TEACHER: 0,
                                     ConflictType.CAPACITY: 1})
        assert row[0] == "[red]ROOM[/red]: 2"
        assert len(row) == 3

    def test_selection_rows(self):
        course = Course(id=1, name="Linear Algebra", subject="Math", duration_hours=2,
                        sessions_per_week=3, min_capacity=10, max_capacity=40)
        rows = render_selection_rows([
            CourseSelection(course=course, selected=True, priority=2, student_count=25),
            CourseSelection(course=course, selected=False),
        ])
        assert rows[0][4:] == ["2h × 3", "10-40", "2", "25"]
        assert rows[1][0] == ""
        assert rows[1][6] == "—"

    def test_result_rows(self):
        result = ScheduleResult(scheduled_events=[ScheduledEvent(
            course_id=1, course_name="Linear Algebra",
            start_date_time="2025-08-18T08:30:00", end_date_time="2025-08-18T10:30:00",
            session_number=1, priority=1,
        )])
        row = render_result_rows(result)[0]
        assert row[:4] == ["Linear Algebra", "1", "1", "2025-08-18 08:30"]
        assert row[5:7] == ["—", "—"]

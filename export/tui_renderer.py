"""Tabellenzeilen für die Terminal-Ausgabe der Konflikt- und Kursansichten.

Die Funktionen liefern reine String-Zeilen; main.py baut daraus Rich-Tabellen.
"""

from typing import TYPE_CHECKING

from export.helpers import conflict_badge, format_date_time

if TYPE_CHECKING:
    from models.conflict import ConflictRecord, ConflictType
    from models.course import CourseSelection
    from models.schedule import ScheduleResult
    from review.controller import GroupView


def render_group_rows(views: list["GroupView"]) -> list[list[str]]:
    """Eine Zeile pro Gruppe: Typ, Ressource, Datum, Zeit, Events, Beschreibung, Hinweise."""
    rows: list[list[str]] = []
    for view in views:
        g = view.group
        rows.append([
            conflict_badge(g.type),
            g.resource,
            g.date,
            g.time_range,
            ", ".join(str(eid) for eid in g.event_ids),
            f"{view.description}\n[dim]{g.id}[/dim]",
            "\n".join(f"• {s}" for s in view.suggestions),
        ])
    return rows


def render_conflict_rows(conflicts: list["ConflictRecord"]) -> list[list[str]]:
    """Eine Zeile pro Einzelkonflikt (Detailansicht)."""
    rows: list[list[str]] = []
    for c in conflicts:
        events = []
        for e in c.events:
            room = e.room.name if e.room is not None else "N/A"
            events.append(
                f"{e.label} (ID: {e.id})\n{e.teacher.name} • {e.date} "
                f"{e.start_time}-{e.end_time} • {room}"
            )
        rows.append([
            str(c.id),
            conflict_badge(c.conflict_type),
            "\n".join(events) or "—",
            c.description,
        ])
    return rows


def render_statistics_row(stats: dict["ConflictType", int]) -> list[str]:
    """Zusammenfassung: "ROOM: 2", "TEACHER: 1", ..."""
    return [f"{conflict_badge(t)}: {n}" for t, n in stats.items()]


def render_selection_rows(selections: list["CourseSelection"]) -> list[list[str]]:
    """Kurskatalog mit Auswahlzustand."""
    rows: list[list[str]] = []
    for s in selections:
        c = s.course
        capacity = f"{c.min_capacity}-{c.max_capacity}" if c.max_capacity else f"≥{c.min_capacity}"
        rows.append([
            "[green]✓[/green]" if s.selected else "",
            str(c.id),
            c.name,
            c.subject,
            f"{c.duration_hours}h × {c.sessions_per_week}",
            capacity,
            str(s.priority) if s.selected else "—",
            str(s.student_count),
        ])
    return rows


def render_result_rows(result: "ScheduleResult") -> list[list[str]]:
    """Eingeplante Sitzungen eines ScheduleResult."""
    rows: list[list[str]] = []
    for e in result.scheduled_events:
        rows.append([
            e.course_name or str(e.course_id or "—"),
            str(e.session_number or "—"),
            str(e.priority or "—"),
            format_date_time(e.start_date_time),
            format_date_time(e.end_date_time),
            e.teacher.name if e.teacher else "—",
            e.room.name if e.room else "—",
            str(e.student_count or "—"),
        ])
    return rows

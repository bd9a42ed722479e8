"""Gemeinsame Hilfsfunktionen für die Terminal-Ausgabe."""

from models.conflict import ConflictType
from models.event import Event

# ─── Farben (Rich-Stilnamen) ──────────────────────────────────────────────────

CONFLICT_COLORS: dict[ConflictType, str] = {
    ConflictType.ROOM: "red",
    ConflictType.TEACHER: "magenta",
    ConflictType.CAPACITY: "yellow",
}


def conflict_color(conflict_type: ConflictType) -> str:
    return CONFLICT_COLORS.get(conflict_type, "white")


def conflict_badge(conflict_type: ConflictType) -> str:
    """Farbiges Typ-Label, z.B. "[red]ROOM[/red]"."""
    color = conflict_color(conflict_type)
    return f"[{color}]{conflict_type.value}[/{color}]"


def format_event(event: Event) -> str:
    """Einzeilige Event-Beschreibung: Titel (ID) • Lehrkraft • Datum Zeit • Raum."""
    room = event.room.name if event.room is not None else "N/A"
    return (
        f"{event.label} (ID: {event.id}) • {event.teacher.name} • "
        f"{event.date} {event.start_time}-{event.end_time} • Raum: {room}"
    )


def format_date_time(value: str) -> str:
    """"2025-08-19T08:30:00" → "2025-08-19 08:30"."""
    if "T" not in value:
        return value
    day, _, time = value.partition("T")
    return f"{day} {time[:5]}"

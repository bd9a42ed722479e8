"""Lösungshinweise für Konfliktgruppen.

Die Vorschläge sind reiner Text für die bedienende Person; hier wird
keine Maßnahme ausgewählt oder angewendet.
"""

from models.conflict import ConflictGroup, ConflictType

CONTACT_ADMIN = "Contact administrator for assistance"


def describe_group(group: ConflictGroup) -> str:
    """Kurzbeschreibung einer Gruppe, z.B. "E06 conflict between 2 events"."""
    event_count = len(group.event_ids)
    if event_count == 2:
        return f"{group.resource} conflict between 2 events"
    return (
        f"{group.resource} conflicts among {event_count} events "
        f"({len(group.conflicts)} total conflicts)"
    )


def suggest_resolutions(group: ConflictGroup) -> list[str]:
    """Mögliche Maßnahmen, endet immer mit dem Administrator-Hinweis."""
    to_move = len(group.event_ids) - 1
    suggestions: list[str] = []

    if group.type == ConflictType.ROOM:
        suggestions.append(f"Move {to_move} event(s) to different room(s)")
        suggestions.append(f"Reschedule {to_move} event(s) to different time(s)")
    elif group.type == ConflictType.TEACHER:
        suggestions.append(f"Assign different teacher(s) to {to_move} event(s)")
        suggestions.append(f"Reschedule {to_move} event(s) to different time(s)")

    suggestions.append(CONTACT_ADMIN)
    return suggestions

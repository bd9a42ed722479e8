"""Gruppierung von Server-Konflikten zu ressourcenbezogenen Konfliktgruppen.

Aus einer flachen Liste paarweiser Konflikte entsteht pro Kombination
(Typ, Ressource, Datum, Zeitspanne) genau eine ConflictGroup. Reine Funktionen
ohne I/O und ohne Zustand zwischen Aufrufen.
"""

from collections import Counter

from models.conflict import ConflictGroup, ConflictRecord, ConflictType

UNKNOWN_ROOM = "Unknown Room"
UNKNOWN_TEACHER = "Unknown Teacher"
UNKNOWN_RESOURCE = "Unknown"


def resource_name(conflict: ConflictRecord) -> str:
    """Name der doppelt belegten Ressource.

    ROOM und CAPACITY → Raum von event1, TEACHER → Lehrkraft von event1.
    Fehlende Angaben landen in einem "Unknown"-Bucket.
    """
    event = conflict.event1
    if conflict.conflict_type in (ConflictType.ROOM, ConflictType.CAPACITY):
        if event is not None and event.room is not None and event.room.name:
            return event.room.name
        return UNKNOWN_ROOM
    if conflict.conflict_type == ConflictType.TEACHER:
        if event is not None and event.teacher.name:
            return event.teacher.name
        return UNKNOWN_TEACHER
    return UNKNOWN_RESOURCE


def time_range(conflict: ConflictRecord) -> str:
    """Zeitspanne von event1 als "start-end" ("-" bei fehlendem Event)."""
    event = conflict.event1
    if event is None:
        return "-"
    return f"{event.start_time}-{event.end_time}"


def conflict_date(conflict: ConflictRecord) -> str:
    return conflict.event1.date if conflict.event1 is not None else ""


def group_key(conflict: ConflictRecord) -> str:
    """Deterministischer Gruppenschlüssel: Typ-Ressource-Datum-Start-Ende."""
    return (
        f"{conflict.conflict_type.value}-{resource_name(conflict)}-"
        f"{conflict_date(conflict)}-{time_range(conflict)}"
    )


def group_conflicts(conflicts: list[ConflictRecord]) -> list[ConflictGroup]:
    """Fasst Konflikte mit gleichem Schlüssel zu Gruppen zusammen.

    Reihenfolge der Gruppen = erstes Auftreten des Schlüssels in der Eingabe.
    event_ids ist die duplikatfreie Vereinigung von event1/event2 aller
    Mitglieder. Gruppen mit unterschiedlicher Zeitspanne werden auch dann
    nicht verschmolzen, wenn sie ein Event teilen.

    Args:
        conflicts: Konflikte in beliebiger Reihenfolge (darf leer sein).

    Returns:
        Liste der ConflictGroups.
    """
    groups: dict[str, ConflictGroup] = {}

    for conflict in conflicts:
        key = group_key(conflict)
        group = groups.get(key)
        if group is None:
            group = ConflictGroup(
                id=key,
                type=conflict.conflict_type,
                resource=resource_name(conflict),
                date=conflict_date(conflict),
                time_range=time_range(conflict),
                event_ids=[],
                conflicts=[],
            )
            groups[key] = group

        group.conflicts.append(conflict)
        for event in conflict.events:
            if event.id not in group.event_ids:
                group.event_ids.append(event.id)

    return list(groups.values())


def filter_conflicts(conflicts: list[ConflictRecord], search_term: str) -> list[ConflictRecord]:
    """Filtert Konflikte nach Lehrkraft- oder Raumname (Teilstring, ohne Groß/Klein).

    Berücksichtigt beide Events eines Konflikts. Leerer Suchbegriff → alle.
    """
    term = search_term.strip().lower()
    if not term:
        return list(conflicts)

    def matches(conflict: ConflictRecord) -> bool:
        for event in conflict.events:
            if term in event.teacher.name.lower():
                return True
            if event.room is not None and term in event.room.name.lower():
                return True
        return False

    return [c for c in conflicts if matches(c)]


def count_by_type(conflicts: list[ConflictRecord]) -> dict[ConflictType, int]:
    """Anzahl Konflikte pro Typ (alle Typen immer enthalten)."""
    counts = Counter(c.conflict_type for c in conflicts)
    return {t: counts.get(t, 0) for t in ConflictType}

"""Sammeloperationen auf der Kursauswahl.

Alle Funktionen verändern die übergebenen CourseSelection-Objekte in-place
und geben die Anzahl betroffener Einträge zurück.
"""

import random
from typing import Optional

from models.course import CourseSelection
from selection.filters import SelectionFilter, filter_selections


def select_all_filtered(
    selections: list[CourseSelection], criteria: SelectionFilter
) -> int:
    """Wählt alle aktuell sichtbaren Kurse aus. Unsichtbare bleiben unverändert."""
    visible = filter_selections(selections, criteria)
    for s in visible:
        s.selected = True
    return len(visible)


def deselect_all(selections: list[CourseSelection]) -> int:
    """Hebt die Auswahl aller Kurse auf, unabhängig vom Filter."""
    for s in selections:
        s.selected = False
    return len(selections)


def apply_bulk_priority(selections: list[CourseSelection], start: int) -> int:
    """Vergibt fortlaufende Prioritäten start, start+1, ... an ausgewählte Kurse.

    Die Reihenfolge folgt der bestehenden Listenreihenfolge; die vergebenen
    Prioritäten sind damit untereinander eindeutig.
    """
    if start < 1:
        raise ValueError(f"Start-Priorität muss ≥ 1 sein, nicht {start}.")
    selected = [s for s in selections if s.selected]
    for offset, s in enumerate(selected):
        s.priority = start + offset
    return len(selected)


def shuffle_priorities(
    selections: list[CourseSelection], rng: Optional[random.Random] = None
) -> int:
    """Verteilt eine zufällige Permutation von 1..N auf die N ausgewählten Kurse.

    Eindeutig innerhalb der Auswahl; nicht ausgewählte Kurse werden nicht
    berücksichtigt.
    """
    rng = rng or random.Random()
    selected = [s for s in selections if s.selected]
    priorities = list(range(1, len(selected) + 1))
    rng.shuffle(priorities)
    for s, priority in zip(selected, priorities):
        s.priority = priority
    return len(selected)

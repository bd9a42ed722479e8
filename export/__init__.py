"""Export-Modul: Terminal-Darstellung (Rich) für Konflikte und Kursauswahl."""

from export.tui_renderer import (
    render_conflict_rows,
    render_group_rows,
    render_result_rows,
    render_selection_rows,
    render_statistics_row,
)

__all__ = [
    "render_conflict_rows",
    "render_group_rows",
    "render_result_rows",
    "render_selection_rows",
    "render_statistics_row",
]

"""Raumplan-Client — Haupt-CLI.

Verwendung:
  raumplan setup                              Ersteinrichtung (Wizard)
  raumplan config show                        Konfiguration anzeigen
  raumplan conflicts list [--search S]        Konflikte anzeigen (gruppiert)
  raumplan conflicts list --flat              Einzelkonflikte anzeigen
  raumplan conflicts list --ignore ID         Konflikt lokal ausblenden
  raumplan conflicts detect                   Konflikterkennung auf dem Server
  raumplan conflicts reschedule <event>       Event verschieben
  raumplan conflicts change-room <event>      Event in anderen Raum verlegen
  raumplan rooms                              Räume auflisten
  raumplan courses                            Kurskatalog (mit Filtern)
  raumplan schedule presets                   Presets auflisten
  raumplan schedule create --week-start D     Wochenplan erstellen
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()
logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _make_api(ctx: click.Context):
    """Erzeugt den ApiClient aus Konfiguration und Sitzungs-Token."""
    from client.api import ApiClient
    from client.session import SessionContext

    config = ctx.obj["config"]
    return ApiClient(
        config.api.base_url,
        session_context=SessionContext(token=ctx.obj.get("token")),
        timeout_seconds=config.api.timeout_seconds,
    )


def _abort(message: str) -> None:
    console.print(f"[red]{escape(message)}[/red]")
    sys.exit(1)


def _parse_id(value: str) -> Union[int, str]:
    """Server-IDs sind meist numerisch; alles andere bleibt String."""
    return int(value) if value.isdigit() else value


# ─── SETUP ────────────────────────────────────────────────────────────────────

@click.command("setup")
@click.pass_context
def cmd_setup(ctx: click.Context):
    """Ersteinrichtung: Client-Konfiguration mit dem Setup-Wizard anlegen."""
    from config.wizard import run_wizard

    mgr = ctx.obj["manager"]
    if not mgr.first_run_check():
        console.print(
            "[yellow]Eine Konfiguration existiert bereits.[/yellow]\n"
            f"Datei: {mgr.path}"
        )
        if not click.confirm("Trotzdem neu einrichten?", default=False):
            return

    config = run_wizard()
    if config is not None:
        mgr.save(config)
        console.print("[bold green]Einrichtung abgeschlossen![/bold green]")
        console.print("Weiter mit [bold]raumplan conflicts list[/bold].")


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen."""


@cmd_config.command("show")
@click.pass_context
def config_show(ctx: click.Context):
    """Zeigt die aktive Konfiguration an."""
    from config.wizard import show_config

    mgr = ctx.obj["manager"]
    source = str(mgr.path) if not mgr.first_run_check() else "Defaults (keine Datei)"
    console.print(Panel(f"[bold]Quelle:[/bold] {source}", title="Konfiguration",
                        border_style="cyan"))
    show_config(ctx.obj["config"])


# ─── CONFLICTS ────────────────────────────────────────────────────────────────

@click.group("conflicts")
def cmd_conflicts():
    """Konflikte anzeigen, erkennen und auflösen."""


def _print_conflicts(controller) -> None:
    from export.tui_renderer import (
        render_conflict_rows,
        render_group_rows,
        render_statistics_row,
    )

    console.print("  ".join(render_statistics_row(controller.statistics())))
    if controller.notice:
        console.print(f"[yellow]{controller.notice}[/yellow]")

    filtered = controller.filtered_conflicts
    if not filtered:
        if controller.search_term:
            console.print("[dim]Keine passenden Konflikte. Suchbegriff anpassen.[/dim]")
        else:
            console.print("[green]Keine Konflikte gefunden.[/green] "
                          "Alle Events sind konfliktfrei eingeplant.")
        return

    if controller.grouped_view:
        table = Table(title="Konfliktgruppen", box=box.ROUNDED, show_lines=True)
        table.add_column("Typ", width=9)
        table.add_column("Ressource", style="bold")
        table.add_column("Datum")
        table.add_column("Zeit")
        table.add_column("Events")
        table.add_column("Beschreibung")
        table.add_column("Lösungshinweise")
        for row in render_group_rows(controller.group_views()):
            table.add_row(*row)
    else:
        table = Table(title="Konflikte", box=box.ROUNDED, show_lines=True)
        table.add_column("ID", width=6)
        table.add_column("Typ", width=9)
        table.add_column("Events")
        table.add_column("Beschreibung")
        for row in render_conflict_rows(filtered):
            table.add_row(*row)
    console.print(table)


def _make_controller(ctx: click.Context, flat: bool = False):
    from review.controller import ConflictReviewController

    config = ctx.obj["config"]
    return ConflictReviewController(
        _make_api(ctx), grouped_view=config.review.grouped_view and not flat
    )


@cmd_conflicts.command("list")
@click.option("--search", "-s", default="", help="Filter nach Lehrkraft oder Raum.")
@click.option("--flat", is_flag=True, default=False, help="Einzelkonflikte statt Gruppen.")
@click.option("--detect", "run_detect", is_flag=True, default=False,
              help="Vorher die Erkennung auf dem Server ausführen.")
@click.option("--ignore", "ignore_ids", multiple=True,
              help="Konflikt-ID lokal ausblenden (mehrfach).")
@click.option("--ignore-group", "ignore_groups", multiple=True,
              help="Alle Konflikte einer Gruppe (Gruppenschlüssel) ausblenden.")
@click.pass_context
def conflicts_list(ctx: click.Context, search: str, flat: bool, run_detect: bool,
                   ignore_ids: tuple, ignore_groups: tuple):
    """Zeigt die aktuellen Konflikte an."""
    controller = _make_controller(ctx, flat=flat)
    ok = controller.detect() if run_detect else controller.load()
    if not ok:
        _abort(controller.error)

    for group_id in ignore_groups:
        n = controller.ignore_group(group_id)
        if n:
            console.print(f"[dim]Gruppe '{group_id}' ausgeblendet ({n} Konflikte)[/dim]")
        else:
            console.print(f"[yellow]Gruppe '{group_id}' nicht gefunden.[/yellow]")
    for conflict_id in ignore_ids:
        if controller.ignore(_parse_id(conflict_id)):
            console.print(f"[dim]Konflikt {conflict_id} ausgeblendet[/dim]")
        else:
            console.print(f"[yellow]Konflikt {conflict_id} nicht gefunden.[/yellow]")

    controller.set_search(search)
    _print_conflicts(controller)


@cmd_conflicts.command("detect")
@click.pass_context
def conflicts_detect(ctx: click.Context):
    """Startet die Konflikterkennung auf dem Server."""
    controller = _make_controller(ctx)
    console.print("[bold]Konflikterkennung läuft...[/bold]")
    if not controller.detect():
        _abort(controller.error)
    n = len(controller.conflicts)
    if n:
        console.print(f"[green]✓[/green] Erkennung abgeschlossen: {n} Konflikte.")
    _print_conflicts(controller)


def _apply_remedy(ctx: click.Context, event_id: str, action) -> None:
    from client.errors import ApiError
    from export.helpers import format_event

    controller = _make_controller(ctx)
    if not controller.load():
        _abort(controller.error)
    eid = _parse_id(event_id)
    try:
        console.print(f"[bold]Event:[/bold] {format_event(controller.find_event(eid))}")
        updated = action(controller, eid)
    except ValueError as e:
        _abort(str(e))
    except ApiError as e:
        _abort(f"Änderung fehlgeschlagen: {e.message}")
    console.print(f"[green]✓[/green] Neu: {format_event(updated)}")
    if controller.error:
        console.print(f"[red]{escape(controller.error)}[/red]")
    _print_conflicts(controller)


@cmd_conflicts.command("reschedule")
@click.argument("event_id")
@click.option("--date", "new_date", required=True, help="Neues Datum (YYYY-MM-DD).")
@click.option("--start", "start_time", required=True, help="Beginn (HH:MM).")
@click.option("--end", "end_time", required=True, help="Ende (HH:MM).")
@click.pass_context
def conflicts_reschedule(ctx: click.Context, event_id: str, new_date: str,
                         start_time: str, end_time: str):
    """Verschiebt ein Event eines Konflikts und erkennt Konflikte neu."""
    _apply_remedy(
        ctx, event_id,
        lambda c, eid: c.reschedule(eid, new_date, start_time, end_time),
    )


@cmd_conflicts.command("change-room")
@click.argument("event_id")
@click.option("--room", "room_id", required=True, help="ID des Zielraums.")
@click.pass_context
def conflicts_change_room(ctx: click.Context, event_id: str, room_id: str):
    """Verlegt ein Event eines Konflikts in einen anderen Raum."""
    _apply_remedy(ctx, event_id, lambda c, eid: c.change_room(eid, _parse_id(room_id)))


# ─── ROOMS ────────────────────────────────────────────────────────────────────

@click.command("rooms")
@click.pass_context
def cmd_rooms(ctx: click.Context):
    """Listet alle Räume (Ziel für change-room)."""
    from client.errors import ApiError

    try:
        rooms = _make_api(ctx).rooms.get_all()
    except ApiError as e:
        _abort(f"Räume konnten nicht geladen werden: {e.message}")

    table = Table(title="Räume", box=box.ROUNDED)
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("Kapazität")
    table.add_column("Ort")
    for r in rooms:
        table.add_row(str(r.id), r.name, str(r.capacity or "—"), r.location or "—")
    console.print(table)


# ─── COURSES / SCHEDULE ───────────────────────────────────────────────────────

def _filter_options(f):
    """Gemeinsame Filter-Optionen für courses und schedule create."""
    options = [
        click.option("--subject", default="All", help="Fach (All = alle)."),
        click.option("--min-capacity", type=int, default=0,
                     help="Mindestkapazität des Kurses ≥ Wert."),
        click.option("--max-capacity", type=int, default=None,
                     help="Maximalkapazität des Kurses ≤ Wert."),
        click.option("--duration", type=int, default=None, help="Dauer in Stunden."),
        click.option("--sessions", type=int, default=None, help="Sitzungen pro Woche."),
        click.option("--search", default="", help="Teilstring im Kursnamen."),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def _build_filter(subject, min_capacity, max_capacity, duration, sessions, search):
    from selection.filters import ALL, SelectionFilter

    return SelectionFilter(
        subject=subject,
        min_capacity=min_capacity,
        max_capacity=max_capacity,
        duration_hours=duration if duration is not None else ALL,
        sessions_per_week=sessions if sessions is not None else ALL,
        search_term=search,
    )


def _make_creator(ctx: click.Context, mode: Optional[str] = None):
    from config.schema import RequestMode
    from selection.creator import ScheduleCreator
    from selection.request_builder import request_builder_for

    sc = ctx.obj["config"].scheduling
    request_mode = RequestMode(mode.replace("-", "_")) if mode else sc.request_mode
    return ScheduleCreator(
        _make_api(ctx),
        builder=request_builder_for(request_mode),
        default_priority=sc.default_priority,
        fallback_student_count=sc.fallback_student_count,
    )


def _load_catalog(creator) -> None:
    from client.errors import ApiError
    from pydantic import ValidationError

    try:
        creator.load_catalog()
    except ApiError as e:
        _abort(f"Kurskatalog konnte nicht geladen werden: {e.message}")
    except ValidationError as e:
        _abort(f"Kurskatalog enthält ungültige Einträge: {e}")


def _print_selections(selections, title: str) -> None:
    from export.tui_renderer import render_selection_rows

    table = Table(title=title, box=box.ROUNDED)
    for col in ("", "ID", "Kurs", "Fach", "Umfang", "Kapazität", "Prio", "Teiln."):
        table.add_column(col)
    for row in render_selection_rows(selections):
        table.add_row(*row)
    console.print(table)


@click.command("courses")
@_filter_options
@click.pass_context
def cmd_courses(ctx: click.Context, subject, min_capacity, max_capacity, duration,
                sessions, search):
    """Zeigt den Kurskatalog (gefiltert)."""
    creator = _make_creator(ctx)
    _load_catalog(creator)
    creator.criteria = _build_filter(subject, min_capacity, max_capacity, duration,
                                     sessions, search)
    visible = creator.visible()
    _print_selections(visible, f"Kurse ({len(visible)} von {len(creator.model)})")
    console.print(f"[dim]Fächer: {', '.join(creator.subjects())}[/dim]")


@click.group("schedule")
def cmd_schedule():
    """Wochenpläne aus einer Kursauswahl erstellen."""


@cmd_schedule.command("presets")
@click.pass_context
def schedule_presets(ctx: click.Context):
    """Listet die konfigurierten Presets auf."""
    presets = ctx.obj["config"].scheduling.presets
    if not presets:
        console.print("[dim]Keine Presets konfiguriert.[/dim]")
        return
    table = Table(title="Presets", box=box.ROUNDED)
    table.add_column("Name", style="bold")
    table.add_column("Beschreibung")
    table.add_column("Kurse")
    for p in presets:
        table.add_row(p.name, p.description, ", ".join(str(c) for c in p.course_ids))
    console.print(table)


def _parse_course_arg(value: str) -> tuple:
    """"ID[:PRIO[:TEILNEHMER]]" → (id, prio|None, teilnehmer|None)."""
    parts = value.split(":")
    if not parts[0] or len(parts) > 3:
        raise click.BadParameter(f"Ungültige Kursangabe: {value!r}")
    try:
        priority = int(parts[1]) if len(parts) > 1 and parts[1] else None
        students = int(parts[2]) if len(parts) > 2 and parts[2] else None
    except ValueError:
        raise click.BadParameter(f"Priorität/Teilnehmer müssen Zahlen sein: {value!r}")
    return _parse_id(parts[0]), priority, students


def _print_result(result) -> None:
    from export.tui_renderer import render_result_rows

    if result.scheduled_events and not result.failed_courses:
        status = "[bold green]✓ WOCHENPLAN ERSTELLT[/bold green]"
        border = "green"
    elif result.scheduled_events:
        status = "[bold yellow]⚠ TEILWEISE EINGEPLANT[/bold yellow]"
        border = "yellow"
    else:
        status = "[bold red]✗ KEINE SITZUNG EINGEPLANT[/bold red]"
        border = "red"
    lines = [
        status,
        f"Kurse: {result.successful_courses}/{result.total_courses} eingeplant, "
        f"{result.failed_courses} fehlgeschlagen",
        f"Sitzungen: {len(result.scheduled_events)}",
    ]
    if result.week_start_date:
        lines.append(f"Woche: {result.week_start_date} – {result.week_end_date or '?'}")
    if result.message:
        lines.append(escape(result.message))
    console.print(Panel("\n".join(lines), title="Ergebnis", border_style=border))

    if result.scheduled_events:
        table = Table(title="Eingeplante Sitzungen", box=box.ROUNDED)
        for col in ("Kurs", "Sitzung", "Prio", "Beginn", "Ende", "Lehrkraft", "Raum", "Teiln."):
            table.add_column(col)
        for row in render_result_rows(result):
            table.add_row(*row)
        console.print(table)

    for error in result.errors:
        console.print(f"  [yellow]• {escape(error)}[/yellow]")


@cmd_schedule.command("create")
@click.option("--week-start", default=None, help="Wochenbeginn (YYYY-MM-DD).")
@click.option("--course", "-c", "course_args", multiple=True,
              help="Kurs auswählen: ID[:PRIO[:TEILNEHMER]] (mehrfach).")
@click.option("--preset", default=None, help="Auswahl aus einem Preset übernehmen.")
@click.option("--select-filtered", is_flag=True, default=False,
              help="Alle Kurse auswählen, die den Filter erfüllen.")
@click.option("--bulk-priority", type=int, default=None,
              help="Fortlaufende Prioritäten ab diesem Wert vergeben.")
@click.option("--shuffle", is_flag=True, default=False,
              help="Prioritäten der Auswahl zufällig verteilen.")
@click.option("--mode", type=click.Choice(["structured", "id-list"]), default=None,
              help="Anfrageformat (Default aus Konfiguration).")
@click.option("--dry-run", is_flag=True, default=False,
              help="Anfrage nur anzeigen, nicht senden.")
@_filter_options
@click.pass_context
def schedule_create(ctx: click.Context, week_start, course_args, preset, select_filtered,
                    bulk_priority, shuffle, mode, dry_run, subject, min_capacity,
                    max_capacity, duration, sessions, search):
    """Erstellt einen Wochenplan aus der Kursauswahl."""
    from client.errors import ApiError
    from selection.validator import ScheduleValidationError

    creator = _make_creator(ctx, mode)
    _load_catalog(creator)

    if preset:
        try:
            count = creator.apply_preset(ctx.obj["config"].scheduling.get_preset(preset))
        except KeyError as e:
            _abort(str(e.args[0]))
        console.print(f"[green]✓[/green] Preset '{preset}': {count} Kurse ausgewählt")

    creator.criteria = _build_filter(subject, min_capacity, max_capacity, duration,
                                     sessions, search)
    if select_filtered:
        count = creator.select_all_filtered()
        console.print(f"[green]✓[/green] {count} gefilterte Kurse ausgewählt")

    for arg in course_args:
        course_id, priority, students = _parse_course_arg(arg)
        fields = {"selected": True}
        if priority is not None:
            fields["priority"] = priority
        if students is not None:
            fields["student_count"] = students
        try:
            creator.model.update(course_id, **fields)
        except KeyError as e:
            _abort(str(e.args[0]))
        except ValueError as e:
            _abort(f"Ungültige Angabe für Kurs {course_id}: {e}")

    if bulk_priority is not None:
        try:
            creator.apply_bulk_priority(bulk_priority)
        except ValueError as e:
            _abort(str(e))
    if shuffle:
        creator.shuffle_priorities()

    _print_selections(creator.model.selected_by_priority(), "Auswahl (nach Priorität)")

    validation = creator.validate(week_start)
    if not validation.ok:
        extra = ""
        if validation.duplicate_priorities:
            extra = f" Doppelt: {', '.join(map(str, validation.duplicate_priorities))}"
        _abort(f"{validation.reason}{extra}")

    if dry_run:
        console.print(f"[bold]POST[/bold] {creator.builder.endpoint}")
        console.print_json(data=creator.preview_request(week_start))
        return

    try:
        result = creator.submit(week_start)
    except ScheduleValidationError as e:
        _abort(str(e))
    except ApiError as e:
        _abort(f"Wochenplan konnte nicht erstellt werden: {e.message}")
    _print_result(result)


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None,
              help="Pfad zur Konfigurationsdatei.")
@click.option("--token", envvar="RAUMPLAN_TOKEN", default=None,
              help="Sitzungs-Token (oder RAUMPLAN_TOKEN).")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug-Ausgabe.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], token: Optional[str], verbose: bool):
    """Raumplan-Client: Konflikte prüfen und Wochenpläne erstellen.

    Starten Sie mit: raumplan setup
    """
    from config.manager import ConfigManager

    mgr = ConfigManager(config_path)
    try:
        config = mgr.load_or_default()
    except ValueError as e:
        _abort(str(e))

    _configure_logging("DEBUG" if verbose else config.logging.level)
    ctx.ensure_object(dict)
    ctx.obj.update({"manager": mgr, "config": config, "token": token})


def main():
    """Einstiegspunkt. Startet automatisch den Wizard beim ersten Aufruf."""
    from config.manager import ConfigManager

    if len(sys.argv) == 1 and ConfigManager().first_run_check():
        console.print(Panel(
            "[bold]Willkommen beim Raumplan-Client![/bold]\n\n"
            "Keine Konfiguration gefunden.\n"
            "Der Setup-Wizard wird jetzt gestartet...",
            border_style="cyan",
        ))
        sys.argv.append("setup")

    cli()


# Befehle registrieren
cli.add_command(cmd_setup)
cli.add_command(cmd_config)
cli.add_command(cmd_conflicts)
cli.add_command(cmd_rooms)
cli.add_command(cmd_courses)
cli.add_command(cmd_schedule)


if __name__ == "__main__":
    main()

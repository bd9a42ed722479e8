"""Setup-Wizard: legt die Client-Konfiguration interaktiv an."""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table
from rich import box

from config.defaults import default_presets
from config.schema import (
    ApiConfig,
    ClientConfig,
    LoggingConfig,
    RequestMode,
    ReviewConfig,
    SchedulingConfig,
)

console = Console()


def _header(title: str) -> None:
    console.print()
    console.print(Panel(f"[bold]{title}[/bold]", border_style="cyan"))


def show_config(config: ClientConfig) -> None:
    """Zeigt die Konfiguration als Tabellen an."""
    table = Table(title="Server", box=box.ROUNDED)
    table.add_column("Parameter", style="bold")
    table.add_column("Wert")
    table.add_row("Basis-URL", config.api.base_url)
    table.add_row("Timeout", f"{config.api.timeout_seconds}s")
    table.add_row("Log-Level", config.logging.level)
    table.add_row("Ansicht", "gruppiert" if config.review.grouped_view else "einzeln")
    console.print(table)

    sc = config.scheduling
    table2 = Table(title="Wochenplan-Editor", box=box.ROUNDED)
    table2.add_column("Parameter", style="bold")
    table2.add_column("Wert")
    table2.add_row("Anfrageformat", sc.request_mode.value)
    table2.add_row("Teilnehmer-Default", str(sc.fallback_student_count))
    table2.add_row("Start-Priorität", str(sc.default_priority))
    table2.add_row("Presets", ", ".join(p.name for p in sc.presets) or "—")
    console.print(table2)


# ─── SCHRITT 1: Server ───

def _wizard_api() -> ApiConfig:
    _header("Schritt 1 — Server")
    base_url = Prompt.ask("Basis-URL der API", default="http://localhost:8080/api")
    timeout = IntPrompt.ask("Timeout pro Anfrage (Sekunden)", default=15)
    return ApiConfig(base_url=base_url, timeout_seconds=timeout)


# ─── SCHRITT 2: Wochenplan ───

def _wizard_scheduling() -> SchedulingConfig:
    _header("Schritt 2 — Wochenplan-Editor")
    console.print("Anfrageformat: [1] strukturiert (Priorität + Teilnehmer)  "
                  "[2] nur Kurs-IDs (professional)")
    mode_input = Prompt.ask("Format wählen", default="1")
    mode = RequestMode.ID_LIST if mode_input == "2" else RequestMode.STRUCTURED
    fallback = IntPrompt.ask("Teilnehmer-Default ohne Mindestkapazität", default=20)
    presets = default_presets() if Confirm.ask("Standard-Presets übernehmen?", default=True) else []
    return SchedulingConfig(
        request_mode=mode,
        fallback_student_count=fallback,
        presets=presets,
    )


# ─── SCHRITT 3: Ansicht ───

def _wizard_review() -> tuple[ReviewConfig, LoggingConfig]:
    _header("Schritt 3 — Konfliktansicht & Logging")
    grouped = Confirm.ask("Konflikte standardmäßig gruppiert anzeigen?", default=True)
    level = Prompt.ask("Log-Level", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                       default="WARNING")
    return ReviewConfig(grouped_view=grouped), LoggingConfig(level=level)


def run_wizard() -> Optional[ClientConfig]:
    """Führt alle Schritte aus. Gibt None zurück wenn abgebrochen."""
    console.print(Panel(
        "[bold]Raumplan-Client — Einrichtung[/bold]",
        border_style="cyan",
    ))
    api = _wizard_api()
    scheduling = _wizard_scheduling()
    review, logging_config = _wizard_review()
    config = ClientConfig(api=api, scheduling=scheduling, review=review,
                          logging=logging_config)

    _header("Zusammenfassung")
    show_config(config)
    if not Confirm.ask("Konfiguration speichern?", default=True):
        console.print("[yellow]Abgebrochen.[/yellow]")
        return None
    return config

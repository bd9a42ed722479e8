from typing import Union

from pydantic import BaseModel, Field, field_validator
from enum import Enum


class RequestMode(str, Enum):
    # Strukturierte Anfrage {weekStartDate, courses:[...]}
    STRUCTURED = "structured"
    # Reine Kurs-ID-Liste für den "professional"-Endpunkt
    ID_LIST = "id_list"


# ─── SERVER ───

class ApiConfig(BaseModel):
    """Verbindung zum Reservierungs-Server."""
    # Basis-URL der REST-API (ohne abschließenden Slash)
    base_url: str = Field("http://localhost:8080/api",
        description="Basis-URL der REST-API")
    # Timeout pro Anfrage in Sekunden
    timeout_seconds: int = Field(15, ge=1, le=300,
        description="Timeout pro Anfrage (Sekunden)")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base_url muss mit http:// oder https:// beginnen: {v!r}")
        return v.rstrip("/")


# ─── WOCHENPLAN-EDITOR ───

class SchedulePreset(BaseModel):
    """Vordefinierte Kursauswahl für häufige Szenarien."""
    # Anzeigename, z.B. "Mathematics & Physics"
    name: str
    # Kurzbeschreibung
    description: str = ""
    # Kurs-IDs in Prioritätsreihenfolge (erste = Priorität 1)
    course_ids: list[Union[int, str]] = Field(default_factory=list)


class SchedulingConfig(BaseModel):
    """Einstellungen für die Wochenplan-Erstellung."""
    # Welches Anfrageformat / welcher Endpunkt verwendet wird
    request_mode: RequestMode = Field(RequestMode.STRUCTURED,
        description="structured = /weekly-schedule/create, id_list = create-professional")
    # Teilnehmerzahl, wenn ein Kurs keine Mindestkapazität hat
    fallback_student_count: int = Field(20, ge=1,
        description="Teilnehmer-Default ohne Mindestkapazität")
    # Start-Priorität neu geladener Kurse
    default_priority: int = Field(1, ge=1,
        description="Priorität neu geladener Kurse")
    # Vordefinierte Kursauswahlen
    presets: list[SchedulePreset] = Field(default_factory=list)

    def get_preset(self, name: str) -> SchedulePreset:
        for p in self.presets:
            if p.name == name:
                return p
        raise KeyError(
            f"Preset '{name}' nicht gefunden. Verfügbar: {[p.name for p in self.presets]}"
        )


# ─── KONFLIKTANSICHT ───

class ReviewConfig(BaseModel):
    """Einstellungen der Konfliktansicht."""
    # Gruppierte Ansicht als Standard (sonst Einzelkonflikte)
    grouped_view: bool = Field(True,
        description="Gruppierte Ansicht als Standard")


# ─── LOGGING ───

class LoggingConfig(BaseModel):
    """Log-Ausgabe des Clients."""
    level: str = Field("WARNING", description="DEBUG, INFO, WARNING oder ERROR")

    @field_validator("level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            raise ValueError(f"Unbekanntes Log-Level: {v}")
        return v


# ─── GESAMT-CONFIG ───

class ClientConfig(BaseModel):
    """Gesamtkonfiguration des Clients."""
    # Server-Verbindung
    api: ApiConfig = Field(default_factory=ApiConfig)
    # Wochenplan-Editor
    scheduling: SchedulingConfig = Field(default_factory=SchedulingConfig)
    # Konfliktansicht
    review: ReviewConfig = Field(default_factory=ReviewConfig)
    # Logging
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

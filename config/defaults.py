from config.schema import (
    ApiConfig,
    ClientConfig,
    ReviewConfig,
    SchedulePreset,
    SchedulingConfig,
)

# Teilnehmerzahl für Kurse ohne Mindestkapazität
FALLBACK_STUDENT_COUNT = 20


def default_presets() -> list[SchedulePreset]:
    """Standard-Presets des Wochenplan-Editors.

    Die Kurs-IDs entsprechen den Demo-Daten des Servers (IDs 1-20,
    je fünf Kurse pro Schwerpunkt).
    """
    return [
        SchedulePreset(
            name="Computer Science Intensive",
            description="Core CS courses for intensive week",
            course_ids=[1, 2, 3, 4, 5],
        ),
        SchedulePreset(
            name="Mathematics & Physics",
            description="STEM foundation courses",
            course_ids=[6, 7, 8, 9, 10],
        ),
        SchedulePreset(
            name="Business Essentials",
            description="Core business administration courses",
            course_ids=[11, 12, 13, 14, 15],
        ),
        SchedulePreset(
            name="Liberal Arts Mix",
            description="Diverse humanities and social sciences",
            course_ids=[16, 17, 18, 19, 20],
        ),
    ]


def default_client_config() -> ClientConfig:
    """Vollständige Default-Konfiguration (lokaler Server, strukturierte Anfragen)."""
    return ClientConfig(
        api=ApiConfig(),
        scheduling=SchedulingConfig(
            fallback_student_count=FALLBACK_STUDENT_COUNT,
            presets=default_presets(),
        ),
        review=ReviewConfig(grouped_view=True),
    )

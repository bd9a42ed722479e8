"""ScheduleCreator – Ablauf des Wochenplan-Editors.

Katalog laden → filtern / Sammeloperationen → prüfen → serialisieren →
an den Scheduling-Service senden.
"""

import logging
import random
from typing import TYPE_CHECKING, Any, Optional

from pydantic import ValidationError

from client.errors import ApiError
from models.schedule import ScheduleResult
from selection import bulk_ops
from selection.filters import SelectionFilter, available_subjects, filter_selections
from selection.model import SelectionModel
from selection.request_builder import RequestBuilder, StructuredRequestBuilder
from selection.validator import ScheduleValidationError, ValidationResult, validate_selection

if TYPE_CHECKING:
    from client.api import ApiClient
    from config.schema import SchedulePreset

logger = logging.getLogger(__name__)


class ScheduleCreator:
    """Hält Auswahl und Filter eines Wochenplan-Editors."""

    def __init__(
        self,
        api: "ApiClient",
        builder: Optional[RequestBuilder] = None,
        default_priority: int = 1,
        fallback_student_count: int = 20,
    ) -> None:
        self.api = api
        self.builder = builder or StructuredRequestBuilder()
        self.default_priority = default_priority
        self.fallback_student_count = fallback_student_count
        self.model = SelectionModel(fallback_student_count=fallback_student_count)
        self.criteria = SelectionFilter()

    # ─── Katalog ───

    def load_catalog(self) -> SelectionModel:
        """Lädt den Kurskatalog und legt die Auswahl neu an."""
        courses = self.api.courses.get_all()
        self.model = SelectionModel.from_courses(
            courses,
            default_priority=self.default_priority,
            fallback_student_count=self.fallback_student_count,
        )
        logger.info(f"Kurskatalog geladen: {len(courses)} Kurse")
        return self.model

    def subjects(self) -> list[str]:
        return available_subjects(self.model.selections)

    # ─── Filter & Sammeloperationen ───

    def visible(self) -> list:
        """Aktuell sichtbare Kurse gemäß self.criteria."""
        return filter_selections(self.model.selections, self.criteria)

    def select_all_filtered(self) -> int:
        return bulk_ops.select_all_filtered(self.model.selections, self.criteria)

    def deselect_all(self) -> int:
        return bulk_ops.deselect_all(self.model.selections)

    def apply_bulk_priority(self, start: int) -> int:
        return bulk_ops.apply_bulk_priority(self.model.selections, start)

    def shuffle_priorities(self, rng: Optional[random.Random] = None) -> int:
        return bulk_ops.shuffle_priorities(self.model.selections, rng=rng)

    def apply_preset(self, preset: "SchedulePreset") -> int:
        return self.model.apply_preset(preset)

    def reset(self) -> None:
        self.model.reset(default_priority=self.default_priority)
        self.criteria = SelectionFilter()

    # ─── Prüfen & Absenden ───

    def validate(self, week_start_date: Optional[str]) -> ValidationResult:
        return validate_selection(self.model.selections, week_start_date)

    def preview_request(self, week_start_date: str) -> Any:
        """Payload, wie er gesendet würde (ohne Prüfung, ohne Netzwerk)."""
        return self.builder.payload(week_start_date, self.model.selections)

    def submit(self, week_start_date: Optional[str]) -> ScheduleResult:
        """Prüft die Auswahl und sendet sie an den Scheduling-Service.

        Raises:
            ScheduleValidationError: Auswahl ungültig (es wird nichts gesendet).
            ApiError: Server-/Transportfehler.
        """
        result = self.validate(week_start_date)
        if not result.ok:
            raise ScheduleValidationError(result)

        payload = self.builder.payload(week_start_date, self.model.selections)
        logger.info(
            f"Sende Wochenplan-Anfrage ({self.builder.mode.value}) "
            f"mit {len(self.model.selected())} Kursen an {self.builder.endpoint}"
        )
        data = self.api.weekly_schedule.create(self.builder.endpoint, payload)
        try:
            schedule = self.builder.parse_result(data, payload)
        except ValidationError as e:
            raise ApiError(f"Unerwartete Antwort von {self.builder.endpoint}: {e}") from e
        if schedule.failed_courses:
            logger.warning(
                f"{schedule.failed_courses} von {schedule.total_courses} Kursen "
                f"konnten nicht eingeplant werden"
            )
        return schedule

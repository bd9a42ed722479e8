"""Kursauswahl, Filter, Prüfung und Serialisierung für Wochenplan-Anfragen."""

from .bulk_ops import apply_bulk_priority, deselect_all, select_all_filtered, shuffle_priorities
from .creator import ScheduleCreator
from .filters import ALL, SelectionFilter, available_subjects, filter_selections
from .model import SelectionModel
from .request_builder import (
    IdListRequestBuilder,
    RequestBuilder,
    StructuredRequestBuilder,
    request_builder_for,
    serialize_request,
)
from .validator import (
    ScheduleValidationError,
    ValidationIssue,
    ValidationResult,
    validate_selection,
)

__all__ = [
    "apply_bulk_priority",
    "deselect_all",
    "select_all_filtered",
    "shuffle_priorities",
    "ScheduleCreator",
    "ALL",
    "SelectionFilter",
    "available_subjects",
    "filter_selections",
    "SelectionModel",
    "IdListRequestBuilder",
    "RequestBuilder",
    "StructuredRequestBuilder",
    "request_builder_for",
    "serialize_request",
    "ScheduleValidationError",
    "ValidationIssue",
    "ValidationResult",
    "validate_selection",
]

"""Konfliktansicht: Laden, Gruppieren und Auflösen von Konflikten."""

from .controller import ConflictReviewController, GroupView, DETECTION_UNAVAILABLE

__all__ = ["ConflictReviewController", "GroupView", "DETECTION_UNAVAILABLE"]

"""Scoring of model predictions on the test set."""

from __future__ import annotations

from .harness import THRESHOLD, PredictFn, evaluate, threshold

__all__ = [
    "THRESHOLD",
    "PredictFn",
    "evaluate",
    "threshold",
]

"""Progress reporting for tabeval."""

from __future__ import annotations

from .reporter import (
    CallbackProgressReporter,
    NullProgressReporter,
    ProgressCallback,
    ProgressReporter,
    ProgressUpdate,
    RunStage,
)

__all__ = [
    "RunStage",
    "ProgressUpdate",
    "ProgressCallback",
    "ProgressReporter",
    "CallbackProgressReporter",
    "NullProgressReporter",
]

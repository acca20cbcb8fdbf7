"""Core types and protocols for tabeval.

This module contains the data model, the accuracy metric, and the protocols
used throughout the library.
"""

from __future__ import annotations

from .metrics import AccuracyMetric
from .protocols import Learner, Model, PipelineContext, PipelineStage
from .types import (
    CSV_HEADER,
    AttributeDescriptor,
    CategoricalAttribute,
    ContinuousAttribute,
    EncodedRecord,
    EvaluationReport,
    EvaluationResult,
    Partition,
    RawRecord,
    RunResult,
    Schema,
)

__all__ = [
    # Metrics
    "AccuracyMetric",
    # Types
    "RawRecord",
    "AttributeDescriptor",
    "CategoricalAttribute",
    "ContinuousAttribute",
    "Schema",
    "EncodedRecord",
    "Partition",
    "EvaluationResult",
    "EvaluationReport",
    "RunResult",
    "CSV_HEADER",
    # Protocols
    "Learner",
    "Model",
    "PipelineStage",
    "PipelineContext",
]

"""Pipeline module for run orchestration.

This module provides the Pipeline class and the stages it chains.
"""

from __future__ import annotations

from .orchestrator import Pipeline, PipelineBuilder
from .stages import (
    DEFAULT_STAGES,
    TRAIN_ONLY_STAGES,
    EncodingStage,
    EvaluationStage,
    LoadStage,
    ParseStage,
    PartitionStage,
    RawPartitionStage,
    ReportingStage,
    SchemaInferenceStage,
    TrainingStage,
)

__all__ = [
    # Main orchestrator
    "Pipeline",
    "PipelineBuilder",
    # Stages
    "LoadStage",
    "ParseStage",
    "RawPartitionStage",
    "SchemaInferenceStage",
    "EncodingStage",
    "PartitionStage",
    "TrainingStage",
    "EvaluationStage",
    "ReportingStage",
    "DEFAULT_STAGES",
    "TRAIN_ONLY_STAGES",
]

"""Protocols and shared interfaces for the pipeline stages.

This module defines the PipelineStage protocol that all pipeline stages implement,
the PipelineContext dataclass that flows through the pipeline, and the contract
of the external learning component (Learner and Model).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..config import PipelineConfig
    from ..progress import ProgressReporter
    from .types import (
        EncodedRecord,
        EvaluationReport,
        Partition,
        RawRecord,
        RunResult,
        Schema,
    )


@runtime_checkable
class Model(Protocol):
    """Trained model handed back by a Learner.

    ``summary()`` and ``node_count()`` are optional diagnostics; the pipeline
    reports them without interpreting them.
    """

    def predict(self, input: Sequence[float]) -> float:
        """Return the model output for one encoded input vector."""
        ...


class Learner(Protocol):
    """External learning component."""

    @property
    def parameters(self) -> Mapping[str, Any]:
        """Configuration knobs, as normalized by the learner."""
        ...

    def train(self, training_set: Sequence[EncodedRecord]) -> Model:
        """Fit a model on the training set."""
        ...


@dataclass
class PipelineContext:
    """Context object that flows through pipeline stages.

    Each stage reads what the previous stage set and fills in its own fields.
    """

    # Configuration (always present)
    config: PipelineConfig
    reporter: ProgressReporter
    learner: Learner

    # Raw text (set by load stage)
    content: str | None = None

    # Parsed rows (set by parse stage)
    header: tuple[str, ...] | None = None
    rows: list[RawRecord] | None = None

    # Raw split, only with TRAIN_ONLY inference (set by raw partition stage)
    raw_partition: Partition[RawRecord] | None = None

    # Descriptors (set by schema inference stage)
    schema: Schema | None = None

    # Encoded records (set by encoding stage)
    dataset: list[EncodedRecord] | None = None

    # Encoded split (set by partition stage, or by encoding under TRAIN_ONLY)
    partition: Partition[EncodedRecord] | None = None

    # Training output (set by training stage)
    model: Model | None = None
    learner_params: dict[str, Any] | None = None

    # Evaluation output (set by evaluation stage)
    evaluation: EvaluationReport | None = None

    # Final result (set by reporting stage)
    result: RunResult | None = None


class PipelineStage(Protocol):
    """Protocol for pipeline stages.

    Each stage takes a PipelineContext, performs its work, and returns
    the (possibly modified) context. Stages are awaited strictly one after
    another.
    """

    async def execute(self, context: PipelineContext) -> PipelineContext:
        """Execute the pipeline stage.

        Args:
            context: The current pipeline context.

        Returns:
            The updated pipeline context.

        Raises:
            TabEvalError subclasses depending on the stage.
        """
        ...

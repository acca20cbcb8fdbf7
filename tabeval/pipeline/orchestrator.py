"""Encode/train/evaluate pipeline orchestrator.

This module provides the Pipeline class that runs the stages of a run as
one fail-fast asynchronous chain.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from ..config import InferenceScope, PipelineConfig
from ..core import Learner, PipelineContext, PipelineStage, RunResult
from ..learners import create_learner
from ..progress import (
    CallbackProgressReporter,
    NullProgressReporter,
    ProgressCallback,
    ProgressReporter,
    ProgressUpdate,
    RunStage,
)
from .stages import DEFAULT_STAGES, TRAIN_ONLY_STAGES

if TYPE_CHECKING:
    from typing import Self

logger = logging.getLogger(__name__)


class Pipeline:
    """Encode/train/evaluate pipeline.

    With full-dataset inference (the default) the stages are:
    1. LoadStage - Reads the dataset file
    2. ParseStage - Parses it into positional string records
    3. SchemaInferenceStage - Builds one descriptor per column from all rows
    4. EncodingStage - Encodes every record
    5. PartitionStage - Shuffles and splits into train/test sets
    6. TrainingStage - Hands the training set to the learner
    7. EvaluationStage - Scores the model on the test set
    8. ReportingStage - Logs the summary and per-record results

    With train-only inference the raw records are split right after parsing
    and descriptors are built from the training rows.

    Usage:
        result = Pipeline.builder() \\
            .config(config) \\
            .on_progress(lambda u: print(u.message)) \\
            .build() \\
            .run_sync()
    """

    def __init__(
        self,
        config: PipelineConfig,
        learner: Learner | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> None:
        """Initialize pipeline.

        Use Pipeline.builder() for a fluent interface.
        """
        self._config = config
        self._learner: Learner = learner or create_learner(
            config.learner, config.learner_params, config.random_seed
        )
        self._reporter: ProgressReporter = (
            CallbackProgressReporter(progress_callback)
            if progress_callback
            else NullProgressReporter()
        )

        stage_types = (
            TRAIN_ONLY_STAGES
            if config.inference_scope is InferenceScope.TRAIN_ONLY
            else DEFAULT_STAGES
        )
        self._stages: list[PipelineStage] = [stage() for stage in stage_types]

    @classmethod
    def builder(cls) -> PipelineBuilder:
        """Create a builder for Pipeline."""
        return PipelineBuilder()

    @property
    def stages(self) -> list[PipelineStage]:
        return list(self._stages)

    async def run(self) -> RunResult:
        """Run every stage in order.

        A failing stage stops the run: no later stage executes, a FAILED
        update is reported, and the error is re-raised unchanged.

        Returns:
            RunResult with accuracy and per-record results.

        Raises:
            DatasetIOError: If the dataset file cannot be read.
            ParseError: If a row or continuous value is malformed.
            DegenerateScaleError: If a continuous attribute has a maximum of 0.
            UnknownCategoryError: If a value is missing from its class list.
            EmptyTestSetError: If the test set is empty.
        """
        context = PipelineContext(
            config=self._config,
            reporter=self._reporter,
            learner=self._learner,
        )

        try:
            for stage in self._stages:
                context = await stage.execute(context)
        except Exception as e:
            logger.error("Run failed: %s", e)
            self._report(RunStage.FAILED, 0.0, f"Run failed: {e}")
            raise

        assert context.result is not None
        self._report(RunStage.COMPLETE, 1.0, "Run complete!")
        return context.result

    def run_sync(self) -> RunResult:
        """Run the pipeline on a fresh event loop."""
        return asyncio.run(self.run())

    def _report(self, stage: RunStage, progress: float, message: str) -> None:
        """Report progress."""
        self._reporter.report(
            ProgressUpdate(
                stage=stage,
                progress=progress,
                message=message,
            )
        )


class PipelineBuilder:
    """Builder for Pipeline with fluent interface."""

    def __init__(self) -> None:
        self._config: PipelineConfig | None = None
        self._learner: Learner | None = None
        self._progress_callback: ProgressCallback | None = None

    def config(self, config: PipelineConfig) -> Self:
        """Set the pipeline configuration."""
        self._config = config
        return self

    def learner(self, learner: Learner) -> Self:
        """Set the learning component."""
        self._learner = learner
        return self

    def on_progress(self, callback: ProgressCallback) -> Self:
        """Set the progress callback."""
        self._progress_callback = callback
        return self

    def build(self) -> Pipeline:
        """Build the Pipeline."""
        if self._config is None:
            raise ValueError("config is required")

        return Pipeline(
            config=self._config,
            learner=self._learner,
            progress_callback=self._progress_callback,
        )

"""Pipeline stages implementing the PipelineStage protocol.

Each stage is a single-responsibility class that operates on PipelineContext,
performing one step of the encode/train/evaluate run. Only the load stage
suspends; the others are synchronous scans behind an async interface.
"""

from __future__ import annotations

import logging

from ..core import Partition, PipelineContext, RunResult
from ..dataset import parse_records, read_dataset_file
from ..encoding import RecordEncoder
from ..errors import PipelineStateError
from ..evaluation import evaluate
from ..partition import partition
from ..progress import ProgressUpdate, RunStage
from ..schema import infer_schema

logger = logging.getLogger(__name__)


def _report(context: PipelineContext, stage: RunStage, progress: float, message: str) -> None:
    context.reporter.report(ProgressUpdate(stage=stage, progress=progress, message=message))


class LoadStage:
    """Reads the dataset file.

    Sets on context: content
    """

    async def execute(self, context: PipelineContext) -> PipelineContext:
        """Execute load stage."""
        _report(context, RunStage.LOADING, 0.0, f"Reading {context.config.dataset_path}...")
        context.content = await read_dataset_file(context.config.dataset_path)
        return context


class ParseStage:
    """Parses the raw text into positional string records.

    Sets on context: header, rows
    """

    async def execute(self, context: PipelineContext) -> PipelineContext:
        """Execute parse stage."""
        _report(context, RunStage.PARSING, 0.10, "Parsing records...")

        if context.content is None:
            raise PipelineStateError("Load stage must run before parsing")

        context.header, context.rows = parse_records(context.content, context.config.delimiter)
        return context


class RawPartitionStage:
    """Splits the raw records before inference (train-only inference).

    Sets on context: raw_partition
    """

    async def execute(self, context: PipelineContext) -> PipelineContext:
        """Execute raw partition stage."""
        _report(context, RunStage.PARTITIONING, 0.20, "Splitting raw records...")

        if context.rows is None:
            raise PipelineStateError("Parse stage must run before partitioning")

        context.raw_partition = partition(
            context.rows,
            train_ratio=context.config.train_ratio,
            seed=context.config.random_seed,
        )
        return context


class SchemaInferenceStage:
    """Builds the attribute descriptors.

    Uses every row, or only the training rows when a raw partition exists.

    Sets on context: schema
    """

    async def execute(self, context: PipelineContext) -> PipelineContext:
        """Execute schema inference stage."""
        _report(context, RunStage.SCHEMA_INFERENCE, 0.30, "Inferring attribute descriptors...")

        if context.raw_partition is not None:
            rows = list(context.raw_partition.train)
        elif context.rows is not None:
            rows = context.rows
        else:
            raise PipelineStateError("Parse stage must run before schema inference")

        context.schema = infer_schema(rows, context.config.attribute_types)
        return context


class EncodingStage:
    """Encodes every raw record.

    Sets on context: dataset, or partition when a raw partition exists
    """

    async def execute(self, context: PipelineContext) -> PipelineContext:
        """Execute encoding stage."""
        _report(context, RunStage.ENCODING, 0.40, "Encoding records...")

        if context.schema is None:
            raise PipelineStateError("Schema inference stage must run before encoding")

        if context.schema.target.width > 2:
            logger.warning(
                "Target column has %d classes; thresholding assumes a binary target",
                context.schema.target.width,
            )

        encoder = RecordEncoder(context.schema, context.config.unseen_category_policy)

        if context.raw_partition is not None:
            context.partition = Partition(
                train=tuple(encoder.encode_all(context.raw_partition.train)),
                test=tuple(encoder.encode_all(context.raw_partition.test)),
            )
        elif context.rows is not None:
            context.dataset = encoder.encode_all(context.rows)
        else:
            raise PipelineStateError("Parse stage must run before encoding")

        return context


class PartitionStage:
    """Shuffles the encoded dataset and splits it into train and test sets.

    Sets on context: partition
    """

    async def execute(self, context: PipelineContext) -> PipelineContext:
        """Execute partition stage."""
        _report(context, RunStage.PARTITIONING, 0.50, "Splitting data...")

        if context.dataset is None:
            raise PipelineStateError("Encoding stage must run before partitioning")

        context.partition = partition(
            context.dataset,
            train_ratio=context.config.train_ratio,
            seed=context.config.random_seed,
        )
        return context


class TrainingStage:
    """Hands the training set to the learner.

    Sets on context: model, learner_params
    """

    async def execute(self, context: PipelineContext) -> PipelineContext:
        """Execute training stage."""
        _report(context, RunStage.TRAINING, 0.60, "Training model...")

        if context.partition is None:
            raise PipelineStateError("Partition stage must run before training")

        logger.info("Training started on %d records", len(context.partition.train))
        context.model = context.learner.train(context.partition.train)
        context.learner_params = dict(context.learner.parameters)
        logger.info("Training finished")

        return context


class EvaluationStage:
    """Scores the model's predictions on the test set.

    Sets on context: evaluation
    """

    async def execute(self, context: PipelineContext) -> PipelineContext:
        """Execute evaluation stage."""
        _report(context, RunStage.EVALUATION, 0.85, "Testing model...")

        if context.model is None or context.partition is None:
            raise PipelineStateError("Training stage must run before evaluation")

        context.evaluation = evaluate(context.partition.test, context.model.predict)
        return context


class ReportingStage:
    """Logs the accuracy summary and the per-record report.

    Sets on context: result
    """

    async def execute(self, context: PipelineContext) -> PipelineContext:
        """Execute reporting stage."""
        _report(context, RunStage.REPORTING, 0.95, "Reporting results...")

        if context.evaluation is None or context.schema is None or context.partition is None:
            raise PipelineStateError("Evaluation stage must run before reporting")

        summary = getattr(context.model, "summary", None)
        node_count = getattr(context.model, "node_count", None)

        result = RunResult(
            problem_number=context.config.problem_number,
            schema=context.schema,
            n_train=len(context.partition.train),
            n_test=len(context.partition.test),
            evaluation=context.evaluation,
            learner_params=context.learner_params or {},
            model_summary=summary() if callable(summary) else None,
            node_count=node_count() if callable(node_count) else None,
        )

        logger.info("Testing finished: problem %d", result.problem_number)
        for key, value in result.learner_params.items():
            logger.info("%s: %s", key, value)
        if result.model_summary is not None:
            logger.info("Model structure:\n%s", result.model_summary)
        if result.node_count is not None:
            logger.info("Model nodes number: %d", result.node_count)
        logger.info("Model accuracy: %s", result.accuracy)
        logger.debug("Number of results: %d", len(result.evaluation.results))
        logger.debug("=== Results ===\n%s", result.evaluation.to_csv())

        context.result = result
        return context


# Stage order when descriptors come from the whole dataset
DEFAULT_STAGES: list[type] = [
    LoadStage,
    ParseStage,
    SchemaInferenceStage,
    EncodingStage,
    PartitionStage,
    TrainingStage,
    EvaluationStage,
    ReportingStage,
]

# Stage order when descriptors come from the training rows only
TRAIN_ONLY_STAGES: list[type] = [
    LoadStage,
    ParseStage,
    RawPartitionStage,
    SchemaInferenceStage,
    EncodingStage,
    TrainingStage,
    EvaluationStage,
    ReportingStage,
]

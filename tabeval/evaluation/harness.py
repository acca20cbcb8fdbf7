"""Evaluation of a trained model on the test set."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from ..core import AccuracyMetric, EncodedRecord, EvaluationReport, EvaluationResult

logger = logging.getLogger(__name__)

THRESHOLD = 0.5

PredictFn = Callable[[Sequence[float]], float]


def threshold(raw_output: float) -> float:
    """Map a continuous output to 1.0 above the cut-off, else 0.0."""
    return 1.0 if raw_output > THRESHOLD else 0.0


def evaluate(test_set: Sequence[EncodedRecord], predict: PredictFn) -> EvaluationReport:
    """Run ``predict`` over every test record and score the thresholded outputs.

    Neither the model nor the test set is modified.

    Args:
        test_set: Encoded held-out records.
        predict: Prediction function of the trained model.

    Returns:
        Per-record results in test-set order and the accuracy over them.

    Raises:
        EmptyTestSetError: If the test set has no records.
    """
    results: list[EvaluationResult] = []
    correct = 0

    for record in test_set:
        raw_output = float(predict(record.input))
        result = EvaluationResult(
            raw_output=raw_output,
            thresholded_output=threshold(raw_output),
            expected=record.output,
        )
        if result.correct:
            correct += 1
        results.append(result)

    accuracy = AccuracyMetric(correct=correct, total=len(results))
    logger.info(
        "Evaluated %d records: %d correct, %d incorrect",
        accuracy.total,
        correct,
        accuracy.incorrect,
    )
    return EvaluationReport(results=tuple(results), accuracy=accuracy)

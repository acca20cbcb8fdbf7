"""Data model for tabeval.

This module contains the attribute descriptors produced by schema inference,
the encoded records fed to the learner, and the evaluation/run results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from ..config import AttributeKind
from .metrics import AccuracyMetric

# One delimited-text row, fields in source column order
RawRecord = tuple[str, ...]

T = TypeVar("T")

CSV_HEADER = "outputAccurate,outputDenormalized,expected"


@dataclass(frozen=True)
class CategoricalAttribute:
    """Distinct values of a column in first-seen order."""

    index: int
    classes: tuple[str, ...]

    kind = AttributeKind.CATEGORICAL

    @property
    def width(self) -> int:
        return len(self.classes)


@dataclass(frozen=True)
class ContinuousAttribute:
    """Maximum observed value of a numeric column."""

    index: int
    max_magnitude: float

    kind = AttributeKind.CONTINUOUS

    @property
    def width(self) -> int:
        return 1


AttributeDescriptor = CategoricalAttribute | ContinuousAttribute


@dataclass(frozen=True)
class Schema:
    """Attribute descriptors for every column of a dataset.

    The last descriptor belongs to the target column. ``max_class_cardinality``
    is the largest class count over all categorical descriptors, target included.
    """

    descriptors: tuple[AttributeDescriptor, ...]
    max_class_cardinality: int = 0

    @property
    def n_columns(self) -> int:
        return len(self.descriptors)

    @property
    def target(self) -> CategoricalAttribute:
        target = self.descriptors[-1]
        assert isinstance(target, CategoricalAttribute)
        return target

    @property
    def features(self) -> tuple[AttributeDescriptor, ...]:
        return self.descriptors[:-1]

    @property
    def feature_width(self) -> int:
        """Length of every encoded input vector."""
        return sum(d.width for d in self.features)


@dataclass(frozen=True, eq=False)
class EncodedRecord:
    """Numeric form of one row.

    ``input`` is read-only; ``output`` indexes the target's class list.
    """

    input: NDArray[np.float64]
    output: int


@dataclass(frozen=True)
class Partition(Generic[T]):
    """Disjoint training and test subsets of a shuffled sequence."""

    train: tuple[T, ...]
    test: tuple[T, ...]

    def __len__(self) -> int:
        return len(self.train) + len(self.test)


@dataclass(frozen=True)
class EvaluationResult:
    """Prediction for one test record."""

    raw_output: float
    thresholded_output: float
    expected: int

    @property
    def correct(self) -> bool:
        return self.thresholded_output == self.expected


@dataclass(frozen=True)
class EvaluationReport:
    """Per-record results in test-set order plus the accuracy over them."""

    results: tuple[EvaluationResult, ...]
    accuracy: AccuracyMetric

    def to_csv(self) -> str:
        """Render the results as ``outputAccurate,outputDenormalized,expected`` lines."""
        lines = [CSV_HEADER]
        lines.extend(
            f"{_format_number(r.raw_output)},{_format_number(r.thresholded_output)},{r.expected}"
            for r in self.results
        )
        return "\n".join(lines) + "\n"

    def to_frame(self) -> pd.DataFrame:
        """Results as a DataFrame with the report's column names."""
        return pd.DataFrame(
            {
                "outputAccurate": [r.raw_output for r in self.results],
                "outputDenormalized": [r.thresholded_output for r in self.results],
                "expected": [r.expected for r in self.results],
            }
        )


@dataclass
class RunResult:
    """Everything a completed run produced.

    Attributes:
        problem_number: Run identifier from the configuration.
        schema: Descriptors the records were encoded with.
        n_train: Size of the training set.
        n_test: Size of the test set.
        learner_params: Learner knobs as reported after training.
        model_summary: Opaque structure text from the model, if any.
        node_count: Opaque unit count from the model, if any.
        evaluation: Accuracy and per-record results.
    """

    problem_number: int
    schema: Schema
    n_train: int
    n_test: int
    evaluation: EvaluationReport
    learner_params: dict[str, Any] = field(default_factory=dict)
    model_summary: str | None = None
    node_count: int | None = None

    @property
    def accuracy(self) -> float:
        return self.evaluation.accuracy.value


def _format_number(value: float) -> str:
    """Print integral floats without a fractional part."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)

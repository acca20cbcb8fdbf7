"""Accuracy metric for evaluated test sets."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import EmptyTestSetError


@dataclass(frozen=True)
class AccuracyMetric:
    """Share of test records whose thresholded prediction matched the label.

    Constructing a metric over zero records raises EmptyTestSetError, so a
    metric instance always carries a defined value.
    """

    correct: int
    total: int

    def __post_init__(self) -> None:
        if self.total == 0:
            raise EmptyTestSetError()
        if not 0 <= self.correct <= self.total:
            raise ValueError(f"correct count {self.correct} outside [0, {self.total}]")

    @property
    def incorrect(self) -> int:
        return self.total - self.correct

    @property
    def value(self) -> float:
        return self.correct / self.total

    def __float__(self) -> float:
        return self.value

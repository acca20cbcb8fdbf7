"""Shared test fixtures and utilities for tabeval tests."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest

from tabeval import (
    AttributeTypes,
    EncodedRecord,
    PipelineConfig,
    ProgressUpdate,
)

# =============================================================================
# Test Data Fixtures
# =============================================================================


@pytest.fixture
def categorical_rows() -> list[tuple[str, ...]]:
    """Ten rows with one categorical attribute and a yes/no target.

    Returns:
        Rows whose attribute classes are ["a", "b"] and target classes ["no", "yes"].
    """
    return [
        ("a", "no"),
        ("b", "yes"),
        ("a", "yes"),
        ("b", "no"),
        ("a", "no"),
        ("a", "yes"),
        ("b", "no"),
        ("b", "yes"),
        ("a", "no"),
        ("a", "yes"),
    ]


@pytest.fixture
def mixed_rows() -> list[tuple[str, ...]]:
    """Rows with continuous columns 0 and 2, categorical columns 1 and 3.

    Returns:
        Rows whose column 0 maximum is 40 and column 2 maximum is 300.
    """
    return [
        ("10", "male", "150", "0"),
        ("20", "female", "300", "1"),
        ("40", "male", "75", "1"),
        ("30", "female", "0", "0"),
        ("25", "other", "120", "1"),
    ]


@pytest.fixture
def mixed_types() -> AttributeTypes:
    """Attribute types matching mixed_rows."""
    return AttributeTypes.mixed(continuous=[0, 2], categorical=[1, 3])


def write_csv(path: Path, header: Sequence[str], rows: Sequence[Sequence[str]]) -> Path:
    """Write a header and rows as comma-separated text."""
    lines = [",".join(header)] + [",".join(row) for row in rows]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def categorical_csv(tmp_path: Path, categorical_rows) -> Path:
    """categorical_rows written to a CSV file with a header."""
    return write_csv(tmp_path / "categorical.csv", ["attr", "label"], categorical_rows)


@pytest.fixture
def mixed_csv(tmp_path: Path, mixed_rows) -> Path:
    """mixed_rows written to a CSV file with a header."""
    return write_csv(tmp_path / "mixed.csv", ["age", "sex", "chol", "target"], mixed_rows)


@pytest.fixture
def larger_csv(tmp_path: Path) -> Path:
    """Forty rows where the label equals the first attribute's class index."""
    rows = []
    for i in range(40):
        color = "red" if i % 2 == 0 else "blue"
        size = ["s", "m", "l"][i % 3]
        label = "no" if color == "red" else "yes"
        rows.append((color, size, label))
    return write_csv(tmp_path / "larger.csv", ["color", "size", "label"], rows)


# =============================================================================
# Learning Collaborator Stubs
# =============================================================================


class StubModel:
    """Model returning outputs from a function of the input."""

    def __init__(self, fn: Callable[[Sequence[float]], float]) -> None:
        self._fn = fn
        self.calls: list[list[float]] = []

    def predict(self, input: Sequence[float]) -> float:
        self.calls.append(list(input))
        return self._fn(input)

    def summary(self) -> str:
        return "stub(root)"

    def node_count(self) -> int:
        return 3


class StubLearner:
    """Learner that records its training set and returns a StubModel."""

    def __init__(
        self,
        fn: Callable[[Sequence[float]], float] | None = None,
        params: dict[str, Any] | None = None,
    ) -> None:
        self._fn = fn or (lambda input: float(input[0]))
        self._params = dict(params or {"iterations": 0})
        self.training_set: list[EncodedRecord] | None = None

    @property
    def parameters(self) -> dict[str, Any]:
        return dict(self._params)

    def train(self, training_set: Sequence[EncodedRecord]) -> StubModel:
        self.training_set = list(training_set)
        # Normalizes its knobs the way a real learner might
        self._params = {k: max(1, v) for k, v in self._params.items()}
        return StubModel(self._fn)


@pytest.fixture
def stub_learner() -> StubLearner:
    """Learner whose model returns the first input value."""
    return StubLearner()


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def categorical_config(categorical_csv: Path) -> PipelineConfig:
    """All-categorical config with a fixed seed."""
    return PipelineConfig.builder().dataset_path(categorical_csv).random_seed(7).build()


@pytest.fixture
def progress_tracker() -> dict[str, Any]:
    """Create a progress tracker for testing callbacks.

    Returns:
        Dictionary to store progress updates.
    """
    tracker: dict[str, Any] = {
        "updates": [],
        "stages": [],
        "final_progress": 0.0,
    }
    return tracker


def make_progress_callback(tracker: dict[str, Any]):
    """Create a progress callback that stores updates in the tracker."""

    def callback(update: ProgressUpdate) -> None:
        tracker["updates"].append(update)
        tracker["stages"].append(update.stage)
        tracker["final_progress"] = update.progress

    return callback


# =============================================================================
# Markers
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (full pipeline)"
    )

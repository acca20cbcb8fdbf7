"""Learner registry for tabeval.

This module provides reference implementations of the learning component
so the pipeline can run end to end. Any object satisfying the Learner
protocol can be passed to the pipeline instead.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .sklearn_learners import SKLEARN_LEARNERS, SklearnLearner, SklearnModel


def get_available_learners() -> list[str]:
    """Get list of reference learner names."""
    return list(SKLEARN_LEARNERS)


def get_default_params(name: str) -> dict[str, Any]:
    """Get default parameters for a learner.

    Args:
        name: Learner name.

    Returns:
        Dictionary of default parameters.
    """
    if name not in SKLEARN_LEARNERS:
        return {}
    return SKLEARN_LEARNERS[name]["default_params"].copy()


def create_learner(
    name: str,
    params: Mapping[str, Any] | None = None,
    random_seed: int | None = None,
) -> SklearnLearner:
    """Create a reference learner.

    Args:
        name: Learner name (e.g., "decision_tree").
        params: Overrides for the learner's default parameters.
        random_seed: Seed for the estimator.

    Returns:
        Configured learner.

    Raises:
        ValueError: If the learner name is unknown.
    """
    if name not in SKLEARN_LEARNERS:
        raise ValueError(f"Unknown learner '{name}'. Available: {get_available_learners()}")

    merged = get_default_params(name)
    merged.update(params or {})
    return SklearnLearner(name, SKLEARN_LEARNERS[name]["class"], merged, random_seed)


__all__ = [
    "SklearnLearner",
    "SklearnModel",
    "create_learner",
    "get_available_learners",
    "get_default_params",
]

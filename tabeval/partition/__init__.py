"""Train/test partitioning."""

from __future__ import annotations

from .partitioner import DEFAULT_TRAIN_RATIO, partition, split_boundary

__all__ = [
    "DEFAULT_TRAIN_RATIO",
    "partition",
    "split_boundary",
]

"""Random train/test partitioning."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import TypeVar

import numpy as np

from ..core import Partition

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TRAIN_RATIO = 0.9


def split_boundary(length: int, train_ratio: float = DEFAULT_TRAIN_RATIO) -> int:
    """Index of the first test item: ``floor(length * train_ratio)``."""
    if not 0 < train_ratio < 1:
        raise ValueError("train_ratio must be between 0 and 1")
    return math.floor(length * train_ratio)


def partition(
    items: Sequence[T],
    train_ratio: float = DEFAULT_TRAIN_RATIO,
    seed: int | None = None,
    rng: np.random.Generator | None = None,
) -> Partition[T]:
    """Shuffle ``items`` uniformly and split them into train and test sets.

    Items before the boundary form the training set, the rest the test set.
    Nothing is copied, dropped, or duplicated.

    Args:
        items: Sequence to split.
        train_ratio: Fraction of items that go to the training set.
        seed: Seed for a fresh generator when ``rng`` is not given.
        rng: Generator to draw the permutation from.

    Returns:
        Partition with ``floor(len(items) * train_ratio)`` training items.
    """
    generator = rng if rng is not None else np.random.default_rng(seed)
    order = generator.permutation(len(items))
    shuffled = tuple(items[i] for i in order)

    boundary = split_boundary(len(items), train_ratio)
    result = Partition(train=shuffled[:boundary], test=shuffled[boundary:])

    logger.info(
        "Partitioned %d items: %d train, %d test", len(items), len(result.train), len(result.test)
    )
    return result

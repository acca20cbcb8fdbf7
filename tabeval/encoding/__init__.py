"""Record encoding for the learner.

This module turns raw records into fixed-width float vectors (one-hot blocks
for categorical attributes, max-scaled values for continuous ones) and
integer class labels.
"""

from __future__ import annotations

from .encoder import RecordEncoder

__all__ = [
    "RecordEncoder",
]

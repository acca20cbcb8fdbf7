"""Dataset file reading and parsing."""

from __future__ import annotations

from .reader import check_field_counts, parse_records, read_dataset_file

__all__ = [
    "read_dataset_file",
    "parse_records",
    "check_field_counts",
]

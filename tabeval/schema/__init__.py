"""Schema inference over raw records."""

from __future__ import annotations

from .inference import check_row_widths, infer_schema, parse_continuous

__all__ = [
    "infer_schema",
    "parse_continuous",
    "check_row_widths",
]

"""Schema inference: derive one attribute descriptor per column."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np
import pandas as pd

from ..config import AttributeKind, AttributeTypes
from ..core import (
    AttributeDescriptor,
    CategoricalAttribute,
    ContinuousAttribute,
    RawRecord,
    Schema,
)
from ..errors import ParseError

logger = logging.getLogger(__name__)


def infer_schema(rows: Sequence[RawRecord], attribute_types: AttributeTypes) -> Schema:
    """Build the descriptors for every column of ``rows``.

    Categorical columns get their distinct values in first-seen order;
    continuous columns get their maximum value. The result depends only on
    the rows and their order.

    Args:
        rows: Non-empty sequence of raw records of equal width.
        attribute_types: Categorical/continuous assignment of the columns.

    Returns:
        Schema with one descriptor per column and the largest class count.

    Raises:
        ParseError: If there are no rows, rows differ in width, or a
            continuous value is not a finite number.
        InvalidConfigError: If the attribute types do not fit the table.
    """
    if not rows:
        raise ParseError("dataset has no data rows")

    n_columns = len(rows[0])
    check_row_widths(rows, n_columns)
    attribute_types.validate(n_columns)

    descriptors: list[AttributeDescriptor] = []
    max_class_cardinality = 0

    for index in range(n_columns):
        values = [row[index] for row in rows]

        if attribute_types.kind_of(index) is AttributeKind.CONTINUOUS:
            parsed = np.array(
                [parse_continuous(value, index, row=i) for i, value in enumerate(values)],
                dtype=np.float64,
            )
            descriptor: AttributeDescriptor = ContinuousAttribute(
                index=index, max_magnitude=float(parsed.max())
            )
        else:
            classes = tuple(str(v) for v in pd.unique(pd.Series(values, dtype=object)))
            max_class_cardinality = max(max_class_cardinality, len(classes))
            descriptor = CategoricalAttribute(index=index, classes=classes)

        logger.debug("Column %d: %s", index, descriptor)
        descriptors.append(descriptor)

    schema = Schema(descriptors=tuple(descriptors), max_class_cardinality=max_class_cardinality)
    logger.info(
        "Inferred schema for %d columns from %d rows (feature width %d, max cardinality %d)",
        n_columns,
        len(rows),
        schema.feature_width,
        max_class_cardinality,
    )
    return schema


def parse_continuous(value: str, column: int, row: int | None = None) -> float:
    """Parse one continuous field, rejecting non-numeric and non-finite text."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ParseError(f"'{value}' is not a number", row=row, column=column) from None
    if not math.isfinite(number):
        raise ParseError(f"'{value}' is not a finite number", row=row, column=column)
    return number


def check_row_widths(rows: Sequence[RawRecord], n_columns: int) -> None:
    """Raise ParseError for the first row whose width differs from ``n_columns``."""
    for i, row in enumerate(rows):
        if len(row) != n_columns:
            raise ParseError(f"expected {n_columns} fields, got {len(row)}", row=i)

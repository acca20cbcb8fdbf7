"""Record encoding: raw rows to numeric feature vectors and class labels.

Categorical features become one-hot blocks of their attribute's cardinality,
continuous features become ``value / max_magnitude``. The target column is
encoded as an index into its class list and never appears in the input.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import numpy as np

from ..config import UnseenCategoryPolicy
from ..core import (
    CategoricalAttribute,
    ContinuousAttribute,
    EncodedRecord,
    RawRecord,
    Schema,
)
from ..errors import (
    DegenerateScaleError,
    FeatureWidthError,
    ParseError,
    UnknownCategoryError,
)
from ..schema import parse_continuous

logger = logging.getLogger(__name__)


class RecordEncoder:
    """Encodes raw records with a fixed schema.

    The encoder does not change the schema; every record it produces has an
    input of exactly ``schema.feature_width`` floats.
    """

    def __init__(
        self,
        schema: Schema,
        unseen_category_policy: UnseenCategoryPolicy = UnseenCategoryPolicy.RAISE,
    ) -> None:
        """Initialize encoder.

        Args:
            schema: Descriptors from schema inference.
            unseen_category_policy: What to do with a feature value missing from
                its class list. The target column always raises.
        """
        self.schema = schema
        self.unseen_category_policy = unseen_category_policy
        self._positions: dict[int, dict[str, int]] = {
            d.index: {value: position for position, value in enumerate(d.classes)}
            for d in schema.descriptors
            if isinstance(d, CategoricalAttribute)
        }

    @property
    def feature_width(self) -> int:
        return self.schema.feature_width

    def encode(self, row: RawRecord, row_number: int | None = None) -> EncodedRecord:
        """Encode one raw record.

        Raises:
            ParseError: If the row width differs from the schema or a continuous
                value is not numeric.
            UnknownCategoryError: If a value is missing from its class list.
            DegenerateScaleError: If a continuous attribute has a maximum of 0.
            FeatureWidthError: If the produced input has the wrong width.
        """
        if len(row) != self.schema.n_columns:
            raise ParseError(
                f"expected {self.schema.n_columns} fields, got {len(row)}", row=row_number
            )

        blocks: list[np.ndarray] = []
        for descriptor in self.schema.features:
            value = row[descriptor.index]
            if isinstance(descriptor, ContinuousAttribute):
                blocks.append(np.array([self._scale(descriptor, value, row_number)]))
            else:
                blocks.append(self._one_hot(descriptor, value))

        features = np.concatenate(blocks) if blocks else np.empty(0)
        if features.shape[0] != self.feature_width:
            raise FeatureWidthError(self.feature_width, features.shape[0])
        features.flags.writeable = False

        target = self.schema.target
        output = self._positions[target.index].get(row[target.index])
        if output is None:
            raise UnknownCategoryError(target.index, row[target.index], list(target.classes))

        return EncodedRecord(input=features, output=output)

    def encode_all(self, rows: Iterable[RawRecord]) -> list[EncodedRecord]:
        """Encode every record, in order."""
        records = [self.encode(row, row_number=i) for i, row in enumerate(rows)]
        logger.info("Encoded %d records of width %d", len(records), self.feature_width)
        return records

    def _one_hot(self, descriptor: CategoricalAttribute, value: str) -> np.ndarray:
        block = np.zeros(descriptor.width, dtype=np.float64)
        position = self._positions[descriptor.index].get(value)
        if position is None:
            if self.unseen_category_policy is UnseenCategoryPolicy.IGNORE:
                logger.debug(
                    "Unseen value '%s' in column %d encoded as zeros", value, descriptor.index
                )
                return block
            raise UnknownCategoryError(descriptor.index, value, list(descriptor.classes))
        block[position] = 1.0
        return block

    def _scale(self, descriptor: ContinuousAttribute, value: str, row_number: int | None) -> float:
        if descriptor.max_magnitude == 0:
            raise DegenerateScaleError(descriptor.index)
        return parse_continuous(value, descriptor.index, row=row_number) / descriptor.max_magnitude

"""Configuration dataclasses for tabeval."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .errors import InvalidConfigError

if TYPE_CHECKING:
    from typing import Self


class AttributeKind(Enum):
    """How a column's values are encoded."""

    CATEGORICAL = "categorical"
    CONTINUOUS = "continuous"


class InferenceScope(Enum):
    """Which rows the attribute descriptors are inferred from."""

    FULL_DATASET = "full_dataset"
    TRAIN_ONLY = "train_only"


class UnseenCategoryPolicy(Enum):
    """What the encoder does with a feature value missing from its class list."""

    RAISE = "raise"
    IGNORE = "ignore"  # all-zero block of the attribute's width


@dataclass(frozen=True)
class AttributeTypes:
    """Assignment of column indices to attribute kinds.

    With ``continuous`` empty and ``categorical`` None every column is
    categorical. When ``categorical`` is given the two sets must partition
    the full column range.
    """

    continuous: frozenset[int] = frozenset()
    categorical: frozenset[int] | None = None

    @classmethod
    def all_categorical(cls) -> AttributeTypes:
        return cls()

    @classmethod
    def mixed(
        cls,
        continuous: Iterable[int],
        categorical: Iterable[int] | None = None,
    ) -> AttributeTypes:
        return cls(
            continuous=frozenset(continuous),
            categorical=frozenset(categorical) if categorical is not None else None,
        )

    @property
    def is_all_categorical(self) -> bool:
        return not self.continuous

    def kind_of(self, index: int) -> AttributeKind:
        """Return the kind of the column at ``index``."""
        if index in self.continuous:
            return AttributeKind.CONTINUOUS
        return AttributeKind.CATEGORICAL

    def validate(self, n_columns: int) -> None:
        """Check the assignment against a table of ``n_columns`` columns.

        Raises:
            InvalidConfigError: If an index is out of range, the sets overlap or
                leave a column unassigned, or the target column is continuous.
        """
        if n_columns < 2:
            raise InvalidConfigError(
                f"dataset needs at least one attribute and a target column, got {n_columns} columns"
            )

        out_of_range = sorted(i for i in self.continuous if not 0 <= i < n_columns)
        if self.categorical is not None:
            out_of_range += sorted(i for i in self.categorical if not 0 <= i < n_columns)
        if out_of_range:
            raise InvalidConfigError(
                f"column indices {out_of_range} are outside the table width {n_columns}"
            )

        if self.categorical is not None:
            overlap = sorted(self.continuous & self.categorical)
            if overlap:
                raise InvalidConfigError(f"columns {overlap} are both categorical and continuous")
            missing = sorted(set(range(n_columns)) - self.continuous - self.categorical)
            if missing:
                raise InvalidConfigError(f"columns {missing} have no attribute type")

        if (n_columns - 1) in self.continuous:
            raise InvalidConfigError(f"target column {n_columns - 1} must be categorical")


# Datasets the pipeline has been run on
BREAST_CANCER = AttributeTypes.all_categorical()
HEART = AttributeTypes.mixed(
    continuous=[0, 3, 4, 7, 9, 11],
    categorical=[1, 2, 5, 6, 8, 10, 12, 13],
)

PRESETS: dict[str, AttributeTypes] = {
    "breast-cancer": BREAST_CANCER,
    "heart": HEART,
}


@dataclass
class PipelineConfig:
    """Configuration for an encode/train/evaluate run.

    Attributes:
        dataset_path: Delimited-text file with a header row; last column is the label.
        attribute_types: Categorical/continuous assignment of the columns.
        train_ratio: Fraction of shuffled records that go to the training set.
        random_seed: Seed for the shuffle. None gives a different split per run.
        inference_scope: Rows the attribute descriptors are inferred from.
        unseen_category_policy: Encoder behavior for feature values missing
            from the class list (only reachable with TRAIN_ONLY inference).
        problem_number: Run identifier echoed in the report.
        learner: Name of the reference learner used when none is supplied.
        learner_params: Iteration-count style knobs handed to the learner.
        delimiter: Field separator of the dataset file.
    """

    dataset_path: Path
    attribute_types: AttributeTypes = field(default_factory=AttributeTypes.all_categorical)
    train_ratio: float = 0.9
    random_seed: int | None = None
    inference_scope: InferenceScope = InferenceScope.FULL_DATASET
    unseen_category_policy: UnseenCategoryPolicy = UnseenCategoryPolicy.RAISE
    problem_number: int = 1
    learner: str = "decision_tree"
    learner_params: dict[str, Any] = field(default_factory=dict)
    delimiter: str = ","

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self.dataset_path = Path(self.dataset_path)
        if not 0 < self.train_ratio < 1:
            raise ValueError("train_ratio must be between 0 and 1")
        if self.problem_number < 1:
            raise ValueError("problem_number must be at least 1")
        if len(self.delimiter) != 1:
            raise ValueError("delimiter must be a single character")

    @classmethod
    def builder(cls) -> PipelineConfigBuilder:
        """Create a builder for PipelineConfig."""
        return PipelineConfigBuilder()


class PipelineConfigBuilder:
    """Builder for PipelineConfig with fluent interface."""

    def __init__(self) -> None:
        self._dataset_path: Path | None = None
        self._attribute_types: AttributeTypes = AttributeTypes.all_categorical()
        self._train_ratio: float = 0.9
        self._random_seed: int | None = None
        self._inference_scope: InferenceScope = InferenceScope.FULL_DATASET
        self._unseen_category_policy: UnseenCategoryPolicy = UnseenCategoryPolicy.RAISE
        self._problem_number: int = 1
        self._learner: str = "decision_tree"
        self._learner_params: dict[str, Any] = {}
        self._delimiter: str = ","

    def dataset_path(self, value: str | Path) -> Self:
        """Set the dataset file path."""
        self._dataset_path = Path(value)
        return self

    def attribute_types(self, value: AttributeTypes) -> Self:
        """Set the categorical/continuous column assignment."""
        self._attribute_types = value
        return self

    def preset(self, name: str) -> Self:
        """Use the attribute types of a named dataset preset."""
        if name not in PRESETS:
            raise ValueError(f"Unknown preset '{name}'. Available: {list(PRESETS)}")
        self._attribute_types = PRESETS[name]
        return self

    def train_ratio(self, value: float) -> Self:
        """Set the training fraction of the split."""
        self._train_ratio = value
        return self

    def random_seed(self, value: int | None) -> Self:
        """Set the shuffle seed."""
        self._random_seed = value
        return self

    def inference_scope(self, value: InferenceScope) -> Self:
        """Set which rows descriptors are inferred from."""
        self._inference_scope = value
        return self

    def unseen_category_policy(self, value: UnseenCategoryPolicy) -> Self:
        """Set the encoder's policy for unseen feature values."""
        self._unseen_category_policy = value
        return self

    def problem_number(self, value: int) -> Self:
        """Set the run identifier."""
        self._problem_number = value
        return self

    def learner(self, value: str) -> Self:
        """Set the reference learner name."""
        self._learner = value
        return self

    def learner_params(self, value: Mapping[str, Any]) -> Self:
        """Set the learner knobs."""
        self._learner_params = dict(value)
        return self

    def delimiter(self, value: str) -> Self:
        """Set the field separator."""
        self._delimiter = value
        return self

    def build(self) -> PipelineConfig:
        """Build the PipelineConfig."""
        if self._dataset_path is None:
            raise ValueError("dataset_path is required")

        return PipelineConfig(
            dataset_path=self._dataset_path,
            attribute_types=self._attribute_types,
            train_ratio=self._train_ratio,
            random_seed=self._random_seed,
            inference_scope=self._inference_scope,
            unseen_category_policy=self._unseen_category_policy,
            problem_number=self._problem_number,
            learner=self._learner,
            learner_params=self._learner_params,
            delimiter=self._delimiter,
        )

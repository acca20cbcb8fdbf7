"""Exception hierarchy for tabeval."""

from __future__ import annotations


class TabEvalError(Exception):
    """Base exception for tabeval."""

    pass


class InvalidConfigError(TabEvalError):
    """Invalid configuration provided."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Invalid configuration: {message}")


class DatasetIOError(TabEvalError):
    """Raw dataset file could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read dataset file '{path}': {reason}")


class ParseError(TabEvalError):
    """Malformed row or non-numeric value in a continuous column."""

    def __init__(self, message: str, row: int | None = None, column: int | None = None) -> None:
        self.message = message
        self.row = row
        self.column = column
        location = ""
        if row is not None:
            location += f" (row {row}"
            location += f", column {column})" if column is not None else ")"
        elif column is not None:
            location += f" (column {column})"
        super().__init__(f"Parse failed{location}: {message}")


class DegenerateScaleError(TabEvalError):
    """Continuous attribute with a zero observed maximum."""

    def __init__(self, column: int) -> None:
        self.column = column
        super().__init__(
            f"Continuous column {column} has a maximum of 0; values cannot be scaled"
        )


class UnknownCategoryError(TabEvalError):
    """Value absent from its attribute's class list."""

    def __init__(self, column: int, value: str, classes: list[str]) -> None:
        self.column = column
        self.value = value
        self.classes = classes
        super().__init__(
            f"Value '{value}' in column {column} was not observed during schema inference. "
            f"Known classes: {classes}"
        )


class FeatureWidthError(TabEvalError):
    """Encoded feature vector does not match the schema's width."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Encoded input has width {actual}, schema requires {expected}")


class EmptyTestSetError(TabEvalError):
    """Accuracy is undefined for an empty test set."""

    def __init__(self) -> None:
        super().__init__("Test set is empty; accuracy is undefined")


class TrainingFailedError(TabEvalError):
    """Learner could not fit a model on the training set."""

    def __init__(self, learner: str, reason: str) -> None:
        self.learner = learner
        self.reason = reason
        super().__init__(f"Training with {learner} failed: {reason}")


class PipelineStateError(TabEvalError):
    """Stage ran before the stage it depends on."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Pipeline state invalid: {message}")

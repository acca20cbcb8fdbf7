"""Reference learners built on scikit-learn classifiers."""

from __future__ import annotations

import logging
import warnings
from collections.abc import Sequence
from typing import Any

import numpy as np
from sklearn.base import ClassifierMixin
from sklearn.neural_network import MLPClassifier
from sklearn.tree import DecisionTreeClassifier, export_text

from ..core import EncodedRecord
from ..errors import TrainingFailedError

logger = logging.getLogger(__name__)

POSITIVE_CLASS = 1


class SklearnModel:
    """Fitted scikit-learn classifier exposed through the Model protocol.

    ``predict`` returns the probability of class index 1, which the
    evaluation harness thresholds at 0.5.
    """

    def __init__(self, estimator: ClassifierMixin) -> None:
        self.estimator = estimator
        classes = [int(c) for c in estimator.classes_]  # type: ignore[attr-defined]
        self._positive_column = classes.index(POSITIVE_CLASS) if POSITIVE_CLASS in classes else None

    def predict(self, input: Sequence[float]) -> float:
        if self._positive_column is None:
            return 0.0
        features = np.asarray(input, dtype=np.float64).reshape(1, -1)
        proba = self.estimator.predict_proba(features)[0]  # type: ignore[attr-defined]
        return float(proba[self._positive_column])

    def summary(self) -> str:
        """Readable structure of the fitted estimator."""
        if isinstance(self.estimator, DecisionTreeClassifier):
            return export_text(self.estimator)
        if isinstance(self.estimator, MLPClassifier):
            coefs = self.estimator.coefs_
            layers = [c.shape[0] for c in coefs] + [coefs[-1].shape[1]]
            return f"MLPClassifier(layers={layers}, iterations={self.estimator.n_iter_})"
        return repr(self.estimator)

    def node_count(self) -> int:
        """Tree nodes, or hidden plus output units for a network."""
        if isinstance(self.estimator, DecisionTreeClassifier):
            return int(self.estimator.tree_.node_count)
        if isinstance(self.estimator, MLPClassifier):
            return int(sum(c.shape[1] for c in self.estimator.coefs_))
        return 0


class SklearnLearner:
    """Learner that fits one scikit-learn classifier on the training set."""

    def __init__(
        self,
        name: str,
        estimator_class: type[ClassifierMixin],
        params: dict[str, Any],
        random_seed: int | None = None,
    ) -> None:
        self.name = name
        self._estimator_class = estimator_class
        self._params = dict(params)
        self._random_seed = random_seed

    @property
    def parameters(self) -> dict[str, Any]:
        return dict(self._params)

    def train(self, training_set: Sequence[EncodedRecord]) -> SklearnModel:
        """Fit the classifier.

        Raises:
            TrainingFailedError: If the training set is empty or the estimator
                rejects it.
        """
        if not training_set:
            raise TrainingFailedError(self.name, "training set is empty")

        X_train = np.vstack([record.input for record in training_set])
        y_train = np.array([record.output for record in training_set])

        try:
            estimator = self._estimator_class(**self._params, random_state=self._random_seed)
        except TypeError as e:
            raise TrainingFailedError(self.name, str(e)) from e

        try:
            with warnings.catch_warnings():
                warnings.simplefilter("ignore")
                estimator.fit(X_train, y_train)
        except ValueError as e:
            raise TrainingFailedError(self.name, str(e)) from e

        # Echo the knobs as the estimator holds them after fitting
        fitted = estimator.get_params()
        self._params = {key: fitted[key] for key in self._params}

        logger.info("Trained %s on %d records", self.name, len(training_set))
        return SklearnModel(estimator)


SKLEARN_LEARNERS: dict[str, dict[str, Any]] = {
    "decision_tree": {
        "class": DecisionTreeClassifier,
        "default_params": {
            "max_depth": None,
            "min_samples_leaf": 1,
        },
    },
    "neural_network": {
        "class": MLPClassifier,
        "default_params": {
            "hidden_layer_sizes": (16,),
            "max_iter": 500,
        },
    },
}

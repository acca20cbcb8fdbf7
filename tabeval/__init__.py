"""tabeval: attribute-aware encoding and evaluation for tabular classifiers.

This library turns a delimited-text table of categorical and continuous
attributes into fixed-width feature vectors, splits them into training and
test sets, hands the training set to a learner, and scores the learner's
predictions on the held-out records.

Example usage:
    from tabeval import Pipeline, PipelineConfig

    config = PipelineConfig.builder() \\
        .dataset_path("resources/heart.csv") \\
        .preset("heart") \\
        .random_seed(7) \\
        .build()

    result = Pipeline.builder() \\
        .config(config) \\
        .on_progress(lambda u: print(f"{u.progress:.0%} - {u.message}")) \\
        .build() \\
        .run_sync()

    print(result.accuracy)
    print(result.evaluation.to_csv())
"""

from __future__ import annotations

# Configuration
from .config import (
    BREAST_CANCER,
    HEART,
    PRESETS,
    AttributeKind,
    AttributeTypes,
    InferenceScope,
    PipelineConfig,
    PipelineConfigBuilder,
    UnseenCategoryPolicy,
)

# Types (from core module)
from .core import (
    AccuracyMetric,
    AttributeDescriptor,
    CategoricalAttribute,
    ContinuousAttribute,
    EncodedRecord,
    EvaluationReport,
    EvaluationResult,
    Learner,
    Model,
    Partition,
    PipelineContext,
    PipelineStage,
    RawRecord,
    RunResult,
    Schema,
)

# Components
from .encoding import RecordEncoder

# Errors
from .errors import (
    DatasetIOError,
    DegenerateScaleError,
    EmptyTestSetError,
    FeatureWidthError,
    InvalidConfigError,
    ParseError,
    PipelineStateError,
    TabEvalError,
    TrainingFailedError,
    UnknownCategoryError,
)
from .evaluation import evaluate, threshold

# Learners
from .learners import create_learner, get_available_learners
from .partition import partition

# Pipeline
from .pipeline import Pipeline, PipelineBuilder

# Progress
from .progress import (
    CallbackProgressReporter,
    NullProgressReporter,
    ProgressCallback,
    ProgressReporter,
    ProgressUpdate,
    RunStage,
)
from .schema import infer_schema

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Configuration
    "AttributeKind",
    "AttributeTypes",
    "InferenceScope",
    "UnseenCategoryPolicy",
    "PipelineConfig",
    "PipelineConfigBuilder",
    "BREAST_CANCER",
    "HEART",
    "PRESETS",
    # Components
    "infer_schema",
    "RecordEncoder",
    "partition",
    "evaluate",
    "threshold",
    # Learners
    "create_learner",
    "get_available_learners",
    # Pipeline
    "Pipeline",
    "PipelineBuilder",
    # Progress
    "RunStage",
    "ProgressUpdate",
    "ProgressCallback",
    "ProgressReporter",
    "CallbackProgressReporter",
    "NullProgressReporter",
    # Types (from core)
    "RawRecord",
    "AttributeDescriptor",
    "CategoricalAttribute",
    "ContinuousAttribute",
    "Schema",
    "EncodedRecord",
    "Partition",
    "EvaluationResult",
    "EvaluationReport",
    "AccuracyMetric",
    "RunResult",
    "Learner",
    "Model",
    "PipelineStage",
    "PipelineContext",
    # Errors
    "TabEvalError",
    "InvalidConfigError",
    "DatasetIOError",
    "ParseError",
    "DegenerateScaleError",
    "UnknownCategoryError",
    "FeatureWidthError",
    "EmptyTestSetError",
    "TrainingFailedError",
    "PipelineStateError",
]

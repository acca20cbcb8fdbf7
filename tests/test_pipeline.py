"""Tests for the full pipeline chain."""

from __future__ import annotations

import asyncio
import logging

import pytest
from conftest import StubLearner, make_progress_callback, write_csv

from tabeval import (
    AttributeTypes,
    DatasetIOError,
    DegenerateScaleError,
    InferenceScope,
    ParseError,
    Pipeline,
    PipelineConfig,
    ProgressUpdate,
    RunStage,
    TrainingFailedError,
    UnknownCategoryError,
    UnseenCategoryPolicy,
    partition,
)
from tabeval.pipeline import (
    DEFAULT_STAGES,
    TRAIN_ONLY_STAGES,
    EncodingStage,
    PartitionStage,
    RawPartitionStage,
)


class TestPipelineBuilder:
    """Tests for Pipeline.builder() interface."""

    def test_builder_requires_config(self):
        """build() raises if config not set."""
        with pytest.raises(ValueError, match="config is required"):
            Pipeline.builder().build()

    def test_builder_with_config_only(self, categorical_config):
        """Can build pipeline with just config (reference learner)."""
        pipeline = Pipeline.builder().config(categorical_config).build()
        assert pipeline is not None

    def test_builder_returns_self(self, categorical_config, stub_learner):
        """Builder methods return self for chaining."""
        builder = Pipeline.builder()

        assert builder.config(categorical_config) is builder
        assert builder.learner(stub_learner) is builder
        assert builder.on_progress(lambda u: None) is builder

    def test_default_stage_order(self, categorical_config):
        """Full-dataset inference encodes before partitioning."""
        pipeline = Pipeline.builder().config(categorical_config).build()

        assert [type(s) for s in pipeline.stages] == DEFAULT_STAGES
        kinds = [type(s) for s in pipeline.stages]
        assert kinds.index(EncodingStage) < kinds.index(PartitionStage)

    def test_train_only_stage_order(self, categorical_csv):
        """Train-only inference partitions raw rows first."""
        config = (
            PipelineConfig.builder()
            .dataset_path(categorical_csv)
            .inference_scope(InferenceScope.TRAIN_ONLY)
            .build()
        )
        pipeline = Pipeline.builder().config(config).build()

        assert [type(s) for s in pipeline.stages] == TRAIN_ONLY_STAGES
        assert type(pipeline.stages[2]) is RawPartitionStage


class TestPipelineRun:
    """Tests for a successful run."""

    def test_run_categorical(self, categorical_config, stub_learner):
        """Ten rows split nine/one and produce one result."""
        pipeline = Pipeline.builder().config(categorical_config).learner(stub_learner).build()

        result = pipeline.run_sync()

        assert result.n_train == 9
        assert result.n_test == 1
        assert len(result.evaluation.results) == 1
        assert 0.0 <= result.accuracy <= 1.0
        assert result.schema.feature_width == 2
        assert len(stub_learner.training_set) == 9

    def test_run_is_awaitable(self, categorical_config, stub_learner):
        """run() is a coroutine."""
        pipeline = Pipeline.builder().config(categorical_config).learner(stub_learner).build()

        result = asyncio.run(pipeline.run())

        assert result.problem_number == 1

    def test_learner_params_echoed(self, categorical_config):
        """Knobs are reported as the learner normalized them."""
        learner = StubLearner(params={"iterations": 0, "tries": 4})
        pipeline = Pipeline.builder().config(categorical_config).learner(learner).build()

        result = pipeline.run_sync()

        assert result.learner_params == {"iterations": 1, "tries": 4}

    def test_model_diagnostics(self, categorical_config, stub_learner):
        """Model summary and node count are passed through."""
        pipeline = Pipeline.builder().config(categorical_config).learner(stub_learner).build()

        result = pipeline.run_sync()

        assert result.model_summary == "stub(root)"
        assert result.node_count == 3

    def test_same_seed_same_split(self, categorical_csv):
        """Runs with one seed see the same training set."""
        config = PipelineConfig.builder().dataset_path(categorical_csv).random_seed(11).build()
        first, second = StubLearner(), StubLearner()

        Pipeline.builder().config(config).learner(first).build().run_sync()
        Pipeline.builder().config(config).learner(second).build().run_sync()

        assert [r.input.tolist() for r in first.training_set] == [
            r.input.tolist() for r in second.training_set
        ]
        assert [r.output for r in first.training_set] == [r.output for r in second.training_set]

    def test_perfect_model(self, larger_csv):
        """A model reading the label off the input scores 1.0."""
        config = PipelineConfig.builder().dataset_path(larger_csv).random_seed(2).build()
        # color classes are ["red", "blue"]; label is "yes" exactly when blue
        learner = StubLearner(fn=lambda input: float(input[1]))

        result = Pipeline.builder().config(config).learner(learner).build().run_sync()

        assert result.n_test == 4
        assert result.accuracy == 1.0

    def test_mixed_run(self, tmp_path, stub_learner):
        """Continuous attributes flow through the chain."""
        rows = [
            (str(10 * (i + 1)), "m" if i % 2 else "f", "yes" if i % 3 else "no") for i in range(20)
        ]
        path = write_csv(tmp_path / "mixed.csv", ["age", "sex", "label"], rows)
        config = (
            PipelineConfig.builder()
            .dataset_path(path)
            .attribute_types(AttributeTypes.mixed(continuous=[0], categorical=[1, 2]))
            .random_seed(0)
            .build()
        )

        result = Pipeline.builder().config(config).learner(stub_learner).build().run_sync()

        assert result.schema.feature_width == 3
        assert result.n_train == 18
        for record in stub_learner.training_set:
            assert 0.0 < record.input[0] <= 1.0

    def test_train_only_run(self, categorical_csv, stub_learner):
        """Train-only inference produces a complete run."""
        config = (
            PipelineConfig.builder()
            .dataset_path(categorical_csv)
            .random_seed(7)
            .inference_scope(InferenceScope.TRAIN_ONLY)
            .unseen_category_policy(UnseenCategoryPolicy.IGNORE)
            .build()
        )

        result = Pipeline.builder().config(config).learner(stub_learner).build().run_sync()

        assert result.n_train == 9
        assert result.n_test == 1

    @pytest.mark.slow
    @pytest.mark.integration
    def test_reference_learner(self, larger_csv):
        """The decision tree learner fits the color/label rule exactly."""
        config = PipelineConfig.builder().dataset_path(larger_csv).random_seed(4).build()

        result = Pipeline.builder().config(config).build().run_sync()

        assert result.accuracy == 1.0
        assert result.node_count == 3
        assert "max_depth" in result.learner_params

    def test_results_logged(self, categorical_config, stub_learner, caplog):
        """Summary goes to INFO and the CSV report to DEBUG."""
        pipeline = Pipeline.builder().config(categorical_config).learner(stub_learner).build()

        with caplog.at_level(logging.DEBUG, logger="tabeval"):
            pipeline.run_sync()

        assert "Model accuracy" in caplog.text
        assert "outputAccurate,outputDenormalized,expected" in caplog.text

    def test_progress_reported(self, categorical_config, stub_learner, progress_tracker):
        """Every stage reports, ending with COMPLETE."""
        callback = make_progress_callback(progress_tracker)
        pipeline = (
            Pipeline.builder()
            .config(categorical_config)
            .learner(stub_learner)
            .on_progress(callback)
            .build()
        )

        pipeline.run_sync()

        stages = progress_tracker["stages"]
        assert stages[0] == RunStage.LOADING
        assert stages[-1] == RunStage.COMPLETE
        assert RunStage.EVALUATION in stages
        assert progress_tracker["final_progress"] == 1.0


class TestPipelineFailure:
    """Tests for fail-fast behavior."""

    def _failed_run(self, config, learner, error_type):
        updates: list[ProgressUpdate] = []
        pipeline = (
            Pipeline.builder().config(config).learner(learner).on_progress(updates.append).build()
        )
        with pytest.raises(error_type):
            pipeline.run_sync()
        return updates

    def test_missing_file(self, tmp_path, stub_learner):
        """An unreadable file stops the run before parsing."""
        config = PipelineConfig.builder().dataset_path(tmp_path / "none.csv").build()

        updates = self._failed_run(config, stub_learner, DatasetIOError)

        assert [u.stage for u in updates] == [RunStage.LOADING, RunStage.FAILED]
        assert stub_learner.training_set is None

    def test_non_numeric_continuous(self, tmp_path, stub_learner):
        """A bad continuous value stops the run before training."""
        path = write_csv(tmp_path / "bad.csv", ["x", "y"], [("1", "a"), ("two", "b")])
        config = (
            PipelineConfig.builder()
            .dataset_path(path)
            .attribute_types(AttributeTypes.mixed(continuous=[0]))
            .build()
        )

        updates = self._failed_run(config, stub_learner, ParseError)

        assert updates[-1].stage == RunStage.FAILED
        assert RunStage.TRAINING not in [u.stage for u in updates]

    def test_zero_maximum(self, tmp_path, stub_learner):
        """A zero maximum aborts instead of emitting NaN."""
        path = write_csv(tmp_path / "zero.csv", ["x", "y"], [("0", "a"), ("0", "b")])
        config = (
            PipelineConfig.builder()
            .dataset_path(path)
            .attribute_types(AttributeTypes.mixed(continuous=[0]))
            .build()
        )

        self._failed_run(config, stub_learner, DegenerateScaleError)

        assert stub_learner.training_set is None

    def test_empty_training_set(self, tmp_path):
        """A single row leaves no training records for the reference learner."""
        path = write_csv(tmp_path / "tiny.csv", ["x", "y"], [("a", "no")])
        config = PipelineConfig.builder().dataset_path(path).build()
        updates: list[ProgressUpdate] = []
        pipeline = Pipeline.builder().config(config).on_progress(updates.append).build()

        with pytest.raises(TrainingFailedError):
            pipeline.run_sync()

        assert RunStage.EVALUATION not in [u.stage for u in updates]

    def test_unseen_value_train_only(self, tmp_path):
        """Train-only inference rejects feature values seen only in the test rows."""
        rows = [("a", "no")] * 9 + [("z", "no")]
        path = write_csv(tmp_path / "unseen.csv", ["x", "y"], rows)
        seed = next(s for s in range(200) if ("z", "no") in partition(rows, 0.9, seed=s).test)

        def config(policy: UnseenCategoryPolicy) -> PipelineConfig:
            return (
                PipelineConfig.builder()
                .dataset_path(path)
                .random_seed(seed)
                .inference_scope(InferenceScope.TRAIN_ONLY)
                .unseen_category_policy(policy)
                .build()
            )

        with pytest.raises(UnknownCategoryError) as exc_info:
            Pipeline.builder().config(config(UnseenCategoryPolicy.RAISE)).learner(
                StubLearner()
            ).build().run_sync()
        assert exc_info.value.value == "z"

        result = (
            Pipeline.builder()
            .config(config(UnseenCategoryPolicy.IGNORE))
            .learner(StubLearner())
            .build()
            .run_sync()
        )
        assert result.n_test == 1

"""
Tests for LinearRegressor, the train/predict boundary.

Covers:
- default hyperparameters from TrainingConfig
- the Untrained zero function and the Trained dimension check
- logging of training results
- serialization of train against concurrent predict calls
"""

import logging
import threading

import numpy as np
import pytest

from gradient_regression import (
    DimensionMismatchError,
    InvalidHyperparameterError,
    InvalidSampleError,
    LinearRegressor,
    ModelStatus,
    Sample,
    TrainingConfig,
)


class TestTrain:

    def test_reference_usage(self, line_pairs):
        """100000 iterations at 0.01 on [1, x] vectors, as the canvas does."""
        regressor = LinearRegressor()
        regressor.train(line_pairs, 100000, 0.01)
        params = regressor.parameters()
        assert params[0] == pytest.approx(2.0, abs=0.05)
        assert params[1] == pytest.approx(3.0, abs=0.05)
        assert regressor.predict([1, 0]) == pytest.approx(2.0, abs=0.2)
        assert regressor.predict([1, 4]) == pytest.approx(14.0, abs=0.2)
        assert regressor.status is ModelStatus.TRAINED

    def test_defaults_come_from_config(self, line_pairs):
        regressor = LinearRegressor(TrainingConfig(num_iterations=1, learning_rate=0.01))
        regressor.train(line_pairs)
        np.testing.assert_allclose(regressor.parameters(), [0.16, 0.44])

    def test_explicit_arguments_override_config(self, line_pairs):
        regressor = LinearRegressor(TrainingConfig(num_iterations=1))
        regressor.train(line_pairs, num_iterations=0)
        np.testing.assert_array_equal(regressor.parameters(), [0.0, 0.0])

    def test_history_interval_from_config(self, line_pairs):
        regressor = LinearRegressor(TrainingConfig(num_iterations=200, history_interval=50))
        regressor.train(line_pairs)
        assert len(regressor.cost_history) == 5

    def test_retrain_replaces_model(self, line_pairs, plane_sample):
        regressor = LinearRegressor(TrainingConfig(num_iterations=20000))
        regressor.train(line_pairs)
        regressor.train(plane_sample)
        assert regressor.parameters().shape == (3,)
        assert regressor.predict([1.0, 1.0, 1.0]) == pytest.approx(2.0, abs=1e-6)

    def test_invalid_sample(self):
        with pytest.raises(InvalidSampleError):
            LinearRegressor().train([])

    def test_invalid_hyperparameters(self, line_pairs):
        with pytest.raises(InvalidHyperparameterError):
            LinearRegressor().train(line_pairs, 10, 0.0)

    def test_invalid_config_rejected(self):
        with pytest.raises(InvalidHyperparameterError):
            LinearRegressor(TrainingConfig(learning_rate=-1.0))

    def test_bias_check_follows_config(self):
        regressor = LinearRegressor(TrainingConfig(num_iterations=10, require_bias=False))
        regressor.train([[[3.0, 1.0], 2.0]])
        with pytest.raises(InvalidSampleError):
            LinearRegressor().train([[[3.0, 1.0], 2.0]], 10)

    def test_bias_check_applies_to_prebuilt_sample(self):
        sample = Sample.from_pairs([[[3.0, 1.0], 2.0]], require_bias=False)
        regressor = LinearRegressor(TrainingConfig(num_iterations=10, require_bias=True))
        with pytest.raises(InvalidSampleError, match="bias constant"):
            regressor.train(sample)
        assert regressor.status is ModelStatus.UNTRAINED

    def test_logs_training_summary(self, line_pairs, caplog):
        regressor = LinearRegressor(TrainingConfig(num_iterations=10))
        with caplog.at_level(logging.INFO, logger="gradient_regression"):
            regressor.train(line_pairs)
        assert "Trained on 5 elements" in caplog.text
        assert "parameters=" in caplog.text


class TestPredict:

    def test_untrained_is_zero_function(self):
        regressor = LinearRegressor()
        assert regressor.status is ModelStatus.UNTRAINED
        assert regressor.predict([1.0, 5.0]) == 0.0
        assert regressor.predict([1.0, 5.0, 6.0]) == 0.0

    def test_dimension_mismatch_after_training(self, line_pairs):
        regressor = LinearRegressor(TrainingConfig(num_iterations=10))
        regressor.train(line_pairs)
        with pytest.raises(DimensionMismatchError):
            regressor.predict([1.0, 2.0, 3.0])
        with pytest.raises(DimensionMismatchError):
            regressor.predict([1.0])

    def test_predict_many(self, line_pairs):
        regressor = LinearRegressor(TrainingConfig(num_iterations=20000))
        regressor.train(line_pairs)
        ys = regressor.predict_many([[1, 0], [1, 10]])
        assert ys == pytest.approx([2.0, 32.0], abs=1e-6)

    def test_predict_many_untrained(self):
        assert LinearRegressor().predict_many([[1, 0], [1, 1]]) == [0.0, 0.0]

    @pytest.mark.parametrize("vector_x", [5.0, [[1.0, 2.0]]])
    def test_untrained_rejects_non_vectors(self, vector_x):
        with pytest.raises(DimensionMismatchError, match="1D vector"):
            LinearRegressor().predict(vector_x)

    def test_untrained_rejects_non_numeric_input(self):
        with pytest.raises(ValueError):
            LinearRegressor().predict("not a vector")

    def test_predict_many_untrained_checks_each_vector(self):
        with pytest.raises(DimensionMismatchError):
            LinearRegressor().predict_many([[1, 0], 3.0])

    def test_clear_returns_to_untrained(self, line_pairs):
        regressor = LinearRegressor(TrainingConfig(num_iterations=10))
        regressor.train(line_pairs)
        regressor.clear()
        assert regressor.status is ModelStatus.UNTRAINED
        assert regressor.predict([1.0, 4.0]) == 0.0


class TestConcurrency:
    """Readers never observe a partially trained model."""

    def test_predict_during_train(self, line_pairs):
        regressor = LinearRegressor(TrainingConfig(num_iterations=30000))
        started = threading.Event()
        results = []

        def train():
            started.set()
            regressor.train(line_pairs)

        worker = threading.Thread(target=train)
        worker.start()
        started.wait()
        while worker.is_alive():
            results.append(regressor.predict([1.0, 4.0]))
        worker.join()

        final = regressor.predict([1.0, 4.0])
        assert set(results) <= {0.0, final}

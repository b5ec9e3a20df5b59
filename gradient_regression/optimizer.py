"""
Batch gradient descent for multivariate linear regression.

The cost being minimized is the mean squared error over the whole sample:

    J(params) = (1 / N) * sum_i (params . x_i - y_i) ** 2

with partial derivatives

    dJ / dparams[j] = (2 / N) * sum_i (params . x_i - y_i) * x_i[j]

Each iteration evaluates every partial derivative against the same parameter
snapshot and only then replaces the parameter vector (synchronous update).
There is no stochastic variant, no regularization and no convergence check:
training always runs the requested number of iterations. A learning rate
that is too large for the scale of the data makes the parameters diverge;
that is reported with a DivergenceWarning, never corrected.
"""

import logging
import math
import warnings
from numbers import Integral, Real
from typing import List

import numpy as np

from .exceptions import (
    DimensionMismatchError,
    DivergenceWarning,
    InvalidHyperparameterError,
)
from .model import ModelState
from .sample import Sample, as_sample

logger = logging.getLogger(__name__)


def as_vector(values, name: str) -> np.ndarray:
    """
    Convert ``values`` to a float64 vector.

    Raises:
        DimensionMismatchError: If ``values`` is not one-dimensional.
        ValueError: If ``values`` cannot be read as numbers.
    """
    vector = np.asarray(values, dtype=np.float64)
    if vector.ndim != 1:
        raise DimensionMismatchError(f"{name} must be a 1D vector, got {vector.ndim}D.")
    return vector


def _check_parameters(sample: Sample, params) -> np.ndarray:
    params = as_vector(params, "params")
    if params.shape[0] != sample.num_parameters:
        raise DimensionMismatchError(
            f"Sample has {sample.num_parameters} features per vector but "
            f"{params.shape[0]} parameters were given."
        )
    return params


def _residuals(sample: Sample, params: np.ndarray) -> np.ndarray:
    return sample.features @ params - sample.labels


def validate_hyperparameters(num_iterations, learning_rate, history_interval=0) -> None:
    """
    Check training hyperparameters before any computation.

    Raises:
        InvalidHyperparameterError: If ``num_iterations`` or
            ``history_interval`` is not a non-negative integer, or
            ``learning_rate`` is not a finite positive real number.
    """
    if isinstance(num_iterations, bool) or not isinstance(num_iterations, Integral) \
            or num_iterations < 0:
        raise InvalidHyperparameterError(
            f"num_iterations must be a non-negative integer, got {num_iterations!r}"
        )
    if isinstance(learning_rate, bool) or not isinstance(learning_rate, Real) \
            or not math.isfinite(learning_rate) or learning_rate <= 0:
        raise InvalidHyperparameterError(
            f"learning_rate must be a positive real number, got {learning_rate!r}"
        )
    if isinstance(history_interval, bool) or not isinstance(history_interval, Integral) \
            or history_interval < 0:
        raise InvalidHyperparameterError(
            f"history_interval must be a non-negative integer, got {history_interval!r}"
        )


def predict(vector_x, params) -> float:
    """
    Evaluate the linear function ``params . vector_x``.

    Raises:
        DimensionMismatchError: If the vectors differ in length.
    """
    vector_x = as_vector(vector_x, "vector_x")
    params = as_vector(params, "params")
    if vector_x.shape[0] != params.shape[0]:
        raise DimensionMismatchError(
            f"Feature vector has length {vector_x.shape[0]} but there are "
            f"{params.shape[0]} parameters."
        )
    return float(np.dot(params, vector_x))


def mean_squared_error(sample, params) -> float:
    """Mean squared error of ``params`` over the sample."""
    sample = as_sample(sample, require_bias=False)
    params = _check_parameters(sample, params)
    return float(np.mean(_residuals(sample, params) ** 2))


def cost_gradient(sample, params, j: int) -> float:
    """
    Partial derivative of the mean squared error with respect to ``params[j]``.

    Raises:
        IndexError: If ``j`` is not a valid parameter index.
        DimensionMismatchError: If ``params`` does not match the sample.
    """
    sample = as_sample(sample, require_bias=False)
    params = _check_parameters(sample, params)
    if not 0 <= j < sample.num_parameters:
        raise IndexError(
            f"Parameter index {j} out of range for {sample.num_parameters} parameters."
        )
    n = len(sample)
    return float((2.0 / n) * np.dot(_residuals(sample, params), sample.features[:, j]))


def gradient(sample, params) -> np.ndarray:
    """All partial derivatives of the cost, evaluated at the same ``params``."""
    sample = as_sample(sample, require_bias=False)
    params = _check_parameters(sample, params)
    return _gradient(sample, params)


def _gradient(sample: Sample, params: np.ndarray) -> np.ndarray:
    return (2.0 / len(sample)) * (sample.features.T @ _residuals(sample, params))


def _step(sample: Sample, params: np.ndarray, learning_rate: float) -> np.ndarray:
    return params - learning_rate * _gradient(sample, params)


def descent_step(sample, params, learning_rate: float) -> np.ndarray:
    """
    One batch gradient-descent iteration.

    Returns a new parameter vector; ``params`` is left untouched so every
    partial derivative is computed from the unmodified snapshot.
    """
    sample = as_sample(sample, require_bias=False)
    params = _check_parameters(sample, params)
    return _step(sample, params, float(learning_rate))


def fit(
    model: ModelState,
    sample,
    num_iterations: int,
    learning_rate: float,
    history_interval: int = 0,
    require_bias: bool = True,
) -> None:
    """
    Fit the model's parameter vector to ``sample`` with batch gradient descent.

    The model is reset to ``sample`` with zeroed parameters, ``num_iterations``
    synchronous updates are run, and the result is committed to the model.
    With ``num_iterations=0`` the parameters stay at zero.

    Args:
        model (ModelState): State to reset and update in place.
        sample: A Sample, or ``[[x0, x1, ...], y]`` pairs.
        num_iterations (int): Number of descent iterations (>= 0).
        learning_rate (float): Step size (> 0).
        history_interval (int): Record the cost every this many iterations,
            plus after the final one. 0 disables recording.
        require_bias (bool): Require feature vectors to start with 1.0.

    Raises:
        InvalidHyperparameterError: On invalid iteration count or rate.
        InvalidSampleError: If the sample is empty or malformed.
    """
    validate_hyperparameters(num_iterations, learning_rate, history_interval)
    # Fraction or Decimal rates would turn the parameters into object arrays
    learning_rate = float(learning_rate)
    model.reset(sample, require_bias=require_bias)
    sample = model.sample

    logger.debug(
        "Fitting %d parameters on %d elements: iterations=%d learning_rate=%g",
        sample.num_parameters, len(sample), num_iterations, learning_rate,
    )

    params = model.parameters().copy()
    history: List[float] = []

    with np.errstate(over="ignore", invalid="ignore"):
        for i in range(num_iterations):
            if history_interval and i % history_interval == 0:
                _record_cost(history, i, sample, params)
            params = _step(sample, params, learning_rate)
        if history_interval:
            _record_cost(history, num_iterations, sample, params)

    if not np.all(np.isfinite(params)):
        message = (
            f"Gradient descent diverged after {num_iterations} iterations with "
            f"learning_rate={learning_rate}; parameters are not finite."
        )
        logger.warning(message)
        warnings.warn(message, DivergenceWarning, stacklevel=2)

    model.commit(params, history)


def _record_cost(history: List[float], iteration: int, sample: Sample,
                 params: np.ndarray) -> None:
    cost = float(np.mean(_residuals(sample, params) ** 2))
    history.append(cost)
    logger.debug("Iteration %d: cost=%.6g", iteration, cost)

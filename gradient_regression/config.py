"""
Training configuration.

Defaults match the interactive line-fitting usage: 100000 iterations at a
learning rate of 0.01 on ``[1, x]`` feature vectors. Each value can be
overridden through an environment variable.
"""

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .exceptions import InvalidHyperparameterError
from .optimizer import validate_hyperparameters

DEFAULT_NUM_ITERATIONS = 100000
DEFAULT_LEARNING_RATE = 0.01
DEFAULT_HISTORY_INTERVAL = 0  # disabled

ENV_PREFIX = "GRADIENT_REGRESSION_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise InvalidHyperparameterError(f"{name} must be a boolean, got {raw!r}")


@dataclass(frozen=True)
class TrainingConfig:
    """
    Hyperparameters used when ``train`` is called without explicit values.

    Parameters
    ----------
    num_iterations : int, default=100000
        Number of batch gradient-descent iterations.
    learning_rate : float, default=0.01
        Step size applied to each gradient update.
    history_interval : int, default=0
        Record the cost every this many iterations; 0 disables recording.
    require_bias : bool, default=True
        Reject feature vectors whose first element is not 1.0.
    """
    num_iterations: int = DEFAULT_NUM_ITERATIONS
    learning_rate: float = DEFAULT_LEARNING_RATE
    history_interval: int = DEFAULT_HISTORY_INTERVAL
    require_bias: bool = True

    def validate(self) -> "TrainingConfig":
        validate_hyperparameters(self.num_iterations, self.learning_rate, self.history_interval)
        return self

    def with_overrides(self, **changes) -> "TrainingConfig":
        changes = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **changes).validate()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TrainingConfig":
        """Build a config from ``GRADIENT_REGRESSION_*`` environment variables."""
        environ = os.environ if environ is None else environ
        changes = {}

        raw = environ.get(ENV_PREFIX + "NUM_ITERATIONS")
        if raw is not None:
            try:
                changes["num_iterations"] = int(raw)
            except ValueError as exc:
                raise InvalidHyperparameterError(
                    f"{ENV_PREFIX}NUM_ITERATIONS must be an integer, got {raw!r}"
                ) from exc

        raw = environ.get(ENV_PREFIX + "LEARNING_RATE")
        if raw is not None:
            try:
                changes["learning_rate"] = float(raw)
            except ValueError as exc:
                raise InvalidHyperparameterError(
                    f"{ENV_PREFIX}LEARNING_RATE must be a number, got {raw!r}"
                ) from exc

        raw = environ.get(ENV_PREFIX + "HISTORY_INTERVAL")
        if raw is not None:
            try:
                changes["history_interval"] = int(raw)
            except ValueError as exc:
                raise InvalidHyperparameterError(
                    f"{ENV_PREFIX}HISTORY_INTERVAL must be an integer, got {raw!r}"
                ) from exc

        raw = environ.get(ENV_PREFIX + "REQUIRE_BIAS")
        if raw is not None:
            changes["require_bias"] = _parse_bool(ENV_PREFIX + "REQUIRE_BIAS", raw)

        return cls(**changes).validate()

"""
Model state for batch gradient-descent linear regression.

ModelState holds exactly one model: the sample it was last reset with and
the parameter vector fitted to it. It carries no training behaviour; the
optimizer module reads the sample and commits the fitted parameters.
"""

from enum import Enum
from typing import Iterable, Optional, Tuple

import numpy as np

from .exceptions import DimensionMismatchError
from .sample import Sample, as_sample


class ModelStatus(str, Enum):
    UNTRAINED = "untrained"
    TRAINED = "trained"


class ModelState:
    """
    Storage for the current training sample and parameter vector.

    Attributes:
        sample (Sample): The sample from the last reset, or None.
        status (ModelStatus): UNTRAINED until parameters are committed.
        cost_history (tuple): Mean squared error values recorded by the
            last fit, empty when no history was requested.
    """

    def __init__(self) -> None:
        self._sample: Optional[Sample] = None
        self._parameters: np.ndarray = np.zeros(0, dtype=np.float64)
        self._status = ModelStatus.UNTRAINED
        self._cost_history: Tuple[float, ...] = ()

    @property
    def sample(self) -> Optional[Sample]:
        return self._sample

    @property
    def status(self) -> ModelStatus:
        return self._status

    @property
    def is_trained(self) -> bool:
        return self._status is ModelStatus.TRAINED

    @property
    def num_parameters(self) -> int:
        return int(self._parameters.shape[0])

    @property
    def cost_history(self) -> Tuple[float, ...]:
        return self._cost_history

    def reset(self, sample, require_bias: bool = True) -> None:
        """
        Replace the stored sample and zero the parameter vector.

        Args:
            sample: A Sample, or ``[[x0, x1, ...], y]`` pairs.
            require_bias (bool): Passed to Sample validation for raw pairs.

        Raises:
            InvalidSampleError: If the sample is empty or malformed.
        """
        sample = as_sample(sample, require_bias=require_bias)
        self._sample = sample
        self._parameters = np.zeros(sample.num_parameters, dtype=np.float64)
        self._status = ModelStatus.UNTRAINED
        self._cost_history = ()

    def parameters(self) -> np.ndarray:
        """Return a read-only copy of the current parameter vector."""
        view = self._parameters.copy()
        view.setflags(write=False)
        return view

    def commit(self, parameters, cost_history: Iterable[float] = ()) -> None:
        """Store fitted parameters and mark the model as trained."""
        parameters = np.array(parameters, dtype=np.float64).reshape(-1)
        if parameters.shape[0] != self._parameters.shape[0]:
            raise DimensionMismatchError(
                f"Expected {self._parameters.shape[0]} parameters, got {parameters.shape[0]}."
            )
        self._parameters = parameters
        self._cost_history = tuple(float(c) for c in cost_history)
        self._status = ModelStatus.TRAINED

    def clear(self) -> None:
        """Forget the sample and parameters."""
        self._sample = None
        self._parameters = np.zeros(0, dtype=np.float64)
        self._status = ModelStatus.UNTRAINED
        self._cost_history = ()

    def __repr__(self) -> str:
        size = 0 if self._sample is None else len(self._sample)
        return (
            f"ModelState(status={self._status.value}, samples={size}, "
            f"parameters={self._parameters.tolist()})"
        )

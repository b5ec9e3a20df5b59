"""
Train/predict boundary used by callers that collect points interactively.

LinearRegressor owns a single ModelState and serializes training against
reads with a lock: ``train`` rewrites the whole parameter vector, so a
concurrent ``predict`` either sees the previous model or the new one.
"""

import logging
import threading
from typing import Iterable, List, Optional, Tuple

import numpy as np

from . import optimizer
from .config import TrainingConfig
from .model import ModelState, ModelStatus

logger = logging.getLogger(__name__)


class LinearRegressor:
    """
    Linear regression model trained with batch gradient descent.

    Attributes:
        config (TrainingConfig): Defaults for ``train`` arguments left as None.

    Examples:
        >>> regressor = LinearRegressor()
        >>> regressor.train([[[1, 0], 2], [[1, 1], 5], [[1, 2], 8]])
        >>> round(regressor.predict([1, 3]), 3)
        11.0
    """

    def __init__(self, config: Optional[TrainingConfig] = None) -> None:
        self.config: TrainingConfig = (config or TrainingConfig()).validate()
        self._model = ModelState()
        self._lock = threading.Lock()

    def train(
        self,
        sample,
        num_iterations: Optional[int] = None,
        learning_rate: Optional[float] = None,
    ) -> None:
        """
        Fit the model to ``sample``, replacing any previous model.

        Args:
            sample: A Sample, or ``[[1, x1, ...], y]`` pairs.
            num_iterations (int): Iterations to run; defaults to the config.
            learning_rate (float): Step size; defaults to the config.

        Raises:
            InvalidSampleError: If the sample is empty or malformed.
            InvalidHyperparameterError: On invalid hyperparameters.
        """
        if num_iterations is None:
            num_iterations = self.config.num_iterations
        if learning_rate is None:
            learning_rate = self.config.learning_rate

        with self._lock:
            optimizer.fit(
                self._model,
                sample,
                num_iterations,
                learning_rate,
                history_interval=self.config.history_interval,
                require_bias=self.config.require_bias,
            )
            parameters = self._model.parameters()
            size = len(self._model.sample)

        logger.info(
            "Trained on %d elements (%d iterations, learning_rate=%g): parameters=%s",
            size, num_iterations, learning_rate, parameters.tolist(),
        )

    def predict(self, vector_x) -> float:
        """
        Evaluate the trained linear function at ``vector_x``.

        An untrained regressor is the zero function for any vector length.

        Raises:
            DimensionMismatchError: If ``vector_x`` is not a 1D vector, or
                does not match the trained parameter count.
        """
        with self._lock:
            parameters = self._model.parameters()
        if parameters.shape[0] == 0:
            optimizer.as_vector(vector_x, "vector_x")
            return 0.0
        return optimizer.predict(vector_x, parameters)

    def predict_many(self, vectors: Iterable) -> List[float]:
        with self._lock:
            parameters = self._model.parameters()
        if parameters.shape[0] == 0:
            predictions = []
            for vector_x in vectors:
                optimizer.as_vector(vector_x, "vector_x")
                predictions.append(0.0)
            return predictions
        return [optimizer.predict(vector_x, parameters) for vector_x in vectors]

    def parameters(self) -> np.ndarray:
        with self._lock:
            return self._model.parameters()

    @property
    def status(self) -> ModelStatus:
        with self._lock:
            return self._model.status

    @property
    def cost_history(self) -> Tuple[float, ...]:
        with self._lock:
            return self._model.cost_history

    def clear(self) -> None:
        with self._lock:
            self._model.clear()

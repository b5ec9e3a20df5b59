"""
Gradient Regression Package

Multivariate linear regression fitted with batch gradient descent.
"""

from .config import TrainingConfig
from .exceptions import (
    DimensionMismatchError,
    DivergenceWarning,
    InvalidHyperparameterError,
    InvalidSampleError,
    RegressionError,
)
from .model import ModelState, ModelStatus
from .optimizer import (
    cost_gradient,
    descent_step,
    fit,
    gradient,
    mean_squared_error,
    predict,
)
from .canvas import CanvasMapping, LineSegment, PointCanvas
from .regressor import LinearRegressor
from .sample import Sample

__all__ = [
    'CanvasMapping',
    'DimensionMismatchError',
    'DivergenceWarning',
    'InvalidHyperparameterError',
    'InvalidSampleError',
    'LineSegment',
    'LinearRegressor',
    'ModelState',
    'ModelStatus',
    'PointCanvas',
    'RegressionError',
    'Sample',
    'TrainingConfig',
    'cost_gradient',
    'descent_step',
    'fit',
    'gradient',
    'mean_squared_error',
    'predict',
]

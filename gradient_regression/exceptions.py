"""
Exceptions raised by the gradient regression package.

Every error subclasses both RegressionError and ValueError so callers can
catch either the package-specific base or the built-in type.
"""


class RegressionError(Exception):
    """Base class for all gradient regression errors."""
    pass


class InvalidSampleError(RegressionError, ValueError):
    """Exception raised when a training sample is empty or malformed."""
    pass


class DimensionMismatchError(RegressionError, ValueError):
    """Exception raised when a vector length differs from the parameter count."""
    pass


class InvalidHyperparameterError(RegressionError, ValueError):
    """Exception raised for a non-positive learning rate or negative iteration count."""
    pass


class DivergenceWarning(RuntimeWarning):
    """Warning emitted when gradient descent ends with non-finite parameters."""
    pass

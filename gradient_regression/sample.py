"""
Training sample container.

A sample is an ordered collection of (feature vector, label) pairs. Feature
vectors carry a leading bias constant of 1.0 so that the parameter at index 0
acts as the intercept and both vectors have the same length.
"""

from dataclasses import InitVar, dataclass
from numbers import Real
from typing import Iterator, List, Sequence, Tuple, Union

import numpy as np

from .exceptions import InvalidSampleError

BIAS_CONSTANT = 1.0

Pair = Tuple[Sequence[float], float]

# bool, signed and unsigned integers, floats
_NUMERIC_KINDS = "biuf"


def _to_float_array(values) -> np.ndarray:
    """Copy ``values`` into a float64 array, rejecting strings and other non-numbers."""
    try:
        array = np.asarray(values)
    except ValueError as exc:
        raise InvalidSampleError(f"Sample values must be real numbers: {exc}") from exc

    if array.dtype.kind == "O":
        if not all(isinstance(value, Real) for value in array.flat):
            raise InvalidSampleError("Sample values must be real numbers.")
    elif array.dtype.kind not in _NUMERIC_KINDS:
        raise InvalidSampleError(
            f"Sample values must be real numbers, got {array.dtype} data."
        )
    return np.array(array, dtype=np.float64)


def _check_rows(rows: Sequence[Sequence[float]]) -> int:
    """Check that every row has the same non-zero length and return it."""
    if len(rows) == 0:
        raise InvalidSampleError("Sample cannot be empty.")

    try:
        num_parameters = len(rows[0])
    except TypeError as exc:
        raise InvalidSampleError("Feature vector 0 is not a sequence.") from exc

    if num_parameters == 0:
        raise InvalidSampleError("Feature vectors must have at least one element.")

    for i, row in enumerate(rows):
        try:
            length = len(row)
        except TypeError as exc:
            raise InvalidSampleError(f"Feature vector {i} is not a sequence.") from exc
        if length != num_parameters:
            raise InvalidSampleError(
                f"All feature vectors must have the same length. "
                f"Got {num_parameters} for vector 0 and {length} for vector {i}."
            )
    return num_parameters


@dataclass(frozen=True, eq=False)
class Sample:
    """
    Validated training sample.

    Parameters
    ----------
    features : array-like of shape (n_samples, n_parameters)
        Feature vectors, one per row. Column 0 holds the bias constant.
    labels : array-like of shape (n_samples,)
        Target value of each feature vector.
    require_bias : bool, default=True
        Reject feature vectors whose first element is not 1.0. Vectors are
        never rewritten to add the constant.

    Raises
    ------
    InvalidSampleError
        If the sample is empty, feature vectors differ in length, counts of
        vectors and labels differ, or any value is not a finite number.
    """
    features: np.ndarray
    labels: np.ndarray
    require_bias: InitVar[bool] = True

    def __post_init__(self, require_bias: bool) -> None:
        features = _to_float_array(self.features)
        labels = _to_float_array(self.labels).reshape(-1)

        if features.ndim != 2:
            raise InvalidSampleError(
                f"Features must be a 2D array of feature vectors, got {features.ndim}D."
            )
        if features.shape[0] == 0:
            raise InvalidSampleError("Sample cannot be empty.")
        if features.shape[1] == 0:
            raise InvalidSampleError("Feature vectors must have at least one element.")
        if labels.shape[0] != features.shape[0]:
            raise InvalidSampleError(
                f"Sample must have one label per feature vector. "
                f"Got {features.shape[0]} vectors and {labels.shape[0]} labels."
            )
        if not np.all(np.isfinite(features)) or not np.all(np.isfinite(labels)):
            raise InvalidSampleError("Sample values must be finite.")

        features.setflags(write=False)
        labels.setflags(write=False)
        object.__setattr__(self, "features", features)
        object.__setattr__(self, "labels", labels)
        if require_bias:
            self.check_bias()

    def check_bias(self) -> "Sample":
        """
        Raise InvalidSampleError unless every feature vector starts with 1.0.
        """
        bad = np.flatnonzero(self.features[:, 0] != BIAS_CONSTANT)
        if bad.size:
            raise InvalidSampleError(
                f"Feature vectors must start with the bias constant "
                f"{BIAS_CONSTANT}; vector {int(bad[0])} starts with "
                f"{self.features[bad[0], 0]}."
            )
        return self

    @classmethod
    def from_pairs(cls, pairs: Sequence[Pair], require_bias: bool = True) -> "Sample":
        """Build a sample from ``[[x0, x1, ...], y]`` pairs."""
        pairs = list(pairs)
        for i, pair in enumerate(pairs):
            try:
                ok = len(pair) == 2
            except TypeError:
                ok = False
            if not ok:
                raise InvalidSampleError(
                    f"Sample element {i} must be a (feature vector, label) pair."
                )
        rows = [pair[0] for pair in pairs]
        _check_rows(rows)
        return cls(rows, [pair[1] for pair in pairs], require_bias=require_bias)

    @classmethod
    def from_arrays(cls, features, labels, require_bias: bool = True) -> "Sample":
        """Build a sample from a feature matrix and a label vector."""
        if not isinstance(features, np.ndarray):
            _check_rows(list(features))
        return cls(features, labels, require_bias=require_bias)

    @property
    def num_parameters(self) -> int:
        return int(self.features.shape[1])

    def __len__(self) -> int:
        return int(self.features.shape[0])

    def __iter__(self) -> Iterator[Tuple[np.ndarray, float]]:
        for row, label in zip(self.features, self.labels):
            yield row, float(label)

    def to_pairs(self) -> List[List[Union[List[float], float]]]:
        return [[row.tolist(), float(label)] for row, label in zip(self.features, self.labels)]


def as_sample(sample, require_bias: bool = True) -> Sample:
    """
    Return ``sample`` if already a Sample, otherwise build one from pairs.

    The bias check is applied to an existing Sample as well when
    ``require_bias`` is set, whatever it was built with.
    """
    if isinstance(sample, Sample):
        return sample.check_bias() if require_bias else sample
    if sample is None:
        raise InvalidSampleError("Sample cannot be empty.")
    return Sample.from_pairs(sample, require_bias=require_bias)

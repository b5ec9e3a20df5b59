"""
Pytest configuration and fixtures for the gradient regression tests.

Puts the project root on the import path so the tests run from a plain
checkout, and provides the samples shared across test modules.
"""

import os
import sys

import pytest

sys.path.insert(
    0,
    os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
)

from gradient_regression import Sample


@pytest.fixture
def line_pairs():
    """Points on y = 2 + 3x for x in 0..4, as [[1, x], y] pairs."""
    return [[[1.0, float(x)], 2.0 + 3.0 * x] for x in range(5)]


@pytest.fixture
def line_sample(line_pairs):
    return Sample.from_pairs(line_pairs)


@pytest.fixture
def plane_sample():
    """Points on y = 1 + 2a - b over a small grid."""
    pairs = []
    for a in range(3):
        for b in range(3):
            pairs.append([[1.0, float(a), float(b)], 1.0 + 2.0 * a - b])
    return Sample.from_pairs(pairs)


@pytest.fixture
def noisy_sample():
    """Deterministic, non-collinear sample that no line fits exactly."""
    xs = [0.0, 0.5, 1.0, 1.5, 2.0, 2.5, 3.0]
    ys = [1.1, 1.9, 3.2, 3.8, 5.3, 5.9, 7.4]
    return Sample.from_pairs([[[1.0, x], y] for x, y in zip(xs, ys)])

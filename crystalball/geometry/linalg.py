"""
Linear-algebra primitives on short real vectors.

Vectors are one-dimensional numpy arrays; any sequence of numbers is accepted
and converted. Combining vectors of different lengths is a caller bug and
raises ``ValueError``.
"""

import math
from typing import Sequence, Union

import numpy as np


Vector = Union[np.ndarray, Sequence[float]]


def as_vector(v: Vector) -> np.ndarray:
    """Return ``v`` as a one-dimensional float array."""
    return np.asarray(v, dtype=float).reshape(-1)


def _check_same_length(a: np.ndarray, b: np.ndarray) -> None:
    if a.shape != b.shape:
        raise ValueError(f"Vector lengths differ: {a.shape[0]} != {b.shape[0]}")


def dot(a: Vector, b: Vector) -> float:
    """Euclidean inner product."""
    a, b = as_vector(a), as_vector(b)
    _check_same_length(a, b)
    return float(np.dot(a, b))


def norm(v: Vector) -> float:
    """Euclidean norm."""
    return math.sqrt(dot(v, v))


def scale(scalar: float, v: Vector) -> np.ndarray:
    """Scale the provided vector, returning a new one."""
    return scalar * as_vector(v)


def vector_sum(a: Vector, b: Vector) -> np.ndarray:
    """Sum the two vectors component-wise, returning a new one."""
    a, b = as_vector(a), as_vector(b)
    _check_same_length(a, b)
    return a + b


def euclidean_distance(a: Vector, b: Vector) -> float:
    return norm(vector_sum(a, scale(-1.0, b)))


def minkowski_dot(a: Vector, b: Vector) -> float:
    """
    Minkowski bilinear form.

    The sum of the products of all but the last coordinates, minus the product
    of the last coordinates.
    """
    a, b = as_vector(a), as_vector(b)
    _check_same_length(a, b)
    return float(np.dot(a[:-1], b[:-1]) - a[-1] * b[-1])


def determinant(mat: np.ndarray) -> float:
    """Determinant of a 2x2 matrix given as a sequence of rows."""
    mat = np.asarray(mat, dtype=float)
    return float(mat[0, 0] * mat[1, 1] - mat[0, 1] * mat[1, 0])


def invert_matrix(mat: np.ndarray) -> np.ndarray:
    """
    Inverse of a 2x2 matrix.

    Pre: ``determinant(mat) != 0``.
    """
    mat = np.asarray(mat, dtype=float)
    det = determinant(mat)
    return np.array([
        [mat[1, 1], -mat[0, 1]],
        [-mat[1, 0], mat[0, 0]],
    ]) / det


def apply_matrix(mat: np.ndarray, v: Vector) -> np.ndarray:
    """Apply a matrix to a column vector from the left."""
    mat = np.asarray(mat, dtype=float)
    v = as_vector(v)
    if mat.shape[1] != v.shape[0]:
        raise ValueError(f"Cannot apply {mat.shape} matrix to vector of length {v.shape[0]}")
    return mat @ v

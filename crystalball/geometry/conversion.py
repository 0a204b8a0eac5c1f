"""
Conversion between the hyperboloid and the Poincaré disc.

The disc point corresponding to a hyperboloid point is its stereographic
projection from ``(0, 0, -1)``; ``hyperboloid_to_disc`` and
``disc_to_hyperboloid`` are exact inverses on their domains.
"""

import numpy as np

from ..exceptions import DegenerateInputError
from .linalg import Vector, as_vector, dot


def is_in_disc(disc_pt: Vector) -> bool:
    """Whether ``disc_pt`` lies in the open unit disc."""
    disc_pt = as_vector(disc_pt)
    return disc_pt.shape == (2,) and dot(disc_pt, disc_pt) < 1.0


def conformal_factor(disc_pt: Vector) -> float:
    """
    Local scale factor of the disc metric, ``2 / (1 - |d|^2)``.

    Raises:
        DegenerateInputError: If ``disc_pt`` is not inside the unit disc
    """
    norm_sqd = dot(disc_pt, disc_pt)
    if norm_sqd >= 1.0:
        raise DegenerateInputError(
            "Point is outside of the Poincaré disc",
            {"norm_squared": norm_sqd}
        )
    return 2.0 / (1.0 - norm_sqd)


def hyperboloid_to_disc(pt: Vector) -> np.ndarray:
    """Map a 3-vector on the hyperboloid to the corresponding 2-vector on the disc."""
    pt = as_vector(pt)
    return pt[:2] / (pt[2] + 1.0)


def disc_to_hyperboloid(disc_pt: Vector) -> np.ndarray:
    """
    Map a 2-vector on the Poincaré disc to the corresponding 3-vector on the
    hyperboloid.

    Raises:
        DegenerateInputError: If ``disc_pt`` is not inside the unit disc
    """
    disc_pt = as_vector(disc_pt)
    factor = conformal_factor(disc_pt)
    norm_sqd = dot(disc_pt, disc_pt)
    return np.array([
        factor * disc_pt[0],
        factor * disc_pt[1],
        (1.0 + norm_sqd) / (1.0 - norm_sqd),
    ])


def disc_tangent_to_hyperboloid(disc_pt: Vector, disc_tangent: Vector) -> np.ndarray:
    """
    Push a tangent at a disc point forward to the hyperboloid.

    This is the differential of :func:`disc_to_hyperboloid` at ``disc_pt``
    applied to ``disc_tangent``, so the result is tangent to the hyperboloid
    at ``disc_to_hyperboloid(disc_pt)``.

    Args:
        disc_pt: Point on the Poincaré disc
        disc_tangent: Euclidean tangent vector at ``disc_pt``

    Returns:
        Tangent 3-vector at the corresponding hyperboloid point
    """
    disc_tangent = as_vector(disc_tangent)
    hyper_pt = disc_to_hyperboloid(disc_pt)
    dp = dot(disc_pt, disc_tangent)
    factor = hyper_pt[2] + 1.0
    vec = np.array([
        hyper_pt[0] * dp + disc_tangent[0],
        hyper_pt[1] * dp + disc_tangent[1],
        factor * dp,
    ])
    return factor * vec


def invert_thru_boundary(disc_pt: Vector) -> np.ndarray:
    """
    Inversion of a disc point (not the origin) through the disc boundary.

    Geodesic circles pass through both a point and its inversion.
    """
    disc_pt = as_vector(disc_pt)
    norm_sqd = dot(disc_pt, disc_pt)
    if norm_sqd == 0.0:
        raise DegenerateInputError("The origin has no inversion through the boundary")
    return disc_pt / norm_sqd

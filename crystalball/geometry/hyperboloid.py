"""
Hyperboloid model of the hyperbolic plane.

Points live on the upper sheet of ``{p : <p, p> = -1, t > 0}`` in 3-space,
where ``<., .>`` is the Minkowski bilinear form. This module provides the
metric, the exponential and logarithm maps and geodesic parallel transport,
all in the closed forms specific to constant curvature -1.

Degenerate inputs resolve to their geometric limits: the exponential of a
(near-)zero tangent is the base point, the logarithm of the base point itself
is the zero tangent, and transport along a (near-)zero direction is the
identity.
"""

import math

import numpy as np

from .linalg import Vector, as_vector, minkowski_dot


# base point of the hyperboloid, the image of the centre of the disc
BASE_PT = np.array([0.0, 0.0, 1.0])

# minimum length of a tangent vector for which its exponential is computed
EXP_DISTANCE_THRESHOLD = 1e-7

# permitted deviation of <p, p> from -1 for a point to count as on the hyperboloid
MDP_TOLERANCE = 1e-9


def hyperboloid_distance(pt0: Vector, pt1: Vector) -> float:
    """
    Hyperbolic distance between two points on the hyperboloid.

    Due to finite precision ``-<pt0, pt1>`` can be slightly less than 1, in
    which case it is clamped to 1 so that arccosh is defined.
    """
    arg = -minkowski_dot(pt0, pt1)
    if arg < 1.0:
        arg = 1.0
    return math.acosh(arg)


def tangent_norm(vec: Vector) -> float:
    """
    Norm of a tangent to the hyperboloid.

    Tangent vectors are spacelike; a slightly negative squared norm produced
    by rounding is treated as zero.
    """
    mdp = minkowski_dot(vec, vec)
    return math.sqrt(max(mdp, 0.0))


def is_on_hyperboloid(pt: Vector, tolerance: float = MDP_TOLERANCE) -> bool:
    """Whether ``pt`` lies on the upper sheet of the hyperboloid."""
    pt = as_vector(pt)
    if pt.shape != (3,):
        return False
    return abs(minkowski_dot(pt, pt) + 1.0) <= tolerance and pt[-1] > 0


def exponential(base: Vector, tangent: Vector, eps: float = EXP_DISTANCE_THRESHOLD) -> np.ndarray:
    """
    Exponential map at a point of the hyperboloid.

    Args:
        base: Point on the hyperboloid
        tangent: Vector in the tangent space at ``base``
        eps: Tangents shorter than this are treated as zero

    Returns:
        The point reached by following the geodesic from ``base`` in the
        direction of ``tangent`` for a distance ``tangent_norm(tangent)``.
    """
    base = as_vector(base)
    tangent = as_vector(tangent)
    n = tangent_norm(tangent)
    if n < eps:
        return base.copy()
    return math.cosh(n) * base + (math.sinh(n) / n) * tangent


def logarithm(base: Vector, other: Vector, eps: float = EXP_DISTANCE_THRESHOLD) -> np.ndarray:
    """
    Logarithm of ``other`` in the tangent space of ``base``.

    ``other`` is projected onto the tangent space at ``base`` and rescaled so
    that its tangent norm is the hyperbolic distance between the points.

    Args:
        base: Point on the hyperboloid
        other: Point on the hyperboloid
        eps: Projections shorter than this are treated as zero

    Returns:
        Tangent vector at ``base`` whose exponential is ``other``. The zero
        vector when the two points (nearly) coincide.
    """
    base = as_vector(base)
    other = as_vector(other)
    mdp = minkowski_dot(base, other)
    proj = other + mdp * base
    n = tangent_norm(proj)
    if n < eps:
        return np.zeros_like(proj)
    return (hyperboloid_distance(base, other) / n) * proj


def geodesic_parallel_transport(
    base: Vector,
    direction: Vector,
    tangent: Vector,
    eps: float = EXP_DISTANCE_THRESHOLD
) -> np.ndarray:
    """
    Parallel transport along a geodesic.

    Transports ``tangent`` from the tangent space at ``base`` to the tangent
    space at ``exponential(base, direction)``, along the geodesic with
    initial velocity ``direction``. Only the component of ``tangent`` along
    ``direction`` changes; the orthogonal remainder is carried unchanged.

    Args:
        base: Point on the hyperboloid
        direction: Tangent vector at ``base``, not necessarily of unit length
        tangent: Tangent vector at ``base`` to be transported
        eps: Directions shorter than this transport by the identity

    Returns:
        Tangent vector at ``exponential(base, direction)`` with the same
        tangent norm as ``tangent``.
    """
    base = as_vector(base)
    direction = as_vector(direction)
    tangent = as_vector(tangent)
    distance = tangent_norm(direction)
    if distance < eps:
        return tangent.copy()
    unit_direction = direction / distance
    parallel_component = minkowski_dot(tangent, unit_direction)
    unit_direction_transported = (
        math.sinh(distance) * base + math.cosh(distance) * unit_direction
    )
    return tangent + parallel_component * (unit_direction_transported - unit_direction)

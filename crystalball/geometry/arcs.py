"""
Geodesic arcs in the Poincaré disc.

A geodesic through two disc points that are not collinear with the origin is
an arc of the unique circle through both points meeting the disc boundary at
right angles. Geodesics through the origin are diameters; they have no finite
centre and are reported as degenerate.
"""

import math
from dataclasses import dataclass

import numpy as np

from ..exceptions import DegenerateInputError
from .linalg import Vector, apply_matrix, as_vector, determinant, dot, invert_matrix


# determinants smaller than this are treated as singular
SINGULARITY_THRESHOLD = 1e-12

TWO_PI = 2 * math.pi


@dataclass(frozen=True, eq=False)
class GeodesicArc:
    """
    Circular arc representing a geodesic segment on the disc.

    The arc runs counter-clockwise (in disc coordinates, y axis up) from
    ``start_angle`` to ``end_angle`` about ``centre``; its angular span is
    always less than pi.
    """
    centre: np.ndarray
    radius: float
    start_angle: float
    end_angle: float

    @property
    def span(self) -> float:
        return self.end_angle - self.start_angle

    def point_at(self, angle: float) -> np.ndarray:
        return self.centre + self.radius * np.array([math.cos(angle), math.sin(angle)])

    def sample(self, num_points: int = 64) -> np.ndarray:
        """Return ``num_points`` points along the arc, endpoints included, shape ``(n, 2)``."""
        angles = np.linspace(self.start_angle, self.end_angle, num_points)
        return self.centre + self.radius * np.stack([np.cos(angles), np.sin(angles)], axis=-1)


def centre_of_arc_through(pt0: Vector, pt1: Vector) -> np.ndarray:
    """
    Centre of the circle through two disc points that meets the disc boundary
    at right angles.

    Solves ``M c = t`` for the rows ``M = [pt0; pt1]`` and
    ``t = (1 + |pt0|^2, 1 + |pt1|^2) / 2``.

    Raises:
        DegenerateInputError: If the points lie on a common ray or line
            through the origin (the system is singular)
    """
    pt0, pt1 = as_vector(pt0), as_vector(pt1)
    mat = np.stack([pt0, pt1])
    if abs(determinant(mat)) < SINGULARITY_THRESHOLD:
        raise DegenerateInputError(
            "Points are collinear with the origin; the geodesic is a diameter",
            {"pt0": pt0.tolist(), "pt1": pt1.tolist()}
        )
    target = 0.5 * np.array([1.0 + dot(pt0, pt0), 1.0 + dot(pt1, pt1)])
    return apply_matrix(invert_matrix(mat), target)


def angle_about(pt: Vector, centre: Vector) -> float:
    """Counter-clockwise angle of ``pt`` about ``centre``, measured from the horizontal."""
    recentred = as_vector(pt) - as_vector(centre)
    return math.atan2(recentred[1], recentred[0])


def geodesic_arc(pt0: Vector, pt1: Vector) -> GeodesicArc:
    """
    The arc of the geodesic between two disc points.

    Of the two arcs of the orthogonal circle joining the points, the shorter
    one (span < pi) is returned; it is the one inside the disc.

    Raises:
        DegenerateInputError: If the points are collinear with the origin
    """
    centre = centre_of_arc_through(pt0, pt1)
    radius = math.sqrt(max(dot(centre, centre) - 1.0, 0.0))
    angle0 = angle_about(pt0, centre)
    angle1 = angle_about(pt1, centre)
    ccw_span = (angle1 - angle0) % TWO_PI
    if ccw_span < math.pi:
        return GeodesicArc(centre, radius, angle0, angle0 + ccw_span)
    return GeodesicArc(centre, radius, angle1, angle1 + (TWO_PI - ccw_span))

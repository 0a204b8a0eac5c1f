"""
Mapping between canvas pixels and the Poincaré disc.

The disc is drawn filling a square canvas of side ``2 * radius_px`` whose
vertical axis points down. Points are drawn as circles that shrink with their
hyperbolic distance from the centre of the disc.
"""

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from .config import DisplayConfig
from .geometry import BASE_PT, disc_to_hyperboloid, euclidean_distance, hyperboloid_distance, hyperboloid_to_disc
from .geometry.arcs import GeodesicArc
from .geometry.linalg import Vector, as_vector


@dataclass(frozen=True)
class CanvasArc:
    """
    A geodesic arc in canvas coordinates.

    Angles are canvas angles (clockwise on screen, since y points down); the
    arc is drawn with increasing angle from ``angle0`` to ``angle1``.
    """
    centre: Tuple[float, float]
    radius: float
    angle0: float
    angle1: float


class Viewport:
    """
    Canvas of a given radius showing the Poincaré disc.

    Args:
        radius_px: Radius of the disc on the canvas, in pixels
        display: Display configuration for point and label sizes
    """

    def __init__(self, radius_px: Optional[float] = None, display: Optional[DisplayConfig] = None):
        self.display = display or DisplayConfig()
        self.radius_px = float(radius_px if radius_px is not None else self.display.canvas_radius_px)
        if self.radius_px <= 0:
            raise ValueError(f"Canvas radius must be positive, got {self.radius_px}")

    def disc_to_canvas(self, disc_pt: Vector) -> np.ndarray:
        """Map a 2-vector on the Poincaré disc to its coordinates on the canvas."""
        disc_pt = as_vector(disc_pt)
        return np.array([
            (1.0 + disc_pt[0]) * self.radius_px,
            (1.0 - disc_pt[1]) * self.radius_px,
        ])

    def canvas_to_disc(self, coords: Vector) -> np.ndarray:
        """Inverse of :meth:`disc_to_canvas`."""
        coords = as_vector(coords)
        # the vertical coordinate is _down_ on the canvas
        return np.array([
            coords[0] / self.radius_px - 1.0,
            -(coords[1] / self.radius_px - 1.0),
        ])

    def contains(self, coords: Vector) -> bool:
        """Whether the canvas coordinates lie strictly inside the disc."""
        disc_pt = self.canvas_to_disc(coords)
        return float(np.dot(disc_pt, disc_pt)) < 1.0

    def canvas_to_hyperboloid(self, coords: Vector) -> np.ndarray:
        """
        Hyperboloid point shown at the canvas coordinates.

        Raises:
            DegenerateInputError: If the coordinates are outside the disc
        """
        return disc_to_hyperboloid(self.canvas_to_disc(coords))

    def hyperboloid_to_canvas(self, point: Vector) -> np.ndarray:
        return self.disc_to_canvas(hyperboloid_to_disc(point))

    def point_radius(self, point: Vector) -> float:
        """Radius in pixels of the circle depicting a hyperboloid point."""
        dist = hyperboloid_distance(BASE_PT, point)
        return max(
            self.display.max_point_size - self.display.point_shrink_rate * dist,
            self.display.min_point_size
        )

    def font_size(self, point: Vector) -> float:
        return self.display.min_font_size * self.point_radius(point)

    def hit_test(self, points: Sequence[Vector], coords: Vector) -> Optional[int]:
        """
        Index of the point drawn under the canvas coordinates.

        When circles overlap the last point wins, since it is drawn on top.
        """
        hit = None
        for index, point in enumerate(points):
            canvas_pt = self.hyperboloid_to_canvas(point)
            if euclidean_distance(canvas_pt, coords) <= self.point_radius(point):
                hit = index
        return hit

    def arc_to_canvas(self, arc: GeodesicArc) -> CanvasArc:
        """
        Express a disc arc in canvas coordinates.

        Flipping the vertical axis negates angles and reverses the direction
        of travel, so the canvas arc runs from ``-end_angle`` to
        ``-start_angle``.
        """
        centre = self.disc_to_canvas(arc.centre)
        angle0 = -arc.end_angle % (2 * math.pi)
        return CanvasArc(
            centre=(float(centre[0]), float(centre[1])),
            radius=arc.radius * self.radius_px,
            angle0=angle0,
            angle1=angle0 + arc.span,
        )

"""
Scenes: points on the hyperboloid joined by geodesic edges.

A point's index in the scene is its identity; edges and the selection during a
drag refer to points by index.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, Sequence, Tuple

import numpy as np

from .exceptions import DegenerateInputError, InvalidInputError
from .geometry import geodesic_arc, hyperboloid_distance, hyperboloid_to_disc
from .geometry.arcs import GeodesicArc


logger = logging.getLogger(__name__)


Edge = Tuple[int, int]


def _as_points(points) -> np.ndarray:
    arr = np.array(points, dtype=float)
    if arr.size == 0:
        return np.zeros((0, 3))
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise InvalidInputError(f"Scene points must have shape (N, 3), got {arr.shape}")
    return arr


@dataclass(frozen=True, eq=False)
class Scene:
    """
    Immutable scene of hyperboloid points and undirected edges.

    Args:
        points: Array of shape ``(N, 3)`` of hyperboloid points
        edges: Pairs of point indices
    """
    points: np.ndarray
    edges: Tuple[Edge, ...] = field(default_factory=tuple)

    def __post_init__(self):
        points = _as_points(self.points)
        points.setflags(write=False)
        object.__setattr__(self, "points", points)
        edges = tuple((int(i), int(j)) for i, j in self.edges)
        for edge in edges:
            for index in edge:
                if not 0 <= index < len(points):
                    raise InvalidInputError(
                        f"Edge index {index} is out of range (use 0-offset).",
                        {"edge": edge, "num_points": len(points)}
                    )
        object.__setattr__(self, "edges", edges)

    def __len__(self) -> int:
        return len(self.points)

    def point(self, index: int) -> np.ndarray:
        return self.points[index].copy()

    def with_points(self, points: Sequence) -> "Scene":
        """Return a scene with the same edges and new point locations."""
        return Scene(points, self.edges)

    def with_point(self, index: int, point: Sequence[float]) -> "Scene":
        """Return a scene in which the point at ``index`` is relocated to ``point``."""
        points = np.array(self.points)
        points[index] = point
        return Scene(points, self.edges)

    def disc_points(self) -> np.ndarray:
        """The points in Poincaré disc coordinates, shape ``(N, 2)``."""
        return np.array([hyperboloid_to_disc(pt) for pt in self.points]).reshape(-1, 2)

    def edge_arc(self, edge: Edge) -> GeodesicArc:
        """
        Geodesic arc drawn for an edge.

        Raises:
            DegenerateInputError: If the edge lies on a diameter of the disc
        """
        i, j = edge
        return geodesic_arc(hyperboloid_to_disc(self.points[i]), hyperboloid_to_disc(self.points[j]))

    def edge_arcs(self) -> Iterator[Tuple[Edge, GeodesicArc]]:
        """Yield ``(edge, arc)`` for every edge that has a finite geodesic circle."""
        for edge in self.edges:
            try:
                yield edge, self.edge_arc(edge)
            except DegenerateInputError as e:
                logger.debug(f"Skipping degenerate edge {edge}: {e}")

    def pairwise_distances(self) -> np.ndarray:
        """Matrix of hyperbolic distances between all pairs of points."""
        n = len(self.points)
        distances = np.zeros((n, n))
        for i in range(n):
            for j in range(i + 1, n):
                distances[i, j] = distances[j, i] = hyperboloid_distance(self.points[i], self.points[j])
        return distances


# The four-point square shown on start-up.
DEFAULT_POINTS = (
    (-0.5139410485506484, 1.3264616271459857, 1.7388605032252031),
    (3.616672196267621, -0.3840845824324792, 3.771980745141395),
    (0.517764655819748, -0.33788191884747387, 1.175688917146378),
    (0.16125537933307643, -1.723787151044124, 1.9993612578693323),
)
DEFAULT_EDGES = ((0, 1), (1, 2), (2, 3), (3, 0))


def default_scene() -> Scene:
    return Scene(DEFAULT_POINTS, DEFAULT_EDGES)


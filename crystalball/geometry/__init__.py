"""
Hyperbolic geometry kernel.

This package contains:
- Linear-algebra primitives and the Minkowski bilinear form
- The hyperboloid metric, exponential/logarithm maps and parallel transport
- Conversion between the hyperboloid and the Poincaré disc
- Geodesic arc construction for drawing edges on the disc
"""

from .linalg import (
    dot,
    norm,
    scale,
    vector_sum,
    euclidean_distance,
    minkowski_dot,
)
from .hyperboloid import (
    BASE_PT,
    EXP_DISTANCE_THRESHOLD,
    hyperboloid_distance,
    tangent_norm,
    is_on_hyperboloid,
    exponential,
    logarithm,
    geodesic_parallel_transport,
)
from .conversion import (
    is_in_disc,
    conformal_factor,
    hyperboloid_to_disc,
    disc_to_hyperboloid,
    disc_tangent_to_hyperboloid,
    invert_thru_boundary,
)
from .arcs import GeodesicArc, centre_of_arc_through, geodesic_arc

__all__ = [
    "dot",
    "norm",
    "scale",
    "vector_sum",
    "euclidean_distance",
    "minkowski_dot",
    "BASE_PT",
    "EXP_DISTANCE_THRESHOLD",
    "hyperboloid_distance",
    "tangent_norm",
    "is_on_hyperboloid",
    "exponential",
    "logarithm",
    "geodesic_parallel_transport",
    "is_in_disc",
    "conformal_factor",
    "hyperboloid_to_disc",
    "disc_to_hyperboloid",
    "disc_tangent_to_hyperboloid",
    "invert_thru_boundary",
    "GeodesicArc",
    "centre_of_arc_through",
    "geodesic_arc",
]

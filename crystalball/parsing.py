"""
Parsing and validation of user-edited points and edges.

Points and edges are edited as JSON text. Everything here raises
:class:`~crystalball.exceptions.InvalidInputError` with a message suitable for
showing to the user; nothing invalid is passed on to the geometry kernel.
"""

import json
import math
import numbers
from typing import Any, List, Optional, Sequence

import numpy as np

from .config import CrystalBallConfig
from .exceptions import InvalidInputError
from .geometry import disc_to_hyperboloid, minkowski_dot, norm
from .geometry.hyperboloid import MDP_TOLERANCE
from .scene import Edge, Scene


def _is_number(value: Any) -> bool:
    # bool is an int subclass, but [true, false] is not a point
    return (
        isinstance(value, numbers.Real)
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _load_json(text: str, what: str) -> Any:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise InvalidInputError(f"{what} not valid JSON.", {"error": str(e)}) from e


def parse_points(text: str, expected_length: int) -> List[List[float]]:
    """
    Decode a JSON array of points, each an array of ``expected_length`` numbers.
    """
    new_points = _load_json(text, "Points")
    if not isinstance(new_points, list):
        raise InvalidInputError("Points input must be an array of points.")
    for i, point in enumerate(new_points):
        if not isinstance(point, list) or len(point) != expected_length:
            length = len(point) if isinstance(point, list) else "n/a"
            raise InvalidInputError(
                f"Point {i} has length {length}, should be {expected_length}."
            )
        if not all(_is_number(value) for value in point):
            raise InvalidInputError("Point co-ordinates must be numeric!", {"point": i})
    return new_points


def parse_disc_points(text: str) -> np.ndarray:
    """
    Decode a JSON array of Poincaré disc points and return them as points on
    the hyperboloid.
    """
    new_points = []
    for index, disc_pt in enumerate(parse_points(text, 2)):
        if norm(disc_pt) >= 1:
            raise InvalidInputError(f"Point {index} is outside of the Poincaré disc!")
        new_points.append(disc_to_hyperboloid(disc_pt))
    return np.array(new_points).reshape(-1, 3)


def parse_hyperboloid_points(text: str, tolerance: float = MDP_TOLERANCE) -> np.ndarray:
    """
    Decode a JSON array of hyperboloid points, checking each lies on the upper
    sheet of the hyperboloid.
    """
    new_points = parse_points(text, 3)
    for i, point in enumerate(new_points):
        mdp = minkowski_dot(point, point)
        if abs(mdp + 1) > tolerance:
            raise InvalidInputError(f"Point {i} has Minkowski dot product {mdp} != -1.")
        if point[2] <= 0:
            raise InvalidInputError(f"Point {i} is on the lower sheet of the hyperboloid.")
    return np.array(new_points, dtype=float).reshape(-1, 3)


def parse_edges(text: str, last_index: int) -> List[Edge]:
    """
    Decode a JSON array of edges, each a pair of point indices in
    ``0..last_index``.
    """
    new_edges = _load_json(text, "Edges")
    if not isinstance(new_edges, list):
        raise InvalidInputError("Edges list should be an array.")
    edges = []
    for edge in new_edges:
        if not isinstance(edge, list) or len(edge) != 2:
            raise InvalidInputError("Each edge should be an array of length 2.")
        indices = []
        for value in edge:
            # JSON has one number type, so 1.0 is a valid index
            if isinstance(value, float) and value.is_integer():
                value = int(value)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidInputError(f"Edge index {value} is not an integer!")
            if value < 0 or value > last_index:
                raise InvalidInputError(f"Edge index {value} is out of range (use 0-offset).")
            indices.append(value)
        edges.append(tuple(indices))
    return edges


def parse_scene(
    points_text: str,
    edges_text: str,
    use_hyperboloid: bool = True,
    config: Optional[CrystalBallConfig] = None
) -> Scene:
    """
    Parse the points and edges text areas into a :class:`Scene`.

    Args:
        points_text: JSON array of points
        edges_text: JSON array of index pairs
        use_hyperboloid: Whether the points are hyperboloid (rather than
            Poincaré disc) coordinates
        config: Supplies the hyperboloid tolerance
    """
    config = config or CrystalBallConfig()
    if use_hyperboloid:
        points = parse_hyperboloid_points(points_text, config.validation.mdp_tolerance)
    else:
        points = parse_disc_points(points_text)
    edges = parse_edges(edges_text, len(points) - 1)
    return Scene(points, edges)


def array_to_pretty_string(values: Sequence) -> str:
    """Pretty JSON form of an array of points or edges, one entry per line."""
    return json.dumps(np.asarray(values).tolist()).replace("],", "],\n")

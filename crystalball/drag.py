"""
Dragging scenes around the hyperbolic plane.

Two interaction modes are supported, selected by whether a point was hit when
the pointer went down:

- dragging the whole scene, which moves every point by the isometry taking
  the previous cursor position to the current one;
- dragging a single point, which relocates a tentative copy of that point and
  only writes it into the scene when the drag ends.

Each handler takes a :class:`SceneState` and returns a new one; the state owns
both the scene and the drag session.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import ClassVar, Optional, Sequence, Union

import numpy as np

from .config import InteractionConfig
from .geometry import (
    BASE_PT,
    conformal_factor,
    disc_tangent_to_hyperboloid,
    exponential,
    geodesic_parallel_transport,
    hyperboloid_distance,
    hyperboloid_to_disc,
    logarithm,
    tangent_norm,
)
from .geometry.hyperboloid import EXP_DISTANCE_THRESHOLD
from .geometry.linalg import Vector, as_vector
from .scene import Scene


logger = logging.getLogger(__name__)


class DragMode(Enum):
    """Drag session modes."""
    IDLE = "idle"
    DRAGGING_ALL = "dragging_all"
    DRAGGING_ONE = "dragging_one"


@dataclass(frozen=True)
class Idle:
    """No drag in progress."""
    mode: ClassVar[DragMode] = DragMode.IDLE


@dataclass(frozen=True, eq=False)
class DraggingAll:
    """The whole scene is being dragged; ``last_point`` is where the cursor last was."""
    last_point: np.ndarray
    mode: ClassVar[DragMode] = DragMode.DRAGGING_ALL


@dataclass(frozen=True, eq=False)
class DraggingOne:
    """
    A single point is being dragged.

    ``tentative_point`` is where the point at ``index`` has been dragged to;
    the scene is not changed until the drag ends.
    """
    index: int
    tentative_point: np.ndarray
    mode: ClassVar[DragMode] = DragMode.DRAGGING_ONE


DragState = Union[Idle, DraggingAll, DraggingOne]

IDLE = Idle()


@dataclass(frozen=True)
class SceneState:
    """A scene together with the drag session acting on it."""
    scene: Scene
    drag: DragState = field(default=IDLE)

    @property
    def mode(self) -> DragMode:
        return self.drag.mode

    @property
    def is_dragging(self) -> bool:
        return self.drag.mode is not DragMode.IDLE

    @property
    def selected_index(self) -> Optional[int]:
        if isinstance(self.drag, DraggingOne):
            return self.drag.index
        return None


def transport_scene(
    points: Sequence[Vector],
    last_point: Vector,
    new_point: Vector,
    eps: float = EXP_DISTANCE_THRESHOLD
) -> np.ndarray:
    """
    Move points by the isometry taking ``last_point`` to ``new_point``.

    Each point's logarithm at ``last_point`` is parallel transported along the
    geodesic to ``new_point`` and exponentiated there, so all pairwise
    hyperbolic distances are preserved.

    Args:
        points: Hyperboloid points to move
        last_point: Hyperboloid point the cursor moved from
        new_point: Hyperboloid point the cursor moved to
        eps: Stability threshold passed to the exponential and logarithm maps

    Returns:
        Array of moved points, shape ``(N, 3)``
    """
    last_point = as_vector(last_point)
    new_point = as_vector(new_point)
    delta = logarithm(last_point, new_point, eps)
    moved = []
    for point in points:
        log = logarithm(last_point, point, eps)
        transported_log = geodesic_parallel_transport(last_point, delta, log, eps)
        moved.append(exponential(new_point, transported_log, eps))
    return np.array(moved).reshape(-1, 3)


def single_point_tangent(point: Vector, cursor_point: Vector, multiplier: float = 4.0) -> np.ndarray:
    """
    Hyperboloid tangent at ``point`` for a single-point drag towards the cursor.

    The Euclidean displacement from the point to the cursor in the disc is
    magnified by ``multiplier`` and divided by the conformal factor at the
    point, so that the hyperbolic length of the resulting tangent equals the
    magnified Euclidean length.
    """
    start_pt = hyperboloid_to_disc(point)
    disc_disp = multiplier * (hyperboloid_to_disc(cursor_point) - start_pt)
    disc_tangent = disc_disp / conformal_factor(start_pt)
    return disc_tangent_to_hyperboloid(start_pt, disc_tangent)


def begin_drag(
    state: SceneState,
    cursor_point: Vector,
    hit_index: Optional[int] = None,
    config: Optional[InteractionConfig] = None
) -> SceneState:
    """
    Start a drag session at ``cursor_point``.

    Args:
        state: Current state; must be idle
        cursor_point: Hyperboloid point under the cursor
        hit_index: Index of the point under the cursor, or None to drag the
            whole scene
        config: Interaction thresholds

    Returns:
        The new state. It is unchanged when the cursor is outside the action
        radius, since a small drag out there would have too large an effect.
    """
    config = config or InteractionConfig()
    if state.is_dragging:
        raise RuntimeError(f"Cannot begin a drag while {state.mode.value}")

    cursor_point = as_vector(cursor_point)
    distance = hyperboloid_distance(BASE_PT, cursor_point)
    if distance > config.action_radius:
        logger.debug(f"Ignoring drag starting {distance:.3f} from the centre")
        return state

    if hit_index is None:
        logger.debug("Dragging all points")
        return replace(state, drag=DraggingAll(cursor_point))

    logger.debug(f"Dragging point {hit_index}")
    return replace(state, drag=DraggingOne(hit_index, state.scene.point(hit_index)))


def drag_to(
    state: SceneState,
    cursor_point: Vector,
    config: Optional[InteractionConfig] = None
) -> SceneState:
    """
    Update the drag session for a cursor now at ``cursor_point``.

    Whole-scene drags move the scene immediately and are aborted when the
    cursor leaves the action radius, leaving the scene as it last stood.
    Single-point drags only update the tentative point. Movements below the
    distance threshold are ignored.
    """
    config = config or InteractionConfig()
    drag = state.drag
    cursor_point = as_vector(cursor_point)

    if isinstance(drag, DraggingAll):
        if hyperboloid_distance(BASE_PT, cursor_point) > config.action_radius:
            logger.info("Cursor left the action radius, drag cancelled")
            return replace(state, drag=IDLE)
        if hyperboloid_distance(drag.last_point, cursor_point) <= config.distance_threshold:
            return state
        points = transport_scene(
            state.scene.points, drag.last_point, cursor_point, config.exp_distance_threshold
        )
        return SceneState(state.scene.with_points(points), DraggingAll(cursor_point))

    if isinstance(drag, DraggingOne):
        point = state.scene.points[drag.index]
        tangent = single_point_tangent(point, cursor_point, config.single_point_drag_multiplier)
        if tangent_norm(tangent) <= config.distance_threshold:
            return state
        tentative_point = exponential(point, tangent, config.exp_distance_threshold)
        return replace(state, drag=DraggingOne(drag.index, tentative_point))

    return state


def end_drag(state: SceneState) -> SceneState:
    """End the drag session, committing a dragged point to the scene."""
    drag = state.drag
    if isinstance(drag, DraggingOne):
        logger.debug(f"Committing point {drag.index}")
        return SceneState(state.scene.with_point(drag.index, drag.tentative_point), IDLE)
    return replace(state, drag=IDLE)


def cancel_drag(state: SceneState) -> SceneState:
    """Abandon the drag session; a tentative point is discarded."""
    if isinstance(state.drag, DraggingOne):
        logger.debug(f"Discarding tentative location of point {state.drag.index}")
    return replace(state, drag=IDLE)

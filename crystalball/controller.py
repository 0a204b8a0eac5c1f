"""
Pointer-event controller.

Translates pointer events in canvas coordinates into drag-session updates.
Events are handled one at a time, each to completion, and at most one drag
session is active.
"""

import logging
from typing import Optional

import numpy as np

from .config import CrystalBallConfig
from .drag import (
    DragMode,
    DraggingOne,
    SceneState,
    begin_drag,
    cancel_drag,
    drag_to,
    end_drag,
)
from .geometry.linalg import Vector
from .scene import Scene, default_scene
from .viewport import Viewport


logger = logging.getLogger(__name__)


class DragController:
    """
    Owns the scene being shown and the drag session acting on it.

    Args:
        scene: Initial scene; the default four-point square if omitted
        config: Interaction and display configuration
        viewport: Canvas mapping; built from ``config.display`` if omitted

    Example:
        >>> controller = DragController()
        >>> controller.pointer_down((260, 240))
        >>> controller.pointer_move((270, 235))
        >>> controller.pointer_up()
    """

    def __init__(
        self,
        scene: Optional[Scene] = None,
        config: Optional[CrystalBallConfig] = None,
        viewport: Optional[Viewport] = None
    ):
        self.config = config or CrystalBallConfig()
        self.viewport = viewport or Viewport(display=self.config.display)
        self.state = SceneState(scene if scene is not None else default_scene())

    @property
    def scene(self) -> Scene:
        return self.state.scene

    @property
    def mode(self) -> DragMode:
        return self.state.mode

    @property
    def selected_index(self) -> Optional[int]:
        return self.state.selected_index

    @property
    def tentative_point(self) -> Optional[np.ndarray]:
        if isinstance(self.state.drag, DraggingOne):
            return self.state.drag.tentative_point
        return None

    def load_scene(self, scene: Scene) -> None:
        """Replace the scene, abandoning any drag in progress."""
        self.state = SceneState(scene)

    def pointer_down(self, coords: Vector) -> DragMode:
        """Start a drag at the canvas coordinates; returns the resulting mode."""
        if self.state.is_dragging:
            logger.debug("Pointer down during a drag, ending the previous drag")
            self.state = end_drag(self.state)
        if not self.viewport.contains(coords):
            return self.mode
        cursor_point = self.viewport.canvas_to_hyperboloid(coords)
        hit_index = self.viewport.hit_test(self.scene.points, coords)
        self.state = begin_drag(self.state, cursor_point, hit_index, self.config.interaction)
        return self.mode

    def pointer_move(self, coords: Vector) -> DragMode:
        """Update the drag for the pointer now at the canvas coordinates."""
        if not self.state.is_dragging:
            return self.mode
        if not self.viewport.contains(coords):
            return self.pointer_leave()
        cursor_point = self.viewport.canvas_to_hyperboloid(coords)
        self.state = drag_to(self.state, cursor_point, self.config.interaction)
        return self.mode

    def pointer_up(self) -> DragMode:
        """End the drag, committing a dragged point."""
        self.state = end_drag(self.state)
        return self.mode

    def pointer_leave(self) -> DragMode:
        """The pointer left the canvas; ends the drag like a pointer up."""
        return self.pointer_up()

    def cancel(self) -> DragMode:
        """Abandon the drag, discarding a dragged point's new location."""
        self.state = cancel_drag(self.state)
        return self.mode

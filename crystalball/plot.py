"""
Drawing scenes on the Poincaré disc with matplotlib.

Points are drawn as circles shrinking with their distance from the centre of
the disc and labelled with their index; edges are drawn as geodesic arcs, or
as straight segments when they lie on a diameter.
"""

import logging
import math
from pathlib import Path
from typing import Optional, Union

import matplotlib.pyplot as plt
import matplotlib.patches as patches
import numpy as np

from .config import CrystalBallConfig
from .drag import DraggingOne, SceneState
from .exceptions import DegenerateInputError, RenderingError
from .geometry import geodesic_arc, hyperboloid_to_disc
from .scene import Scene
from .viewport import Viewport


logger = logging.getLogger(__name__)


def _draw_geodesic(ax, start_pt, end_pt, zorder: int = 1, **style) -> None:
    """Draw the geodesic between two disc points, straight if it lies on a diameter."""
    try:
        arc = geodesic_arc(start_pt, end_pt)
    except DegenerateInputError:
        ax.plot([start_pt[0], end_pt[0]], [start_pt[1], end_pt[1]], zorder=zorder, **style)
        return
    ax.add_patch(patches.Arc(
        tuple(arc.centre),
        2 * arc.radius,
        2 * arc.radius,
        theta1=math.degrees(arc.start_angle),
        theta2=math.degrees(arc.end_angle),
        zorder=zorder,
        **style
    ))


def _draw_point(ax, viewport: Viewport, point, label: str, color: str, zorder: int = 3) -> None:
    disc_pt = hyperboloid_to_disc(point)
    radius = viewport.point_radius(point) / viewport.radius_px
    ax.add_patch(patches.Circle(tuple(disc_pt), radius, color=color, zorder=zorder))
    offset = np.array(viewport.display.label_offset) / viewport.radius_px
    ax.annotate(
        label,
        xy=tuple(disc_pt + radius * np.array([1.0, 0.0]) + offset),
        fontsize=viewport.font_size(point),
        va="center",
        zorder=zorder,
    )


def plot_scene(
    scene: Union[Scene, SceneState],
    config: Optional[CrystalBallConfig] = None,
    ax=None,
    title: Optional[str] = None,
    show_labels: bool = True
):
    """
    Plot a scene on the Poincaré disc.

    When given a :class:`SceneState` with a single point being dragged, the
    point is highlighted and its tentative location is drawn joined to it by
    a dashed geodesic.

    Args:
        scene: Scene, or scene state, to draw
        config: Display configuration
        ax: Axes to draw on; a new figure is created if omitted
        title: Optional plot title
        show_labels: Whether to label points with their index

    Returns:
        The matplotlib figure
    """
    config = config or CrystalBallConfig()
    display = config.display
    viewport = Viewport(display=display)

    state = scene if isinstance(scene, SceneState) else SceneState(scene)
    scene = state.scene

    if ax is None:
        fig, ax = plt.subplots(figsize=display.figure_size, dpi=display.dpi)
    else:
        fig = ax.figure

    ax.add_patch(patches.Circle((0, 0), 1, fill=False, color="black", linewidth=1))

    disc_points = scene.disc_points()
    for i, j in scene.edges:
        _draw_geodesic(ax, disc_points[i], disc_points[j], color="black", linewidth=1)

    selected = state.selected_index
    for index, point in enumerate(scene.points):
        color = display.color_selected if index == selected else display.color_unselected
        _draw_point(ax, viewport, point, str(index) if show_labels else "", color)

    if isinstance(state.drag, DraggingOne):
        tentative = state.drag.tentative_point
        start_pt = disc_points[state.drag.index]
        end_pt = hyperboloid_to_disc(tentative)
        _draw_geodesic(
            ax, start_pt, end_pt, zorder=2,
            color=display.color_selected, linestyle="--", linewidth=1
        )
        _draw_point(ax, viewport, tentative, "", display.color_selected, zorder=4)

    ax.set_xlim(-1.05, 1.05)
    ax.set_ylim(-1.05, 1.05)
    ax.set_aspect("equal")
    ax.axis("off")
    if title:
        ax.set_title(title)

    return fig


def save_scene_plot(
    path: Union[str, Path],
    scene: Union[Scene, SceneState],
    config: Optional[CrystalBallConfig] = None,
    **kwargs
) -> Path:
    """
    Plot a scene and save the figure to ``path``.

    The image format follows the file extension.

    Raises:
        RenderingError: If the figure cannot be written
    """
    path = Path(path)
    fig = plot_scene(scene, config, **kwargs)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(path, bbox_inches="tight")
    except (OSError, ValueError) as e:
        raise RenderingError(f"Failed to save scene plot: {e}", {"path": str(path)}) from e
    finally:
        plt.close(fig)
    logger.info(f"Saved scene plot to {path}")
    return path

"""
CrystalBall scene renderer

Loads a scene of points and edges, optionally drags it around the hyperbolic
plane, and renders it on the Poincaré disc to an image file.
"""

import sys
import logging
from argparse import ArgumentParser
from pathlib import Path
from typing import List, Optional, Tuple

from crystalball.config import CrystalBallConfig, LogLevel, load_config
from crystalball.drag import SceneState, begin_drag, drag_to, end_drag
from crystalball.exceptions import CrystalBallError, ErrorHandler, InvalidInputError
from crystalball.geometry import disc_to_hyperboloid
from crystalball.parsing import array_to_pretty_string, parse_edges, parse_scene
from crystalball.plot import save_scene_plot
from crystalball.scene import DEFAULT_POINTS, Scene, default_scene


DiscPair = Tuple[float, float]


def parse_disc_pair(text: str) -> DiscPair:
    """Parse a ``U,V`` pair of Poincaré disc co-ordinates."""
    try:
        u, v = (float(value) for value in text.split(","))
    except ValueError as e:
        raise InvalidInputError(f"Expected disc co-ordinates as U,V, got {text!r}") from e
    return u, v


def parse_drag(text: str) -> Tuple[DiscPair, DiscPair]:
    """Parse a ``FROM_U,FROM_V:TO_U,TO_V`` drag into its two disc positions."""
    try:
        from_text, to_text = text.split(":")
    except ValueError as e:
        raise InvalidInputError(f"Expected a drag as FROM_U,FROM_V:TO_U,TO_V, got {text!r}") from e
    return parse_disc_pair(from_text), parse_disc_pair(to_text)


def create_argument_parser() -> ArgumentParser:
    """Create and configure the argument parser."""
    parser = ArgumentParser(
        description="CrystalBall - Render point graphs on the Poincaré disc"
    )

    parser.add_argument(
        "output_path",
        type=Path,
        help="Path for the rendered image (format follows the extension)"
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file (JSON format)"
    )

    # Scene input
    scene_group = parser.add_argument_group("Scene Input")
    scene_group.add_argument(
        "--points",
        type=Path,
        help="JSON file with an array of points (default: the built-in square)"
    )

    scene_group.add_argument(
        "--edges",
        type=Path,
        help="JSON file with an array of [i, j] index pairs"
    )

    scene_group.add_argument(
        "--disc",
        action="store_true",
        help="Points are Poincaré disc co-ordinates rather than hyperboloid co-ordinates"
    )

    # Interaction
    drag_group = parser.add_argument_group("Dragging")
    drag_group.add_argument(
        "--drag",
        action="append",
        metavar="FROM_U,FROM_V:TO_U,TO_V",
        default=[],
        help="Drag from one disc position to another before rendering; "
             "may be repeated. Write --drag=... when the first co-ordinate is negative"
    )

    drag_group.add_argument(
        "--drag-point",
        type=int,
        help="Index of the point to drag (default: drag the whole scene)"
    )

    # Logging configuration
    logging_group = parser.add_argument_group("Logging Configuration")
    logging_group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
        help="Set the logging level (default: INFO)"
    )

    logging_group.add_argument(
        "--log-file",
        type=Path,
        help="Path to log file (if not provided, logs to console only)"
    )

    # Output options
    output_group = parser.add_argument_group("Output Options")
    output_group.add_argument(
        "--save-points",
        type=Path,
        help="Write the final points as JSON to this file, as disc co-ordinates with --disc"
    )

    output_group.add_argument(
        "--title",
        help="Title for the rendered figure"
    )

    output_group.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    return parser


def create_config_from_args(args) -> CrystalBallConfig:
    """Create configuration from command line arguments."""
    config = load_config(args.config) if args.config else load_config()

    if args.log_level:
        config.logging.level = LogLevel(args.log_level)

    if args.log_file:
        config.logging.file_handler = args.log_file

    if args.verbose:
        config.logging.level = LogLevel.DEBUG

    config.logging.configure_logging()

    return config


def load_scene(args, config: CrystalBallConfig) -> Scene:
    """Load the scene named on the command line."""
    if args.points is None and args.edges is None:
        return default_scene()

    with ErrorHandler("loading scene"):
        points_text = args.points.read_text() if args.points is not None else None
        edges_text = args.edges.read_text() if args.edges is not None else "[]"

    if points_text is None:
        # new edges for the built-in points
        return Scene(DEFAULT_POINTS, parse_edges(edges_text, len(DEFAULT_POINTS) - 1))
    return parse_scene(points_text, edges_text, not args.disc, config)


def apply_drags(scene: Scene, drags: List[str], point_index, config: CrystalBallConfig) -> Scene:
    """Replay each ``FROM:TO`` drag on the scene and return the result."""
    logger = logging.getLogger(__name__)
    if point_index is not None and not 0 <= point_index < len(scene):
        raise InvalidInputError(
            f"Point index {point_index} is out of range",
            {"num_points": len(scene)}
        )

    state = SceneState(scene)
    for drag in drags:
        from_pair, to_pair = parse_drag(drag)
        state = begin_drag(state, disc_to_hyperboloid(from_pair), point_index, config.interaction)
        if not state.is_dragging:
            logger.warning(f"Drag from {from_pair} is outside the action radius, skipped")
            continue
        state = drag_to(state, disc_to_hyperboloid(to_pair), config.interaction)
        if not state.is_dragging:
            logger.warning(f"Drag to {to_pair} left the action radius, aborted")
            continue
        state = end_drag(state)
        logger.info(f"Dragged from {from_pair} to {to_pair}")
    return state.scene


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        config = create_config_from_args(args)
        logger = logging.getLogger(__name__)

        logger.info("Starting CrystalBall render")

        scene = load_scene(args, config)
        logger.info(f"Loaded scene with {len(scene)} points and {len(scene.edges)} edges")

        if args.drag:
            scene = apply_drags(scene, args.drag, args.drag_point, config)

        save_scene_plot(args.output_path, scene, config, title=args.title)

        if args.save_points:
            with ErrorHandler("saving points"):
                points = scene.disc_points() if args.disc else scene.points
                args.save_points.write_text(array_to_pretty_string(points))
            logger.info(f"Saved points to: {args.save_points}")

        return 0

    except CrystalBallError as e:
        logger = logging.getLogger(__name__)
        logger.error(f"CrystalBall error: {e}")
        return 1

    except KeyboardInterrupt:
        logger = logging.getLogger(__name__)
        logger.info("Rendering interrupted by user")
        return 130  # Standard exit code for SIGINT

    except Exception as e:
        logger = logging.getLogger(__name__)
        logger.error(f"Unexpected error: {e}")
        logger.debug("Exception details:", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""
CrystalBall - Interactive viewer for point graphs in the hyperbolic plane

Points live on the hyperboloid model of the hyperbolic plane and are shown in
the Poincaré disc. Dragging the background moves the whole scene by an
isometry; dragging a point relocates just that point.

Main components:
- Geometry kernel: exponential/logarithm maps, parallel transport, model
  conversions and geodesic arcs
- Scenes and drag sessions
- Canvas mapping, pointer-event controller and matplotlib rendering
- Parsing of user-edited points and edges

Example usage:
    from crystalball import DragController, default_scene

    controller = DragController(default_scene())
    controller.pointer_down((250, 250))
    controller.pointer_move((260, 245))
    controller.pointer_up()
    print(controller.scene.points)
"""

# Version information
__version__ = "1.0.0"

# Configuration
from .config import (
    CrystalBallConfig,
    InteractionConfig,
    ValidationConfig,
    DisplayConfig,
    LoggingConfig,
    LogLevel,
    get_default_config,
    load_config
)

# Exceptions
from .exceptions import (
    CrystalBallError,
    ConfigurationError,
    InvalidInputError,
    GeometryError,
    DegenerateInputError,
    RenderingError,
    ErrorHandler,
    handle_error
)

# Geometry kernel
from .geometry import (
    BASE_PT,
    minkowski_dot,
    hyperboloid_distance,
    tangent_norm,
    exponential,
    logarithm,
    geodesic_parallel_transport,
    conformal_factor,
    hyperboloid_to_disc,
    disc_to_hyperboloid,
    disc_tangent_to_hyperboloid,
    GeodesicArc,
    geodesic_arc
)

# Scenes and dragging
from .scene import Scene, Edge, default_scene
from .drag import (
    DragMode,
    SceneState,
    transport_scene,
    begin_drag,
    drag_to,
    end_drag,
    cancel_drag
)
from .viewport import Viewport, CanvasArc
from .controller import DragController

# Parsing
from .parsing import (
    parse_points,
    parse_disc_points,
    parse_hyperboloid_points,
    parse_edges,
    parse_scene,
    array_to_pretty_string
)


__all__ = [
    "__version__",

    # Configuration
    "CrystalBallConfig",
    "InteractionConfig",
    "ValidationConfig",
    "DisplayConfig",
    "LoggingConfig",
    "LogLevel",
    "get_default_config",
    "load_config",

    # Exceptions
    "CrystalBallError",
    "ConfigurationError",
    "InvalidInputError",
    "GeometryError",
    "DegenerateInputError",
    "RenderingError",
    "ErrorHandler",
    "handle_error",

    # Geometry kernel
    "BASE_PT",
    "minkowski_dot",
    "hyperboloid_distance",
    "tangent_norm",
    "exponential",
    "logarithm",
    "geodesic_parallel_transport",
    "conformal_factor",
    "hyperboloid_to_disc",
    "disc_to_hyperboloid",
    "disc_tangent_to_hyperboloid",
    "GeodesicArc",
    "geodesic_arc",

    # Scenes and dragging
    "Scene",
    "Edge",
    "default_scene",
    "DragMode",
    "SceneState",
    "transport_scene",
    "begin_drag",
    "drag_to",
    "end_drag",
    "cancel_drag",
    "Viewport",
    "CanvasArc",
    "DragController",

    # Parsing
    "parse_points",
    "parse_disc_points",
    "parse_hyperboloid_points",
    "parse_edges",
    "parse_scene",
    "array_to_pretty_string",
]


import logging

# Create package logger
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

# Add null handler to prevent logging errors if no handlers are configured
logger.addHandler(logging.NullHandler())

logger.debug(f"CrystalBall v{__version__} initialized")

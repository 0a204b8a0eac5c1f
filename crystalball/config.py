"""
Configuration management for crystalball.

Interaction thresholds, input validation tolerances, display sizes and logging
are grouped into validated dataclass sections combined by
:class:`CrystalBallConfig`, which can be read from and written to JSON.
"""

import json
import logging
from dataclasses import dataclass, field, asdict
from enum import Enum
from pathlib import Path
from typing import Dict, Any, Optional, Tuple, Union

from .exceptions import ConfigurationError


class LogLevel(Enum):
    """Logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class InteractionConfig:
    """Drag interaction configuration."""
    # maximum hyperbolic distance from the centre of the disc at which dragging works
    action_radius: float = 2.0
    # drags travelling less than this hyperbolic distance are ignored
    distance_threshold: float = 1e-6
    # minimum tangent length for which the exponential map is evaluated
    exp_distance_threshold: float = 1e-7
    # magnifies disc displacements when dragging a single point
    single_point_drag_multiplier: float = 4.0

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Validate interaction configuration parameters."""
        if self.action_radius <= 0:
            raise ValueError(f"Action radius must be positive, got {self.action_radius}")
        if self.distance_threshold <= 0 or self.exp_distance_threshold <= 0:
            raise ValueError("Stability thresholds must be positive")
        if self.single_point_drag_multiplier <= 0:
            raise ValueError(
                f"Drag multiplier must be positive, got {self.single_point_drag_multiplier}"
            )


@dataclass
class ValidationConfig:
    """Input validation configuration."""
    # permitted deviation of the Minkowski dot product of an input point from -1
    mdp_tolerance: float = 1e-9

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        if self.mdp_tolerance <= 0:
            raise ValueError(f"MDP tolerance must be positive, got {self.mdp_tolerance}")


@dataclass
class DisplayConfig:
    """Display configuration for canvases and rendered figures."""
    canvas_radius_px: float = 250.0
    max_point_size: float = 7.0
    min_point_size: float = 1.0
    point_shrink_rate: float = 2.0
    min_font_size: float = 4.0
    label_offset: Tuple[float, float] = (5.0, 0.0)
    color_unselected: str = "#0000ffbf"
    color_selected: str = "#ff0000"
    figure_size: Tuple[float, float] = (6.0, 6.0)
    dpi: int = 100

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Validate display configuration parameters."""
        if self.canvas_radius_px <= 0:
            raise ValueError(f"Canvas radius must be positive, got {self.canvas_radius_px}")
        if self.min_point_size <= 0:
            raise ValueError(f"Min point size must be positive, got {self.min_point_size}")
        if self.max_point_size < self.min_point_size:
            raise ValueError("Max point size must not be less than min point size")
        if self.point_shrink_rate < 0:
            raise ValueError(f"Point shrink rate must be non-negative, got {self.point_shrink_rate}")
        if self.dpi <= 0:
            raise ValueError(f"DPI must be positive, got {self.dpi}")


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: LogLevel = LogLevel.INFO
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_handler: Optional[Path] = None
    console_handler: bool = True

    def configure_logging(self) -> None:
        """Configure the logging system."""
        logger = logging.getLogger()
        logger.handlers.clear()

        level = self.level if isinstance(self.level, LogLevel) else LogLevel(self.level)
        logger.setLevel(getattr(logging, level.value))

        formatter = logging.Formatter(self.format)

        if self.console_handler:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

        if self.file_handler:
            file_handler = logging.FileHandler(self.file_handler)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)


@dataclass
class CrystalBallConfig:
    """Main configuration class that combines all sub-configurations."""
    interaction: InteractionConfig = field(default_factory=InteractionConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self):
        self.validate_all()

    def validate_all(self) -> None:
        """Validate all configuration sections."""
        self.interaction.validate()
        self.validation.validate()
        self.display.validate()

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "CrystalBallConfig":
        """Create configuration from dictionary."""
        config = cls()

        for section_name in ["interaction", "validation", "display", "logging"]:
            if section_name in config_dict:
                section = getattr(config, section_name)
                for key, value in config_dict[section_name].items():
                    if hasattr(section, key):
                        setattr(section, key, value)

        # JSON has no tuples or enums
        config.display.label_offset = tuple(config.display.label_offset)
        config.display.figure_size = tuple(config.display.figure_size)
        if not isinstance(config.logging.level, LogLevel):
            config.logging.level = LogLevel(config.logging.level)
        if config.logging.file_handler is not None:
            config.logging.file_handler = Path(config.logging.file_handler)

        config.validate_all()
        return config

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "CrystalBallConfig":
        """Load configuration from JSON file."""
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                {"config_path": str(config_path)}
            )

        with open(config_path, "r") as f:
            try:
                config_dict = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(
                    f"Configuration file is not valid JSON: {e}",
                    {"config_path": str(config_path)}
                ) from e

        return cls.from_dict(config_dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        config_dict = asdict(self)
        config_dict["logging"]["level"] = self.logging.level.value
        return config_dict

    def save(self, config_path: Union[str, Path]) -> None:
        """Save configuration to JSON file."""
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            json.dump(self.to_dict(), f, indent=2, default=str)


def get_default_config() -> CrystalBallConfig:
    """Get default configuration."""
    return CrystalBallConfig()


def load_config(config_path: Optional[Union[str, Path]] = None) -> CrystalBallConfig:
    """Load configuration from file or return default."""
    if config_path is not None:
        return CrystalBallConfig.from_file(config_path)

    default_paths = [
        Path("config.json"),
        Path("~/.crystalball/config.json").expanduser(),
    ]
    for path in default_paths:
        if path.exists():
            return CrystalBallConfig.from_file(path)

    return get_default_config()

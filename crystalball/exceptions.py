"""
Exception classes for crystalball.

This module defines the exceptions raised while parsing user-supplied scenes,
loading configuration and evaluating degenerate geometry.
"""

from typing import Optional


class CrystalBallError(Exception):
    """Base exception for all crystalball errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ConfigurationError(CrystalBallError):
    """Raised when there's an error in configuration."""
    pass


class InvalidInputError(CrystalBallError):
    """Raised when user-edited points or edges fail validation."""
    pass


class GeometryError(CrystalBallError):
    """Raised when a geometric computation cannot be carried out."""
    pass


class DegenerateInputError(GeometryError):
    """
    Raised for geometrically degenerate inputs, e.g. a geodesic arc through
    two points collinear with the origin of the disc.
    """
    pass


class RenderingError(CrystalBallError):
    """Raised when drawing a scene fails."""
    pass


def handle_error(error: Exception, context: str = "") -> CrystalBallError:
    """
    Convert generic exceptions to crystalball exceptions.

    Args:
        error: The original exception
        context: Additional context about where the error occurred

    Returns:
        An appropriate CrystalBallError subclass
    """
    if isinstance(error, CrystalBallError):
        return error

    error_type = type(error).__name__
    message = f"{context}: {error_type}: {str(error)}" if context else f"{error_type}: {str(error)}"

    if isinstance(error, (ZeroDivisionError, FloatingPointError)):
        return DegenerateInputError(message)
    elif isinstance(error, ValueError):
        return InvalidInputError(message)
    elif isinstance(error, OSError):
        details = {"filename": error.filename} if getattr(error, "filename", None) else None
        return CrystalBallError(message, details)
    elif isinstance(error, ImportError):
        return ConfigurationError(message)
    else:
        return CrystalBallError(message)


class ErrorHandler:
    """Context manager for handling errors in a consistent way."""

    def __init__(self, context: str, reraise: bool = True):
        self.context = context
        self.reraise = reraise
        self.error: Optional[CrystalBallError] = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None and issubclass(exc_type, Exception):
            self.error = handle_error(exc_val, self.context)
            if self.reraise:
                raise self.error from exc_val
            return True  # Suppress the exception
        return False

    def has_error(self) -> bool:
        """Check if an error occurred."""
        return self.error is not None

"""
CrystalBall Test Suite

This package contains unit tests for all components of the CrystalBall system.
The tests are organized by module and include:

- Unit tests for the geometry kernel against known values
- Invariant checks for drags (distances preserved, reversible moves)
- Parsing and validation of user-edited input
- Configuration and error handling
"""

import sys
import os
import tempfile
import shutil
from pathlib import Path
import numpy as np
import matplotlib

# Render figures off-screen
matplotlib.use("Agg")

# Add the parent directory to the path for importing crystalball
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from crystalball.geometry import disc_to_hyperboloid


# Test utilities and fixtures
class TestFixtures:
    """Common test fixtures and utilities."""

    @staticmethod
    def create_temp_dir() -> Path:
        """Create a temporary directory for test files."""
        return Path(tempfile.mkdtemp())

    @staticmethod
    def cleanup_temp_dir(temp_dir: Path) -> None:
        """Clean up temporary directory."""
        if temp_dir.exists():
            shutil.rmtree(temp_dir)

    @staticmethod
    def random_disc_points(n: int = 10, max_norm: float = 0.8, seed: int = 0) -> np.ndarray:
        """Random points of the disc of radius ``max_norm``, shape (n, 2)."""
        rng = np.random.default_rng(seed)
        angles = rng.uniform(0, 2 * np.pi, n)
        radii = max_norm * np.sqrt(rng.uniform(0, 1, n))
        return np.stack([radii * np.cos(angles), radii * np.sin(angles)], axis=-1)

    @staticmethod
    def random_hyperboloid_points(n: int = 10, max_norm: float = 0.8, seed: int = 0) -> np.ndarray:
        """Random points of the hyperboloid, shape (n, 3)."""
        disc_points = TestFixtures.random_disc_points(n, max_norm, seed)
        return np.array([disc_to_hyperboloid(pt) for pt in disc_points])


# Test constants
CLOSENESS = 1e-10

# Points on the hyperboloid
PT0 = [-1.8633600641133867, 3.882820430081896, 4.421357848081741]
PT1 = [3.200104921212019, -0.7136829700338203, 3.427829471908076]

# Minkowski dot product with itself is about -0.756
NOT_ON_HYPERBOLOID = [-0.5166377273919696, 0.34753460833346506, 1.0694775378431176]

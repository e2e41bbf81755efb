"""
Configuration & Constants
=========================
This module serves as the central registry for file paths and global constants.

Why is this file needed?
------------------------
1. Abstraction: Generator defaults, colour-normalisation scales and history
   limits live in one place instead of being scattered as magic numbers.
2. Deployment: It resolves the default output directory both for a source
   checkout and for a frozen (PyInstaller) build.

Exports:
    OUTPUT_PATH (str): Default directory for exported files.
"""
import sys
import os
from pathlib import Path
from typing import Tuple


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # config.py is in src/pointexplorer/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


OUTPUT_PATH: str = get_resource_path("output")

# --- Generator ---
DEFAULT_DIM_NAMES: Tuple[str, ...] = ("X", "Y", "Z", "W", "V", "U", "T", "S", "R", "Q")
MAX_DIMENSIONS: int = len(DEFAULT_DIM_NAMES)
LABELS: Tuple[str, ...] = ("Alpha", "Beta", "Gamma", "Delta", "Epsilon", "Zeta", "Eta", "Theta")
GRID_ALIGNED_PROBABILITY: float = 0.7
PATTERN_RANGE: Tuple[float, float] = (-50.0, 50.0)

# --- Session ---
MAX_HISTORY_SIZE: int = 10

# --- Colour normalisation ---
# Empirical scales; they are not derived from the batch.
VECTOR_NORM_SCALE: float = 100.0
LABELED_VECTOR_NORM_SCALE: float = 50.0
FIXED_DOMAIN: Tuple[float, float] = (-100.0, 100.0)
DEFAULT_COLOR_SCHEME: str = "viridis"

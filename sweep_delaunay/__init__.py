# Sweep-line Delaunay triangulation package.
# This file makes 'sweep_delaunay' a Python package and re-exports the public API.
import logging

from .config import DEFAULT_CONFIG, TriangulationConfig
from .delaunay_2d import Edge, Triangle, Triangulation, delaunay_triangulation_2d
from .diagnostics import TriangulationReport, verify_triangulation
from .errors import (
    DegenerateAdjacencyError,
    DuplicatePointError,
    LegalizationError,
    TriangulationError,
)
from .logging_utils import configure_logging, get_logger

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = '0.1.0'

__all__ = [
    'Triangulation',
    'Triangle',
    'Edge',
    'delaunay_triangulation_2d',
    'TriangulationConfig',
    'DEFAULT_CONFIG',
    'TriangulationReport',
    'verify_triangulation',
    'TriangulationError',
    'DuplicatePointError',
    'DegenerateAdjacencyError',
    'LegalizationError',
    'configure_logging',
    'get_logger',
]

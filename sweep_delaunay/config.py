"""Configuration for triangulation construction."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .geometry_core import COLLINEAR_EPSILON, INCIRCLE_EPSILON


@dataclass(frozen=True)
class TriangulationConfig:
    """Tolerances and safety limits used by `Triangulation`.

    Attributes
    ----------
    collinear_tol : float
        Relative tolerance (sine of the angle between offsets) used to detect
        the leading collinear run.
    incircle_tol : float
        Relative tolerance of the strict incircle test used by the legalizer.
    max_flips : int, optional
        Upper bound on Lawson flips. ``None`` derives ``max(1000, 8 * n * n)``.
    verify : bool
        Run the diagnostics after construction and raise on any problem.
    """
    collinear_tol: float = COLLINEAR_EPSILON
    incircle_tol: float = INCIRCLE_EPSILON
    max_flips: Optional[int] = None
    verify: bool = False

    def __post_init__(self):
        if self.collinear_tol < 0:
            raise ValueError(f"collinear_tol must be non-negative, got {self.collinear_tol}.")
        if not 0 <= self.incircle_tol < 1:
            raise ValueError(f"incircle_tol must be in [0, 1), got {self.incircle_tol}.")
        if self.max_flips is not None and self.max_flips < 0:
            raise ValueError(f"max_flips must be non-negative, got {self.max_flips}.")

    def flip_budget(self, n_points: int) -> int:
        if self.max_flips is not None:
            return self.max_flips
        return max(1000, 8 * n_points * n_points)


DEFAULT_CONFIG = TriangulationConfig()

__all__ = ['TriangulationConfig', 'DEFAULT_CONFIG']

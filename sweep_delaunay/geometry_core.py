"""
Core 2D vector primitives and tolerance constants used by the triangulator.

This module provides the small geometric toolkit the sweep-line construction
relies on:
- Global tolerance constants (`EPSILON`, `COLLINEAR_EPSILON`, `INCIRCLE_EPSILON`).
- Scalar 2D cross/dot products and epsilon-aware sign/zero tests, used inside
  the per-point sweep loop where per-element tensor ops would dominate runtime.
- Batched PyTorch versions of the same predicates, used for verification and
  for working on whole point sets at once.

Scalar functions take plain Python floats; batched functions take tensors of
shape (..., 2) and broadcast like any other PyTorch operation.
"""
import torch

EPSILON = 1e-7 # Global epsilon for float comparisons.

# Leading points are one collinear run while |cross(dir, offset)| stays below
# this fraction of |dir| * |offset|, i.e. the sine of the angle between them.
COLLINEAR_EPSILON = 1e-9

# Relative tolerance of the incircle test: a point must be inside the
# circumcircle by more than this fraction of the squared radius to count.
INCIRCLE_EPSILON = 1e-10


def cross_2d(ux: float, uy: float, vx: float, vy: float) -> float:
    """Z-component of the cross product of (ux, uy) and (vx, vy)."""
    return ux * vy - uy * vx


def dot_2d(ux: float, uy: float, vx: float, vy: float) -> float:
    """Dot product of (ux, uy) and (vx, vy)."""
    return ux * vx + uy * vy


def is_zero(value: float, tol: float = EPSILON) -> bool:
    """True if `value` lies within `tol` of zero (inclusive)."""
    return -tol <= value <= tol


def signum(value: float, tol: float = 0.0) -> int:
    """
    Returns the sign of `value` as -1, 0 or 1.

    Values within `tol` of zero are reported as 0. With the default `tol=0.0`
    this is the exact sign, which is what the sort comparator needs to detect
    duplicate coordinates.
    """
    if value > tol:
        return 1
    if value < -tol:
        return -1
    return 0


def orientation_2d(ax: float, ay: float, bx: float, by: float, cx: float, cy: float) -> float:
    """
    Signed doubled area of the triangle (a, b, c).

    Returns > 0 if (a, b, c) makes a counter-clockwise turn, < 0 for a clockwise
    turn and 0 if the three points are collinear.
    """
    return cross_2d(bx - ax, by - ay, cx - ax, cy - ay)


def squared_distance_2d(ax: float, ay: float, bx: float, by: float) -> float:
    dx = ax - bx
    dy = ay - by
    return dot_2d(dx, dy, dx, dy)


# --- Batched (tensor) versions ---

def cross_2d_batched(u: torch.Tensor, v: torch.Tensor) -> torch.Tensor:
    """
    Z-component of the 2D cross product for tensors of shape (..., 2).

    Args:
        u (torch.Tensor): Tensor of shape (..., 2).
        v (torch.Tensor): Tensor of shape (..., 2), broadcastable against `u`.

    Returns:
        torch.Tensor: Tensor of shape (...,) with `u.x * v.y - u.y * v.x`.
    """
    return u[..., 0] * v[..., 1] - u[..., 1] * v[..., 0]


def dot_2d_batched(u: torch.Tensor, v: torch.Tensor) -> torch.Tensor:
    return (u * v).sum(dim=-1)


def orientation_2d_batched(a: torch.Tensor, b: torch.Tensor, c: torch.Tensor) -> torch.Tensor:
    """Batched `orientation_2d`; negative entries are clockwise triangles."""
    return cross_2d_batched(b - a, c - a)

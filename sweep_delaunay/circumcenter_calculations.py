"""
Computes circumcircles of 2D triangles.

The circumcircle is the unique circle passing through the three vertices of a
triangle. The sweep-line triangulator caches the circumcenter and squared
circumradius of every triangle it creates and uses them in the Delaunay
(empty circumcircle) test that drives Lawson flips.

Two flavours are provided:
- `circumcircle_2d` works on plain Python floats and is called once per
  triangle update inside the construction loop.
- `compute_triangle_circumcircles_2d` works on a whole `(M, 3)` simplex tensor
  at once and is used for verification and tensor exports.
"""
import math

import torch

from .geometry_core import INCIRCLE_EPSILON


def circumcircle_2d(ax: float, ay: float, bx: float, by: float, cx: float, cy: float):
    """
    Computes the circumcenter and squared circumradius of the triangle (a, b, c).

    Uses the closed-form expression
    D = 2 * (ax(by-cy) + bx(cy-ay) + cx(ay-by)),
    Ux = (|a|^2(by-cy) + |b|^2(cy-ay) + |c|^2(ay-by)) / D,
    Uy = (|a|^2(cx-bx) + |b|^2(ax-cx) + |c|^2(bx-ax)) / D.

    Args:
        ax, ay, bx, by, cx, cy (float): Vertex coordinates.

    Returns:
        Tuple[Tuple[float, float] | None, float | None]:
            - circumcenter: `(Ux, Uy)`, or `None` if the vertices are exactly collinear.
            - squared_radius: squared circumradius, or `None` if collinear.
    """
    d_val = 2.0 * (ax * (by - cy) + bx * (cy - ay) + cx * (ay - by))
    if d_val == 0.0: # Zero-area triangle, no circumcircle
        return None, None

    a_sq = ax * ax + ay * ay
    b_sq = bx * bx + by * by
    c_sq = cx * cx + cy * cy

    ux = (a_sq * (by - cy) + b_sq * (cy - ay) + c_sq * (ay - by)) / d_val
    uy = (a_sq * (cx - bx) + b_sq * (ax - cx) + c_sq * (bx - ax)) / d_val

    dx = ax - ux
    dy = ay - uy
    return (ux, uy), dx * dx + dy * dy


def is_point_in_circumcircle(px: float, py: float, circumcenter, squared_radius,
                             tol: float = INCIRCLE_EPSILON) -> bool:
    """
    Checks if (px, py) is strictly inside a cached circumcircle.

    A point counts as inside only if its squared distance to the circumcenter is
    smaller than `squared_radius * (1 - tol)`. Points on the circle (cocircular
    configurations) are therefore never reported as inside, which is what keeps
    the flip loop from oscillating between the two diagonals of a cyclic
    quadrilateral.

    Args:
        px, py (float): Coordinates of the point to test.
        circumcenter (Tuple[float, float] | None): Cached circumcenter.
        squared_radius (float | None): Cached squared circumradius.
        tol (float, optional): Relative tolerance. Defaults to `INCIRCLE_EPSILON`.

    Returns:
        bool: True if strictly inside. False for degenerate triangles (`circumcenter is None`).
    """
    if circumcenter is None:
        return False
    dx = px - circumcenter[0]
    dy = py - circumcenter[1]
    dist_sq = dx * dx + dy * dy
    if not math.isfinite(squared_radius):
        return False
    return dist_sq < squared_radius * (1.0 - tol)


def compute_triangle_circumcircles_2d(points: torch.Tensor, simplices: torch.Tensor):
    """
    Batched circumcircles for a set of triangles.

    Args:
        points (torch.Tensor): Tensor of shape (N, 2) with point coordinates.
        simplices (torch.Tensor): Long tensor of shape (M, 3) with vertex indices into `points`.

    Returns:
        Tuple[torch.Tensor, torch.Tensor]:
            - circumcenters (torch.Tensor): Shape (M, 2). Rows of degenerate triangles are NaN.
            - squared_radii (torch.Tensor): Shape (M,). Entries of degenerate triangles are +inf.
    """
    pts = points.to(torch.float64)
    if simplices.numel() == 0:
        return (torch.empty((0, 2), dtype=torch.float64, device=points.device),
                torch.empty((0,), dtype=torch.float64, device=points.device))

    a = pts[simplices[:, 0]]
    b = pts[simplices[:, 1]]
    c = pts[simplices[:, 2]]
    ax, ay = a[:, 0], a[:, 1]
    bx, by = b[:, 0], b[:, 1]
    cx, cy = c[:, 0], c[:, 1]

    d_val = 2.0 * (ax * (by - cy) + bx * (cy - ay) + cx * (ay - by))
    degenerate = d_val == 0
    safe_d = torch.where(degenerate, torch.ones_like(d_val), d_val)

    a_sq = ax ** 2 + ay ** 2
    b_sq = bx ** 2 + by ** 2
    c_sq = cx ** 2 + cy ** 2
    ux = (a_sq * (by - cy) + b_sq * (cy - ay) + c_sq * (ay - by)) / safe_d
    uy = (a_sq * (cx - bx) + b_sq * (ax - cx) + c_sq * (bx - ax)) / safe_d

    centers = torch.stack([ux, uy], dim=1)
    squared_radii = torch.sum((a - centers) ** 2, dim=1)

    centers[degenerate] = float('nan')
    squared_radii[degenerate] = float('inf')
    return centers, squared_radii

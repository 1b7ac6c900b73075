"""
Read-only verification of a finished triangulation.

These checks restate the structural guarantees of the construction as code:
edge/triangle adjacency, clockwise winding, a closed convex hull, the planar
triangle count `2n - h - 2` and the empty-circumcircle property. They never
modify the triangulation and are used by the test suite and by
`TriangulationConfig(verify=True)`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import torch

from .circumcenter_calculations import compute_triangle_circumcircles_2d
from .geometry_core import orientation_2d, orientation_2d_batched


def expected_triangle_count(n_points: int, n_hull_points: int) -> int:
    """Triangle count of any triangulation of `n_points` whose hull passes through `n_hull_points`."""
    if n_points < 3:
        return 0
    return 2 * n_points - n_hull_points - 2


def _is_sliver_hull(tri) -> bool:
    """True for the zero-width forward/backward hull left by an all-collinear input."""
    return not tri.triangles() and len(tri.hull()) > 0


def check_adjacency(tri) -> List[str]:
    """
    Cross-checks triangles against edges.

    Every triangle side must hold an edge with the same endpoints that names the
    triangle as `inside` or `outside`; internal edges must be referenced by two
    triangles, hull edges by exactly one; triangles must wind clockwise.
    """
    problems = []
    references = {}
    for triangle in tri.triangles():
        v = triangle.vertices
        for slot, e in enumerate(triangle.edges):
            edge = tri.edge(e)
            if {edge.a, edge.b} != {v[slot], v[(slot + 1) % 3]}:
                problems.append(f"triangle {triangle.index} slot {slot} holds edge {e} ({edge.a}-{edge.b})")
            if triangle.index not in (edge.inside, edge.outside):
                problems.append(f"edge {e} does not point back at triangle {triangle.index}")
            references[e] = references.get(e, 0) + 1

    hull_edges = {edge.index for edge in tri.hull()}
    sliver = _is_sliver_hull(tri)
    for edge in tri.edges():
        count = references.get(edge.index, 0)
        if edge.index in hull_edges:
            expected = 0 if sliver else 1
            if count != expected or (not sliver and edge.is_internal):
                problems.append(f"hull edge {edge.index} is referenced by {count} triangles")
        elif count != 2 or not edge.is_internal:
            problems.append(f"internal edge {edge.index} is referenced by {count} triangles")

    simplices = tri.simplices
    if simplices.numel():
        pts = tri.points
        orient = orientation_2d_batched(pts[simplices[:, 0]], pts[simplices[:, 1]], pts[simplices[:, 2]])
        for t in torch.nonzero(orient >= 0).flatten().tolist():
            problems.append(f"triangle {t} is not clockwise")
    return problems


def check_hull(tri, rel_tol: float = 1e-9) -> List[str]:
    """
    Checks that the hull is closed, head-to-tail, clockwise and convex.

    Consecutive hull edges may be collinear (boundary points lying on a hull
    side stay hull vertices). A counter-clockwise turn larger than
    `rel_tol * extent^2` is reported as a convexity violation.
    """
    hull = tri.hull()
    if not hull:
        return []
    problems = []
    pts = tri.points
    xs = pts[:, 0].tolist()
    ys = pts[:, 1].tolist()
    extent = max(max(xs) - min(xs), max(ys) - min(ys))
    tol = rel_tol * extent * extent

    for i, edge in enumerate(hull):
        nxt = hull[(i + 1) % len(hull)]
        if edge.b != nxt.a:
            problems.append(f"hull edge {edge.index} ends at {edge.b} but next starts at {nxt.a}")
            continue
        turn = orientation_2d(xs[edge.a], ys[edge.a], xs[edge.b], ys[edge.b], xs[nxt.b], ys[nxt.b])
        if turn > tol:
            problems.append(f"hull turns counter-clockwise at point {edge.b}")
    return problems


def count_delaunay_violations(points: torch.Tensor, simplices: torch.Tensor,
                              rel_tol: float = 1e-4, chunk_size: int = 1024) -> int:
    """
    Counts (triangle, point) pairs where the point is strictly inside the
    triangle's circumcircle.

    Every point is tested against every circumcircle, in chunks of triangles to
    bound memory. A point counts as inside if its squared distance to the
    circumcenter is below `squared_radius * (1 - rel_tol)`. Vertices of the
    triangle itself and zero-area triangles are skipped.

    Args:
        points (torch.Tensor): Tensor of shape (N, 2).
        simplices (torch.Tensor): Long tensor of shape (M, 3).
        rel_tol (float, optional): Relative tolerance. Defaults to 1e-4.
        chunk_size (int, optional): Triangles processed per batch.

    Returns:
        int: Number of violating pairs (0 for a Delaunay triangulation).
    """
    if simplices.numel() == 0:
        return 0
    pts = points.to(torch.float64)
    centers, squared_radii = compute_triangle_circumcircles_2d(pts, simplices)
    violations = 0
    for start in range(0, simplices.shape[0], chunk_size):
        stop = start + chunk_size
        c = centers[start:stop]
        r_sq = squared_radii[start:stop]
        dist_sq = torch.sum((c.unsqueeze(1) - pts.unsqueeze(0)) ** 2, dim=2) # (chunk, N)
        inside = dist_sq < (r_sq * (1.0 - rel_tol)).unsqueeze(1)
        inside.scatter_(1, simplices[start:stop], False)
        violations += int(inside.sum())
    return violations


@dataclass
class TriangulationReport:
    """Outcome of `verify_triangulation`."""
    num_points: int
    num_triangles: int
    num_hull_edges: int
    expected_triangles: int
    adjacency_problems: List[str] = field(default_factory=list)
    hull_problems: List[str] = field(default_factory=list)
    delaunay_violations: int = 0

    @property
    def euler_ok(self) -> bool:
        return self.num_triangles == self.expected_triangles

    @property
    def ok(self) -> bool:
        return (self.euler_ok and not self.adjacency_problems and not self.hull_problems
                and self.delaunay_violations == 0)

    def summary(self) -> str:
        parts = [f"{self.num_triangles} triangles (expected {self.expected_triangles})"]
        parts.extend(self.adjacency_problems[:5])
        parts.extend(self.hull_problems[:5])
        if self.delaunay_violations:
            parts.append(f"{self.delaunay_violations} empty-circumcircle violations")
        return "; ".join(parts)


def verify_triangulation(tri, rel_tol: float = 1e-4) -> TriangulationReport:
    """Runs every check on a finished `Triangulation`."""
    n_points = tri.points.shape[0]
    hull = tri.hull()
    if _is_sliver_hull(tri):
        expected = 0
    else:
        expected = expected_triangle_count(n_points, len({edge.a for edge in hull}))
    return TriangulationReport(
        num_points=n_points,
        num_triangles=len(tri.triangles()),
        num_hull_edges=len(hull),
        expected_triangles=expected,
        adjacency_problems=check_adjacency(tri),
        hull_problems=check_hull(tri),
        delaunay_violations=count_delaunay_violations(tri.points, tri.simplices, rel_tol),
    )


__all__ = [
    'expected_triangle_count',
    'check_adjacency',
    'check_hull',
    'count_delaunay_violations',
    'TriangulationReport',
    'verify_triangulation',
]

"""
Computes 2D Delaunay triangulations with a sweep-line construction.

This module provides the public entry points of the package:
- `Triangulation`, which builds the triangulation of a point set in its
  constructor and then exposes it read-only (triangles, hull edges, all edges
  and PyTorch tensor exports).
- `delaunay_triangulation_2d`, a functional wrapper returning the `(M, 3)`
  tensor of point indices, for callers that only need the simplices.

Construction sorts the points (ascending x, descending y), seeds the hull with
a triangle or a collinear sliver, fans every further point onto the hull edges
facing it, and finally drains the Lawson-flip stack until every edge is
locally Delaunay.
"""
from typing import NamedTuple, Optional, Tuple

import torch

from .config import DEFAULT_CONFIG, TriangulationConfig
from .diagnostics import verify_triangulation
from .errors import TriangulationError
from .graph import Hull, TriangleEdgeGraph
from .legalize import legalize
from .logging_utils import get_logger
from .point_set import PointSet
from .sweep import seed, sweep

logger = get_logger(__name__)


class Edge(NamedTuple):
    """Read-only edge: handles `a`, `b` and adjacent triangle indices (None on the hull side)."""
    index: int
    a: int
    b: int
    inside: Optional[int]
    outside: Optional[int]

    @property
    def is_internal(self) -> bool:
        return self.inside is not None and self.outside is not None


class Triangle(NamedTuple):
    """
    Read-only triangle.

    `vertices` are point handles in clockwise order, `edges[i]` is the index of
    the edge from `vertices[i]` to `vertices[(i + 1) % 3]`. `circumcenter` and
    `circumradius_sq` are None for a zero-area triangle.
    """
    index: int
    vertices: Tuple[int, int, int]
    edges: Tuple[int, int, int]
    circumcenter: Optional[Tuple[float, float]]
    circumradius_sq: Optional[float]

    @property
    def a(self) -> int:
        return self.vertices[0]

    @property
    def b(self) -> int:
        return self.vertices[1]

    @property
    def c(self) -> int:
        return self.vertices[2]


class Triangulation:
    """
    Delaunay triangulation of a 2D point set.

    Points are referred to by handle: their position in the input. Building
    happens entirely inside the constructor; if it raises, no object exists.

    Attributes:
        num_flips (int): Lawson flips performed during legalization.
        config (TriangulationConfig): Tolerances the triangulation was built with.
    """

    def __init__(self, points, config: Optional[TriangulationConfig] = None):
        """
        Builds the triangulation.

        Args:
            points: Tensor of shape (N, 2), sequence of (x, y) pairs, or sequence
                of objects exposing `.x` and `.y`. Fewer than three points give an
                empty triangulation.
            config (TriangulationConfig, optional): Tolerances and limits.
                Defaults to `DEFAULT_CONFIG`.

        Raises:
            ValueError: If the input is malformed.
            DuplicatePointError: If two inputs share exactly the same coordinates.
            DegenerateAdjacencyError: On an internal graph bookkeeping failure.
            LegalizationError: If the flip budget is exhausted.
        """
        self.config = config if config is not None else DEFAULT_CONFIG
        self._point_set = PointSet(points)
        self._triangles = ()
        self._edges = ()
        self._hull = ()
        self.num_flips = 0

        n_points = len(self._point_set)
        if n_points < 3:
            logger.debug("Fewer than 3 points (%d), empty triangulation", n_points)
            return

        order = self._point_set.sweep_order()
        graph = TriangleEdgeGraph(self._point_set.xs, self._point_set.ys)
        hull = Hull(graph)
        first = seed(graph, hull, order, self.config.collinear_tol)
        sweep(graph, hull, order, first)
        self.num_flips = legalize(graph, self.config.incircle_tol, self.config.flip_budget(n_points))
        self._freeze(graph, hull)

        logger.debug(
            "Triangulated %d points into %d triangles (%d hull edges, %d flips)",
            n_points, len(self._triangles), len(self._hull), self.num_flips,
        )

        if self.config.verify:
            report = verify_triangulation(self)
            if not report.ok:
                raise TriangulationError(f"Triangulation failed verification: {report.summary()}")

    def _freeze(self, graph: TriangleEdgeGraph, hull: Hull):
        """Copies the live part of the graph into immutable views with dense edge indices."""
        live = set(hull.edges)
        for tri in graph.triangles:
            live.update(tri.edges)
        remap = {old: new for new, old in enumerate(sorted(live))}

        self._edges = tuple(
            Edge(remap[old], graph.edges[old].a, graph.edges[old].b,
                 graph.edges[old].inside, graph.edges[old].outside)
            for old in sorted(live)
        )
        self._triangles = tuple(
            Triangle(t, (tri.a, tri.b, tri.c), tuple(remap[e] for e in tri.edges),
                     tri.circumcenter, tri.circumradius_sq)
            for t, tri in enumerate(graph.triangles)
        )
        self._hull = tuple(self._edges[remap[e]] for e in hull.edges)

    # --- Read-only views ---

    def triangles(self) -> Tuple[Triangle, ...]:
        """All triangles, in creation order."""
        return self._triangles

    def hull(self) -> Tuple[Edge, ...]:
        """Boundary edges in clockwise, head-to-tail order."""
        return self._hull

    def edges(self) -> Tuple[Edge, ...]:
        """Every edge of the triangulation, hull edges included."""
        return self._edges

    def triangle(self, index: int) -> Triangle:
        return self._triangles[index]

    def edge(self, index: int) -> Edge:
        return self._edges[index]

    def __len__(self):
        return len(self._triangles)

    def __repr__(self):
        return (f"Triangulation(points={len(self._point_set)}, triangles={len(self._triangles)}, "
                f"hull_edges={len(self._hull)}, flips={self.num_flips})")

    # --- Tensor exports ---

    @property
    def points(self) -> torch.Tensor:
        """Float64 tensor of shape (N, 2) with the input coordinates (a copy)."""
        return self._point_set.coords.clone()

    @property
    def simplices(self) -> torch.Tensor:
        """Long tensor of shape (M, 3): point handles of each triangle, clockwise."""
        if not self._triangles:
            return torch.empty((0, 3), dtype=torch.long)
        return torch.tensor([tri.vertices for tri in self._triangles], dtype=torch.long)

    @property
    def hull_vertices(self) -> torch.Tensor:
        """Long tensor of shape (H,): handles of the hull vertices in clockwise order."""
        return torch.tensor([edge.a for edge in self._hull], dtype=torch.long)

    @property
    def hull_simplices(self) -> torch.Tensor:
        """Long tensor of shape (H, 2): the hull edges as (a, b) handle pairs."""
        if not self._hull:
            return torch.empty((0, 2), dtype=torch.long)
        return torch.tensor([(edge.a, edge.b) for edge in self._hull], dtype=torch.long)

    @property
    def circumcenters(self) -> torch.Tensor:
        """Float64 tensor of shape (M, 2); NaN rows for zero-area triangles."""
        nan = float('nan')
        rows = [tri.circumcenter if tri.circumcenter is not None else (nan, nan) for tri in self._triangles]
        if not rows:
            return torch.empty((0, 2), dtype=torch.float64)
        return torch.tensor(rows, dtype=torch.float64)

    @property
    def circumradii_sq(self) -> torch.Tensor:
        """Float64 tensor of shape (M,); +inf for zero-area triangles."""
        return torch.tensor(
            [tri.circumradius_sq if tri.circumradius_sq is not None else float('inf') for tri in self._triangles],
            dtype=torch.float64,
        )


def delaunay_triangulation_2d(points, config: Optional[TriangulationConfig] = None) -> torch.Tensor:
    """
    Computes the 2D Delaunay triangulation of a set of points.

    Args:
        points: Tensor of shape (N, 2), or any input accepted by `Triangulation`.
        config (TriangulationConfig, optional): Tolerances and limits.

    Returns:
        torch.Tensor: Tensor of shape (M, 3) with the input indices (0 to N-1) of
                      the three points of each triangle, in clockwise order.
                      Returns an empty `(0, 3)` tensor if N < 3 or all points are collinear.

    Raises:
        DuplicatePointError: If two input points have identical coordinates.
    """
    return Triangulation(points, config).simplices

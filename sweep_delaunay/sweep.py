"""
Seeding and incremental sweep-line insertion.

Points are consumed in sweep order (ascending x, descending y on ties). Each new
point lies outside the current hull, so it is connected to every hull edge that
faces it, forming a fan of new triangles. Edges that may have become
non-Delaunay are pushed on the graph's legalization stack; the flips themselves
happen afterwards in `legalize.py`.
"""
from .errors import DegenerateAdjacencyError
from .geometry_core import COLLINEAR_EPSILON, orientation_2d
from .graph import Hull, TriangleEdgeGraph
from .logging_utils import get_logger
from .point_set import count_leading_collinear

logger = get_logger(__name__)


def seed(graph: TriangleEdgeGraph, hull: Hull, order, collinear_tol: float = COLLINEAR_EPSILON) -> int:
    """
    Builds the initial hull from the first sorted points.

    If more than two leading points are collinear, the hull becomes a zero-width
    sliver: a forward chain through the run followed by the backward chain. The
    two copies of each segment are linked as twins. Otherwise the first three
    points form one clockwise triangle whose edges make up the hull.

    Args:
        graph (TriangleEdgeGraph): Empty graph to seed.
        hull (Hull): Empty hull to seed.
        order (Sequence[int]): Handles in sweep order (at least three).
        collinear_tol (float, optional): Tolerance for the leading collinear run.

    Returns:
        int: Position in `order` of the first point still to be inserted.
    """
    num_collinear = count_leading_collinear(graph.xs, graph.ys, order, collinear_tol)

    if num_collinear > 2:
        forward = []
        for i in range(1, num_collinear):
            e = graph.add_edge(order[i - 1], order[i])
            forward.append(e)
            hull.append(e)
        for i in range(num_collinear - 1, 0, -1):
            e = graph.add_edge(order[i], order[i - 1])
            twin = forward[i - 1]
            graph.edges[e].twin = twin
            graph.edges[twin].twin = e
            hull.append(e)
        logger.debug("Seeded collinear sliver through %d points", num_collinear)
        return num_collinear

    p0, p1, p2 = order[0], order[1], order[2]
    xs, ys = graph.xs, graph.ys
    # Triangle and hull must wind clockwise
    if orientation_2d(xs[p0], ys[p0], xs[p1], ys[p1], xs[p2], ys[p2]) > 0:
        p1, p2 = p2, p1
    t = graph.add_triangle(p0, p1, p2)
    for a, b in ((p0, p1), (p1, p2), (p2, p0)):
        e = graph.add_edge(a, b, inside=t)
        graph.attach(e)
        hull.append(e)
    logger.debug("Seeded triangle %s", graph.triangles[t].vertices)
    return 3


def _host_edge(graph: TriangleEdgeGraph, e) -> int:
    """
    The edge record a new fan triangle should hang on.

    A sliver edge that has no triangle yet while its twin already has one is
    the same segment seen from the other side, so the twin becomes internal
    instead of leaving two boundary records for one segment.
    """
    edge = graph.edges[e]
    if edge.inside is None and edge.outside is None and edge.twin is not None:
        twin = graph.edges[edge.twin]
        if twin.inside is not None or twin.outside is not None:
            return edge.twin
    return e


def insert_point(graph: TriangleEdgeGraph, hull: Hull, p):
    """
    Fans point `p` onto the hull edges facing it and updates the hull.

    For each faced edge a triangle (edge.a, p, edge.b) is created and attached
    to that edge; consecutive fan triangles are joined by a split edge. The
    faced run is then replaced in the hull by a left pendant edge
    (first.a -> p) and a right pendant edge (p -> last.b).

    Raises:
        DegenerateAdjacencyError: If no hull edge faces `p`.
    """
    start, stop = hull.facing_run(p)
    if start == stop:
        raise DegenerateAdjacencyError(f"Point {p} does not face any hull edge.")

    faced = hull.edges[start:stop]
    first_t = prev_t = None
    for e in faced:
        edge = graph.edges[e]
        a, b = edge.a, edge.b
        t = graph.add_triangle(a, p, b)

        host = _host_edge(graph, e)
        host_edge = graph.edges[host]
        if host_edge.inside is None:
            host_edge.inside = t
        elif host_edge.outside is None:
            host_edge.outside = t
        else:
            raise DegenerateAdjacencyError(f"Hull edge {host} already has two triangles.")
        graph.triangles[t].edges[2] = host

        if prev_t is None:
            first_t = t
        else:
            split = graph.add_edge(a, p, inside=prev_t, outside=t)
            graph.attach(split)
            graph.mark(split)
        graph.mark(host)
        prev_t = t

    left = graph.add_edge(graph.edges[faced[0]].a, p, inside=first_t)
    graph.attach(left)
    right = graph.add_edge(p, graph.edges[faced[-1]].b, inside=prev_t)
    graph.attach(right)
    hull.replace_run(start, stop, (left, right))


def resolve_sliver_hull(graph: TriangleEdgeGraph, hull: Hull) -> int:
    """
    Replaces triangle-less sliver edges left on the hull by their twins.

    When every point after a collinear seed lies on one side of the run, the
    backward (or forward) chain stays on the hull without triangles while its
    twins carry them. The twin is re-oriented to the hull direction and takes
    the hull slot. A hull made only of sliver edges (all points collinear) is
    left as is.

    Returns:
        int: Number of hull slots replaced.
    """
    replaced = 0
    for i, e in enumerate(hull.edges):
        edge = graph.edges[e]
        if edge.inside is not None or edge.outside is not None or edge.twin is None:
            continue
        twin = graph.edges[edge.twin]
        if twin.inside is None and twin.outside is None:
            continue
        if twin.inside is None:
            twin.inside, twin.outside = twin.outside, None
        twin.a, twin.b = edge.a, edge.b
        hull.edges[i] = edge.twin
        replaced += 1
    return replaced


def sweep(graph: TriangleEdgeGraph, hull: Hull, order, start: int):
    """Inserts `order[start:]` one point at a time."""
    for p in order[start:]:
        insert_point(graph, hull, p)
    replaced = resolve_sliver_hull(graph, hull)
    logger.debug(
        "Sweep built %d triangles, %d hull edges (%d sliver edges merged), %d edges marked",
        len(graph.triangles), len(hull), replaced, len(graph.marked_edges),
    )

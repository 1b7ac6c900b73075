"""
Lawson-flip legalization.

After the sweep, every edge that may violate the empty-circumcircle property
sits on the graph's legalization stack. Edges are popped one at a time; an
edge whose opposite vertex lies strictly inside the circumcircle of its other
triangle is flipped to the other diagonal of the quadrilateral, and the four
surrounding edges are pushed again because the flip may have invalidated them.
"""
from .circumcenter_calculations import is_point_in_circumcircle
from .errors import LegalizationError
from .geometry_core import INCIRCLE_EPSILON
from .graph import TriangleEdgeGraph
from .logging_utils import get_logger

logger = get_logger(__name__)


def is_illegal(graph: TriangleEdgeGraph, e, tol: float = INCIRCLE_EPSILON) -> bool:
    """
    True if internal edge `e` violates the Delaunay condition.

    The vertex of `outside` opposite `e` is tested against the cached
    circumcircle of `inside`. Cocircular vertices (within `tol`) are legal, so
    a cyclic quadrilateral keeps whichever diagonal it already has.
    """
    edge = graph.edges[e]
    if not edge.is_internal():
        return False
    c = graph.opposite_point(edge.outside, e)
    inside = graph.triangles[edge.inside]
    return is_point_in_circumcircle(graph.xs[c], graph.ys[c], inside.circumcenter, inside.circumradius_sq, tol)


def flip(graph: TriangleEdgeGraph, e):
    """
    Replaces diagonal b-d of quadrilateral a-b-c-d with a-c.

    `inside` = (a, b, d) and `outside` = (b, c, d) in clockwise order become
    (a, b, c) and (a, c, d). Edge `e` is redirected to run a-c, the four outer
    edges are re-pointed at the triangle that now owns them (the new triangle as
    `inside`, the old neighbour as `outside`) and pushed for re-examination.
    """
    edge = graph.edges[e]
    inside, outside = edge.inside, edge.outside

    c = graph.opposite_point(outside, e)
    a = graph.opposite_point(inside, e)
    b = graph.left_point(inside, e)
    d = graph.left_point(outside, e)

    abe = graph.get_edge(inside, a, b)
    bce = graph.get_edge(outside, b, c)
    cde = graph.get_edge(outside, c, d)
    dae = graph.get_edge(inside, d, a)

    abt = graph.adjacent(abe, inside)
    bct = graph.adjacent(bce, outside)
    cdt = graph.adjacent(cde, outside)
    dat = graph.adjacent(dae, inside)

    graph.set_triangle(inside, a, b, c)
    graph.set_triangle_edges(inside, abe, bce, e)
    graph.set_triangle(outside, a, c, d)
    graph.set_triangle_edges(outside, e, cde, dae)

    for outer, owner, neighbour in ((abe, inside, abt), (bce, inside, bct),
                                    (cde, outside, cdt), (dae, outside, dat)):
        graph.edges[outer].inside = owner
        graph.edges[outer].outside = neighbour

    edge.a = a
    edge.b = c

    for outer in (abe, bce, cde, dae):
        graph.mark(outer)


def legalize(graph: TriangleEdgeGraph, tol: float = INCIRCLE_EPSILON, max_flips=None) -> int:
    """
    Drains the legalization stack, flipping illegal edges until none is left.

    Args:
        graph (TriangleEdgeGraph): Graph with marked edges.
        tol (float, optional): Relative incircle tolerance. Defaults to `INCIRCLE_EPSILON`.
        max_flips (int, optional): Flip budget. None means unbounded.

    Returns:
        int: Number of flips performed.

    Raises:
        LegalizationError: If the flip budget is exhausted with edges still pending.
    """
    flips = 0
    popped = 0
    while True:
        e = graph.pop_marked()
        if e is None:
            break
        popped += 1
        if not is_illegal(graph, e, tol):
            continue
        if max_flips is not None and flips >= max_flips:
            raise LegalizationError(
                f"Exceeded flip budget of {max_flips} with {len(graph.marked_edges) + 1} edges pending."
            )
        flip(graph, e)
        flips += 1
    logger.debug("Legalization examined %d edges and performed %d flips", popped, flips)
    return flips

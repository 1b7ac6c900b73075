"""
Mutable triangle/edge graph and convex hull used during construction.

Triangles and edges reference each other cyclically (a triangle knows its three
edges, an edge knows the one or two triangles beside it). Both live in arenas:
plain Python lists owned by `TriangleEdgeGraph`, and every cross reference is
an integer index into one of those lists. Points are referenced by handle (the
index of the point in the caller's input).

Records are never removed. Lawson flips rewrite triangle and edge fields in
place, so indices stay valid for the whole construction.
"""
from .circumcenter_calculations import circumcircle_2d
from .errors import DegenerateAdjacencyError
from .geometry_core import cross_2d


class EdgeRecord:
    """
    An undirected edge between handles `a` and `b`.

    `inside` and `outside` are the indices of the adjacent triangles (or None).
    A hull edge has exactly one of them set, an internal edge both. `marked`
    is True while the edge sits on the legalization stack. `twin` links the
    forward and backward copies of a segment in a collinear seed chain.
    """
    __slots__ = ('a', 'b', 'inside', 'outside', 'marked', 'twin')

    def __init__(self, a, b, inside=None, outside=None):
        self.a = a
        self.b = b
        self.inside = inside
        self.outside = outside
        self.marked = False
        self.twin = None

    def is_internal(self) -> bool:
        return self.inside is not None and self.outside is not None

    def __repr__(self):
        return f"EdgeRecord(a={self.a}, b={self.b}, inside={self.inside}, outside={self.outside})"


class TriangleRecord:
    """
    A clockwise triangle (a, b, c) with positionally aligned edge indices:
    edges[0] = a-b, edges[1] = b-c, edges[2] = c-a.
    """
    __slots__ = ('a', 'b', 'c', 'edges', 'circumcenter', 'circumradius_sq')

    def __init__(self, a, b, c):
        self.a = a
        self.b = b
        self.c = c
        self.edges = [None, None, None]
        self.circumcenter = None
        self.circumradius_sq = None

    @property
    def vertices(self):
        return (self.a, self.b, self.c)

    def __repr__(self):
        return f"TriangleRecord({self.a}, {self.b}, {self.c}, edges={self.edges})"


def _matches(p0, q0, p1, q1) -> bool:
    return (p0 == p1 and q0 == q1) or (p0 == q1 and q0 == p1)


class TriangleEdgeGraph:
    """
    Arena of triangles and edges plus the legalization stack.

    Args:
        xs, ys (Sequence[float]): Point coordinates indexed by handle.
    """

    def __init__(self, xs, ys):
        self.xs = xs
        self.ys = ys
        self.triangles = []
        self.edges = []
        self.marked_edges = [] # LIFO stack of edge indices

    # --- Triangles ---

    def add_triangle(self, a, b, c) -> int:
        self.triangles.append(TriangleRecord(a, b, c))
        index = len(self.triangles) - 1
        self.set_triangle(index, a, b, c)
        return index

    def set_triangle(self, t, a, b, c):
        """Rewrites the vertices of triangle `t` and refreshes its cached circumcircle."""
        tri = self.triangles[t]
        tri.a, tri.b, tri.c = a, b, c
        xs, ys = self.xs, self.ys
        tri.circumcenter, tri.circumradius_sq = circumcircle_2d(xs[a], ys[a], xs[b], ys[b], xs[c], ys[c])

    def set_triangle_edges(self, t, ab, bc, ca):
        self.triangles[t].edges[:] = (ab, bc, ca)

    def edge_slot(self, t, p, q) -> int:
        """Position (0, 1, 2) of the side p-q in triangle `t`, or -1 if it is not a side."""
        tri = self.triangles[t]
        if _matches(p, q, tri.a, tri.b):
            return 0
        if _matches(p, q, tri.b, tri.c):
            return 1
        if _matches(p, q, tri.c, tri.a):
            return 2
        return -1

    def _slot_of_edge(self, t, e) -> int:
        edge = self.edges[e]
        slot = self.edge_slot(t, edge.a, edge.b)
        if slot == -1:
            raise DegenerateAdjacencyError(
                f"Edge {e} ({edge.a}-{edge.b}) is not a side of triangle {t} {self.triangles[t].vertices}."
            )
        return slot

    def get_edge(self, t, p, q) -> int:
        """Edge index on side p-q of triangle `t`."""
        slot = self.edge_slot(t, p, q)
        e = self.triangles[t].edges[slot] if slot != -1 else None
        if e is None:
            raise DegenerateAdjacencyError(
                f"No edge between {p} and {q} in triangle {t} {self.triangles[t].vertices}."
            )
        return e

    def left_point(self, t, e):
        """The vertex of triangle `t` at which edge `e` starts in clockwise order."""
        tri = self.triangles[t]
        return (tri.a, tri.b, tri.c)[self._slot_of_edge(t, e)]

    def opposite_point(self, t, e):
        """The vertex of triangle `t` that is not on edge `e`."""
        tri = self.triangles[t]
        return (tri.c, tri.a, tri.b)[self._slot_of_edge(t, e)]

    # --- Edges ---

    def add_edge(self, a, b, inside=None, outside=None) -> int:
        self.edges.append(EdgeRecord(a, b, inside, outside))
        return len(self.edges) - 1

    def attach(self, e):
        """Registers edge `e` in the matching side slot of each adjacent triangle."""
        edge = self.edges[e]
        for t in (edge.inside, edge.outside):
            if t is not None:
                self.triangles[t].edges[self._slot_of_edge(t, e)] = e

    def adjacent(self, e, t):
        """The triangle on the other side of edge `e` from triangle `t` (None on the hull)."""
        edge = self.edges[e]
        if edge.inside == t:
            return edge.outside
        if edge.outside == t:
            return edge.inside
        raise DegenerateAdjacencyError(f"Triangle {t} is not adjacent to edge {e} ({edge!r}).")

    def faces(self, e, p) -> bool:
        """True if point `p` lies strictly to the left of the directed edge a->b."""
        edge = self.edges[e]
        xs, ys = self.xs, self.ys
        ax, ay = xs[edge.a], ys[edge.a]
        return cross_2d(xs[edge.b] - ax, ys[edge.b] - ay, xs[p] - ax, ys[p] - ay) > 0

    def mark(self, e):
        """Pushes an internal edge on the legalization stack unless it is already there."""
        edge = self.edges[e]
        if not edge.marked and edge.is_internal():
            edge.marked = True
            self.marked_edges.append(e)

    def pop_marked(self):
        """Pops the most recently marked edge and clears its flag; None when the stack is empty."""
        if not self.marked_edges:
            return None
        e = self.marked_edges.pop()
        self.edges[e].marked = False
        return e


class Hull:
    """
    Ordered list of boundary edge indices, clockwise and head-to-tail.

    During construction it is the convex chain swept so far (possibly the
    zero-width sliver of a collinear seed); afterwards it is the convex hull.
    """

    def __init__(self, graph: TriangleEdgeGraph):
        self.graph = graph
        self.edges = []

    def __len__(self):
        return len(self.edges)

    def __iter__(self):
        return iter(self.edges)

    def append(self, e):
        self.edges.append(e)

    def facing_run(self, p):
        """
        Finds the contiguous run of hull edges facing point `p`.

        The hull is convex and points arrive in sweep order, so the facing
        edges are contiguous and the scan stops at the first non-facing edge
        after the run.

        Returns:
            Tuple[int, int]: `(start, stop)` slice bounds into `self.edges`.
                `start == stop` if no edge faces `p`.
        """
        start = None
        for i, e in enumerate(self.edges):
            if self.graph.faces(e, p):
                if start is None:
                    start = i
            elif start is not None:
                return start, i
        if start is None:
            return 0, 0
        return start, len(self.edges)

    def replace_run(self, start, stop, new_edges):
        """Replaces `self.edges[start:stop]` with `new_edges`, returning the removed indices."""
        removed = self.edges[start:stop]
        self.edges[start:stop] = list(new_edges)
        return removed

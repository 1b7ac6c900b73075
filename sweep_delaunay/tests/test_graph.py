"""
Unit tests for the triangle/edge arena and the hull (`graph.py`).
"""
import unittest

from ..errors import DegenerateAdjacencyError
from ..graph import Hull, TriangleEdgeGraph


def _graph():
    # 0=(0,0), 1=(0,2), 2=(2,0), 3=(-1,1), 4=(2,2)
    xs = [0., 0., 2., -1., 2.]
    ys = [0., 2., 0., 1., 2.]
    return TriangleEdgeGraph(xs, ys)


class TestTriangleRecords(unittest.TestCase):
    """Triangle creation, circumcircle caching and side lookups."""

    def test_add_triangle_caches_circumcircle(self):
        graph = _graph()
        t = graph.add_triangle(0, 1, 2)
        tri = graph.triangles[t]
        self.assertEqual(tri.vertices, (0, 1, 2))
        self.assertEqual(tri.circumcenter, (1.0, 1.0))
        self.assertAlmostEqual(tri.circumradius_sq, 2.0)

    def test_set_triangle_refreshes_circumcircle(self):
        """Rewriting the vertices recomputes the cached circle."""
        graph = _graph()
        t = graph.add_triangle(0, 1, 2)
        graph.set_triangle(t, 1, 4, 2)
        tri = graph.triangles[t]
        self.assertEqual(tri.vertices, (1, 4, 2))
        self.assertEqual(tri.circumcenter, (1.0, 1.0))

    def test_edge_slot(self):
        """Sides are matched regardless of direction; non-sides give -1."""
        graph = _graph()
        t = graph.add_triangle(0, 1, 2)
        self.assertEqual(graph.edge_slot(t, 1, 0), 0)
        self.assertEqual(graph.edge_slot(t, 2, 1), 1)
        self.assertEqual(graph.edge_slot(t, 0, 2), 2)
        self.assertEqual(graph.edge_slot(t, 0, 3), -1)

    def test_attach_and_get_edge(self):
        """Attaching an edge fills the matching slot of each adjacent triangle."""
        graph = _graph()
        t = graph.add_triangle(0, 1, 2)
        e = graph.add_edge(1, 2, inside=t)
        graph.attach(e)
        self.assertEqual(graph.triangles[t].edges, [None, e, None])
        self.assertEqual(graph.get_edge(t, 2, 1), e)
        self.assertEqual(graph.left_point(t, e), 1)
        self.assertEqual(graph.opposite_point(t, e), 0)

    def test_missing_edge_raises(self):
        """Looking up an unset or non-existent side is a bookkeeping error."""
        graph = _graph()
        t = graph.add_triangle(0, 1, 2)
        with self.assertRaises(DegenerateAdjacencyError):
            graph.get_edge(t, 0, 1)
        with self.assertRaises(DegenerateAdjacencyError):
            graph.get_edge(t, 0, 3)

    def test_attach_to_wrong_triangle_raises(self):
        graph = _graph()
        t = graph.add_triangle(0, 1, 2)
        e = graph.add_edge(0, 4, inside=t)
        with self.assertRaises(DegenerateAdjacencyError):
            graph.attach(e)


class TestEdgeRecords(unittest.TestCase):
    """Adjacency, facing test and the legalization stack."""

    def test_adjacent(self):
        graph = _graph()
        t0 = graph.add_triangle(0, 1, 2)
        t1 = graph.add_triangle(1, 4, 2)
        e = graph.add_edge(1, 2, inside=t0, outside=t1)
        self.assertEqual(graph.adjacent(e, t0), t1)
        self.assertEqual(graph.adjacent(e, t1), t0)
        hull_edge = graph.add_edge(0, 1, inside=t0)
        self.assertIsNone(graph.adjacent(hull_edge, t0))
        with self.assertRaises(DegenerateAdjacencyError):
            graph.adjacent(hull_edge, t1)

    def test_faces(self):
        """A point faces a directed edge when it is strictly on its left."""
        graph = _graph()
        e = graph.add_edge(0, 1) # upwards along x = 0
        self.assertTrue(graph.faces(e, 3))
        self.assertFalse(graph.faces(e, 2))
        collinear = graph.add_edge(0, 2)
        self.assertFalse(graph.faces(collinear, 0), "Points on the line do not face the edge.")

    def test_mark_only_internal_edges_once(self):
        """Boundary edges are never pushed; internal edges are pushed at most once."""
        graph = _graph()
        t0 = graph.add_triangle(0, 1, 2)
        t1 = graph.add_triangle(1, 4, 2)
        internal = graph.add_edge(1, 2, inside=t0, outside=t1)
        boundary = graph.add_edge(0, 1, inside=t0)
        graph.mark(boundary)
        graph.mark(internal)
        graph.mark(internal)
        self.assertEqual(graph.marked_edges, [internal])
        self.assertTrue(graph.edges[internal].marked)
        self.assertFalse(graph.edges[boundary].marked)

    def test_pop_is_lifo_and_clears_flag(self):
        graph = _graph()
        t0 = graph.add_triangle(0, 1, 2)
        t1 = graph.add_triangle(1, 4, 2)
        first = graph.add_edge(1, 2, inside=t0, outside=t1)
        second = graph.add_edge(2, 1, inside=t1, outside=t0)
        graph.mark(first)
        graph.mark(second)
        self.assertEqual(graph.pop_marked(), second)
        self.assertFalse(graph.edges[second].marked)
        graph.mark(second)
        self.assertEqual(graph.pop_marked(), second, "A popped edge can be marked again.")
        self.assertEqual(graph.pop_marked(), first)
        self.assertIsNone(graph.pop_marked())


class TestHull(unittest.TestCase):
    """Tests for the facing-run scan and run replacement."""

    def _square_hull(self):
        # Clockwise square 0=(0,0) -> 1=(0,2) -> 4=(2,2) -> 2=(2,0)
        graph = _graph()
        hull = Hull(graph)
        for a, b in ((0, 1), (1, 4), (4, 2), (2, 0)):
            hull.append(graph.add_edge(a, b))
        return graph, hull

    def test_facing_run(self):
        graph, hull = self._square_hull()
        graph.xs.append(3.)
        graph.ys.append(3.)
        # (3,3) sees the top and right sides
        self.assertEqual(hull.facing_run(5), (1, 3))

    def test_facing_run_until_end(self):
        graph, hull = self._square_hull()
        graph.xs.append(1.)
        graph.ys.append(-1.)
        self.assertEqual(hull.facing_run(5), (3, 4))

    def test_no_facing_edge(self):
        graph, hull = self._square_hull()
        graph.xs.append(1.)
        graph.ys.append(1.)
        self.assertEqual(hull.facing_run(5), (0, 0))

    def test_replace_run(self):
        graph, hull = self._square_hull()
        before = list(hull)
        removed = hull.replace_run(1, 3, ('L', 'R'))
        self.assertEqual(removed, before[1:3])
        self.assertEqual(list(hull), [before[0], 'L', 'R', before[3]])
        self.assertEqual(len(hull), 4)


if __name__ == '__main__':
    unittest.main(argv=['first-arg-is-ignored'], exit=False)

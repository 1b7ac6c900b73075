"""
Unit tests for the read-only triangulation checks (`diagnostics.py`).
"""
import unittest

import torch

from ..delaunay_2d import Edge, Triangulation
from ..diagnostics import (
    check_adjacency, check_hull, count_delaunay_violations, expected_triangle_count,
    verify_triangulation,
)

# a=(-0.2,0), b=(0,1), c=(0.2,0), d=(0,-1)
KITE = torch.tensor([[-0.2, 0.], [0., 1.], [0.2, 0.], [0., -1.]], dtype=torch.float64)


class _FakeHull:
    """Just enough of a triangulation for `check_hull`."""

    def __init__(self, points, chain):
        self.points = torch.tensor(points, dtype=torch.float64)
        self._hull = tuple(Edge(i, a, b, 0, None) for i, (a, b) in enumerate(chain))

    def hull(self):
        return self._hull


class TestCounts(unittest.TestCase):

    def test_expected_triangle_count(self):
        self.assertEqual(expected_triangle_count(0, 0), 0)
        self.assertEqual(expected_triangle_count(2, 2), 0)
        self.assertEqual(expected_triangle_count(3, 3), 1)
        self.assertEqual(expected_triangle_count(4, 4), 2)
        self.assertEqual(expected_triangle_count(25, 16), 32)


class TestDelaunayViolations(unittest.TestCase):
    """Tests for `count_delaunay_violations`."""

    def test_long_diagonal_violates(self):
        """Splitting the kite along b-d puts a and c inside each other's circles."""
        bad = torch.tensor([[0, 1, 3], [1, 2, 3]])
        self.assertGreater(count_delaunay_violations(KITE, bad), 0)

    def test_short_diagonal_is_delaunay(self):
        good = torch.tensor([[0, 1, 2], [0, 2, 3]])
        self.assertEqual(count_delaunay_violations(KITE, good), 0)

    def test_chunking_does_not_change_the_count(self):
        bad = torch.tensor([[0, 1, 3], [1, 2, 3]])
        self.assertEqual(count_delaunay_violations(KITE, bad, chunk_size=1),
                         count_delaunay_violations(KITE, bad))

    def test_empty(self):
        self.assertEqual(count_delaunay_violations(KITE, torch.empty((0, 3), dtype=torch.long)), 0)


class TestHullCheck(unittest.TestCase):
    """Tests for `check_hull` on hand-made hulls."""

    SQUARE = [(0., 0.), (0., 1.), (1., 1.), (1., 0.)]

    def test_clockwise_square(self):
        tri = _FakeHull(self.SQUARE, [(0, 1), (1, 2), (2, 3), (3, 0)])
        self.assertEqual(check_hull(tri), [])

    def test_counter_clockwise_square(self):
        tri = _FakeHull(self.SQUARE, [(0, 3), (3, 2), (2, 1), (1, 0)])
        problems = check_hull(tri)
        self.assertEqual(len(problems), 4)
        self.assertIn("counter-clockwise", problems[0])

    def test_broken_chain(self):
        tri = _FakeHull(self.SQUARE, [(0, 1), (2, 3), (3, 0)])
        problems = check_hull(tri)
        self.assertTrue(any("ends at 1" in p for p in problems), problems)

    def test_collinear_hull_points_are_allowed(self):
        points = self.SQUARE + [(0., 0.5)]
        tri = _FakeHull(points, [(0, 4), (4, 1), (1, 2), (2, 3), (3, 0)])
        self.assertEqual(check_hull(tri), [])


class TestVerifyTriangulation(unittest.TestCase):
    """Tests for the combined report."""

    def test_report_on_valid_triangulation(self):
        points = torch.rand((80, 2), dtype=torch.float64, generator=torch.Generator().manual_seed(21))
        tri = Triangulation(points)
        report = verify_triangulation(tri)
        self.assertTrue(report.ok, report.summary())
        self.assertTrue(report.euler_ok)
        self.assertEqual(report.num_points, 80)
        self.assertEqual(report.num_triangles, len(tri))
        self.assertEqual(report.num_hull_edges, len(tri.hull()))
        self.assertEqual(check_adjacency(tri), [])
        self.assertTrue(report.summary().startswith(f"{len(tri)} triangles"))

    def test_report_flags_violations(self):
        """A report carrying problems is not ok and lists them in the summary."""
        report = verify_triangulation(Triangulation(KITE))
        report.delaunay_violations = 2
        report.hull_problems.append("hull turns counter-clockwise at point 3")
        self.assertFalse(report.ok)
        self.assertIn("2 empty-circumcircle violations", report.summary())
        self.assertIn("point 3", report.summary())

    def test_empty_triangulation(self):
        report = verify_triangulation(Triangulation([(0., 0.), (1., 0.)]))
        self.assertTrue(report.ok)
        self.assertEqual(report.expected_triangles, 0)


if __name__ == '__main__':
    unittest.main(argv=['first-arg-is-ignored'], exit=False)

"""Exception hierarchy for the sweep-line triangulator."""


class TriangulationError(Exception):
    """Base class for all errors raised while building a triangulation."""


class DuplicatePointError(TriangulationError, ValueError):
    """Two distinct input points share exactly the same coordinates."""

    def __init__(self, first: int, second: int, coords):
        self.first = first
        self.second = second
        self.coords = tuple(coords)
        super().__init__(
            f"Duplicate point: inputs {first} and {second} are both at {self.coords}."
        )


class DegenerateAdjacencyError(TriangulationError, RuntimeError):
    """
    The triangle/edge graph lost its bookkeeping (an edge lookup between two
    triangle vertices failed, or a point faced no hull edge).

    This is a programming error, never a consequence of user input.
    """


class LegalizationError(TriangulationError, RuntimeError):
    """The Lawson flip loop exceeded its flip budget without emptying the stack."""


__all__ = [
    'TriangulationError',
    'DuplicatePointError',
    'DegenerateAdjacencyError',
    'LegalizationError',
]

"""
Input normalization, sweep ordering and duplicate detection.

Points are identified by their *handle*: the integer position of the point in
the caller's input. Every identity comparison in the triangulator uses
handles, never coordinates. Coordinates are only read, never modified.
"""
import math

import torch

from .errors import DuplicatePointError
from .geometry_core import COLLINEAR_EPSILON, cross_2d, is_zero


def as_point_tensor(points) -> torch.Tensor:
    """
    Converts supported point collections into a float64 tensor of shape (N, 2).

    Accepted inputs:
    - a `torch.Tensor` (or anything `torch.as_tensor` understands) of shape (N, 2),
    - a sequence of `(x, y)` pairs,
    - a sequence of objects exposing `.x` and `.y` attributes.

    Raises:
        ValueError: If the input does not have shape (N, 2) or holds non-finite coordinates.
        TypeError: If elements are neither pairs nor objects with `.x`/`.y`.
    """
    if isinstance(points, torch.Tensor):
        coords = points.detach()
    else:
        items = list(points)
        if not items:
            return torch.empty((0, 2), dtype=torch.float64)
        rows = []
        for item in items:
            if hasattr(item, 'x') and hasattr(item, 'y'):
                rows.append((float(item.x), float(item.y)))
            else:
                try:
                    x, y = item
                except (TypeError, ValueError) as exc:
                    raise TypeError(
                        f"Point {len(rows)} must be an (x, y) pair or expose .x/.y, got {item!r}."
                    ) from exc
                rows.append((float(x), float(y)))
        coords = torch.tensor(rows, dtype=torch.float64)

    if coords.ndim == 1 and coords.numel() == 0:
        coords = coords.reshape(0, 2)
    if coords.ndim != 2 or coords.shape[1] != 2:
        raise ValueError(f"Input points must have shape (N, 2), got {tuple(coords.shape)}.")
    coords = coords.to(torch.float64)
    if not bool(torch.isfinite(coords).all()):
        raise ValueError("Input points must have finite coordinates.")
    return coords


def sort_points(coords: torch.Tensor) -> torch.Tensor:
    """
    Orders point handles for the sweep: ascending x, ties by descending y.

    The descending tie-break makes vertically collinear points arrive top to
    bottom. Two stable sorts are used (secondary key first), which is the
    usual way to get a lexicographic order out of `torch.sort`.

    Args:
        coords (torch.Tensor): Tensor of shape (N, 2).

    Returns:
        torch.Tensor: Long tensor of shape (N,) with handles in sweep order.

    Raises:
        DuplicatePointError: If two handles share exactly the same coordinates.
    """
    if coords.shape[0] == 0:
        return torch.empty((0,), dtype=torch.long, device=coords.device)

    by_y = torch.sort(coords[:, 1], descending=True, stable=True).indices
    by_x = torch.sort(coords[by_y, 0], stable=True).indices
    order = by_y[by_x]

    # Exact duplicates end up adjacent after a lexicographic sort.
    ordered = coords[order]
    same = torch.all(ordered[1:] == ordered[:-1], dim=1)
    if bool(same.any()):
        pos = int(torch.nonzero(same)[0, 0])
        first, second = sorted((int(order[pos]), int(order[pos + 1])))
        raise DuplicatePointError(first, second, coords[first].tolist())
    return order


def count_leading_collinear(xs, ys, order, tol: float = COLLINEAR_EPSILON) -> int:
    """
    Counts how many leading points (in sweep order) lie on the line through the
    first two.

    Args:
        xs, ys (Sequence[float]): Coordinates indexed by handle.
        order (Sequence[int]): Handles in sweep order, at least two of them.
        tol (float, optional): Relative tolerance: `|cross(p_i - p_0, p_1 - p_0)|`
            must not exceed `tol * |p_i - p_0| * |p_1 - p_0|`, so the test does
            not depend on the scale of the coordinates. Defaults to
            `COLLINEAR_EPSILON`.

    Returns:
        int: Size of the leading collinear run (always >= 2).
    """
    p0 = order[0]
    dir_x = xs[order[1]] - xs[p0]
    dir_y = ys[order[1]] - ys[p0]
    dir_norm = math.hypot(dir_x, dir_y)
    count = 2
    for handle in order[2:]:
        offset_x = xs[handle] - xs[p0]
        offset_y = ys[handle] - ys[p0]
        scale = dir_norm * math.hypot(offset_x, offset_y)
        if is_zero(cross_2d(offset_x, offset_y, dir_x, dir_y), tol * scale):
            count += 1
        else:
            break
    return count


class PointSet:
    """
    Read-only view over the validated input.

    Attributes:
        coords (torch.Tensor): Float64 tensor of shape (N, 2) in input order.
        xs (List[float]): x coordinates indexed by handle.
        ys (List[float]): y coordinates indexed by handle.
    """

    def __init__(self, points):
        self.coords = as_point_tensor(points)
        values = self.coords.cpu().tolist()
        self.xs = [v[0] for v in values]
        self.ys = [v[1] for v in values]

    def __len__(self):
        return len(self.xs)

    def sweep_order(self):
        """Handles in sweep order; raises `DuplicatePointError` on exact duplicates."""
        return sort_points(self.coords).tolist()

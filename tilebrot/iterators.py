from dataclasses import dataclass

import numpy as np

ESCAPE_RADIUS_SQ = 4.0
# Non-divergent points land in (max_iter, max_iter + INTERIOR_SCALE].
INTERIOR_SCALE = 65535
INTERIOR_MODES = ("magnitude", "cap")


@dataclass(frozen=True)
class GridSpec:
    """
    Rectangular sampling grid over the c-plane.

    The step is derived from the X range and reused for Y, so cells are
    square and the Y range covered is count_y * step.
    """
    count_x: int
    count_y: int
    min_x: float
    max_x: float
    min_y: float

    def __post_init__(self):
        if self.count_x <= 0 or self.count_y <= 0:
            raise ValueError(
                f"Grid counts must be positive, got {self.count_x}x{self.count_y}"
            )
        if not self.step > 0:
            raise ValueError(
                f"Grid step must be positive (min_x={self.min_x}, max_x={self.max_x})"
            )

    @property
    def step(self) -> float:
        return (self.max_x - self.min_x) / self.count_x

    @property
    def max_y(self) -> float:
        return self.min_y + self.count_y * self.step

    @property
    def size(self) -> int:
        return self.count_x * self.count_y


def _check_interior(interior: str):
    if interior not in INTERIOR_MODES:
        raise ValueError(f"Unknown interior mode: {interior}")


def _check_max_iter(max_iter: int):
    if max_iter < 0:
        raise ValueError(f"max_iter must be >= 0, got {max_iter}")


def _interior_value(mag2, max_iter: int, interior: str):
    if interior == "cap":
        return max_iter
    # float -> int truncates toward zero; mag2 <= 4 here so this never exceeds the scale
    return max_iter + int((mag2 / ESCAPE_RADIUS_SQ) * INTERIOR_SCALE)


def escape_time(x0: float, y0: float, max_iter: int = 1000, interior: str = "magnitude") -> int:
    """
    Escape time of c = x0 + i*y0 under z -> z^2 + c, starting from z = 0.

    Returns the iteration i at which |z|^2 first exceeds 4.0. Points that
    stay bounded for max_iter iterations return max_iter ("cap") or
    max_iter plus the final |z|^2 scaled into [0, INTERIOR_SCALE]
    ("magnitude").
    """
    _check_interior(interior)
    _check_max_iter(max_iter)

    x = y = x2 = y2 = 0.0

    for i in range(max_iter):
        y = (x + x) * y + y0
        x = x2 - y2 + x0
        x2 = x * x
        y2 = y * y

        if x2 + y2 > ESCAPE_RADIUS_SQ:
            return i

    return _interior_value(x2 + y2, max_iter, interior)


def cell_centers(start: float, step: float, count: int) -> np.ndarray:
    """Centers start + step/2, start + 3*step/2, ... built by repeated addition."""
    centers = np.empty(count, dtype=np.float64)
    v = start + step * 0.5
    for k in range(count):
        centers[k] = v
        v += step
    return centers


def sample(grid: GridSpec, max_iter: int = 1000, interior: str = "magnitude") -> np.ndarray:
    """
    Escape times for every cell center of the grid.

    The result is a flat int64 array in column-major order: X is the outer
    axis, Y the inner one, so index ix * count_y + iy holds cell (ix, iy).
    Produces the same values as calling escape_time per cell.
    """
    _check_interior(interior)
    _check_max_iter(max_iter)

    step = grid.step
    xs = cell_centers(grid.min_x, step, grid.count_x)
    ys = cell_centers(grid.min_y, step, grid.count_y)

    # column-major: x outer, y inner
    x0 = np.repeat(xs, grid.count_y)
    y0 = np.tile(ys, grid.count_x)

    n = x0.size
    times = np.full(n, -1, dtype=np.int64)

    x = np.zeros(n)
    y = np.zeros(n)
    x2 = np.zeros(n)
    y2 = np.zeros(n)

    # indices of points still iterating
    active = np.arange(n)

    for i in range(max_iter):
        if active.size == 0:
            break

        xa, ya = x[active], y[active]
        ya = (xa + xa) * ya + y0[active]
        xa = x2[active] - y2[active] + x0[active]
        x2a = xa * xa
        y2a = ya * ya

        x[active], y[active] = xa, ya
        x2[active], y2[active] = x2a, y2a

        escaped = (x2a + y2a) > ESCAPE_RADIUS_SQ
        times[active[escaped]] = i
        active = active[~escaped]

    if active.size:
        mag2 = x2[active] + y2[active]
        if interior == "cap":
            times[active] = max_iter
        else:
            # astype truncates toward zero, matching int() in escape_time
            times[active] = max_iter + ((mag2 / ESCAPE_RADIUS_SQ) * INTERIOR_SCALE).astype(np.int64)

    return times

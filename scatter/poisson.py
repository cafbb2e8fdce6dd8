"""
poisson.py
----------
Generates Poisson disk sample points for vegetation scattering, such as trees,
ensuring a minimum spacing between points to avoid clustering.

Purpose in Pipeline:
    - Step 2 (tree positions) in `main.py`.
    - Produces evenly spaced placement points for sparse objects like trees,
      where uniform randomness would cause unrealistic clustering.
    - Points are produced one at a time, so callers can stop early.

Workflow:
    1. Initialize an acceptance grid with cell size r / sqrt(2), so that a cell
       can hold at most one accepted point.
    2. Seed the grid with an initial random point.
    3. On each request:
        - Pick a random point from the active queue.
        - Generate up to `k` candidates in the annulus [r, 2r] around it.
        - Accept the first candidate that is inside the area and far enough
          from every neighbour in the surrounding 5x5 block of cells.
        - If none is accepted, retire the point from the queue and retry.
    4. Once the queue is empty the sampler is exhausted.

Inputs:
    - width, height (float): Size of the sampling area (meters).
    - min_distance (float): Minimum allowed distance between points.
    - rng (callable or None): Uniform [0, 1) source, `random.random` if None.

Outputs:
    - (x, y) tuples, one per `next_point()` call, then None forever.

Dependencies:
    - math
    - random
    - Called by `main.py` -> `PoissonClass.generate_poisson_points()`.

Example:
    sampler = PoissonDiscSampler(256, 256, 5.0, rng=random.Random(42).random)
    trees = list(sampler)
"""

import math
import numbers
import random


def check_positive(name, value):
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValueError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{name} must be a positive finite number, got {value!r}")
    return float(value)


class PoissonDiscSampler:
    """
    Bridson's grid-accelerated dart throwing over a width x height rectangle.
    """

    k = 30  # Candidates per active point before it is retired

    def __init__(self, width, height, min_distance, rng=None):
        self._width = check_positive("width", width)
        self._height = check_positive("height", height)
        self._min_distance = check_positive("min_distance", min_distance)
        if rng is None:
            rng = random.random
        elif not callable(rng):
            raise TypeError(f"rng must be a callable returning floats in [0, 1), got {rng!r}")
        self._rng = rng

        # === Derived constants ===
        self._radius2 = self._min_distance * self._min_distance
        self._outer2 = 3 * self._radius2  # annulus [r, 2r] in squared radius
        self._cell_size = self._min_distance * math.sqrt(0.5)

        # === Grid initialization ===
        self._grid_width = int(math.ceil(self._width / self._cell_size))
        self._grid_height = int(math.ceil(self._height / self._cell_size))
        self._grid = [None] * (self._grid_width * self._grid_height)

        self._queue = []
        self._sample_count = 0
        self._exhausted = False

    @classmethod
    def from_seed(cls, width, height, min_distance, seed):
        """Builds a sampler driven by a dedicated `random.Random(seed)`."""
        return cls(width, height, min_distance, rng=random.Random(seed).random)

    @property
    def width(self):
        return self._width

    @property
    def height(self):
        return self._height

    @property
    def min_distance(self):
        return self._min_distance

    @property
    def cell_size(self):
        return self._cell_size

    @property
    def grid_shape(self):
        """(columns, rows) of the acceptance grid."""
        return self._grid_width, self._grid_height

    @property
    def sample_count(self):
        return self._sample_count

    @property
    def exhausted(self):
        return self._exhausted

    def cell_coords(self, x, y):
        """
        Grid cell (column, row) holding the point (x, y).

        Clamped to the last column/row for the rare x/cell_size that rounds up
        to the grid edge.
        """
        i = min(int(x / self._cell_size), self._grid_width - 1)
        j = min(int(y / self._cell_size), self._grid_height - 1)
        return i, j

    def _far(self, x, y):
        """True when no accepted point lies closer than min_distance to (x, y)."""
        i, j = self.cell_coords(x, y)
        i0 = max(i - 2, 0)
        j0 = max(j - 2, 0)
        i1 = min(i + 3, self._grid_width)
        j1 = min(j + 3, self._grid_height)

        for row in range(j0, j1):
            offset = row * self._grid_width
            for col in range(i0, i1):
                neighbor = self._grid[offset + col]
                if neighbor is not None:
                    dx = neighbor[0] - x
                    dy = neighbor[1] - y
                    if dx * dx + dy * dy < self._radius2:
                        return False
        return True

    def _accept(self, x, y):
        pt = (x, y)
        i, j = self.cell_coords(x, y)
        self._grid[j * self._grid_width + i] = pt
        self._queue.append(pt)
        self._sample_count += 1
        return pt

    def _draw_index(self, size):
        return min(int(self._rng() * size), size - 1)

    def _inside(self, x, y):
        return 0 <= x < self._width and 0 <= y < self._height

    def next_point(self):
        """
        Produces the next accepted point.

        Returns:
            tuple or None: A new (x, y) point, or None once the area is
            saturated. After the first None every call returns None.
        """
        if self._exhausted:
            return None

        # === Seed with initial point ===
        if not self._sample_count:
            x = self._rng() * self._width
            y = self._rng() * self._height
            if self._inside(x, y):
                return self._accept(x, y)
            # Source left [0, 1); pull back inside the half-open area
            x = min(max(x, 0.0), math.nextafter(self._width, 0.0))
            y = min(max(y, 0.0), math.nextafter(self._height, 0.0))
            return self._accept(x, y)

        # === Dart throwing from the active queue ===
        queue = self._queue
        while queue:
            idx = self._draw_index(len(queue))
            sx, sy = queue[idx]

            for _ in range(self.k):
                angle = 2 * math.pi * self._rng()
                rad = math.sqrt(self._rng() * self._outer2 + self._radius2)
                new_x = sx + rad * math.cos(angle)
                new_y = sy + rad * math.sin(angle)

                if self._inside(new_x, new_y) and self._far(new_x, new_y):
                    return self._accept(new_x, new_y)

            # Spent: swap with last and shrink, the point stays in the grid
            queue[idx] = queue[-1]
            queue.pop()

        self._exhausted = True
        return None

    def __iter__(self):
        return self

    def __next__(self):
        pt = self.next_point()
        if pt is None:
            raise StopIteration
        return pt


class PoissonClass:
    """
    Pipeline entry point for Poisson disk tree scattering.
    """

    @staticmethod
    def generate_poisson_points(width, height, min_distance, seed=None, rng=None):
        """
        Drains a fresh sampler into a list of (x, y) tuples.

        Args:
            width (float): Area width (meters).
            height (float): Area height (meters).
            min_distance (float): Minimum distance between points.
            seed (int or None): Seed for a dedicated `random.Random`, ignored when
                `rng` is given.
            rng (callable or None): Uniform [0, 1) source.

        Returns:
            list: Accepted points in generation order.
        """
        if rng is None and seed is not None:
            rng = random.Random(seed).random
        sampler = PoissonDiscSampler(width, height, min_distance, rng=rng)

        if sampler.min_distance >= math.hypot(sampler.width, sampler.height):
            print(
                f"[WARN] min_distance {sampler.min_distance} covers the whole "
                f"{sampler.width}x{sampler.height} area, expect a single point"
            )

        points = list(sampler)
        print(f"[✓] Poisson scattered {len(points)} points (seed={seed}).")
        return points

"""
random_generation.py
--------------------
Generates uniform random scatter points for objects that need no spacing
guarantee, such as stones.

Purpose in Pipeline:
    - Step 4 (stone scattering) in `main.py`.
    - Called by `main.py` -> `RandomScatterClass.generate_random_points()`.
    - Cheap alternative to Poisson disk sampling for a handful of objects,
      where occasional clustering is acceptable.

Inputs:
    - width, height (float): Size of the scatter area (meters).
    - count (int): Number of points to generate.
    - seed (int or None): Optional random seed for reproducibility.
    - rng (callable or None): Uniform [0, 1) source, overrides `seed`.

Outputs:
    - list: `count` (x, y) tuples inside [0, width) x [0, height).

Example:
    stones = RandomScatterClass.generate_random_points(256, 256, count=15, seed=42)
"""

import numbers
import random

from scatter.poisson import check_positive


class RandomScatterClass:
    """
    Generates scatter points using a uniform random distribution.
    """

    @staticmethod
    def generate_random_points(width, height, count, seed=None, rng=None):
        """
        Generates uniform random (x, y) points.

        Args:
            width (float): Area width in meters.
            height (float): Area height in meters.
            count (int): Number of points.
            seed (int or None): Random seed for reproducibility.
            rng (callable or None): Uniform [0, 1) source.

        Returns:
            list: [(x1, y1), (x2, y2), ...]
        """
        width = check_positive("width", width)
        height = check_positive("height", height)
        if isinstance(count, bool) or not isinstance(count, numbers.Integral) or count < 0:
            raise ValueError(f"count must be a non-negative integer, got {count!r}")

        if rng is None:
            rng = random.Random(seed).random if seed is not None else random.random

        points = [(rng() * width, rng() * height) for _ in range(count)]
        print(f"[✓] Generated {len(points)} random points (seed={seed}).")
        return points

"""
density_map.py
--------------
Generates a tree density mask for a chunk: one value in [0, 1] per square
meter, deciding how likely a Poisson position is to actually receive a tree.

Purpose in Pipeline:
    - Step 3 in `main.py`: thins the Poisson tree positions so forests form
      patches and clearings instead of a uniform carpet.

Workflow:
    1. Generate two layers of value noise (base and detail).
    2. Combine and normalize the noise to [0, 1].
    3. Apply a smooth cutoff: below `cutoff - smoothness / 2` nothing grows,
       above `cutoff + smoothness / 2` everything grows, smoothstep between.
    4. Optionally save a PNG preview, with tree markers on top.

Inputs:
    - size: Output resolution (cells per side, one cell per meter).
    - scale: Noise feature scale (higher = larger patches).
    - cutoff, cutoff_smoothness: Threshold and blend width.
    - seed: Random seed for reproducibility.

Dependencies:
    - numpy
    - scipy.ndimage.map_coordinates
    - Pillow (PIL)
    - Called by `main.py` -> `DensityMap.build()` and `thin_by_density()`.

Example:
    density = DensityMap(size=256, cutoff=0.5, cutoff_smoothness=0.2, seed=42)
    density.build()
    density.save_preview("output/density.png", points=trees)
"""

import math
import numbers

import numpy as np
from scipy.ndimage import map_coordinates
from PIL import Image, ImageDraw

from scatter.poisson import check_positive

BASE_FREQ = 30  # cells between base noise lattice points at scale 1
DETAIL_FREQ = 10
TREE_MARKER_COLOR = (128, 0, 128)


class DensityMap:
    """
    Builds a procedural tree density mask with a smooth cutoff.
    """

    def __init__(self, size=256, scale=1.0, cutoff=0.5, cutoff_smoothness=0.2, seed=None):
        if isinstance(size, bool) or not isinstance(size, numbers.Integral) or size <= 0:
            raise ValueError(f"size must be a positive integer, got {size!r}")
        self.size = int(size)
        self.scale = check_positive("scale", scale)
        if not 0.0 <= cutoff <= 1.0:
            raise ValueError(f"cutoff must be within [0, 1], got {cutoff!r}")
        if not cutoff_smoothness >= 0.0:
            raise ValueError(
                f"cutoff_smoothness must be non-negative, got {cutoff_smoothness!r}"
            )
        self.cutoff = float(cutoff)
        self.cutoff_smoothness = float(cutoff_smoothness)
        self.seed = seed
        self.rng = np.random.default_rng(seed)
        self.density = None

    def generate_value_noise(self, freq):
        """
        Generates 2D value noise using bilinear interpolation.

        Args:
            freq (float): Spacing of the random lattice in cells.

        Returns:
            np.ndarray: Value noise array of shape (size, size).
        """
        size = self.size
        grid_size = int(size / freq) + 2
        grid = self.rng.random((grid_size, grid_size))

        ys, xs = np.mgrid[0:size, 0:size].astype(np.float64)
        coords = np.stack([ys / freq, xs / freq])
        return map_coordinates(grid, coords, order=1, mode="nearest")

    def apply_cutoff(self, noise):
        """Maps normalized noise through the smooth cutoff band."""
        if self.cutoff_smoothness == 0.0:
            return (noise >= self.cutoff).astype(np.float64)

        lo = self.cutoff - self.cutoff_smoothness / 2
        hi = self.cutoff + self.cutoff_smoothness / 2
        t = np.clip((noise - lo) / (hi - lo), 0.0, 1.0)
        return t * t * (3.0 - 2.0 * t)

    def build(self):
        """
        Creates the density map from two octaves of value noise.
        """
        # === Generate density noise ===
        base_noise = self.generate_value_noise(freq=BASE_FREQ * self.scale)
        detail_noise = self.generate_value_noise(freq=DETAIL_FREQ * self.scale) * 0.5
        noise = base_noise + detail_noise
        noise -= noise.min()
        span = noise.max()
        if span > 0:
            noise /= span

        self.density = self.apply_cutoff(noise)
        return self.density

    def density_at(self, x, y):
        """
        Density of the cell containing (x, y), clamped to the map.
        """
        if self.density is None:
            raise ValueError("Density map not generated. Call build() first.")
        i = min(max(int(math.floor(x)), 0), self.size - 1)
        j = min(max(int(math.floor(y)), 0), self.size - 1)
        return float(self.density[j, i])

    def save_preview(self, path_png, points=None):
        """
        Saves the density map as a PNG, optionally marking tree positions.

        Args:
            path_png (str): Output image path.
            points (list or None): (x, y) positions drawn as purple dots.
        """
        if self.density is None:
            raise ValueError("Density map not generated. Call build() first.")

        grey = (self.density * 255).astype(np.uint8)
        img = Image.fromarray(np.stack([grey] * 3, axis=-1))
        if points:
            draw = ImageDraw.Draw(img)
            for x, y in points:
                draw.ellipse((x - 1, y - 1, x + 1, y + 1), fill=TREE_MARKER_COLOR)
        img.save(path_png)
        print(f"[✓] Saved: {path_png}")

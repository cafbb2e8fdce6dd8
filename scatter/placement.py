"""
placement.py
------------
Turns raw scatter points into placement decisions: density thinning for trees
and tile bucketing for streaming consumers.
"""

import random

from scatter.poisson import check_positive


def thin_by_density(points, density_map, seed=None, rng=None):
    """
    Keeps each point with probability equal to the density beneath it.

    Args:
        points (list): (x, y) candidate positions, e.g. Poisson output.
        density_map (DensityMap): Built density mask.
        seed (int or None): Seed for the keep/drop draws.
        rng (callable or None): Uniform [0, 1) source, overrides `seed`.

    Returns:
        list: Surviving points, in input order.
    """
    if rng is None:
        rng = random.Random(seed).random if seed is not None else random.random

    kept = [pt for pt in points if rng() < density_map.density_at(*pt)]
    print(f"[✓] Density kept {len(kept)} of {len(points)} points.")
    return kept


def bucket_by_tile(points, tile_size):
    """
    Buckets points into square tiles.

    Returns:
        dict: {(tile_x, tile_y): [(x1, y1), (x2, y2), ...]}
    """
    tile_size = check_positive("tile_size", tile_size)

    grid_dict = {}
    for x, y in points:
        tile_x = int(x // tile_size)
        tile_y = int(y // tile_size)
        grid_dict.setdefault((tile_x, tile_y), []).append((x, y))
    return grid_dict

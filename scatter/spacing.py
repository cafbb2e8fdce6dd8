"""
spacing.py
----------
Measures how evenly a point set is spread: each point's distance to its
nearest neighbour.

Purpose in Pipeline:
    - Step 5 in `main.py`: reports the minimum and mean tree spacing next to
      the requested Poisson spacing.

Dependencies:
    - numpy
    - scipy.spatial.cKDTree
    - Called by `main.py` -> `nearest_neighbor_distances()`.
"""

import numpy as np
from scipy.spatial import cKDTree


def nearest_neighbor_distances(points):
    """Distance from each point to its nearest other point."""
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    if len(pts) < 2:
        return np.empty(0)
    # k=2: the closest hit is the point itself
    dists, _ = cKDTree(pts).query(pts, k=2)
    return dists[:, 1]


def min_separation(points):
    dists = nearest_neighbor_distances(points)
    if dists.size == 0:
        return float("inf")
    return float(dists.min())

"""
Default parameters for a single vegetation chunk.

`main.py` exposes each of these as a command line flag.
"""

# === Chunk extent (meters) ===
CHUNK_WIDTH = 256
CHUNK_HEIGHT = 256

# === Trees ===
MIN_TREE_CLOSENESS = 5.0  # Poisson minimum spacing
CUTOFF = 0.5  # density threshold
CUTOFF_SMOOTHNESS = 0.2  # width of the blend band around CUTOFF
SCALE = 1.0  # density noise feature scale

# === Stones ===
STONE_COUNT = 15

# === Streaming ===
TILE_SIZE = 32

DEFAULT_SEED = None

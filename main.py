"""
Main entry point for blue-noise vegetation scattering over a single chunk.

Pipeline Overview:
    1. Read chunk and vegetation parameters from the command line.
    2. Generate tree positions with Poisson disk sampling (minimum spacing).
    3. Build the tree density mask and thin the positions through it.
    4. Scatter stones uniformly at random.
    5. Bucket trees and stones into streaming tiles and print a summary.
    6. Optionally save a PNG preview of the density mask with tree markers.

Positions are reported in chunk space, origin at the chunk corner. Placing
models, meshes or world transforms is left to the consuming scene.

Key References:
    - Argument Parser (below): list of all tunable parameters and their effects.
    - `scatter/settings.py`: default values for every flag.
"""

import sys
import random
import argparse

from scatter import settings
from scatter.poisson import PoissonClass
from scatter.density_map import DensityMap
from scatter.placement import thin_by_density, bucket_by_tile
from scatter.random_generation import RandomScatterClass
from scatter.spacing import nearest_neighbor_distances


def build_parser():
    # === STEP 1: Argument Parser ===
    parser = argparse.ArgumentParser(description="Blue-noise Vegetation Scatter")
    # Chunk parameters
    parser.add_argument(
        "--width", type=float, default=settings.CHUNK_WIDTH, help="chunk width in m"
    )
    parser.add_argument(
        "--height", type=float, default=settings.CHUNK_HEIGHT, help="chunk height in m"
    )
    parser.add_argument(
        "--seed", type=int, default=settings.DEFAULT_SEED, help="RNG seed for reproducibility"
    )
    # Tree Poisson and density parameters
    parser.add_argument(
        "--min-distance",
        type=float,
        default=settings.MIN_TREE_CLOSENESS,
        help="minimum spacing between trees (m)",
    )
    parser.add_argument(
        "--cutoff", type=float, default=settings.CUTOFF, help="tree density threshold [0, 1]"
    )
    parser.add_argument(
        "--cutoff-smoothness",
        type=float,
        default=settings.CUTOFF_SMOOTHNESS,
        help="width of the density blend band",
    )
    parser.add_argument(
        "--scale", type=float, default=settings.SCALE, help="density noise feature scale"
    )
    # Stones and streaming
    parser.add_argument(
        "--stones", type=int, default=settings.STONE_COUNT, help="number of stones"
    )
    parser.add_argument(
        "--tile-size", type=float, default=settings.TILE_SIZE, help="streaming tile size (m)"
    )
    parser.add_argument(
        "--preview", type=str, default=None, help="write a PNG of density + trees here"
    )
    return parser


def derive_seeds(seed, count):
    """
    Splits one CLI seed into independent per-step seeds.

    The same seed feeds every step, but no two steps share a random stream.
    """
    parent = random.Random(seed)
    return [parent.getrandbits(64) for _ in range(count)]


def run(args):
    tree_seed, density_seed, thin_seed, stone_seed = derive_seeds(args.seed, 4)

    # === STEP 2: Tree positions ===
    candidates = PoissonClass.generate_poisson_points(
        args.width, args.height, args.min_distance, seed=tree_seed
    )

    # === STEP 3: Density mask ===
    # One cell per meter, sized to cover the whole chunk.
    density = DensityMap(
        size=max(int(args.width), int(args.height), 1),
        scale=args.scale,
        cutoff=args.cutoff,
        cutoff_smoothness=args.cutoff_smoothness,
        seed=density_seed,
    )
    density.build()
    trees = thin_by_density(candidates, density, seed=thin_seed)

    # === STEP 4: Stones ===
    stones = RandomScatterClass.generate_random_points(
        args.width, args.height, args.stones, seed=stone_seed
    )

    # === STEP 5: Tile buckets + summary ===
    tree_tiles = bucket_by_tile(trees, args.tile_size)
    stone_tiles = bucket_by_tile(stones, args.tile_size)

    spacing = nearest_neighbor_distances(candidates)
    if spacing.size:
        print(
            f"Spacing: min {spacing.min():.3f} m, mean {spacing.mean():.3f} m "
            f"(required {args.min_distance} m)"
        )
    print(
        f"[✓] {len(trees)} trees in {len(tree_tiles)} tiles, "
        f"{len(stones)} stones in {len(stone_tiles)} tiles"
    )

    # === STEP 6: Preview ===
    if args.preview:
        density.save_preview(args.preview, points=trees)

    return trees, stones


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        run(args)
    except ValueError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())

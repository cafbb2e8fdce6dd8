import numpy as np
import pytest

from scatter.density_map import DensityMap
from scatter.placement import bucket_by_tile, thin_by_density
from scatter.poisson import PoissonClass
from scatter.random_generation import RandomScatterClass
from scatter.spacing import min_separation, nearest_neighbor_distances


class _Uniform:
    """Stand-in density source returning one value everywhere."""

    def __init__(self, value):
        self.value = value

    def density_at(self, x, y):
        return self.value


# === Density map ===


def test_density_map_range_and_shape():
    density = DensityMap(size=64, seed=1)
    values = density.build()
    assert values.shape == (64, 64)
    assert values.min() >= 0.0
    assert values.max() <= 1.0


def test_density_map_deterministic_by_seed():
    a = DensityMap(size=48, seed=7).build()
    b = DensityMap(size=48, seed=7).build()
    np.testing.assert_array_equal(a, b)


def test_hard_cutoff_is_binary():
    values = DensityMap(size=40, cutoff=0.5, cutoff_smoothness=0.0, seed=3).build()
    assert set(np.unique(values)) <= {0.0, 1.0}


def test_cutoff_extremes():
    everywhere = DensityMap(size=32, cutoff=0.0, cutoff_smoothness=0.0, seed=2).build()
    assert np.all(everywhere == 1.0)
    smooth = DensityMap(size=32, cutoff=0.5, cutoff_smoothness=0.2, seed=2)
    t = smooth.apply_cutoff(np.array([0.0, 0.4, 0.5, 0.6, 1.0]))
    np.testing.assert_allclose(t, [0.0, 0.0, 0.5, 1.0, 1.0])


def test_density_at_clamps_to_map():
    density = DensityMap(size=16, seed=5)
    values = density.build()
    assert density.density_at(3.7, 9.2) == values[9, 3]
    assert density.density_at(-4, 100) == values[15, 0]


def test_density_map_accepts_numpy_integer_size():
    density = DensityMap(size=np.int64(24), seed=6)
    assert density.size == 24
    assert density.build().shape == (24, 24)


def test_density_at_requires_build():
    with pytest.raises(ValueError):
        DensityMap(size=8).density_at(1, 1)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"size": 0},
        {"size": 4.5},
        {"scale": 0},
        {"cutoff": 1.5},
        {"cutoff": -0.1},
        {"cutoff_smoothness": -1},
    ],
)
def test_density_map_rejects_bad_params(kwargs):
    with pytest.raises(ValueError):
        DensityMap(**kwargs)


def test_save_preview(tmp_path):
    from PIL import Image

    density = DensityMap(size=32, seed=4)
    density.build()
    path = tmp_path / "density.png"
    density.save_preview(str(path), points=[(5.0, 5.0), (20.5, 11.2)])
    with Image.open(path) as img:
        assert img.size == (32, 32)


# === Thinning and tiles ===


def test_thin_keeps_all_at_full_density():
    pts = [(1.0, 2.0), (3.0, 4.0), (5.0, 6.0)]
    assert thin_by_density(pts, _Uniform(1.0), seed=0) == pts


def test_thin_drops_all_at_zero_density():
    pts = [(1.0, 2.0), (3.0, 4.0)]
    assert thin_by_density(pts, _Uniform(0.0), seed=0) == []


def test_thin_preserves_order_and_spacing():
    trees = PoissonClass.generate_poisson_points(64, 64, 3.0, seed=8)
    density = DensityMap(size=64, seed=8)
    density.build()
    kept = thin_by_density(trees, density, seed=8)
    assert kept == [pt for pt in trees if pt in set(kept)]
    assert min_separation(kept) >= 3.0


def test_bucket_by_tile():
    tiles = bucket_by_tile([(1.0, 1.0), (9.5, 2.0), (10.0, 0.0), (25.0, 31.0)], 10)
    assert tiles == {
        (0, 0): [(1.0, 1.0), (9.5, 2.0)],
        (1, 0): [(10.0, 0.0)],
        (2, 3): [(25.0, 31.0)],
    }


def test_bucket_by_tile_rejects_bad_size():
    with pytest.raises(ValueError):
        bucket_by_tile([(1.0, 1.0)], 0)


# === Random scatter and spacing ===


def test_random_points_inside_and_seeded():
    a = RandomScatterClass.generate_random_points(256, 128, 15, seed=42)
    b = RandomScatterClass.generate_random_points(256, 128, 15, seed=42)
    assert a == b
    assert len(a) == 15
    for x, y in a:
        assert 0 <= x < 256
        assert 0 <= y < 128


def test_random_points_accepts_numpy_integer_count():
    pts = RandomScatterClass.generate_random_points(10, 10, np.int64(4), seed=1)
    assert len(pts) == 4


@pytest.mark.parametrize("count", [-1, 2.5, True])
def test_random_points_rejects_bad_count(count):
    with pytest.raises(ValueError):
        RandomScatterClass.generate_random_points(10, 10, count)


def test_nearest_neighbor_distances():
    dists = nearest_neighbor_distances([(0.0, 0.0), (3.0, 4.0), (3.0, 5.0)])
    np.testing.assert_allclose(dists, [5.0, 1.0, 1.0])
    assert nearest_neighbor_distances([(1.0, 1.0)]).size == 0
    assert min_separation([]) == float("inf")

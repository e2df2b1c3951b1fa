import numpy as np
import pytest

from coherent_noise.noise_math import lerp, mod, smoothstep
from coherent_noise.perlin_noise import PerlinConfig, PerlinNoiseGenerator
from coherent_noise.point import Point
from coherent_noise.vector import Vector, dot


def test_origin_is_zero_for_reference_configuration():
    gen = PerlinConfig(dimensions=2, smoothness=2, num_gradients=256).create(10)
    assert gen.at((0.0, 0.0)) == pytest.approx(0.0, abs=1e-12)
    assert gen.at(Point(0.0, 0.0)) == pytest.approx(0.0, abs=1e-12)


@pytest.mark.parametrize("dims", [1, 2, 3, 4, 5])
@pytest.mark.parametrize("smoothness", [0, 1, 2, 3])
def test_values_stay_in_range(dims, smoothness):
    rng = np.random.default_rng(dims * 10 + smoothness)
    for seed in (0, 1, 12345):
        gen = PerlinConfig(dimensions=dims, smoothness=smoothness).create(seed)
        points = rng.uniform(-100.0, 100.0, size=(200, dims))
        values = gen.at_many(points)
        assert values.shape == (200,)
        assert np.isfinite(values).all()
        assert np.all((values >= -1.0) & (values <= 1.0))


def test_at_many_matches_at():
    gen = PerlinConfig(dimensions=3).create(7)
    points = np.random.default_rng(1).uniform(-5.0, 5.0, size=(4, 5, 3))
    values = gen.at_many(points)
    assert values.shape == (4, 5)
    for idx in np.ndindex(4, 5):
        assert values[idx] == pytest.approx(gen.at(points[idx]))


def test_deterministic_for_seed():
    p1 = PerlinConfig(dimensions=3).create(123)
    p2 = PerlinConfig(dimensions=3).create(123)
    points = np.random.default_rng(0).uniform(-10.0, 10.0, size=(50, 3))
    assert np.array_equal(p1.at_many(points), p2.at_many(points))
    assert p1.at((0.3, 1.7, -2.2)) == p1.at((0.3, 1.7, -2.2))


def test_changes_with_seed():
    points = np.random.default_rng(0).uniform(-10.0, 10.0, size=(50, 2))
    v1 = PerlinConfig().create(1).at_many(points)
    v2 = PerlinConfig().create(2).at_many(points)
    assert not np.allclose(v1, v2)


@pytest.mark.parametrize("dims", [1, 2, 3, 4])
def test_continuity_small_step(dims):
    gen = PerlinConfig(dimensions=dims).create(5)
    points = np.random.default_rng(dims).uniform(-20.0, 20.0, size=(300, dims))
    base = gen.at_many(points)
    for d in range(dims):
        shifted = points.copy()
        shifted[:, d] += 1e-3
        assert float(np.max(np.abs(gen.at_many(shifted) - base))) < 0.05


def test_tables():
    gen = PerlinConfig(dimensions=3, num_gradients=64).create(9)
    assert np.array_equal(np.sort(gen.permutation), np.arange(64))
    assert gen.gradients.shape == (64, 3)
    assert np.allclose(np.linalg.norm(gen.gradients, axis=1), 1.0)
    with pytest.raises(ValueError):
        gen.gradients[0, 0] = 1.0
    with pytest.raises(ValueError):
        gen.permutation[0] = 1


def test_gradient_hash_folds_right_to_left():
    gen = PerlinConfig(dimensions=3, num_gradients=16).create(4)
    perm = gen.permutation
    for a, b, c in [(0, 0, 0), (3, -7, 22), (-40, 5, -1), (15, 16, 17)]:
        idx = mod(c, 16)
        idx = mod(b + int(perm[idx]), 16)
        idx = mod(a + int(perm[idx]), 16)
        assert gen.gradient_at((a, b, c)) == Vector(gen.gradients[idx])
        assert gen.gradient_index(np.array([a, b, c])) == idx


def test_integer_grid_points_reduce_to_corner_dot_product():
    gen = PerlinConfig(dimensions=3).create(11)
    for grid_point in [(0, 0, 0), (4, -2, 9), (-13, 7, 1)]:
        g = gen.gradient_at(grid_point)
        expected = dot(g, Vector.from_point(Point(grid_point)) - Vector.from_point(Point(grid_point)))
        assert gen.at(grid_point) == pytest.approx(expected, abs=1e-12)
        assert gen.at(grid_point) == pytest.approx(gen.dot_at_corner(grid_point, grid_point), abs=1e-12)


def test_one_dimensional_interpolation():
    gen = PerlinConfig(dimensions=1, smoothness=2).create(3)
    for x in [0.1, 0.5, 2.75, -3.4]:
        x0 = int(np.floor(x))
        f = x - x0
        g0 = gen.gradient_at((x0,))[0]
        g1 = gen.gradient_at((x0 + 1,))[0]
        expected = lerp(g0 * f, g1 * (f - 1.0), smoothstep(f, 2))
        assert gen.at((x,)) == pytest.approx(expected)


def test_two_dimensional_interpolation_order():
    gen = PerlinConfig(dimensions=2, smoothness=1).create(21)
    x, y = 3.3, -1.8
    x0, y0 = 3, -2
    d00 = gen.dot_at_corner((x, y), (x0, y0))
    d10 = gen.dot_at_corner((x, y), (x0 + 1, y0))
    d01 = gen.dot_at_corner((x, y), (x0, y0 + 1))
    d11 = gen.dot_at_corner((x, y), (x0 + 1, y0 + 1))
    u = smoothstep(x - x0, 1)
    v = smoothstep(y - y0, 1)
    expected = lerp(lerp(d00, d10, u), lerp(d01, d11, u), v)
    assert gen.at((x, y)) == pytest.approx(expected)


def test_single_gradient_table():
    gen = PerlinConfig(dimensions=2, num_gradients=1).create(0)
    assert gen.gradient_at((5, -3)) == gen.gradient_at((0, 0))


def test_float32_configuration():
    gen = PerlinConfig(dimensions=2, dtype=np.float32, grid_dtype=np.int32).create(2)
    values = gen.at_many(np.random.default_rng(0).uniform(-50, 50, size=(100, 2)))
    assert values.dtype == np.float32
    assert np.all(np.abs(values) <= 1.0)


def test_generator_can_be_built_directly():
    gen = PerlinNoiseGenerator(PerlinConfig(dimensions=4), seed=3)
    assert gen.dimensions == 4
    assert gen.seed == 3
    assert PerlinNoiseGenerator().dimensions == 2


@pytest.mark.parametrize(
    "kwargs",
    [
        {"dimensions": 0},
        {"smoothness": -1},
        {"num_gradients": 0},
    ],
)
def test_invalid_configuration(kwargs):
    with pytest.raises(ValueError):
        PerlinConfig(**kwargs)


def test_invalid_types():
    with pytest.raises(TypeError):
        PerlinConfig(dtype=np.int32)
    with pytest.raises(TypeError):
        PerlinConfig(grid_dtype=np.float64)
    with pytest.raises(TypeError):
        PerlinConfig(grid_dtype=np.uint32)


def test_invalid_seed():
    with pytest.raises(ValueError):
        PerlinConfig().create(-1)


def test_wrong_point_dimensionality():
    gen = PerlinConfig(dimensions=3).create(0)
    with pytest.raises(ValueError):
        gen.at((1.0, 2.0))
    with pytest.raises(ValueError):
        gen.at_many(np.zeros((5, 2)))

import os

import numpy as np
import pytest
from PIL import Image

from coherent_noise.noise_texture import (
    WORLD_PALETTE,
    classify,
    main,
    plot_noise_profile,
    sample_grid,
    save_bump_map,
    save_world_map,
    to_grayscale,
)
from coherent_noise.perlin_noise import PerlinConfig
from coherent_noise.seamless_noise import SeamlessConfig


def test_to_grayscale():
    gray = to_grayscale(np.array([-1.0, 0.0, 1.0, -3.0, 2.0]))
    assert gray.dtype == np.uint8
    assert gray.tolist() == [0, 127, 255, 0, 255]


def test_classify_terrain_bands():
    values = np.array([0.9, 0.5, 0.4, 0.3, 0.2, 0.12, 0.1, 0.0, -1.0])
    rgb = classify(values)
    colors = dict((name, color) for name, (_, color) in zip(
        ["snow", "mountains", "forest", "grass", "shore", "water"], WORLD_PALETTE))
    expected = ["snow", "mountains", "mountains", "forest", "grass", "shore", "water", "water", "water"]
    assert rgb.shape == (9, 3)
    assert [tuple(c) for c in rgb.tolist()] == [colors[name] for name in expected]


def test_classify_rejects_unsorted_palette():
    with pytest.raises(ValueError):
        classify(np.zeros(3), palette=((0.0, (0, 0, 0)), (0.5, (255, 255, 255))))


def test_sample_grid_positions():
    gen = PerlinConfig().create(10)
    values = sample_grid(gen, width=8, height=4, cells_x=2, cells_y=1)
    assert values.shape == (4, 8)
    assert values[2, 3] == pytest.approx(gen.at((3 / 4.0, 2 / 4.0)))
    assert values[0, 0] == pytest.approx(0.0, abs=1e-12)


def test_sample_grid_chunking_does_not_change_values():
    gen = PerlinConfig().create(1)
    a = sample_grid(gen, 10, 7, 3, 2)
    b = sample_grid(gen, 10, 7, 3, 2, chunk_rows=2)
    assert np.array_equal(a, b)


def test_sample_grid_needs_map_point_for_other_dimensions():
    gen = PerlinConfig(dimensions=3).create(0)
    with pytest.raises(ValueError):
        sample_grid(gen, 4, 4, 1, 1)
    values = sample_grid(gen, 4, 4, 1, 1,
                         map_point=lambda xs, ys: np.stack([xs, ys, np.full_like(xs, 0.5)], axis=-1))
    assert values[1, 2] == pytest.approx(gen.at((0.5, 0.25, 0.5)))


def test_seamless_grid_tiles():
    gen = SeamlessConfig(width=2, height=1).create(10)
    values = sample_grid(gen, 16, 8, 2, 1)
    # the pixel one period to the right of column 0 would be column 16
    wrapped = gen.at_many(np.stack([np.full(8, 2.0), np.arange(8) / 8.0], axis=1))
    assert np.allclose(values[:, 0], wrapped, atol=1e-9)


def test_save_bump_map(tmp_path):
    path = str(tmp_path / "bump.png")
    save_bump_map(np.linspace(-1, 1, 24).reshape(4, 6), path, title="bump")
    with Image.open(path) as img:
        assert img.mode == "L"
        assert img.size == (6, 4)
        assert img.text["Title"] == "bump"


def test_save_world_map(tmp_path):
    path = str(tmp_path / "world.png")
    save_world_map(np.linspace(-1, 1, 24).reshape(4, 6), path)
    with Image.open(path) as img:
        assert img.mode == "RGB"
        assert img.size == (6, 4)
        assert img.getpixel((0, 0)) == WORLD_PALETTE[-1][1]
        assert img.getpixel((5, 3)) == WORLD_PALETTE[0][1]


def test_plot_noise_profile(tmp_path):
    path = str(tmp_path / "profile.png")
    gen = PerlinConfig(dimensions=2).create(3)
    assert plot_noise_profile(gen, path, start=0.0, stop=4.0, n_samples=50, axis=1, origin=(0.5, 0.0)) == path
    assert os.path.getsize(path) > 0


def test_demo_writes_all_images(tmp_path):
    written = main(out_dir=str(tmp_path), width=16, height=8, octaves=2, enable_3d=True, enable_4d=True)
    assert len(written) == 1 + 10 + 10 + 2 + 1
    for path in written:
        assert os.path.exists(path)
    with Image.open(os.path.join(str(tmp_path), "10_world.png")) as img:
        assert img.mode == "RGB"
        assert img.size == (16, 8)

import os

import matplotlib.pyplot as plt
import numpy as np
from PIL import Image
from PIL.PngImagePlugin import PngInfo

from .fractal_noise import FractalConfig
from .perlin_noise import PerlinConfig
from .seamless_noise import SeamlessConfig

"""
noise_texture.py

Turn noise generators into images:
 - sample a generator on a pixel grid spanning a number of noise cells,
 - save the field as an 8-bit grayscale bump map,
 - classify the field into terrain bands and save it as an RGB world map,
 - plot a 1D profile of a generator with its lattice points marked.
Running the module writes the demo images (2D, 3D/4D slices, seamless noise
and a seamless world map) into the current directory.
"""


# Terrain bands as (cutoff, color), highest cutoff first. A value takes the
# color of the first band whose cutoff lies strictly below it.
WORLD_PALETTE = (
    (0.5, (255, 255, 255)),   # snow
    (0.35, (150, 150, 160)),  # mountains
    (0.25, (60, 130, 30)),    # forest
    (0.15, (120, 190, 90)),   # grass
    (0.1, (229, 221, 0)),     # shore
    (-1.0, (0, 0, 255)),      # water
)


def sample_grid(generator, width, height, cells_x, cells_y, map_point=None, chunk_rows=64):
    """
    Evaluate a generator for every pixel of a (height, width) image.

    Pixel (x, y) sits at noise position (x / (width / cells_x), y / (height / cells_y)),
    so the image spans cells_x by cells_y grid cells. map_point(xs, ys) lifts those
    2D positions to the generator's dimensionality and must return an array of
    shape (..., D); it may be omitted for 2D generators.
    Rows are evaluated in chunks to keep memory bounded for many-octave noise.
    """
    if map_point is None:
        if generator.dimensions != 2:
            raise ValueError(f"a {generator.dimensions}D generator needs a map_point to sample a 2D grid")
        map_point = lambda xs, ys: np.stack([xs, ys], axis=-1)

    xv, yv = np.meshgrid(np.arange(width, dtype=np.float64),
                         np.arange(height, dtype=np.float64))
    xs = xv / (width / float(cells_x))
    ys = yv / (height / float(cells_y))

    values = np.empty((height, width), dtype=np.float64)
    for row in range(0, height, chunk_rows):
        rows = slice(row, row + chunk_rows)
        values[rows] = generator.at_many(map_point(xs[rows], ys[rows]))
    return values


def to_grayscale(values):
    """Map values in [-1, 1] to uint8 gray levels 0..255."""
    clamped = np.clip(values, -1.0, 1.0)
    return ((clamped + 1.0) * 0.5 * 255.0).astype(np.uint8)


def classify(values, palette=WORLD_PALETTE):
    """
    Color every value by its terrain band. Returns a uint8 array of shape (..., 3).
    Values not above any cutoff take the last (lowest) band.
    """
    cutoffs = [cutoff for cutoff, _ in palette]
    if cutoffs != sorted(cutoffs, reverse=True):
        raise ValueError("palette cutoffs must be in descending order")

    values = np.asarray(values)
    rgb = np.empty(values.shape + (3,), dtype=np.uint8)
    rgb[...] = palette[-1][1]
    # lowest band first, so higher bands overwrite it
    for cutoff, color in reversed(palette):
        rgb[values > cutoff] = color
    return rgb


def _png_info(title):
    if title is None:
        return None
    info = PngInfo()
    info.add_text("Title", title)
    return info


def save_bump_map(values, path, title=None):
    """
    Save a float array in range [-1,1] as an 8-bit grayscale PNG.
    title is stored in the PNG's Title text chunk.
    """
    Image.fromarray(to_grayscale(values)).save(path, pnginfo=_png_info(title))


def save_world_map(values, path, palette=WORLD_PALETTE, title=None):
    Image.fromarray(classify(values, palette)).save(path, pnginfo=_png_info(title))


def plot_noise_profile(generator, path, start=0.0, stop=10.0, n_samples=400, axis=0, origin=None):
    """
    Plot the generator along one axis, with the other coordinates fixed at origin
    (default all zero), and mark the integer lattice points on the line.
    """
    dims = generator.dimensions
    origin = np.zeros(dims) if origin is None else np.asarray(origin, dtype=np.float64)

    x = np.linspace(start, stop, n_samples)
    points = np.tile(origin, (n_samples, 1))
    points[:, axis] = x
    values = generator.at_many(points)

    ints = np.arange(np.ceil(start), np.floor(stop) + 1)
    lattice = np.tile(origin, (ints.size, 1))
    lattice[:, axis] = ints
    lattice_values = generator.at_many(lattice) if ints.size else np.empty(0)

    fig = plt.figure(figsize=(10, 4.5))
    plt.plot(x, values, color="orange", linewidth=2, label="noise")
    plt.scatter(ints, lattice_values, color="blue", s=30, zorder=5, label="lattice points")
    plt.title(f"{type(generator).__name__} along axis {axis}")
    plt.xlabel("x")
    plt.ylabel("value")
    plt.ylim(-1.1, 1.1)
    plt.grid(alpha=0.3)
    plt.legend(loc="upper right")
    plt.tight_layout()
    plt.savefig(path, dpi=150)
    plt.close(fig)
    return path


def main(out_dir=".", seed=10, width=512 + 256, height=512, cells_x=6, cells_y=4,
         smoothness=2, octaves=50, enable_2d=True, enable_3d=False, enable_4d=False,
         enable_seamless=True, enable_world=True, enable_profile=True):
    written = []

    def out(name):
        path = os.path.join(out_dir, name)
        written.append(path)
        return path

    if enable_2d:
        gen = PerlinConfig(dimensions=2, smoothness=smoothness).create(seed)
        path = out("2d.png")
        save_bump_map(sample_grid(gen, width, height, cells_x, cells_y), path, title=path)

    if enable_3d:
        gen = PerlinConfig(dimensions=3, smoothness=smoothness).create(seed)
        for i in range(10):
            z = i / 8.0
            field = sample_grid(gen, width, height, cells_x, cells_y,
                                map_point=lambda xs, ys: np.stack([xs, ys, np.full_like(xs, z)], axis=-1))
            path = out(f"3d_{i}.png")
            save_bump_map(field, path, title=path)

    if enable_4d:
        gen = PerlinConfig(dimensions=4, smoothness=smoothness).create(seed)
        for i in range(10):
            zw = i / 8.0
            field = sample_grid(gen, width, height, cells_x, cells_y,
                                map_point=lambda xs, ys: np.stack([xs, ys, np.full_like(xs, zw), np.full_like(xs, zw)], axis=-1))
            path = out(f"4d_{i}.png")
            save_bump_map(field, path, title=path)

    if enable_seamless or enable_world:
        seamless = SeamlessConfig(
            inner=FractalConfig(inner=PerlinConfig(dimensions=4, smoothness=smoothness), octaves=octaves),
            width=cells_x,
            height=cells_y,
        ).create(seed)
        field = sample_grid(seamless, width, height, cells_x, cells_y)
        if enable_seamless:
            path = out(f"{seed}_seamless.png")
            save_bump_map(field, path, title=path)
        if enable_world:
            path = out(f"{seed}_world.png")
            save_world_map(field, path, title=path)

    if enable_profile:
        gen = PerlinConfig(dimensions=1, smoothness=smoothness).create(seed)
        plot_noise_profile(gen, out("profile.png"))

    return written


if __name__ == "__main__":
    for path in main():
        print(f"Saved image to {path}")

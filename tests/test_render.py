import matplotlib
matplotlib.use("Agg")

import numpy as np
from pathlib import Path
import sys

# Add repo root to path
ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

import matplotlib.pyplot as plt
from PIL import Image

from tilebrot.config import RenderConfig
from tilebrot.pipeline import compute
from tilebrot.render import (
    gridlines,
    render_image,
    render_png,
    render_svg,
    tile_circles,
    tile_colors,
)


def _small_config(**kwargs):
    base = dict(tiles_x=4, tiles_y=3, max_iter=100, scale=10.0, gridline_every=0)
    base.update(kwargs)
    return RenderConfig(**base)


def test_gridline_positions_for_poster():
    vertical, horizontal = gridlines(RenderConfig())
    assert vertical == [256.0, 512.0]
    assert horizontal == [256.0]


def test_gridlines_disabled():
    assert gridlines(RenderConfig(gridline_every=0)) == ([], [])


def test_tile_circles_flip_y():
    cfg = _small_config()
    result = compute(cfg)
    circles = list(tile_circles(result, cfg))

    assert len(circles) == 12
    # first cell: leftmost column, bottom row
    assert circles[0] == (5.0, 25.0, 5.0, 0)
    # last cell of first column is at the top
    assert circles[2] == (5.0, 5.0, 5.0, 2)
    assert circles[3][:2] == (15.0, 25.0)


def test_render_image_colors_tiles():
    cfg = _small_config()
    result = compute(cfg)
    im = render_image(result, cfg)

    assert im.size == (40, 30)
    colors = tile_colors(result, cfg)
    # center of cell (0, 0) and the gap at the canvas corner
    assert im.getpixel((5, 25)) == colors[0]
    assert im.getpixel((0, 0)) == cfg.background


def test_render_image_draws_gridlines():
    cfg = _small_config(gridline_every=2)
    im = render_image(compute(cfg), cfg)
    assert im.getpixel((20, 1)) == (0, 0, 255)


def test_render_png_ignores_suffix(tmp_path):
    cfg = _small_config()
    out = render_png(compute(cfg), cfg, tmp_path / "tiles.out")
    with Image.open(out) as im:
        assert im.format == "PNG"
        assert im.size == (40, 30)


def test_render_png(tmp_path):
    cfg = _small_config()
    out = render_png(compute(cfg), cfg, tmp_path / "nested" / "tiles.png")
    assert out.exists()
    with Image.open(out) as im:
        assert im.size == (40, 30)
        assert np.asarray(im).shape == (30, 40, 3)


def test_render_svg(tmp_path):
    backend = matplotlib.get_backend()
    cfg = _small_config(gridline_every=2)
    out = render_svg(compute(cfg), cfg, tmp_path / "tiles.svg")
    assert out.exists()
    assert "<svg" in out.read_text()
    assert matplotlib.get_backend() == backend
    assert plt.get_fignums() == []

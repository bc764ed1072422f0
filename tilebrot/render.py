"""
Draw classified tiles.

Each cell becomes a filled circle of diameter `scale` on a background
canvas. Column ix is drawn left to right; row iy is drawn bottom to top so
that larger imaginary parts appear higher in the image. Gridlines are
overlaid every `gridline_every` tiles.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, List, Tuple

import numpy as np

from tilebrot.config import RenderConfig
from tilebrot.pipeline import RenderResult


def tile_colors(result: RenderResult, config: RenderConfig) -> List[Tuple[int, int, int]]:
    """Resolve each cell's palette index into an RGB triple."""
    palette = config.palette
    return [palette[int(i)] for i in result.indices]


def tile_circles(result: RenderResult, config: RenderConfig) -> Iterator[Tuple[float, float, float, int]]:
    """Yield (cx, cy, radius, sequence index) in image coordinates."""
    grid = result.grid
    scale = config.scale
    radius = scale * 0.5
    height = grid.count_y * scale

    idx = 0
    for ix in range(grid.count_x):
        cx = ix * scale + radius
        for iy in range(grid.count_y):
            cy = height - iy * scale - radius
            yield cx, cy, radius, idx
            idx += 1


def gridlines(config: RenderConfig):
    """Return (vertical, horizontal) gridline positions in image units."""
    every = config.gridline_every
    if every <= 0:
        return [], []
    vertical = [x * config.scale for x in range(1, config.tiles_x) if x % every == 0]
    horizontal = [y * config.scale for y in range(1, config.tiles_y) if y % every == 0]
    return vertical, horizontal


def render_image(result: RenderResult, config: RenderConfig):
    """Render to a PIL RGB image."""
    from PIL import Image, ImageDraw

    width, height = config.canvas_size
    w, h = int(round(width)), int(round(height))
    im = Image.new("RGB", (w, h), tuple(config.background))
    draw = ImageDraw.Draw(im)

    colors = tile_colors(result, config)
    for cx, cy, r, idx in tile_circles(result, config):
        draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=colors[idx])

    line_w = max(1, int(round(config.gridline_width)))
    vertical, horizontal = gridlines(config)
    for x in vertical:
        draw.line([(x, 0), (x, h)], fill=tuple(config.gridline_color), width=line_w)
    for y in horizontal:
        draw.line([(0, y), (w, y)], fill=tuple(config.gridline_color), width=line_w)

    return im


def render_png(result: RenderResult, config: RenderConfig, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    # explicit format: the suffix need not be one Pillow recognises
    render_image(result, config).save(path, format="PNG")
    return path


def _rgb01(c):
    return tuple(np.asarray(c, dtype=np.float64) / 255.0)


def render_svg(result: RenderResult, config: RenderConfig, path: str | Path) -> Path:
    """Render as vector graphics through matplotlib's svg backend."""
    from matplotlib.figure import Figure
    from matplotlib.patches import Circle

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    width, height = config.canvas_size
    dpi = 72.0
    fig = Figure(figsize=(width / dpi, height / dpi), dpi=dpi)
    ax = fig.add_axes([0, 0, 1, 1])
    ax.set_xlim(0, width)
    # image coordinates: y grows downward
    ax.set_ylim(height, 0)
    ax.set_aspect("equal")
    ax.axis("off")
    fig.patch.set_facecolor(_rgb01(config.background))

    colors = tile_colors(result, config)
    for cx, cy, r, idx in tile_circles(result, config):
        ax.add_patch(Circle((cx, cy), r, facecolor=_rgb01(colors[idx]), edgecolor="none"))

    line_color = _rgb01(config.gridline_color)
    # linewidth is in points; 1 image unit == 1 point at 72 dpi
    vertical, horizontal = gridlines(config)
    for x in vertical:
        ax.plot([x, x], [0, height], color=line_color, linewidth=config.gridline_width)
    for y in horizontal:
        ax.plot([0, width], [y, y], color=line_color, linewidth=config.gridline_width)

    fig.savefig(path, format="svg", facecolor=fig.get_facecolor())
    return path

"""
Render configuration.

Defaults reproduce the 48x32 tile poster; YAML files under
configs/ override any subset of the fields:

    grid:
      tiles_x: 48
      tiles_y: 32
      min_x: -2.31538881281125
      max_x: 1.19729198177323
      min_y: -1.13430317325124
    max_iter: 1000
    interior: magnitude        # or "cap"
    palette:
      background: "#383838"
      colors: ["#f6f6f7", ...]
    color_key: [1, 2, 3, 4, 5, 9, 1000, 1550]   # omit to derive from data
    render:
      scale: 16.0
      gridline_every: 16
      gridline_color: "#0000ff"
      gridline_width: 4.0
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import List, Optional, Tuple

import yaml

from tilebrot.iterators import INTERIOR_MODES, GridSpec
from tilebrot.palette import Palette
from tilebrot.utils import parse_color

TILES_X = 48
TILES_Y = 32
MIN_X = -2.31538881281125
MAX_X = 1.19729198177323
MIN_Y = -1.13430317325124

MAX_ITERATIONS = 1000

BACKGROUND = (56, 56, 56)
COLORS = (
    (246, 246, 247),
    (250, 201, 165),
    (248, 172, 0),
    (234, 160, 198),
    (0, 154, 150),
    (209, 75, 150),
    (0, 98, 174),
    (20, 20, 20),
    (0, 53, 91),
)
SCALE = 16.0


@dataclass
class RenderConfig:
    tiles_x: int = TILES_X
    tiles_y: int = TILES_Y
    min_x: float = MIN_X
    max_x: float = MAX_X
    min_y: float = MIN_Y
    max_iter: int = MAX_ITERATIONS
    interior: str = "magnitude"
    colors: Tuple[Tuple[int, int, int], ...] = COLORS
    background: Tuple[int, int, int] = BACKGROUND
    color_key: Optional[List[int]] = None
    scale: float = SCALE
    gridline_every: int = 16
    gridline_color: Tuple[int, int, int] = (0, 0, 255)
    gridline_width: float = 4.0
    source: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        if self.interior not in INTERIOR_MODES:
            raise ValueError(
                f"Unknown interior mode: {self.interior} (expected one of {INTERIOR_MODES})"
            )
        if self.max_iter < 0:
            raise ValueError(f"max_iter must be >= 0, got {self.max_iter}")
        if self.scale <= 0:
            raise ValueError(f"scale must be positive, got {self.scale}")
        if self.gridline_every < 0:
            raise ValueError(f"gridline_every must be >= 0, got {self.gridline_every}")

    @property
    def grid(self) -> GridSpec:
        return GridSpec(self.tiles_x, self.tiles_y, self.min_x, self.max_x, self.min_y)

    @property
    def palette(self) -> Palette:
        return Palette(tuple(self.colors), tuple(self.background))

    @property
    def canvas_size(self) -> Tuple[float, float]:
        return self.tiles_x * self.scale, self.tiles_y * self.scale

    def with_overrides(self, **kwargs) -> "RenderConfig":
        """Copy with every non-None keyword applied."""
        return replace(self, **{k: v for k, v in kwargs.items() if v is not None})


def config_from_dict(cfg: dict, source: Optional[str] = None) -> RenderConfig:
    cfg = cfg or {}
    grid_cfg = cfg.get("grid", {}) or {}
    pal_cfg = cfg.get("palette", {}) or {}
    render_cfg = cfg.get("render", {}) or {}

    colors = pal_cfg.get("colors")
    colors = tuple(parse_color(c) for c in colors) if colors else COLORS
    background = pal_cfg.get("background")
    background = parse_color(background) if background is not None else BACKGROUND

    key = cfg.get("color_key")
    if key is not None:
        key = [int(k) for k in key]

    gridline_color = render_cfg.get("gridline_color")

    return RenderConfig(
        tiles_x=int(grid_cfg.get("tiles_x", TILES_X)),
        tiles_y=int(grid_cfg.get("tiles_y", TILES_Y)),
        min_x=float(grid_cfg.get("min_x", MIN_X)),
        max_x=float(grid_cfg.get("max_x", MAX_X)),
        min_y=float(grid_cfg.get("min_y", MIN_Y)),
        max_iter=int(cfg.get("max_iter", MAX_ITERATIONS)),
        interior=str(cfg.get("interior", "magnitude")),
        colors=colors,
        background=background,
        color_key=key,
        scale=float(render_cfg.get("scale", SCALE)),
        gridline_every=int(render_cfg.get("gridline_every", 16)),
        gridline_color=parse_color(gridline_color) if gridline_color is not None else (0, 0, 255),
        gridline_width=float(render_cfg.get("gridline_width", 4.0)),
        source=source,
    )


def load_config(path: str | Path) -> RenderConfig:
    with open(path, "r") as f:
        cfg = yaml.safe_load(f)
    return config_from_dict(cfg, source=str(path))

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from tilebrot.config import RenderConfig
from tilebrot.iterators import GridSpec, sample
from tilebrot.palette import PaletteClassifier


@dataclass
class RenderResult:
    grid: GridSpec
    times: np.ndarray    # escape time per cell, column-major
    key: np.ndarray      # color key actually used
    indices: np.ndarray  # palette index per cell
    counts: np.ndarray   # samples per palette index
    derived: bool        # False when a literal key was configured


def compute(config: RenderConfig, use_key_override: bool = True) -> RenderResult:
    """Sample the configured region and assign a palette index to every cell."""
    grid = config.grid
    palette = config.palette

    times = sample(grid, max_iter=config.max_iter, interior=config.interior)

    key = config.color_key if use_key_override else None
    classifier = PaletteClassifier(palette, key=key).fit(times)
    indices = classifier.indices(times)

    return RenderResult(
        grid=grid,
        times=times,
        key=classifier.key,
        indices=indices,
        counts=classifier.counts(times),
        derived=not classifier.override,
    )

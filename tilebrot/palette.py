"""
Palette classifier for escape-time fields.

Quantile boundaries ("color key") are sampled from the sorted escape times,
then every value is binned against the key with a binary search:

    derive_key(times, n)   -> n - 1 ascending boundaries
    classify(value, key)   -> palette index in [0, len(key)]

A value equal to a boundary belongs to the bin above it.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class Palette:
    """Ordered data colors plus a background used only for the canvas fill."""
    colors: Tuple[RGB, ...]
    background: RGB

    def __post_init__(self):
        if len(self.colors) < 2:
            raise ValueError(f"Palette needs at least 2 colors, got {len(self.colors)}")
        if len(set(self.colors)) != len(self.colors):
            raise ValueError("Palette colors must be distinct")

    def __len__(self):
        return len(self.colors)

    def __getitem__(self, index: int) -> RGB:
        return self.colors[index]


def derive_key(values: Sequence[int], palette_size: int) -> np.ndarray:
    """
    Quantile key with palette_size - 1 boundaries.

    key[n] = sorted(values)[(n + 1) * (len(values) // palette_size)]

    When len(values) is not a multiple of palette_size the leftover values
    all fall into the last bin.
    """
    if palette_size < 2:
        raise ValueError(f"palette_size must be >= 2, got {palette_size}")

    times = np.sort(np.asarray(values, dtype=np.int64), kind="stable")
    if times.size < palette_size:
        raise ValueError(
            f"Need at least {palette_size} samples to derive a color key, got {times.size}"
        )

    step = times.size // palette_size
    return times[step * np.arange(1, palette_size)]


def classify(value: int, key: Sequence[int]) -> int:
    """Palette index for value: the number of key entries <= value."""
    return bisect_right(key, value)


def classify_all(values, key) -> np.ndarray:
    """Vectorised classify over an array of escape times."""
    return np.searchsorted(np.asarray(key), np.asarray(values), side="right")


def bucket_counts(indices, palette_size: int) -> np.ndarray:
    """Number of samples assigned to each palette index."""
    return np.bincount(np.asarray(indices, dtype=np.int64), minlength=palette_size)


def check_key(key, palette_size: int) -> np.ndarray:
    key = np.asarray(key, dtype=np.int64)
    if key.ndim != 1:
        raise ValueError("Color key must be a flat sequence")
    if key.size != palette_size - 1:
        raise ValueError(
            f"Color key has {key.size} boundaries; a palette of {palette_size} "
            f"colors needs {palette_size - 1}"
        )
    if np.any(np.diff(key) < 0):
        raise ValueError(f"Color key must be non-decreasing: {key.tolist()}")
    return key


class PaletteClassifier:
    """
    Maps escape times to palette colors.

    A literal key may be supplied to keep colors stable across runs at
    different resolutions; otherwise the key is derived from the data
    passed to fit().
    """

    def __init__(self, palette: Palette, key: Optional[Sequence[int]] = None):
        self.palette = palette
        self.override = key is not None
        self.key = check_key(key, len(palette)) if key is not None else None

    def fit(self, values) -> "PaletteClassifier":
        if not self.override:
            self.key = derive_key(values, len(self.palette))
        return self

    def _require_key(self):
        if self.key is None:
            raise ValueError("PaletteClassifier has no key; call fit() first")
        return self.key

    def index(self, value: int) -> int:
        return classify(value, self._require_key())

    def indices(self, values) -> np.ndarray:
        return classify_all(values, self._require_key())

    def color(self, value: int) -> RGB:
        return self.palette[self.index(value)]

    def counts(self, values) -> np.ndarray:
        return bucket_counts(self.indices(values), len(self.palette))

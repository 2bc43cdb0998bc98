"""Gaussian bloom post-processing for rendered frames."""

from __future__ import annotations

import numpy as np


def gaussian_kernel_2d(radius: int, sigma: float) -> np.ndarray:
    """Normalised (2r+1) x (2r+1) Gaussian kernel."""
    if radius < 0:
        raise ValueError("radius must not be negative")
    offsets = np.arange(-radius, radius + 1, dtype=float)
    dy, dx = np.meshgrid(offsets, offsets, indexing="ij")
    kernel = np.exp(-(dx * dx + dy * dy) / (2.0 * sigma * sigma))
    return kernel / kernel.sum()


def _saturate(values: np.ndarray) -> np.ndarray:
    """Truncate towards zero and clamp into the byte range."""
    return np.clip(np.trunc(np.nan_to_num(values, nan=0.0)), 0.0, 255.0)


def apply_bloom(image, kernel, threshold: float, strength: float) -> np.ndarray:
    """Add a blurred copy of the image's bright pixels back onto the image.

    ``image`` is an (height, width, 3) array of bytes; pixels whose mean
    brightness exceeds ``threshold`` (0..1) are scaled by ``strength``,
    blurred with ``kernel`` and added to the original.
    """
    pixels = np.asarray(image)
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError("image must have shape (height, width, 3)")
    weights = np.asarray(kernel, dtype=float)
    if weights.ndim != 2 or weights.shape[0] != weights.shape[1] or weights.shape[0] % 2 == 0:
        raise ValueError("kernel must be square with an odd side")

    radius = weights.shape[0] // 2
    height, width = pixels.shape[:2]
    source = pixels.astype(np.float64)

    bright = source.sum(axis=2) / 3.0 / 255.0 > threshold
    bloom = np.where(bright[..., None], _saturate(source * strength), 0.0)

    padded = np.zeros((height + 2 * radius, width + 2 * radius, 3))
    padded[radius : radius + height, radius : radius + width] = bloom

    result = source.copy()
    for dx in range(-radius, radius + 1):
        for dy in range(-radius, radius + 1):
            weight = weights[dx + radius, dy + radius]
            rows = slice(radius + dy, radius + dy + height)
            cols = slice(radius + dx, radius + dx + width)
            result += weight * padded[rows, cols]
    return _saturate(result).astype(np.uint8)
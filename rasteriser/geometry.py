"""Screen-space helpers and the standard view and projection matrices."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

# Screen space has (0, 0) at the centre and (1, 1) at the top-right corner.
# Image coordinates have (0, 0) at the top left and (w, h) at the bottom right.


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def screen_to_image(s: Sequence[float], width: int, height: int) -> tuple[int, int]:
    """Map a screen-space point to the nearest integer image coordinate."""
    x = (s[0] + 1.0) * 0.5 * width
    y = (1.0 - s[1]) * 0.5 * height
    return _round_half_away(x), _round_half_away(y)


def image_to_screen(p: Sequence[float], width: int, height: int) -> np.ndarray:
    """Map an image coordinate back to screen space."""
    x = (p[0] / width) * 2.0 - 1.0
    y = (1.0 - p[1] / height) * 2.0 - 1.0
    return np.array([x, y], dtype=float)


def edge(v0: Sequence[float], v1: Sequence[float], p: Sequence[float]) -> float:
    """Signed edge function of ``p`` against the directed edge ``v0 -> v1``."""
    return float((p[0] - v0[0]) * (v1[1] - v0[1]) - (p[1] - v0[1]) * (v1[0] - v0[0]))


def point_in_triangle(
    v0: Sequence[float], v1: Sequence[float], v2: Sequence[float], p: Sequence[float]
) -> bool:
    """True if ``p`` lies strictly inside the triangle, in either winding."""
    e0 = edge(v0, v1, p)
    e1 = edge(v1, v2, p)
    e2 = edge(v2, v0, p)
    return (e0 < 0 and e1 < 0 and e2 < 0) or (e0 > 0 and e1 > 0 and e2 > 0)


def _normalize(v: np.ndarray) -> np.ndarray:
    length = np.linalg.norm(v)
    if length == 0:
        raise ValueError("cannot normalize a zero-length vector")
    return v / length


def look_at(
    eye: Sequence[float], center: Sequence[float], up: Sequence[float]
) -> np.ndarray:
    """Right-handed view matrix looking from ``eye`` towards ``center``."""
    eye_v = np.asarray(eye, dtype=float)[:3]
    center_v = np.asarray(center, dtype=float)[:3]
    up_v = np.asarray(up, dtype=float)[:3]

    f = _normalize(center_v - eye_v)
    s = _normalize(np.cross(f, up_v))
    u = np.cross(s, f)

    view = np.identity(4)
    view[0, :3] = s
    view[1, :3] = u
    view[2, :3] = -f
    view[0, 3] = -np.dot(s, eye_v)
    view[1, 3] = -np.dot(u, eye_v)
    view[2, 3] = np.dot(f, eye_v)
    return view


def perspective_fov(
    fov: float, width: float, height: float, near: float, far: float
) -> np.ndarray:
    """Right-handed perspective projection mapping depth to [-1, 1]."""
    if width <= 0:
        raise ValueError("width must be greater than zero")
    if height <= 0:
        raise ValueError("height must be greater than zero")
    if fov <= 0:
        raise ValueError("fov must be greater than zero")

    half = fov * 0.5
    h = math.cos(half) / math.sin(half)
    w = h * height / width

    proj = np.zeros((4, 4))
    proj[0, 0] = w
    proj[1, 1] = h
    proj[2, 2] = -(far + near) / (far - near)
    proj[3, 2] = -1.0
    proj[2, 3] = -(2.0 * far * near) / (far - near)
    return proj
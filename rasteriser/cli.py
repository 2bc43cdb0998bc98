"""Render a turntable animation of an OBJ scene with bloom."""

from __future__ import annotations

import argparse
import math
from pathlib import Path
from typing import Sequence

import numpy as np
from PIL import Image

from .bloom import apply_bloom, gaussian_kernel_2d
from .camera import Camera, Object3D
from .renderer import Renderer
from .scene import load_obj, rotation_y

BLOOM_THRESHOLD = 0.32
BLOOM_STRENGTH = 1.0
BLOOM_RADIUS = 18
BLOOM_SIGMA = 32.0

CAMERA_START = (0.0, 1.0, 4.0)
CAMERA_FOV = 80.0
CAMERA_NEAR = 0.1
CAMERA_FAR = 10.0


def render_animation(
    objects: Sequence[Object3D],
    out_dir: str | Path,
    width: int = 512,
    height: int = 512,
    fps: int = 24,
    duration: int = 5,
) -> list[Path]:
    """Render one full orbit of the camera around the origin.

    Each frame is bloomed and written to ``out_dir``; the written paths are
    returned in frame order.
    """
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    kernel = gaussian_kernel_2d(BLOOM_RADIUS, BLOOM_SIGMA)
    total = fps * duration
    written: list[Path] = []

    for frame in range(total):
        angle = frame * 2.0 * math.pi / (fps * duration)
        x, y, z = rotation_y(angle) @ np.array(CAMERA_START)
        camera = Camera(
            (x, y, z, 1.0),
            (0.0, 0.0, 0.0, 1.0),
            (0.0, 1.0, 0.0),
            CAMERA_FOV,
            CAMERA_NEAR,
            CAMERA_FAR,
        )

        renderer = Renderer(width, height)
        for obj in objects:
            renderer.add_object(obj)
        renderer.render(camera)

        bloomed = apply_bloom(renderer.render_buff, kernel, BLOOM_THRESHOLD, BLOOM_STRENGTH)
        path = out / f"ouput-{frame}.png"
        Image.fromarray(bloomed).save(path)
        written.append(path)
        print(f"Completed {frame + 1}/{total} frames")

    return written


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="rasteriser", description="Render a turntable animation of an OBJ scene."
    )
    parser.add_argument("scene", nargs="?", default="scene.obj", help="OBJ file to render")
    parser.add_argument("-o", "--out", default="out", help="directory for the frames")
    parser.add_argument("--width", type=int, default=512)
    parser.add_argument("--height", type=int, default=512)
    parser.add_argument("--fps", type=int, default=24)
    parser.add_argument("--duration", type=int, default=5, help="length in seconds")
    args = parser.parse_args(argv)

    objects = load_obj(args.scene)
    render_animation(objects, args.out, args.width, args.height, args.fps, args.duration)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
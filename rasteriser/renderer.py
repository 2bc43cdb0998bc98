"""Near-plane clipping, shading and scanline-free triangle rasterisation."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

import numpy as np
from PIL import Image

from .camera import Camera, FaceIndex, Object3D
from .geometry import edge, screen_to_image

# (direction, position, colour, power) of each light, given in world space.
_LIGHTS = (
    ((-1.1, -1.2, 0.0, 0.0), (1.0, 0.0, 1.0, 1.0), (1.0, 0.3, 0.5, 0.0), 4.0),
    ((2.1, 1.5, -1.0, 0.0), (-1.0, -1.0, 1.0, 1.0), (0.2, 0.1, 1.2, 0.0), 1.2),
    ((0.0, 1.5, -1.0, 0.0), (0.0, -1.0, 1.0, 1.0), (0.0, 1.0, 0.0, 0.0), 1.2),
)

Face = tuple[FaceIndex, FaceIndex, FaceIndex]


def shade(view_transform: np.ndarray, v: np.ndarray, n: np.ndarray) -> np.ndarray:
    """Colour of points ``v`` with normals ``n`` lit by the scene's three lights.

    ``v`` and ``n`` are 4-vectors, or arrays of them along the last axis.
    """
    view = np.asarray(view_transform, dtype=float)
    points = np.asarray(v, dtype=float)
    normals = np.asarray(n, dtype=float)
    colour = np.zeros(np.broadcast_shapes(points.shape, normals.shape))

    with np.errstate(divide="ignore", invalid="ignore"):
        unit_normals = normals / np.linalg.norm(normals, axis=-1, keepdims=True)
        for direction, position, light_colour, power in _LIGHTS:
            light_dir = view @ np.array(direction)
            light_pos = view @ np.array(position)
            towards_light = -light_dir / np.linalg.norm(light_dir)
            intensity = unit_normals @ towards_light
            intensity = intensity * power / np.sum((points - light_pos) ** 2, axis=-1)
            colour = colour + np.multiply.outer(intensity, np.array(light_colour))
    return colour


@dataclass
class ClipSpaceObject:
    """A mesh projected into clip space and clipped against the near plane."""

    name: str
    transform: np.ndarray
    vertices: list[np.ndarray] = field(default_factory=list)
    normals: list[np.ndarray] = field(default_factory=list)
    faces: list[Face] = field(default_factory=list)

    def _add_face(self, vertices: Sequence[np.ndarray], normals: Sequence[np.ndarray]) -> None:
        first_v = len(self.vertices)
        first_n = len(self.normals)
        self.vertices.extend(vertices)
        self.normals.extend(normals)
        self.faces.append(
            tuple(FaceIndex(first_v + k, first_n + k) for k in range(3))  # type: ignore[arg-type]
        )

    def _clip_one_visible(self, near, vis, vis_n, a, a_n, b, b_n) -> None:
        t1 = (-vis[2] - near) / (a[2] - vis[2])
        t2 = (-vis[2] - near) / (b[2] - vis[2])
        self._add_face(
            (vis, vis + (a - vis) * t1, vis + (b - vis) * t2),
            (vis_n, vis_n + (a_n - vis_n) * t1, vis_n + (b_n - vis_n) * t2),
        )

    def _clip_two_visible(self, near, invis, invis_n, a, a_n, b, b_n) -> None:
        t1 = (-invis[2] - near) / (a[2] - invis[2])
        t2 = (-invis[2] - near) / (b[2] - invis[2])
        v_a = invis + (a - invis) * t1
        v_b = invis + (b - invis) * t2
        n_a = invis_n + (a_n - invis_n) * t1
        n_b = invis_n + (b_n - invis_n) * t2
        self._add_face((a, b, v_a), (a_n, b_n, n_a))
        self._add_face((b, v_b, v_a), (b_n, n_b, n_a))

    @classmethod
    def from_object(cls, obj: Object3D, camera: Camera) -> "ClipSpaceObject":
        """Project ``obj`` with ``camera`` and clip its faces at the near plane."""
        model = np.asarray(obj.transform, dtype=float)
        clipped = cls(name=obj.name, transform=model.copy())
        mvp = camera.build_mvp_transform(model)
        normal_transform = camera.build_normal_transform(model)
        near = camera.near

        for face in obj.faces:
            verts = [
                Camera.project_point(mvp, np.append(np.asarray(obj.vertices[c.v], dtype=float)[:3], 1.0))
                for c in face
            ]
            norms = [
                Camera.transform_normal(
                    normal_transform, np.append(np.asarray(obj.normals[c.n], dtype=float)[:3], 0.0)
                )[:3]
                for c in face
            ]
            visible = [v[2] > near for v in verts]
            vis_count = sum(visible)
            if vis_count == 0:
                continue

            v1, v2, v3 = verts
            n1, n2, n3 = norms
            orders = (
                (v1, n1, v2, n2, v3, n3),
                (v2, n2, v1, n1, v3, n3),
                (v3, n3, v1, n1, v2, n2),
            )
            if vis_count == 3:
                clipped._add_face(verts, norms)
            elif vis_count == 1:
                index = visible.index(True)
                clipped._clip_one_visible(near, *orders[index])
            else:
                for is_visible, order in zip(visible, orders):
                    if not is_visible:
                        clipped._clip_two_visible(near, *order)
        return clipped


def _to_bytes(colour: np.ndarray) -> np.ndarray:
    values = np.clip(np.nan_to_num(colour, nan=0.0), 0.0, 1.0)
    return np.floor(values * 255.0 + 0.5).astype(np.uint8)


class Renderer:
    """Depth-buffered rasteriser drawing objects into an RGB image."""

    def __init__(self, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise ValueError("width and height must be positive")
        self.width = width
        self.height = height
        self.render_buff = np.zeros((height, width, 3), dtype=np.uint8)
        self.depth_buff = np.full((height, width), np.inf)
        self.objects: list[Object3D] = []

    def add_object(self, obj: Object3D) -> None:
        if not isinstance(obj, Object3D):
            raise TypeError("object must provide name, vertices, normals, faces and transform")
        self.objects.append(obj)

    def save(self, path: str | Path) -> None:
        """Write the colour buffer to an image file."""
        Image.fromarray(self.render_buff).save(path)

    def render(self, camera: Camera) -> None:
        """Clear the buffers and draw every object seen from ``camera``."""
        self.render_buff.fill(0)
        self.depth_buff.fill(np.inf)
        inv_proj = camera.build_inv_view_transform()

        for obj in self.objects:
            clipped = ClipSpaceObject.from_object(obj, camera)
            for face in clipped.faces:
                verts = [clipped.vertices[c.v] for c in face]
                norms = [clipped.normals[c.n] for c in face]
                self._draw_face(verts, norms, camera.view_mat, inv_proj)

    def _draw_face(self, verts, norms, view_mat, inv_proj) -> None:
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            screen = np.array([v[:3] / v[3] for v in verts])
        if not np.all(np.isfinite(screen[:, :2])):
            return
        s1, s2, s3 = screen
        area = edge(s1[:2], s2[:2], s3[:2])
        if area == 0.0:
            return

        x_min, y_min = screen[:, 0].min(), screen[:, 1].min()
        x_max, y_max = screen[:, 0].max(), screen[:, 1].max()
        i_lo, j_hi = screen_to_image((x_min, y_min), self.width, self.height)
        i_hi, j_lo = screen_to_image((x_max, y_max), self.width, self.height)
        i_lo, i_hi = max(i_lo, 0), min(i_hi, self.width - 1)
        j_lo, j_hi = max(j_lo, 0), min(j_hi, self.height - 1)
        if i_lo > i_hi or j_lo > j_hi:
            return

        rows, cols = np.mgrid[j_lo : j_hi + 1, i_lo : i_hi + 1]
        px = cols / self.width * 2.0 - 1.0
        py = (1.0 - rows / self.height) * 2.0 - 1.0

        def edge_grid(a, b):
            return (px - a[0]) * (b[1] - a[1]) - (py - a[1]) * (b[0] - a[0])

        e12 = edge_grid(s1, s2)
        e23 = edge_grid(s2, s3)
        e31 = edge_grid(s3, s1)
        inside = ((e12 < 0) & (e23 < 0) & (e31 < 0)) | ((e12 > 0) & (e23 > 0) & (e31 > 0))

        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            w0 = e23 / area
            w1 = e31 / area
            w2 = e12 / area
            z = 1.0 / (w0 / s1[2] + w1 / s2[2] + w2 / s3[2])
            depth = self.depth_buff[j_lo : j_hi + 1, i_lo : i_hi + 1]
            mask = inside & (depth > z)
            if not mask.any():
                return

            w0, w1, w2, zm = w0[mask], w1[mask], w2[mask], z[mask]
            x = w0 * s1[0] + w1 * s2[0] + w2 * s3[0]
            y = w0 * s1[1] + w1 * s2[1] + w2 * s3[1]
            n1, n2, n3 = norms
            zc = zm[:, None]
            interpolated = zc * (
                (np.outer(w0, n1) + np.outer(w1, n2) + np.outer(w2, n3)) / zc
            )
            normals = np.hstack([interpolated, np.zeros((len(zm), 1))])

            ndc = np.column_stack([x, y, zm, np.ones_like(zm)])
            view_points = ndc @ inv_proj.T
            world = view_points / view_points[:, 3:4]
            colour = shade(view_mat, world, normals)

        r, c = rows[mask], cols[mask]
        self.render_buff[r, c] = _to_bytes(colour[:, :3])
        self.depth_buff[r, c] = zm
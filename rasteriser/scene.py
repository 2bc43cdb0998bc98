"""Wavefront OBJ loading and the rotation helpers used to animate a scene."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

import numpy as np

from .camera import FaceIndex

_log = logging.getLogger(__name__)

DEFAULT_OBJECT_NAME = "monke"

Face = tuple[FaceIndex, FaceIndex, FaceIndex]


@dataclass
class MeshObject:
    """A named triangle mesh with per-corner vertex and normal indices."""

    name: str
    vertices: list[np.ndarray] = field(default_factory=list)
    normals: list[np.ndarray] = field(default_factory=list)
    faces: list[Face] = field(default_factory=list)
    transform: np.ndarray = field(default_factory=lambda: np.identity(4))


def _vector(words: Sequence[str]) -> np.ndarray:
    return np.array([float(words[1]), float(words[2]), float(words[3])])


def _corner(word: str, vertex_offset: int, normal_offset: int) -> FaceIndex:
    parts = word.split("//")
    if len(parts) != 2:
        raise ValueError(f"face corner {word!r} is not of the form v//n")
    vertex = int(parts[0]) - 1 - vertex_offset
    normal = int(parts[1]) - 1 - normal_offset
    if vertex < 0 or normal < 0:
        raise ValueError(f"face corner {word!r} refers outside the current object")
    return FaceIndex(vertex, normal)


def parse_obj(text: str) -> list[MeshObject]:
    """Parse OBJ text holding ``v``, ``vn``, ``f v//n`` and ``o`` lines.

    Objects without faces are dropped. Face indices are made relative to the
    object they belong to.
    """
    objects: list[MeshObject] = []
    vertex_offset = 0
    normal_offset = 0
    current = MeshObject(DEFAULT_OBJECT_NAME)

    for lineno, line in enumerate(text.splitlines(), start=1):
        words = line.split()
        if not words:
            continue
        kind = words[0]
        try:
            if kind == "o":
                if current.faces:
                    _log.info("Pushing object %s", current.name)
                    vertex_offset += len(current.vertices)
                    normal_offset += len(current.normals)
                    objects.append(current)
                current = MeshObject(words[1])
            elif kind == "v":
                current.vertices.append(_vector(words))
            elif kind == "vn":
                normal = _vector(words)
                with np.errstate(divide="ignore", invalid="ignore"):
                    current.normals.append(normal / np.linalg.norm(normal))
            elif kind == "f":
                if len(words) < 4:
                    raise ValueError("a face needs three corners")
                current.faces.append(
                    tuple(_corner(w, vertex_offset, normal_offset) for w in words[1:4])  # type: ignore[arg-type]
                )
            else:
                _log.warning("Unknown element %r on line %d", kind, lineno)
        except (IndexError, ValueError) as exc:
            raise ValueError(f"line {lineno}: malformed {kind!r} element: {line!r}") from exc

    if current.faces:
        _log.info("Pushing object %s", current.name)
        objects.append(current)
    return objects


def load_obj(path: str | Path) -> list[MeshObject]:
    """Read and parse an OBJ file."""
    return parse_obj(Path(path).read_text())


def rotation_z(angle: float) -> np.ndarray:
    """3x3 rotation about the z axis."""
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


def rotation_y(angle: float) -> np.ndarray:
    """3x3 rotation about the y axis."""
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, 0.0, s], [0.0, 1.0, 0.0], [-s, 0.0, c]])


def rotate_z(v: Sequence[float], angle: float) -> np.ndarray:
    """Rotate a 3-vector about the z axis."""
    return rotation_z(angle) @ np.asarray(v, dtype=float)
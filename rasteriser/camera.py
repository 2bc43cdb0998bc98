"""Camera, face indices and the object interface the renderer draws."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol, Sequence, runtime_checkable

import numpy as np

from .geometry import look_at as _look_at_matrix
from .geometry import perspective_fov


@dataclass(frozen=True)
class FaceIndex:
    """Indices of a face corner's vertex and normal."""

    v: int
    n: int


@runtime_checkable
class Object3D(Protocol):
    """A mesh the renderer can draw."""

    name: str
    vertices: Sequence[np.ndarray]
    normals: Sequence[np.ndarray]
    faces: Sequence[tuple[FaceIndex, FaceIndex, FaceIndex]]
    transform: np.ndarray


class Camera:
    """Perspective camera with cached view and projection matrices.

    ``fov`` is given in degrees and stored in radians.
    """

    def __init__(
        self,
        position: Sequence[float],
        center: Sequence[float],
        up: Sequence[float],
        fov: float,
        near: float,
        far: float,
    ) -> None:
        self.position = np.asarray(position, dtype=float)
        self.center = np.asarray(center, dtype=float)
        self.up = np.asarray(up, dtype=float)
        self.fov = fov * math.pi / 180.0
        self.near = near
        self.far = far
        self.view_mat = _look_at_matrix(self.position[:3], self.center[:3], self.up)
        self.proj_mat = perspective_fov(self.fov, 2.0, 2.0, near, far)
        self.view_proj_mat = self.proj_mat @ self.view_mat

    def rebuild_mats(self) -> None:
        """Recompute the matrices from the current position and centre."""
        self.view_mat = _look_at_matrix(self.position[:3], self.center[:3], self.up)
        self.proj_mat = perspective_fov(self.fov, 1.0, 1.0, self.near, self.far)
        self.view_proj_mat = self.proj_mat @ self.view_mat

    def move_to(self, pos: Sequence[float]) -> None:
        self.position = np.asarray(pos, dtype=float)

    def look_at(self, pos: Sequence[float]) -> None:
        self.center = np.asarray(pos, dtype=float)

    def transform_position(self, transform: np.ndarray) -> None:
        self.position = np.asarray(transform, dtype=float) @ self.position

    def transform_center(self, transform: np.ndarray) -> None:
        self.center = np.asarray(transform, dtype=float) @ self.center

    def build_mvp_transform(self, model_matrix: np.ndarray) -> np.ndarray:
        return self.view_proj_mat @ np.asarray(model_matrix, dtype=float)

    def build_normal_transform(self, model_matrix: np.ndarray) -> np.ndarray:
        """Inverse transpose of the model-view matrix."""
        model_view = self.view_mat @ np.asarray(model_matrix, dtype=float)
        try:
            return np.linalg.inv(model_view).T
        except np.linalg.LinAlgError as exc:
            raise ValueError("model-view matrix is not invertible") from exc

    def build_inv_view_transform(self) -> np.ndarray:
        """Inverse of the projection matrix."""
        try:
            return np.linalg.inv(self.proj_mat)
        except np.linalg.LinAlgError as exc:
            raise ValueError("projection matrix is not invertible") from exc

    @staticmethod
    def project_point(mvp: np.ndarray, pt: Sequence[float]) -> np.ndarray:
        return np.asarray(mvp, dtype=float) @ np.asarray(pt, dtype=float)

    @staticmethod
    def transform_normal(
        normal_transform: np.ndarray, normal: Sequence[float]
    ) -> np.ndarray:
        return np.asarray(normal_transform, dtype=float) @ np.asarray(normal, dtype=float)
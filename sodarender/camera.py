"""Projection and view matrices and the cameras built on them."""

from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np

_UP = np.array([0.0, 1.0, 0.0])


def _vec3(values: Sequence[float]) -> np.ndarray:
    vector = np.asarray(values, dtype=np.float64).reshape(-1)
    if vector.shape != (3,):
        raise ValueError(f"expected three components, got {vector.shape[0]}")
    return vector


def ortho(left, right, bottom, top, near=-1.0, far=1.0) -> np.ndarray:
    """Orthographic projection mapping the box onto [-1, 1] in every axis."""
    result = np.identity(4)
    result[0, 0] = 2.0 / (right - left)
    result[1, 1] = 2.0 / (top - bottom)
    result[2, 2] = -2.0 / (far - near)
    result[0, 3] = -(right + left) / (right - left)
    result[1, 3] = -(top + bottom) / (top - bottom)
    result[2, 3] = -(far + near) / (far - near)
    return result


def perspective(fov, aspect, near, far) -> np.ndarray:
    """Right-handed perspective projection; ``fov`` is the vertical angle in radians."""
    if aspect == 0:
        raise ValueError("aspect ratio must not be zero")
    focal = 1.0 / math.tan(fov / 2.0)
    result = np.zeros((4, 4))
    result[0, 0] = focal / aspect
    result[1, 1] = focal
    result[2, 2] = -(far + near) / (far - near)
    result[2, 3] = -(2.0 * far * near) / (far - near)
    result[3, 2] = -1.0
    return result


def look_at(eye, center, up) -> np.ndarray:
    """Right-handed view matrix looking from ``eye`` towards ``center``."""
    eye = _vec3(eye)
    forward = _vec3(center) - eye
    forward /= np.linalg.norm(forward)
    side = np.cross(forward, _vec3(up))
    side /= np.linalg.norm(side)
    upward = np.cross(side, forward)

    result = np.identity(4)
    result[0, :3] = side
    result[1, :3] = upward
    result[2, :3] = -forward
    result[0, 3] = -side.dot(eye)
    result[1, 3] = -upward.dot(eye)
    result[2, 3] = forward.dot(eye)
    return result


def translate(offset) -> np.ndarray:
    result = np.identity(4)
    result[:3, 3] = _vec3(offset)
    return result


def rotate(angle, axis=(0.0, 0.0, 1.0)) -> np.ndarray:
    """Rotation by ``angle`` radians about ``axis``."""
    unit = _vec3(axis)
    length = np.linalg.norm(unit)
    if length == 0:
        raise ValueError("rotation axis must not be zero")
    unit = unit / length
    cos, sin = math.cos(angle), math.sin(angle)
    cross = np.array(
        [
            [0.0, -unit[2], unit[1]],
            [unit[2], 0.0, -unit[0]],
            [-unit[1], unit[0], 0.0],
        ]
    )
    result = np.identity(4)
    result[:3, :3] = cos * np.identity(3) + sin * cross + (1 - cos) * np.outer(unit, unit)
    return result


def scale(factors) -> np.ndarray:
    result = np.identity(4)
    result[:3, :3] = np.diag(_vec3(factors))
    return result


class OrthoCamera:
    """2D camera with an orthographic projection, a position and a rotation in degrees."""

    def __init__(self, left, right, down, up) -> None:
        self._projection = ortho(left, right, down, up, -1.0, 1.0)
        self._view = np.identity(4)
        self._view_projection = self._projection @ self._view
        self._position = np.zeros(3)
        self._rotation = 0.0

    def set_projection(self, left, right, down, up) -> None:
        self._projection = ortho(left, right, down, up, -1.0, 1.0)
        self._view_projection = self._projection @ self._view

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    @position.setter
    def position(self, value) -> None:
        self._position = _vec3(value).copy()
        self._recalculate()

    @property
    def rotation(self) -> float:
        return self._rotation

    @rotation.setter
    def rotation(self, value: float) -> None:
        self._rotation = float(value)
        self._recalculate()

    @property
    def projection(self) -> np.ndarray:
        return self._projection.copy()

    @property
    def view(self) -> np.ndarray:
        return self._view.copy()

    @property
    def view_projection(self) -> np.ndarray:
        return self._view_projection.copy()

    def _recalculate(self) -> None:
        transform = translate(self._position) @ rotate(math.radians(self._rotation))
        self._view = np.linalg.inv(transform)
        self._view_projection = self._projection @ self._view


class PerspectiveCamera:
    """3D camera looking along ``target`` from ``position``."""

    def __init__(self, fov, aspect_ratio, near_plane, far_plane) -> None:
        self._projection = perspective(fov, aspect_ratio, near_plane, far_plane)
        self._view = np.identity(4)
        self._view_projection = self._projection @ self._view
        self._target = np.array([0.0, 0.0, -1.0])
        self._position = np.zeros(3)
        self._rotation = 0.0

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    @position.setter
    def position(self, value) -> None:
        self._position = _vec3(value).copy()
        self._recalculate()

    @property
    def rotation(self) -> float:
        return self._rotation

    @rotation.setter
    def rotation(self, value: float) -> None:
        self._rotation = float(value)
        self._recalculate()

    @property
    def target(self) -> np.ndarray:
        return self._target.copy()

    @target.setter
    def target(self, value) -> None:
        self._target = _vec3(value).copy()
        self._recalculate()

    @property
    def projection(self) -> np.ndarray:
        return self._projection.copy()

    @property
    def view(self) -> np.ndarray:
        return self._view.copy()

    @property
    def view_projection(self) -> np.ndarray:
        return self._view_projection.copy()

    def _recalculate(self) -> None:
        self._view = look_at(self._position, self._position + self._target, _UP)
        self._view_projection = self._projection @ self._view


class RendererCamera:
    """A camera that is only a projection; its view comes from an outside transform."""

    def __init__(self, projection: Optional[np.ndarray] = None) -> None:
        if projection is None:
            self._projection = np.identity(4)
        else:
            matrix = np.array(projection, dtype=np.float64)
            if matrix.shape != (4, 4):
                raise ValueError("projection must be a 4x4 matrix")
            self._projection = matrix

    @property
    def projection(self) -> np.ndarray:
        return self._projection.copy()
"""Render commands and the scene renderer that issues them."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .buffers import VertexArray
from .camera import OrthoCamera, PerspectiveCamera
from .shader import Shader

DEFAULT_CLEAR_COLOR = (1.0, 0.0, 0.8, 1.0)


class RenderAPI(abc.ABC):
    """The operations a graphics back end has to offer."""

    @abc.abstractmethod
    def init(self, width: int, height: int) -> None:
        """Prepare the back end for a surface of the given size."""

    @abc.abstractmethod
    def clear_screen(self, color=DEFAULT_CLEAR_COLOR) -> None:
        """Clear the colour and depth of the surface."""

    @abc.abstractmethod
    def set_viewport(self, x: int, y: int, width: int, height: int) -> None:
        """Set the rectangle drawing goes to."""

    @abc.abstractmethod
    def draw(self, vertex_array: VertexArray, index_count: int = 0) -> None:
        """Draw indexed triangles; ``index_count`` 0 means the whole index buffer."""


@dataclass(frozen=True)
class DrawCall:
    """One indexed triangle draw."""

    vertex_array: VertexArray
    count: int


class RecordingRenderAPI(RenderAPI):
    """A back end that keeps the state and draw calls it is given."""

    def __init__(self) -> None:
        self.viewport: Optional[Tuple[int, int, int, int]] = None
        self.blending = False
        self.clear_color: Optional[Tuple[float, float, float, float]] = None
        self.clear_count = 0
        self.draw_calls: List[DrawCall] = []

    def init(self, width: int, height: int) -> None:
        self.set_viewport(0, 0, width, height)
        self.blending = True

    def clear_screen(self, color=DEFAULT_CLEAR_COLOR) -> None:
        components = tuple(float(value) for value in color)
        if len(components) != 4:
            raise ValueError("clear colour needs four components")
        self.clear_color = components
        self.clear_count += 1

    def set_viewport(self, x: int, y: int, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("viewport size must not be negative")
        self.viewport = (int(x), int(y), int(width), int(height))

    def draw(self, vertex_array: VertexArray, index_count: int = 0) -> None:
        if index_count:
            count = index_count
        else:
            index_buffer = vertex_array.index_buffer
            if index_buffer is None:
                raise ValueError("vertex array has no index buffer to draw")
            count = index_buffer.count
        self.draw_calls.append(DrawCall(vertex_array, int(count)))


class Renderer:
    """Draws vertex arrays with a shader through the camera of the current scene."""

    def __init__(self, api: Optional[RenderAPI] = None) -> None:
        self._api = api if api is not None else RecordingRenderAPI()
        self._projection_view = np.identity(4)
        self._camera_position = np.zeros(3)
        self._in_scene = False

    @property
    def api(self) -> RenderAPI:
        return self._api

    @property
    def projection_view(self) -> np.ndarray:
        return self._projection_view.copy()

    @property
    def camera_position(self) -> np.ndarray:
        return self._camera_position.copy()

    @property
    def in_scene(self) -> bool:
        return self._in_scene

    def init(self, width: int, height: int) -> None:
        self._api.init(width, height)

    def start_scene(self, camera) -> None:
        """Take the camera's matrices; a perspective camera also gives its position."""
        if isinstance(camera, PerspectiveCamera):
            self._projection_view = camera.view_projection
            self._camera_position = camera.position
        elif isinstance(camera, OrthoCamera):
            self._projection_view = camera.view_projection
        else:
            raise TypeError(f"unsupported camera {type(camera).__name__}")
        self._in_scene = True

    def stop_scene(self) -> None:
        self._in_scene = False

    def on_window_resize(self, width: int, height: int) -> None:
        self._api.set_viewport(0, 0, width, height)

    def push(
        self,
        vertex_array: VertexArray,
        shader: Shader,
        transform: Optional[np.ndarray] = None,
    ) -> None:
        """Upload the scene uniforms to ``shader`` and draw ``vertex_array``."""
        model = np.identity(4) if transform is None else np.asarray(transform, dtype=np.float64)
        if model.shape != (4, 4):
            raise ValueError("transform must be a 4x4 matrix")
        shader.bind()
        shader.set_uniform("u_PVMat", self._projection_view)
        shader.set_uniform("u_ModelMat", model)
        shader.set_uniform("u_ViewPos", self._camera_position)
        self._api.draw(vertex_array)
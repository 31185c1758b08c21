"""Batched 2D quad renderer: collects quads into one vertex buffer per draw call."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .buffers import (
    BufferAttrib,
    BufferLoadout,
    IndexBuffer,
    ShaderDataType,
    VertexArray,
    VertexBuffer,
)
from .camera import OrthoCamera, RendererCamera, rotate, translate
from .camera import scale as scale_matrix
from .render_api import RecordingRenderAPI, RenderAPI
from .shader import Shader
from .sprite_sheet import SpriteSheetTexture
from .texture import Texture2D

MAX_TEXTURE_SLOTS = 32
DEFAULT_MAX_QUADS = 10000
WHITE = (1.0, 1.0, 1.0, 1.0)

QUAD_VERTEX_DTYPE = np.dtype(
    [
        ("position", np.float32, (4,)),
        ("color", np.float32, (4,)),
        ("tex_coords", np.float32, (2,)),
        ("tex_index", np.float32),
        ("tex_scale", np.float32),
    ]
)

QUAD_LOADOUT = BufferLoadout(
    [
        BufferAttrib("a_position", ShaderDataType.VEC4),
        BufferAttrib("a_color", ShaderDataType.VEC4),
        BufferAttrib("a_texCoords", ShaderDataType.VEC2),
        BufferAttrib("a_texIndex", ShaderDataType.FLOAT),
        BufferAttrib("a_texScale", ShaderDataType.FLOAT),
    ]
)

_QUAD_CORNERS = np.array(
    [
        [-0.5, -0.5, 0.0, 1.0],
        [0.5, -0.5, 0.0, 1.0],
        [0.5, 0.5, 0.0, 1.0],
        [-0.5, 0.5, 0.0, 1.0],
    ]
)
_FULL_TEX_COORDS = ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0))
_QUAD_INDEX_PATTERN = np.array([0, 1, 2, 2, 3, 0], dtype=np.uint32)


@dataclass(frozen=True)
class QuadVertex:
    """One corner of a batched quad, laid out as the quad shader expects it."""

    position: Tuple[float, float, float, float]
    color: Tuple[float, float, float, float]
    tex_coords: Tuple[float, float]
    tex_index: float
    tex_scale: float

    def as_record(self) -> tuple:
        return (self.position, self.color, self.tex_coords, self.tex_index, self.tex_scale)


@dataclass
class RendererStats:
    """Counters of the work done since the last reset."""

    draw_calls: int = 0
    quad_count: int = 0

    def triangle_count(self) -> int:
        return self.quad_count * 2

    def vertex_count(self) -> int:
        return self.quad_count * 4

    def index_count(self) -> int:
        return self.quad_count * 6


def _components(values: Sequence[float], count: int, what: str) -> tuple:
    result = tuple(float(value) for value in np.asarray(values, dtype=np.float64).reshape(-1))
    if len(result) != count:
        raise ValueError(f"{what} needs {count} components, got {len(result)}")
    return result


def _position3(values: Sequence[float]) -> tuple:
    flat = tuple(float(value) for value in np.asarray(values, dtype=np.float64).reshape(-1))
    if len(flat) == 2:
        return flat + (0.0,)
    if len(flat) != 3:
        raise ValueError(f"position needs two or three components, got {len(flat)}")
    return flat


def _mat4(matrix) -> np.ndarray:
    result = np.asarray(matrix, dtype=np.float64)
    if result.shape != (4, 4):
        raise ValueError("transform must be a 4x4 matrix")
    return result


class Renderer2D:
    """Collects quads between start_scene and stop_scene and draws them in batches.

    A batch holds up to ``max_quads`` quads and ``MAX_TEXTURE_SLOTS`` textures,
    slot 0 being a 1x1 white texture used by plain coloured quads. A full batch
    is drawn and a new one begun.
    """

    def __init__(
        self,
        api: Optional[RenderAPI],
        shader: Shader,
        max_quads: int = DEFAULT_MAX_QUADS,
    ) -> None:
        if max_quads <= 0:
            raise ValueError("a batch must hold at least one quad")
        self._api = api if api is not None else RecordingRenderAPI()
        self._max_quads = int(max_quads)
        self._max_vertices = self._max_quads * 4
        self._max_indices = self._max_quads * 6

        self._vertex_array = VertexArray()
        self._vertex_buffer = VertexBuffer(
            size=self._max_vertices * QUAD_VERTEX_DTYPE.itemsize
        )
        self._vertex_buffer.loadout = QUAD_LOADOUT
        self._vertex_array.add_vertex_buffer(self._vertex_buffer)

        indices = (
            np.arange(self._max_quads, dtype=np.uint32)[:, None] * 4 + _QUAD_INDEX_PATTERN
        ).reshape(-1)
        self._index_buffer = IndexBuffer(indices)
        self._vertex_array.add_index_buffer(self._index_buffer)

        self._white_texture = Texture2D(1, 1)
        self._white_texture.set_data(b"\xff\xff\xff\xff")

        self._shader = shader
        self._shader.bind()
        self._shader.set_uniform("u_Textures", list(range(MAX_TEXTURE_SLOTS)))

        self._stats = RendererStats()
        self._vertices: List[QuadVertex] = []
        self._index_count = 0
        self._texture_slots: List[Texture2D] = [self._white_texture]

    @property
    def api(self) -> RenderAPI:
        return self._api

    @property
    def shader(self) -> Shader:
        return self._shader

    @property
    def max_quads(self) -> int:
        return self._max_quads

    @property
    def max_vertices(self) -> int:
        return self._max_vertices

    @property
    def max_indices(self) -> int:
        return self._max_indices

    @property
    def vertex_array(self) -> VertexArray:
        return self._vertex_array

    @property
    def vertex_buffer(self) -> VertexBuffer:
        return self._vertex_buffer

    @property
    def index_buffer(self) -> IndexBuffer:
        return self._index_buffer

    @property
    def white_texture(self) -> Texture2D:
        return self._white_texture

    @property
    def texture_slots(self) -> tuple:
        return tuple(self._texture_slots)

    @property
    def vertices(self) -> tuple:
        """The vertices of the current batch."""
        return tuple(self._vertices)

    @property
    def index_count(self) -> int:
        """Indices used by the current batch."""
        return self._index_count

    @property
    def stats(self) -> RendererStats:
        return replace(self._stats)

    def setup(self) -> None:
        """Begin an empty batch."""
        self._index_count = 0
        self._vertices = []
        self._texture_slots = [self._white_texture]

    def start_scene(self, camera, transform=None) -> None:
        """Upload the camera's projection-view matrix and begin a batch.

        An ``OrthoCamera`` brings its own view; a ``RendererCamera`` takes its
        view from the inverse of ``transform``.
        """
        if isinstance(camera, RendererCamera):
            if transform is None:
                raise TypeError("a RendererCamera needs the transform it is placed with")
            projection_view = camera.projection @ np.linalg.inv(_mat4(transform))
        elif isinstance(camera, OrthoCamera):
            projection_view = camera.view_projection
        else:
            raise TypeError(f"unsupported camera {type(camera).__name__}")
        self._shader.bind()
        self._shader.set_uniform("u_PVMat", projection_view)
        self.setup()

    def stop_scene(self) -> None:
        """Send the batched vertices to the vertex buffer and draw them."""
        records = np.array(
            [vertex.as_record() for vertex in self._vertices], dtype=QUAD_VERTEX_DTYPE
        )
        self._vertex_buffer.set_data(records)
        self.draw_batch()

    def draw_batch(self) -> None:
        """Bind the batch's textures and issue one draw call."""
        for slot, texture in enumerate(self._texture_slots):
            texture.bind(slot)
        self._api.draw(self._vertex_array, self._index_count)
        self._stats.draw_calls += 1

    def _flush(self) -> None:
        self.stop_scene()
        self.setup()

    def _texture_slot(self, texture: Texture2D) -> float:
        for slot, bound in enumerate(self._texture_slots[1:], start=1):
            if bound == texture:
                return float(slot)
        if len(self._texture_slots) >= MAX_TEXTURE_SLOTS:
            self._flush()
        self._texture_slots.append(texture)
        return float(len(self._texture_slots) - 1)

    def draw_quad(self, transform, color=WHITE, texture=None, tex_scale: float = 1.0) -> None:
        """Add a unit quad placed by ``transform``.

        ``texture`` may be None for a plain coloured quad, a ``Texture2D`` or a
        ``SpriteSheetTexture``.
        """
        matrix = _mat4(transform)
        rgba = _components(color, 4, "color")
        if texture is not None and not isinstance(texture, (Texture2D, SpriteSheetTexture)):
            raise TypeError(f"cannot draw with {type(texture).__name__} as texture")

        if self._index_count >= self._max_indices:
            self._flush()

        if texture is None:
            tex_index = 0.0
            tex_coords = _FULL_TEX_COORDS
            tex_scale = 1.0
        elif isinstance(texture, SpriteSheetTexture):
            tex_index = self._texture_slot(texture.texture)
            tex_coords = tuple((float(u), float(v)) for u, v in texture.coords)
        else:
            tex_index = self._texture_slot(texture)
            tex_coords = _FULL_TEX_COORDS

        corners = (matrix @ _QUAD_CORNERS.T).T
        for corner, coords in zip(corners, tex_coords):
            self._vertices.append(
                QuadVertex(
                    position=tuple(float(value) for value in corner),
                    color=rgba,
                    tex_coords=coords,
                    tex_index=tex_index,
                    tex_scale=float(tex_scale),
                )
            )
        self._index_count += 6
        self._stats.quad_count += 1

    def draw_quad_at(
        self, position, scale, color=WHITE, texture=None, tex_scale: float = 1.0
    ) -> None:
        """Add an unrotated quad centred on ``position`` and sized by ``scale``."""
        sx, sy = _components(scale, 2, "scale")
        transform = translate(_position3(position)) @ scale_matrix((sx, sy, 1.0))
        self.draw_quad(transform, color, texture, tex_scale)

    def draw_rotated_quad(
        self,
        position,
        rotation: float,
        scale,
        color=WHITE,
        texture=None,
        tex_scale: float = 1.0,
    ) -> None:
        """Add a quad rotated by ``rotation`` degrees about the view axis."""
        sx, sy = _components(scale, 2, "scale")
        transform = (
            translate(_position3(position))
            @ rotate(math.radians(rotation), (0.0, 0.0, 1.0))
            @ scale_matrix((sx, sy, 1.0))
        )
        self.draw_quad(transform, color, texture, tex_scale)

    def reset_stats(self) -> None:
        self._stats = RendererStats()
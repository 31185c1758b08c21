"""Vertex and index buffers, attribute layouts and vertex arrays."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import Iterable, Iterator, Optional

import numpy as np

_COMPONENT_BYTES = 4


class ShaderDataType(enum.Enum):
    """Data types a shader attribute can hold: component kind and count."""

    INT = ("int", 1)
    FLOAT = ("float", 1)

    IVEC2 = ("int", 2)
    IVEC3 = ("int", 3)
    IVEC4 = ("int", 4)

    VEC2 = ("float", 2)
    VEC3 = ("float", 3)
    VEC4 = ("float", 4)

    MAT2 = ("float", 2 * 2)
    MAT3 = ("float", 3 * 3)
    MAT4 = ("float", 4 * 4)

    @property
    def component_count(self) -> int:
        return self.value[1]

    @property
    def component_type(self) -> str:
        """Either ``"int"`` or ``"float"``."""
        return self.value[0]

    @property
    def size(self) -> int:
        """Size of one value of this type in bytes."""
        return _COMPONENT_BYTES * self.component_count


def shader_data_type_size(data_type: ShaderDataType) -> int:
    """Return the size in bytes of a value of ``data_type``."""
    if not isinstance(data_type, ShaderDataType):
        raise TypeError(f"not a ShaderDataType: {data_type!r}")
    return data_type.size


@dataclass(frozen=True)
class BufferAttrib:
    """One named attribute of an interleaved vertex buffer."""

    name: str
    data_type: ShaderDataType
    normalize: bool = False
    offset: int = 0
    size: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "size", shader_data_type_size(self.data_type))

    def component_count(self) -> int:
        return self.data_type.component_count


class BufferLoadout:
    """Ordered attributes of a vertex buffer, with offsets and stride worked out."""

    def __init__(self, attribs: Iterable[BufferAttrib] = ()) -> None:
        laid_out = []
        offset = 0
        for attrib in attribs:
            laid_out.append(replace(attrib, offset=offset))
            offset += attrib.size
        self._attribs = tuple(laid_out)
        self._stride = offset

    @property
    def attribs(self) -> tuple:
        return self._attribs

    @property
    def stride(self) -> int:
        return self._stride

    def __iter__(self) -> Iterator[BufferAttrib]:
        return iter(self._attribs)

    def __len__(self) -> int:
        return len(self._attribs)

    def __repr__(self) -> str:
        return f"BufferLoadout({list(self._attribs)!r})"


def _as_bytes(data) -> bytes:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    if isinstance(data, np.ndarray) and data.dtype.names is not None:
        return np.ascontiguousarray(data).tobytes()
    return np.asarray(data, dtype=np.float32).tobytes()


class VertexBuffer:
    """A block of vertex memory; static when filled at creation, dynamic otherwise."""

    def __init__(self, size: Optional[int] = None, data=None) -> None:
        if data is None:
            if size is None:
                raise TypeError("a vertex buffer needs a size or data")
            if size < 0:
                raise ValueError("buffer size must not be negative")
            self._storage = bytearray(size)
            self.dynamic = True
        else:
            raw = _as_bytes(data)
            if size is not None:
                if size < 0 or size > len(raw):
                    raise ValueError(
                        f"size {size} does not fit the {len(raw)} bytes given"
                    )
                raw = raw[:size]
            self._storage = bytearray(raw)
            self.dynamic = False
        self.loadout = BufferLoadout()

    @property
    def size(self) -> int:
        return len(self._storage)

    @property
    def data(self) -> bytes:
        return bytes(self._storage)

    def set_data(self, data, offset: int = 0) -> None:
        """Overwrite part of the buffer, starting ``offset`` bytes in."""
        raw = _as_bytes(data)
        if offset < 0 or offset + len(raw) > len(self._storage):
            raise ValueError(
                f"{len(raw)} bytes at offset {offset} overrun a buffer of "
                f"{len(self._storage)} bytes"
            )
        self._storage[offset:offset + len(raw)] = raw


class IndexBuffer:
    """A list of unsigned 32-bit vertex indices."""

    def __init__(self, indices) -> None:
        values = np.asarray(indices)
        if values.size and (values < 0).any():
            raise ValueError("indices must not be negative")
        stored = np.array(values, dtype=np.uint32).reshape(-1)
        stored.flags.writeable = False
        self._indices = stored

    @property
    def indices(self) -> np.ndarray:
        return self._indices

    @property
    def count(self) -> int:
        return len(self._indices)

    def __len__(self) -> int:
        return self.count


@dataclass(frozen=True)
class VertexAttributePointer:
    """How one attribute is read out of a vertex buffer."""

    index: int
    count: int
    component_type: str
    normalized: bool
    stride: int
    offset: int


class VertexArray:
    """Groups vertex buffers with an index buffer and the attribute pointers they imply."""

    def __init__(self) -> None:
        self._vertex_buffers: list = []
        self._index_buffer: Optional[IndexBuffer] = None
        self._pointers: list = []

    @property
    def vertex_buffers(self) -> tuple:
        return tuple(self._vertex_buffers)

    @property
    def index_buffer(self) -> Optional[IndexBuffer]:
        return self._index_buffer

    @property
    def attribute_pointers(self) -> tuple:
        return tuple(self._pointers)

    def add_vertex_buffer(self, vertex_buffer: VertexBuffer) -> None:
        loadout = vertex_buffer.loadout
        if not len(loadout):
            raise ValueError("vertex buffer has no loadout; set its loadout first")
        for index, attrib in enumerate(loadout):
            self._pointers.append(
                VertexAttributePointer(
                    index=index,
                    count=attrib.component_count(),
                    component_type=attrib.data_type.component_type,
                    normalized=attrib.normalize,
                    stride=loadout.stride,
                    offset=attrib.offset,
                )
            )
        self._vertex_buffers.append(vertex_buffer)

    def add_index_buffer(self, index_buffer: IndexBuffer) -> None:
        self._index_buffer = index_buffer
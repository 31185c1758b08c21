"""Two-dimensional textures held as RGBA or RGB pixel arrays."""

from __future__ import annotations

import itertools
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, ImageOps

_texture_ids = itertools.count(1)


class Texture2D:
    """A width by height texture with a unique id; equal textures share the id."""

    def __init__(self, width: int, height: int, path: Union[str, Path] = "") -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"texture size must be positive, got {width}x{height}")
        self._width = int(width)
        self._height = int(height)
        self._path = str(path)
        self._texture_id = next(_texture_ids)
        self._channels = 4
        self._pixels = np.zeros((self._height, self._width, self._channels), np.uint8)
        self._bound_slots: set = set()

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Texture2D":
        """Load an image, flipped so that its first row is the bottom one."""
        with Image.open(path) as image:
            image.load()
            has_alpha = "A" in image.getbands() or "transparency" in image.info
            mode = "RGBA" if has_alpha else "RGB"
            converted = ImageOps.flip(image.convert(mode))
        texture = cls(converted.width, converted.height, path=str(path))
        texture._channels = len(mode)
        texture.set_data(converted.tobytes())
        return texture

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def path(self) -> str:
        return self._path

    @property
    def texture_id(self) -> int:
        return self._texture_id

    @property
    def channels(self) -> int:
        """Bytes per pixel: 4 for RGBA data, 3 for RGB."""
        return self._channels

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels.copy()

    @property
    def bound_slots(self) -> frozenset:
        return frozenset(self._bound_slots)

    def set_data(self, data) -> None:
        """Replace the whole texture with ``data``; its size must match exactly."""
        if isinstance(data, (bytes, bytearray, memoryview)):
            raw = bytes(data)
        elif isinstance(data, np.ndarray):
            raw = np.ascontiguousarray(data).tobytes()
        else:
            raw = np.asarray(data, dtype=np.uint8).tobytes()
        expected = self._width * self._height * self._channels
        if len(raw) != expected:
            raise ValueError(
                f"data must be entire texture: expected {expected} bytes, got {len(raw)}"
            )
        self._pixels = (
            np.frombuffer(raw, dtype=np.uint8)
            .reshape(self._height, self._width, self._channels)
            .copy()
        )

    def bind(self, slot: int = 0) -> None:
        self._bound_slots.add(slot)

    def unbind(self, slot: int = 0) -> None:
        self._bound_slots.discard(slot)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Texture2D):
            return NotImplemented
        return self._texture_id == other._texture_id

    def __hash__(self) -> int:
        return hash(self._texture_id)

    def __repr__(self) -> str:
        return (
            f"Texture2D(id={self._texture_id}, {self._width}x{self._height}, "
            f"path={self._path!r})"
        )
"""Sub-regions of a texture used as individual sprites."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .texture import Texture2D


def _vec2(values: Sequence[float]) -> tuple:
    vector = np.asarray(values, dtype=np.float64).reshape(-1)
    if vector.shape != (2,):
        raise ValueError(f"expected two components, got {vector.shape[0]}")
    return float(vector[0]), float(vector[1])


class SpriteSheetTexture:
    """A texture with the four corner coordinates of one sprite on it.

    Coordinates are normalised: (0, 0) is one corner of the texture and
    (1, 1) the opposite one. Corners run start, (end.x, start.y), end,
    (start.x, end.y).
    """

    def __init__(self, texture: Texture2D, start, end) -> None:
        start_x, start_y = _vec2(start)
        end_x, end_y = _vec2(end)
        self._texture = texture
        coords = np.array(
            [
                [start_x, start_y],
                [end_x, start_y],
                [end_x, end_y],
                [start_x, end_y],
            ]
        )
        coords.flags.writeable = False
        self._coords = coords

    @classmethod
    def from_sheet(cls, texture: Texture2D, coords, sprite_size) -> "SpriteSheetTexture":
        """Pick the sprite at grid cell ``coords`` of a sheet of ``sprite_size`` pixel cells."""
        cell_x, cell_y = _vec2(coords)
        sprite_w, sprite_h = _vec2(sprite_size)
        start = (
            (cell_x * sprite_w) / texture.width,
            (cell_y * sprite_h) / texture.height,
        )
        end = (
            (cell_x * sprite_w + sprite_w) / texture.width,
            (cell_y * sprite_h + sprite_h) / texture.height,
        )
        return cls(texture, start, end)

    @property
    def texture(self) -> Texture2D:
        return self._texture

    @property
    def coords(self) -> np.ndarray:
        """The four corner coordinates as a read-only 4x2 array."""
        return self._coords
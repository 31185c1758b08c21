"""Shader programs: splitting combined sources into stages and holding uniforms."""

from __future__ import annotations

import enum
import re
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional, Union

import numpy as np

_TOKEN = "@"
_LINE_END = re.compile(r"[\r\n]")
_NOT_LINE_END = re.compile(r"[^\r\n]")
_SECTION_NAMES = ("vertex", "fragment")


class ShaderType(enum.Enum):
    """The programmable pipeline stages a shader program is built from."""

    VERTEX = "vertex"
    FRAGMENT = "fragment"


class ShaderSourceError(ValueError):
    """Raised when shader source text cannot be split into stages."""


_TYPE_NAMES = {
    "vertex": ShaderType.VERTEX,
    "fragment": ShaderType.FRAGMENT,
    "pixel": ShaderType.FRAGMENT,
    "color": ShaderType.FRAGMENT,
}


def shader_type_from_string(name: str) -> ShaderType:
    """Map a stage name (``vertex``, ``fragment``, ``pixel``, ``color``) to its type."""
    try:
        return _TYPE_NAMES[name]
    except KeyError:
        raise ShaderSourceError(f"unknown shader type {name!r}") from None


def process_source(source: str) -> Dict[ShaderType, str]:
    """Split a combined source into stages, each introduced by an ``@<type>`` line."""
    sources: Dict[ShaderType, str] = {}
    pos = source.find(_TOKEN)
    while pos != -1:
        line_end = _LINE_END.search(source, pos)
        if line_end is None:
            raise ShaderSourceError("syntax error: shader type line has no end")
        eol = line_end.start()

        type_name = source[pos + len(_TOKEN):eol]
        if type_name not in _SECTION_NAMES:
            raise ShaderSourceError(f"invalid shader type specified: {type_name!r}")

        body_start = _NOT_LINE_END.search(source, eol)
        if body_start is None:
            raise ShaderSourceError(f"syntax error: {type_name} shader has no body")
        next_line = body_start.start()

        pos = source.find(_TOKEN, next_line)
        body = source[next_line:] if pos == -1 else source[next_line:pos]
        sources[shader_type_from_string(type_name)] = body
    return sources


def read_source(path: Union[str, Path]) -> str:
    """Read a shader file as text."""
    return Path(path).read_bytes().decode("utf-8")


class Shader:
    """A shader program: its stage sources and the uniform values set on it.

    When ``uniform_names`` is given, only those uniforms exist on the program
    and setting any other one raises ``KeyError``.
    """

    def __init__(
        self,
        sources: Mapping,
        uniform_names: Optional[Iterable[str]] = None,
    ) -> None:
        stages: Dict[ShaderType, str] = {}
        for key, text in dict(sources).items():
            kind = key if isinstance(key, ShaderType) else shader_type_from_string(key)
            if not isinstance(text, str):
                raise TypeError(f"source for {kind.value} shader must be a string")
            stages[kind] = text
        if not stages:
            raise ShaderSourceError("a shader program needs at least one stage")
        self._sources = stages

        if isinstance(uniform_names, str):
            uniform_names = (uniform_names,)
        self._uniform_names = (
            None if uniform_names is None else frozenset(uniform_names)
        )
        self._uniforms: Dict[str, object] = {}
        self._bound = False

    @classmethod
    def from_file(
        cls, path: Union[str, Path], uniform_names: Optional[Iterable[str]] = None
    ) -> "Shader":
        """Build a program from a file holding ``@vertex`` and ``@fragment`` sections."""
        return cls(process_source(read_source(path)), uniform_names)

    @classmethod
    def from_sources(
        cls,
        vertex_source: str,
        fragment_source: str,
        uniform_names: Optional[Iterable[str]] = None,
    ) -> "Shader":
        return cls(
            {ShaderType.VERTEX: vertex_source, ShaderType.FRAGMENT: fragment_source},
            uniform_names,
        )

    @property
    def sources(self) -> Dict[ShaderType, str]:
        return dict(self._sources)

    @property
    def uniform_names(self) -> Optional[frozenset]:
        return self._uniform_names

    @property
    def is_bound(self) -> bool:
        return self._bound

    def bind(self) -> None:
        self._bound = True

    def unbind(self) -> None:
        self._bound = False

    def set_uniform(self, name: str, value) -> None:
        """Set a uniform to a scalar, a vector, a matrix or an int array."""
        if self._uniform_names is not None and name not in self._uniform_names:
            raise KeyError(f"uniform {name!r} doesn't exist")
        self._uniforms[name] = _uniform_value(value)

    def uniform(self, name: str):
        """Return the value last set for ``name``."""
        try:
            return self._uniforms[name]
        except KeyError:
            raise KeyError(f"uniform {name!r} has not been set") from None


def _uniform_value(value):
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, np.integer)):
        return int(value)
    if isinstance(value, (float, np.floating)):
        return float(value)
    array = np.array(value)
    if array.ndim not in (1, 2) or array.size == 0:
        raise ValueError("uniform value must be a scalar, a vector or a matrix")
    if not (np.issubdtype(array.dtype, np.integer) or np.issubdtype(array.dtype, np.floating)):
        raise TypeError(f"uniform value has unsupported type {array.dtype}")
    array.flags.writeable = False
    return array
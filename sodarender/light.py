"""Directional, point and spot lights that keep their shader uniforms up to date."""

from __future__ import annotations

import abc
import enum
from dataclasses import dataclass
from typing import Sequence, Tuple

from .shader import Shader

Vec3 = Tuple[float, float, float]


def _vec3(values: Sequence[float]) -> Vec3:
    components = tuple(float(value) for value in values)
    if len(components) != 3:
        raise ValueError(f"expected three components, got {len(components)}")
    return components


class LightType(enum.IntEnum):
    """The kinds of light a scene can hold."""

    DIRECTIONAL = 0
    POINT = 1
    SPOT = 2


@dataclass(frozen=True)
class Attenuation:
    """How a light fades with distance: constant + linear * d + quadratic * d^2."""

    constant: float = 1.0
    linear: float = 0.09
    quadratic: float = 0.032


@dataclass(frozen=True)
class LightSettings:
    """Strength of the ambient and specular terms of a light."""

    ambient_strength: float = 0.1
    specular_strength: float = 32.0


@dataclass(frozen=True)
class CutOff:
    """Inner and outer cone angles of a spot light, in degrees."""

    inner: float = 12.5
    outer: float = 15.0


class Light(abc.ABC):
    """A light bound to a shader; changing a property re-uploads its uniforms."""

    light_type: LightType
    _prefix: str

    def __init__(self, shader: Shader, color: Sequence[float], settings: LightSettings) -> None:
        self._shader = shader
        self._color = _vec3(color)
        self._settings = settings

    @property
    def shader(self) -> Shader:
        return self._shader

    @property
    def color(self) -> Vec3:
        return self._color

    @color.setter
    def color(self, value: Sequence[float]) -> None:
        self._color = _vec3(value)
        self.update_information()

    @property
    def settings(self) -> LightSettings:
        return self._settings

    @settings.setter
    def settings(self, value: LightSettings) -> None:
        if not isinstance(value, LightSettings):
            raise TypeError("settings must be a LightSettings")
        self._settings = value
        self.update_settings()

    @abc.abstractmethod
    def update_information(self) -> None:
        """Upload the light's position, direction, colour and light count."""

    def update_settings(self) -> None:
        """Upload the light's ambient and specular strengths."""
        self._shader.set_uniform(
            f"{self._prefix}.ambientStrength", self._settings.ambient_strength
        )
        self._shader.set_uniform(
            f"{self._prefix}.specularStrength", self._settings.specular_strength
        )

    @abc.abstractmethod
    def update_cutoff_and_attenuation(self) -> None:
        """Upload the light's cut-off angles and attenuation, where it has them."""


class _AttenuatedLight(Light):
    """A light at a position whose strength falls off with distance."""

    def __init__(
        self,
        shader: Shader,
        position: Sequence[float],
        color: Sequence[float],
        attenuation: Attenuation,
        settings: LightSettings,
    ) -> None:
        super().__init__(shader, color, settings)
        self._position = _vec3(position)
        self._attenuation = attenuation
        self._light_count = 0

    @property
    def position(self) -> Vec3:
        return self._position

    @position.setter
    def position(self, value: Sequence[float]) -> None:
        self._position = _vec3(value)
        self.update_information()

    @property
    def attenuation(self) -> Attenuation:
        return self._attenuation

    @attenuation.setter
    def attenuation(self, value: Attenuation) -> None:
        if not isinstance(value, Attenuation):
            raise TypeError("attenuation must be an Attenuation")
        self._attenuation = value
        self.update_cutoff_and_attenuation()

    @property
    def light_count(self) -> int:
        return self._light_count

    def _upload_attenuation(self) -> None:
        self._shader.set_uniform(f"{self._prefix}.constant", self._attenuation.constant)
        self._shader.set_uniform(f"{self._prefix}.linear", self._attenuation.linear)
        self._shader.set_uniform(f"{self._prefix}.quadratic", self._attenuation.quadratic)


class DirectionalLight(Light):
    """Light coming from one direction everywhere, like the sun."""

    light_type = LightType.DIRECTIONAL
    _prefix = "u_DirLight"

    def __init__(
        self,
        shader: Shader,
        direction: Sequence[float] = (-0.2, -1.0, -0.3),
        color: Sequence[float] = (1.0, 1.0, 1.0),
        ambient_strength: float = 0.1,
        specular_strength: float = 32.0,
    ) -> None:
        super().__init__(shader, color, LightSettings(ambient_strength, specular_strength))
        self._direction = _vec3(direction)
        self.update_information()
        self.update_settings()

    @property
    def direction(self) -> Vec3:
        return self._direction

    @direction.setter
    def direction(self, value: Sequence[float]) -> None:
        self._direction = _vec3(value)
        self.update_information()

    def update_information(self) -> None:
        self._shader.set_uniform(f"{self._prefix}.direction", self._direction)
        self._shader.set_uniform(f"{self._prefix}.color", self._color)

    def update_cutoff_and_attenuation(self) -> None:
        """A directional light has neither a cut-off nor attenuation."""


class PointLight(_AttenuatedLight):
    """Light shining in every direction from one position."""

    light_type = LightType.POINT
    _prefix = "u_PointLight"

    def __init__(
        self,
        shader: Shader,
        position: Sequence[float] = (0.0, 0.0, 0.0),
        color: Sequence[float] = (1.0, 1.0, 1.0),
        constant: float = 1.0,
        linear: float = 0.09,
        quadratic: float = 0.032,
        ambient_strength: float = 0.1,
        specular_strength: float = 32.0,
    ) -> None:
        super().__init__(
            shader,
            position,
            color,
            Attenuation(constant, linear, quadratic),
            LightSettings(ambient_strength, specular_strength),
        )

    def update_information(self) -> None:
        self._shader.set_uniform(f"{self._prefix}.position", self._position)
        self._shader.set_uniform(f"{self._prefix}.color", self._color)
        self._shader.set_uniform(f"{self._prefix}.nLights", self._light_count)

    def update_cutoff_and_attenuation(self) -> None:
        self._upload_attenuation()


class SpotLight(_AttenuatedLight):
    """Light shining in a cone from one position along one direction."""

    light_type = LightType.SPOT
    _prefix = "u_SpotLight"

    def __init__(
        self,
        shader: Shader,
        position: Sequence[float] = (0.0, 0.0, 0.0),
        direction: Sequence[float] = (0.0, -1.0, 0.0),
        color: Sequence[float] = (1.0, 1.0, 1.0),
        inner: float = 12.5,
        outer: float = 15.0,
        constant: float = 1.0,
        linear: float = 0.09,
        quadratic: float = 0.032,
        ambient_strength: float = 0.1,
        specular_strength: float = 32.0,
    ) -> None:
        super().__init__(
            shader,
            position,
            color,
            Attenuation(constant, linear, quadratic),
            LightSettings(ambient_strength, specular_strength),
        )
        self._direction = _vec3(direction)
        self._cutoff = CutOff(inner, outer)

    @property
    def direction(self) -> Vec3:
        return self._direction

    @direction.setter
    def direction(self, value: Sequence[float]) -> None:
        self._direction = _vec3(value)
        self.update_information()

    @property
    def cutoff(self) -> CutOff:
        return self._cutoff

    @cutoff.setter
    def cutoff(self, value: CutOff) -> None:
        if not isinstance(value, CutOff):
            raise TypeError("cutoff must be a CutOff")
        self._cutoff = value
        self.update_cutoff_and_attenuation()

    def update_information(self) -> None:
        self._shader.set_uniform(f"{self._prefix}.position", self._position)
        self._shader.set_uniform(f"{self._prefix}.direction", self._direction)
        self._shader.set_uniform(f"{self._prefix}.color", self._color)
        self._shader.set_uniform(f"{self._prefix}.nLights", self._light_count)

    def update_cutoff_and_attenuation(self) -> None:
        self._shader.set_uniform(f"{self._prefix}.cutOff", self._cutoff.inner)
        self._shader.set_uniform(f"{self._prefix}.outerCutOff", self._cutoff.outer)
        self._upload_attenuation()


_LIGHT_CLASSES = {
    LightType.DIRECTIONAL: DirectionalLight,
    LightType.POINT: PointLight,
    LightType.SPOT: SpotLight,
}


def create_light(light_type, shader: Shader) -> Light:
    """Create a light of ``light_type`` with default settings, bound to ``shader``."""
    try:
        kind = LightType(light_type)
    except ValueError:
        raise ValueError(f"invalid light type {light_type!r}") from None
    return _LIGHT_CLASSES[kind](shader)
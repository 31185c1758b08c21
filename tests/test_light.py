import numpy as np
import pytest

from sodarender.light import (
    Attenuation,
    CutOff,
    DirectionalLight,
    LightSettings,
    LightType,
    PointLight,
    SpotLight,
    create_light,
)
from sodarender.shader import Shader


@pytest.fixture
def shader():
    return Shader.from_sources("vertex body", "fragment body")


def test_directional_uploads_on_construction(shader):
    DirectionalLight(shader)
    np.testing.assert_allclose(shader.uniform("u_DirLight.direction"), [-0.2, -1.0, -0.3])
    np.testing.assert_allclose(shader.uniform("u_DirLight.color"), [1.0, 1.0, 1.0])
    assert shader.uniform("u_DirLight.ambientStrength") == pytest.approx(0.1)
    assert shader.uniform("u_DirLight.specularStrength") == pytest.approx(32.0)


def test_directional_direction_setter_updates_shader(shader):
    light = DirectionalLight(shader)
    light.direction = (0.0, -1.0, 0.0)
    assert light.direction == (0.0, -1.0, 0.0)
    np.testing.assert_allclose(shader.uniform("u_DirLight.direction"), [0.0, -1.0, 0.0])


def test_directional_settings_setter(shader):
    light = DirectionalLight(shader)
    light.settings = LightSettings(0.5, 16.0)
    assert shader.uniform("u_DirLight.ambientStrength") == pytest.approx(0.5)
    assert shader.uniform("u_DirLight.specularStrength") == pytest.approx(16.0)


def test_directional_has_no_position(shader):
    light = DirectionalLight(shader)
    with pytest.raises(AttributeError):
        light.position
    assert not hasattr(light, "position")
    assert light.light_type == LightType.DIRECTIONAL


def test_point_light_does_not_upload_on_construction(shader):
    PointLight(shader)
    with pytest.raises(KeyError):
        shader.uniform("u_PointLight.position")


def test_point_light_position_updates(shader):
    light = PointLight(shader, color=(0.5, 0.5, 0.5))
    light.position = (1.0, 2.0, 3.0)
    np.testing.assert_allclose(shader.uniform("u_PointLight.position"), [1.0, 2.0, 3.0])
    np.testing.assert_allclose(shader.uniform("u_PointLight.color"), [0.5, 0.5, 0.5])
    assert shader.uniform("u_PointLight.nLights") == light.light_count == 0


def test_point_light_attenuation(shader):
    light = PointLight(shader)
    assert light.attenuation == Attenuation(1.0, 0.09, 0.032)
    light.attenuation = Attenuation(2.0, 0.5, 0.25)
    assert shader.uniform("u_PointLight.constant") == 2.0
    assert shader.uniform("u_PointLight.linear") == 0.5
    assert shader.uniform("u_PointLight.quadratic") == 0.25


def test_point_light_has_no_cutoff(shader):
    light = PointLight(shader)
    with pytest.raises(AttributeError):
        light.cutoff
    assert not hasattr(light, "cutoff")
    assert light.light_type == LightType.POINT


def test_spot_light_defaults(shader):
    light = SpotLight(shader)
    assert light.direction == (0.0, -1.0, 0.0)
    assert light.cutoff == CutOff(12.5, 15.0)
    assert light.settings == LightSettings(0.1, 32.0)


def test_spot_light_cutoff_uploads_attenuation_too(shader):
    light = SpotLight(shader, constant=3.0)
    light.cutoff = CutOff(10.0, 20.0)
    assert shader.uniform("u_SpotLight.cutOff") == 10.0
    assert shader.uniform("u_SpotLight.outerCutOff") == 20.0
    assert shader.uniform("u_SpotLight.constant") == 3.0


def test_spot_light_information(shader):
    light = SpotLight(shader)
    light.color = (0.2, 0.4, 0.6)
    np.testing.assert_allclose(shader.uniform("u_SpotLight.color"), [0.2, 0.4, 0.6])
    np.testing.assert_allclose(shader.uniform("u_SpotLight.direction"), light.direction)
    np.testing.assert_allclose(shader.uniform("u_SpotLight.position"), light.position)


def test_bad_vector_rejected(shader):
    light = SpotLight(shader)
    before = light.position
    with pytest.raises(ValueError):
        light.position = (1.0, 2.0)
    assert light.position == before


def test_bad_settings_type_rejected(shader):
    light = PointLight(shader)
    before = light.settings
    with pytest.raises(TypeError):
        light.settings = (0.1, 32.0)
    assert light.settings == before == LightSettings(0.1, 32.0)


def test_restricted_shader_rejects_unknown_uniform():
    restricted = Shader.from_sources("v", "f", uniform_names=["u_DirLight.color"])
    with pytest.raises(KeyError):
        DirectionalLight(restricted)


@pytest.mark.parametrize(
    "kind, cls",
    [
        (LightType.DIRECTIONAL, DirectionalLight),
        (LightType.POINT, PointLight),
        (LightType.SPOT, SpotLight),
        (1, PointLight),
    ],
)
def test_create_light(shader, kind, cls):
    light = create_light(kind, shader)
    assert type(light) is cls
    assert light.light_type == LightType(kind)
    assert light.shader is shader


def test_create_light_invalid(shader):
    with pytest.raises(ValueError):
        create_light(7, shader)
import numpy as np
import pytest

from sodarender.shader import (
    Shader,
    ShaderSourceError,
    ShaderType,
    process_source,
    read_source,
    shader_type_from_string,
)

VERTEX_BODY = "void main() { gl_Position = vec4(0.0); }\n"
FRAGMENT_BODY = "out vec4 color;\nvoid main() { color = vec4(1.0); }\n"
COMBINED = "@vertex\n" + VERTEX_BODY + "@fragment\n" + FRAGMENT_BODY


@pytest.mark.parametrize(
    "name, expected",
    [
        ("vertex", ShaderType.VERTEX),
        ("fragment", ShaderType.FRAGMENT),
        ("pixel", ShaderType.FRAGMENT),
        ("color", ShaderType.FRAGMENT),
    ],
)
def test_shader_type_from_string(name, expected):
    assert shader_type_from_string(name) is expected


def test_shader_type_from_string_rejects_unknown():
    with pytest.raises(ShaderSourceError):
        shader_type_from_string("geometry")


def test_process_source_splits_sections():
    sources = process_source(COMBINED)
    assert sources == {ShaderType.VERTEX: VERTEX_BODY, ShaderType.FRAGMENT: FRAGMENT_BODY}


def test_process_source_windows_line_endings():
    source = "@vertex\r\nA\r\n@fragment\r\nB"
    assert process_source(source) == {ShaderType.VERTEX: "A\r\n", ShaderType.FRAGMENT: "B"}


def test_process_source_without_token_is_empty():
    assert process_source("void main() {}\n") == {}


@pytest.mark.parametrize(
    "source",
    [
        "@geometry\nvoid main() {}\n",
        "@pixel\nvoid main() {}\n",
        "@vertex",
        "@vertex\n",
        "@vertex\n\r\n\n",
    ],
)
def test_process_source_errors(source):
    with pytest.raises(ShaderSourceError):
        process_source(source)


def test_shader_source_error_is_value_error():
    with pytest.raises(ValueError):
        process_source("@nonsense\nx")


def test_read_source_round_trip(tmp_path):
    path = tmp_path / "shader.glsl"
    path.write_bytes(COMBINED.encode("utf-8"))
    assert read_source(path) == COMBINED


def test_read_source_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_source(tmp_path / "missing.glsl")


def test_from_file(tmp_path):
    path = tmp_path / "shader.glsl"
    path.write_text(COMBINED, encoding="utf-8")
    shader = Shader.from_file(path)
    assert shader.sources[ShaderType.VERTEX] == VERTEX_BODY
    assert shader.sources[ShaderType.FRAGMENT] == FRAGMENT_BODY


def test_from_sources():
    shader = Shader.from_sources(VERTEX_BODY, FRAGMENT_BODY)
    assert shader.sources == {ShaderType.VERTEX: VERTEX_BODY, ShaderType.FRAGMENT: FRAGMENT_BODY}


def test_constructor_accepts_string_keys():
    shader = Shader({"vertex": "a", "pixel": "b"})
    assert shader.sources == {ShaderType.VERTEX: "a", ShaderType.FRAGMENT: "b"}


def test_constructor_rejects_empty_sources():
    with pytest.raises(ShaderSourceError):
        Shader({})


def test_set_and_get_scalar_uniforms():
    shader = Shader.from_sources("v", "f")
    shader.set_uniform("u_Texture", 3)
    shader.set_uniform("u_Strength", 0.5)
    assert shader.uniform("u_Texture") == 3
    assert shader.uniform("u_Strength") == 0.5


def test_set_vector_and_matrix_uniforms():
    shader = Shader.from_sources("v", "f")
    shader.set_uniform("u_ViewPos", [1.0, 2.0, 3.0])
    shader.set_uniform("u_PVMat", np.identity(4))
    np.testing.assert_array_equal(shader.uniform("u_ViewPos"), [1.0, 2.0, 3.0])
    np.testing.assert_array_equal(shader.uniform("u_PVMat"), np.identity(4))


def test_uniform_value_is_a_copy():
    shader = Shader.from_sources("v", "f")
    values = np.arange(4)
    shader.set_uniform("u_Textures", values)
    values[0] = 99
    assert shader.uniform("u_Textures").tolist() == [0, 1, 2, 3]


def test_unknown_uniform_is_rejected():
    shader = Shader.from_sources("v", "f", uniform_names=["u_PVMat"])
    shader.set_uniform("u_PVMat", np.identity(4))
    with pytest.raises(KeyError):
        shader.set_uniform("u_Missing", 1)


def test_unset_uniform_raises():
    shader = Shader.from_sources("v", "f")
    with pytest.raises(KeyError):
        shader.uniform("u_Color")


def test_empty_array_uniform_rejected():
    shader = Shader.from_sources("v", "f")
    with pytest.raises(ValueError):
        shader.set_uniform("u_Values", [])


def test_bind_and_unbind():
    shader = Shader.from_sources("v", "f")
    assert shader.is_bound is False
    shader.bind()
    assert shader.is_bound is True
    shader.unbind()
    assert shader.is_bound is False
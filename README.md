# sodarender

`sodarender` is a small rendering core that does not depend on any graphics
API. It describes GPU resources and draw work as plain Python objects, so the
rendering logic can be inspected, recorded and tested. A real backend can be
plugged in by subclassing `RenderAPI`.

## What it provides

- **Buffers** (`sodarender.buffers`): `ShaderDataType` gives each attribute
  type its component kind, count and byte size; `shader_data_type_size`
  returns that size. `BufferAttrib` and `BufferLoadout` work out attribute
  offsets and the stride of an interleaved vertex. `VertexBuffer` holds raw
  vertex bytes (`set_data` overwrites part of it and rejects overruns),
  `IndexBuffer` holds unsigned 32-bit indices, and `VertexArray` collects
  vertex buffers, an index buffer and the attribute pointers implied by each
  buffer's loadout. Adding a vertex buffer with an empty loadout raises
  `ValueError`.
- **Cameras** (`sodarender.camera`): numpy 4x4 matrix helpers `ortho`,
  `perspective`, `look_at`, `translate`, `rotate` and `scale`, and the
  cameras `OrthoCamera` (position and rotation in degrees), `PerspectiveCamera`
  (position and look direction `target`) and `RendererCamera` (a bare
  projection matrix).
- **Shaders** (`sodarender.shader`): `process_source` splits a combined source
  into stages introduced by `@vertex` and `@fragment` lines and raises
  `ShaderSourceError` on malformed input; `read_source` reads a file as text.
  `Shader` keeps the stage sources and the uniform values set with
  `set_uniform` and read back with `uniform`. If it is given `uniform_names`,
  setting any other uniform raises `KeyError`.
- **Textures** (`sodarender.texture`): `Texture2D` holds pixel data as a numpy
  array with a unique `texture_id`; textures compare equal by id.
  `Texture2D.from_file` loads an image with Pillow, as RGBA when it has alpha
  and RGB otherwise, flipped so its first row is the bottom one. `set_data`
  requires data covering the whole texture.
- **Sprite sheets** (`sodarender.sprite_sheet`): `SpriteSheetTexture` stores a
  texture and four normalised corner coordinates; `SpriteSheetTexture.from_sheet`
  picks one grid cell of a sheet.
- **Lights** (`sodarender.light`): `DirectionalLight`, `PointLight` and
  `SpotLight` write their state into a shader's uniforms (`u_DirLight.*`,
  `u_PointLight.*`, `u_SpotLight.*`) whenever a property changes.
  `create_light` builds a light of a given `LightType` with default settings.
- **Rendering** (`sodarender.render_api`, `sodarender.renderer2d`):
  `RecordingRenderAPI` keeps the viewport, clear colour and every `DrawCall`
  it receives. `Renderer` draws one vertex array at a time with `push`,
  uploading `u_PVMat`, `u_ModelMat` and `u_ViewPos`. `Renderer2D` batches
  quads and up to 32 texture slots per draw call, starts a new batch when one
  is full, and counts its work in `RendererStats`.

## Installing

```
pip install .
```

With the test dependencies:

```
pip install ".[test]"
```

## Example

```python
from sodarender.camera import OrthoCamera
from sodarender.render_api import RecordingRenderAPI
from sodarender.renderer2d import Renderer2D
from sodarender.shader import Shader

api = RecordingRenderAPI()
shader = Shader.from_sources(
    "void main() {}",
    "void main() {}",
    uniform_names=["u_PVMat", "u_Textures"],
)
renderer = Renderer2D(api, shader, max_quads=1000)

camera = OrthoCamera(-1.6, 1.6, -0.9, 0.9)
renderer.start_scene(camera)
renderer.draw_quad_at((0.0, 0.0, 0.0), (1.0, 1.0), (0.8, 0.2, 0.3, 1.0))
renderer.draw_rotated_quad((2.0, 0.0, 0.0), 45.0, (1.0, 1.0), (0.2, 0.3, 0.8, 1.0))
renderer.stop_scene()

print(renderer.stats.draw_calls, renderer.stats.quad_count)  # 1 2
print(len(api.draw_calls), api.draw_calls[0].count)          # 1 12
```

## Profiling

`VisualProfiler` writes a trace file in the Chrome tracing JSON format
(`ProfileResult.json` unless another path is given). `profile_scope` is a
context manager that times one block and writes it as a single event. Used as
a context manager itself, the profiler ends a running session on exit.

```python
from sodarender.profiler import VisualProfiler, profile_scope

with VisualProfiler() as profiler:
    profiler.begin_session("frame", "trace.json")
    with profile_scope(profiler, "update"):
        ...
```

## What it does not do

There is no GPU backend, window or input handling here: nothing is drawn to a
screen, and shaders are not compiled or linked. `RecordingRenderAPI` is the
only `RenderAPI` included; to draw for real, implement `init`,
`clear_screen`, `set_viewport` and `draw` on top of a graphics library.

## Running the tests

```
pytest
```
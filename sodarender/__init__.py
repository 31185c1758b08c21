"""Backend-neutral rendering core: buffers, cameras, shaders, lights, textures, sprite sheets, quad batching and a trace profiler."""

__version__ = "0.1.0"

__all__ = [
    "buffers",
    "camera",
    "light",
    "profiler",
    "render_api",
    "renderer2d",
    "shader",
    "sprite_sheet",
    "texture",
]
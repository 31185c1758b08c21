[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sodarender"
version = "0.1.0"
description = "A backend-neutral 2D/3D rendering core: buffer layouts, cameras, shaders, lights, textures, sprite sheets and a batching quad renderer"
requires-python = ">=3.10"
keywords = ["rendering", "graphics", "camera", "batching", "sprites", "shaders", "profiling"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["sodarender"]

[tool.pytest.ini_options]
addopts = "-ra"

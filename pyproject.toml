[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "raydarts"
version = "0.1.0"
description = "Building blocks for a small physically based ray tracer: colormaps, boxes, spherical maths, photons, noise, materials and media"
requires-python = ">=3.10"
dependencies = []
keywords = ["ray tracing", "rendering", "path tracing", "photon mapping", "graphics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["raydarts"]

[tool.pytest.ini_options]
addopts = "-ra"

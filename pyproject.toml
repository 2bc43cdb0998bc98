[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rasteriser"
version = "0.1.0"
description = "A small software triangle rasteriser with per-pixel lighting, near-plane clipping and a bloom post-process"
requires-python = ">=3.10"
keywords = ["rasteriser", "rendering", "3d", "obj", "software-renderer", "bloom"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
rasteriser = "rasteriser.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["rasteriser"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

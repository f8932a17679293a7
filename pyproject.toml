[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mapedit"
version = "0.1.0"
description = "Editing model for layered 2D tile maps: tiles, attributes, zones, undo/redo and map files"
requires-python = ">=3.10"
dependencies = []
keywords = ["tilemap", "map editor", "game development", "undo", "tileset"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mapedit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

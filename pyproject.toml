[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "escapegrid"
version = "0.1.0"
description = "A hexagonal grid puzzle game with timed gates, temporal walls and an automatic solver"
requires-python = ">=3.10"
keywords = ["game", "puzzle", "hexagonal", "pathfinding", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Puzzle Games",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
escapegrid = "escapegrid.app:main"

[tool.hatch.build.targets.wheel]
packages = ["escapegrid"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cubview"
version = "0.1.0"
description = "A small textured ray-casting maze viewer driven by .cub scene files"
requires-python = ">=3.10"
keywords = ["raycasting", "maze", "game", "xpm", "cub"]
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
    "Topic :: Games/Entertainment :: First Person Shooters",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cubview = "cubview.app:main"

[tool.hatch.build.targets.wheel]
packages = ["cubview"]

[tool.pytest.ini_options]
addopts = "-ra"

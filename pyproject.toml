[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gatecrawl"
version = "0.1.0"
description = "A tile-based dungeon crawler through a ten-floor tower of procedurally generated gates"
requires-python = ">=3.10"
keywords = ["game", "roguelike", "dungeon", "procedural-generation", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Role-Playing",
]
dependencies = [
    "pygame>=2.1",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
gatecrawl = "gatecrawl.app:main"

[tool.hatch.build.targets.wheel]
packages = ["gatecrawl"]

[tool.pytest.ini_options]
addopts = "-ra"

[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spacegame"
version = "0.1.0"
description = "A small top-down space game with a settings menu, an in-game overlay and a static file server for its web build"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["game", "arcade", "space", "pygame", "sprites", "texture-atlas"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
spacegame = "spacegame.app:main"
spacegame-server = "spacegame.server:main"

[tool.hatch.build.targets.wheel]
packages = ["spacegame"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

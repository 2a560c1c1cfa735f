[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ajedrez"
version = "0.1.0"
description = "A chess game against a minimax opponent, with a drag-and-drop board, undo and plain text save files"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["chess", "ajedrez", "board game", "minimax", "alpha-beta", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: Spanish",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
ajedrez = "ajedrez.app:main"

[tool.hatch.build.targets.wheel]
packages = ["ajedrez"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

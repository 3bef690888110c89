[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "shakki"
version = "0.1.0"
description = "A chess game for two people at one screen, with move validation, castling, en passant and pawn promotion"
requires-python = ">=3.10"
keywords = ["chess", "game", "board game", "pygame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Board Games",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
shakki = "shakki.display:main"

[tool.hatch.build.targets.wheel]
packages = ["shakki"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

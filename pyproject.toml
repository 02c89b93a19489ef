[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "solitaire-match"
version = "0.1.0"
description = "A card-matching solitaire game: play cards one above or below the base card, with undo."
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["solitaire", "cards", "game", "puzzle", "pygame"]
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
    "Topic :: Games/Entertainment :: Puzzle Games",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
solitaire-match = "solitaire_match.app:main"

[tool.hatch.build.targets.wheel]
packages = ["solitaire_match"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

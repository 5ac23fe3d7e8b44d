[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lendinglib"
version = "0.1.0"
description = "A small lending library: members, a book catalogue, borrowing, fuzzy search and lease statistics, kept in plain text files."
requires-python = ">=3.10"
dependencies = []
keywords = ["library", "lending", "catalogue", "books", "members", "command line"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: English",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
lendinglib = "lendinglib.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["lendinglib"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sapwood"
version = "0.1.0"
description = "Fine-grained reactive signals, effects and reactive lists, with a small in-memory DOM tree that stays in step with them"
requires-python = ">=3.10"
dependencies = []
keywords = ["reactive", "signals", "effects", "memo", "dom", "ui"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: User Interfaces",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sapwood"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "teyvat"
version = "0.1.0"
description = "Building blocks for a small role-playing game server: framed TCP messaging, message routing, CSV-driven game tables and in-memory player modules."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "game-server",
    "tcp",
    "role-playing",
    "gacha",
    "inventory",
    "csv",
]
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
    "Topic :: Games/Entertainment :: Role-Playing",
    "Topic :: Internet",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["teyvat"]

[tool.hatch.build.targets.sdist]
include = ["teyvat", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true

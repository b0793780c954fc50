[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kiwidb"
version = "0.1.0"
description = "Building blocks for a Redis-compatible server: RESP parsing and encoding, command dispatch, key locks and configuration."
requires-python = ">=3.10"
dependencies = []
keywords = ["redis", "resp", "protocol", "database", "server", "key-value"]
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
    "Framework :: AsyncIO",
    "Topic :: Database :: Database Engines/Servers",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["kiwidb"]

[tool.hatch.build.targets.sdist]
include = ["kiwidb", "tests"]

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

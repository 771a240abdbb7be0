[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "khorbase"
version = "0.1.0"
description = "Server building blocks: growable buffers, i18n dictionaries, sessions, profiling, logging setup, case mapping and memory-mapped files"
requires-python = ">=3.10"
dependencies = []
keywords = ["buffer", "i18n", "session", "profiler", "logging", "unicode", "mmap"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["khorbase"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true

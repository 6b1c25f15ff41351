[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tracegc"
version = "0.1.0"
description = "Mark-and-sweep and mark-compact garbage collectors over a simulated heap, with MurmurHash3-based hash containers"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "garbage-collection",
    "mark-and-sweep",
    "mark-compact",
    "murmurhash3",
    "hashmap",
    "hashset",
    "memory-management",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
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

[project.scripts]
tracegc-demo = "tracegc.markcompact:main"

[tool.hatch.build.targets.wheel]
packages = ["tracegc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true

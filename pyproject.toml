[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "heapsim"
version = "0.1.0"
description = "A simulated first-fit heap allocator over a movable program break"
requires-python = ">=3.10"
dependencies = []
keywords = ["malloc", "allocator", "heap", "sbrk", "brk", "memory", "simulation"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["heapsim"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

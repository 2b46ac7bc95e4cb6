[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "oskit"
version = "0.1.0"
description = "Small operating-systems exercises: a sudoku checker, a contiguous memory allocator, CPU schedulers and a block-based file system."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "operating-systems",
    "scheduling",
    "memory-allocation",
    "file-system",
    "sudoku",
    "education",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: System :: Operating System",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
oskit-sudoku = "oskit.sudoku:main"
oskit-memory = "oskit.memory:main"
oskit-schedule = "oskit.scheduler_cli:main"
oskit-bfs-selftest = "oskit.selftest:main"

[tool.hatch.build.targets.wheel]
packages = ["oskit"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

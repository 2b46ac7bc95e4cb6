"""Operating-systems exercises: a sudoku checker, contiguous memory allocation, CPU schedulers and a block file system."""

__version__ = "0.1.0"
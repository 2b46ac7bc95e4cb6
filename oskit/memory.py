"""Contiguous memory allocation within a fixed pool, with a small command shell."""

from __future__ import annotations

import bisect
import sys
from dataclasses import dataclass, replace
from enum import Enum
from typing import TextIO

MEMSIZE = 80
FREE = "."

_LOWER_TO_UPPER = str.maketrans(
    "abcdefghijklmnopqrstuvwxyz", "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
)


class Algorithm(Enum):
    """Placement strategy for a request."""

    FIRST_FIT = "F"
    BEST_FIT = "B"
    WORST_FIT = "W"


class AllocationError(Exception):
    """Raised when a request cannot be satisfied."""


@dataclass(frozen=True)
class Allocation:
    """A block of memory owned by a process; ``end`` is inclusive."""

    name: str
    begin: int
    end: int

    @property
    def size(self) -> int:
        return self.end - self.begin + 1


@dataclass(frozen=True)
class Hole:
    """A free block of memory; ``end`` is inclusive."""

    begin: int
    end: int

    @property
    def size(self) -> int:
        return self.end - self.begin + 1


class MemoryPool:
    """A pool of ``size`` units in which processes claim contiguous blocks."""

    def __init__(self, size: int = MEMSIZE):
        if size <= 0:
            raise ValueError("pool size must be positive")
        self.size = size
        self._allocations: list[Allocation] = []

    @property
    def allocations(self) -> tuple[Allocation, ...]:
        """Allocations ordered by start address."""
        return tuple(self._allocations)

    @property
    def holes(self) -> list[Hole]:
        """Free blocks in address order."""
        result = []
        start = 0
        for allocation in self._allocations:
            if allocation.begin > start:
                result.append(Hole(start, allocation.begin - 1))
            start = allocation.end + 1
        if start <= self.size - 1:
            result.append(Hole(start, self.size - 1))
        return result

    @property
    def max_hole(self) -> int:
        """Size of the largest free block, or 0 when memory is full."""
        return max((hole.size for hole in self.holes), default=0)

    def request(self, name: str, size: int, algorithm) -> Allocation:
        """Allocate ``size`` units to ``name`` using the given placement strategy."""
        if len(name) != 1:
            raise ValueError("process name must be a single character")
        if size <= 0:
            raise ValueError("allocation size must be positive")
        if size > self.max_hole:
            raise AllocationError("Not enough memory")
        try:
            strategy = Algorithm(algorithm)
        except ValueError:
            raise AllocationError("Unknown algorithm") from None

        fitting = [hole for hole in self.holes if hole.size >= size]
        if strategy is Algorithm.FIRST_FIT:
            chosen = fitting[0]
        elif strategy is Algorithm.BEST_FIT:
            chosen = min(fitting, key=lambda hole: hole.size)
        else:
            largest = self.max_hole
            chosen = next(hole for hole in fitting if hole.size == largest)

        allocation = Allocation(name, chosen.begin, chosen.begin + size - 1)
        bisect.insort(self._allocations, allocation, key=lambda a: a.begin)
        return allocation

    def release(self, name: str) -> int:
        """Free every block owned by ``name``; return how many were freed."""
        kept = [a for a in self._allocations if a.name != name]
        freed = len(self._allocations) - len(kept)
        self._allocations = kept
        return freed

    def compact(self) -> None:
        """Slide all blocks to low addresses, leaving one free block at the top."""
        start = 0
        moved = []
        for allocation in self._allocations:
            moved.append(replace(allocation, begin=start, end=start + allocation.size - 1))
            start += allocation.size
        self._allocations = moved

    def show(self) -> str:
        """Return the pool as a string: owner names, with '.' for free units."""
        cells = [FREE] * self.size
        for allocation in self._allocations:
            cells[allocation.begin:allocation.end + 1] = allocation.name * allocation.size
        return "".join(cells)


def _normalize(line: str) -> str:
    """Upper-case a command line, except the path of a read command."""
    if line[:1] in ("r", "R"):
        return "R" + line[1:]
    return line.translate(_LOWER_TO_UPPER)


def _atoi(text: str) -> int:
    """Parse a leading integer the lenient way, returning 0 if there is none."""
    text = text.lstrip()
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    digits = ""
    for char in text:
        if not char.isdigit():
            break
        digits += char
    return sign * int(digits) if digits else 0


class Shell:
    """Interprets allocation commands against a pool, writing output to ``out``."""

    def __init__(self, pool: MemoryPool | None = None, out: TextIO | None = None):
        self.pool = pool if pool is not None else MemoryPool()
        self.out = out if out is not None else sys.stdout
        self.exited = False

    def _say(self, text) -> None:
        print(text, file=self.out)

    def execute(self, line: str) -> None:
        """Run one command line."""
        tokens = _normalize(line).split()
        if not tokens:
            return
        command = tokens[0][0]
        if command == "A" and len(tokens) >= 4 and _atoi(tokens[2]) > 0:
            try:
                self.pool.request(tokens[1][0], _atoi(tokens[2]), tokens[3][0])
            except AllocationError as exc:
                self._say(exc)
        elif command == "F" and len(tokens) >= 2:
            self.pool.release(tokens[1][0])
        elif command == "S":
            self._say(self.pool.show())
        elif command == "R":
            if len(tokens) < 2:
                self._say("Could not open file")
            else:
                self.run_file(tokens[1])
        elif command == "C":
            self.pool.compact()
        elif command == "E":
            self.exited = True
        else:
            self._say("Invalid command")

    def run_file(self, path) -> None:
        """Run each command in the file at ``path``, stopping at an exit command."""
        try:
            handle = open(path)
        except OSError:
            self._say("Could not open file")
            return
        with handle:
            for raw in handle:
                line = _normalize(raw)
                tokens = line.split()
                if not tokens:
                    continue
                if tokens[0][0] == "E":
                    self.exited = True
                    break
                self.execute(line)


def main(argv=None) -> int:
    """Read commands from standard input until an exit command."""
    shell = Shell(MemoryPool(), sys.stdout)
    while not shell.exited:
        print("command>", end="", flush=True)
        line = sys.stdin.readline()
        if not line:
            break
        shell.execute(line)
    if shell.exited:
        print("Exiting now")
    return 0


if __name__ == "__main__":
    sys.exit(main())
"""Reference checks of reads, writes and seeks against a file named P5."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass

from oskit.bio import BYTES_PER_BLOCK
from oskit.errors import BfsError
from oskit.fs import FileSystem, Whence

BLOCKS = 50
BUFSIZE = 2000


@dataclass(frozen=True)
class CheckOutcome:
    """Result of one check within a numbered test."""

    testnum: int
    good: bool
    message: str

    def __str__(self) -> str:
        return self.message


def _good(testnum: int) -> CheckOutcome:
    return CheckOutcome(testnum, True, f"TEST {testnum} : GOOD ")


def check(testnum: int, buf, start: int, size: int, val: int) -> CheckOutcome:
    """Check that ``size`` bytes of ``buf`` from ``start`` all equal ``val``."""
    for index in range(start, start + size):
        if buf[index] != val:
            return CheckOutcome(
                testnum,
                False,
                f"TEST {testnum} : BAD  : buf[{index}] = {buf[index]} "
                f"but should be {val} ",
            )
    return _good(testnum)


def check_cursor(testnum: int, expected: int, actual: int) -> CheckOutcome:
    """Check that a cursor position is the expected one."""
    if actual == expected:
        return _good(testnum)
    return CheckOutcome(
        testnum,
        False,
        f"TEST {testnum} : BAD  : cursor = {actual} but should be {expected} ",
    )


def _check_count(testnum: int, expected: int, actual: int) -> CheckOutcome:
    if actual == expected:
        return _good(testnum)
    return CheckOutcome(
        testnum,
        False,
        f"TEST {testnum} : BAD  : read returned {actual} bytes but should be {expected} ",
    )


def create_p5(fs: FileSystem) -> None:
    """Create file P5 of 50 blocks, every byte of block b holding the value b."""
    fd = fs.create("P5")
    for block in range(BLOCKS):
        fs.write(fd, bytes([block]) * BYTES_PER_BLOCK)
    fs.close(fd)


def _read_into_buffer(fs: FileSystem, fd: int, numb: int) -> tuple[bytearray, int]:
    buf = bytearray(BUFSIZE)
    data = fs.read(fd, numb)
    buf[:len(data)] = data
    return buf, len(data)


def _test1(fs: FileSystem, fd: int) -> list[CheckOutcome]:
    fs.seek(fd, 0, Whence.SET)
    results = [check_cursor(1, 0, fs.tell(fd))]
    buf, count = _read_into_buffer(fs, fd, 100)
    results.append(_check_count(1, 100, count))
    results.append(check_cursor(1, 100, fs.tell(fd)))
    results.append(check(1, buf, 0, 100, 0))
    return results


def _test2(fs: FileSystem, fd: int) -> list[CheckOutcome]:
    fs.seek(fd, 512 + 30, Whence.SET)
    results = [check_cursor(2, 512 + 30, fs.tell(fd))]
    buf, count = _read_into_buffer(fs, fd, 200)
    results.append(_check_count(2, 200, count))
    results.append(check_cursor(2, 512 + 30 + 200, fs.tell(fd)))
    results.append(check(2, buf, 0, 200, 1))
    return results


def _test3(fs: FileSystem, fd: int) -> list[CheckOutcome]:
    fs.seek(fd, 20 * BYTES_PER_BLOCK, Whence.SET)
    results = [check_cursor(3, 20 * 512, fs.tell(fd))]
    buf, count = _read_into_buffer(fs, fd, 1000)
    results.append(_check_count(3, 1000, count))
    results.append(check_cursor(3, 20 * 512 + 1000, fs.tell(fd)))
    results.append(check(3, buf, 0, 512, 20))
    results.append(check(3, buf, 512, 488, 21))
    return results


def _test4(fs: FileSystem, fd: int) -> list[CheckOutcome]:
    fs.seek(fd, 7 * BYTES_PER_BLOCK + 10, Whence.SET)
    results = [check_cursor(4, 7 * 512 + 10, fs.tell(fd))]
    fs.write(fd, bytes([77]) * 77)
    results.append(check_cursor(4, 7 * 512 + 10 + 77, fs.tell(fd)))
    fs.seek(fd, 7 * BYTES_PER_BLOCK, Whence.SET)
    buf, count = _read_into_buffer(fs, fd, BYTES_PER_BLOCK)
    results.append(_check_count(4, BYTES_PER_BLOCK, count))
    results.append(check(4, buf, 0, 10, 7))
    results.append(check(4, buf, 10, 77, 77))
    results.append(check(4, buf, 87, 425, 7))
    return results


def _test5(fs: FileSystem, fd: int) -> list[CheckOutcome]:
    fs.seek(fd, 10 * BYTES_PER_BLOCK + 50, Whence.SET)
    results = [check_cursor(5, 10 * 512 + 50, fs.tell(fd))]
    fs.write(fd, bytes([88]) * 900)
    results.append(check_cursor(5, 10 * 512 + 50 + 900, fs.tell(fd)))
    fs.seek(fd, 10 * BYTES_PER_BLOCK, Whence.SET)
    results.append(check_cursor(5, 10 * 512, fs.tell(fd)))
    buf, count = _read_into_buffer(fs, fd, 2 * BYTES_PER_BLOCK)
    results.append(_check_count(5, 2 * BYTES_PER_BLOCK, count))
    results.append(check_cursor(5, 12 * 512, fs.tell(fd)))
    results.append(check(5, buf, 0, 50, 10))
    results.append(check(5, buf, 50, 462, 88))
    results.append(check(5, buf, 512, 438, 88))
    results.append(check(5, buf, 950, 74, 11))
    return results


def _test6(fs: FileSystem, fd: int) -> list[CheckOutcome]:
    fs.seek(fd, 49 * BYTES_PER_BLOCK, Whence.SET)
    results = [check_cursor(6, 49 * 512, fs.tell(fd))]
    fs.write(fd, bytes([99]) * 700)
    results.append(check_cursor(6, 49 * 512 + 700, fs.tell(fd)))
    fs.seek(fd, 49 * BYTES_PER_BLOCK, Whence.SET)
    results.append(check_cursor(6, 49 * 512, fs.tell(fd)))
    buf, count = _read_into_buffer(fs, fd, 2 * BYTES_PER_BLOCK)
    results.append(_check_count(6, 700, count))
    results.append(check_cursor(6, 49 * 512 + 700, fs.tell(fd)))
    results.append(check(6, buf, 0, 512, 99))
    results.append(check(6, buf, 512, 188, 99))
    results.append(check(6, buf, 700, 324, 0))
    return results


def run_checks(fs: FileSystem) -> list[CheckOutcome]:
    """Open P5, run the six read/write/seek tests and return every outcome."""
    fd = fs.open("P5")
    outcomes: list[CheckOutcome] = []
    for test in (_test1, _test2, _test3, _test4, _test5, _test6):
        outcomes.extend(test(fs, fd))
    fs.close(fd)
    return outcomes


def main(argv=None) -> int:
    """Run the checks against a disk image, optionally formatting it first."""
    parser = argparse.ArgumentParser(
        prog="bfs-selftest", description="Check file reads, writes and seeks."
    )
    parser.add_argument("disk", nargs="?", default="BFSDISK", help="disk image path")
    parser.add_argument(
        "--format",
        action="store_true",
        help="format the disk and create file P5 before checking",
    )
    args = parser.parse_args(argv)
    fs = FileSystem(args.disk)
    try:
        if args.format:
            fs.format()
            create_p5(fs)
        fs.mount()
        outcomes = run_checks(fs)
    except BfsError as exc:
        print(f"ERROR: {exc}")
        return 1
    for outcome in outcomes:
        print(outcome)
    return 0 if all(outcome.good for outcome in outcomes) else 1


if __name__ == "__main__":
    sys.exit(main())
"""Command line front end that loads a task file and runs one scheduler on it.

Each line of the task file reads ``name, priority, burst``.
"""

from __future__ import annotations

import argparse
import sys
from typing import Callable, Iterable

from oskit.schedulers import (
    ScheduleResult,
    fcfs,
    format_result,
    priority,
    priority_round_robin,
    round_robin,
    sjf,
)
from oskit.tasks import Task

_ALGORITHMS: dict[str, tuple[str, Callable[[list[Task]], ScheduleResult]]] = {
    "fcfs": ("FCFS", fcfs),
    "sjf": ("SJF", sjf),
    "priority": ("Priority", priority),
    "rr": ("RR", round_robin),
    "priority_rr": ("Priority_RR", priority_round_robin),
}


def _parse_line(line: str, number: int) -> Task:
    fields = line.split(",")
    if len(fields) < 3:
        raise ValueError(f"line {number}: expected 'name, priority, burst', got {line!r}")
    name = fields[0]
    try:
        task_priority = int(fields[1].strip())
        burst = int(fields[2].strip())
    except ValueError:
        raise ValueError(f"line {number}: priority and burst must be integers") from None
    return Task(name=name, priority=task_priority, burst=burst)


def parse_tasks(lines: Iterable[str]) -> list[Task]:
    """Parse task lines of the form ``name, priority, burst``; blank lines are skipped."""
    return [
        _parse_line(line, number)
        for number, line in enumerate(lines, start=1)
        if line.strip()
    ]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedule",
        description="Simulate a CPU scheduling algorithm on a list of tasks.",
    )
    parser.add_argument("algorithm", choices=sorted(_ALGORITHMS))
    parser.add_argument("schedule", help="file of 'name, priority, burst' lines")
    return parser


def main(argv=None) -> int:
    """Run the chosen scheduler on the task file and print the schedule."""
    args = _build_parser().parse_args(argv)
    try:
        with open(args.schedule) as handle:
            tasks = parse_tasks(handle)
    except OSError:
        print(f"Could not open file {args.schedule}")
        return 1
    except ValueError as exc:
        print(exc)
        return 1
    if not tasks:
        print("no tasks to schedule")
        return 1
    title, algorithm = _ALGORITHMS[args.algorithm]
    print(format_result(algorithm(tasks), title), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())
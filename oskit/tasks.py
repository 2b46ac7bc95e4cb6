"""Tasks for the CPU scheduling simulator and the text they are reported in."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

QUANTUM = 10
MIN_PRIORITY = 1
MAX_PRIORITY = 10


@dataclass(frozen=True)
class Task:
    """A schedulable task with its CPU burst and, once run, its timing metrics.

    ``tat`` is the turnaround time, ``wt`` the waiting time and ``rt`` the
    response time; all tasks are submitted at time zero.
    """

    name: str
    priority: int
    burst: int
    tat: int = 0
    wt: int = 0
    rt: int = 0


def format_run(task: Task, slice: int) -> str:
    """Describe running ``task`` for ``slice`` time units."""
    return (
        f"Running task = [{task.name}] [{task.priority}] [{task.burst}] "
        f"for {slice} units."
    )


def cpu_utilization(total_time: int, dispatcher_time: int) -> float:
    """Return the share of ``dispatcher_time`` spent running tasks, in percent."""
    if dispatcher_time <= 0:
        raise ValueError("dispatcher time must be positive")
    return total_time / dispatcher_time * 100


def format_utilization(value: float) -> str:
    """Render a utilization percentage with two decimals."""
    return f"CPU Utilization: {value:.2f}%"


def format_table(tasks: Iterable[Task]) -> str:
    """Render the name, TAT, WT and RT rows, with tasks ordered by name."""
    ordered = sorted(tasks, key=lambda task: task.name)
    rows = [
        ("...|", [f" {task.name:>4} |" for task in ordered]),
        ("TAT|", [f" {task.tat:4d} |" for task in ordered]),
        ("WT |", [f" {task.wt:4d} |" for task in ordered]),
        ("RT |", [f" {task.rt:4d} |" for task in ordered]),
    ]
    return "\n".join(label + "".join(cells) for label, cells in rows)
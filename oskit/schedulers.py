"""CPU scheduling algorithms: FCFS, SJF, priority, round-robin and priority round-robin.

Every task is submitted at time zero.  Ties are broken by task name so the
schedules are deterministic.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from itertools import groupby
from typing import Sequence

from oskit.tasks import (
    QUANTUM,
    Task,
    cpu_utilization,
    format_run,
    format_table,
    format_utilization,
)


@dataclass(frozen=True)
class Dispatch:
    """One stint on the CPU: the task, how long it ran, and the time afterwards."""

    task: Task
    slice: int
    time: int


@dataclass(frozen=True)
class ScheduleResult:
    """The dispatches of a schedule and the finished tasks with their metrics."""

    dispatches: tuple[Dispatch, ...]
    tasks: tuple[Task, ...]

    @property
    def total_time(self) -> int:
        return self.dispatches[-1].time if self.dispatches else 0

    @property
    def switches(self) -> int:
        return len(self.dispatches)

    @property
    def dispatcher_time(self) -> int:
        return self.total_time + self.switches - 1

    @property
    def utilization(self) -> float:
        return cpu_utilization(self.total_time, self.dispatcher_time)


@dataclass
class _Timeline:
    time: int = 0
    dispatches: list[Dispatch] = field(default_factory=list)
    finished: list[Task] = field(default_factory=list)
    first_start: dict[int, int] = field(default_factory=dict)

    def run(self, key: int, task: Task, slice_: int) -> None:
        self.first_start.setdefault(key, self.time)
        self.time += slice_
        self.dispatches.append(Dispatch(task, slice_, self.time))

    def finish(self, key: int, task: Task) -> None:
        self.finished.append(
            replace(
                task,
                tat=self.time,
                wt=self.time - task.burst,
                rt=self.first_start[key],
            )
        )

    def result(self) -> ScheduleResult:
        return ScheduleResult(tuple(self.dispatches), tuple(self.finished))


def _require_tasks(tasks: Sequence[Task]) -> list[Task]:
    tasks = list(tasks)
    if not tasks:
        raise ValueError("no tasks to schedule")
    return tasks


def _require_quantum(quantum: int) -> None:
    if quantum <= 0:
        raise ValueError("quantum must be positive")


def _run_to_completion(tasks: Sequence[Task], key) -> ScheduleResult:
    timeline = _Timeline()
    for index, task in sorted(enumerate(_require_tasks(tasks)), key=lambda p: key(p[1])):
        timeline.run(index, task, task.burst)
        timeline.finish(index, task)
    return timeline.result()


def fcfs(tasks: Sequence[Task]) -> ScheduleResult:
    """First-come, first-served; tasks arrive together, so they run in name order."""
    return _run_to_completion(tasks, lambda task: task.name)


def sjf(tasks: Sequence[Task]) -> ScheduleResult:
    """Shortest job first, ties broken by name."""
    return _run_to_completion(tasks, lambda task: (task.burst, task.name))


def priority(tasks: Sequence[Task]) -> ScheduleResult:
    """Highest priority first, ties broken by name."""
    return _run_to_completion(tasks, lambda task: (-task.priority, task.name))


def _rotate(timeline: _Timeline, queue: list[tuple[int, Task]], quantum: int) -> None:
    remaining = {index: task.burst for index, task in queue}
    while queue:
        still_running = []
        for index, task in queue:
            if remaining[index] > quantum:
                timeline.run(index, task, quantum)
                remaining[index] -= quantum
                still_running.append((index, task))
            else:
                timeline.run(index, task, remaining[index])
                timeline.finish(index, task)
        queue = still_running


def round_robin(tasks: Sequence[Task], quantum: int = QUANTUM) -> ScheduleResult:
    """Run each task for at most ``quantum`` units per turn, in name order."""
    _require_quantum(quantum)
    queue = sorted(enumerate(_require_tasks(tasks)), key=lambda p: p[1].name)
    timeline = _Timeline()
    _rotate(timeline, queue, quantum)
    return timeline.result()


def priority_round_robin(tasks: Sequence[Task], quantum: int = QUANTUM) -> ScheduleResult:
    """Run by priority; tasks sharing a priority take round-robin turns.

    A task alone at its priority runs its whole burst in one go.
    """
    _require_quantum(quantum)
    ordered = sorted(
        enumerate(_require_tasks(tasks)),
        key=lambda p: (-p[1].priority, p[1].name),
    )
    timeline = _Timeline()
    for _, group in groupby(ordered, key=lambda p: p[1].priority):
        members = list(group)
        if len(members) == 1:
            index, task = members[0]
            timeline.run(index, task, task.burst)
            timeline.finish(index, task)
        else:
            _rotate(timeline, members, quantum)
    return timeline.result()


def format_result(result: ScheduleResult, title: str) -> str:
    """Render a schedule: each dispatch, the utilization and the metrics table."""
    parts = [f"\n{title}: \n"]
    for dispatch in result.dispatches:
        parts.append(format_run(dispatch.task, dispatch.slice) + "\n")
        parts.append(f"\tTime is now: {dispatch.time}\n")
    parts.append("\n" + format_utilization(result.utilization) + "\n")
    parts.append("\n" + format_table(result.tasks) + "\n\n")
    return "".join(parts)
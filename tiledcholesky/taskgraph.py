"""A small dependency-driven task graph executed on a thread pool."""

from __future__ import annotations

import os
from collections import defaultdict
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple


@dataclass(eq=False)
class Task:
    """A unit of work that runs once all of its dependencies have finished."""

    label: int
    function: Callable[[], object]
    dependencies: Tuple["Task", ...] = ()
    finished: bool = field(default=False)


class TaskGraph:
    """Tasks with dependencies, run in dependency order on worker threads."""

    def __init__(self) -> None:
        self._tasks: List[Task] = []
        self._members: set = set()

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self):
        return iter(self._tasks)

    def add_task(
        self, function: Callable[[], object], dependencies: Iterable[Task] = ()
    ) -> Task:
        """Add a task that runs ``function`` after every task in ``dependencies``."""
        unique: Dict[int, Task] = {}
        for dependency in dependencies:
            if id(dependency) not in self._members:
                raise ValueError(
                    f"dependency {dependency.label} does not belong to this graph"
                )
            unique.setdefault(id(dependency), dependency)
        task = Task(len(self._tasks), function, tuple(unique.values()))
        self._tasks.append(task)
        self._members.add(id(task))
        return task

    def run(self, workers: Optional[int] = None) -> None:
        """Run every unfinished task and return once all have finished.

        The first exception raised by a task is re-raised; tasks not yet
        started are then abandoned.
        """
        if workers is None:
            workers = os.cpu_count() or 1
        if workers < 1:
            raise ValueError(f"workers must be positive, got {workers}")

        pending = [task for task in self._tasks if not task.finished]
        if not pending:
            return

        remaining: Dict[Task, int] = {}
        dependents: Dict[Task, List[Task]] = defaultdict(list)
        for task in pending:
            open_dependencies = [d for d in task.dependencies if not d.finished]
            remaining[task] = len(open_dependencies)
            for dependency in open_dependencies:
                dependents[dependency].append(task)

        with ThreadPoolExecutor(max_workers=workers) as pool:
            running: Dict[Future, Task] = {
                pool.submit(task.function): task
                for task in pending
                if remaining[task] == 0
            }
            while running:
                done, _ = wait(running, return_when=FIRST_COMPLETED)
                for future in done:
                    task = running.pop(future)
                    error = future.exception()
                    if error is not None:
                        for other in running:
                            other.cancel()
                        raise error
                    task.finished = True
                    for dependent in dependents[task]:
                        remaining[dependent] -= 1
                        if remaining[dependent] == 0:
                            running[pool.submit(dependent.function)] = dependent
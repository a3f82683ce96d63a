"""TaskStore - the ordered, read-only collection of loaded tasks."""

from fnmatch import fnmatchcase
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from .exceptions import DuplicateTaskError, TaskNotFoundError
from .task import Task


class TaskStore:
    """Ordered collection of tasks, queried by name or glob pattern.

    The store is built once from the loaded task records and never changes
    afterwards, so concurrent readers need no locking.

    Example:
        store = TaskStore([Task('build'), Task('prebuild')])
        store.lookup('build')        # <Task: build>
        store.filter(['pre*'])       # [<Task: prebuild>]
    """

    def __init__(self, tasks: Iterable[Task] = ()):
        """Index tasks by name.

        Raises:
            DuplicateTaskError: If two tasks share a name
        """
        self._tasks: List[Task] = []
        self._by_name: Dict[str, Task] = {}
        for task in tasks:
            if task.name in self._by_name:
                raise DuplicateTaskError(task.name)
            self._tasks.append(task)
            self._by_name[task.name] = task

    def lookup(self, name: str) -> Optional[Task]:
        """Return the task called `name`, or None."""
        return self._by_name.get(name)

    def find_all(self, name: str) -> List[Task]:
        """Return every task called `name`, in load order."""
        return [task for task in self._tasks if task.name == name]

    def filter(self, patterns: Sequence[str] = ()) -> List[Task]:
        """Return tasks whose name matches at least one glob pattern.

        Args:
            patterns: fnmatch-style patterns. Empty means all tasks.

        Returns:
            Matching tasks in load order

        Raises:
            TaskNotFoundError: If patterns were given but nothing matched
        """
        patterns = list(patterns)
        if not patterns:
            return list(self._tasks)

        matched = [
            task for task in self._tasks
            if any(fnmatchcase(task.name, pattern) for pattern in patterns)
        ]
        if not matched:
            joined = ' '.join(patterns)
            raise TaskNotFoundError(
                joined, f'No tasks for pattern "{joined}" was found. Stop.')
        return matched

    @property
    def names(self) -> List[str]:
        return [task.name for task in self._tasks]

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, name) -> bool:
        return name in self._by_name

    def __repr__(self):
        return f"TaskStore({self.names!r})"

"""Tasks are the main abstractions managed by errand"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .exceptions import InvalidTaskError


class TaskKind(Enum):
    """Which body runner executes a task."""
    SHELL = "shell"     # command text run by an external shell
    SCRIPT = "script"   # inline Python source
    NOOP = "noop"       # no body, only hooks


SHELL_INTERPRETERS = ('sh', 'bash')


@dataclass(frozen=True)
class HookGroup:
    """Ordered task names run together as a hook.

    Attributes:
        task_names: Names of the tasks to run
        parallel: If True the tasks run concurrently, otherwise one after
            the other in declaration order
    """
    task_names: Tuple[str, ...]
    parallel: bool = False

    def __post_init__(self):
        # accept any sequence, store a tuple so the group stays hashable
        object.__setattr__(self, 'task_names', tuple(self.task_names))


@dataclass(frozen=True)
class Task:
    """A named unit of work.

    Attributes:
        name: Unique task name
        kind: TaskKind selecting the body runner
        body: Command text (SHELL) or Python source (SCRIPT), None for NOOP
        description: Optional help text
        before: Hook groups run before the body
        after: Hook groups run after the body
        interpreter: Shell used for SHELL bodies ('sh' or 'bash')

    Example:
        Task(
            'build',
            TaskKind.SHELL,
            body='make all',
            before=(HookGroup(('lint', 'test'), parallel=True),),
        )
    """

    name: str
    kind: TaskKind = TaskKind.NOOP
    body: Optional[str] = None
    description: Optional[str] = None
    before: Tuple[HookGroup, ...] = field(default_factory=tuple)
    after: Tuple[HookGroup, ...] = field(default_factory=tuple)
    interpreter: str = 'sh'

    def __post_init__(self):
        object.__setattr__(self, 'before', tuple(self.before))
        object.__setattr__(self, 'after', tuple(self.after))
        self._check()

    def _check(self) -> None:
        """Sanity checks, raise InvalidTaskError on a malformed record."""
        if not isinstance(self.name, str) or not self.name:
            raise InvalidTaskError(
                f"Task name must be a non-empty string, got {self.name!r}")
        if not isinstance(self.kind, TaskKind):
            raise InvalidTaskError(
                f"Task '{self.name}': invalid kind {self.kind!r}")

        if self.kind is TaskKind.NOOP:
            if self.body is not None:
                raise InvalidTaskError(
                    f"Task '{self.name}': noop tasks have no body")
        elif not isinstance(self.body, str):
            raise InvalidTaskError(
                f"Task '{self.name}': {self.kind.value} tasks require a body")

        if self.interpreter not in SHELL_INTERPRETERS:
            raise InvalidTaskError(
                f"Task '{self.name}': unknown interpreter "
                f"'{self.interpreter}'. Valid: {SHELL_INTERPRETERS}")

        for group in self.before + self.after:
            if not isinstance(group, HookGroup):
                raise InvalidTaskError(
                    f"Task '{self.name}': hooks must be HookGroup instances")

    def hooks(self, phase: str) -> Tuple[HookGroup, ...]:
        """Return the explicit hook groups for 'before' or 'after'."""
        if phase == 'before':
            return self.before
        if phase == 'after':
            return self.after
        raise ValueError(f"Unknown hook phase: {phase!r}")

    def __repr__(self):
        return f"<Task: {self.name}>"

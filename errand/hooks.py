"""Hook resolution.

A task's hooks for a phase come from two places:

1. Convention: a task named ``pre<name>`` runs before ``<name>`` and a task
   named ``post<name>`` runs after it. Missing convention tasks are skipped.
2. Declaration: the task's own ``before``/``after`` hook groups.

Convention hooks always come first, sequentially, in store order.
"""

import logging
from typing import List, TYPE_CHECKING

from .task import HookGroup

if TYPE_CHECKING:
    from .store import TaskStore
    from .task import Task


logger = logging.getLogger(__name__)

PHASE_PREFIXES = {
    'before': 'pre',
    'after': 'post',
}


def implicit_hook_name(task_name: str, phase: str) -> str:
    """Return the convention hook name, e.g. 'prebuild' for 'build'."""
    try:
        prefix = PHASE_PREFIXES[phase]
    except KeyError:
        raise ValueError(f"Unknown hook phase: {phase!r}") from None
    return f"{prefix}{task_name}"


class HookResolver:
    """Compute the ordered hook groups of a task for one phase."""

    def __init__(self, store: 'TaskStore'):
        self.store = store

    def resolve(self, task: 'Task', phase: str) -> List[HookGroup]:
        """Return hook groups for `phase` ('before' or 'after').

        Returns:
            Implicit group (if any matching task exists) followed by the
            task's explicit groups in declaration order
        """
        hook_name = implicit_hook_name(task.name, phase)
        groups: List[HookGroup] = []

        implicit = self.store.find_all(hook_name)
        if implicit:
            logger.debug("Task '%s' has implicit %s hook '%s'",
                         task.name, phase, hook_name)
            groups.append(HookGroup(tuple(t.name for t in implicit)))

        groups.extend(task.hooks(phase))
        return groups

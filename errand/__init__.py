"""errand - run named shell and Python tasks with pre/post hooks.

Example:
    import asyncio
    from errand import TaskEngine, TaskStore, Task, TaskKind

    store = TaskStore([
        Task('prebuild', TaskKind.SHELL, body='echo preparing'),
        Task('build', TaskKind.SHELL, body='make'),
    ])
    asyncio.run(TaskEngine(store).run_file('build'))
"""

from .task import Task, TaskKind, HookGroup
from .store import TaskStore
from .hooks import HookResolver
from .bodies import RunContext, Body, ProcessBody, ScriptBody, NoopBody, body_for
from .engine import TaskEngine
from .exceptions import (
    ErrandError,
    ConfigNotFoundError,
    YAMLParseError,
    InvalidTaskError,
    DuplicateTaskError,
    TaskError,
    TaskNotFoundError,
    CommandFailedError,
    ScriptFailedError,
)

__all__ = [
    # Model
    'Task',
    'TaskKind',
    'HookGroup',
    'TaskStore',
    # Execution
    'HookResolver',
    'RunContext',
    'Body',
    'ProcessBody',
    'ScriptBody',
    'NoopBody',
    'body_for',
    'TaskEngine',
    # Errors
    'ErrandError',
    'ConfigNotFoundError',
    'YAMLParseError',
    'InvalidTaskError',
    'DuplicateTaskError',
    'TaskError',
    'TaskNotFoundError',
    'CommandFailedError',
    'ScriptFailedError',
]

"""Convert YAML definitions to Task objects.

This module handles converting parsed YAML structures into the Task
records and TaskStore used by TaskEngine.
"""

from typing import Any, Dict, List

from errand.store import TaskStore
from errand.task import HookGroup, Task, TaskKind

from .parser import SCRIPT_TYPES, YAMLConfig


DEFAULT_TYPE = 'sh'


def yaml_to_store(config: YAMLConfig) -> TaskStore:
    """Convert all tasks from a YAMLConfig into a TaskStore.

    Raises:
        DuplicateTaskError: If two tasks share a name
    """
    return TaskStore(yaml_to_tasks(config))


def yaml_to_tasks(config: YAMLConfig) -> List[Task]:
    """Convert all tasks from a YAMLConfig, keeping document order."""
    return [yaml_to_task(task_dict) for task_dict in config.tasks]


def yaml_to_task(task_dict: Dict[str, Any]) -> Task:
    """Convert a YAML task definition to a Task.

    A task without ``run`` is a noop task. Otherwise ``type`` selects the
    kind: sh/bash run a shell command, python/py run inline Python.

    Args:
        task_dict: Task definition dictionary

    Returns:
        Task instance
    """
    body = task_dict.get('run')
    task_type = task_dict.get('type', DEFAULT_TYPE)

    if body is None:
        kind = TaskKind.NOOP
        interpreter = DEFAULT_TYPE
    elif task_type in SCRIPT_TYPES:
        kind = TaskKind.SCRIPT
        interpreter = DEFAULT_TYPE
    else:
        kind = TaskKind.SHELL
        interpreter = task_type

    return Task(
        name=task_dict['name'],
        kind=kind,
        body=body,
        description=task_dict.get('description'),
        before=_parse_hooks(task_dict.get('before', [])),
        after=_parse_hooks(task_dict.get('after', [])),
        interpreter=interpreter,
    )


def _parse_hooks(specs: List[Any]) -> List[HookGroup]:
    return [_parse_hook_spec(spec) for spec in specs]


def _parse_hook_spec(spec: Any) -> HookGroup:
    """Parse a hook specification into a HookGroup.

    Args:
        spec: Hook specification (string, list or dict)

    Returns:
        HookGroup instance
    """
    # Short form: a single task name
    if isinstance(spec, str):
        return HookGroup((spec,))

    # List form: sequential group
    if isinstance(spec, list):
        return HookGroup(tuple(spec))

    # Long form: dict with tasks and parallel flag
    return HookGroup(
        tuple(spec['tasks']),
        parallel=spec.get('parallel', False),
    )

"""YAML parsing and validation for errand task documents.

This module handles parsing errand.yaml files and validating their structure.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Any, Union

import yaml

from errand.exceptions import ConfigNotFoundError, YAMLParseError


SHELL_TYPES = {'sh', 'bash'}
SCRIPT_TYPES = {'python', 'py'}
VALID_TYPES = SHELL_TYPES | SCRIPT_TYPES


@dataclass
class YAMLConfig:
    """Parsed YAML configuration."""
    config: Dict[str, Any] = field(default_factory=dict)
    tasks: List[Dict[str, Any]] = field(default_factory=list)


def parse_yaml_file(path: Union[str, Path]) -> YAMLConfig:
    """Parse and validate an errand.yaml file.

    Args:
        path: Path to the YAML file

    Returns:
        YAMLConfig with parsed configuration and tasks

    Raises:
        YAMLParseError: If the file is invalid or missing required fields
        ConfigNotFoundError: If the file doesn't exist
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigNotFoundError(f"No task file was found at {path}. Stop.")

    with open(path) as f:
        return parse_yaml_string(f.read())


def parse_yaml_string(content: str) -> YAMLConfig:
    """Parse YAML content from a string.

    Args:
        content: YAML content as string

    Returns:
        YAMLConfig with parsed configuration and tasks
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise YAMLParseError(f"Invalid YAML syntax: {e}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise YAMLParseError("YAML root must be a mapping")

    return _validate_yaml_data(data)


def _validate_yaml_data(data: Dict[str, Any]) -> YAMLConfig:
    """Validate parsed YAML data structure.

    Raises:
        YAMLParseError: If validation fails
    """
    config = data.get('config') or {}
    if not isinstance(config, dict):
        raise YAMLParseError("'config' must be a mapping")

    for key in ('base_path', 'bin_dir'):
        if key in config and not isinstance(config[key], str):
            raise YAMLParseError(f"config '{key}' must be a string")

    tasks = data.get('tasks') or []
    if not isinstance(tasks, list):
        raise YAMLParseError("'tasks' must be a list")

    validated_tasks = []
    for i, task in enumerate(tasks):
        validated_tasks.append(_validate_task(task, i))

    return YAMLConfig(config=config, tasks=validated_tasks)


def _validate_task(task: Dict[str, Any], index: int) -> Dict[str, Any]:
    """Validate a single task definition.

    Args:
        task: Task dictionary
        index: Index in tasks list (for error messages)

    Returns:
        Validated task dictionary

    Raises:
        YAMLParseError: If validation fails
    """
    if not isinstance(task, dict):
        raise YAMLParseError(f"Task {index} must be a mapping")

    # Required fields
    if 'name' not in task:
        raise YAMLParseError(f"Task {index} missing required field 'name'")
    if not isinstance(task['name'], str) or not task['name']:
        raise YAMLParseError(f"Task {index}: 'name' must be a non-empty string")

    name = task['name']

    # Optional fields
    if 'run' in task and not isinstance(task['run'], str):
        raise YAMLParseError(f"Task '{name}': 'run' must be a string")

    if 'description' in task and not isinstance(task['description'], str):
        raise YAMLParseError(f"Task '{name}': 'description' must be a string")

    if 'type' in task:
        task_type = task['type']
        if task_type not in VALID_TYPES:
            raise YAMLParseError(
                f"Task '{name}' has invalid type '{task_type}'. "
                f"Valid types: {sorted(VALID_TYPES)}"
            )
        if 'run' not in task:
            raise YAMLParseError(
                f"Task '{name}' has type '{task_type}' but no 'run'"
            )

    for phase in ('before', 'after'):
        hooks = task.get(phase, [])
        if not isinstance(hooks, list):
            raise YAMLParseError(f"Task '{name}': '{phase}' must be a list")
        for i, hook in enumerate(hooks):
            _validate_hook_spec(hook, name, phase, i)

    return task


def _validate_hook_spec(spec: Any, task_name: str, phase: str,
                        index: int) -> None:
    """Validate a hook group specification.

    Args:
        spec: Hook specification (string, list of strings, or dict)
        task_name: Task name (for error messages)
        phase: 'before' or 'after' (for error messages)
        index: Hook index (for error messages)

    Raises:
        YAMLParseError: If validation fails
    """
    where = f"Task '{task_name}': {phase} hook {index}"

    if isinstance(spec, str):
        # Short form: a single task name
        return

    if isinstance(spec, list):
        # List form: sequential group
        _validate_name_list(spec, where)
        return

    if not isinstance(spec, dict):
        raise YAMLParseError(
            f"{where} must be a string, a list or a mapping"
        )

    # Long form: dict with tasks and parallel flag
    if 'tasks' not in spec:
        raise YAMLParseError(f"{where} missing 'tasks'")
    if not isinstance(spec['tasks'], list):
        raise YAMLParseError(f"{where}: 'tasks' must be a list")
    _validate_name_list(spec['tasks'], where)

    if 'parallel' in spec and not isinstance(spec['parallel'], bool):
        raise YAMLParseError(f"{where}: 'parallel' must be a boolean")


def _validate_name_list(names: List[Any], where: str) -> None:
    for name in names:
        if not isinstance(name, str) or not name:
            raise YAMLParseError(
                f"{where}: task names must be non-empty strings"
            )

"""Human readable task listing."""

from typing import Iterable, Optional

from .task import Task


NO_DESCRIPTION = 'No description'


def first_line(text: Optional[str]) -> str:
    """Return the first non-blank line of `text`, stripped ('' if none)."""
    for line in (text or '').splitlines():
        stripped = line.strip()
        if stripped:
            return stripped
    return ''


def format_task_table(tasks: Iterable[Task], indent: int = 2) -> str:
    """Format tasks as a two-column table of names and descriptions.

    Names are padded to the widest name so descriptions line up. Only the
    first line of a multi-line description is shown.
    """
    rows = [
        (task.name, first_line(task.description) or NO_DESCRIPTION)
        for task in tasks
    ]
    if not rows:
        return ''
    width = max(len(name) for name, _ in rows)
    pad = ' ' * indent
    return '\n'.join(
        f"{pad}{name.ljust(width)}  {description}"
        for name, description in rows
    )

"""Exception classes used by errand.

Every error raised on purpose by errand derives from ErrandError, so the
command line layer can report it and exit with a failure code. Errors tied
to a single task derive from TaskError and carry the task name.
"""


class ErrandError(Exception):
    """Base class for all errand errors."""
    pass


class ConfigNotFoundError(ErrandError):
    """No task document could be found. Nothing can run."""
    pass


class YAMLParseError(ErrandError):
    """Error parsing or validating a task document."""
    pass


class InvalidTaskError(ErrandError, ValueError):
    """A task record is malformed."""
    pass


class DuplicateTaskError(ErrandError):
    """Two tasks in a store share the same name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Task "{name}" is defined more than once. Stop.')


class TaskError(ErrandError):
    """Error scoped to a single task.

    Attributes:
        name: Name of the task that failed
    """

    def __init__(self, name: str, message: str):
        self.name = name
        super().__init__(message)


class TaskNotFoundError(TaskError):
    """A requested task (or task pattern) has no match."""

    def __init__(self, name: str, message: str = None):
        if message is None:
            message = f'No task called "{name}" was found. Stop.'
        super().__init__(name, message)


class CommandFailedError(TaskError):
    """An external command exited with a non-zero status.

    Attributes:
        exit_code: Exit status of the command. Negative values are the
            number of the signal that killed the process.
    """

    def __init__(self, name: str, exit_code: int):
        self.exit_code = exit_code
        super().__init__(name, f'Task "{name}" exited with code {exit_code}')


class ScriptFailedError(TaskError):
    """An inline script raised, or its awaited outcome raised.

    Attributes:
        cause: The original exception
    """

    def __init__(self, name: str, cause: BaseException, details: str = ''):
        self.cause = cause
        message = f"Task '{name}' failed."
        if details:
            message = f"{message}\n{details.rstrip()}"
        super().__init__(name, message)

"""Body runners: execute the payload of a task.

There is one Body implementation per TaskKind:

- ProcessBody runs SHELL tasks as an external process. The process inherits
  stdin/stdout/stderr, so interactive and streaming commands work unchanged.
- ScriptBody runs SCRIPT tasks as inline Python source.
- NoopBody runs NOOP tasks and does nothing.

Failures are raised as TaskError subclasses carrying the task name.
"""

import asyncio
import inspect
import os
import traceback
import types
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .exceptions import CommandFailedError, InvalidTaskError, ScriptFailedError
from .task import Task, TaskKind


# exit status a shell reports when the command itself cannot be found
COMMAND_NOT_FOUND = 127

# names a script may bind to export its entry point, in lookup order
SCRIPT_EXPORTS = ('default', 'main')


@dataclass(frozen=True)
class RunContext:
    """Per-invocation settings threaded through every body.

    Attributes:
        args: Extra positional arguments forwarded to shell bodies
        bin_dir: Project-local executable directory, prepended to PATH
        cwd: Working directory for spawned commands (None = inherit)
        source_path: Path of the task document, exposed to scripts
    """
    args: Tuple[str, ...] = ()
    bin_dir: Optional[Path] = None
    cwd: Optional[Path] = None
    source_path: Optional[Path] = None

    def command_env(self) -> Dict[str, str]:
        """Build the environment for a spawned command.

        Returns:
            Copy of os.environ with bin_dir prepended to PATH
        """
        env = os.environ.copy()
        if self.bin_dir is not None:
            current = env.get('PATH')
            env['PATH'] = (
                f"{self.bin_dir}{os.pathsep}{current}" if current
                else str(self.bin_dir)
            )
        return env


class Body(ABC):
    """Executes the body of one kind of task."""

    @abstractmethod
    async def execute(self, task: Task, context: RunContext) -> None:
        """Run the task body, raise a TaskError on failure."""
        ...


class ProcessBody(Body):
    """Run a command string through ``sh -c`` (or ``bash -c``).

    Inside the command ``$0`` is the task name and ``"$@"`` expands to the
    forwarded arguments.
    """

    def build_argv(self, task: Task, context: RunContext):
        return [task.interpreter, '-c', task.body, task.name, *context.args]

    async def execute(self, task: Task, context: RunContext) -> None:
        try:
            process = await asyncio.create_subprocess_exec(
                *self.build_argv(task, context),
                cwd=context.cwd,
                env=context.command_env(),
            )
        except OSError as exc:
            raise CommandFailedError(task.name, COMMAND_NOT_FOUND) from exc

        returncode = await process.wait()
        if returncode != 0:
            raise CommandFailedError(task.name, returncode)

    def __repr__(self):
        return "ProcessBody()"


class ScriptBody(Body):
    """Run inline Python source in a fresh module namespace.

    The module's exported value is ``default`` if bound, else ``main``, else
    the module itself. A callable export is called with no arguments. An
    awaitable (the call result, or the export itself) is awaited. Any other
    value is already the outcome. ``sys.exit()`` in a script is a task
    failure, not an exit of the runner.
    """

    def load(self, task: Task, context: RunContext) -> types.ModuleType:
        """Compile and execute the source, return the populated module."""
        module = types.ModuleType(f"errand_task_{task.name}")
        if context.source_path is not None:
            module.__file__ = str(context.source_path)
        code = compile(task.body, f"<errand:{task.name}>", 'exec')
        exec(code, module.__dict__)
        return module

    @staticmethod
    def exported(module: types.ModuleType) -> Any:
        namespace = vars(module)
        for name in SCRIPT_EXPORTS:
            if name in namespace:
                return namespace[name]
        return module

    async def execute(self, task: Task, context: RunContext) -> None:
        try:
            value = self.exported(self.load(task, context))
            if callable(value):
                value = value()
            if inspect.isawaitable(value):
                await value
        except (Exception, SystemExit) as exc:
            # KeyboardInterrupt and CancelledError still stop the invocation
            details = ''.join(traceback.format_exception(
                type(exc), exc, exc.__traceback__))
            raise ScriptFailedError(task.name, exc, details) from exc

    def __repr__(self):
        return "ScriptBody()"


class NoopBody(Body):
    """Body of a task that only exists to group hooks."""

    async def execute(self, task: Task, context: RunContext) -> None:
        return None

    def __repr__(self):
        return "NoopBody()"


BODIES: Dict[TaskKind, Body] = {
    TaskKind.SHELL: ProcessBody(),
    TaskKind.SCRIPT: ScriptBody(),
    TaskKind.NOOP: NoopBody(),
}


def body_for(task: Task) -> Body:
    """Return the Body that runs `task`."""
    try:
        return BODIES[task.kind]
    except KeyError:
        raise InvalidTaskError(
            f"Task '{task.name}': no body runner for kind {task.kind!r}"
        ) from None

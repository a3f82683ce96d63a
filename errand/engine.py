"""Task execution engine.

TaskEngine coordinates everything needed to run tasks from a TaskStore:

1. Executor (run_task): hooks before, timed body, hooks after
2. Scheduler (run_many): a list of tasks, sequential or concurrent
3. Lifecycle (run_file): beforeAll / task / afterAll

Execution is single-threaded on one asyncio event loop. Shell bodies run as
real OS processes and therefore in parallel; inline scripts interleave only
at their await points. Nothing is ever cancelled or timed out: a command
that never exits blocks the whole invocation.

Example:
    store = TaskStore([
        Task('lint', TaskKind.SHELL, body='ruff check .'),
        Task('build', TaskKind.SHELL, body='make',
             before=(HookGroup(('lint',)),)),
    ])
    engine = TaskEngine(store)
    asyncio.run(engine.run_file('build'))
"""

import asyncio
import logging
import time
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .bodies import RunContext, body_for
from .exceptions import TaskNotFoundError
from .hooks import HookResolver
from .listing import format_task_table
from .store import TaskStore
from .task import Task


logger = logging.getLogger(__name__)

BEFORE_ALL = 'beforeAll'
AFTER_ALL = 'afterAll'


class TaskEngine:
    """Run tasks from a TaskStore.

    Args:
        store: Loaded tasks
        bin_dir: Project-local executable directory, searched first
        cwd: Working directory for shell bodies
        source_path: Path of the task document (``__file__`` for scripts)
    """

    def __init__(
        self,
        store: TaskStore,
        bin_dir: Optional[Union[str, Path]] = None,
        cwd: Optional[Union[str, Path]] = None,
        source_path: Optional[Union[str, Path]] = None,
    ):
        self.store = store
        self.hooks = HookResolver(store)
        self.bin_dir = Path(bin_dir) if bin_dir is not None else None
        self.cwd = Path(cwd) if cwd is not None else None
        self.source_path = Path(source_path) if source_path is not None else None

    def make_context(self, args: Sequence[str] = ()) -> RunContext:
        """Create the context of one top-level invocation."""
        return RunContext(
            args=tuple(args),
            bin_dir=self.bin_dir,
            cwd=self.cwd,
            source_path=self.source_path,
        )

    # -- entry points used by the command line --------------------------

    async def run_tasks(self, names: Optional[Sequence[str]],
                        parallel: bool = False,
                        args: Sequence[str] = ()) -> None:
        """Run several tasks, sequentially or concurrently."""
        await self.run_many(names, parallel, self.make_context(args))

    async def run_file(self, name: str, args: Sequence[str] = ()) -> None:
        """Run `name` wrapped by the optional beforeAll/afterAll tasks.

        A failure stops the sequence, so afterAll does not run after a
        failed task.
        """
        context = self.make_context(args)
        await self.run_task(BEFORE_ALL, throw_if_missing=False, context=context)
        await self.run_task(name, context=context)
        await self.run_task(AFTER_ALL, throw_if_missing=False, context=context)

    def list_tasks(self, patterns: Sequence[str] = ()) -> List[Task]:
        """Print a table of tasks matching `patterns` (all if empty).

        Raises:
            TaskNotFoundError: If patterns were given but nothing matched
        """
        tasks = self.store.filter(patterns)
        print(f"\n{format_task_table(tasks)}\n")
        return tasks

    # -- scheduler -------------------------------------------------------

    async def run_many(self, names: Optional[Sequence[str]],
                       parallel: bool = False,
                       context: Optional[RunContext] = None) -> None:
        """Run each task in `names`.

        Sequential mode stops at the first failure. Parallel mode lets every
        task run to completion, then raises the failure of the first failed
        name (in the given order). Further failures are logged.
        """
        if not names:
            return
        if context is None:
            context = self.make_context()

        if not parallel:
            for name in names:
                await self.run_task(name, context=context)
            return

        results = await asyncio.gather(
            *(self.run_task(name, context=context) for name in names),
            return_exceptions=True,
        )
        failures = [
            (name, result) for name, result in zip(names, results)
            if isinstance(result, BaseException)
        ]
        if not failures:
            return
        for name, error in failures[1:]:
            logger.error("Task '%s' also failed: %s", name, error)
        raise failures[0][1]

    # -- executor --------------------------------------------------------

    async def run_task(self, name: str, throw_if_missing: bool = True,
                       context: Optional[RunContext] = None) -> None:
        """Run one task: before hooks, body, after hooks.

        Args:
            name: Task name
            throw_if_missing: If False a missing task is silently skipped
            context: Invocation context (a bare one is created if None)

        Raises:
            TaskNotFoundError: If the task is missing and throw_if_missing
            TaskError: If a hook or the body fails
        """
        task = self.store.lookup(name) if name else None
        if task is None:
            if throw_if_missing:
                raise TaskNotFoundError(name)
            return
        if context is None:
            context = self.make_context()

        await self._run_hooks(task, 'before', context)

        start = time.monotonic()
        logger.info("Starting '%s'...", task.name)
        await body_for(task).execute(task, context)
        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.info("Finished '%s' after %d ms...", task.name, elapsed_ms)

        await self._run_hooks(task, 'after', context)

    async def _run_hooks(self, task: Task, phase: str,
                         context: RunContext) -> None:
        for group in self.hooks.resolve(task, phase):
            await self.run_many(group.task_names, group.parallel, context)

    def __repr__(self):
        return f"TaskEngine({self.store!r})"

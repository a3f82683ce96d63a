"""YAML task runner: load errand.yaml and drive a TaskEngine.

This module provides the main entry point for running tasks from YAML files.
"""

import argparse
import asyncio
import logging
import sys
import traceback
from pathlib import Path
from typing import List, Optional, Union

from errand.engine import TaskEngine
from errand.exceptions import ConfigNotFoundError, ErrandError

from .converter import yaml_to_store
from .parser import parse_yaml_file


DEFAULT_FILES = ('errand.yaml', 'errand.yml')
DEFAULT_BIN_DIR = '.venv/bin'

LOG_FORMAT = '[%(asctime)s] %(message)s'
LOG_DATEFMT = '%H:%M:%S'


def find_task_file(directory: Union[str, Path, None] = None) -> Path:
    """Return the task document in `directory` (default: cwd).

    Raises:
        ConfigNotFoundError: If no document exists
    """
    directory = Path(directory) if directory is not None else Path.cwd()
    for name in DEFAULT_FILES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    raise ConfigNotFoundError(
        f"No {DEFAULT_FILES[0]} was found in {directory}. Stop."
    )


def load_engine(
    yaml_path: Union[str, Path, None] = None,
    base_path: Optional[Union[str, Path]] = None,
) -> TaskEngine:
    """Load a task document and build a TaskEngine for it.

    Args:
        yaml_path: Path to the YAML file (discovered in cwd if None)
        base_path: Override base path from config

    Returns:
        TaskEngine ready to run the document's tasks

    Example:
        engine = load_engine('errand.yaml')
        asyncio.run(engine.run_file('build'))
    """
    if yaml_path is None:
        yaml_path = find_task_file()
    yaml_path = Path(yaml_path)
    config = parse_yaml_file(yaml_path)

    # Determine base path, relative to the document
    if base_path is None:
        base_path = yaml_path.parent / config.config.get('base_path', '.')
    base_path = Path(base_path).resolve()

    bin_dir = base_path / config.config.get('bin_dir', DEFAULT_BIN_DIR)

    return TaskEngine(
        yaml_to_store(config),
        bin_dir=bin_dir,
        cwd=base_path,
        source_path=yaml_path.resolve(),
    )


def setup_logging(quiet: bool = False) -> None:
    """Send engine progress messages to stderr."""
    logging.basicConfig(
        level=logging.WARNING if quiet else logging.INFO,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )


def main(args: Optional[List[str]] = None) -> int:
    """CLI entry point for running YAML tasks.

    Usage:
        errand [options] TASK [ARGS...]
        errand [options] --run NAME [NAME ...] [--parallel]
        errand [options] --list [PATTERN ...]

    Options must precede TASK; anything after TASK is forwarded to it.

    Args:
        args: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = argparse.ArgumentParser(
        description='Run tasks from an errand.yaml file',
        epilog='Options must come before TASK: everything after TASK, '
               'including words starting with -, is passed to the task.',
        prog='errand',
    )
    parser.add_argument(
        'task',
        nargs='?',
        default=None,
        help='Task to run, wrapped by beforeAll/afterAll '
             '(or a pattern with --list)',
    )
    parser.add_argument(
        'args',
        nargs=argparse.REMAINDER,
        help='Arguments forwarded verbatim to shell tasks, options included '
             '(or more patterns with --list)',
    )
    parser.add_argument(
        '-f', '--file',
        type=str,
        default=None,
        help='Path to the YAML file (default: errand.yaml)',
    )
    parser.add_argument(
        '--base-path',
        type=str,
        default=None,
        help='Override working directory for shell tasks',
    )
    parser.add_argument(
        '--run',
        nargs='+',
        metavar='NAME',
        default=None,
        help='Run several tasks without beforeAll/afterAll',
    )
    parser.add_argument(
        '-p', '--parallel',
        action='store_true',
        help='With --run, run the tasks concurrently',
    )
    parser.add_argument(
        '-l', '--list',
        action='store_true',
        help='List tasks matching the given patterns',
    )
    parser.add_argument(
        '-q', '--quiet',
        action='store_true',
        help='Only log warnings and errors',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Print tracebacks on failure',
    )

    parsed = parser.parse_args(args)
    if parsed.run and parsed.task is not None:
        parser.error('TASK cannot be combined with --run')

    setup_logging(parsed.quiet)

    try:
        engine = load_engine(parsed.file, base_path=parsed.base_path)

        if parsed.run:
            asyncio.run(engine.run_tasks(parsed.run, parallel=parsed.parallel))
        elif parsed.list or parsed.task is None:
            patterns = [parsed.task, *parsed.args] if parsed.task else []
            engine.list_tasks(patterns)
        else:
            asyncio.run(engine.run_file(parsed.task, args=parsed.args))

        return 0

    except ErrandError as e:
        print(f"Error: {e}", file=sys.stderr)
        if parsed.verbose:
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())

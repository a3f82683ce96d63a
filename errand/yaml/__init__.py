"""YAML-based task definition for errand.

This module provides a declarative YAML format for defining tasks,
with shell command or inline Python bodies and pre/post hooks.

Example errand.yaml:
    config:
      bin_dir: .venv/bin

    tasks:
      - name: build
        description: Build the project
        run: make all
        before:
          - tasks: [lint, test]
            parallel: true
      - name: prebuild
        type: python
        run: |
          def default():
              print("preparing")

Usage:
    from errand.yaml import load_engine
    engine = load_engine('errand.yaml')
    asyncio.run(engine.run_file('build'))

CLI:
    python -m errand.yaml build
"""

from .parser import parse_yaml_file, parse_yaml_string, YAMLConfig
from .converter import yaml_to_task, yaml_to_tasks, yaml_to_store
from .runner import load_engine, find_task_file, main

__all__ = [
    'parse_yaml_file',
    'parse_yaml_string',
    'YAMLConfig',
    'yaml_to_task',
    'yaml_to_tasks',
    'yaml_to_store',
    'load_engine',
    'find_task_file',
    'main',
]

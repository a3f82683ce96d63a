"""Tests for YAML to Task converter."""

import pytest

from errand.exceptions import DuplicateTaskError
from errand.task import HookGroup, TaskKind
from errand.yaml.parser import parse_yaml_string
from errand.yaml.converter import yaml_to_store, yaml_to_task, yaml_to_tasks


class TestYAMLToTask:
    """Tests for yaml_to_task function."""

    def test_default_shell(self):
        """Test a task with run and no type is an sh command."""
        task = yaml_to_task({'name': 'build', 'run': 'make'})
        assert task.kind is TaskKind.SHELL
        assert task.interpreter == 'sh'
        assert task.body == 'make'

    def test_bash(self):
        task = yaml_to_task({'name': 'build', 'type': 'bash', 'run': 'make'})
        assert task.kind is TaskKind.SHELL
        assert task.interpreter == 'bash'

    @pytest.mark.parametrize('task_type', ['python', 'py'])
    def test_python(self, task_type):
        task = yaml_to_task(
            {'name': 'gen', 'type': task_type, 'run': 'x = 1'})
        assert task.kind is TaskKind.SCRIPT
        assert task.body == 'x = 1'

    def test_noop(self):
        """Test a task without run is a noop."""
        task = yaml_to_task({'name': 'all', 'description': 'Everything'})
        assert task.kind is TaskKind.NOOP
        assert task.body is None
        assert task.description == 'Everything'

    def test_hooks(self):
        """Test hook specifications become HookGroups."""
        task = yaml_to_task({
            'name': 'build',
            'before': [
                'lint',
                ['unit', 'integration'],
                {'tasks': ['docs', 'typecheck'], 'parallel': True},
            ],
            'after': [{'tasks': ['publish']}],
        })
        assert task.before == (
            HookGroup(('lint',)),
            HookGroup(('unit', 'integration')),
            HookGroup(('docs', 'typecheck'), parallel=True),
        )
        assert task.after == (HookGroup(('publish',)),)


class TestYAMLToTasks:
    """Tests for converting whole documents."""

    def test_document_order(self):
        config = parse_yaml_string("""
tasks:
  - name: test
    run: pytest
  - name: build
    run: make
  - name: all
""")
        tasks = yaml_to_tasks(config)
        assert [t.name for t in tasks] == ['test', 'build', 'all']

    def test_store(self):
        config = parse_yaml_string("""
tasks:
  - name: build
    run: make
""")
        store = yaml_to_store(config)
        assert store.lookup('build').body == 'make'

    def test_duplicate_names(self):
        """Test duplicate names are rejected at load time."""
        config = parse_yaml_string("""
tasks:
  - name: build
    run: make
  - name: build
    run: make again
""")
        with pytest.raises(DuplicateTaskError, match='build'):
            yaml_to_store(config)

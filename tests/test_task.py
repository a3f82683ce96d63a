"""Tests for Task and HookGroup records."""

import pytest

from errand.exceptions import InvalidTaskError
from errand.task import HookGroup, Task, TaskKind


class TestHookGroup:
    """Tests for HookGroup."""

    def test_names_stored_as_tuple(self):
        """Test that any sequence of names is stored as a tuple."""
        group = HookGroup(['a', 'b'])
        assert group.task_names == ('a', 'b')
        assert group.parallel is False

    def test_hashable(self):
        """Test groups can be used in sets."""
        assert len({HookGroup(['a']), HookGroup(('a',))}) == 1


class TestTaskValidation:
    """Tests for Task sanity checks."""

    def test_noop_defaults(self):
        """Test a bare task is a noop with no hooks."""
        task = Task('clean')
        assert task.kind is TaskKind.NOOP
        assert task.body is None
        assert task.before == ()
        assert task.after == ()

    def test_empty_name(self):
        """Test empty names are rejected."""
        with pytest.raises(InvalidTaskError, match="non-empty"):
            Task('')

    def test_shell_requires_body(self):
        """Test shell tasks need a command."""
        with pytest.raises(InvalidTaskError, match="require a body"):
            Task('build', TaskKind.SHELL)

    def test_script_requires_body(self):
        """Test script tasks need source."""
        with pytest.raises(InvalidTaskError, match="require a body"):
            Task('gen', TaskKind.SCRIPT)

    def test_noop_rejects_body(self):
        """Test noop tasks cannot carry a body."""
        with pytest.raises(InvalidTaskError, match="no body"):
            Task('group', TaskKind.NOOP, body='echo hi')

    def test_unknown_interpreter(self):
        """Test only sh and bash are accepted."""
        with pytest.raises(InvalidTaskError, match="interpreter"):
            Task('build', TaskKind.SHELL, body='make', interpreter='zsh')

    def test_hooks_must_be_groups(self):
        """Test raw lists are not accepted as hooks."""
        with pytest.raises(InvalidTaskError, match="HookGroup"):
            Task('build', before=[['lint']])

    def test_invalid_task_error_is_value_error(self):
        """Test InvalidTaskError can be caught as ValueError."""
        with pytest.raises(ValueError):
            Task('')


class TestTaskHooks:
    """Tests for Task.hooks()."""

    def test_phases(self):
        """Test before/after selection."""
        before = HookGroup(['lint'])
        after = HookGroup(['publish'])
        task = Task('build', before=[before], after=[after])

        assert task.hooks('before') == (before,)
        assert task.hooks('after') == (after,)

    def test_unknown_phase(self):
        """Test unknown phases raise ValueError."""
        with pytest.raises(ValueError):
            Task('build').hooks('during')

    def test_repr(self):
        assert repr(Task('build')) == "<Task: build>"

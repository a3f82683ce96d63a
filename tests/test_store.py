"""Tests for TaskStore."""

import pytest

from errand.exceptions import DuplicateTaskError, TaskNotFoundError
from errand.store import TaskStore
from errand.task import Task


def make_store(*names):
    return TaskStore([Task(name) for name in names])


class TestLookup:
    """Tests for exact name lookup."""

    def test_lookup_existing(self):
        """Test lookup returns the task with that name."""
        store = make_store('build', 'test')
        assert store.lookup('test').name == 'test'

    def test_lookup_missing(self):
        """Test lookup returns None for unknown names."""
        store = make_store('build')
        assert store.lookup('deploy') is None

    def test_find_all(self):
        """Test find_all returns exact matches only."""
        store = make_store('build', 'prebuild', 'build:docs')
        assert [t.name for t in store.find_all('prebuild')] == ['prebuild']
        assert store.find_all('pre') == []

    def test_duplicate_names_rejected(self):
        """Test two tasks with the same name fail at construction."""
        with pytest.raises(DuplicateTaskError) as exc_info:
            make_store('build', 'test', 'build')
        assert exc_info.value.name == 'build'

    def test_container_protocol(self):
        """Test len, iteration and membership."""
        store = make_store('a', 'b')
        assert len(store) == 2
        assert [t.name for t in store] == ['a', 'b']
        assert 'a' in store
        assert 'c' not in store
        assert store.names == ['a', 'b']


class TestFilter:
    """Tests for glob pattern filtering."""

    def test_empty_patterns_returns_all_in_order(self):
        """Test no patterns means every task, in load order."""
        store = make_store('test', 'build', 'lint')
        assert [t.name for t in store.filter([])] == ['test', 'build', 'lint']

    def test_glob_pattern(self):
        """Test a wildcard pattern."""
        store = make_store('build', 'build:docs', 'test')
        assert [t.name for t in store.filter(['build*'])] == [
            'build', 'build:docs']

    def test_any_pattern_matches(self):
        """Test a task matching any of several patterns is included once."""
        store = make_store('build', 'test', 'lint')
        result = store.filter(['t*', 'test', 'l?nt'])
        assert [t.name for t in result] == ['test', 'lint']

    def test_keeps_load_order(self):
        """Test results follow load order, not pattern order."""
        store = make_store('c', 'a', 'b')
        assert [t.name for t in store.filter(['b', 'a'])] == ['a', 'b']

    def test_no_match_fails(self):
        """Test non-empty patterns with no match raise."""
        store = make_store('test', 'lint')
        with pytest.raises(TaskNotFoundError, match='build\\*'):
            store.filter(['build*'])

    def test_case_sensitive(self):
        """Test matching is case sensitive."""
        store = make_store('Build')
        with pytest.raises(TaskNotFoundError):
            store.filter(['build'])

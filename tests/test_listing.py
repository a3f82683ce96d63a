"""Tests for task table formatting."""

from errand.listing import first_line, format_task_table
from errand.task import Task


class TestFirstLine:

    def test_none(self):
        assert first_line(None) == ''

    def test_only_blank_lines(self):
        assert first_line("\n   \n") == ''

    def test_skips_blank_lines(self):
        assert first_line("\n\n  Build it  \nmore") == 'Build it'


class TestFormatTaskTable:

    def test_empty(self):
        assert format_task_table([]) == ''

    def test_alignment(self):
        """Test descriptions line up after the widest name."""
        table = format_task_table([
            Task('a', description='first'),
            Task('longer', description='second'),
        ])
        assert table.splitlines() == [
            '  a       first',
            '  longer  second',
        ]

    def test_default_description(self):
        assert format_task_table([Task('a')]) == '  a  No description'

    def test_multiline_description(self):
        task = Task('a', description='Title\n\nDetails follow.')
        assert format_task_table([task]) == '  a  Title'

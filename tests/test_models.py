"""Tests for models module."""

from src.bounce.models import MOVE_MARKER, Op, RawEvent


class TestRawEvent:
    """Tests for RawEvent class."""

    def test_defaults(self):
        event = RawEvent(Op.WRITE, "/a/file")
        assert event.is_directory is False

    def test_moved_same_folder_is_rename(self):
        event = RawEvent.moved("/a/old", "/a/new")
        assert event.op == Op.RENAME
        assert event.path == f"/a/old {MOVE_MARKER}/a/new"

    def test_moved_other_folder_is_move(self):
        event = RawEvent.moved("/a/file", "/b/file", is_directory=True)
        assert event.op == Op.MOVE
        assert event.path == "/a/file -> /b/file"
        assert event.is_directory is True

"""Tests for extender module."""

import pytest

from src.bounce.exceptions import RegistrationError
from src.bounce.exclusions import FolderFilter
from src.bounce.extender import FolderFollower
from src.bounce.fs_watcher import RawWatcher
from src.bounce.models import Op


@pytest.fixture
def raw_watcher():
    watcher = RawWatcher(0.05)
    yield watcher
    watcher.close()


@pytest.fixture
def folder_filter():
    return FolderFilter.from_patterns(["exclude"])


class TestFolderFollower:
    """Tests for FolderFollower class."""

    def test_disabled_does_nothing(self, tmp_path, raw_watcher, folder_filter):
        new = tmp_path / "new"
        new.mkdir()
        follower = FolderFollower(raw_watcher, folder_filter, enabled=False)

        assert follower.follow(Op.CREATE, str(new), True) == []
        assert len(raw_watcher) == 0

    @pytest.mark.parametrize("op", [Op.CREATE, Op.MOVE, Op.RENAME])
    def test_follows_new_folder(self, tmp_path, raw_watcher, folder_filter, op):
        new = tmp_path / "new"
        new.mkdir()
        follower = FolderFollower(raw_watcher, folder_filter, enabled=True)

        assert follower.follow(op, str(new), True) == [str(new)]
        assert raw_watcher.is_watching(str(new))

    @pytest.mark.parametrize("op", [Op.WRITE, Op.REMOVE, Op.CHMOD])
    def test_ignores_other_ops(self, tmp_path, raw_watcher, folder_filter, op):
        follower = FolderFollower(raw_watcher, folder_filter, enabled=True)

        assert follower.follow(op, str(tmp_path), True) == []
        assert len(raw_watcher) == 0

    def test_ignores_files(self, tmp_path, raw_watcher, folder_filter):
        path = tmp_path / "file.txt"
        path.write_text("hello")
        follower = FolderFollower(raw_watcher, folder_filter, enabled=True)

        assert follower.follow(Op.CREATE, str(path), False) == []

    def test_ignores_excluded_folder(self, tmp_path, raw_watcher, folder_filter):
        excluded = tmp_path / "exclude"
        excluded.mkdir()
        follower = FolderFollower(raw_watcher, folder_filter, enabled=True)

        assert follower.follow(Op.CREATE, str(excluded), True) == []
        assert len(raw_watcher) == 0

    def test_ignores_hidden_folder(self, tmp_path, raw_watcher, folder_filter):
        hidden = tmp_path / ".hidden"
        hidden.mkdir()
        follower = FolderFollower(raw_watcher, folder_filter, enabled=True)

        assert follower.follow(Op.CREATE, str(hidden), True) == []

    def test_hidden_folder_followed_when_included(self, tmp_path, raw_watcher):
        hidden = tmp_path / ".hidden"
        hidden.mkdir()
        follower = FolderFollower(raw_watcher, FolderFilter(include_hidden=True), enabled=True)

        assert follower.follow(Op.CREATE, str(hidden), True) == [str(hidden)]

    def test_registers_subtree(self, tmp_path, raw_watcher, folder_filter):
        moved = tmp_path / "moved"
        (moved / "child").mkdir(parents=True)
        (moved / "exclude" / "inner").mkdir(parents=True)
        follower = FolderFollower(raw_watcher, folder_filter, enabled=True)

        added = follower.follow(Op.MOVE, str(moved), True)

        assert added == [str(moved), str(moved / "child")]

    def test_already_watched_not_reported(self, tmp_path, raw_watcher, folder_filter):
        new = tmp_path / "new"
        new.mkdir()
        raw_watcher.add(str(new))
        follower = FolderFollower(raw_watcher, folder_filter, enabled=True)

        assert follower.follow(Op.CREATE, str(new), True) == []

    def test_vanished_folder_raises(self, tmp_path, raw_watcher, folder_filter):
        follower = FolderFollower(raw_watcher, folder_filter, enabled=True)

        with pytest.raises(RegistrationError):
            follower.follow(Op.CREATE, str(tmp_path / "gone"), True)

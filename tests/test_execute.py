"""Tests for preview / execute modes and the full rename run (Step-3)."""

import os
import sys

import pytest

from core.step0_indexing import FileRecord, ScanError
from core.step1_naming import plan_renames
from core.step3_execute import RenameExecutor, run_rename
from utils import load_config


def _settings(dry_run=False):
    settings = load_config(dry_run=dry_run).to_dict()
    settings['show_progress'] = False
    return settings


class TestPreview:

    def test_scenario_preview_changes_nothing(self, tmp_path, make_files, listing, capsys):
        make_files("photos/vacation/IMG1.jpg", "IMG2.jpg", "photos/notes.txt")
        before = listing()

        log = run_rename(_settings(dry_run=True), root=tmp_path)

        assert listing() == before
        out = capsys.readouterr().out
        source = tmp_path / "photos" / "vacation" / "IMG1.jpg"
        target = tmp_path / "photos" / "vacation" / "photos_vacation_IMG1.jpg"
        assert f"{source} -> {target}" in out
        assert "IMG2.jpg" not in out
        assert "DRY RUN" in out
        assert len(log['previewed']) == 1
        assert len(log['skipped']) == 1
        assert log['renamed'] == []

    def test_preview_does_not_resolve_conflicts(self, tmp_path, make_files):
        make_files("a/x.jpg", "a/a_x.jpg")
        log = run_rename(_settings(dry_run=True), root=tmp_path)
        targets = {entry['to'] for entry in log['previewed']}
        assert str(tmp_path / "a" / "a_x.jpg") in targets
        assert log['conflicts'] == []


class TestExecute:

    def test_scenario_execute(self, tmp_path, make_files, listing, capsys):
        make_files("photos/vacation/IMG1.jpg", "IMG2.jpg")

        log = run_rename(_settings(), root=tmp_path)

        assert listing() == ["IMG2.jpg", "photos/vacation/photos_vacation_IMG1.jpg"]
        out = capsys.readouterr().out
        assert "Renamed: IMG1.jpg -> photos_vacation_IMG1.jpg" in out
        assert "IMG2.jpg" not in out
        assert len(log['renamed']) == 1
        assert log['errors'] == []

    def test_nested_chain(self, tmp_path, make_files, listing):
        make_files("a/b/c/pic.jpeg")
        run_rename(_settings(), root=tmp_path)
        assert listing() == ["a/b/c/a_b_c_pic.jpeg"]

    def test_case_insensitive_extensions_renamed(self, tmp_path, make_files, listing):
        make_files("x/IMG.JPEG", "y/img.jpeg")
        run_rename(_settings(), root=tmp_path)
        assert listing() == ["x/x_IMG.JPEG", "y/y_img.jpeg"]

    def test_conflict_gets_disambiguated(self, tmp_path, make_files, listing):
        make_files("photos/vacation/IMG1.jpg", "photos/vacation/photos_vacation_IMG1.jpg")

        log = run_rename(_settings(), root=tmp_path)

        files = listing()
        assert "photos/vacation/photos_vacation_IMG1 (1).jpg" in files
        assert {'original': "photos_vacation_IMG1.jpg",
                'resolved': "photos_vacation_IMG1 (1).jpg"} in log['conflicts']

    def test_second_run_prefixes_again(self, tmp_path, make_files, listing):
        # Known limitation: only identical names are skipped.
        make_files("a/pic.jpg")
        run_rename(_settings(), root=tmp_path)
        assert listing() == ["a/a_pic.jpg"]

        run_rename(_settings(), root=tmp_path)
        assert listing() == ["a/a_a_pic.jpg"]

    def test_no_files_found(self, tmp_path, make_files, capsys):
        make_files("a/readme.txt")
        log = run_rename(_settings(), root=tmp_path)
        assert "No matching image files found" in capsys.readouterr().out
        assert all(not entries for entries in log.values())

    def test_missing_root_aborts_before_renaming(self, tmp_path):
        with pytest.raises(ScanError):
            run_rename(_settings(), root=tmp_path / "missing")

    def test_uses_cwd_when_no_root(self, tmp_path, make_files, listing, monkeypatch):
        make_files("sub/p.jpg")
        monkeypatch.chdir(tmp_path)
        run_rename(_settings())
        assert listing() == ["sub/sub_p.jpg"]


class TestExecutorFailures:

    def test_failure_is_reported_and_batch_continues(self, tmp_path, make_files, listing, capsys):
        make_files("a/1.jpg", "b/2.jpg")
        records = [FileRecord.from_path(tmp_path / "a" / "gone.jpg"),
                   FileRecord.from_path(tmp_path / "a" / "1.jpg"),
                   FileRecord.from_path(tmp_path / "b" / "2.jpg")]
        plans = plan_renames(records, tmp_path)

        log = RenameExecutor(tmp_path, show_progress=False).execute(plans)

        assert len(log['errors']) == 1
        assert log['errors'][0]['from'] == str(tmp_path / "a" / "gone.jpg")
        assert len(log['renamed']) == 2
        assert listing() == ["a/a_1.jpg", "b/b_2.jpg"]
        assert "Error renaming" in capsys.readouterr().out

    @pytest.mark.skipif(sys.platform == "win32" or os.geteuid() == 0,
                        reason="needs POSIX permissions and a non-root user")
    def test_permission_denied_does_not_abort(self, tmp_path, make_files, listing):
        make_files("locked/a.jpg", "open/b.jpg")
        locked = tmp_path / "locked"
        locked.chmod(0o555)
        try:
            log = run_rename(_settings(), root=tmp_path)
        finally:
            locked.chmod(0o755)

        assert len(log['errors']) == 1
        assert "open/open_b.jpg" in listing()
        assert "locked/a.jpg" in listing()

"""
Shared pytest fixtures for the image path-prefix renamer tests.
"""

import pytest


@pytest.fixture
def make_files(tmp_path):
    """Create empty files under tmp_path from relative POSIX paths."""

    def _make(*relative_paths):
        created = []
        for rel in relative_paths:
            path = tmp_path.joinpath(*rel.split("/"))
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"\xff\xd8\xff")
            created.append(path)
        return created

    return _make


@pytest.fixture
def listing(tmp_path):
    """Return a sorted list of every file path under tmp_path, relative and POSIX style."""

    def _listing():
        return sorted(
            p.relative_to(tmp_path).as_posix() for p in tmp_path.rglob("*") if p.is_file()
        )

    return _listing

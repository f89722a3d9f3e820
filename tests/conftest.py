"""
Shared fixtures: a fake /proc tree built from tests/fixtures/proc
"""

import shutil
from pathlib import Path

import pytest

FIXTURE_PROC = Path(__file__).parent / "fixtures" / "proc"


def read_fixture(name: str) -> bytes:
    return (FIXTURE_PROC / name).read_bytes()


@pytest.fixture
def proc_root(tmp_path: Path) -> Path:
    """
    Copy of the fixture pseudo-files plus a few pid and non-pid entries
    """
    root = tmp_path / "proc"
    shutil.copytree(FIXTURE_PROC, root)
    for name in ("1", "42", "7", "self", "thread-self", "sys"):
        (root / name).mkdir()
    return root

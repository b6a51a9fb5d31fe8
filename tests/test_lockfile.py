from __future__ import annotations

from pathlib import Path

import pytest

from vendorprune.errors import LockfileError, PreconditionError
from vendorprune.lockfile import parse_lock, read_lock

LOCKDATA = """
hash: 4e9eb8fc04548f539b83a52ce8c2001573802b21c903fca974442e79b4690713
updated: 2016-03-04T15:02:44.735574617+01:00
imports:
- name: host01/org01/repo01
  version: 76626ae9c91c4f2a10f34cad8ce83ea42c93bb75
  subpackages:
  - subpkg01
devImports: []
"""


def test_parse_glide_lock() -> None:
    lock = parse_lock(LOCKDATA)

    assert lock.hash == "4e9eb8fc04548f539b83a52ce8c2001573802b21c903fca974442e79b4690713"
    assert lock.updated is not None
    assert len(lock.imports) == 1
    entry = lock.imports[0]
    assert entry.name == "host01/org01/repo01"
    assert entry.version == "76626ae9c91c4f2a10f34cad8ce83ea42c93bb75"
    assert entry.subpackages == ("subpkg01",)
    assert lock.test_imports == ()
    assert lock.packages() == {"host01/org01/repo01", "host01/org01/repo01/subpkg01"}


def test_test_imports_are_read() -> None:
    lock = parse_lock(
        "imports: []\n"
        "testImports:\n"
        "- name: github.com/stretchr/testify\n"
        "  subpackages:\n"
        "  - assert\n"
        "  - .\n"
    )
    assert lock.packages() == {
        "github.com/stretchr/testify",
        "github.com/stretchr/testify/assert",
    }


def test_missing_lock_file(tmp_path: Path) -> None:
    with pytest.raises(LockfileError, match="not found"):
        read_lock(tmp_path / "glide.lock")


def test_lockfile_error_is_precondition_error(tmp_path: Path) -> None:
    (tmp_path / "glide.lock").write_text("imports: [\n")
    with pytest.raises(PreconditionError, match="invalid YAML"):
        read_lock(tmp_path / "glide.lock")


@pytest.mark.parametrize(
    "text",
    [
        "- just\n- a list\n",
        "imports: nope\n",
        "imports:\n- version: abc\n",
        "imports:\n- name: a/b\n  subpackages: x\n",
    ],
)
def test_malformed_lock(text: str) -> None:
    with pytest.raises(LockfileError):
        parse_lock(text)


def test_empty_lock_has_no_imports(tmp_path: Path) -> None:
    (tmp_path / "glide.lock").write_text("")

    lock = read_lock(tmp_path / "glide.lock")

    assert lock.imports == ()
    assert lock.test_imports == ()
    assert lock.packages() == set()

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import PurePosixPath


class Decision(str, enum.Enum):
    KEEP = "keep"
    REMOVE = "remove"


@dataclass(frozen=True)
class ImportEntry:
    name: str
    version: str | None = None
    subpackages: tuple[str, ...] = ()

    def packages(self) -> set[str]:
        """Package directories declared by this entry, relative to the vendor root."""
        root = PurePosixPath(self.name)
        result = {root.as_posix()}
        for sub in self.subpackages:
            if sub in ("", "."):
                continue
            result.add((root / sub).as_posix())
        return result


@dataclass(frozen=True)
class Lock:
    hash: str | None = None
    updated: str | None = None
    imports: tuple[ImportEntry, ...] = ()
    test_imports: tuple[ImportEntry, ...] = ()

    def packages(self) -> set[str]:
        result: set[str] = set()
        for entry in self.imports + self.test_imports:
            result.update(entry.packages())
        return result


@dataclass(frozen=True)
class Options:
    only_go: bool = False
    no_tests: bool = False
    keep_legal_files: bool = False
    use_lock_file: bool = False
    keep_patterns: tuple[str, ...] = ()
    dry_run: bool = False


@dataclass(frozen=True)
class TreeEntry:
    rel_path: str  # POSIX, relative to the vendor root
    is_dir: bool
    subtree: bool = False  # nested vendor dir, removed with everything below it

    @property
    def depth(self) -> int:
        return len(PurePosixPath(self.rel_path).parts)


@dataclass(frozen=True)
class RemovalPlan:
    vendor_root: str
    entries: tuple[TreeEntry, ...] = ()

    @property
    def files(self) -> list[str]:
        return [e.rel_path for e in self.entries if not e.is_dir]

    @property
    def directories(self) -> list[str]:
        return [e.rel_path for e in self.entries if e.is_dir and not e.subtree]

    @property
    def subtrees(self) -> list[str]:
        return [e.rel_path for e in self.entries if e.subtree]

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class RemovalFailure:
    rel_path: str
    error: str


@dataclass(frozen=True)
class CleanupResult:
    vendor_root: str
    plan: RemovalPlan
    removed: list[str] = field(default_factory=list)
    failures: list[RemovalFailure] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return not self.failures

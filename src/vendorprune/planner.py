from __future__ import annotations

import logging
import os
from pathlib import Path, PurePosixPath

from vendorprune.classifier import Classifier
from vendorprune.errors import TraversalError
from vendorprune.models import Decision, Lock, Options, RemovalPlan, TreeEntry

VENDOR_DIR = "vendor"

logger = logging.getLogger(__name__)


def is_nested_vendor(rel_dir: str) -> bool:
    """True for a ``vendor`` directory that sits inside a vendored package."""
    parts = PurePosixPath(rel_dir).parts
    return len(parts) > 1 and parts[-1] == VENDOR_DIR


def build_plan(
    vendor_root: Path,
    options: Options,
    lock: Lock | None = None,
) -> RemovalPlan:
    """Walk ``vendor_root`` once and return everything that should be removed.

    The filesystem is not modified. Entries are ordered deepest first so a
    directory is only reached after everything planned below it.
    """
    vendor_root = Path(vendor_root)
    classifier = Classifier(options, lock)
    entries: list[TreeEntry] = []
    directories: list[str] = []
    survivors: set[str] = set()

    def _raise(exc: OSError) -> None:
        raise TraversalError(exc.filename or str(vendor_root), exc) from exc

    for dirpath, dirnames, filenames in os.walk(vendor_root, onerror=_raise):
        rel_dir = Path(dirpath).relative_to(vendor_root).as_posix()
        descend: list[str] = []
        for name in sorted(dirnames):
            rel_path = _join(rel_dir, name)
            if is_nested_vendor(rel_path):
                # a linked vendor dir is unlinked, not descended
                logger.debug("nested vendor tree %s", rel_path)
                entries.append(TreeEntry(rel_path, is_dir=True, subtree=True))
            elif os.path.islink(os.path.join(dirpath, name)):
                # never follow links; judge them like any other file
                filenames.append(name)
            else:
                directories.append(rel_path)
                descend.append(name)
        dirnames[:] = descend

        for name in sorted(filenames):
            rel_path = _join(rel_dir, name)
            decision = classifier.classify(rel_path, is_dir=False)
            if decision is Decision.REMOVE:
                logger.debug("remove %s", rel_path)
                entries.append(TreeEntry(rel_path, is_dir=False))
            else:
                survivors.update(ancestors(rel_path))

    for rel_dir in directories:
        if rel_dir not in survivors:
            logger.debug("remove empty dir %s", rel_dir)
            entries.append(TreeEntry(rel_dir, is_dir=True))

    entries.sort(key=lambda e: (-e.depth, e.rel_path))
    return RemovalPlan(vendor_root=str(vendor_root), entries=tuple(entries))


def _join(rel_dir: str, name: str) -> str:
    return name if rel_dir == "." else f"{rel_dir}/{name}"


def ancestors(rel_path: str) -> list[str]:
    return [p.as_posix() for p in PurePosixPath(rel_path).parents if p.as_posix() != "."]

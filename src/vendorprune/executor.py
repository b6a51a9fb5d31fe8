from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from vendorprune.models import CleanupResult, RemovalFailure, RemovalPlan, TreeEntry
from vendorprune.planner import ancestors

logger = logging.getLogger(__name__)


def execute_plan(plan: RemovalPlan) -> CleanupResult:
    """Remove every planned entry, continuing past individual failures.

    A directory holding an entry that failed to go away is left alone and
    reported in ``skipped`` rather than as another failure.
    """
    vendor_root = Path(plan.vendor_root)
    real_root = os.path.realpath(vendor_root)
    removed: list[str] = []
    failures: list[RemovalFailure] = []
    skipped: list[str] = []
    blocked: set[str] = set()

    for entry in plan.entries:
        if entry.rel_path in blocked:
            skipped.append(entry.rel_path)
            blocked.update(ancestors(entry.rel_path))
            continue
        target = vendor_root / entry.rel_path
        if not _is_inside(real_root, target):
            logger.warning("refusing to remove %s: outside %s", target, vendor_root)
            failures.append(RemovalFailure(entry.rel_path, "outside vendor root"))
            blocked.update(ancestors(entry.rel_path))
            continue
        try:
            _remove(target, entry)
        except OSError as exc:
            logger.warning("failed to remove %s: %s", entry.rel_path, exc)
            failures.append(RemovalFailure(entry.rel_path, exc.strerror or str(exc)))
            blocked.update(ancestors(entry.rel_path))
            continue
        logger.debug("removed %s", entry.rel_path)
        removed.append(entry.rel_path)

    return CleanupResult(
        vendor_root=str(vendor_root),
        plan=plan,
        removed=removed,
        failures=failures,
        skipped=skipped,
    )


def preview_plan(plan: RemovalPlan) -> CleanupResult:
    return CleanupResult(vendor_root=plan.vendor_root, plan=plan, dry_run=True)


def _remove(target: Path, entry: TreeEntry) -> None:
    if entry.subtree and not target.is_symlink():
        shutil.rmtree(target)
    elif entry.is_dir and not target.is_symlink():
        os.rmdir(target)
    else:
        os.unlink(target)


def _is_inside(real_root: str, target: Path) -> bool:
    # resolve the parent only, so a symlink entry is judged by where it lives
    parent = os.path.realpath(target.parent)
    candidate = os.path.normpath(os.path.join(parent, target.name))
    return candidate != real_root and os.path.commonpath([real_root, candidate]) == real_root

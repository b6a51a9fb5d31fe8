from __future__ import annotations

import logging
import os
from pathlib import Path

from vendorprune.errors import PreconditionError, RemovalError
from vendorprune.executor import execute_plan, preview_plan
from vendorprune.lockfile import DEFAULT_LOCKFILE, read_lock
from vendorprune.models import CleanupResult, Options
from vendorprune.planner import VENDOR_DIR, build_plan

logger = logging.getLogger(__name__)


def cleanup(
    root: str | os.PathLike[str],
    options: Options | None = None,
    lockfile: str = DEFAULT_LOCKFILE,
) -> CleanupResult:
    """Clean ``<root>/vendor`` according to ``options``.

    Nothing is touched unless the vendor directory exists and the lock file
    parses, and nothing is touched if the tree cannot be fully read. Removal
    failures do not stop the run; they are raised together as a RemovalError
    once every other entry has been attempted.
    """
    options = options or Options()
    root = Path(root).resolve()
    vendor_root = root / VENDOR_DIR
    if not vendor_root.is_dir():
        raise PreconditionError(f"vendor directory not found: {vendor_root}")
    if not os.access(vendor_root, os.R_OK | os.X_OK):
        raise PreconditionError(f"vendor directory is not readable: {vendor_root}")

    lock = read_lock(root / lockfile)
    plan = build_plan(vendor_root, options, lock)
    logger.info(
        "planned %d files, %d directories, %d nested vendor trees",
        len(plan.files),
        len(plan.directories),
        len(plan.subtrees),
    )
    if options.dry_run:
        return preview_plan(plan)

    result = execute_plan(plan)
    if result.failures:
        raise RemovalError(result)
    return result

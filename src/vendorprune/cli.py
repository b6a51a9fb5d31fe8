from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Iterable
from dataclasses import asdict
from pathlib import Path

from vendorprune import __version__
from vendorprune.core import cleanup
from vendorprune.errors import CleanupError, RemovalError
from vendorprune.lockfile import DEFAULT_LOCKFILE
from vendorprune.models import CleanupResult, Options


def main(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="vendorprune",
        description=(
            "Remove files a Go build does not need from a glide vendor tree. "
            "Nested vendor directories are always removed."
        ),
    )
    parser.add_argument("--path", default=".", help="Project directory holding vendor/")
    parser.add_argument(
        "--lockfile",
        default=DEFAULT_LOCKFILE,
        help="Lock file name, relative to --path (default: %(default)s)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print what would be removed without touching anything",
    )
    parser.add_argument("--only-go", action="store_true", help="Keep only .go files")
    parser.add_argument("--no-tests", action="store_true", help="Remove _test.go files")
    parser.add_argument(
        "--keep-legal-files",
        action="store_true",
        help="Keep LICENSE, COPYING, NOTICE and similar files with --only-go",
    )
    parser.add_argument(
        "--use-lock-file",
        action="store_true",
        help="Remove files outside the packages listed in the lock file",
    )
    parser.add_argument(
        "--keep",
        action="append",
        default=[],
        metavar="GLOB",
        help="Always keep files matching this glob (repeatable, relative to vendor/)",
    )
    parser.add_argument("--report", help="Write the cleanup result as JSON to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    root = Path(args.path).resolve()
    if not root.exists() or not root.is_dir():
        raise SystemExit(f"Path does not exist or is not a directory: {root}")

    options = Options(
        only_go=args.only_go,
        no_tests=args.no_tests,
        keep_legal_files=args.keep_legal_files,
        use_lock_file=args.use_lock_file,
        keep_patterns=tuple(args.keep),
        dry_run=args.dry_run,
    )
    if options.keep_legal_files and not options.only_go:
        print("Note: --keep-legal-files has no effect without --only-go.")

    try:
        result = cleanup(root, options, lockfile=args.lockfile)
    except RemovalError as exc:
        _finish(exc.result, args.report)
        print(f"Could not remove {len(exc.failures)} entries:")
        for failure in exc.failures:
            print(f"  {failure.rel_path}: {failure.error}")
        return 1
    except CleanupError as exc:
        raise SystemExit(str(exc)) from exc

    _finish(result, args.report)
    return 0


def _finish(result: CleanupResult, report: str | None) -> None:
    if report:
        write_report(Path(report), result)
    if result.dry_run:
        for entry in result.plan.entries:
            suffix = "/" if entry.is_dir else ""
            print(f"would remove {entry.rel_path}{suffix}")
        print(
            f"Dry-run complete. {len(result.plan)} entries would be removed "
            f"from {result.vendor_root}"
        )
    else:
        print(f"Removed {len(result.removed)} entries from {result.vendor_root}")


def write_report(path: Path, result: CleanupResult) -> None:
    path.write_text(json.dumps(asdict(result), indent=2, sort_keys=True))


if __name__ == "__main__":
    raise SystemExit(main())

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from vendorprune.errors import LockfileError
from vendorprune.models import ImportEntry, Lock

DEFAULT_LOCKFILE = "glide.lock"

logger = logging.getLogger(__name__)


def read_lock(path: Path) -> Lock:
    """Read and parse a glide lock file.

    Raises LockfileError when the file is missing, unreadable, not valid YAML
    or does not have the expected shape.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise LockfileError(f"lock file not found: {path}") from exc
    except OSError as exc:
        raise LockfileError(f"cannot read lock file {path}: {exc}") from exc
    lock = parse_lock(text, source=str(path))
    logger.debug(
        "read %s: %d imports, %d test imports",
        path,
        len(lock.imports),
        len(lock.test_imports),
    )
    return lock


def parse_lock(text: str, source: str = "<string>") -> Lock:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise LockfileError(f"invalid YAML in {source}: {exc}") from exc
    if data is None:
        # an empty lock declares no imports
        return Lock()
    if not isinstance(data, dict):
        raise LockfileError(f"{source}: expected a mapping at the top level")

    test_key = "testImports" if "testImports" in data else "devImports"
    return Lock(
        hash=_optional_str(data.get("hash")),
        updated=_optional_str(data.get("updated")),
        imports=_parse_imports(data.get("imports"), "imports", source),
        test_imports=_parse_imports(data.get(test_key), test_key, source),
    )


def _parse_imports(raw: Any, key: str, source: str) -> tuple[ImportEntry, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise LockfileError(f"{source}: '{key}' must be a list")
    entries: list[ImportEntry] = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict) or not isinstance(item.get("name"), str):
            raise LockfileError(f"{source}: {key}[{index}] has no package name")
        subpackages = item.get("subpackages") or []
        if not isinstance(subpackages, list) or not all(
            isinstance(sub, str) for sub in subpackages
        ):
            raise LockfileError(
                f"{source}: {key}[{index}] subpackages must be a list of strings"
            )
        entries.append(
            ImportEntry(
                name=item["name"].strip("/"),
                version=_optional_str(item.get("version")),
                subpackages=tuple(subpackages),
            )
        )
    return tuple(entries)


def _optional_str(value: Any) -> str | None:
    # YAML turns unquoted timestamps into datetime objects
    if value is None:
        return None
    return str(value)

"""Per-file keep/remove decisions.

A decision starts as KEEP and every matching rule overwrites it, so rules
later in the tuple take precedence over earlier ones. Directories are never
decided here: they go away when nothing survives below them.
"""

from __future__ import annotations

import fnmatch
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import PurePosixPath

from vendorprune.models import Decision, Lock, Options

SOURCE_SUFFIX = ".go"
TEST_SUFFIX = "_test.go"
LEGAL_MARKERS = (
    "LICENSE",
    "LICENCE",
    "COPYING",
    "COPYRIGHT",
    "PATENT",
    "NOTICE",
    "AUTHORS",
    "CONTRIBUTORS",
    "LEGAL",
    "THIRD-PARTY",
    "THIRD_PARTY",
    "THIRDPARTY",
)


@dataclass(frozen=True)
class Rule:
    name: str
    applies: Callable[[PurePosixPath], bool]
    decision: Decision


def is_source_file(name: str) -> bool:
    return name.endswith(SOURCE_SUFFIX)


def is_test_file(name: str) -> bool:
    return name.endswith(TEST_SUFFIX)


def is_legal_file(name: str) -> bool:
    upper = name.upper()
    return any(marker in upper for marker in LEGAL_MARKERS)


def _matches(path: PurePosixPath, patterns: Iterable[str]) -> bool:
    rel_path = path.as_posix()
    return any(
        fnmatch.fnmatch(rel_path, pattern) or fnmatch.fnmatch(path.name, pattern)
        for pattern in patterns
    )


def build_rules(options: Options, lock: Lock | None = None) -> tuple[Rule, ...]:
    rules: list[Rule] = []
    if options.only_go:
        rules.append(
            Rule("only_go", lambda p: not is_source_file(p.name), Decision.REMOVE)
        )
    if options.keep_legal_files:
        rules.append(
            Rule("keep_legal_files", lambda p: is_legal_file(p.name), Decision.KEEP)
        )
    if options.use_lock_file and lock is not None:
        packages = lock.packages()
        rules.append(
            Rule(
                "use_lock_file",
                lambda p: p.parent.as_posix() not in packages,
                Decision.REMOVE,
            )
        )
    if options.no_tests:
        rules.append(Rule("no_tests", lambda p: is_test_file(p.name), Decision.REMOVE))
    if options.keep_patterns:
        patterns = tuple(options.keep_patterns)
        rules.append(
            Rule("keep_patterns", lambda p: _matches(p, patterns), Decision.KEEP)
        )
    return tuple(rules)


class Classifier:
    def __init__(self, options: Options, lock: Lock | None = None) -> None:
        self.options = options
        self.rules = build_rules(options, lock)

    def classify(self, rel_path: str, is_dir: bool) -> Decision:
        if is_dir:
            return Decision.KEEP
        path = PurePosixPath(rel_path)
        decision = Decision.KEEP
        for rule in self.rules:
            if rule.applies(path):
                decision = rule.decision
        return decision


def classify(
    rel_path: str,
    is_dir: bool,
    options: Options,
    lock: Lock | None = None,
) -> Decision:
    return Classifier(options, lock).classify(rel_path, is_dir)

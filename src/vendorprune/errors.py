from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vendorprune.models import CleanupResult, RemovalFailure


class CleanupError(Exception):
    """Base class for every error raised by vendorprune."""


class PreconditionError(CleanupError):
    """Raised before any mutation when the project layout is unusable."""


class LockfileError(PreconditionError):
    pass


class TraversalError(CleanupError):
    """A directory listing failed while planning; nothing was removed."""

    def __init__(self, path: str, cause: OSError) -> None:
        super().__init__(f"failed to read {path}: {cause.strerror or cause}")
        self.path = path
        self.cause = cause


class RemovalError(CleanupError):
    """Some plan entries could not be removed. The rest of the plan was applied."""

    def __init__(self, result: CleanupResult) -> None:
        self.result = result
        self.failures: list[RemovalFailure] = list(result.failures)
        lines = [f"{len(self.failures)} of {len(result.plan)} entries could not be removed:"]
        lines.extend(f"  {f.rel_path}: {f.error}" for f in self.failures)
        super().__init__("\n".join(lines))

"""Outcomes of the quick launch stages."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, kw_only=True)
class TestRunOutcome:
    """Result of running a single test with debug logging.

    A successful run always carries the log reference, a failed one never
    does and may carry a message for the user.
    """

    __test__ = False

    succeeded: bool
    log_reference: str | None = None
    message: str | None = None

    def __post_init__(self) -> None:
        if self.succeeded and not self.log_reference:
            raise ValueError("A successful test run requires a log reference")
        if not self.succeeded and self.log_reference is not None:
            raise ValueError("A failed test run cannot carry a log reference")

    @classmethod
    def success(cls, log_reference: str) -> "TestRunOutcome":
        return cls(succeeded=True, log_reference=log_reference)

    @classmethod
    def failure(cls, message: str | None = None) -> "TestRunOutcome":
        return cls(succeeded=False, message=message)


@dataclass(frozen=True, kw_only=True)
class LogAcquisitionOutcome:
    """Result of downloading a debug log to the workspace."""

    succeeded: bool
    local_path: Path | None = None

    def __post_init__(self) -> None:
        if self.succeeded and self.local_path is None:
            raise ValueError("A successful log retrieval requires a local path")

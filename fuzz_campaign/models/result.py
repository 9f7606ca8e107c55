"""Models for fuzz target execution outcomes."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

OutcomeStatus = Literal["passed", "failed"]


@dataclass(frozen=True, kw_only=True)
class OutcomeRecord:
    """Result of running the fuzzing engine against a single target.

    The status is decided from the engine exit code alone, the log file is
    kept for humans.
    """

    target: str
    status: OutcomeStatus
    log_path: Path
    exit_code: int | None
    duration: float
    message: str | None = None

    @property
    def passed(self) -> bool:
        """Whether the target finished cleanly."""
        return self.status == "passed"


def classify_exit_code(exit_code: int | None) -> OutcomeStatus:
    """Map an engine exit code to an outcome status.

    Zero is a pass. Anything else, including negative codes for processes
    killed by a signal and None for processes that never started, is a failure.
    """
    return "passed" if exit_code == 0 else "failed"

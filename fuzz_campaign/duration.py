"""Resolve the per-target time budget from the command line argument."""

import logging
import re
from dataclasses import dataclass
from typing import Literal

log = logging.getLogger(__name__)

DEFAULT_DURATION = 3600
QUICK_DURATION = 60
QUICK_TOKEN = "quick"

_DIGITS = re.compile(r"[0-9]+")

DurationSource = Literal["default", "quick", "explicit"]


class InvalidDurationError(ValueError):
    """Raised when the duration argument cannot be used as a time budget."""


class InvalidDurationFormat(InvalidDurationError):
    """Raised when the duration argument is not a plain decimal number."""


class InvalidDurationValue(InvalidDurationError):
    """Raised when the duration argument is a number but not a usable one."""


@dataclass(frozen=True, kw_only=True)
class ResolvedDuration:
    """Validated time budget in seconds and where it came from."""

    seconds: int
    source: DurationSource

    def describe(self) -> str:
        """Return the operator notice for this duration."""
        if self.source == "quick":
            return f"Quick mode: Running each fuzzer for {self.seconds} seconds"
        if self.source == "default":
            return f"Running each fuzzer for 1 hour ({self.seconds}s)"
        return f"Running each fuzzer for {self.seconds} seconds"


def resolve_duration(token: str | None) -> ResolvedDuration:
    """Turn the optional duration argument into a positive number of seconds.

    Args:
        token: Raw argument, None or empty when omitted

    Returns:
        The resolved duration

    Raises:
        InvalidDurationFormat: If the token is not made only of decimal digits
        InvalidDurationValue: If the token parses to zero

    """
    if token == QUICK_TOKEN:
        resolved = ResolvedDuration(seconds=QUICK_DURATION, source="quick")
    elif not token:
        resolved = ResolvedDuration(seconds=DEFAULT_DURATION, source="default")
    else:
        resolved = ResolvedDuration(seconds=parse_seconds(token), source="explicit")

    log.info(resolved.describe())
    return resolved


def parse_seconds(token: str) -> int:
    """Parse an explicit duration token as a positive integer."""
    # ASCII digits only
    if not _DIGITS.fullmatch(token):
        raise InvalidDurationFormat(
            f"Duration must be a positive integer or '{QUICK_TOKEN}', got {token!r}"
        )

    seconds = int(token)
    if seconds == 0:
        raise InvalidDurationValue("Duration must be greater than 0")
    return seconds

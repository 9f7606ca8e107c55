"""Campaign summary and exit code selection."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from functools import reduce

from fuzz_campaign.config import CampaignConfig
from fuzz_campaign.engines.base import FuzzEngine
from fuzz_campaign.models.result import OutcomeRecord

SEPARATOR = "━" * 46

STATUS_SYMBOLS = {
    "passed": "✓",
    "failed": "✗",
}


class CampaignFailure(Exception):
    """Raised when at least one target of a finished campaign failed."""


@dataclass(frozen=True, kw_only=True)
class CampaignSummary:
    """Pass and fail counts plus failed outcomes, in roster order."""

    passed: int = 0
    failed: int = 0
    failures: Sequence[OutcomeRecord] = ()

    @property
    def total(self) -> int:
        return self.passed + self.failed

    def add(self, outcome: OutcomeRecord) -> "CampaignSummary":
        """Return a new summary that also accounts for the given outcome."""
        if outcome.passed:
            return replace(self, passed=self.passed + 1)
        return replace(
            self, failed=self.failed + 1, failures=(*self.failures, outcome)
        )


def summarize(outcomes: Iterable[OutcomeRecord]) -> CampaignSummary:
    """Fold outcomes into a campaign summary."""
    return reduce(CampaignSummary.add, outcomes, CampaignSummary())


def raise_for_failures(summary: CampaignSummary) -> None:
    """Raise CampaignFailure if any target failed."""
    if summary.failed:
        raise CampaignFailure


def exit_code_for(summary: CampaignSummary) -> int:
    """Process exit code for a finished campaign."""
    try:
        raise_for_failures(summary)
    except CampaignFailure:
        return 1
    return 0


def log_campaign_summary(
    log: logging.Logger,
    summary: CampaignSummary,
    engine: FuzzEngine,
    config: CampaignConfig,
    rerun_command: str = "fuzz-campaign",
) -> None:
    """Log the final summary with remediation hints or follow-up commands."""
    log.info(SEPARATOR)
    log.info("Fuzzing Complete")
    log.info(SEPARATOR)
    log.info("Passed: %d", summary.passed)
    log.info("Failed: %d", summary.failed)

    if summary.failures:
        log.error("Failed targets:")
        for outcome in summary.failures:
            log.error(
                "  %s %s (see %s)",
                STATUS_SYMBOLS[outcome.status],
                outcome.target,
                outcome.log_path,
            )
        log.info("To investigate:")
        hints = [
            *engine.investigation_hints(),
            f"Review log: cat {config.log_path('<target>')}",
        ]
        for number, hint in enumerate(hints, start=1):
            log.info("  %d. %s", number, hint)
        return

    log.info("%s All fuzzers passed!", STATUS_SYMBOLS["passed"])
    log.info("Next steps:")
    hints = [*engine.follow_up_hints(), f"Run for longer: {rerun_command} 7200"]
    for hint in hints:
        log.info("  - %s", hint)

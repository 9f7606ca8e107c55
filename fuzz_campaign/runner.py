"""Campaign runner executing every roster target in order."""

import asyncio
import logging
import sys
from collections.abc import AsyncIterator, Sequence
from dataclasses import dataclass, field
from typing import BinaryIO

from fuzz_campaign.config import CampaignConfig
from fuzz_campaign.engines.base import FuzzEngine
from fuzz_campaign.models.result import OutcomeRecord, classify_exit_code
from fuzz_campaign.models.roster import FuzzTarget, TargetRoster
from fuzz_campaign.process import ProcessRunner, TargetExecutionFailure, open_log_tee
from fuzz_campaign.reporter import SEPARATOR, STATUS_SYMBOLS

log = logging.getLogger(__name__)


def _stdout() -> BinaryIO:
    return sys.stdout.buffer


@dataclass(frozen=True, kw_only=True)
class CampaignRunner:
    """Runs the fuzzing engine against each target of a roster, one at a time."""

    config: CampaignConfig
    engine: FuzzEngine
    process_runner: ProcessRunner
    terminal: BinaryIO = field(default_factory=_stdout)

    async def run_campaign(
        self, roster: TargetRoster, duration: int
    ) -> Sequence[OutcomeRecord]:
        """Run all targets and return their outcomes in roster order.

        Args:
            roster: Targets to fuzz, in priority order
            duration: Time budget per target in seconds

        Returns:
            One outcome per roster target

        """
        return [outcome async for outcome in self.iter_outcomes(roster, duration)]

    async def iter_outcomes(
        self, roster: TargetRoster, duration: int
    ) -> AsyncIterator[OutcomeRecord]:
        """Yield each target's outcome as soon as its engine run finishes.

        A failing target never stops the campaign.
        """
        for target in roster.targets:
            yield await self.run_target(target, duration)

    async def run_target(self, target: FuzzTarget, duration: int) -> OutcomeRecord:
        """Fuzz a single target, streaming engine output to the terminal and its log."""
        log.info(SEPARATOR)
        log.info("Fuzzing: %s", target.name)
        log.info(SEPARATOR)

        log_path = self.config.log_path(target.name)
        command = self.engine.build_command(target.name, duration)
        loop = asyncio.get_running_loop()
        started = loop.time()

        exit_code: int | None = None
        message: str | None = None
        with open_log_tee(log_path, self.terminal) as output:
            try:
                exit_code = await self.process_runner.run(command, output)
            except TargetExecutionFailure as exc:
                message = str(exc)
                output.write(f"{message}\n".encode())
                output.flush()

        outcome = OutcomeRecord(
            target=target.name,
            status=classify_exit_code(exit_code),
            log_path=log_path,
            exit_code=exit_code,
            duration=loop.time() - started,
            message=message,
        )
        self._log_outcome(outcome)
        return outcome

    def _log_outcome(self, outcome: OutcomeRecord) -> None:
        if outcome.passed:
            log.info(
                "%s %s: PASSED (%.1fs)",
                STATUS_SYMBOLS["passed"],
                outcome.target,
                outcome.duration,
            )
        elif outcome.message is not None:
            log.error(
                "%s %s: FAILED (%s)",
                STATUS_SYMBOLS["failed"],
                outcome.target,
                outcome.message,
            )
        else:
            log.error(
                "%s %s: FAILED (exit code %s)",
                STATUS_SYMBOLS["failed"],
                outcome.target,
                outcome.exit_code,
            )

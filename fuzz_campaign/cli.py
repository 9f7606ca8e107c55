"""CLI entry point for the fuzzing campaign."""

import argparse
import asyncio
import logging
import sys

from fuzz_campaign.config import CampaignConfig
from fuzz_campaign.duration import (
    DEFAULT_DURATION,
    QUICK_DURATION,
    QUICK_TOKEN,
    InvalidDurationError,
    resolve_duration,
)
from fuzz_campaign.engines.base import EngineUnavailableError
from fuzz_campaign.engines.cargo_fuzz import CargoFuzzEngine
from fuzz_campaign.process import ProcessRunner, SubprocessRunner
from fuzz_campaign.reporter import exit_code_for, log_campaign_summary, summarize
from fuzz_campaign.runner import CampaignRunner

PROG = "fuzz-campaign"
USAGE = f"Usage: {PROG} [seconds|{QUICK_TOKEN}]"


async def run(
    duration_arg: str | None,
    config: CampaignConfig | None = None,
    process_runner: ProcessRunner | None = None,
) -> int:
    """Run the fuzzing campaign and return the exit code."""
    log = logging.getLogger("fuzz_campaign")
    config = config or CampaignConfig()

    try:
        duration = resolve_duration(duration_arg)
    except InvalidDurationError as exc:
        log.error("Error: %s", exc)
        log.error(USAGE)
        return 1

    engine = CargoFuzzEngine(config=config.engine)
    try:
        engine.ensure_available()
    except EngineUnavailableError as exc:
        log.error("Error: %s", exc)
        return 1

    log.info("=== %s ===", config.suite_name)
    log.info("Targets: %d", len(config.roster))
    log.info("Time per target: %ds", duration.seconds)

    runner = CampaignRunner(
        config=config,
        engine=engine,
        process_runner=process_runner or SubprocessRunner(cwd=config.workdir),
    )
    outcomes = await runner.run_campaign(config.roster, duration.seconds)

    summary = summarize(outcomes)
    log_campaign_summary(log, summary, engine, config, rerun_command=PROG)
    return exit_code_for(summary)


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Run every fuzz target in priority order with a fixed time budget",
    )
    parser.add_argument(
        "duration",
        nargs="?",
        help=(
            f"Seconds per target (default: {DEFAULT_DURATION}), "
            f"or '{QUICK_TOKEN}' for {QUICK_DURATION}s"
        ),
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    sys.exit(asyncio.run(run(args.duration)))


if __name__ == "__main__":  # pragma: no cover
    main()

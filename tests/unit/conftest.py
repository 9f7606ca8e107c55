"""Fixtures for unit tests."""

import io
import sys
from pathlib import Path

import pytest

from fuzz_campaign.config import CampaignConfig
from fuzz_campaign.engines.cargo_fuzz import CargoFuzzConfig, CargoFuzzEngine
from fuzz_campaign.models.roster import TargetRoster
from fuzz_campaign.runner import CampaignRunner
from fuzz_campaign.testing.process import ScriptedProcessRunner


@pytest.fixture
def roster() -> TargetRoster:
    """Three target roster."""
    return TargetRoster.from_names(["A", "B", "C"])


@pytest.fixture
def config(tmp_path: Path, roster: TargetRoster) -> CampaignConfig:
    """Campaign config logging into a temporary directory.

    The engine executable points at the running interpreter so it is always
    found on PATH.
    """
    return CampaignConfig(
        roster=roster,
        log_dir=tmp_path,
        engine=CargoFuzzConfig(cargo=sys.executable, cargo_fuzz=sys.executable),
    )


@pytest.fixture
def process_runner() -> ScriptedProcessRunner:
    """Process runner where every target passes unless scripted otherwise."""
    return ScriptedProcessRunner()


@pytest.fixture
def terminal() -> io.BytesIO:
    """Captured terminal output."""
    return io.BytesIO()


@pytest.fixture
def runner(
    config: CampaignConfig,
    process_runner: ScriptedProcessRunner,
    terminal: io.BytesIO,
) -> CampaignRunner:
    """Campaign runner backed by the scripted process runner."""
    return CampaignRunner(
        config=config,
        engine=CargoFuzzEngine(config=config.engine),
        process_runner=process_runner,
        terminal=terminal,
    )

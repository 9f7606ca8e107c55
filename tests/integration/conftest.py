"""Fixtures for integration tests."""

import sys
import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from fuzz_campaign.config import CampaignConfig
from fuzz_campaign.engines.cargo_fuzz import CargoFuzzConfig
from fuzz_campaign.models.roster import TargetRoster

# Stands in for `cargo fuzz`: the interpreter is used as the cargo executable,
# so `<python> fuzz run <target> -- -max_total_time=N` runs this script.
FAKE_ENGINE = textwrap.dedent(
    """
    import os
    import signal
    import subprocess
    import sys
    import time

    _, action, target, separator, budget = sys.argv
    print(f"{action} {target} {budget}", flush=True)
    print(f"stderr from {target}", file=sys.stderr, flush=True)

    if target.startswith("crash"):
        print("==1==ERROR: AddressSanitizer: heap-buffer-overflow", flush=True)
        sys.exit(1)
    if target.startswith("killed"):
        os.kill(os.getpid(), signal.SIGKILL)
    if target.startswith("slow"):
        # Like cargo, keep the actual fuzzer in a child process
        child = subprocess.Popen([sys.executable, "-c", "import time; time.sleep(30)"])
        with open(f"{target}.child.pid.tmp", "w") as pid_file:
            pid_file.write(str(child.pid))
        os.replace(f"{target}.child.pid.tmp", f"{target}.child.pid")
        time.sleep(30)
    print("Done 1000 runs", flush=True)
    """
)


@pytest.fixture
def engine_workdir(tmp_path: Path) -> Path:
    """Working directory containing the fake engine script."""
    workdir = tmp_path / "work"
    workdir.mkdir()
    (workdir / "fuzz").write_text(FAKE_ENGINE)
    return workdir


@pytest.fixture
def make_config(
    tmp_path: Path, engine_workdir: Path
) -> Callable[..., CampaignConfig]:
    """Return a function building a config for the given target names."""

    def _make(*names: str) -> CampaignConfig:
        return CampaignConfig(
            roster=TargetRoster.from_names(names),
            log_dir=tmp_path / "logs",
            workdir=engine_workdir,
            engine=CargoFuzzConfig(
                cargo=sys.executable, cargo_fuzz=sys.executable
            ),
        )

    return _make

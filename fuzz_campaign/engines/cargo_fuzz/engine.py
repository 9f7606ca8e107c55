"""cargo-fuzz (libFuzzer) engine implementation."""

from collections.abc import Sequence
from dataclasses import dataclass

from fuzz_campaign.engines.base import FuzzEngine
from fuzz_campaign.engines.cargo_fuzz.config import CargoFuzzConfig


@dataclass(frozen=True, kw_only=True)
class CargoFuzzEngine(FuzzEngine):
    """Runs targets with `cargo fuzz run`."""

    config: CargoFuzzConfig

    @property
    def executables(self) -> Sequence[str]:
        # `cargo fuzz` dispatches to the cargo-fuzz subcommand binary
        return (self.config.cargo, self.config.cargo_fuzz)

    def build_command(self, target: str, max_total_time: int) -> Sequence[str]:
        """Build `cargo fuzz run <target> -- -max_total_time=<seconds>`."""
        command = [self.config.cargo, "fuzz", "run", *self._options(), target]
        return [*command, "--", f"-max_total_time={max_total_time}"]

    def investigation_hints(self) -> Sequence[str]:
        artifacts = self.config.artifacts_dir
        return [
            f"Check artifacts: ls -la {artifacts}/<target>/",
            "Replay crash: "
            f"cargo fuzz run{self._option_text()} <target> {artifacts}/<target>/crash-*",
        ]

    def follow_up_hints(self) -> Sequence[str]:
        return [
            f"Minimize corpus: cargo fuzz cmin{self._option_text()} <target>",
            f"Check coverage: cargo fuzz coverage{self._option_text()} <target>",
        ]

    def _options(self) -> Sequence[str]:
        options: list[str] = []
        if self.config.fuzz_dir is not None:
            options += ["--fuzz-dir", str(self.config.fuzz_dir)]
        if self.config.sanitizer is not None:
            options += ["--sanitizer", self.config.sanitizer]
        return options

    def _option_text(self) -> str:
        return "".join(f" {option}" for option in self._options())

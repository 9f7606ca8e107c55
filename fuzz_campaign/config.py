"""Campaign configuration and the default target roster."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from fuzz_campaign.engines.cargo_fuzz.config import CargoFuzzConfig
from fuzz_campaign.models.roster import TargetRoster

DEFAULT_ROSTER = TargetRoster.from_names(
    [
        "mls_signature_fuzzer",
        "connection_state_fuzzer",
        "frame_boundary_fuzzer",
        "room_manager_fuzzer",
        "sequencer_state_fuzzer",
        "e2e_pipeline_fuzzer",
        "cbor_attack_fuzzer",
    ]
)


class CampaignConfig(BaseModel):
    """Configuration for a fuzzing campaign."""

    model_config = ConfigDict(frozen=True)

    suite_name: str = "Lockframe Fuzzing Suite"
    roster: TargetRoster = DEFAULT_ROSTER
    log_dir: Path = Path(".")
    log_prefix: str = "fuzz-"
    workdir: Path | None = Field(
        default=None, description="Working directory of the engine process"
    )
    engine: CargoFuzzConfig = Field(default_factory=CargoFuzzConfig)

    def log_path(self, target: str) -> Path:
        """Log file for a target, reused by every campaign run of that target."""
        return self.log_dir / f"{self.log_prefix}{target}.log"

"""Configuration for the cargo-fuzz engine."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict


class CargoFuzzConfig(BaseModel):
    """Configuration for the cargo-fuzz engine."""

    model_config = ConfigDict(frozen=True)

    cargo: str = "cargo"
    cargo_fuzz: str = "cargo-fuzz"
    fuzz_dir: Path | None = None
    sanitizer: Literal["address", "leak", "memory", "thread", "none"] | None = None
    artifacts_dir: Path = Path("fuzz/artifacts")

"""cargo-fuzz engine module."""

from fuzz_campaign.engines.cargo_fuzz.config import CargoFuzzConfig
from fuzz_campaign.engines.cargo_fuzz.engine import CargoFuzzEngine

__all__ = ["CargoFuzzConfig", "CargoFuzzEngine"]

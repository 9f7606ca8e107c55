"""Models for the ordered roster of fuzz targets."""

from collections.abc import Sequence

from pydantic import Field, field_validator

from fuzz_campaign.models.base import Model


class FuzzTarget(Model):
    """A single named fuzz target known to the fuzzing engine."""

    name: str = Field(
        ...,
        pattern=r"^[A-Za-z0-9_-]+$",
        description="Target identifier as understood by the engine",
    )


class TargetRoster(Model):
    """Ordered list of fuzz targets, earliest entries have highest priority."""

    targets: Sequence[FuzzTarget] = Field(
        ..., min_length=1, description="Targets in execution order"
    )

    @field_validator("targets")
    @classmethod
    def _unique_names(cls, targets: Sequence[FuzzTarget]) -> Sequence[FuzzTarget]:
        seen: set[str] = set()
        for target in targets:
            if target.name in seen:
                raise ValueError(f"Duplicate fuzz target: {target.name}")
            seen.add(target.name)
        return tuple(targets)

    @classmethod
    def from_names(cls, names: Sequence[str]) -> "TargetRoster":
        """Build a roster from plain target names, preserving their order."""
        return cls(targets=[FuzzTarget(name=name) for name in names])

    @property
    def names(self) -> Sequence[str]:
        """Target names in roster order."""
        return [target.name for target in self.targets]

    def __len__(self) -> int:
        return len(self.targets)

"""Abstract base class for fuzzing engines."""

import shutil
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path


class EngineUnavailableError(Exception):
    """Raised when the fuzzing engine executable cannot be found."""


@dataclass(frozen=True, kw_only=True)
class FuzzEngine(ABC):
    """Abstract base for external fuzzing engines.

    The engine is opaque to the campaign: it is given a target name and a
    time budget, and reports back through its exit code. Subclasses also
    supply the commands shown to the operator after the campaign.
    """

    @property
    @abstractmethod
    def executables(self) -> Sequence[str]:
        """Programs that must all be resolvable before the campaign starts."""

    @abstractmethod
    def build_command(self, target: str, max_total_time: int) -> Sequence[str]:
        """Build the command that fuzzes a single target.

        Args:
            target: Fuzz target identifier
            max_total_time: Time budget in seconds

        Returns:
            Program and arguments to execute

        """

    @abstractmethod
    def investigation_hints(self) -> Sequence[str]:
        """Commands that help investigate a failed target."""

    @abstractmethod
    def follow_up_hints(self) -> Sequence[str]:
        """Commands worth running after a clean campaign."""

    def ensure_available(self) -> Sequence[Path]:
        """Locate every executable the engine needs.

        Raises:
            EngineUnavailableError: If any executable is not on PATH

        """
        paths: list[Path] = []
        for executable in self.executables:
            if (path := shutil.which(executable)) is None:
                raise EngineUnavailableError(
                    f"Fuzzing engine executable '{executable}' not found on PATH"
                )
            paths.append(Path(path))
        return paths

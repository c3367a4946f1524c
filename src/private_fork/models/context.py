"""Execution context threaded through external command invocations."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional


@dataclass(frozen=True)
class ExecutionContext:
    """Working directory and environment for external commands.

    ``env`` of None means the child processes inherit the current
    environment, which is where the forge CLI finds its authentication.
    """

    cwd: Path = field(default_factory=Path.cwd)
    env: Optional[Dict[str, str]] = None

    def path(self, *parts: str) -> Path:
        """Resolve a path relative to the working directory."""
        return self.cwd.joinpath(*parts)

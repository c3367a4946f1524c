"""Git operations used to mirror a repository."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Sequence

from loguru import logger

from ..config.config import GitConfig
from ..models.context import ExecutionContext
from ..utils.process import run_command


class VersionControl(ABC):
    """Version-control capabilities needed by the fork orchestrator."""

    @abstractmethod
    def clone_bare(self, source_url: str, directory: Path) -> None:
        """Create a bare clone of ``source_url`` in ``directory``."""

    @abstractmethod
    def push_mirror(self, repository_dir: Path, remote_url: str) -> None:
        """Push every ref of ``repository_dir`` to ``remote_url``."""

    @abstractmethod
    def clone(self, url: str, extra_args: Sequence[str] = ()) -> None:
        """Clone ``url`` into the working directory."""

    @abstractmethod
    def list_remotes(self, repository_dir: Optional[Path] = None) -> List[str]:
        """Return the remote names of a repository."""

    @abstractmethod
    def rename_remote(
        self, old: str, new: str, repository_dir: Optional[Path] = None
    ) -> None:
        """Rename a remote."""

    @abstractmethod
    def add_remote(
        self, name: str, url: str, repository_dir: Optional[Path] = None
    ) -> None:
        """Add a remote."""


class GitOperations(VersionControl):
    """Version-control operations backed by the git command line."""

    def __init__(
        self,
        context: Optional[ExecutionContext] = None,
        config: Optional[GitConfig] = None,
    ):
        """Initialize git operations.

        Args:
            context: Working directory and environment for git
            config: Git configuration options
        """
        self.context = context or ExecutionContext()
        self.config = config or GitConfig()
        self.logger = logger.bind(component='GitOperations')

    def clone_bare(self, source_url: str, directory: Path) -> None:
        self.logger.info(f'Creating bare clone of {source_url} in {directory}')
        self._git(['clone', '--bare', source_url, str(directory)])

    def push_mirror(self, repository_dir: Path, remote_url: str) -> None:
        self.logger.info(f'Mirror-pushing {repository_dir} to {remote_url}')
        self._git(['-C', str(repository_dir), 'push', '--mirror', remote_url])

    def clone(self, url: str, extra_args: Sequence[str] = ()) -> None:
        self.logger.info(f'Cloning {url}')
        self._git(['clone', *extra_args, url])

    def list_remotes(self, repository_dir: Optional[Path] = None) -> List[str]:
        completed = self._git(
            self._in(repository_dir, ['remote']), capture=True
        )
        return [line.strip() for line in completed.stdout.splitlines() if line.strip()]

    def rename_remote(
        self, old: str, new: str, repository_dir: Optional[Path] = None
    ) -> None:
        self.logger.info(f'Renaming remote {old} to {new}')
        self._git(self._in(repository_dir, ['remote', 'rename', old, new]))

    def add_remote(
        self, name: str, url: str, repository_dir: Optional[Path] = None
    ) -> None:
        self.logger.info(f'Adding remote {name} -> {url}')
        self._git(self._in(repository_dir, ['remote', 'add', name, url]))

    @staticmethod
    def _in(repository_dir: Optional[Path], args: List[str]) -> List[str]:
        """Prefix ``-C <dir>`` when a repository directory is given."""
        if repository_dir is None:
            return args
        return ['-C', str(repository_dir), *args]

    def _git(self, args: List[str], capture: bool = False):
        return run_command(
            [self.config.executable, *args],
            cwd=self.context.cwd,
            env=self.context.env,
            capture=capture,
            timeout=self.config.timeout,
        )

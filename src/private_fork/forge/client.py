"""Forge operations backed by the gh command line."""

import os
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from loguru import logger

from ..config.config import ForgeConfig
from ..exceptions import ExternalCommandError
from ..models.context import ExecutionContext
from ..models.repository import RepositoryRef
from ..utils.process import run_command

DEFAULT_HOST = 'github.com'


class Forge(ABC):
    """Forge capabilities needed by the fork orchestrator."""

    @abstractmethod
    def current_repository_url(self) -> str:
        """Return the canonical URL of the repository in the working directory."""

    @abstractmethod
    def create_repository(
        self, repository: RepositoryRef, default_branch_only: bool = False
    ) -> None:
        """Create ``repository`` as a private repository."""

    @abstractmethod
    def current_user(self) -> str:
        """Return the login of the authenticated user."""

    @abstractmethod
    def configured_user(self) -> str:
        """Return the username stored in the local forge CLI configuration."""


class GitHubCLI(Forge):
    """Forge client that shells out to ``gh``.

    Authentication and session state stay with ``gh`` itself; this class
    only passes the execution context through.
    """

    def __init__(
        self,
        context: Optional[ExecutionContext] = None,
        config: Optional[ForgeConfig] = None,
    ):
        """Initialize the gh client.

        Args:
            context: Working directory and environment for gh
            config: Forge configuration options
        """
        self.context = context or ExecutionContext()
        self.config = config or ForgeConfig()
        self.host = self.config.host
        self.logger = logger.bind(component='GitHubCLI')

    def current_repository_url(self) -> str:
        return self._query(['repo', 'view', '--json', 'url', '--jq', '.url'])

    def create_repository(
        self, repository: RepositoryRef, default_branch_only: bool = False
    ) -> None:
        args = ['repo', 'create', repository.full_name, '--private']
        if default_branch_only:
            args.append('--default-branch-only')

        self.logger.info(f'Creating private repository {repository.full_name}')
        self._gh(args)

    def current_user(self) -> str:
        return self._query(['api', 'user', '--jq', '.login'])

    def configured_user(self) -> str:
        return self._query(['config', 'get', self.config.user_config_key])

    def _query(self, args: List[str]) -> str:
        """Run a gh command and return its trimmed output, which must be non-empty."""
        completed = self._gh(args, capture=True)
        output = completed.stdout.strip()
        if not output:
            raise ExternalCommandError(
                f'gh {" ".join(args)} returned no output',
                command=[self.config.executable, *args],
                returncode=completed.returncode,
            )
        return output

    def _gh(self, args: List[str], capture: bool = False):
        return run_command(
            [self.config.executable, *args],
            cwd=self.context.cwd,
            env=self._env(),
            capture=capture,
            timeout=self.config.timeout,
        )

    def _env(self) -> Optional[Dict[str, str]]:
        """Point gh at the configured host through GH_HOST."""
        if self.host == DEFAULT_HOST:
            return self.context.env

        env = dict(self.context.env if self.context.env is not None else os.environ)
        env['GH_HOST'] = self.host
        return env

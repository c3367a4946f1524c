"""Repository and fork option models."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

DEFAULT_REMOTE_NAME = 'origin'
PLACEHOLDER_OWNER = 'OWNER'


@dataclass(frozen=True)
class RepositoryRef:
    """A repository on the forge, identified by owner and name."""

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        """Return the ``owner/name`` form."""
        return f'{self.owner}/{self.name}'

    def ssh_url(self, host: str) -> str:
        """Return the SSH remote URL used for push and clone targets."""
        return f'git@{host}:{self.full_name}.git'

    def https_url(self, host: str) -> str:
        """Return the HTTPS remote URL used for remotes added to local repositories."""
        return f'https://{host}/{self.full_name}.git'

    def __str__(self) -> str:
        return self.full_name


@dataclass(frozen=True)
class Destination:
    """Resolved destination repository."""

    repository: RepositoryRef
    degraded: bool = False

    def __str__(self) -> str:
        return self.repository.full_name


@dataclass(frozen=True)
class ForkOptions:
    """Options for a single private fork run."""

    repository: Optional[str] = None
    git_args: Tuple[str, ...] = ()
    clone: bool = False
    remote: bool = False
    remote_name: str = DEFAULT_REMOTE_NAME
    organization: Optional[str] = None
    fork_name: Optional[str] = None
    default_branch_only: bool = False


@dataclass
class ForkResult:
    """Result of a private fork run."""

    source: RepositoryRef
    destination: Destination
    clone_path: Optional[Path] = None
    remote_added: bool = False
    renamed_remote: Optional[str] = None

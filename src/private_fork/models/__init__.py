"""Data models for private forks."""

from .context import ExecutionContext
from .repository import (
    DEFAULT_REMOTE_NAME,
    PLACEHOLDER_OWNER,
    Destination,
    ForkOptions,
    ForkResult,
    RepositoryRef,
)

__all__ = [
    'DEFAULT_REMOTE_NAME',
    'PLACEHOLDER_OWNER',
    'Destination',
    'ExecutionContext',
    'ForkOptions',
    'ForkResult',
    'RepositoryRef',
]

"""Git operations module for repository mirroring."""

from .operations import GitOperations, VersionControl

__all__ = ['GitOperations', 'VersionControl']

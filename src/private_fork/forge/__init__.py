"""Forge client module."""

from .client import DEFAULT_HOST, Forge, GitHubCLI

__all__ = ['DEFAULT_HOST', 'Forge', 'GitHubCLI']

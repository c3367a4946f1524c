"""Private fork orchestration."""

from .destination import resolve_destination
from .orchestrator import ForkOrchestrator, bare_clone, remove_directory
from .parser import parse_repository

__all__ = [
    'ForkOrchestrator',
    'bare_clone',
    'parse_repository',
    'remove_directory',
    'resolve_destination',
]

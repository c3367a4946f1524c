"""Shared fixtures."""

import io

import pytest
from rich.console import Console

from private_fork.config.config import Config
from private_fork.fork.orchestrator import ForkOrchestrator
from private_fork.models.context import ExecutionContext

from fakes import FakeForge, FakeGit


@pytest.fixture
def output():
    """Console capturing progress output."""
    buffer = io.StringIO()
    return Console(file=buffer, width=200, color_system=None), buffer


@pytest.fixture
def make_orchestrator(tmp_path, output):
    """Build an orchestrator around fakes rooted at ``tmp_path``."""
    console, _ = output

    def factory(git=None, forge=None, config=None):
        git = git or FakeGit(tmp_path)
        forge = forge or FakeForge()
        orchestrator = ForkOrchestrator(
            git=git,
            forge=forge,
            context=ExecutionContext(cwd=tmp_path),
            config=config or Config(),
            console=console,
            error_console=console,
        )
        return orchestrator, git, forge

    return factory

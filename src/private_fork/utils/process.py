"""Synchronous external process execution."""

import subprocess
from pathlib import Path
from typing import Dict, Optional, Sequence, Union

from loguru import logger

from ..exceptions import ExternalCommandError


def run_command(
    cmd: Sequence[str],
    cwd: Optional[Union[str, Path]] = None,
    env: Optional[Dict[str, str]] = None,
    capture: bool = False,
    timeout: Optional[float] = None,
) -> subprocess.CompletedProcess:
    """Run a command and wait for it to finish.

    Pass-through commands inherit stdout/stderr so their output is live.
    Captured commands return their output as text.

    Args:
        cmd: Command and arguments
        cwd: Working directory for the process
        env: Environment for the process (inherited when None)
        capture: Capture stdout/stderr instead of passing them through
        timeout: Optional timeout in seconds

    Returns:
        Completed process

    Raises:
        ExternalCommandError: If the command cannot start, times out or
            exits non-zero
    """
    cmd = list(cmd)
    command_line = ' '.join(cmd)
    logger.debug(f'Executing command: {command_line} (cwd={cwd or "."})')

    try:
        completed = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd is not None else None,
            env=env,
            check=False,
            text=True,
            capture_output=capture,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise ExternalCommandError(
            f'{cmd[0]} timed out after {timeout} seconds', command=cmd
        ) from e
    except OSError as e:
        raise ExternalCommandError(f'failed to execute {cmd[0]}: {e}', command=cmd) from e

    if completed.returncode != 0:
        stderr = (completed.stderr or '').strip() if capture else None
        if stderr:
            logger.debug(f'{cmd[0]} stderr: {stderr}')
        message = f'{command_line} exited with status {completed.returncode}'
        if stderr:
            message = f'{message}: {stderr}'
        raise ExternalCommandError(
            message, command=cmd, returncode=completed.returncode, stderr=stderr
        )

    return completed

"""Private fork exceptions."""

from typing import Optional, Sequence


class PrivateForkError(Exception):
    """Base exception for private fork errors."""

    pass


class RepositoryParseError(PrivateForkError):
    """Malformed repository reference."""

    pass


class ExternalCommandError(PrivateForkError):
    """An external command could not start or exited non-zero."""

    def __init__(
        self,
        message: str,
        command: Optional[Sequence[str]] = None,
        returncode: Optional[int] = None,
        stderr: Optional[str] = None,
    ):
        """Initialize external command error.

        Args:
            message: Error message
            command: Command line that was executed
            returncode: Exit status of the process, if it ran
            stderr: Captured error output, if any
        """
        super().__init__(message)
        self.command = list(command) if command else []
        self.returncode = returncode
        self.stderr = stderr

    def with_context(self, description: str) -> 'ExternalCommandError':
        """Return a copy of this error prefixed with a step description."""
        return ExternalCommandError(
            f'{description}: {self}',
            command=self.command,
            returncode=self.returncode,
            stderr=self.stderr,
        )


class BareCloneExistsError(PrivateForkError):
    """The bare clone directory already exists."""

    pass


class DegradedResolutionWarning(UserWarning):
    """Destination owner could not be determined; a placeholder was used."""

    pass

"""Private fork orchestrator."""

import shutil
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from loguru import logger
from rich.console import Console
from rich.markup import escape

from ..config.config import Config
from ..exceptions import BareCloneExistsError, ExternalCommandError
from ..forge.client import Forge
from ..git.operations import VersionControl
from ..models.context import ExecutionContext
from ..models.repository import Destination, ForkOptions, ForkResult, RepositoryRef
from .destination import resolve_destination
from .parser import parse_repository


@contextmanager
def bare_clone(
    git: VersionControl,
    source_url: str,
    directory: Path,
    console: Optional[Console] = None,
) -> Iterator[Path]:
    """Create a bare clone and remove it again when the block exits.

    Removal runs on every exit path, including a failed clone that left a
    partial directory behind. A directory that already exists is refused
    and left untouched.

    Raises:
        BareCloneExistsError: If ``directory`` already exists
        ExternalCommandError: If the clone fails
    """
    if directory.exists():
        raise BareCloneExistsError(
            f'bare clone directory {directory} already exists; remove it or run elsewhere'
        )

    try:
        try:
            git.clone_bare(source_url, directory)
        except ExternalCommandError as e:
            raise e.with_context('failed to create bare clone') from e
        yield directory
    finally:
        remove_directory(directory, console)


def remove_directory(directory: Path, console: Optional[Console] = None) -> bool:
    """Remove a directory tree, downgrading failures to a warning.

    Returns:
        True if the directory is gone afterwards
    """
    if not directory.exists():
        return True

    try:
        shutil.rmtree(directory)
        logger.debug(f'Cleaned up temporary directory: {directory}')
        return True
    except OSError as e:
        logger.warning(f'Failed to clean up temporary directory {directory}: {e}')
        if console is not None:
            console.print(
                f'[yellow]Warning: Failed to clean up temporary directory '
                f'{escape(str(directory))}: {escape(str(e))}[/yellow]'
            )
        return False


class ForkOrchestrator:
    """Creates a private mirror of a repository.

    Steps run strictly in order and any failure aborts the ones after it.
    The bare clone is removed whatever happens.
    """

    def __init__(
        self,
        git: VersionControl,
        forge: Forge,
        context: Optional[ExecutionContext] = None,
        config: Optional[Config] = None,
        console: Optional[Console] = None,
        error_console: Optional[Console] = None,
    ):
        """Initialize the orchestrator.

        Args:
            git: Version-control operations
            forge: Forge operations
            context: Working directory and environment
            config: Tool configuration
            console: Console for progress output
            error_console: Console for warnings
        """
        self.git = git
        self.forge = forge
        self.context = context or ExecutionContext()
        self.config = config or Config()
        self.console = console or Console()
        self.error_console = error_console or Console(stderr=True)
        self.logger = logger.bind(component='ForkOrchestrator')

    @property
    def host(self) -> str:
        return self.config.forge.host

    def run(self, options: ForkOptions) -> ForkResult:
        """Run the full fork sequence.

        Args:
            options: Fork options

        Returns:
            Fork result

        Raises:
            PrivateForkError: On any fatal failure
        """
        reference = self._source_reference(options)
        source = parse_repository(reference)
        self.logger.info(f'Forking {source.full_name}')

        bare_dir = self.context.path(f'{source.name}.git')
        self.console.print(f'Creating bare clone of {reference}...')

        with bare_clone(
            self.git, self._clone_url(reference, source), bare_dir, self.error_console
        ):
            destination = resolve_destination(
                source, self.forge, options.organization, options.fork_name
            )
            if destination.degraded:
                self.error_console.print(
                    f'[yellow]Warning: could not determine the destination owner, '
                    f'using {destination}[/yellow]'
                )
            result = ForkResult(source=source, destination=destination)

            self._create(destination, options)
            self._push(bare_dir, destination)

            if options.clone:
                result.clone_path = self._clone(source, destination, options)

            if options.remote:
                result.renamed_remote = self._configure_remote(
                    destination, options.remote_name
                )
                result.remote_added = True

        self.console.print(f'[green]✓[/green] Created private fork {destination}')
        return result

    def _source_reference(self, options: ForkOptions) -> str:
        if options.repository:
            return options.repository

        try:
            return self.forge.current_repository_url()
        except ExternalCommandError as e:
            raise e.with_context('unable to determine current repository') from e

    def _clone_url(self, reference: str, source: RepositoryRef) -> str:
        """Shorthand references are cloned over HTTPS; URLs are used as given."""
        if reference.startswith(('http://', 'https://', 'git@')):
            return reference
        return source.https_url(self.host)

    def _create(self, destination: Destination, options: ForkOptions) -> None:
        self.console.print(f'Creating private repository {destination}...')
        try:
            self.forge.create_repository(
                destination.repository, default_branch_only=options.default_branch_only
            )
        except ExternalCommandError as e:
            raise e.with_context('failed to create private repository') from e

    def _push(self, bare_dir: Path, destination: Destination) -> None:
        self.console.print('Pushing to private repository...')
        try:
            self.git.push_mirror(bare_dir, destination.repository.ssh_url(self.host))
        except ExternalCommandError as e:
            raise e.with_context('failed to push to private repository') from e

    def _clone(
        self, source: RepositoryRef, destination: Destination, options: ForkOptions
    ) -> Path:
        self.console.print(f'Cloning fork {destination}...')
        try:
            self.git.clone(
                destination.repository.ssh_url(self.host), options.git_args
            )
        except ExternalCommandError as e:
            raise e.with_context('failed to clone') from e

        clone_path = self.context.path(destination.repository.name)
        try:
            self.git.add_remote(
                self.config.git.upstream_remote,
                source.https_url(self.host),
                repository_dir=clone_path,
            )
        except ExternalCommandError as e:
            raise e.with_context('failed to add upstream remote') from e

        return clone_path

    def _configure_remote(
        self, destination: Destination, remote_name: str
    ) -> Optional[str]:
        """Point ``remote_name`` in the working directory at the fork.

        Returns:
            The new name of a remote that was renamed out of the way, if any
        """
        upstream = self.config.git.upstream_remote
        renamed = None

        try:
            remotes = self.git.list_remotes()
        except ExternalCommandError as e:
            raise e.with_context('failed to list remotes') from e

        if remote_name in remotes:
            try:
                self.git.rename_remote(remote_name, upstream)
            except ExternalCommandError as e:
                raise e.with_context('failed to rename remote') from e
            renamed = upstream

        try:
            self.git.add_remote(remote_name, destination.repository.https_url(self.host))
        except ExternalCommandError as e:
            raise e.with_context('failed to add remote') from e

        return renamed

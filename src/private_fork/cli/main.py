"""Main CLI entry point for private-fork."""

import sys
import warnings
from typing import Optional

import click
from rich.console import Console

from .. import __version__
from ..config.config import Config
from ..exceptions import DegradedResolutionWarning, PrivateForkError
from ..forge.client import GitHubCLI
from ..fork.orchestrator import ForkOrchestrator
from ..git.operations import GitOperations
from ..models.context import ExecutionContext
from ..models.repository import DEFAULT_REMOTE_NAME, ForkOptions
from ..utils.logging import setup_logging

console = Console()
error_console = Console(stderr=True)

GIT_FLAGS_KEY = 'private_fork.git_flags'


class ForkCommand(click.Command):
    """Command that keeps everything after ``--`` aside as git clone flags."""

    def parse_args(self, ctx: click.Context, args):
        if '--' in args:
            index = args.index('--')
            ctx.meta[GIT_FLAGS_KEY] = tuple(args[index + 1 :])
            args = args[:index]
        else:
            ctx.meta[GIT_FLAGS_KEY] = ()
        return super().parse_args(ctx, args)


@click.command(
    cls=ForkCommand,
    options_metavar='[OPTIONS]',
    context_settings={'help_option_names': ['-h', '--help']},
)
@click.version_option(version=__version__, prog_name='private-fork')
@click.argument('repository', required=False)
@click.option('--clone', is_flag=True, help='Clone the fork')
@click.option('--remote', is_flag=True, help='Add a git remote for the fork')
@click.option(
    '--remote-name',
    default=DEFAULT_REMOTE_NAME,
    show_default=True,
    help='Specify the name for the new remote',
)
@click.option('--org', 'organization', help='Create the fork in an organization')
@click.option('--fork-name', help='Rename the forked repository')
@click.option(
    '--default-branch-only',
    is_flag=True,
    help='Only include the default branch in the fork',
)
@click.option(
    '--config',
    '-c',
    'config_path',
    type=click.Path(exists=True, dir_okay=False),
    help='Path to configuration file',
)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(
    ctx: click.Context,
    repository: Optional[str],
    clone: bool,
    remote: bool,
    remote_name: str,
    organization: Optional[str],
    fork_name: Optional[str],
    default_branch_only: bool,
    config_path: Optional[str],
    verbose: bool,
) -> None:
    """Create a private fork of a repository.

    \b
    private-fork [<repository>] [-- <gitflags>...]

    With no argument, creates a private fork of the current repository.
    Otherwise, forks the specified repository.

    With --remote, the new fork is set as your `origin` remote and any
    existing origin remote is renamed to `upstream`. To alter this behavior,
    you can set a name for the new fork's remote with --remote-name.

    Additional `git clone` flags can be passed after `--`.
    """
    git_flags = ctx.meta.get(GIT_FLAGS_KEY, ())
    if git_flags and not repository:
        # `private-fork -- OWNER/REPO` names the repository after the separator
        if len(git_flags) > 1 or git_flags[0].startswith('-'):
            raise click.UsageError(
                'repository argument required when passing git clone flags', ctx=ctx
            )
        repository, git_flags = git_flags[0], ()

    context = ExecutionContext()

    try:
        config = Config.load(config_path, cwd=context.cwd)
    except (OSError, ValueError) as e:
        error_console.print(f'Error: failed to load configuration: {e}', markup=False)
        sys.exit(1)

    log_level = 'DEBUG' if verbose else config.logging.level
    setup_logging(
        level=log_level, log_file=config.logging.file, log_format=config.logging.format
    )

    options = ForkOptions(
        repository=repository,
        git_args=tuple(git_flags),
        clone=clone,
        remote=remote,
        remote_name=remote_name,
        organization=organization,
        fork_name=fork_name,
        default_branch_only=default_branch_only,
    )

    orchestrator = ForkOrchestrator(
        git=GitOperations(context, config.git),
        forge=GitHubCLI(context, config.forge),
        context=context,
        config=config,
        console=console,
        error_console=error_console,
    )

    try:
        with warnings.catch_warnings():
            # The orchestrator reports a placeholder owner on the console itself
            warnings.simplefilter('ignore', DegradedResolutionWarning)
            orchestrator.run(options)
    except PrivateForkError as e:
        error_console.print(f'Error: {e}', markup=False)
        if verbose:
            error_console.print_exception()
        sys.exit(1)


def main() -> None:
    """Main entry point for the CLI application."""
    try:
        cli()
    except KeyboardInterrupt:
        error_console.print('\n[red]Interrupted by user[/red]')
        sys.exit(1)


if __name__ == '__main__':
    main()

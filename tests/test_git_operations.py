"""Tests for git command construction."""

import os
import shutil
import subprocess
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from private_fork.config.config import GitConfig
from private_fork.exceptions import ExternalCommandError
from private_fork.git.operations import GitOperations
from private_fork.models.context import ExecutionContext


class TestGitOperations:
    """Test GitOperations."""

    def setup_method(self):
        """Set up test fixtures."""
        self.context = ExecutionContext(cwd=Path('/work'), env={'HOME': '/home/me'})
        self.git = GitOperations(self.context, GitConfig())

    @patch('private_fork.git.operations.run_command')
    def test_clone_bare(self, mock_run):
        """Test bare clone into an explicit directory."""
        self.git.clone_bare('https://github.com/acme/widgets.git', Path('/work/widgets.git'))

        mock_run.assert_called_once_with(
            [
                'git',
                'clone',
                '--bare',
                'https://github.com/acme/widgets.git',
                '/work/widgets.git',
            ],
            cwd=Path('/work'),
            env={'HOME': '/home/me'},
            capture=False,
            timeout=None,
        )

    @patch('private_fork.git.operations.run_command')
    def test_push_mirror(self, mock_run):
        """Test mirror push runs inside the bare clone."""
        self.git.push_mirror(Path('/work/widgets.git'), 'git@github.com:me/widgets.git')

        assert mock_run.call_args.args[0] == [
            'git',
            '-C',
            '/work/widgets.git',
            'push',
            '--mirror',
            'git@github.com:me/widgets.git',
        ]

    @patch('private_fork.git.operations.run_command')
    def test_clone_with_flags(self, mock_run):
        """Test pass-through flags precede the URL."""
        self.git.clone('git@github.com:me/widgets.git', ('--depth', '1'))

        assert mock_run.call_args.args[0] == [
            'git',
            'clone',
            '--depth',
            '1',
            'git@github.com:me/widgets.git',
        ]

    @patch('private_fork.git.operations.run_command')
    def test_list_remotes(self, mock_run):
        """Test remote listing parses one name per line."""
        mock_run.return_value = Mock(stdout='origin\nupstream\n\n')

        assert self.git.list_remotes() == ['origin', 'upstream']
        assert mock_run.call_args.args[0] == ['git', 'remote']
        assert mock_run.call_args.kwargs['capture'] is True

    @patch('private_fork.git.operations.run_command')
    def test_list_remotes_empty(self, mock_run):
        """Test a repository without remotes."""
        mock_run.return_value = Mock(stdout='')

        assert self.git.list_remotes() == []

    @patch('private_fork.git.operations.run_command')
    def test_rename_and_add_remote(self, mock_run):
        """Test remote edits in the working directory and in a clone."""
        self.git.rename_remote('origin', 'upstream')
        self.git.add_remote(
            'upstream', 'https://github.com/acme/widgets.git', Path('/work/widgets')
        )

        assert mock_run.call_args_list[0].args[0] == [
            'git',
            'remote',
            'rename',
            'origin',
            'upstream',
        ]
        assert mock_run.call_args_list[1].args[0] == [
            'git',
            '-C',
            '/work/widgets',
            'remote',
            'add',
            'upstream',
            'https://github.com/acme/widgets.git',
        ]

    @patch('private_fork.git.operations.run_command')
    def test_custom_executable_and_timeout(self, mock_run):
        """Test configuration reaches the command line."""
        git = GitOperations(self.context, GitConfig(executable='/opt/git', timeout=30))

        git.clone('url')

        assert mock_run.call_args.args[0][0] == '/opt/git'
        assert mock_run.call_args.kwargs['timeout'] == 30

    @patch('private_fork.git.operations.run_command')
    def test_errors_propagate(self, mock_run):
        """Test command errors are not swallowed."""
        mock_run.side_effect = ExternalCommandError('git remote exited with status 1')

        with pytest.raises(ExternalCommandError):
            self.git.list_remotes()


@pytest.mark.skipif(shutil.which('git') is None, reason='git is not installed')
class TestGitOperationsWithGit:
    """Run the git steps of a private fork against local repositories."""

    @pytest.fixture
    def env(self):
        env = dict(os.environ)
        env.update(
            GIT_AUTHOR_NAME='Private Fork',
            GIT_AUTHOR_EMAIL='fork@example.com',
            GIT_COMMITTER_NAME='Private Fork',
            GIT_COMMITTER_EMAIL='fork@example.com',
        )
        return env

    @pytest.fixture
    def source(self, tmp_path, env):
        """A non-bare repository with two branches and a tag."""
        source = tmp_path / 'source'
        source.mkdir()

        def git(*args):
            subprocess.run(['git', *args], cwd=source, env=env, check=True, capture_output=True)

        git('init', '--initial-branch=main')
        (source / 'README.md').write_text('widgets\n')
        git('add', 'README.md')
        git('-c', 'commit.gpgsign=false', 'commit', '-m', 'Initial commit')
        git('tag', 'v1')
        git('branch', 'feature')
        return source

    def _refs(self, repository: Path, env) -> set:
        completed = subprocess.run(
            ['git', '-C', str(repository), 'for-each-ref', '--format=%(refname)'],
            env=env,
            check=True,
            capture_output=True,
            text=True,
        )
        return set(completed.stdout.split())

    def test_mirror_clone_and_remotes(self, tmp_path, env, source):
        """Test bare clone, mirror push, clone and remote edits end to end."""
        git = GitOperations(ExecutionContext(cwd=tmp_path, env=env), GitConfig())
        bare = tmp_path / 'widgets.git'
        destination = tmp_path / 'fork.git'
        subprocess.run(
            ['git', 'init', '--bare', str(destination)],
            env=env,
            check=True,
            capture_output=True,
        )

        git.clone_bare(str(source), bare)
        git.push_mirror(bare, str(destination))

        assert {'refs/heads/main', 'refs/heads/feature', 'refs/tags/v1'} <= self._refs(
            destination, env
        )

        git.clone(str(destination), ('--branch', 'feature'))
        clone = tmp_path / 'fork'
        assert (clone / 'README.md').read_text() == 'widgets\n'
        assert git.list_remotes(clone) == ['origin']

        git.rename_remote('origin', 'mine', repository_dir=clone)
        git.add_remote('upstream', str(source), repository_dir=clone)

        assert sorted(git.list_remotes(clone)) == ['mine', 'upstream']

    def test_clone_bare_into_existing_directory_fails(self, tmp_path, env, source):
        """Test git refuses a non-empty target directory."""
        git = GitOperations(ExecutionContext(cwd=tmp_path, env=env), GitConfig())
        bare = tmp_path / 'widgets.git'
        bare.mkdir()
        (bare / 'leftover').write_text('x')

        with pytest.raises(ExternalCommandError) as excinfo:
            git.clone_bare(str(source), bare)

        assert excinfo.value.returncode != 0

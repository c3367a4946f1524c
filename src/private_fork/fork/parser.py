"""Repository reference parsing."""

from urllib.parse import urlparse

from ..exceptions import RepositoryParseError
from ..models.repository import RepositoryRef


def parse_repository(reference: str) -> RepositoryRef:
    """Parse a repository reference into owner and name.

    Accepted forms:

    - ``https://host/owner/name`` (a trailing ``.git`` is kept in the name)
    - ``git@host:owner/name.git`` (a trailing ``.git`` is stripped)
    - ``owner/name``

    Raises:
        RepositoryParseError: If the reference is malformed
    """
    reference = reference.strip()

    if reference.startswith(('http://', 'https://')):
        return _parse_http(reference)

    if reference.startswith('git@'):
        return _parse_ssh(reference)

    parts = reference.split('/')
    if len(parts) != 2 or not all(parts):
        raise RepositoryParseError('invalid repository format. Use OWNER/REPO')
    return RepositoryRef(owner=parts[0], name=parts[1])


def _parse_http(reference: str) -> RepositoryRef:
    try:
        parsed = urlparse(reference)
    except ValueError as e:
        raise RepositoryParseError(f'invalid URL: {e}') from e

    parts = parsed.path.strip('/').split('/')
    if len(parts) < 2 or not parts[0] or not parts[1]:
        raise RepositoryParseError('invalid repository URL')
    return RepositoryRef(owner=parts[0], name=parts[1])


def _parse_ssh(reference: str) -> RepositoryRef:
    _, sep, path = reference.partition(':')
    parts = path.split('/')
    if not sep or len(parts) < 2:
        raise RepositoryParseError('invalid repository SSH URL')

    owner = parts[0]
    name = parts[1][: -len('.git')] if parts[1].endswith('.git') else parts[1]
    if not owner or not name:
        raise RepositoryParseError('invalid repository SSH URL')
    return RepositoryRef(owner=owner, name=name)

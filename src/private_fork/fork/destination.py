"""Destination repository resolution."""

import warnings
from typing import Optional

from loguru import logger

from ..exceptions import DegradedResolutionWarning, ExternalCommandError
from ..forge.client import Forge
from ..models.repository import PLACEHOLDER_OWNER, Destination, RepositoryRef


def resolve_destination(
    source: RepositoryRef,
    forge: Forge,
    organization: Optional[str] = None,
    fork_name: Optional[str] = None,
) -> Destination:
    """Compute the destination repository for a private fork.

    The name is ``fork_name`` or the source name. The owner is
    ``organization`` when given; otherwise the authenticated forge user,
    then the locally configured forge username, then the ``OWNER``
    placeholder. The placeholder result is flagged as degraded and
    reported with a :class:`DegradedResolutionWarning`.

    Args:
        source: Parsed source repository
        forge: Forge used to look up the current user
        organization: Organization override
        fork_name: Repository name override

    Returns:
        Resolved destination
    """
    name = fork_name or source.name

    if organization:
        return Destination(RepositoryRef(owner=organization, name=name))

    try:
        owner = forge.current_user()
    except ExternalCommandError as e:
        logger.debug(f'Authenticated user lookup failed: {e}')
        try:
            owner = forge.configured_user()
        except ExternalCommandError as fallback_error:
            message = (
                f'could not determine the destination owner ({fallback_error}); '
                f'using placeholder {PLACEHOLDER_OWNER}'
            )
            logger.debug(message)
            warnings.warn(message, DegradedResolutionWarning, stacklevel=2)
            return Destination(
                RepositoryRef(owner=PLACEHOLDER_OWNER, name=name), degraded=True
            )

    return Destination(RepositoryRef(owner=owner, name=name))

"""private-fork

Create a private mirror of a public forge repository: bare clone, create a
private repository, mirror-push, and optionally clone it or wire up remotes.
"""

__version__ = '0.1.0'

from .cli.main import main

__all__ = ['main', '__version__']

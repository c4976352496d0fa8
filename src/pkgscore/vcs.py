"""Local checkouts of remote repositories."""

import logging
from pathlib import Path

from git import Repo
from git.exc import GitError

logger = logging.getLogger(__name__)


def clone_repo(url: str, local_path: str | Path, depth: int = 1) -> bool:
    """Shallow-clone *url* into *local_path*.

    Failures are logged and leave *local_path* as it was, so callers can
    still measure whatever is there.

    Returns:
        True if the clone succeeded.
    """
    try:
        Repo.clone_from(url, str(local_path), depth=depth)
    except GitError as e:
        logger.warning(f"Error cloning {url}: {e}")
        return False
    return True

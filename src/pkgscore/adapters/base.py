"""Repository URL parsing shared by the adapters and analyzers."""

import re

from pkgscore.models.schemas import Platform, RepoRef

# owner/repo followed by an optional .git suffix and an optional trailing
# path, query or fragment (e.g. /tree/main/sub, #readme)
_OWNER_REPO = r"([^/\s]+)/([^/\s#?]+?)(?:\.git)?(?:[/#?].*)?$"

_PATTERNS: list[tuple[Platform, str]] = [
    # https://github.com/owner/repo
    # git+https://github.com/owner/repo.git
    # git://github.com/owner/repo.git
    # ssh://git@github.com/owner/repo.git
    (Platform.GITHUB, r"(?:git\+)?(?:(?:https?|git|ssh)://)?(?:git@)?(?:www\.)?github\.com/" + _OWNER_REPO),
    # git@github.com:owner/repo.git
    (Platform.GITHUB, r"git@github\.com:" + _OWNER_REPO),
    (Platform.GITLAB, r"(?:git\+)?(?:(?:https?|git|ssh)://)?(?:git@)?(?:www\.)?gitlab\.com/" + _OWNER_REPO),
    (Platform.GITLAB, r"git@gitlab\.com:" + _OWNER_REPO),
    (Platform.BITBUCKET, r"(?:git\+)?(?:https?://)?(?:www\.)?bitbucket\.org/" + _OWNER_REPO),
    (Platform.BITBUCKET, r"git@bitbucket\.org:" + _OWNER_REPO),
]


def parse_repo_url(url: str) -> RepoRef | None:
    """Parse a repository URL into a RepoRef.

    Supports GitHub, GitLab, and Bitbucket URLs, including the ``git+`` and
    ``git://`` forms npm packages declare.

    Args:
        url: Repository URL to parse.

    Returns:
        RepoRef if the URL can be parsed, None otherwise.
    """
    if not url:
        return None

    url = url.strip()
    for platform, pattern in _PATTERNS:
        match = re.match(pattern, url, re.IGNORECASE)
        if match:
            return RepoRef(platform=platform, owner=match.group(1), repo=match.group(2))

    return None


def github_repo_from_url(url: str) -> RepoRef:
    """Get the GitHub repository a URL points at.

    Raises:
        ValueError: If the URL is not a GitHub repository URL.
    """
    repo_ref = parse_repo_url(url)
    if repo_ref is None or repo_ref.platform != Platform.GITHUB:
        raise ValueError(f"Not a GitHub repository URL: {url}")
    return repo_ref

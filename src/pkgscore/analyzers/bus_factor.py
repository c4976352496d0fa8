"""Bus factor metric based on the size of a repository's contributor list."""

import logging

from pkgscore.adapters.base import github_repo_from_url
from pkgscore.analyzers.github import GitHubFetcher
from pkgscore.errors import PkgScoreError

logger = logging.getLogger(__name__)

FAILURE_SCORE = -1.0

# (inclusive upper bound on contributor count, score)
BUS_FACTOR_STEPS: list[tuple[int, float]] = [
    (4, 0.3),
    (8, 0.4),
    (16, 0.5),
    (32, 0.6),
    (64, 0.7),
    (128, 0.8),
    (256, 0.9),
]


def score_contributor_count(count: int) -> float:
    """Map a contributor count onto the 0.1-1.0 bus factor scale.

    Each doubling of contributors adds 0.1. A count of 0 has no step of its
    own and falls into the ``<= 4`` band, scoring 0.3.
    """
    if count == 1:
        return 0.1
    if count == 2:
        return 0.2
    for upper, score in BUS_FACTOR_STEPS:
        if count <= upper:
            return score
    return 1.0


def get_bus_factor(url: str, fetcher: GitHubFetcher | None = None) -> float:
    """Compute the bus factor score for a GitHub repository URL.

    Returns:
        A score in 0.1-1.0, or -1 if the contributors could not be fetched.
    """
    fetcher = fetcher or GitHubFetcher()
    try:
        repo_ref = github_repo_from_url(url)
        total = fetcher.count_contributors(repo_ref)
    except (PkgScoreError, ValueError) as e:
        logger.error(f"Error fetching contributors for GitHub repo {url}: {e}")
        return FAILURE_SCORE

    return score_contributor_count(total)

"""Package registry adapters."""

from pkgscore.adapters.base import github_repo_from_url, parse_repo_url
from pkgscore.adapters.npm import NpmAdapter, is_npm_package_url, package_name_from_url

__all__ = [
    "NpmAdapter",
    "github_repo_from_url",
    "is_npm_package_url",
    "package_name_from_url",
    "parse_repo_url",
]

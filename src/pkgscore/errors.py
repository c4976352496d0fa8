"""Exceptions raised while fetching data for package metrics.

Fetchers and adapters raise these; the public metric functions catch them
and turn them into sentinel scores.
"""


class PkgScoreError(Exception):
    """Base class for all pkgscore errors."""


class NetworkError(PkgScoreError):
    """Raised when a remote request fails."""

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        super().__init__(message)


class NotFoundError(PkgScoreError):
    """Raised when a remote resource does not exist (HTTP 404)."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Resource not found: {url}")


class ParseError(PkgScoreError):
    """Raised when a payload cannot be decoded or parsed."""


class MissingCredentialError(PkgScoreError):
    """Raised when an operation requires a GitHub token and none is set."""

    def __init__(self) -> None:
        super().__init__("GitHub token not set")


class MissingRepositoryError(PkgScoreError):
    """Raised when an npm package does not declare a GitHub repository."""

    def __init__(self, package: str) -> None:
        self.package = package
        super().__init__("No GitHub repository found for npm package")


class NoLicenseFoundError(PkgScoreError):
    """Raised when every license source has been exhausted."""

    def __init__(self) -> None:
        super().__init__("No license information found")

"""NPM package registry adapter."""

import logging
import re

import httpx

from pkgscore.adapters.base import parse_repo_url
from pkgscore.config import Settings
from pkgscore.errors import MissingRepositoryError, NetworkError, NotFoundError, ParseError
from pkgscore.models.schemas import Platform, RepoRef

logger = logging.getLogger(__name__)

NPM_PACKAGE_URL = re.compile(r"^https?://(?:www\.)?npmjs\.com/package/(?P<name>(?:@[^/\s]+/)?[^/\s?#]+)")


def is_npm_package_url(url: str) -> bool:
    """Return True if *url* is an npm package page URL."""
    return NPM_PACKAGE_URL.match(url.strip()) is not None


def package_name_from_url(url: str) -> str:
    """Extract the package name from an npm package page URL.

    Handles scoped packages (``https://www.npmjs.com/package/@org/pkg``).

    Raises:
        ValueError: If the URL is not an npm package URL.
    """
    match = NPM_PACKAGE_URL.match(url.strip())
    if not match:
        raise ValueError(f"Not an npm package URL: {url}")
    return match.group("name")


class NpmAdapter:
    """Adapter for the NPM package registry.

    Data sources:
    - Package metadata: https://registry.npmjs.org/{package}
    """

    def __init__(self, settings: Settings | None = None, client: httpx.Client | None = None) -> None:
        """Initialize the adapter.

        Args:
            settings: Runtime settings; defaults to the environment.
            client: Optional httpx client for making requests.
        """
        self._settings = settings or Settings.from_env()
        self._client = client

    def _get_client(self) -> httpx.Client:
        """Get or create an HTTP client."""
        if self._client is not None:
            return self._client
        return httpx.Client(timeout=self._settings.timeout)

    def _fetch_json(self, url: str) -> dict:
        """Fetch JSON from a URL.

        Raises:
            NotFoundError: On HTTP 404.
            NetworkError: On any other transport or status error.
            ParseError: If the body is not a JSON object.
        """
        client = self._get_client()
        try:
            response = client.get(url)
            if response.status_code == 404:
                raise NotFoundError(url)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise NetworkError(url, str(e)) from e
        except ValueError as e:
            raise ParseError(f"Invalid JSON from {url}: {e}") from e
        finally:
            if self._client is None:
                client.close()

        if not isinstance(data, dict):
            raise ParseError(f"Unexpected payload from {url}")
        return data

    def get_package_metadata(self, name: str) -> dict:
        """Fetch raw registry metadata for an NPM package.

        Args:
            name: Package name (supports scoped packages like @org/pkg).
        """
        # URL-encode scoped package names
        encoded_name = name.replace("/", "%2F")
        url = f"{self._settings.npm_registry_url.rstrip('/')}/{encoded_name}"
        return self._fetch_json(url)

    def get_repository_url(self, name: str) -> str | None:
        """Get the repository URL a package declares, if any."""
        data = self.get_package_metadata(name)
        return self._extract_repo_url(data.get("repository"))

    def get_source_repo(self, name: str) -> RepoRef:
        """Resolve a package to the GitHub repository it declares.

        Raises:
            MissingRepositoryError: If no GitHub repository is declared.
        """
        url = self.get_repository_url(name)
        repo_ref = parse_repo_url(url) if url else None
        if repo_ref is None or repo_ref.platform != Platform.GITHUB:
            logger.info(f"npm package {name} declares no GitHub repository ({url!r})")
            raise MissingRepositoryError(name)
        return repo_ref

    def _extract_repo_url(self, repository: dict | str | None) -> str | None:
        """Extract repository URL from npm repository field.

        Handles various formats:
        - {"type": "git", "url": "git+https://github.com/owner/repo.git"}
        - "github:owner/repo"
        - "owner/repo"
        - "https://github.com/owner/repo"
        """
        if not repository:
            return None

        if isinstance(repository, str):
            url = repository
        elif isinstance(repository, dict):
            url = repository.get("url") or ""
        else:
            return None

        url = url.strip()
        if not url:
            return None

        # GitHub shorthand
        if url.startswith("github:"):
            url = f"https://github.com/{url[len('github:'):]}"
        elif re.fullmatch(r"[\w.-]+/[\w.-]+", url):
            url = f"https://github.com/{url}"

        return url

"""GitHub data fetcher for repository metrics."""

import base64
import binascii
import logging
from collections.abc import Iterator

import httpx

from pkgscore.config import Settings
from pkgscore.errors import NetworkError, NotFoundError, ParseError
from pkgscore.models.schemas import RepoRef

logger = logging.getLogger(__name__)

PER_PAGE = 100


class GitHubFetcher:
    """Fetches repository data from the GitHub REST API.

    A token is sent when configured. The contributor listing works without
    one; the contents and README endpoints used for license checks are
    expected to be called with one.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            settings: Runtime settings; defaults to the environment.
            client: Optional httpx client. If not provided, a new client is created per request.
        """
        self._settings = settings or Settings.from_env()
        self._client = client

    @property
    def has_token(self) -> bool:
        return bool(self._settings.github_token)

    def _headers(self) -> dict[str, str]:
        """Get headers for GitHub API requests."""
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self._settings.github_token:
            headers["Authorization"] = f"Bearer {self._settings.github_token}"
        return headers

    def _get_client(self) -> httpx.Client:
        """Get or create an HTTP client."""
        if self._client is not None:
            return self._client
        return httpx.Client(timeout=self._settings.timeout)

    def _fetch(self, path: str, params: dict | None = None) -> dict | list:
        """Fetch from GitHub API.

        An empty 204 response (e.g. contributors of an empty repository)
        is returned as an empty list.

        Raises:
            NotFoundError: On HTTP 404.
            NetworkError: On any other transport or status error.
            ParseError: If the body is not JSON.
        """
        client = self._get_client()
        url = f"{self._settings.github_api_url.rstrip('/')}{path}"

        try:
            response = client.get(url, params=params, headers=self._headers())
            if response.status_code == 404:
                raise NotFoundError(url)
            response.raise_for_status()
            if response.status_code == 204 or not response.content:
                return []
            return response.json()
        except httpx.HTTPError as e:
            raise NetworkError(url, str(e)) from e
        except ValueError as e:
            raise ParseError(f"Invalid JSON from {url}: {e}") from e
        finally:
            if self._client is None:
                client.close()

    def _iter_pages(self, path: str, per_page: int = PER_PAGE) -> Iterator[list]:
        """Yield successive pages from a paginated endpoint.

        Stops after the first page holding fewer than ``per_page`` entries.
        """
        page = 1
        while True:
            data = self._fetch(path, params={"per_page": per_page, "page": page})
            if not isinstance(data, list):
                raise ParseError(f"Expected a list from {path}, got {type(data).__name__}")

            yield data

            if len(data) < per_page:
                break
            page += 1

    def count_contributors(self, repo_ref: RepoRef) -> int:
        """Count every contributor of a repository across all pages."""
        total = 0
        for page in self._iter_pages(f"/repos/{repo_ref.full_name}/contributors"):
            total += len(page)
        logger.debug(f"{repo_ref.full_name}: {total} contributors")
        return total

    def fetch_file_content(self, repo_ref: RepoRef, path: str) -> str:
        """Fetch and decode a file from the repository's default branch."""
        data = self._fetch(f"/repos/{repo_ref.full_name}/contents/{path}")
        return _decode_content(data, path)

    def fetch_readme_content(self, repo_ref: RepoRef) -> str:
        """Fetch and decode the repository's README."""
        data = self._fetch(f"/repos/{repo_ref.full_name}/readme")
        return _decode_content(data, "README")


def _decode_content(data: dict | list, name: str) -> str:
    """Decode the base64 ``content`` field of a contents API response."""
    if not isinstance(data, dict) or "content" not in data:
        raise ParseError(f"{name}: response has no content field")

    # GitHub wraps base64 content at 60 columns
    try:
        raw = base64.b64decode(data["content"] or "")
    except (binascii.Error, TypeError) as e:
        raise ParseError(f"{name}: invalid base64 content") from e
    return raw.decode("utf-8", errors="replace")

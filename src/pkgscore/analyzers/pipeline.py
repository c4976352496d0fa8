"""End-to-end metric evaluation for a package URL."""

import logging
import tempfile

import httpx

from pkgscore.adapters.base import github_repo_from_url
from pkgscore.adapters.npm import NpmAdapter, is_npm_package_url, package_name_from_url
from pkgscore.analyzers.bus_factor import FAILURE_SCORE, get_bus_factor
from pkgscore.analyzers.github import GitHubFetcher
from pkgscore.analyzers.license import check_license_compatibility
from pkgscore.analyzers.ramp_up import SOURCE_EXTENSIONS, calculate_ramp_up
from pkgscore.config import Settings
from pkgscore.errors import PkgScoreError
from pkgscore.models.schemas import PackageScores, RampUpResult, RepoRef
from pkgscore.vcs import clone_repo

logger = logging.getLogger(__name__)


class MetricsPipeline:
    """Runs every metric for a GitHub or npm package URL.

    Pipeline stages, each independent of the others:
    1. Resolve the URL to a GitHub repository (npm packages via the registry)
    2. Bus factor from the contributor listing
    3. License compatibility
    4. Ramp-up on a shallow clone (optional)
    """

    def __init__(
        self,
        settings: Settings | None = None,
        ramp_up: bool = True,
        extensions: tuple[str, ...] = SOURCE_EXTENSIONS,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            settings: Runtime settings; defaults to the environment.
            ramp_up: Clone repositories and compute the ramp-up metric.
            extensions: Source file suffixes for the ramp-up metric.
            client: Optional httpx client; otherwise one is opened on entering the pipeline.
        """
        self.settings = settings or Settings.from_env()
        self.include_ramp_up = ramp_up
        self.extensions = extensions
        self._http_client = client
        self._owns_client = client is None

    def __enter__(self) -> "MetricsPipeline":
        """Set up shared HTTP client."""
        if self._owns_client:
            self._http_client = httpx.Client(timeout=self.settings.timeout)
        return self

    def __exit__(self, *args) -> None:
        """Clean up HTTP client."""
        if self._owns_client and self._http_client:
            self._http_client.close()
            self._http_client = None

    def resolve_repo(self, url: str) -> RepoRef | None:
        """Find the GitHub repository behind *url*, or None."""
        try:
            if is_npm_package_url(url):
                npm = NpmAdapter(settings=self.settings, client=self._http_client)
                return npm.get_source_repo(package_name_from_url(url))
            return github_repo_from_url(url)
        except (PkgScoreError, ValueError) as e:
            logger.warning(f"Could not resolve a GitHub repository for {url}: {e}")
            return None

    def measure_ramp_up(self, repo_ref: RepoRef) -> RampUpResult | None:
        """Shallow-clone a repository to a temporary directory and measure it."""
        with tempfile.TemporaryDirectory(prefix="pkgscore-") as tmp:
            if not clone_repo(repo_ref.url, tmp):
                return None
            return calculate_ramp_up(tmp, self.extensions)

    def evaluate(self, url: str) -> PackageScores:
        """Compute all metrics for one package URL.

        Args:
            url: GitHub repository URL or npm package page URL.

        Returns:
            PackageScores; metrics that could not be computed carry their
            failure values.
        """
        url = url.strip()
        repo_ref = self.resolve_repo(url)

        bus_factor = FAILURE_SCORE
        ramp_up = None
        if repo_ref is not None:
            fetcher = GitHubFetcher(settings=self.settings, client=self._http_client)
            bus_factor = get_bus_factor(repo_ref.url, fetcher)
            if self.include_ramp_up:
                ramp_up = self.measure_ramp_up(repo_ref)

        license_result = check_license_compatibility(
            url, settings=self.settings, client=self._http_client, repo_ref=repo_ref
        )

        return PackageScores(
            url=url,
            repo=repo_ref,
            bus_factor=bus_factor,
            license=license_result,
            ramp_up=ramp_up,
        )

"""License resolution and compatibility scoring.

License text is taken from the first source that yields any:

1. the repository's ``LICENSE`` file
2. the ``license`` field of its ``package.json``
3. the "License" section of its README

npm package URLs are first resolved to the GitHub repository they declare.
"""

import json
import logging
import re
from collections.abc import Callable

import httpx

from pkgscore.adapters.base import github_repo_from_url
from pkgscore.adapters.npm import NpmAdapter, is_npm_package_url, package_name_from_url
from pkgscore.analyzers.github import GitHubFetcher
from pkgscore.config import Settings
from pkgscore.errors import (
    MissingCredentialError,
    MissingRepositoryError,
    NoLicenseFoundError,
    NotFoundError,
    ParseError,
    PkgScoreError,
)
from pkgscore.models.schemas import LicenseCheckResult, RepoRef

logger = logging.getLogger(__name__)

# Licenses compatible with LGPL-2.1
COMPATIBLE_LICENSES = [
    "LGPL-2.1",
    "LGPL-3.0",
    "GPL-2.0",
    "GPL-3.0",
    "MIT",
    "BSD-2-Clause",
    "BSD-3-Clause",
    "Apache-2.0",
    "ISC",
    "Unlicense",
]

# Text between a "License" heading and the next heading
README_LICENSE_SECTION = re.compile(
    r"^[ \t]*#+[ \t]*License\b(.*?)(?=^[ \t]*#|\Z)",
    re.IGNORECASE | re.MULTILINE | re.DOTALL,
)


def extract_license_from_readme(content: str) -> str | None:
    """Return the trimmed body of the README's License section, if any."""
    match = README_LICENSE_SECTION.search(content)
    if not match:
        return None
    return match.group(1).strip() or None


def is_compatible(license_text: str) -> bool:
    """Check whether *license_text* mentions an allow-listed license.

    Matching is case-insensitive; hyphens in license ids may also appear as
    spaces ("Apache 2.0", "BSD 3-Clause").
    """
    text = license_text.lower()
    for license_id in COMPATIBLE_LICENSES:
        lowered = license_id.lower()
        variants = {lowered, lowered.replace("-", " ", 1), lowered.replace("-", " ")}
        if any(variant in text for variant in variants):
            return True
    return False


def _manifest_license(manifest: object) -> str | None:
    """Read the license declared in a parsed package.json."""
    if not isinstance(manifest, dict):
        return None
    license_info = manifest.get("license")

    # Deprecated object form: {"type": "MIT", "url": "..."}
    if isinstance(license_info, dict):
        license_info = license_info.get("type") or license_info.get("name")
    return license_info if isinstance(license_info, str) else None


class LicenseResolver:
    """Finds license text for a GitHub repository or npm package URL."""

    def __init__(self, settings: Settings, client: httpx.Client | None = None) -> None:
        """Initialize the resolver.

        Args:
            settings: Runtime settings carrying the GitHub token.
            client: Optional httpx client shared by the GitHub and npm fetchers.
        """
        self._settings = settings
        self.github = GitHubFetcher(settings=settings, client=client)
        self.npm = NpmAdapter(settings=settings, client=client)

    def resolve_repo(self, url: str) -> RepoRef:
        """Normalize a GitHub or npm package URL to a GitHub repository.

        Raises:
            MissingRepositoryError: If an npm package declares no GitHub repository.
            ValueError: If the URL is neither.
        """
        if is_npm_package_url(url):
            return self.npm.get_source_repo(package_name_from_url(url))
        return github_repo_from_url(url)

    def _from_license_file(self, repo_ref: RepoRef) -> str | None:
        return self.github.fetch_file_content(repo_ref, "LICENSE")

    def _from_manifest(self, repo_ref: RepoRef) -> str | None:
        content = self.github.fetch_file_content(repo_ref, "package.json")
        try:
            manifest = json.loads(content)
        except ValueError as e:
            raise ParseError(f"package.json is not valid JSON: {e}") from e
        return _manifest_license(manifest)

    def _from_readme(self, repo_ref: RepoRef) -> str | None:
        return extract_license_from_readme(self.github.fetch_readme_content(repo_ref))

    def resolve(self, url: str, repo_ref: RepoRef | None = None) -> str:
        """Find license text for *url*.

        A *repo_ref* already resolved by the caller skips the lookup.

        The license file and manifest are optional; any failure fetching them
        moves on to the next source. A failure fetching the README is not
        recovered from.

        Raises:
            MissingCredentialError: If no GitHub token is configured.
            MissingRepositoryError: If an npm package declares no GitHub repository.
            NoLicenseFoundError: If no source yields license text.
        """
        if not self._settings.github_token:
            raise MissingCredentialError()

        if repo_ref is None:
            repo_ref = self.resolve_repo(url)

        attempts: list[tuple[str, Callable[[RepoRef], str | None], bool]] = [
            ("LICENSE", self._from_license_file, True),
            ("package.json", self._from_manifest, True),
            ("README", self._from_readme, False),
        ]
        for source, attempt, optional in attempts:
            try:
                text = attempt(repo_ref)
            except PkgScoreError as e:
                if not optional:
                    raise
                if isinstance(e, NotFoundError):
                    logger.debug(f"{repo_ref.full_name}: no {source} found")
                else:
                    logger.info(f"{repo_ref.full_name}: {source} lookup failed ({e})")
                continue
            if text:
                logger.debug(f"{repo_ref.full_name}: license resolved from {source}")
                return text

        raise NoLicenseFoundError()


def check_license_compatibility(
    url: str,
    settings: Settings | None = None,
    client: httpx.Client | None = None,
    repo_ref: RepoRef | None = None,
) -> LicenseCheckResult:
    """Score a package's license: 1 if compatible with LGPL-2.1, else 0.

    Never raises; failures are reported through ``details``.
    """
    resolver = LicenseResolver(settings or Settings.from_env(), client=client)
    try:
        license_text = resolver.resolve(url, repo_ref)
    except (MissingCredentialError, MissingRepositoryError, NoLicenseFoundError) as e:
        return LicenseCheckResult(score=0, details=str(e))
    except (PkgScoreError, ValueError) as e:
        logger.error(f"Error checking license: {e}")
        return LicenseCheckResult(score=0, details=f"Error checking license: {e}")

    compatible = is_compatible(license_text)
    first_line = license_text.split("\n")[0]
    return LicenseCheckResult(
        score=1 if compatible else 0,
        details=f"License found: {first_line}. Compatible: {str(compatible).lower()}",
    )

"""Pydantic models for package metric data."""

from enum import Enum

from pydantic import BaseModel, Field


class Platform(str, Enum):
    """Source code hosting platforms."""

    GITHUB = "github"
    GITLAB = "gitlab"
    BITBUCKET = "bitbucket"
    OTHER = "other"


class RepoRef(BaseModel):
    """Reference to a source code repository."""

    platform: Platform
    owner: str
    repo: str

    @property
    def full_name(self) -> str:
        """Get the ``owner/repo`` identifier used in API paths."""
        return f"{self.owner}/{self.repo}"

    @property
    def url(self) -> str:
        """Get the full repository URL."""
        base_urls = {
            Platform.GITHUB: "https://github.com",
            Platform.GITLAB: "https://gitlab.com",
            Platform.BITBUCKET: "https://bitbucket.org",
        }
        base = base_urls.get(self.platform, "")
        return f"{base}/{self.owner}/{self.repo}"


# --- Ramp-Up Models ---


class SlocSample(BaseModel):
    """Line counts for the sampled head of a single source file."""

    sloc: int = Field(default=0, ge=0)
    comments: int = Field(default=0, ge=0)


class ReadmeSummary(BaseModel):
    """Observations taken from a checkout's README.md."""

    word_count: int = 0
    external_links: list[str] = Field(default_factory=list)


class RampUpResult(BaseModel):
    """Comment density of a local checkout.

    ``ratio`` is NaN when no code lines were found.
    """

    sloc: int = 0
    comments: int = 0
    ratio: float
    files: int = 0
    readme: ReadmeSummary | None = None


# --- License Models ---


class LicenseCheckResult(BaseModel):
    """Outcome of a license compatibility check."""

    score: int = Field(ge=0, le=1)
    details: str


# --- Aggregate Models ---


class PackageScores(BaseModel):
    """All metrics computed for one package URL."""

    url: str
    repo: RepoRef | None = None
    bus_factor: float = -1
    license: LicenseCheckResult
    ramp_up: RampUpResult | None = None

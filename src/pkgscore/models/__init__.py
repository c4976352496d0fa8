"""Data models and schemas."""

from pkgscore.models.schemas import (
    LicenseCheckResult,
    PackageScores,
    RampUpResult,
    ReadmeSummary,
    RepoRef,
    SlocSample,
)

__all__ = [
    "LicenseCheckResult",
    "PackageScores",
    "RampUpResult",
    "ReadmeSummary",
    "RepoRef",
    "SlocSample",
]

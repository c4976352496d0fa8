"""Analyzers for fetching data and computing package metrics."""

from pkgscore.analyzers.bus_factor import get_bus_factor, score_contributor_count
from pkgscore.analyzers.github import GitHubFetcher
from pkgscore.analyzers.license import LicenseResolver, check_license_compatibility, is_compatible
from pkgscore.analyzers.pipeline import MetricsPipeline
from pkgscore.analyzers.ramp_up import calculate_ramp_up, count_sloc_and_comments

__all__ = [
    "GitHubFetcher",
    "LicenseResolver",
    "MetricsPipeline",
    "calculate_ramp_up",
    "check_license_compatibility",
    "count_sloc_and_comments",
    "get_bus_factor",
    "is_compatible",
    "score_contributor_count",
]

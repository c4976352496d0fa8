"""Ramp-up metric: comment density over the head of each source file."""

import logging
import math
import os
import re
from collections.abc import Iterator
from pathlib import Path

from pkgscore.models.schemas import RampUpResult, ReadmeSummary, SlocSample

logger = logging.getLogger(__name__)

MAX_LINES = 100
SOURCE_EXTENSIONS: tuple[str, ...] = (".ts", ".js")

# Absolute links to anything but the hosting/registry sites
EXTERNAL_LINK = re.compile(r"https?://(?!github\.com|npmjs\.com)\S+")


def count_sloc_and_comments(text: str, max_lines: int = MAX_LINES) -> SlocSample:
    """Count code and comment lines in the first ``max_lines`` lines of *text*.

    ``//`` lines and ``/* ... */`` blocks count as comments, other non-blank
    lines as code. A block stays open until a line ending in ``*/``.
    """
    sloc = 0
    comments = 0
    in_block = False

    for line in text.split("\n")[:max_lines]:
        stripped = line.strip()

        if in_block:
            comments += 1
            if stripped.endswith("*/"):
                in_block = False
        elif stripped.startswith("//"):
            comments += 1
        elif stripped.startswith("/*"):
            comments += 1
            in_block = not stripped.endswith("*/")
        elif stripped:
            sloc += 1

    return SlocSample(sloc=sloc, comments=comments)


def walk_source_files(root: str | Path, extensions: tuple[str, ...] = SOURCE_EXTENSIONS) -> Iterator[Path]:
    """Yield files under *root* whose names end in one of *extensions*."""
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for name in sorted(filenames):
            if name.endswith(extensions):
                path = Path(dirpath) / name
                if path.is_file():
                    yield path


def summarize_readme(text: str) -> ReadmeSummary:
    """Count words and collect external links in README text."""
    return ReadmeSummary(
        word_count=len(text.split()),
        external_links=EXTERNAL_LINK.findall(text),
    )


def calculate_ramp_up(
    path: str | Path,
    extensions: tuple[str, ...] = SOURCE_EXTENSIONS,
) -> RampUpResult:
    """Compute the comment-to-code ratio for a local checkout.

    Args:
        path: Root of the checkout.
        extensions: File suffixes treated as source files.

    Returns:
        RampUpResult with totals; ``ratio`` is NaN when no code lines exist.
    """
    root = Path(path)
    total_sloc = 0
    total_comments = 0
    files = 0

    for file_path in walk_source_files(root, extensions):
        try:
            text = file_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.warning(f"Could not read {file_path}: {e}")
            continue
        sample = count_sloc_and_comments(text)
        total_sloc += sample.sloc
        total_comments += sample.comments
        files += 1

    ratio = total_comments / total_sloc if total_sloc else math.nan

    readme = None
    readme_path = root / "README.md"
    if readme_path.is_file():
        try:
            readme = summarize_readme(readme_path.read_text(encoding="utf-8", errors="replace"))
        except OSError as e:
            logger.warning(f"Could not read {readme_path}: {e}")
        else:
            logger.debug(
                f"README word count: {readme.word_count}, "
                f"external links: {len(readme.external_links)}"
            )
    else:
        logger.debug(f"No README.md in {root}")

    logger.info(f"Repository {root.name}: SLOC {total_sloc}, comments {total_comments}, ratio {ratio}")
    return RampUpResult(
        sloc=total_sloc,
        comments=total_comments,
        ratio=ratio,
        files=files,
        readme=readme,
    )

"""
Tag Classification Module

Pure functions for detecting release tags and validating their versions.
This module contains no side effects - only tag analysis logic.
"""

from typing import Iterator, Optional, Tuple

from semantic_version import Version

from .config import CHANNEL_SEPARATOR
from .models import ClassifiedTag
from .tag_template import TagMatcher


def parse_version(candidate: str) -> Optional[Version]:
    """
    Parse a version candidate as a strict semantic version.

    The raw candidate is tried first; only if that fails is a single
    leading "v" stripped and the parse retried.

    Args:
        candidate: Version substring captured from a tag

    Returns:
        Parsed Version, or None if the candidate is not semver
    """
    attempts = [candidate]
    if candidate.startswith("v"):
        attempts.append(candidate[1:])

    for attempt in attempts:
        try:
            return Version(attempt)
        except ValueError:
            continue
    return None


def version_key(version: str) -> Version:
    """Precedence key for a version string, ignoring build metadata."""
    return Version(version).truncate("prerelease")


def version_identity(version: str) -> str:
    """Identity of a version: two tags denote the same release when equal."""
    return str(version_key(version))


def _split_channel(raw_tag: str) -> Iterator[Tuple[str, Optional[str]]]:
    """Yield (candidate, channel) pairs to test, most specific first."""
    head, separator, channel = raw_tag.rpartition(CHANNEL_SEPARATOR)
    if separator and head and channel:
        yield head, channel
    yield raw_tag, None


def classify_tag(raw_tag: str, matcher: TagMatcher, commit: Optional[str] = None) -> Optional[ClassifiedTag]:
    """
    Classify a raw tag string against a compiled tag format.

    Pure function that classifies a tag without any I/O.

    The text after the last "@" is treated as the channel when the rest of
    the tag matches the format. Otherwise the whole tag is tested, which
    covers formats that contain "@" themselves (``prefix@v${version}``).

    Args:
        raw_tag: Tag name exactly as listed by git
        matcher: Compiled tag format
        commit: Commit the tag points to, carried along unchanged

    Returns:
        ClassifiedTag, or None if the tag does not match or is not semver
    """
    if not raw_tag:
        return None

    for candidate, channel in _split_channel(raw_tag):
        result = matcher.test(candidate)
        if result.matched:
            break
    else:
        return None

    version = parse_version(result.version_candidate)
    if version is None:
        return None

    return ClassifiedTag(git_tag=raw_tag, version=str(version), channel=channel, commit=commit)

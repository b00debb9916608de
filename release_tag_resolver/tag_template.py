"""
Tag Template Module

Compiles a tag format such as ``v${version}`` into a matcher that tests
literal tag strings and extracts the version part. Pure functions only.
"""

import re
from dataclasses import dataclass

from .config import VERSION_PLACEHOLDER
from .exceptions import TemplateError
from .models import MatchResult

# Strict semver validation happens in the classifier.
VERSION_CANDIDATE_PATTERN = r"[0-9A-Za-z.+-]+?"


@dataclass(frozen=True)
class TagMatcher:
    """Compiled tag format."""
    template: str
    pattern: re.Pattern

    def test(self, tag: str) -> MatchResult:
        """Test a tag string and extract its version candidate.

        Args:
            tag: Tag string with any channel qualifier already removed

        Returns:
            MatchResult with the captured version when the tag matches
        """
        match = self.pattern.fullmatch(tag)
        if not match:
            return MatchResult(matched=False)
        return MatchResult(matched=True, version_candidate=match.group("version"))


def compile_template(template: str) -> TagMatcher:
    """
    Compile a tag format into a TagMatcher.

    Every literal character is escaped, so formats like ``(.+)/${version}``
    match verbatim. The version group is non-greedy and the pattern is
    anchored at both ends, so a literal suffix is never swallowed.

    Args:
        template: Tag format containing exactly one ``${version}``

    Returns:
        TagMatcher for the format

    Raises:
        TemplateError: If the placeholder is missing or repeated
    """
    count = template.count(VERSION_PLACEHOLDER)
    if count != 1:
        raise TemplateError(
            f"Tag format '{template}' must contain exactly one {VERSION_PLACEHOLDER} "
            f"placeholder, found {count}",
            template=template,
        )

    prefix, suffix = template.split(VERSION_PLACEHOLDER)
    pattern = re.compile(
        f"^{re.escape(prefix)}(?P<version>{VERSION_CANDIDATE_PATTERN}){re.escape(suffix)}$"
    )
    return TagMatcher(template=template, pattern=pattern)

"""
Branch Tag Resolution Module

Resolves the release tags reachable from one branch tip into one record per
version, with the channels each version was published to.

Classes:
    TagSource: Protocol for the git queries needed by resolution

Functions:
    resolve_branch_tags: Resolve the release tags of a single branch
    merge_classified_tags: Group classified tags by version
    sort_by_precedence: Order resolved tags by semver precedence
"""

import logging
from typing import Dict, Iterable, List, Optional, Protocol, Union

from .models import ChannelSet, ClassifiedTag, GitTagRef, ResolvedTag
from .tag_classification import classify_tag, version_identity, version_key
from .tag_template import TagMatcher, compile_template

logger = logging.getLogger(__name__)


class TagSource(Protocol):
    """Protocol for git queries needed by tag resolution."""

    def resolve_branch_tip(self, branch: str) -> str:
        """Return the commit at the tip of a branch or raise BranchNotFoundError."""
        ...

    def list_tags_reachable_from(self, ref: str) -> List[GitTagRef]:
        """List tags whose commit is the ref or one of its ancestors."""
        ...

    def is_ancestor(self, ancestor: str, descendant: str) -> bool:
        """Tell whether ``ancestor`` is reachable from ``descendant``."""
        ...


def _as_matcher(template: Union[str, TagMatcher]) -> TagMatcher:
    if isinstance(template, TagMatcher):
        return template
    return compile_template(template)


def sort_by_precedence(tags: Iterable[ResolvedTag]) -> List[ResolvedTag]:
    """Sort resolved tags ascending by semver precedence."""
    return sorted(tags, key=lambda tag: version_key(tag.version))


def merge_classified_tags(classified: Iterable[ClassifiedTag]) -> List[ResolvedTag]:
    """
    Merge classified tags that denote the same version.

    The first tag seen for a version becomes its representative; channels
    are collected in first-seen order without duplicates.

    Args:
        classified: Classified tags in enumeration order

    Returns:
        Resolved tags sorted by semver precedence
    """
    representatives: Dict[str, ClassifiedTag] = {}
    channels: Dict[str, ChannelSet] = {}

    for tag in classified:
        identity = version_identity(tag.version)
        if identity not in representatives:
            representatives[identity] = tag
            channels[identity] = ChannelSet()
        channels[identity].add(tag.channel)

    return sort_by_precedence(
        ResolvedTag(
            git_tag=tag.git_tag,
            version=tag.version,
            channels=channels[identity].freeze(),
            commit=tag.commit,
        )
        for identity, tag in representatives.items()
    )


def resolve_branch_tags(
    branch_name: str,
    template: Union[str, TagMatcher],
    source: TagSource,
    tip: Optional[str] = None,
) -> List[ResolvedTag]:
    """
    Resolve the release tags reachable from a branch tip.

    Args:
        branch_name: Name of the branch
        template: Tag format or an already compiled TagMatcher
        source: Git query implementation
        tip: Commit of the branch tip, looked up when not given

    Returns:
        Resolved tags sorted ascending by semver precedence

    Raises:
        TemplateError: If the tag format is invalid
        BranchNotFoundError: If the branch tip cannot be resolved
    """
    matcher = _as_matcher(template)
    if tip is None:
        tip = source.resolve_branch_tip(branch_name)

    classified = []
    for ref in source.list_tags_reachable_from(tip):
        tag = classify_tag(ref.tag_name, matcher, commit=ref.commit)
        if tag is not None:
            classified.append(tag)

    resolved = merge_classified_tags(classified)
    logger.debug(
        f"Found tags for branch {branch_name} matching {matcher.template}: "
        f"{[tag.git_tag for tag in resolved]}"
    )
    return resolved

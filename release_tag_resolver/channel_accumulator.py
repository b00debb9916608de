"""
Channel Accumulator Module

Builds the per-branch view of released tags across an ordered release-line
hierarchy. Each branch inherits the tags of the branch before it that are
part of its own history, plus the tags it discovered itself.

Fetching branches is independent and runs in a thread pool; merging is a
sequential fold in the caller-supplied order.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .branch_tags import TagSource, resolve_branch_tags, sort_by_precedence
from .config import DEFAULT_MAX_WORKERS, ResolveConfig
from .exceptions import BranchNotFoundError
from .models import BranchEntry, ResolvedTag
from .tag_classification import version_identity
from .tag_template import TagMatcher, compile_template

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BranchFetch:
    """Result of fetching one branch before merging."""
    name: str
    tip: Optional[str]
    tags: Tuple[ResolvedTag, ...] = ()

    @property
    def found(self) -> bool:
        return self.tip is not None


def _fetch_branch(branch: str, matcher: TagMatcher, source: TagSource) -> BranchFetch:
    try:
        tip = source.resolve_branch_tip(branch)
    except BranchNotFoundError as e:
        logger.warning(f"Skipping branch {branch}: {e}")
        return BranchFetch(name=branch, tip=None)

    tags = resolve_branch_tags(branch, matcher, source, tip=tip)
    return BranchFetch(name=branch, tip=tip, tags=tuple(tags))


def fetch_branches(
    branches: Sequence[str],
    matcher: TagMatcher,
    source: TagSource,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> List[BranchFetch]:
    """Fetch every branch, concurrently when ``max_workers`` > 1, in input order."""
    if max_workers <= 1 or len(branches) <= 1:
        return [_fetch_branch(branch, matcher, source) for branch in branches]

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(_fetch_branch, branch, matcher, source) for branch in branches]
        return [future.result() for future in futures]


def _is_inherited(tag: ResolvedTag, tip: str, source: TagSource) -> bool:
    if tag.commit is None:
        return False
    if tag.commit == tip:
        return True
    return source.is_ancestor(tag.commit, tip)


def merge_branch_view(
    previous: BranchEntry,
    fetched: BranchFetch,
    source: TagSource,
) -> BranchEntry:
    """
    Merge a fetched branch with the view of the branch before it.

    Tags of ``previous`` whose commit is in the history of the fetched
    branch tip are carried forward with their channels. The branch's own
    tags are then unioned in, widening channels of versions already present.

    Args:
        previous: Entry of the preceding branch in the hierarchy
        fetched: Fetch result of the current branch
        source: Git query implementation used for ancestry tests

    Returns:
        BranchEntry for the current branch

    Raises:
        AncestryQueryError: If git cannot answer an ancestry query
    """
    if not fetched.found:
        return BranchEntry(name=fetched.name, tags=())

    merged: Dict[str, ResolvedTag] = {}
    for tag in previous.tags:
        if _is_inherited(tag, fetched.tip, source):
            merged[version_identity(tag.version)] = tag

    for tag in fetched.tags:
        identity = version_identity(tag.version)
        if identity in merged:
            merged[identity] = merged[identity].with_channels(tag.channels)
        else:
            merged[identity] = tag

    return BranchEntry(name=fetched.name, tags=tuple(sort_by_precedence(merged.values())))


def accumulate(
    branches: Sequence[str],
    template: Union[str, TagMatcher],
    source: TagSource,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> List[BranchEntry]:
    """
    Resolve the tags of every branch in a release-line hierarchy.

    Args:
        branches: Branch names, from maintenance lines to experimental ones
        template: Tag format or an already compiled TagMatcher
        source: Git query implementation
        max_workers: Number of branches fetched concurrently

    Returns:
        One BranchEntry per branch, in the same order as ``branches``

    Raises:
        TemplateError: If the tag format is invalid, before any git query
        AncestryQueryError: If an ancestry query fails
    """
    matcher = template if isinstance(template, TagMatcher) else compile_template(template)
    fetched = fetch_branches(branches, matcher, source, max_workers)

    entries: List[BranchEntry] = []
    for branch in fetched:
        if not entries:
            entries.append(BranchEntry(name=branch.name, tags=branch.tags))
            continue
        entries.append(merge_branch_view(entries[-1], branch, source))

    return entries


def get_tags(config: ResolveConfig, source: TagSource) -> List[BranchEntry]:
    """Resolve the branch views described by a ResolveConfig."""
    return accumulate(config.branches, config.tag_format, source, config.max_workers)

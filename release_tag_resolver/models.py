"""Data models for resolved tags and branch views."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple


class ChannelSet:
    """Insertion-ordered set of channel names.

    ``None`` stands for the default channel and counts as one value.
    """

    def __init__(self, channels: Iterable[Optional[str]] = ()):
        self._channels: List[Optional[str]] = []
        for channel in channels:
            self.add(channel)

    def add(self, channel: Optional[str]) -> None:
        if channel not in self._channels:
            self._channels.append(channel)

    def update(self, channels: Iterable[Optional[str]]) -> None:
        for channel in channels:
            self.add(channel)

    def __contains__(self, channel: object) -> bool:
        return channel in self._channels

    def __iter__(self) -> Iterator[Optional[str]]:
        return iter(self._channels)

    def __len__(self) -> int:
        return len(self._channels)

    def __repr__(self) -> str:
        return f"ChannelSet({self._channels!r})"

    def freeze(self) -> Tuple[Optional[str], ...]:
        return tuple(self._channels)


@dataclass(frozen=True)
class GitTagRef:
    """A tag as listed by git, with the commit it points to."""
    tag_name: str
    commit: str


@dataclass(frozen=True)
class MatchResult:
    """Outcome of testing a tag string against a compiled tag format."""
    matched: bool
    version_candidate: Optional[str] = None


@dataclass(frozen=True)
class ClassifiedTag:
    """A tag that matches the tag format and carries a valid semver."""
    git_tag: str
    version: str
    channel: Optional[str] = None
    commit: Optional[str] = field(default=None, compare=False)


@dataclass(frozen=True)
class ResolvedTag:
    """Canonical record for one version within a branch view."""
    git_tag: str
    version: str
    channels: Tuple[Optional[str], ...]
    commit: Optional[str] = field(default=None, compare=False)

    def with_channels(self, channels: Iterable[Optional[str]]) -> "ResolvedTag":
        """Return a copy whose channels are widened with ``channels``."""
        merged = ChannelSet(self.channels)
        merged.update(channels)
        return ResolvedTag(self.git_tag, self.version, merged.freeze(), self.commit)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gitTag": self.git_tag,
            "version": self.version,
            "channels": list(self.channels),
        }


@dataclass(frozen=True)
class BranchEntry:
    """Resolved view of one release branch."""
    name: str
    tags: Tuple[ResolvedTag, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "tags": [tag.to_dict() for tag in self.tags]}

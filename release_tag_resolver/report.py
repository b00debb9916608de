"""
Report Generation Module

Pure functions for rendering resolved branch views as text.
"""

from typing import Iterable, Optional

from .models import BranchEntry

DEFAULT_CHANNEL_LABEL = "default"


def format_channel(channel: Optional[str]) -> str:
    """Human readable label for a channel, None being the default channel."""
    return DEFAULT_CHANNEL_LABEL if channel is None else channel


def format_summary(entries: Iterable[BranchEntry]) -> str:
    """
    Render branch entries as an indented text summary.

    Example:
        master
          1.0.0  v1.0.0  [default, next]

    Args:
        entries: Resolved branch entries

    Returns:
        Multi-line summary string
    """
    lines = []
    for entry in entries:
        lines.append(entry.name)
        if not entry.tags:
            lines.append("  (no release tags)")
            continue
        for tag in entry.tags:
            channels = ", ".join(format_channel(channel) for channel in tag.channels)
            lines.append(f"  {tag.version}  {tag.git_tag}  [{channels}]")
    return "\n".join(lines)

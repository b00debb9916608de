"""
Git Operations Module for Release Tag Resolver

This module handles opening the Git repository whose tags are resolved.

Functions:
    open_repository: Opens a local Git repository

Raises:
    GitOperationError: When the repository cannot be opened
"""

from git import Repo
from .exceptions import GitOperationError


def open_repository(path: str = ".") -> Repo:
    """Open the Git repository at ``path`` or one of its parents."""
    try:
        return Repo(path, search_parent_directories=True)
    except Exception as e:
        raise GitOperationError(f"Failed to open git repository at {path}: {e}") from e

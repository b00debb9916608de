"""
I/O Layer for Release Tag Resolver

This module contains all I/O operations (file system, Git) separated from
the resolution logic. This is the "imperative shell" that implements the
TagSource protocol on top of GitPython.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from git import Repo
from git.exc import GitCommandError

from .exceptions import AncestryQueryError, BranchNotFoundError, GitOperationError
from .models import GitTagRef

logger = logging.getLogger(__name__)

# Tag name, object and peeled commit (empty for lightweight tags), tab separated.
TAG_REF_FORMAT = "%(refname:strip=2)%09%(objectname)%09%(*objectname)"


class IOLayer:
    """Handles all I/O operations for the application."""

    def __init__(self, repo: Repo, remote: str = ""):
        """Initialize the I/O layer.

        Args:
            repo: Git repository object
            remote: Remote to look branches up on when no local branch exists
        """
        self.repo = repo
        self.remote = remote

    # -----------------------------------------------------------------------------
    # File System Operations
    # -----------------------------------------------------------------------------

    def read_yaml(self, path: str) -> Optional[Dict[str, Any]]:
        """Read a YAML file and return its contents.

        Relative paths are resolved against the repository working tree.

        Args:
            path: Path to the YAML file

        Returns:
            Dictionary with YAML contents or None if file doesn't exist
        """
        file_path = Path(path)
        if not file_path.is_absolute() and self.repo.working_tree_dir:
            file_path = Path(self.repo.working_tree_dir) / file_path
        if not file_path.exists():
            return None

        with file_path.open(encoding="utf-8") as f:
            return yaml.safe_load(f)

    # -----------------------------------------------------------------------------
    # Git Operations
    # -----------------------------------------------------------------------------

    def resolve_branch_tip(self, branch: str) -> str:
        """Resolve a branch name to the commit at its tip.

        Only refs/heads (and refs/remotes with a remote) are searched, so a
        tag with the same name as the branch is never used.

        Args:
            branch: Branch name

        Returns:
            Hexsha of the tip commit

        Raises:
            BranchNotFoundError: If neither the local nor the remote branch exists
        """
        candidates = [f"refs/heads/{branch}"]
        if self.remote:
            candidates.append(f"refs/remotes/{self.remote}/{branch}")

        for ref in candidates:
            try:
                return self.repo.git.rev_parse("--verify", "--quiet", f"{ref}^{{commit}}")
            except GitCommandError:
                logger.debug(f"Ref {ref} not found")

        raise BranchNotFoundError(branch)

    def list_tags_reachable_from(self, ref: str) -> List[GitTagRef]:
        """List the tags merged into ``ref``, sorted by tag name.

        Args:
            ref: Commit or ref whose history is searched

        Returns:
            List of GitTagRef, annotated tags peeled to their commit

        Raises:
            GitOperationError: If git cannot list the tags
        """
        try:
            output = self.repo.git.for_each_ref(
                f"--merged={ref}", f"--format={TAG_REF_FORMAT}", "refs/tags"
            )
        except GitCommandError as e:
            raise GitOperationError(f"Failed to list tags merged into {ref}: {e}") from e

        tags = []
        for line in output.splitlines():
            if not line.strip():
                continue
            name, objectname, *peeled = line.split("\t")
            commit = peeled[0] if peeled and peeled[0] else objectname
            tags.append(GitTagRef(tag_name=name, commit=commit))
        return tags

    def is_ancestor(self, ancestor: str, descendant: str) -> bool:
        """Tell whether ``ancestor`` is in the history of ``descendant``.

        Raises:
            AncestryQueryError: If git fails for any reason other than "not an ancestor"
        """
        try:
            return self.repo.is_ancestor(ancestor, descendant)
        except GitCommandError as e:
            raise AncestryQueryError(
                f"Failed to test whether {ancestor} is an ancestor of {descendant}: {e}"
            ) from e

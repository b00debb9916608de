"""Test fixtures for Release Tag Resolver.

This module provides shared fixtures used across multiple test modules.

Fixtures:
    git_repo: Creates a throwaway Git repository with helpers to commit and tag
    fake_source: Factory for an in-memory TagSource
"""

from typing import Dict, Iterable, List, Set, Tuple

import pytest
from git import Repo

from release_tag_resolver.exceptions import AncestryQueryError, BranchNotFoundError
from release_tag_resolver.models import GitTagRef


class GitRepoHelper:
    """Small wrapper around a GitPython repository used to build test histories."""

    def __init__(self, path):
        self.path = path
        self.repo = Repo.init(path)
        with self.repo.config_writer() as writer:
            writer.set_value("user", "name", "Test User")
            writer.set_value("user", "email", "test@example.com")
            writer.set_value("commit", "gpgsign", "false")
            writer.set_value("tag", "gpgsign", "false")
        self.repo.git.symbolic_ref("HEAD", "refs/heads/master")

    def commit(self, message: str) -> str:
        self.repo.git.commit("--allow-empty", "-m", message)
        return self.repo.head.commit.hexsha

    def tag(self, name: str, annotated: bool = False) -> None:
        if annotated:
            self.repo.git.tag("-a", name, "-m", f"Release {name}")
        else:
            self.repo.git.tag(name)

    def checkout(self, branch: str, create: bool = False) -> None:
        if create:
            self.repo.git.checkout("-b", branch)
        else:
            self.repo.git.checkout(branch)


@pytest.fixture
def git_repo(tmp_path):
    """Creates an empty Git repository on branch master.

    Returns:
        GitRepoHelper: helper exposing ``repo``, ``commit``, ``tag`` and ``checkout``
    """
    return GitRepoHelper(tmp_path / "repo")


class FakeTagSource:
    """In-memory TagSource.

    Args:
        tips: Branch name to tip commit
        history: Commit to the commits in its history, itself included
        tags: Tag name to commit, in listing order
    """

    def __init__(
        self,
        tips: Dict[str, str],
        history: Dict[str, Iterable[str]],
        tags: List[Tuple[str, str]],
        broken_ancestry: bool = False,
    ):
        self.tips = tips
        self.history = {commit: set(ancestors) for commit, ancestors in history.items()}
        self.tags = tags
        self.broken_ancestry = broken_ancestry
        self.calls: List[Tuple[str, str]] = []
        self.ancestry_queries: Set[Tuple[str, str]] = set()

    def resolve_branch_tip(self, branch: str) -> str:
        self.calls.append(("resolve_branch_tip", branch))
        if branch not in self.tips:
            raise BranchNotFoundError(branch)
        return self.tips[branch]

    def list_tags_reachable_from(self, ref: str) -> List[GitTagRef]:
        self.calls.append(("list_tags_reachable_from", ref))
        reachable = self.history[ref]
        return [GitTagRef(name, commit) for name, commit in self.tags if commit in reachable]

    def is_ancestor(self, ancestor: str, descendant: str) -> bool:
        self.calls.append(("is_ancestor", f"{ancestor}..{descendant}"))
        self.ancestry_queries.add((ancestor, descendant))
        if self.broken_ancestry:
            raise AncestryQueryError(f"cannot compare {ancestor} and {descendant}")
        return ancestor in self.history[descendant]


@pytest.fixture
def fake_source():
    """Factory fixture building FakeTagSource instances."""
    return FakeTagSource

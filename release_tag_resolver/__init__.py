"""Resolve released version tags and their channels per release branch."""

from .branch_tags import resolve_branch_tags
from .channel_accumulator import accumulate, get_tags
from .exceptions import (
    AncestryQueryError,
    BranchNotFoundError,
    GitOperationError,
    ResolverError,
    TemplateError,
)
from .tag_classification import classify_tag
from .tag_template import compile_template

__all__ = [
    "accumulate",
    "classify_tag",
    "compile_template",
    "get_tags",
    "resolve_branch_tags",
    "AncestryQueryError",
    "BranchNotFoundError",
    "GitOperationError",
    "ResolverError",
    "TemplateError",
]

"""Custom exceptions for Release Tag Resolver."""


class ResolverError(Exception):
    """Base class for tag resolution failures."""


class TemplateError(ResolverError):
    """Raised when a tag format does not contain exactly one version placeholder."""

    def __init__(self, message: str, template: str = None):
        self.template = template
        super().__init__(message)


class BranchNotFoundError(ResolverError):
    """Raised when a branch tip cannot be resolved to a commit."""

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(f"Branch '{branch}' cannot be resolved to a commit")


class AncestryQueryError(ResolverError):
    """Raised when git cannot tell whether one commit is an ancestor of another."""


class GitOperationError(ResolverError):
    """Raised when the repository cannot be opened or queried."""

"""Thin GitHub API access layer."""

from github_org_admin.github.client import (
    BranchInfo,
    GitHubClient,
    NotFound,
    RepositoryHandle,
)

__all__ = ["BranchInfo", "GitHubClient", "NotFound", "RepositoryHandle"]

"""GitHub API client wrapper.

This wraps PyGithub to keep GitHub calls out of the drivers and make tests easy.
Lookups that may legitimately 404 return a `NotFound` value instead of raising;
every other API error propagates as `github.GithubException`.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from github import Auth, Github, GithubException
from github.Repository import Repository

from github_org_admin.labels import Label

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RepositoryHandle:
    """Minimal repository metadata needed to decide whether to touch a repository."""

    identifier: str
    is_fork: bool
    is_archived: bool


@dataclass(frozen=True, slots=True)
class BranchInfo:
    name: str
    sha: str | None = None


@dataclass(frozen=True, slots=True)
class NotFound:
    """The remote reported 404 for `resource`."""

    resource: str
    message: str = ""


def _is_not_found(exc: GithubException) -> bool:
    return exc.status == 404


class GitHubClient:
    """Small wrapper around PyGithub for the operations the admin tools need."""

    def __init__(
        self,
        *,
        token: str,
        base_url: str = "https://api.github.com",
        github_api: Github | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")

        self._base_url = base_url.rstrip("/")
        self._repos: dict[str, Repository] = {}

        if github_api is not None:
            self._github = github_api
            logger.debug("Using injected Github instance")
            return

        auth = Auth.Token(token)
        self._github = Github(auth=auth, base_url=self._base_url)
        logger.debug("GitHub client created", extra={"base_url": self._base_url})

    def _repo(self, identifier: str) -> Repository:
        key = identifier.strip().strip("/")
        repo = self._repos.get(key)
        if repo is None:
            repo = self._github.get_repo(key)
            self._repos[key] = repo
        return repo

    def list_repositories(self, namespace: str, pattern: str = ".*") -> list[str]:
        """List repository names under an organization or user account.

        Args:
            namespace: Organization or user login.
            pattern: Regular expression searched in each bare repository name.

        Returns:
            Sorted bare repository names (without the namespace).
        """
        regex = re.compile(pattern)
        try:
            owner = self._github.get_organization(namespace)
            repos = owner.get_repos()
        except GithubException as e:
            if not _is_not_found(e):
                raise
            logger.debug(
                "Namespace is not an organization, trying user", extra={"namespace": namespace}
            )
            repos = self._github.get_user(namespace).get_repos()

        names = sorted(repo.name for repo in repos if regex.search(repo.name))
        logger.info(
            "Listed repositories",
            extra={"namespace": namespace, "pattern": pattern, "count": len(names)},
        )
        return names

    def get_repository(self, identifier: str) -> RepositoryHandle:
        repo = self._repo(identifier)
        return RepositoryHandle(
            identifier=repo.full_name,
            is_fork=bool(repo.fork),
            is_archived=bool(repo.archived),
        )

    def list_labels(self, identifier: str) -> list[Label]:
        logger.debug("Fetching labels", extra={"repo": identifier})
        return [
            Label(name=label.name, color=label.color, description=label.description or "")
            for label in self._repo(identifier).get_labels()
        ]

    def create_labels(self, identifier: str, labels: Iterable[Label]) -> None:
        repo = self._repo(identifier)
        for label in labels:
            repo.create_label(label.name, label.color, label.description)
            logger.info("Label created", extra={"repo": identifier, "label": label.name})

    def update_labels(self, identifier: str, labels: Iterable[Label]) -> None:
        repo = self._repo(identifier)
        for label in labels:
            repo.get_label(label.name).edit(label.name, label.color, label.description)
            logger.info("Label updated", extra={"repo": identifier, "label": label.name})

    def delete_labels(self, identifier: str, labels: Iterable[Label]) -> None:
        repo = self._repo(identifier)
        for label in labels:
            repo.get_label(label.name).delete()
            logger.info("Label deleted", extra={"repo": identifier, "label": label.name})

    def get_branch(self, identifier: str, branch: str) -> BranchInfo | NotFound:
        """Fetch branch metadata.

        GitHub follows renames here: asking for a renamed branch returns the branch
        under its new name.
        """
        try:
            found = self._repo(identifier).get_branch(branch)
        except GithubException as e:
            if _is_not_found(e):
                return NotFound(resource=f"{identifier}@{branch}", message=str(e))
            raise
        return BranchInfo(name=found.name, sha=found.commit.sha if found.commit else None)

    def rename_branch(self, identifier: str, branch: str, new_name: str) -> bool | NotFound:
        try:
            renamed = self._repo(identifier).rename_branch(branch, new_name)
        except GithubException as e:
            if _is_not_found(e):
                return NotFound(resource=f"{identifier}@{branch}", message=str(e))
            raise
        logger.info(
            "Branch renamed",
            extra={"repo": identifier, "branch": branch, "new_name": new_name},
        )
        return bool(renamed)

    def close(self) -> None:
        """Close the GitHub client connection."""
        self._github.close()
        logger.debug("GitHub client closed")

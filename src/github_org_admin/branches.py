"""Rename `master` default branches to `main`."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from typing import TextIO

from github_org_admin.github.client import GitHubClient, NotFound

logger = logging.getLogger(__name__)


class BranchRenamer:
    def __init__(
        self,
        *,
        github: GitHubClient,
        out: TextIO | None = None,
        old: str = "master",
        new: str = "main",
    ) -> None:
        self._github = github
        self._out = out or sys.stdout
        self._old = old
        self._new = new

    def rename_repository(self, identifier: str) -> bool:
        """Rename the branch in one repository; returns True if a rename happened."""

        handle = self._github.get_repository(identifier)
        if handle.is_fork or handle.is_archived:
            logger.debug(
                "Skipping repository",
                extra={"repo": identifier, "fork": handle.is_fork, "archived": handle.is_archived},
            )
            return False

        branch = self._github.get_branch(identifier, self._old)
        if isinstance(branch, NotFound):
            logger.debug("Branch not found", extra={"repo": identifier, "branch": self._old})
            return False
        # Already renamed: GitHub redirects the old name to the new branch.
        if branch.name == self._new:
            return False

        result = self._github.rename_branch(identifier, self._old, self._new)
        if isinstance(result, NotFound):
            logger.debug("Branch not found", extra={"repo": identifier, "branch": self._old})
            return False

        print(f"{identifier}: {self._old} -> {self._new}", file=self._out)
        return True

    def run(self, identifiers: Iterable[str]) -> int:
        renamed = sum(1 for identifier in identifiers if self.rename_repository(identifier))
        logger.info("Branch rename finished", extra={"renamed": renamed})
        return renamed

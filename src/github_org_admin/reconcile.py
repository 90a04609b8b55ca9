"""Label reconciliation driver.

For each repository: skip forks and archived repositories, diff the current labels
against the wanted labels, print the result and optionally apply it.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TextIO

from github_org_admin.github.client import GitHubClient
from github_org_admin.labels import WANTED_LABELS, Label, LabelDiff, diff_labels, label_names

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LabelSyncOptions:
    fix_labels: bool = False
    delete_labels: bool = False
    keep_labels: tuple[str, ...] = ()


class LabelReconciler:
    def __init__(
        self,
        *,
        github: GitHubClient,
        options: LabelSyncOptions,
        out: TextIO | None = None,
        wanted: Sequence[Label] = WANTED_LABELS,
    ) -> None:
        self._github = github
        self._options = options
        self._out = out or sys.stdout
        self._wanted = tuple(wanted)

    def _print(self, line: str) -> None:
        print(line, file=self._out)

    def announce(self) -> None:
        self._print(f"Checking for the following labels: {label_names(self._wanted)}")

    def reconcile_repository(self, identifier: str) -> LabelDiff | None:
        """Report and (optionally) fix the labels of one repository.

        Returns:
            The computed diff, or None if the repository was skipped.
        """
        handle = self._github.get_repository(identifier)
        if handle.is_fork:
            logger.debug("Skipping fork", extra={"repo": identifier})
            return None
        if handle.is_archived:
            logger.debug("Skipping archived repository", extra={"repo": identifier})
            return None

        current = self._github.list_labels(identifier)
        diff = diff_labels(self._wanted, current, keep=self._options.keep_labels)

        self._print(f"Delete: {identifier}, {label_names(diff.extra)}")
        self._print(f"Create: {identifier}, {label_names(diff.missing)}")
        self._print(f"Fix: {identifier}, {label_names(diff.incorrect)}")

        if self._options.delete_labels and diff.extra:
            self._github.delete_labels(identifier, diff.extra)

        if self._options.fix_labels:
            if diff.incorrect:
                self._github.update_labels(identifier, diff.incorrect)
            if diff.missing:
                self._github.create_labels(identifier, diff.missing)

        return diff

    def run(self, identifiers: Iterable[str]) -> int:
        """Reconcile every repository in order; returns how many were not skipped."""

        self.announce()
        processed = 0
        for identifier in identifiers:
            if self.reconcile_repository(identifier) is not None:
                processed += 1
        logger.info("Label reconciliation finished", extra={"processed": processed})
        return processed

"""Test configuration and fixtures."""

from __future__ import annotations

import io
from unittest.mock import Mock

import pytest

from github_org_admin.github.client import GitHubClient, RepositoryHandle
from github_org_admin.labels import WANTED_LABELS, Label


@pytest.fixture
def out() -> io.StringIO:
    """Capture report output."""
    return io.StringIO()


@pytest.fixture
def mock_github() -> Mock:
    """Provide a client whose repositories are plain, active, and correctly labelled."""
    github = Mock(spec=GitHubClient)
    github.get_repository.side_effect = lambda identifier: RepositoryHandle(
        identifier=identifier, is_fork=False, is_archived=False
    )
    github.list_labels.return_value = list(WANTED_LABELS)
    return github


@pytest.fixture
def bug_label() -> Label:
    return Label(name="bug", color="0e8a16", description="Something isn't working")

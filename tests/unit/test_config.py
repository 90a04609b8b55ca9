"""Unit tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from github_org_admin.config import DEFAULT_MANAGED_REPOS_URL, AdminSettings

_ENV_VARS = (
    "ORG_ADMIN_GITHUB_TOKEN",
    "GITHUB_TOKEN",
    "GITHUB_BASE_URL",
    "LOG_LEVEL",
    "MANAGED_REPOS_URL",
    "MANAGED_REPOS_NAMESPACE",
)


@pytest.fixture(autouse=True)
def clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def test_settings_loads_from_dotenv(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text(
        "\n".join(
            [
                "ORG_ADMIN_GITHUB_TOKEN=test-token",
                "LOG_LEVEL=DEBUG",
                "",
            ]
        ),
        encoding="utf-8",
    )

    settings = AdminSettings()

    assert settings.github_token == "test-token"
    assert settings.log_level == "DEBUG"
    assert settings.github_base_url == "https://api.github.com"
    assert settings.managed_repos_url == DEFAULT_MANAGED_REPOS_URL
    assert settings.managed_repos_namespace == "voxpupuli"


def test_settings_falls_back_to_github_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "plain-token")

    assert AdminSettings().github_token == "plain-token"


def test_dedicated_token_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "plain-token")
    monkeypatch.setenv("ORG_ADMIN_GITHUB_TOKEN", "admin-token")

    assert AdminSettings().github_token == "admin-token"


def test_token_is_required() -> None:
    with pytest.raises(ValidationError, match="required"):
        AdminSettings()


def test_token_can_be_passed_explicitly() -> None:
    settings = AdminSettings(github_token="cli-token")

    assert settings.github_token == "cli-token"

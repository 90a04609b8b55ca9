"""Configuration for the administration tools.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

The token is read from `ORG_ADMIN_GITHUB_TOKEN` first so that an operator can keep
a dedicated admin token next to a regular `GITHUB_TOKEN`.
"""

from __future__ import annotations

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MANAGED_REPOS_URL = (
    "https://raw.githubusercontent.com/voxpupuli/modulesync_config/master/managed_modules.yml"
)


class AdminSettings(BaseSettings):
    """Settings shared by `sync-labels` and `master-to-main`.

    Environment variables:
    - ORG_ADMIN_GITHUB_TOKEN (or GITHUB_TOKEN)
    - GITHUB_BASE_URL          (optional)
    - LOG_LEVEL                (optional)
    - MANAGED_REPOS_URL        (optional)
    - MANAGED_REPOS_NAMESPACE  (optional)

    Notes:
        Tests can point at a specific env file via `AdminSettings(_env_file=path)`.
    """

    github_token: str = Field(
        default="",
        validation_alias=AliasChoices("ORG_ADMIN_GITHUB_TOKEN", "GITHUB_TOKEN", "github_token"),
        description="GitHub token used for API authentication",
    )
    github_base_url: str = Field(
        default="https://api.github.com",
        validation_alias=AliasChoices("GITHUB_BASE_URL", "github_base_url"),
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL", "log_level"),
        description="Root logging level",
    )

    managed_repos_url: str = Field(
        default=DEFAULT_MANAGED_REPOS_URL,
        validation_alias=AliasChoices("MANAGED_REPOS_URL", "managed_repos_url"),
        description="YAML list of managed repositories, used when no namespace or repo is given",
    )
    managed_repos_namespace: str = Field(
        default="voxpupuli",
        validation_alias=AliasChoices("MANAGED_REPOS_NAMESPACE", "managed_repos_namespace"),
        description="Owner prepended to bare repository names from the managed list",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _require_github_auth(self) -> AdminSettings:
        if not self.github_token.strip():
            raise ValueError("ORG_ADMIN_GITHUB_TOKEN (or GITHUB_TOKEN) is required")
        return self

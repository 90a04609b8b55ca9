"""Resolve which repositories a run operates on.

Three mutually exclusive sources, in order of precedence:
- an explicit repository (or one inferred from a local git remote)
- every repository of a namespace, optionally filtered by a regex
- the managed repository list (a YAML document fetched from a URL or read from disk)
"""

from __future__ import annotations

import logging
import re
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

import requests
import yaml

logger = logging.getLogger(__name__)

PRIMARY_REMOTES: tuple[str, ...] = ("upstream", "origin")

# Matches the trailing "owner/name" of ssh and https remote URLs.
_REMOTE_SLUG_RE = re.compile(r"([\w.-]+/[\w.-]+?)(?:\.git)?/?$")


class UsageError(ValueError):
    """Raised for invalid option combinations or unresolvable remotes."""


class RepositoryLister(Protocol):
    def list_repositories(self, namespace: str, pattern: str = ".*") -> list[str]: ...


@dataclass(frozen=True, slots=True)
class RepositorySelection:
    remote: str | None = None
    namespace: str | None = None
    repo_regex: str | None = None
    url: str | None = None
    default_namespace: str | None = None

    def __post_init__(self) -> None:
        if self.repo_regex is not None and not self.namespace:
            raise UsageError("--repo-regex can only be used in conjunction with --namespace")


def slug_from_url(url: str) -> str | None:
    """Extract "owner/name" from a git remote URL."""

    match = _REMOTE_SLUG_RE.search(url.strip())
    if match is None:
        return None
    return match.group(1)


def get_remote(name: str, cwd: Path | None = None) -> str | None:
    """Return the "owner/name" backing local git remote `name`, if any."""

    try:
        proc = subprocess.run(
            ["git", "remote", "get-url", name],
            cwd=cwd,
            check=False,
            capture_output=True,
            text=True,
        )
    except OSError as e:
        logger.debug("git is not available", extra={"error": str(e)})
        return None

    if proc.returncode != 0:
        return None
    return slug_from_url(proc.stdout)


def primary_remote(cwd: Path | None = None) -> str | None:
    for name in PRIMARY_REMOTES:
        slug = get_remote(name, cwd=cwd)
        if slug:
            return slug
    return None


def fetch_text(url: str) -> str:
    """Read a managed list from an HTTP(S) URL or a local path."""

    if url.startswith(("http://", "https://")):
        resp = requests.get(url, timeout=30)
        resp.raise_for_status()
        return resp.text
    return Path(url).expanduser().read_text(encoding="utf-8")


def parse_managed_repositories(text: str, *, default_namespace: str | None = None) -> list[str]:
    """Parse a managed repository list.

    Accepts either a YAML list of names or a mapping of name to a dict carrying a
    `github` key with the full "owner/name".
    """
    data: Any = yaml.safe_load(text)
    if data is None:
        return []

    entries: list[str] = []
    if isinstance(data, list):
        entries = [str(item) for item in data]
    elif isinstance(data, dict):
        for name, value in data.items():
            if isinstance(value, dict) and value.get("github"):
                entries.append(str(value["github"]))
            else:
                entries.append(str(name))
    else:
        raise ValueError("Managed repository list must be a YAML list or mapping")

    resolved: list[str] = []
    for entry in entries:
        entry = entry.strip()
        if not entry:
            continue
        if "/" not in entry:
            if not default_namespace:
                raise ValueError(f"Repository {entry!r} has no namespace")
            entry = f"{default_namespace}/{entry}"
        resolved.append(entry)
    return resolved


def resolve_repositories(
    selection: RepositorySelection,
    github: RepositoryLister,
    *,
    fetch: Callable[[str], str] = fetch_text,
) -> list[str]:
    """Return the ordered "owner/name" identifiers selected by `selection`."""

    if selection.remote:
        return [selection.remote]

    if selection.namespace:
        pattern = selection.repo_regex or ".*"
        names = github.list_repositories(selection.namespace, pattern)
        return [f"{selection.namespace}/{name}" for name in names]

    if not selection.url:
        raise UsageError("No repositories selected: pass --repo, --remote, --namespace or --url")

    logger.info("Loading managed repository list", extra={"url": selection.url})
    return parse_managed_repositories(
        fetch(selection.url), default_namespace=selection.default_namespace
    )

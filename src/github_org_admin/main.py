"""CLI entrypoints for `sync-labels` and `master-to-main`."""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from github_org_admin import __version__
from github_org_admin.branches import BranchRenamer
from github_org_admin.config import AdminSettings
from github_org_admin.github.client import GitHubClient
from github_org_admin.logging import configure_logging
from github_org_admin.reconcile import LabelReconciler, LabelSyncOptions
from github_org_admin.repositories import (
    RepositorySelection,
    UsageError,
    get_remote,
    primary_remote,
    resolve_repositories,
)

logger = logging.getLogger(__name__)

# `--repo` given without a value.
_PRIMARY_REMOTE = ""


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--version", action="version", version=f"github-org-admin {__version__}"
    )
    parser.add_argument(
        "--oauth",
        default=None,
        metavar="TOKEN",
        help="GitHub token (defaults to ORG_ADMIN_GITHUB_TOKEN / GITHUB_TOKEN)",
    )


def build_labels_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sync-labels",
        description="Check (and optionally fix) repository labels against the canonical set",
    )
    _add_common_arguments(parser)
    parser.add_argument(
        "-f",
        "--fix-labels",
        action="store_true",
        help="Add the missing labels to repo and fix incorrect ones",
    )
    parser.add_argument(
        "-d",
        "--delete-labels",
        action="store_true",
        help="Delete unwanted labels from repo",
    )
    parser.add_argument(
        "-n",
        "--namespace",
        default=None,
        metavar="NAME",
        help="Name of a GitHub namespace to work on",
    )
    parser.add_argument(
        "-r",
        "--repo-regex",
        default=None,
        metavar="REGEX",
        help="Repository regex (requires --namespace)",
    )

    target = parser.add_mutually_exclusive_group()
    target.add_argument(
        "--repo",
        nargs="?",
        const=_PRIMARY_REMOTE,
        default=None,
        help="Repository in the form 'owner/repo'; defaults to the current upstream",
    )
    target.add_argument(
        "--remote",
        default=None,
        help="Name of a local git remote to work on",
    )

    parser.add_argument(
        "--url",
        default=None,
        help="Managed repository list (YAML, URL or path); defaults to MANAGED_REPOS_URL",
    )
    parser.add_argument(
        "--keep-label",
        dest="keep_labels",
        action="append",
        default=[],
        metavar="NAME",
        help="Never delete this label (repeatable)",
    )
    return parser


def build_rename_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="master-to-main",
        description="Rename the 'master' branch to 'main' in every repository of a namespace",
    )
    _add_common_arguments(parser)
    parser.add_argument(
        "-n",
        "--namespace",
        required=True,
        metavar="NAME",
        help="Name of a GitHub namespace to work on",
    )
    return parser


def _load_settings(oauth: str | None) -> AdminSettings | None:
    try:
        if oauth:
            return AdminSettings(github_token=oauth)
        return AdminSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return None


def _target_remote(args: argparse.Namespace) -> str | None:
    if args.remote is not None:
        slug = get_remote(args.remote)
        if not slug:
            raise UsageError(f"No url set for remote {args.remote}")
        return slug

    if args.repo == _PRIMARY_REMOTE:
        slug = primary_remote()
        if not slug:
            raise UsageError("Could not guess primary remote. Try using --remote instead.")
        return slug

    return args.repo


def build_selection(args: argparse.Namespace, settings: AdminSettings) -> RepositorySelection:
    return RepositorySelection(
        remote=_target_remote(args),
        namespace=args.namespace,
        repo_regex=args.repo_regex,
        url=args.url or settings.managed_repos_url,
        default_namespace=settings.managed_repos_namespace,
    )


def labels_main(argv: list[str] | None = None) -> int:
    parser = build_labels_parser()
    args = parser.parse_args(argv)

    settings = _load_settings(args.oauth)
    if settings is None:
        return 2

    configure_logging(settings.log_level)

    try:
        selection = build_selection(args, settings)
    except UsageError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    options = LabelSyncOptions(
        fix_labels=args.fix_labels,
        delete_labels=args.delete_labels,
        keep_labels=tuple(args.keep_labels),
    )

    github = GitHubClient(token=settings.github_token, base_url=settings.github_base_url)
    try:
        repositories = resolve_repositories(selection, github)
        reconciler = LabelReconciler(github=github, options=options)
        reconciler.run(repositories)
        return 0
    except UsageError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except Exception:
        logger.exception("Label sync failed")
        return 1
    finally:
        github.close()


def rename_main(argv: list[str] | None = None) -> int:
    parser = build_rename_parser()
    args = parser.parse_args(argv)

    settings = _load_settings(args.oauth)
    if settings is None:
        return 2

    configure_logging(settings.log_level)

    github = GitHubClient(token=settings.github_token, base_url=settings.github_base_url)
    try:
        repositories = resolve_repositories(RepositorySelection(namespace=args.namespace), github)
        BranchRenamer(github=github).run(repositories)
        return 0
    except Exception:
        logger.exception("Branch rename failed")
        return 1
    finally:
        github.close()


if __name__ == "__main__":
    raise SystemExit(labels_main())

"""Unit tests for the CLI entrypoints (mocked client)."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import Mock

import pytest
from github import GithubException

from github_org_admin import main as cli
from github_org_admin.github.client import BranchInfo, GitHubClient, RepositoryHandle
from github_org_admin.labels import WANTED_LABELS


@pytest.fixture(autouse=True)
def environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("ORG_ADMIN_GITHUB_TOKEN", "GITHUB_TOKEN", "MANAGED_REPOS_URL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("ORG_ADMIN_GITHUB_TOKEN", "test-token")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(cli, "configure_logging", lambda level: None)


@pytest.fixture
def github(monkeypatch: pytest.MonkeyPatch) -> Mock:
    client = Mock(spec=GitHubClient)
    client.get_repository.side_effect = lambda identifier: RepositoryHandle(
        identifier=identifier, is_fork=False, is_archived=False
    )
    client.list_labels.return_value = list(WANTED_LABELS[1:])
    factory = Mock(return_value=client)
    monkeypatch.setattr(cli, "GitHubClient", factory)
    client.factory = factory
    return client


def test_labels_report_for_single_repo(github: Mock, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.labels_main(["--repo", "voxpupuli/puppet-nginx"]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith("Checking for the following labels: ['backwards-incompatible',")
    assert out[1:] == [
        "Delete: voxpupuli/puppet-nginx, []",
        "Create: voxpupuli/puppet-nginx, ['backwards-incompatible']",
        "Fix: voxpupuli/puppet-nginx, []",
    ]
    github.create_labels.assert_not_called()
    github.close.assert_called_once_with()


def test_fix_labels_creates_missing(github: Mock) -> None:
    assert cli.labels_main(["-f", "--repo", "voxpupuli/puppet-nginx"]) == 0

    github.create_labels.assert_called_once_with("voxpupuli/puppet-nginx", (WANTED_LABELS[0],))


def test_namespace_with_regex(github: Mock) -> None:
    github.list_repositories.return_value = ["puppet-nginx"]

    assert cli.labels_main(["-n", "voxpupuli", "-r", "^puppet-"]) == 0

    github.list_repositories.assert_called_once_with("voxpupuli", "^puppet-")
    github.list_labels.assert_called_once_with("voxpupuli/puppet-nginx")


def test_repo_regex_without_namespace_is_usage_error(
    github: Mock, capsys: pytest.CaptureFixture[str]
) -> None:
    assert cli.labels_main(["-r", "^puppet-"]) == 2

    err = capsys.readouterr().err
    assert "--repo-regex can only be used in conjunction with --namespace" in err
    github.factory.assert_not_called()


def test_repo_without_value_uses_primary_remote(
    github: Mock, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(cli, "primary_remote", lambda: "voxpupuli/puppet-nginx")

    assert cli.labels_main(["--repo"]) == 0

    github.list_labels.assert_called_once_with("voxpupuli/puppet-nginx")


def test_repo_without_primary_remote_is_usage_error(
    github: Mock, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(cli, "primary_remote", lambda: None)

    assert cli.labels_main(["--repo"]) == 2
    assert "Could not guess primary remote" in capsys.readouterr().err


def test_unknown_remote_is_usage_error(
    github: Mock, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(cli, "get_remote", lambda name: None)

    assert cli.labels_main(["--remote", "fork"]) == 2
    assert "No url set for remote fork" in capsys.readouterr().err


def test_managed_list_is_default_source(github: Mock, tmp_path: Path) -> None:
    managed = tmp_path / "managed.yml"
    managed.write_text("- puppet-nginx\n- puppet-apache\n", encoding="utf-8")

    assert cli.labels_main(["--url", str(managed)]) == 0

    assert [c.args[0] for c in github.list_labels.call_args_list] == [
        "voxpupuli/puppet-nginx",
        "voxpupuli/puppet-apache",
    ]


def test_missing_token_is_configuration_error(
    github: Mock, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.delenv("ORG_ADMIN_GITHUB_TOKEN")

    assert cli.labels_main(["--repo", "voxpupuli/puppet-nginx"]) == 2
    assert "Configuration error" in capsys.readouterr().err


def test_oauth_flag_supplies_token(github: Mock, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ORG_ADMIN_GITHUB_TOKEN")

    assert cli.labels_main(["--oauth", "cli-token", "--repo", "voxpupuli/puppet-nginx"]) == 0
    assert github.factory.call_args.kwargs["token"] == "cli-token"


def test_api_error_exits_nonzero(github: Mock) -> None:
    github.list_labels.side_effect = GithubException(500, {"message": "boom"}, None)

    assert cli.labels_main(["--repo", "voxpupuli/puppet-nginx"]) == 1
    github.close.assert_called_once_with()


def test_rename_main(github: Mock, capsys: pytest.CaptureFixture[str]) -> None:
    github.list_repositories.return_value = ["puppet-apache", "puppet-nginx"]
    github.get_branch.side_effect = [BranchInfo(name="main"), BranchInfo(name="master")]
    github.rename_branch.return_value = True

    assert cli.rename_main(["--namespace=voxpupuli"]) == 0

    github.list_repositories.assert_called_once_with("voxpupuli", ".*")
    github.rename_branch.assert_called_once_with("voxpupuli/puppet-nginx", "master", "main")
    assert capsys.readouterr().out == "voxpupuli/puppet-nginx: master -> main\n"


def test_rename_requires_namespace(github: Mock) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.rename_main([])

    assert excinfo.value.code == 2

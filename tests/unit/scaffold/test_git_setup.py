"""Tests for git repository setup."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from devsetup.core.models import OutcomeKind
from devsetup.scaffold.git import DEFAULT_INITIAL_COMMIT_MESSAGE, GitSetup


@pytest.fixture
def git(runner, presence) -> GitSetup:
    presence.add("git")
    return GitSetup(runner=runner, timeout=30.0, presence_check=presence)


class TestInitRepository:
    """Tests for GitSetup.init_repository."""

    def test_initializes_with_initial_commit(self, git, runner, tmp_path: Path) -> None:
        outcome = git.init_repository(tmp_path)

        assert outcome.kind == OutcomeKind.SUCCESS
        assert runner.calls == [
            ["git", "init"],
            ["git", "add", "."],
            ["git", "commit", "-m", DEFAULT_INITIAL_COMMIT_MESSAGE],
        ]
        assert all(kw == {"cwd": tmp_path, "timeout": 30.0} for kw in runner.kwargs)

    def test_default_commit_message(self) -> None:
        assert DEFAULT_INITIAL_COMMIT_MESSAGE == "feat: initial project setup from template"

    def test_existing_repository_is_skipped(self, git, runner, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()
        outcome = git.init_repository(tmp_path)
        assert outcome.kind == OutcomeKind.SKIPPED
        assert runner.commands() == ["git rev-parse --verify --quiet HEAD"]

    def test_repository_without_commit_is_completed(self, git, runner, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()
        runner.respond("git rev-parse", returncode=1)

        outcome = git.init_repository(tmp_path)

        assert outcome.kind == OutcomeKind.SUCCESS
        assert outcome.message == "initial commit completed"
        assert runner.commands() == [
            "git rev-parse --verify --quiet HEAD",
            "git add .",
            f"git commit -m {DEFAULT_INITIAL_COMMIT_MESSAGE}",
        ]

    def test_rerun_after_failed_commit_converges(self, git, runner, tmp_path: Path) -> None:
        def make_git_dir(cmd):
            (tmp_path / ".git").mkdir()

        runner.respond("git init", effect=make_git_dir)
        runner.respond("git rev-parse", returncode=1)
        runner.respond("git commit", returncode=128, stderr="unable to auto-detect email address")

        first = git.init_repository(tmp_path)
        assert first.kind == OutcomeKind.FAILED

        runner.respond("git commit")
        second = git.init_repository(tmp_path)

        assert second.kind == OutcomeKind.SUCCESS
        assert runner.commands().count("git init") == 1
        assert runner.commands()[-1] == f"git commit -m {DEFAULT_INITIAL_COMMIT_MESSAGE}"

    def test_missing_git_fails_with_remediation(self, runner, presence, tmp_path: Path) -> None:
        outcome = GitSetup(runner=runner, presence_check=presence).init_repository(tmp_path)
        assert outcome.kind == OutcomeKind.FAILED
        assert outcome.remediation == "install git and re-run devsetup"
        assert runner.calls == []

    def test_commit_failure_is_reported(self, git, runner, tmp_path: Path) -> None:
        runner.respond("git commit", returncode=128, stderr="Please tell me who you are.")
        outcome = git.init_repository(tmp_path)
        assert outcome.kind == OutcomeKind.FAILED
        assert "Please tell me who you are." in outcome.message

    def test_timeout_is_reported(self, git, runner, tmp_path: Path) -> None:
        runner.respond("git add", raises=subprocess.TimeoutExpired(["git", "add"], 30.0))
        outcome = git.init_repository(tmp_path)
        assert outcome.kind == OutcomeKind.FAILED
        assert runner.commands() == ["git init", "git add ."]


class TestConfigureCommitTemplate:
    """Tests for GitSetup.configure_commit_template."""

    TEMPLATE = ".vscode/gitmessage.txt"

    @pytest.fixture
    def repo(self, tmp_path: Path) -> Path:
        (tmp_path / ".git").mkdir()
        (tmp_path / ".vscode").mkdir()
        (tmp_path / self.TEMPLATE).write_text("# <type>: <subject>\n")
        return tmp_path

    def test_sets_template(self, git, runner, repo: Path) -> None:
        runner.respond("git config --get commit.template", returncode=1)
        outcome = git.configure_commit_template(repo, self.TEMPLATE)
        assert outcome.kind == OutcomeKind.SUCCESS
        assert runner.commands()[-1] == f"git config commit.template {self.TEMPLATE}"

    def test_already_configured_is_skipped(self, git, runner, repo: Path) -> None:
        runner.respond("git config --get commit.template", stdout=f"{self.TEMPLATE}\n")
        outcome = git.configure_commit_template(repo, self.TEMPLATE)
        assert outcome.kind == OutcomeKind.SKIPPED
        assert runner.commands() == ["git config --get commit.template"]

    def test_missing_template_is_skipped(self, git, runner, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()
        outcome = git.configure_commit_template(tmp_path, self.TEMPLATE)
        assert outcome.kind == OutcomeKind.SKIPPED
        assert runner.calls == []

    def test_not_a_repository_is_skipped(self, git, runner, repo: Path) -> None:
        (repo / ".git").rmdir()
        outcome = git.configure_commit_template(repo, self.TEMPLATE)
        assert outcome.kind == OutcomeKind.SKIPPED
        assert outcome.message == "not a git repository"

    def test_config_failure_is_reported(self, git, runner, repo: Path) -> None:
        runner.respond("git config --get commit.template", returncode=1)
        runner.respond("git config commit.template", returncode=255, stderr="could not lock config file")
        outcome = git.configure_commit_template(repo, self.TEMPLATE)
        assert outcome.kind == OutcomeKind.FAILED
        assert outcome.remediation == f"run: git config commit.template {self.TEMPLATE}"

"""Git repository setup for a fresh project.

Initializes the repository with an initial commit and points
``commit.template`` at the project's commit message template.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, List, Optional

from devsetup.bootstrap.presence import is_tool_present
from devsetup.core.logging import get_logger
from devsetup.core.models import OutcomeKind, StepCategory, StepOutcome
from devsetup.core.subprocess_runner import DEFAULT_TIMEOUT, CommandRunner, describe_failure, run_command

LOGGER = get_logger(__name__)

DEFAULT_INITIAL_COMMIT_MESSAGE = "feat: initial project setup from template"


class GitCommandError(Exception):
    """A git command failed."""


class GitSetup:
    """Runs the git steps of a project setup."""

    def __init__(
        self,
        runner: CommandRunner = run_command,
        timeout: float = DEFAULT_TIMEOUT,
        presence_check: Callable[[str], bool] = is_tool_present,
    ) -> None:
        self._runner = runner
        self._timeout = timeout
        self._presence_check = presence_check

    def _git(self, project_root: Path, *args: str) -> subprocess.CompletedProcess:
        cmd: List[str] = ["git", *args]
        try:
            result = self._runner(cmd, cwd=project_root, timeout=self._timeout)
        except (OSError, subprocess.SubprocessError) as e:
            raise GitCommandError(f"'{' '.join(cmd)}' could not run: {e}") from e
        if result.returncode != 0:
            raise GitCommandError(f"'{' '.join(cmd)}' failed ({describe_failure(result)})")
        return result

    def _missing_git(self, subject: str) -> Optional[StepOutcome]:
        if self._presence_check("git"):
            return None
        return StepOutcome(
            StepCategory.GIT,
            subject,
            OutcomeKind.FAILED,
            "git not found",
            remediation="install git and re-run devsetup",
        )

    def init_repository(
        self,
        project_root: Path,
        message: str = DEFAULT_INITIAL_COMMIT_MESSAGE,
    ) -> StepOutcome:
        """Create a repository with an initial commit unless one exists.

        A repository left without any commit by an earlier failed run gets
        its initial commit now.
        """
        subject = "repository"
        missing = self._missing_git(subject)
        if missing:
            return missing

        initialized = (project_root / ".git").exists()
        if initialized and self._has_commit(project_root):
            return StepOutcome(StepCategory.GIT, subject, OutcomeKind.SKIPPED, "already initialized")

        try:
            if not initialized:
                self._git(project_root, "init")
            self._git(project_root, "add", ".")
            self._git(project_root, "commit", "-m", message)
        except GitCommandError as e:
            LOGGER.warning(f"Git initialization failed: {e}")
            return StepOutcome(
                StepCategory.GIT,
                subject,
                OutcomeKind.FAILED,
                str(e),
                remediation="finish the initial commit manually",
            )

        if initialized:
            LOGGER.info(f"Completed initial commit in {project_root}")
            return StepOutcome(StepCategory.GIT, subject, OutcomeKind.SUCCESS, "initial commit completed")
        LOGGER.info(f"Initialized git repository in {project_root}")
        return StepOutcome(StepCategory.GIT, subject, OutcomeKind.SUCCESS, "initialized with initial commit")

    def _has_commit(self, project_root: Path) -> bool:
        try:
            result = self._runner(
                ["git", "rev-parse", "--verify", "--quiet", "HEAD"],
                cwd=project_root,
                timeout=self._timeout,
            )
        except (OSError, subprocess.SubprocessError) as e:
            LOGGER.debug(f"Could not read HEAD in {project_root}: {e}")
            return False
        return result.returncode == 0

    def configure_commit_template(self, project_root: Path, template: str) -> StepOutcome:
        """Point ``commit.template`` at ``template`` (project-relative)."""
        subject = "commit.template"
        if not (project_root / template).is_file():
            return StepOutcome(StepCategory.GIT, subject, OutcomeKind.SKIPPED, f"no template found at {template}")
        if not (project_root / ".git").exists():
            return StepOutcome(StepCategory.GIT, subject, OutcomeKind.SKIPPED, "not a git repository")

        missing = self._missing_git(subject)
        if missing:
            return missing

        try:
            current = self._runner(
                ["git", "config", "--get", "commit.template"],
                cwd=project_root,
                timeout=self._timeout,
            )
            if current.returncode == 0 and current.stdout.strip() == template:
                return StepOutcome(StepCategory.GIT, subject, OutcomeKind.SKIPPED, f"already set to {template}")
            self._git(project_root, "config", "commit.template", template)
        except (GitCommandError, OSError, subprocess.SubprocessError) as e:
            return StepOutcome(
                StepCategory.GIT,
                subject,
                OutcomeKind.FAILED,
                str(e),
                remediation=f"run: git config commit.template {template}",
            )

        return StepOutcome(StepCategory.GIT, subject, OutcomeKind.SUCCESS, f"set to {template}")

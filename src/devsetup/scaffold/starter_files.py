"""Starter file bootstrapping.

Creates the default project files of a fresh checkout. A file that already
exists is never touched, so the step can be re-run at any time.
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from devsetup.core.logging import get_logger
from devsetup.core.models import OutcomeKind, StepCategory, StepOutcome

LOGGER = get_logger(__name__)

COMMIT_TEMPLATE_PATH = ".vscode/gitmessage.txt"

DEFAULT_README = "# Project Name\n"

DEFAULT_GITIGNORE = """\
# OS files
.DS_Store
Thumbs.db

# Editors
*.swp
*~
.idea/

# Environments and secrets
.env
.env.*
!.env.example

# Build output and dependencies
dist/
build/
node_modules/
__pycache__/
*.log
"""

DEFAULT_COMMIT_TEMPLATE = """\
# <type>(<scope>): <subject>
#
# <body>
#
# <footer>
#
# Types: feat, fix, docs, style, refactor, perf, test, build, ci, chore, revert
# Subject: imperative mood, no trailing period, at most 72 characters
# Body: explain what and why, wrapped at 72 characters
# Footer: "BREAKING CHANGE: ..." or issue references such as "Closes #123"
"""


@dataclass(frozen=True)
class StarterFile:
    """A file created only when absent.

    Attributes:
        path: Path relative to the project root.
        content: Literal default content.
        template: Optional project-relative file whose content is preferred
            over ``content`` when it exists.
    """

    path: str
    content: str
    template: Optional[str] = None

    def resolve_content(self, project_root: Path) -> Tuple[str, Optional[Path]]:
        """Return the content to write and the template it came from, if any."""
        if self.template:
            template_path = project_root / self.template
            if template_path.is_file():
                return template_path.read_text(encoding="utf-8"), template_path
        return self.content, None


DEFAULT_STARTER_FILES: Tuple[StarterFile, ...] = (
    StarterFile("README.md", DEFAULT_README),
    StarterFile(".gitignore", DEFAULT_GITIGNORE, template=".gitignore.template"),
    StarterFile(COMMIT_TEMPLATE_PATH, DEFAULT_COMMIT_TEMPLATE),
)


def write_if_absent(target: Path, content: str) -> bool:
    """Atomically create ``target`` with ``content`` unless it exists.

    Content is written to a temporary file in the target directory and
    hard-linked into place, so the target is either absent or complete.
    Linking fails instead of replacing a file that appeared meanwhile.

    Returns:
        True if the file was created, False if it already existed.

    Raises:
        OSError: If the file cannot be written.
    """
    if target.exists() or target.is_symlink():
        return False

    target.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        temp_path.chmod(0o644)
        os.link(temp_path, target)
    except FileExistsError:
        LOGGER.debug(f"{target} appeared while writing, leaving it untouched")
        return False
    finally:
        temp_path.unlink(missing_ok=True)
    return True


class StarterFileBootstrapper:
    """Creates the starter files of a project."""

    def __init__(self, manifest: Iterable[StarterFile] = DEFAULT_STARTER_FILES) -> None:
        self._manifest = tuple(manifest)

    @property
    def manifest(self) -> Tuple[StarterFile, ...]:
        return self._manifest

    def bootstrap(self, project_root: Path) -> List[StepOutcome]:
        """Create every missing starter file under ``project_root``.

        Returns:
            One outcome per manifest entry.
        """
        return [self._bootstrap_file(project_root, starter) for starter in self._manifest]

    def _bootstrap_file(self, project_root: Path, starter: StarterFile) -> StepOutcome:
        target = project_root / starter.path

        if target.exists() or target.is_symlink():
            LOGGER.debug(f"{starter.path} already exists, leaving it untouched")
            return StepOutcome(StepCategory.FILES, starter.path, OutcomeKind.SKIPPED, "already exists")

        try:
            content, template = starter.resolve_content(project_root)
            created = write_if_absent(target, content)
        except OSError as e:
            LOGGER.error(f"Failed to create {starter.path}: {e}")
            return StepOutcome(
                StepCategory.FILES,
                starter.path,
                OutcomeKind.FAILED,
                f"could not be created: {e}",
                remediation=f"create {starter.path} manually",
            )

        if not created:
            return StepOutcome(StepCategory.FILES, starter.path, OutcomeKind.SKIPPED, "already exists")

        source = f" from {template.name}" if template else ""
        LOGGER.info(f"Created {target}{source}")
        return StepOutcome(StepCategory.FILES, starter.path, OutcomeKind.SUCCESS, f"created{source}")

"""Typed, immutable setup configuration."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional, Tuple

from devsetup.core.subprocess_runner import DEFAULT_TIMEOUT
from devsetup.install.catalog import build_tool_specs
from devsetup.install.models import DEFAULT_INSTALL_DIR, ToolSpec
from devsetup.scaffold.extensions import DEFAULT_EXTENSIONS
from devsetup.scaffold.git import DEFAULT_INITIAL_COMMIT_MESSAGE
from devsetup.scaffold.starter_files import COMMIT_TEMPLATE_PATH, DEFAULT_STARTER_FILES, StarterFile


@dataclass(frozen=True)
class GitSettings:
    """Git steps of a setup run.

    Attributes:
        init: Initialize a repository when none exists.
        commit_template: Project-relative commit template, or None to skip.
        initial_commit_message: Message of the initial commit.
    """

    init: bool = True
    commit_template: Optional[str] = COMMIT_TEMPLATE_PATH
    initial_commit_message: str = DEFAULT_INITIAL_COMMIT_MESSAGE


@dataclass(frozen=True)
class SetupConfig:
    """Complete configuration of a setup run.

    Built once from defaults, config files and CLI flags, then passed
    unchanged to the orchestrator.
    """

    tools: Tuple[ToolSpec, ...] = field(default_factory=build_tool_specs)
    starter_files: Tuple[StarterFile, ...] = DEFAULT_STARTER_FILES
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    install_dir: Path = DEFAULT_INSTALL_DIR
    timeout: float = DEFAULT_TIMEOUT
    strict: bool = False
    git: GitSettings = field(default_factory=GitSettings)
    skip_tools: bool = False
    skip_extensions: bool = False
    sources: Tuple[str, ...] = ()

    def get_tool(self, name: str) -> Optional[ToolSpec]:
        for tool in self.tools:
            if tool.name == name:
                return tool
        return None

    def with_tools(self, names) -> "SetupConfig":
        """Return a copy limited to the named tools.

        Raises:
            KeyError: If a name is not configured.
        """
        selected = []
        for name in names:
            tool = self.get_tool(name)
            if tool is None:
                available = ", ".join(t.name for t in self.tools)
                raise KeyError(f"Unknown tool: {name}. Available: {available}")
            selected.append(tool)
        return replace(self, tools=tuple(selected))

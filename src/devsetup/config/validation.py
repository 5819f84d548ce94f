"""Configuration validation for devsetup.

Unknown keys produce warnings (with a suggestion for likely typos);
values of the wrong type produce errors that stop the run.
"""

from __future__ import annotations

from dataclasses import dataclass
from difflib import get_close_matches
from enum import Enum
from typing import Any, Dict, List, Optional, Set

from devsetup.core.logging import get_logger
from devsetup.install.catalog import RECIPE_KEYS
from devsetup.install.strategies import PACKAGE_MANAGERS

LOGGER = get_logger(__name__)


class ValidationSeverity(Enum):
    """Severity level for validation issues."""

    ERROR = "error"  # Config will fail at runtime
    WARNING = "warning"  # Likely mistake but config usable


@dataclass
class ConfigValidationIssue:
    """A validation issue for configuration with severity."""

    message: str
    source: str
    severity: ValidationSeverity
    key: Optional[str] = None
    suggestion: Optional[str] = None


VALID_TOP_LEVEL_KEYS: Set[str] = {
    "tools",
    "files",
    "extensions",
    "install_dir",
    "timeout",
    "strict",
    "git",
    "skip_tools",
    "skip_extensions",
}

VALID_GIT_KEYS: Set[str] = {
    "init",
    "commit_template",
    "initial_commit_message",
}

VALID_FILE_KEYS: Set[str] = {
    "path",
    "content",
    "template",
}

BOOLEAN_KEYS = ("strict", "skip_tools", "skip_extensions")


class _Collector:
    def __init__(self, source: str) -> None:
        self.source = source
        self.issues: List[ConfigValidationIssue] = []

    def error(self, message: str, key: str) -> None:
        self.issues.append(ConfigValidationIssue(message, self.source, ValidationSeverity.ERROR, key))

    def unknown(self, key: str, full_key: str, valid: Set[str]) -> None:
        issue = ConfigValidationIssue(
            message=f"Unknown key '{full_key}'",
            source=self.source,
            severity=ValidationSeverity.WARNING,
            key=full_key,
            suggestion=_suggest_key(key, valid),
        )
        self.issues.append(issue)
        _log_warning(issue)


def validate_config(data: Dict[str, Any], source: str) -> List[ConfigValidationIssue]:
    """Validate a configuration dictionary.

    Args:
        data: Config dictionary to validate.
        source: Source file path for messages.

    Returns:
        List of validation issues.
    """
    issues = _Collector(source)

    if not isinstance(data, dict):
        issues.error(f"Config must be a mapping, got {type(data).__name__}", key="")
        return issues.issues

    for key in data:
        if key not in VALID_TOP_LEVEL_KEYS:
            issues.unknown(key, key, VALID_TOP_LEVEL_KEYS)

    for key in BOOLEAN_KEYS:
        if key in data and not isinstance(data[key], bool):
            issues.error(f"'{key}' must be a boolean", key=key)

    timeout = data.get("timeout")
    if timeout is not None:
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            issues.error("'timeout' must be a positive number of seconds", key="timeout")

    install_dir = data.get("install_dir")
    if install_dir is not None and not isinstance(install_dir, str):
        issues.error("'install_dir' must be a string", key="install_dir")

    extensions = data.get("extensions")
    if extensions is not None:
        if not isinstance(extensions, list) or not all(isinstance(e, str) for e in extensions):
            issues.error("'extensions' must be a list of extension IDs", key="extensions")

    _validate_tools(data.get("tools"), issues)
    _validate_files(data.get("files"), issues)
    _validate_git(data.get("git"), issues)

    return issues.issues


def _validate_tools(tools: Any, issues: _Collector) -> None:
    if tools is None:
        return
    if not isinstance(tools, dict):
        issues.error(f"'tools' must be a mapping, got {type(tools).__name__}", key="tools")
        return

    for name, recipe in tools.items():
        prefix = f"tools.{name}"
        if recipe is None or recipe is False:
            continue
        if not isinstance(recipe, dict):
            issues.error(f"'{prefix}' must be a mapping or false", key=prefix)
            continue

        for key in recipe:
            if key not in RECIPE_KEYS:
                issues.unknown(key, f"{prefix}.{key}", set(RECIPE_KEYS))

        managers = recipe.get("package_managers")
        if managers is not None:
            if not isinstance(managers, list):
                issues.error(f"'{prefix}.package_managers' must be a list", key=f"{prefix}.package_managers")
            else:
                for manager in managers:
                    if manager not in PACKAGE_MANAGERS:
                        issues.error(
                            f"Unknown package manager '{manager}' in '{prefix}.package_managers'. "
                            f"Supported: {', '.join(PACKAGE_MANAGERS)}",
                            key=f"{prefix}.package_managers",
                        )

        for key in ("version", "package", "go_module", "download_url", "install_hint"):
            value = recipe.get(key)
            if value is not None and not isinstance(value, str):
                issues.error(f"'{prefix}.{key}' must be a string", key=f"{prefix}.{key}")

        version_args = recipe.get("version_args")
        if version_args is not None and not isinstance(version_args, str):
            if not isinstance(version_args, list) or not all(isinstance(a, str) for a in version_args):
                issues.error(
                    f"'{prefix}.version_args' must be a string or a list of strings",
                    key=f"{prefix}.version_args",
                )

        enabled = recipe.get("enabled")
        if enabled is not None and not isinstance(enabled, bool):
            issues.error(f"'{prefix}.enabled' must be a boolean", key=f"{prefix}.enabled")


def _validate_files(files: Any, issues: _Collector) -> None:
    if files is None:
        return
    if not isinstance(files, list):
        issues.error(f"'files' must be a list, got {type(files).__name__}", key="files")
        return

    for index, entry in enumerate(files):
        prefix = f"files[{index}]"
        if not isinstance(entry, dict):
            issues.error(f"'{prefix}' must be a mapping", key=prefix)
            continue
        for key in entry:
            if key not in VALID_FILE_KEYS:
                issues.unknown(key, f"{prefix}.{key}", VALID_FILE_KEYS)
        path = entry.get("path")
        if not isinstance(path, str) or not path:
            issues.error(f"'{prefix}.path' is required", key=f"{prefix}.path")
        elif path.startswith("/") or ".." in path.split("/"):
            issues.error(f"'{prefix}.path' must stay inside the project", key=f"{prefix}.path")
        for key in ("content", "template"):
            if entry.get(key) is not None and not isinstance(entry[key], str):
                issues.error(f"'{prefix}.{key}' must be a string", key=f"{prefix}.{key}")


def _validate_git(git: Any, issues: _Collector) -> None:
    if git is None:
        return
    if not isinstance(git, dict):
        issues.error(f"'git' must be a mapping, got {type(git).__name__}", key="git")
        return
    for key in git:
        if key not in VALID_GIT_KEYS:
            issues.unknown(key, f"git.{key}", VALID_GIT_KEYS)
    if "init" in git and not isinstance(git["init"], bool):
        issues.error("'git.init' must be a boolean", key="git.init")
    # null disables the commit template
    template = git.get("commit_template")
    if template is not None and (not isinstance(template, str) or not template):
        issues.error("'git.commit_template' must be a path or null", key="git.commit_template")
    if "initial_commit_message" in git:
        message = git["initial_commit_message"]
        if not isinstance(message, str) or not message.strip():
            issues.error(
                "'git.initial_commit_message' must be a non-empty string",
                key="git.initial_commit_message",
            )


def _suggest_key(invalid_key: str, valid_keys: Set[str]) -> Optional[str]:
    """Suggest a valid key for a potential typo.

    Args:
        invalid_key: The invalid key entered.
        valid_keys: Set of valid keys.

    Returns:
        Closest matching valid key, or None if no good match.
    """
    matches = get_close_matches(invalid_key, list(valid_keys), n=1, cutoff=0.6)
    return matches[0] if matches else None


def _log_warning(issue: ConfigValidationIssue) -> None:
    """Log a validation warning."""
    msg = f"{issue.message} in {issue.source}"
    if issue.suggestion:
        msg += f" (did you mean '{issue.suggestion}'?)"
    LOGGER.warning(msg)

"""Loading of devsetup configuration.

A setup run is configured from three layers, lowest first: the built-in
defaults, one YAML file (``--config`` or the project's ``.devsetup.yml``)
and the command-line flags. The layers are deep-merged, validated and
turned into a single immutable SetupConfig.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from devsetup.config.models import GitSettings, SetupConfig
from devsetup.config.validation import ValidationSeverity, validate_config
from devsetup.core.logging import get_logger
from devsetup.install.catalog import build_tool_specs
from devsetup.scaffold.starter_files import DEFAULT_STARTER_FILES, StarterFile

LOGGER = get_logger(__name__)

# Looked up in the project root, first match wins
PROJECT_CONFIG_NAMES = [".devsetup.yml", ".devsetup.yaml", "devsetup.yml", "devsetup.yaml"]

# ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


class ConfigError(Exception):
    """The configuration file is missing, unreadable or invalid."""


def load_config(
    project_root: Path,
    cli_config_path: Optional[Path] = None,
    cli_overrides: Optional[Dict[str, Any]] = None,
) -> SetupConfig:
    """Build the SetupConfig for a run.

    An explicit ``cli_config_path`` replaces the project file; it does not
    stack on top of it. Overrides whose value is None (flags the user did
    not pass) are ignored.

    Args:
        project_root: Directory searched for a project config file.
        cli_config_path: Config file given with ``--config``.
        cli_overrides: Values taken from command-line flags.

    Raises:
        ConfigError: If the config file is missing, malformed or invalid.
    """
    sources: List[str] = []
    merged: Dict[str, Any] = {}

    if cli_config_path:
        if not cli_config_path.exists():
            raise ConfigError(f"Config file not found: {cli_config_path}")
        merged = merge_configs(merged, _load_validated(cli_config_path))
        sources.append(f"custom:{cli_config_path}")
        LOGGER.debug(f"Loaded custom config from {cli_config_path}")
    else:
        project_path = find_project_config(project_root)
        if project_path is not None:
            merged = merge_configs(merged, _load_validated(project_path))
            sources.append(f"project:{project_path}")
            LOGGER.debug(f"Loaded project config from {project_path}")

    if cli_overrides:
        overrides = {k: v for k, v in cli_overrides.items() if v is not None}
        _raise_on_errors(validate_config(overrides, source="command line"), "command line")
        merged = merge_configs(merged, overrides)
        sources.append("cli")
        LOGGER.debug("Applied CLI overrides")

    config = dict_to_config(merged, sources=tuple(sources))
    LOGGER.debug(f"Config loaded from sources: {sources}")
    return config


def _load_validated(path: Path) -> Dict[str, Any]:
    try:
        data = load_yaml_file(path)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    _raise_on_errors(validate_config(data, source=str(path)), str(path))
    return data


def _raise_on_errors(issues, source: str) -> None:
    errors = [i for i in issues if i.severity == ValidationSeverity.ERROR]
    if errors:
        details = "; ".join(e.message for e in errors)
        raise ConfigError(f"Invalid configuration in {source}: {details}")


def find_project_config(project_root: Path) -> Optional[Path]:
    """Return the first devsetup config file present in ``project_root``."""
    candidates = (project_root / name for name in PROJECT_CONFIG_NAMES)
    return next((path for path in candidates if path.is_file()), None)


def load_yaml_file(path: Path) -> Dict[str, Any]:
    """Read a devsetup YAML file and expand ``${VAR}`` references.

    An empty file yields an empty mapping.

    Raises:
        yaml.YAMLError: If the file is not valid YAML.
        ConfigError: If the top level is not a mapping.
    """
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a YAML mapping, got {type(data).__name__}")
    return expand_env_vars(data)


def expand_env_vars(data: Any) -> Any:
    """Expand ``${VAR}`` and ``${VAR:-default}`` in every string of ``data``.

    Mappings and lists are walked recursively; other values pass through.
    """
    if isinstance(data, dict):
        return {key: expand_env_vars(value) for key, value in data.items()}
    if isinstance(data, list):
        return [expand_env_vars(value) for value in data]
    if isinstance(data, str):
        return ENV_VAR_PATTERN.sub(_env_var_replacer, data)
    return data


def _env_var_replacer(match: re.Match[str]) -> str:
    name, default = match.group(1), match.group(2)
    if name in os.environ:
        return os.environ[name]
    if default is None:
        LOGGER.warning(f"${{{name}}} is not set and has no default; using an empty string")
        return ""
    return default


def merge_configs(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``base`` updated with ``overlay``.

    Nested mappings (such as ``git`` or a tool recipe) merge key by key;
    any other value, lists included, is replaced as a whole.
    """
    merged = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = merge_configs(current, value)
        merged[key] = value
    return merged


def _merge_starter_files(entries: List[Dict[str, Any]]) -> Tuple[StarterFile, ...]:
    """Overlay configured starter files on the defaults, keyed by path."""
    files: Dict[str, StarterFile] = {starter.path: starter for starter in DEFAULT_STARTER_FILES}
    for entry in entries:
        path = entry["path"]
        default = files.get(path)
        files[path] = StarterFile(
            path=path,
            content=entry.get("content", default.content if default else ""),
            template=entry.get("template", default.template if default else None),
        )
    return tuple(files.values())


def dict_to_config(data: Dict[str, Any], sources: Tuple[str, ...] = ()) -> SetupConfig:
    """Convert a validated config dictionary to a SetupConfig.

    Args:
        data: Merged configuration dictionary.
        sources: Where the values came from, for diagnostics.

    Returns:
        SetupConfig instance.
    """
    defaults = SetupConfig()
    git_data = data.get("git") or {}

    git = GitSettings(
        init=git_data.get("init", defaults.git.init),
        commit_template=git_data.get("commit_template", defaults.git.commit_template),
        initial_commit_message=git_data.get(
            "initial_commit_message", defaults.git.initial_commit_message
        ),
    )

    install_dir = data.get("install_dir")
    timeout = data.get("timeout")
    extensions = data.get("extensions")

    return SetupConfig(
        tools=build_tool_specs(data.get("tools")),
        starter_files=_merge_starter_files(data.get("files") or []),
        extensions=tuple(extensions) if extensions is not None else defaults.extensions,
        install_dir=Path(install_dir).expanduser() if install_dir else defaults.install_dir,
        timeout=float(timeout) if timeout is not None else defaults.timeout,
        strict=bool(data.get("strict", defaults.strict)),
        git=git,
        skip_tools=bool(data.get("skip_tools", False)),
        skip_extensions=bool(data.get("skip_extensions", False)),
        sources=sources,
    )

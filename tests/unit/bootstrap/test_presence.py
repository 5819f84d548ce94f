"""Tests for tool presence checks."""

from __future__ import annotations

import stat
import sys
from pathlib import Path

import pytest

from devsetup.bootstrap.presence import find_tool, get_tool_version_line, is_tool_present

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="uses POSIX shell scripts")


def _make_tool(directory: Path, name: str, body: str = "exit 0") -> Path:
    path = directory / name
    path.write_text(f"#!/bin/sh\n{body}\n")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


class TestIsToolPresent:
    """Tests for is_tool_present."""

    def test_present_on_search_path(self, tmp_path: Path) -> None:
        _make_tool(tmp_path, "shfmt")
        assert is_tool_present("shfmt", search_path=str(tmp_path)) is True

    def test_absent_is_not_an_error(self, tmp_path: Path) -> None:
        assert is_tool_present("shfmt", search_path=str(tmp_path)) is False

    def test_non_executable_file_is_absent(self, tmp_path: Path) -> None:
        path = tmp_path / "shfmt"
        path.write_text("data")
        path.chmod(stat.S_IRUSR | stat.S_IWUSR)
        assert is_tool_present("shfmt", search_path=str(tmp_path)) is False

    def test_find_tool_returns_path(self, tmp_path: Path) -> None:
        tool = _make_tool(tmp_path, "shellcheck")
        assert find_tool("shellcheck", search_path=str(tmp_path)) == str(tool)


class TestGetToolVersionLine:
    """Tests for get_tool_version_line."""

    def test_prefers_version_line(self, tmp_path: Path) -> None:
        _make_tool(
            tmp_path,
            "shellcheck",
            'echo "ShellCheck - shell script analysis tool"; echo "version: 0.10.0"',
        )
        line = get_tool_version_line("shellcheck", search_path=str(tmp_path))
        assert line == "version: 0.10.0"

    def test_first_line_otherwise(self, tmp_path: Path) -> None:
        _make_tool(tmp_path, "shfmt", 'echo "v3.12.0"')
        assert get_tool_version_line("shfmt", search_path=str(tmp_path)) == "v3.12.0"

    def test_failing_tool_returns_none(self, tmp_path: Path) -> None:
        _make_tool(tmp_path, "shfmt", "exit 3")
        assert get_tool_version_line("shfmt", search_path=str(tmp_path)) is None

    def test_missing_tool_returns_none(self, tmp_path: Path) -> None:
        assert get_tool_version_line("shfmt", search_path=str(tmp_path)) is None

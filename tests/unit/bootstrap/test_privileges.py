"""Tests for privilege detection."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from devsetup.bootstrap.privileges import elevate, is_writable, needs_elevation


class TestIsWritable:
    """Tests for is_writable."""

    def test_existing_writable_directory(self, tmp_path: Path) -> None:
        assert is_writable(tmp_path) is True

    def test_missing_directory_uses_nearest_ancestor(self, tmp_path: Path) -> None:
        assert is_writable(tmp_path / "a" / "b") is True

    def test_access_denied(self, tmp_path: Path) -> None:
        with patch("devsetup.bootstrap.privileges.os.access", return_value=False):
            assert is_writable(tmp_path) is False

    def test_file_is_not_a_writable_directory(self, tmp_path: Path) -> None:
        target = tmp_path / "file"
        target.write_text("x")
        assert is_writable(target) is False


class TestNeedsElevation:
    """Tests for needs_elevation."""

    def test_writable_directory_needs_no_sudo(self, tmp_path: Path) -> None:
        with patch("devsetup.bootstrap.privileges.is_root", return_value=False):
            assert needs_elevation(tmp_path) is False

    def test_unwritable_directory_needs_sudo(self, tmp_path: Path) -> None:
        with patch("devsetup.bootstrap.privileges.is_root", return_value=False):
            with patch("devsetup.bootstrap.privileges.os.access", return_value=False):
                assert needs_elevation(tmp_path) is True

    def test_root_never_needs_sudo(self, tmp_path: Path) -> None:
        with patch("devsetup.bootstrap.privileges.is_root", return_value=True):
            with patch("devsetup.bootstrap.privileges.os.access", return_value=False):
                assert needs_elevation(tmp_path) is False


class TestElevate:
    """Tests for elevate."""

    def test_prefixes_sudo_when_required(self) -> None:
        with patch("devsetup.bootstrap.privileges.is_root", return_value=False):
            assert elevate(["apt-get", "update"], required=True) == ["sudo", "apt-get", "update"]

    def test_no_prefix_when_not_required(self) -> None:
        with patch("devsetup.bootstrap.privileges.is_root", return_value=False):
            assert elevate(["brew", "install", "shfmt"], required=False) == ["brew", "install", "shfmt"]

    def test_no_prefix_for_root(self) -> None:
        with patch("devsetup.bootstrap.privileges.is_root", return_value=True):
            assert elevate(["apt-get", "update"], required=True) == ["apt-get", "update"]

"""Shared fixtures: scripted command runner and presence check."""

from __future__ import annotations

import subprocess
from typing import Callable, Dict, List, Optional, Set, Tuple

import pytest

from devsetup.bootstrap.platform import PlatformInfo


class FakeRunner:
    """Records commands and answers them from scripted responses.

    A response is registered for a command prefix; the longest matching
    prefix wins. Unmatched commands succeed with empty output.
    """

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.kwargs: List[Dict] = []
        self._responses: Dict[str, Tuple[int, str, str, Optional[BaseException], Optional[Callable]]] = {}

    def respond(
        self,
        prefix: str,
        returncode: int = 0,
        stdout: str = "",
        stderr: str = "",
        raises: Optional[BaseException] = None,
        effect: Optional[Callable[[List[str]], None]] = None,
    ) -> None:
        self._responses[prefix] = (returncode, stdout, stderr, raises, effect)

    def __call__(self, cmd, **kwargs) -> subprocess.CompletedProcess:
        cmd = [str(part) for part in cmd]
        self.calls.append(cmd)
        self.kwargs.append(kwargs)
        joined = " ".join(cmd)

        matches = [p for p in self._responses if joined == p or joined.startswith(p + " ")]
        if not matches:
            return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

        returncode, stdout, stderr, raises, effect = self._responses[max(matches, key=len)]
        if raises is not None:
            raise raises
        if effect is not None:
            effect(cmd)
        return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr=stderr)

    def commands(self) -> List[str]:
        return [" ".join(call) for call in self.calls]


class FakePresence:
    """Presence check backed by a set of executable names."""

    def __init__(self, present: Optional[Set[str]] = None) -> None:
        self.present: Set[str] = set(present or ())
        self.queries: List[str] = []

    def __call__(self, name: str, search_path: Optional[str] = None) -> bool:
        self.queries.append(name)
        return name in self.present

    def add(self, name: str) -> None:
        self.present.add(name)


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def presence() -> FakePresence:
    return FakePresence()


@pytest.fixture
def linux_amd64() -> PlatformInfo:
    return PlatformInfo(os="linux", arch="amd64")

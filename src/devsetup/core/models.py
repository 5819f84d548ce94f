"""Outcome models shared by the installer, scaffolding steps and the orchestrator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class OutcomeKind(str, Enum):
    """Terminal state of a single setup step."""

    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"
    FATAL = "fatal"


class StepCategory(str, Enum):
    """Phase of the setup run a step belongs to."""

    PLATFORM = "platform"
    TOOLS = "tools"
    FILES = "files"
    GIT = "git"
    EXTENSIONS = "extensions"


@dataclass(frozen=True)
class StepOutcome:
    """Result of one setup step.

    Attributes:
        category: Phase the step belongs to.
        subject: What the step acted on (tool name, file path, ...).
        kind: Terminal state of the step.
        message: Human-readable description of what happened.
        remediation: Optional hint for failed or fatal steps.
    """

    category: StepCategory
    subject: str
    kind: OutcomeKind
    message: str
    remediation: Optional[str] = None

    def describe(self) -> str:
        """Render the outcome as a single line."""
        line = f"{self.subject}: {self.message}"
        if self.remediation and self.kind in (OutcomeKind.FAILED, OutcomeKind.FATAL):
            line = f"{line} ({self.remediation})"
        return line


@dataclass
class SetupReport:
    """Ordered collection of step outcomes for one run."""

    outcomes: List[StepOutcome] = field(default_factory=list)

    def add(self, outcome: StepOutcome) -> StepOutcome:
        self.outcomes.append(outcome)
        return outcome

    @property
    def has_fatal(self) -> bool:
        return any(o.kind == OutcomeKind.FATAL for o in self.outcomes)

    @property
    def failures(self) -> List[StepOutcome]:
        """Per-step (non-fatal) failures."""
        return [o for o in self.outcomes if o.kind == OutcomeKind.FAILED]

    def by_category(self) -> Dict[StepCategory, List[StepOutcome]]:
        grouped: Dict[StepCategory, List[StepOutcome]] = {}
        for outcome in self.outcomes:
            grouped.setdefault(outcome.category, []).append(outcome)
        return grouped

    def counts(self) -> Dict[str, int]:
        """Number of outcomes per kind."""
        result = {kind.value: 0 for kind in OutcomeKind}
        for outcome in self.outcomes:
            result[outcome.kind.value] += 1
        return result

"""Tests for step outcome models."""

from __future__ import annotations

from devsetup.core.errors import (
    DownloadError,
    FatalSetupError,
    InsecureDownloadError,
    StrategyError,
    StrategyUnavailableError,
    UnsupportedPlatformError,
)
from devsetup.core.models import OutcomeKind, SetupReport, StepCategory, StepOutcome


class TestSetupReport:
    """Tests for SetupReport."""

    def test_counts_and_failures(self) -> None:
        report = SetupReport()
        report.add(StepOutcome(StepCategory.TOOLS, "shellcheck", OutcomeKind.SUCCESS, "installed"))
        failed = report.add(StepOutcome(StepCategory.TOOLS, "shfmt", OutcomeKind.FAILED, "failed"))

        assert report.counts() == {"success": 1, "skipped": 0, "failed": 1, "fatal": 0}
        assert report.failures == [failed]
        assert not report.has_fatal

    def test_fatal_is_not_a_step_failure(self) -> None:
        report = SetupReport()
        report.add(StepOutcome(StepCategory.PLATFORM, "platform", OutcomeKind.FATAL, "unsupported"))
        assert report.has_fatal
        assert report.failures == []

    def test_by_category_keeps_order(self) -> None:
        report = SetupReport()
        report.add(StepOutcome(StepCategory.FILES, "README.md", OutcomeKind.SKIPPED, "already exists"))
        report.add(StepOutcome(StepCategory.GIT, "repository", OutcomeKind.SKIPPED, "already initialized"))
        report.add(StepOutcome(StepCategory.FILES, ".gitignore", OutcomeKind.SKIPPED, "already exists"))

        grouped = report.by_category()
        assert list(grouped) == [StepCategory.FILES, StepCategory.GIT]
        assert [o.subject for o in grouped[StepCategory.FILES]] == ["README.md", ".gitignore"]


class TestErrorTaxonomy:
    """Tests for the error hierarchy."""

    def test_fatal_errors(self) -> None:
        assert issubclass(UnsupportedPlatformError, FatalSetupError)
        assert issubclass(InsecureDownloadError, FatalSetupError)

    def test_recoverable_errors(self) -> None:
        assert issubclass(StrategyUnavailableError, StrategyError)
        assert issubclass(DownloadError, StrategyError)
        assert not issubclass(StrategyError, FatalSetupError)

    def test_remediation(self) -> None:
        error = FatalSetupError("boom", remediation="try again")
        assert str(error) == "boom"
        assert error.remediation == "try again"

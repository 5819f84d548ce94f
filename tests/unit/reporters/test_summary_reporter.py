"""Tests for the setup summary reporter."""

from __future__ import annotations

import io

from devsetup.core.models import OutcomeKind, SetupReport, StepCategory, StepOutcome
from devsetup.reporters.summary_reporter import NEXT_STEPS, SummaryReporter


def _render(report: SetupReport, show_next_steps: bool = True) -> str:
    output = io.StringIO()
    SummaryReporter(show_next_steps=show_next_steps).report(report, output)
    return output.getvalue()


def _report(*outcomes: StepOutcome) -> SetupReport:
    report = SetupReport()
    for outcome in outcomes:
        report.add(outcome)
    return report


class TestSummaryReporter:
    """Tests for SummaryReporter."""

    def test_one_line_per_outcome(self) -> None:
        text = _render(
            _report(
                StepOutcome(StepCategory.PLATFORM, "platform", OutcomeKind.SUCCESS, "detected linux amd64"),
                StepOutcome(StepCategory.TOOLS, "shellcheck", OutcomeKind.SKIPPED, "already installed"),
                StepOutcome(
                    StepCategory.TOOLS,
                    "shfmt",
                    OutcomeKind.FAILED,
                    "all install strategies failed",
                    remediation="See: https://github.com/mvdan/sh#shfmt",
                ),
            )
        )

        assert "Platform\n  [OK] platform: detected linux amd64" in text
        assert "  [--] shellcheck: already installed" in text
        assert "  [!!] shfmt: all install strategies failed (See: https://github.com/mvdan/sh#shfmt)" in text
        assert "Summary: 1 succeeded, 1 skipped, 1 failed" in text

    def test_next_steps_listed(self) -> None:
        text = _render(_report(StepOutcome(StepCategory.FILES, "README.md", OutcomeKind.SUCCESS, "created")))
        assert "Next steps:" in text
        assert f"  1. {NEXT_STEPS[0]}" in text
        assert f"  {len(NEXT_STEPS)}. {NEXT_STEPS[-1]}" in text

    def test_next_steps_can_be_hidden(self) -> None:
        text = _render(_report(), show_next_steps=False)
        assert "Next steps:" not in text
        assert "Summary: 0 succeeded, 0 skipped, 0 failed" in text

    def test_fatal_aborts_without_next_steps(self) -> None:
        text = _render(
            _report(
                StepOutcome(
                    StepCategory.PLATFORM,
                    "platform",
                    OutcomeKind.FATAL,
                    "Unsupported architecture: mips",
                    remediation="use a supported machine",
                )
            )
        )
        assert "[XX] platform: Unsupported architecture: mips (use a supported machine)" in text
        assert "Setup aborted." in text
        assert "Next steps:" not in text

    def test_remediation_hidden_for_success(self) -> None:
        outcome = StepOutcome(StepCategory.GIT, "repository", OutcomeKind.SUCCESS, "initialized", remediation="x")
        assert outcome.describe() == "repository: initialized"

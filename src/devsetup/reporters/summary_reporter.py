"""Summary reporter for devsetup runs."""

from __future__ import annotations

from typing import IO, List

from devsetup.core.models import OutcomeKind, SetupReport, StepCategory

STATUS_ICONS = {
    OutcomeKind.SUCCESS: "[OK]",
    OutcomeKind.SKIPPED: "[--]",
    OutcomeKind.FAILED: "[!!]",
    OutcomeKind.FATAL: "[XX]",
}

CATEGORY_TITLES = {
    StepCategory.PLATFORM: "Platform",
    StepCategory.TOOLS: "Tools",
    StepCategory.FILES: "Starter files",
    StepCategory.GIT: "Git",
    StepCategory.EXTENSIONS: "Extensions",
}

NEXT_STEPS = (
    "Open project in VS Code: code .",
    "Install recommended extensions when prompted",
    "Customize .vscode/copilot-instructions.md for your project",
    "Update README.md with project details",
    "Configure remote repository: git remote add origin <url>",
)


class SummaryReporter:
    """Writes one line per step outcome, grouped by phase.

    Produces:
    - One section per phase with a status icon per step
    - A count of outcomes by kind
    - Next steps (omitted after a fatal error)
    """

    def __init__(self, show_next_steps: bool = True) -> None:
        self._show_next_steps = show_next_steps

    def report(self, result: SetupReport, output: IO[str]) -> None:
        """Format a setup report and write it to output.

        Args:
            result: The collected step outcomes.
            output: Output stream to write to.
        """
        lines = self._format_summary(result)
        output.write("\n".join(lines))
        output.write("\n")

    def _format_summary(self, result: SetupReport) -> List[str]:
        lines: List[str] = []

        for category, outcomes in result.by_category().items():
            lines.append(CATEGORY_TITLES[category])
            for outcome in outcomes:
                lines.append(f"  {STATUS_ICONS[outcome.kind]} {outcome.describe()}")
            lines.append("")

        counts = result.counts()
        lines.append(
            f"Summary: {counts['success']} succeeded, {counts['skipped']} skipped, "
            f"{counts['failed']} failed"
        )

        if result.has_fatal:
            lines.append("Setup aborted.")
            return lines

        if self._show_next_steps:
            lines.append("")
            lines.append("Next steps:")
            for index, step in enumerate(NEXT_STEPS, 1):
                lines.append(f"  {index}. {step}")

        return lines

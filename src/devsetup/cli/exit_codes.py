"""Exit codes for the devsetup CLI."""

from __future__ import annotations

from devsetup.core.models import SetupReport

EXIT_SUCCESS = 0
EXIT_STEP_FAILURE = 1
EXIT_FATAL = 2
EXIT_INVALID_USAGE = 3


def exit_code_for(report: SetupReport, strict: bool = False) -> int:
    """Map a setup report to a process exit code.

    Fatal errors always fail the run; per-step failures only do so in
    strict mode.
    """
    if report.has_fatal:
        return EXIT_FATAL
    if strict and report.failures:
        return EXIT_STEP_FAILURE
    return EXIT_SUCCESS

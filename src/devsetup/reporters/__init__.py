"""Human-readable reporting of setup outcomes."""

from devsetup.reporters.summary_reporter import SummaryReporter

__all__ = ["SummaryReporter"]

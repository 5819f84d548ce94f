"""Setup pipeline orchestration."""

from devsetup.pipeline.orchestrator import SetupOrchestrator

__all__ = ["SetupOrchestrator"]

"""Registry workflow: authenticate, build, tag, push."""

from .orchestrator import RegistryOrchestrator

__all__ = ["RegistryOrchestrator"]

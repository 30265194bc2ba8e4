"""Copy execution and decision bookkeeping services."""

from .file_service import FileService
from .decision_service import DecisionService

__all__ = ["FileService", "DecisionService"]

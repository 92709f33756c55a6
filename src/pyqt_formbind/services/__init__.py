"""
Service layer for form binding.

Cross-cutting concerns shared by the extraction and render passes.
"""

from .signal_service import SignalService

__all__ = [
    "SignalService",
]

"""
Service layer for relation forms.

Cross-cutting concerns shared by form containers.
"""

from .signal_service import SignalService

__all__ = [
    "SignalService",
]

"""
Synchronization between the remote pokemon list, the local favorites store
and the observable state consumed by the presentation layer.
"""

from .coordinator import SyncCoordinator

__all__ = ["SyncCoordinator"]

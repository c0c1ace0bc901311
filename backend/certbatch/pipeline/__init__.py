"""
Pipeline module - batch orchestration

Submodules:
- batch: worker-pool fan-out and pollable handles
- batch_manager: launch, track and persist batches
"""

from .batch import BatchEngine, BatchHandle
from .batch_manager import BatchManager

__all__ = [
    "BatchEngine",
    "BatchHandle",
    "BatchManager",
]

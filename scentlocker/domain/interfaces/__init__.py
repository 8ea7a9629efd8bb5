# Domain Interfaces Package
"""
Abstract base classes defining contracts for infrastructure implementations.
"""

from .embedding_provider import EmbeddingProvider
from .locker_repository import LockerRepository

__all__ = ["EmbeddingProvider", "LockerRepository"]

"""Core search, vibe and matching components for ScentLocker."""

from .catalog import FragranceCatalog
from .locker import Locker
from .locker_stats import LockerStats, compute_locker_stats
from .search_coordinator import SearchCoordinator
from .visual_matcher import VisualMatcher

__all__ = [
    "FragranceCatalog",
    "Locker",
    "LockerStats",
    "SearchCoordinator",
    "VisualMatcher",
    "compute_locker_stats",
]

"""Locker persistence adapters."""

from .json_locker import JsonLockerRepository

__all__ = ["JsonLockerRepository"]

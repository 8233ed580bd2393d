"""Memory module."""

from .memory import IMemory, Memory

__all__ = ["IMemory", "Memory"]

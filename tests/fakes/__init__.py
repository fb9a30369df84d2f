"""Shared test doubles: re-exported memory backends."""

from __future__ import annotations

from shiftsheet.persistence.memory_backend import MemoryQueryClient, MemorySheetStore

__all__ = ["MemoryQueryClient", "MemorySheetStore"]

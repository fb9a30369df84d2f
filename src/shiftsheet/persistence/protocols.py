"""Re-export persistence protocols from core for convenience."""

from __future__ import annotations

from shiftsheet.core.protocols import IQueryClient, ISheetStore

__all__ = ["IQueryClient", "ISheetStore"]

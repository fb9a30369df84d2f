"""Type aliases used across ShiftSheet."""

from __future__ import annotations

from typing import Any

JsonDict = dict[str, Any]
Row = list[str]
Namespace = str
WorkerName = str

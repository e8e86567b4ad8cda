from __future__ import annotations

from typing import NewType

AdjustmentId = NewType("AdjustmentId", str)

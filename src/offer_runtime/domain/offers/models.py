from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from offer_runtime.domain.common.ids import AdjustmentId


@dataclass(frozen=True)
class Offer:
    """A persisted payment offer keyed by its adjustment id."""

    adjustment_id: AdjustmentId
    adjustment_type: str | None
    summary: str
    payment_instrument: list[str] = field(default_factory=list)
    banks: list[str] = field(default_factory=list)
    emi_months: list[str] = field(default_factory=list)

    @staticmethod
    def new(
        adjustment_id: str,
        summary: str | None = None,
        adjustment_type: str | None = None,
        payment_instrument: Iterable[str] | None = None,
        banks: Iterable[str] | None = None,
        emi_months: Iterable[str] | None = None,
    ) -> "Offer":
        return Offer(
            adjustment_id=AdjustmentId(adjustment_id),
            adjustment_type=adjustment_type,
            summary=summary or "",
            payment_instrument=list(payment_instrument or []),
            banks=list(banks or []),
            emi_months=list(emi_months or []),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "adjustment_type": self.adjustment_type,
            "adjustment_id": str(self.adjustment_id),
            "summary": self.summary,
            "payment_instrument": list(self.payment_instrument),
            "banks": list(self.banks),
            "emi_months": list(self.emi_months),
        }

    @staticmethod
    def from_document(document: Mapping[str, Any]) -> "Offer":
        return Offer.new(
            adjustment_id=str(document["adjustment_id"]),
            adjustment_type=document.get("adjustment_type"),
            summary=document.get("summary"),
            payment_instrument=document.get("payment_instrument"),
            banks=document.get("banks"),
            emi_months=document.get("emi_months"),
        )

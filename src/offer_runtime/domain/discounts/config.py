from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DiscountPolicyConfig:
    payable_cap_ratio: float = 0.5  # discount never exceeds floor(amount * ratio)
    suppress_generic_with_cashback: bool = False

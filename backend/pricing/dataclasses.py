from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .models import PricingAgreement, ShippingRate


@dataclass
class PricingInput:
    product_id: int
    service_id: int
    seller_agency_id: int
    buyer_agency_id: int
    cost_in_cents: int
    price_in_cents: int
    is_active: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PricingInput":
        return cls(
            product_id=data.get("product_id"),
            service_id=data.get("service_id"),
            seller_agency_id=data.get("seller_agency_id"),
            buyer_agency_id=data.get("buyer_agency_id"),
            cost_in_cents=data.get("cost_in_cents"),
            price_in_cents=data.get("price_in_cents"),
            is_active=data.get("is_active", True),
        )

    @property
    def is_internal(self) -> bool:
        return self.seller_agency_id == self.buyer_agency_id


@dataclass
class PricingResult:
    agreement: PricingAgreement
    rate: ShippingRate
    is_internal: bool


@dataclass
class RateUpdate:
    price_in_cents: Optional[int] = None
    cost_in_cents: Optional[int] = None
    is_active: Optional[bool] = None


@dataclass
class RateUpdateResult:
    rate: ShippingRate
    agreement: PricingAgreement
    cost_applied: bool


@dataclass(frozen=True)
class ResolvedDeliveryRate:
    rate_in_cents: int
    cost_in_cents: int
    is_inherited: bool
    # agency whose own rate was used; None when a forwarder base rate applied
    source_agency_id: Optional[int]
    delivery_rate_id: Optional[int] = None

    def inherited(self) -> "ResolvedDeliveryRate":
        return ResolvedDeliveryRate(
            rate_in_cents=self.rate_in_cents,
            cost_in_cents=self.cost_in_cents,
            is_inherited=True,
            source_agency_id=self.source_agency_id,
            delivery_rate_id=self.delivery_rate_id,
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            "rate_in_cents": self.rate_in_cents,
            "cost_in_cents": self.cost_in_cents,
            "is_inherited": self.is_inherited,
            "source_agency_id": self.source_agency_id,
        }


@dataclass
class ImportSummary:
    created: int = 0
    conflicts: int = 0
    errors: Dict[int, str] = field(default_factory=dict)

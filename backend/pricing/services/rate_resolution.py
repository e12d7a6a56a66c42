"""
Delivery rate inheritance resolver.

Resolution starts at the requesting agency and climbs one parent at a time.
At every level a city-specific rate beats a city-type rate; a level with no
rate of its own is not an error, it just defers to the parent. The forwarder
root falls back to the forwarder-wide base rates.
"""

from __future__ import annotations

import logging
from typing import Optional, Set

from django.conf import settings

from agencies.models import Agency
from core.errors import NotFoundError, ValidationError
from core.models import City, Service

from ..dataclasses import ResolvedDeliveryRate
from ..models import DeliveryRate

logger = logging.getLogger(__name__)

HEAVY_ITEM_THRESHOLD_LB = 100
HEAVY_ITEM_CHARGE_IN_CENTS = 3000


def _first_rate(base_qs, city_id: Optional[int], city_type: Optional[str]) -> Optional[DeliveryRate]:
    """City-specific rate first, then the city-type rate."""
    if city_id is not None:
        rate = base_qs.filter(city_id=city_id).order_by("-id").first()
        if rate is not None:
            return rate
    if city_type:
        return base_qs.filter(city__isnull=True, city_type=city_type).order_by("-id").first()
    return None


def _resolve_base_rate(forwarder_id: int, carrier_id: int, city_id, city_type) -> Optional[ResolvedDeliveryRate]:
    base_qs = DeliveryRate.objects.filter(
        forwarder_id=forwarder_id,
        carrier_id=carrier_id,
        is_base_rate=True,
        agency__isnull=True,
        is_active=True,
    )
    rate = _first_rate(base_qs, city_id, city_type)
    if rate is None:
        return None
    return ResolvedDeliveryRate(
        rate_in_cents=rate.rate_in_cents,
        cost_in_cents=rate.cost_in_cents,
        is_inherited=True,
        source_agency_id=None,
        delivery_rate_id=rate.id,
    )


def resolve_delivery_rate(
    agency_id: int,
    carrier_id: int,
    city_id: Optional[int],
    city_type: Optional[str],
    _depth: int = 0,
    _visited: Optional[Set[int]] = None,
) -> ResolvedDeliveryRate:
    """
    Effective delivery rate for ``agency_id`` / ``carrier_id`` in a city.

    Returns ``is_inherited=True`` whenever the rate came from any ancestor
    or from the forwarder base rates, even when resolving for the forwarder
    itself. ``source_agency_id`` names the agency whose own rate was used
    and is ``None`` for base rates.
    """
    if city_id is None and not city_type:
        raise ValidationError("city_id or city_type is required")

    visited = _visited if _visited is not None else set()
    max_depth = getattr(settings, "AGENCY_MAX_DEPTH", 32)
    if agency_id in visited or _depth > max_depth:
        logger.warning("Delivery rate resolution aborted at agency %s (cycle or max depth)", agency_id)
        raise NotFoundError(
            f"No base delivery rate found for carrier {carrier_id}, city {city_id} or city type {city_type}"
        )
    visited.add(agency_id)

    agency_row = Agency.objects.filter(pk=agency_id).values("id", "parent_agency_id", "forwarder_id").first()
    if agency_row is None:
        raise NotFoundError(f"Agency with id {agency_id} not found")

    own_qs = DeliveryRate.objects.filter(
        agency_id=agency_id, carrier_id=carrier_id, is_base_rate=False, is_active=True
    )
    own = _first_rate(own_qs, city_id, city_type)
    if own is not None:
        return ResolvedDeliveryRate(
            rate_in_cents=own.rate_in_cents,
            cost_in_cents=own.cost_in_cents,
            is_inherited=False,
            source_agency_id=agency_id,
            delivery_rate_id=own.id,
        )

    parent_id = agency_row["parent_agency_id"]
    if parent_id is not None:
        return resolve_delivery_rate(
            parent_id, carrier_id, city_id, city_type, _depth=_depth + 1, _visited=visited
        ).inherited()

    forwarder_id = agency_row["forwarder_id"] or agency_row["id"]
    base = _resolve_base_rate(forwarder_id, carrier_id, city_id, city_type)
    if base is None:
        logger.warning(
            "No delivery rate for carrier %s city %s type %s (forwarder %s)",
            carrier_id, city_id, city_type, forwarder_id,
        )
        raise NotFoundError(
            f"No base delivery rate found for carrier {carrier_id}, city {city_id} or city type {city_type}"
        )
    return base


def calculate_delivery_fee(
    service_id: int,
    city_id: int,
    agency_id: int,
    requires_home_delivery: bool = True,
) -> int:
    """Delivery fee in cents; pickups and carrier-less services cost nothing."""
    if not requires_home_delivery:
        return 0
    service = Service.objects.filter(pk=service_id).only("id", "carrier_id").first()
    if service is None:
        raise NotFoundError(f"Service with id {service_id} not found")
    if service.carrier_id is None:
        return 0
    city = City.objects.filter(pk=city_id).only("id", "city_type").first()
    if city is None:
        raise NotFoundError(f"City with id {city_id} not found")
    resolved = resolve_delivery_rate(agency_id, service.carrier_id, city.id, city.city_type)
    return resolved.rate_in_cents


def calculate_heavy_item_charge(weight_lb, requires_home_delivery: bool = True) -> int:
    if requires_home_delivery and weight_lb is not None and weight_lb > HEAVY_ITEM_THRESHOLD_LB:
        return HEAVY_ITEM_CHARGE_IN_CENTS
    return 0

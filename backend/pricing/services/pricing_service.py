"""
Pricing Agreement Engine.

An agreement (seller -> buyer cost) and the buyer's shipping rate (sell
price) are always created and updated together in one transaction.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from django.db import IntegrityError, transaction
from django.utils import timezone

from accounts.permissions import Caller, Capability, grant_for, has_full_access
from accounts.scoping import own_subtree
from agencies.hierarchy import get_all_children_recursively
from agencies.models import Agency, AgencyType
from core.db_errors import map_database_error
from core.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from core.models import Product, Service

from ..dataclasses import PricingInput, PricingResult, RateUpdate, RateUpdateResult
from ..models import PricingAgreement, RateScope, ShippingRate

logger = logging.getLogger(__name__)

AGREEMENT_ROLES = ("buyer", "seller")


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_pricing_input(inp: PricingInput) -> None:
    """Field-level checks; raised before any database access."""
    ids = (inp.product_id, inp.service_id, inp.seller_agency_id, inp.buyer_agency_id)
    if not all(_is_int(v) and v > 0 for v in ids):
        raise ValidationError("Missing required fields")
    if not _is_int(inp.cost_in_cents) or inp.cost_in_cents < 0:
        raise ValidationError("cost_in_cents must be a non-negative number")
    if not _is_int(inp.price_in_cents) or inp.price_in_cents < 0:
        raise ValidationError("price_in_cents must be a non-negative number")
    if inp.price_in_cents < inp.cost_in_cents:
        raise ValidationError("price_in_cents must be greater than or equal to cost_in_cents")


def authorize_pricing_creation(caller: Caller, inp: PricingInput) -> None:
    """
    Admins may create any agreement. Agency admins only sell from their own
    agency to one of its descendants. Internal agreements (seller == buyer)
    are reserved for FORWARDER agencies.
    """
    grant = grant_for(caller.role, Capability.PRICING_MANAGE_ALL)
    if grant is None:
        raise AuthorizationError("You don't have permission to create pricing agreements")
    if not has_full_access(caller.role, Capability.PRICING_MANAGE_ALL):
        if caller.agency_id is None:
            raise AuthorizationError("User must belong to an agency")
        if inp.seller_agency_id != caller.agency_id:
            raise AuthorizationError("You can only create pricing agreements where your agency is the seller")
        if inp.buyer_agency_id not in get_all_children_recursively(caller.agency_id):
            raise AuthorizationError("You can only create pricing agreements for your child agencies")

    if inp.is_internal:
        agency = Agency.objects.filter(pk=inp.seller_agency_id).only("id", "agency_type").first()
        if agency is None:
            raise NotFoundError(f"Seller agency with id {inp.seller_agency_id} not found")
        if agency.agency_type != AgencyType.FORWARDER:
            raise ValidationError(
                "Only forwarder agencies can have internal rates (where seller equals buyer)"
            )


def create_pricing_with_rate(inp: PricingInput, now: Optional[datetime] = None) -> PricingResult:
    validate_pricing_input(inp)
    effective_from = now or timezone.now()

    try:
        with transaction.atomic():
            product = Product.objects.filter(pk=inp.product_id).first()
            if product is None:
                raise NotFoundError(f"Product with id {inp.product_id} not found")
            if not product.is_active:
                raise ValidationError(f"Product with id {inp.product_id} is not active")

            service = Service.objects.filter(pk=inp.service_id).first()
            if service is None:
                raise NotFoundError(f"Service with id {inp.service_id} not found")
            if not service.is_active:
                raise ValidationError(f"Service with id {inp.service_id} is not active")

            if not Agency.objects.filter(pk=inp.seller_agency_id).exists():
                raise NotFoundError(f"Seller agency with id {inp.seller_agency_id} not found")
            if not Agency.objects.filter(pk=inp.buyer_agency_id).exists():
                raise NotFoundError(f"Buyer agency with id {inp.buyer_agency_id} not found")

            exists = PricingAgreement.objects.filter(
                seller_agency_id=inp.seller_agency_id,
                buyer_agency_id=inp.buyer_agency_id,
                product_id=inp.product_id,
                service_id=inp.service_id,
            ).exists()
            if exists:
                raise ConflictError(
                    f"Pricing agreement already exists for seller {inp.seller_agency_id}, "
                    f"buyer {inp.buyer_agency_id}, and product {inp.product_id}"
                )

            agreement = PricingAgreement.objects.create(
                seller_agency_id=inp.seller_agency_id,
                buyer_agency_id=inp.buyer_agency_id,
                product_id=inp.product_id,
                service_id=inp.service_id,
                price_in_cents=inp.cost_in_cents,
                is_active=inp.is_active,
                effective_from=effective_from,
            )
            rate = ShippingRate.objects.create(
                product_id=inp.product_id,
                service_id=inp.service_id,
                agency_id=inp.buyer_agency_id,
                pricing_agreement=agreement,
                scope=RateScope.PUBLIC,
                price_in_cents=inp.price_in_cents,
                is_active=inp.is_active,
                effective_from=effective_from,
            )
    except IntegrityError as exc:
        # concurrent creator won the unique constraint race
        raise map_database_error(exc) from exc

    logger.info(
        "Created pricing agreement %s and rate %s (seller=%s buyer=%s internal=%s)",
        agreement.id, rate.id, inp.seller_agency_id, inp.buyer_agency_id, inp.is_internal,
    )
    return PricingResult(agreement=agreement, rate=rate, is_internal=inp.is_internal)


def get_rates_by_service_id_and_agency_id(service_id: int, agency_id: int) -> List[Dict[str, Any]]:
    rates = (
        ShippingRate.objects.filter(service_id=service_id, agency_id=agency_id)
        .select_related("product", "pricing_agreement")
        .order_by("id")
    )
    return [
        {
            "id": rate.id,
            "name": rate.product.name,
            "description": rate.product.description,
            "unit": rate.product.unit,
            "price_in_cents": rate.price_in_cents,
            "cost_in_cents": rate.pricing_agreement.price_in_cents,
            "is_active": rate.is_active,
        }
        for rate in rates
    ]


def get_services_with_rates(agency_id: int) -> List[Dict[str, Any]]:
    services = Service.objects.filter(is_active=True).order_by("id")
    return [
        {
            "id": service.id,
            "name": service.name,
            "description": service.description,
            "service_type": service.service_type,
            "carrier_id": service.carrier_id,
            "rates": get_rates_by_service_id_and_agency_id(service.id, agency_id),
        }
        for service in services
    ]


def _check_rate_owner(caller: Caller, rate: ShippingRate, message: str) -> None:
    if has_full_access(caller.role, Capability.PRICING_MANAGE_ALL):
        return
    if grant_for(caller.role, Capability.PRICING_MANAGE_ALL) is None:
        raise AuthorizationError("You don't have permission to manage pricing")
    if caller.agency_id is None:
        raise AuthorizationError("User must belong to an agency")
    if not own_subtree(caller).contains(rate.agency_id):
        raise AuthorizationError(message)


def update_shipping_rate(caller: Caller, rate_id: int, changes: RateUpdate) -> RateUpdateResult:
    """
    Update a rate and its agreement together. ``cost_in_cents`` only reaches
    the agreement when the caller is an admin or the agreement's seller;
    otherwise it is ignored.
    """
    with transaction.atomic():
        rate = ShippingRate.objects.select_for_update().filter(pk=rate_id).first()
        if rate is None:
            raise NotFoundError("Shipping rate not found")
        agreement = PricingAgreement.objects.select_for_update().filter(pk=rate.pricing_agreement_id).first()
        if agreement is None:
            raise NotFoundError("Agreement not found")

        _check_rate_owner(caller, rate, "You can only update shipping rates for your agency or child agencies")
        can_modify_agreement = has_full_access(caller.role, Capability.PRICING_MANAGE_ALL) or (
            agreement.seller_agency_id == caller.agency_id
        )
        cost_applied = changes.cost_in_cents is not None and can_modify_agreement

        new_price = rate.price_in_cents if changes.price_in_cents is None else changes.price_in_cents
        new_cost = changes.cost_in_cents if cost_applied else agreement.price_in_cents
        if new_price < 0 or new_cost < 0:
            raise ValidationError("Prices must be non-negative")
        if new_price < new_cost:
            raise ValidationError("price_in_cents must be greater than or equal to cost_in_cents")

        rate.price_in_cents = new_price
        rate_fields = ["price_in_cents", "updated_at"]
        agreement_fields = []
        if cost_applied:
            agreement.price_in_cents = new_cost
            agreement_fields.append("price_in_cents")
        if changes.is_active is not None:
            rate.is_active = changes.is_active
            agreement.is_active = changes.is_active
            rate_fields.append("is_active")
            agreement_fields.append("is_active")

        rate.save(update_fields=rate_fields)
        if agreement_fields:
            agreement.save(update_fields=agreement_fields + ["updated_at"])

    logger.info(
        "Updated shipping rate %s (price=%s cost_applied=%s active=%s)",
        rate.id, rate.price_in_cents, cost_applied, rate.is_active,
    )
    return RateUpdateResult(rate=rate, agreement=agreement, cost_applied=cost_applied)


def toggle_rate_status(caller: Caller, rate_id: int, is_active) -> ShippingRate:
    """Flip only the rate's ``is_active``; the agreement is left untouched."""
    if not isinstance(is_active, bool):
        raise ValidationError("is_active must be a boolean")
    rate = ShippingRate.objects.filter(pk=rate_id).first()
    if rate is None:
        raise NotFoundError("Shipping rate not found")
    _check_rate_owner(
        caller, rate, "You can only toggle status for your agency's rates or your child agencies' rates"
    )
    rate.is_active = is_active
    rate.save(update_fields=["is_active", "updated_at"])
    return rate


def get_product_pricing(product_id: int):
    return (
        PricingAgreement.objects.filter(product_id=product_id)
        .select_related("product", "service", "seller_agency", "buyer_agency")
        .prefetch_related("shipping_rates")
        .order_by("-created_at", "-id")
    )


def get_agency_pricing(agency_id: int, role: str = "buyer"):
    if role not in AGREEMENT_ROLES:
        raise ValidationError("role must be 'buyer' or 'seller'")
    where = {"buyer_agency_id": agency_id} if role == "buyer" else {"seller_agency_id": agency_id}
    return (
        PricingAgreement.objects.filter(**where)
        .select_related("product", "service", "seller_agency", "buyer_agency")
        .prefetch_related("shipping_rates")
        .order_by("-created_at", "-id")
    )

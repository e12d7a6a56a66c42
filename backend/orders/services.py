from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from django.conf import settings
from django.db import transaction

from accounts.permissions import Caller, Capability
from accounts.scoping import resolve_agency_scope
from agencies.models import Agency
from core.errors import AuthorizationError, NotFoundError, ValidationError
from core.models import ServiceType

from .models import Order, Parcel, ParcelEvent, ParcelStatus
from .status import build_order_status_details, calculate_order_status, summarize

logger = logging.getLogger(__name__)

READY_FOR_DISPATCH = "dispatch"
READY_FOR_CONTAINER = "container"


def _check_visible(caller: Optional[Caller], agency_id: int, message: str) -> None:
    if caller is None:
        return
    scope = resolve_agency_scope(caller, Capability.PARCEL_VIEW_ALL)
    if not scope.contains(agency_id):
        raise AuthorizationError(message)


def get_order_status_summary(order_id: int, caller: Optional[Caller] = None) -> Dict[str, Any]:
    order = Order.objects.filter(pk=order_id).only("id", "agency_id").first()
    if order is None:
        raise NotFoundError(f"Order with id {order_id} not found")
    _check_visible(caller, order.agency_id, "You are not authorized to view this order")
    statuses = list(Parcel.objects.filter(order_id=order_id).values_list("status", flat=True))
    return summarize(statuses, order_id=order_id)


def update_order_status_from_parcels(order_id: int) -> str:
    """Recompute and persist the order's status and status_details."""
    parcels = list(
        Parcel.objects.filter(order_id=order_id)
        .order_by("id")
        .values("status", "dispatch_id", "container_id", "container_name")
    )
    new_status = calculate_order_status(p["status"] for p in parcels)
    details = build_order_status_details(parcels)
    updated = Order.objects.filter(pk=order_id).update(status=new_status, status_details=details)
    if not updated:
        raise NotFoundError(f"Order with id {order_id} not found")
    return new_status


def update_parcel_status(
    hbl: str,
    status: str,
    notes: str = "",
    user=None,
    caller: Optional[Caller] = None,
) -> Parcel:
    """Move a parcel to ``status``, record the event and refresh its order."""
    if status not in ParcelStatus.BASE:
        raise ValidationError(f"Invalid parcel status {status}")
    with transaction.atomic():
        parcel = Parcel.objects.select_for_update().filter(hbl=hbl).first()
        if parcel is None:
            raise NotFoundError(f"Parcel with HBL {hbl} not found")
        _check_visible(caller, parcel.agency_id, "You are not authorized to update this parcel")
        parcel.status = status
        parcel.save(update_fields=["status", "updated_at"])
        ParcelEvent.objects.create(parcel=parcel, status=status, notes=notes or "", user=user)
        order_status = update_order_status_from_parcels(parcel.order_id)
    logger.info("Parcel %s moved to %s (order %s now %s)", hbl, status, parcel.order_id, order_status)
    return parcel


def _positive_int(value, name: str, default: int) -> int:
    if value in (None, ""):
        return default
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a positive integer")
    if parsed < 1:
        raise ValidationError(f"{name} must be a positive integer")
    return parsed


def list_parcels(caller: Caller, params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Scoped, paginated parcel listing. ``ready_for`` narrows to parcels that
    can still go into a dispatch or a container.
    """
    page = _positive_int(params.get("page"), "page", 1)
    limit = min(
        _positive_int(params.get("limit"), "limit", getattr(settings, "DEFAULT_PAGE_SIZE", 25)),
        getattr(settings, "MAX_PAGE_SIZE", 1000),
    )

    scope = resolve_agency_scope(caller, Capability.PARCEL_VIEW_ALL)
    qs = Parcel.objects.filter(**scope.filter_kwargs("agency_id"))

    ready_for = params.get("ready_for")
    if ready_for == READY_FOR_DISPATCH:
        qs = qs.filter(dispatch_id__isnull=True, status__in=ParcelStatus.READY_FOR_DISPATCH)
    elif ready_for == READY_FOR_CONTAINER:
        qs = qs.filter(
            container_id__isnull=True,
            flight_id__isnull=True,
            status__in=ParcelStatus.READY_FOR_CONTAINER,
            service__service_type=ServiceType.MARITIME,
        )
        if caller.agency_id is not None:
            forwarder_id = Agency.objects.filter(pk=caller.agency_id).values_list("forwarder_id", flat=True).first()
            if forwarder_id is not None:
                qs = qs.filter(forwarder_id=forwarder_id)
    elif ready_for:
        raise ValidationError("ready_for must be 'dispatch' or 'container'")

    if params.get("status"):
        qs = qs.filter(status=params["status"])
    if params.get("hbl"):
        qs = qs.filter(hbl__icontains=params["hbl"])
    if params.get("order_id"):
        qs = qs.filter(order_id=_positive_int(params["order_id"], "order_id", 0))

    total = qs.count()
    offset = (page - 1) * limit
    rows = list(qs.order_by("-created_at", "-id")[offset:offset + limit])
    return {"rows": rows, "total": total, "page": page, "limit": limit}

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from django.db import transaction

from accounts.models import CustomUser, Roles
from accounts.permissions import Access, Caller, Capability, grant_for, require
from accounts.scoping import own_subtree, resolve_agency_scope
from accounts.services import create_agency_user_in_transaction
from core.errors import AuthorizationError, ConflictError, ValidationError

from .hierarchy import get_agency
from .models import Agency, AgencyType

logger = logging.getLogger(__name__)


def list_agencies(caller: Caller) -> List[Agency]:
    scope = resolve_agency_scope(caller, Capability.AGENCY_VIEW_ALL)
    return list(Agency.objects.filter(**scope.filter_kwargs("id")).order_by("name"))


def get_visible_agency(caller: Caller, agency_id: int) -> Agency:
    agency = get_agency(agency_id)
    scope = resolve_agency_scope(caller, Capability.AGENCY_VIEW_ALL)
    if not scope.contains(agency.id):
        raise AuthorizationError("You are not authorized to access this agency")
    return agency


def _resolve_parent(caller: Caller, requested_parent_id: Optional[int], requested_type: str) -> Tuple[Agency, str]:
    grant = grant_for(caller.role, Capability.AGENCY_CREATE)
    require(grant is not None, "You are not authorized to create agencies")

    own_agency = get_agency(caller.agency_id) if caller.agency_id is not None else None
    if grant == Access.OWN:
        if own_agency is None or own_agency.agency_type not in AgencyType.PARENT_TYPES:
            raise AuthorizationError("Only FORWARDER or RESELLER agencies can create agencies")

    if own_agency is not None and own_agency.agency_type == AgencyType.RESELLER and grant == Access.OWN:
        # resellers only ever create plain agencies directly under themselves
        return own_agency, AgencyType.AGENCY

    parent_id = requested_parent_id or (own_agency.id if own_agency is not None else None)
    if parent_id is None:
        raise ValidationError("parent_agency_id is required")
    parent = get_agency(parent_id)
    if grant == Access.OWN and not own_subtree(caller).contains(parent.id):
        raise AuthorizationError("Parent agency is outside your hierarchy")
    if parent.agency_type not in AgencyType.PARENT_TYPES:
        raise ValidationError("Parent agency must be a FORWARDER or RESELLER")
    return parent, requested_type


def create_child_agency(caller: Caller, data: Dict[str, Any]) -> Tuple[Agency, CustomUser]:
    """
    Create an agency under a FORWARDER/RESELLER parent together with its
    AGENCY_ADMIN user, in one transaction.
    """
    payload = dict(data)
    admin_data = payload.pop("admin_user")
    parent, agency_type = _resolve_parent(
        caller, payload.pop("parent_agency_id", None), payload.pop("agency_type", AgencyType.AGENCY)
    )

    with transaction.atomic():
        if Agency.objects.filter(name=payload["name"]).exists():
            raise ConflictError(f"Agency with name {payload['name']} already exists")
        agency = Agency.objects.create(
            parent_agency=parent,
            agency_type=agency_type,
            forwarder_id=parent.forwarder_id or parent.id,
            **payload,
        )
        admin_user = create_agency_user_in_transaction(
            agency=agency, role=Roles.AGENCY_ADMIN, **admin_data
        )

    logger.info(
        "Created agency %s (%s) under %s with admin user %s",
        agency.id, agency.agency_type, parent.id, admin_user.id,
    )
    return agency, admin_user


def update_agency(caller: Caller, agency_id: int, changes: Dict[str, Any]) -> Agency:
    agency = get_visible_agency(caller, agency_id)
    if not changes:
        return agency
    name = changes.get("name")
    if name and name != agency.name and Agency.objects.filter(name=name).exclude(pk=agency.pk).exists():
        raise ConflictError(f"Agency with name {name} already exists")
    for key, value in changes.items():
        setattr(agency, key, value)
    agency.save(update_fields=list(changes.keys()) + ["updated_at"])
    logger.info("Updated agency %s fields %s", agency.id, sorted(changes.keys()))
    return agency

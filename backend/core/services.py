from __future__ import annotations

import logging
from typing import List

from django.db import IntegrityError, transaction

from accounts.permissions import Access, Caller, Capability, can_access, grant_for
from core.db_errors import map_database_error
from core.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError

from .models import Carrier

logger = logging.getLogger(__name__)


def get_carrier(carrier_id: int) -> Carrier:
    carrier = Carrier.objects.filter(pk=carrier_id).first()
    if carrier is None:
        raise NotFoundError("Carrier not found")
    return carrier


def list_carriers(caller: Caller) -> List[Carrier]:
    """All carriers for view-all roles, otherwise only the caller's own carrier."""
    grant = grant_for(caller.role, Capability.CARRIER_VIEW_ALL)
    if grant == Access.ALL:
        return list(Carrier.objects.order_by("name"))
    if grant is None or caller.carrier_id is None:
        raise AuthorizationError("You are not authorized to view carriers")
    return list(Carrier.objects.filter(pk=caller.carrier_id))


def create_carrier(caller: Caller, name: str, is_active: bool = True) -> Carrier:
    if not can_access(caller, Capability.CARRIER_CREATE):
        raise AuthorizationError("You are not authorized to create carriers")
    name = (name or "").strip()
    if not name:
        raise ValidationError("Carrier name is required")
    if Carrier.objects.filter(name__iexact=name).exists():
        raise ConflictError(f"Carrier with name {name} already exists")
    try:
        with transaction.atomic():
            carrier = Carrier.objects.create(name=name, is_active=is_active)
    except IntegrityError as exc:
        raise map_database_error(exc) from exc
    logger.info("Created carrier %s (%s)", carrier.id, carrier.name)
    return carrier


def delete_carrier(caller: Caller, carrier_id: int) -> None:
    """Delete a carrier that no longer has services or users attached."""
    if not can_access(caller, Capability.CARRIER_DELETE):
        raise AuthorizationError("You are not authorized to delete carriers")
    carrier = get_carrier(carrier_id)
    if carrier.services.exists():
        raise ValidationError("Cannot delete carrier with associated services")
    if carrier.users.exists():
        raise ValidationError("Cannot delete carrier with associated users")
    carrier.delete()
    logger.info("Deleted carrier %s", carrier_id)

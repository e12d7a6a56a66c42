from __future__ import annotations

import logging
from typing import Optional

from django.db import transaction

from agencies.hierarchy import get_agency
from core.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from core.models import Carrier

from .models import CustomUser, Roles
from .permissions import Caller, Capability, can_access, can_manage_role
from .scoping import own_subtree

logger = logging.getLogger(__name__)


def _ensure_unique(username: str, email: str) -> None:
    if CustomUser.objects.filter(username=username).exists():
        raise ConflictError(f"User with username {username} already exists")
    if email and CustomUser.objects.filter(email__iexact=email).exists():
        raise ConflictError(f"User with email {email} already exists")


def _create(username, email, password, role, first_name="", last_name="", agency=None, carrier=None) -> CustomUser:
    user = CustomUser(
        username=username,
        email=email,
        first_name=first_name,
        last_name=last_name,
        role=role,
        agency=agency,
        carrier=carrier,
    )
    user.set_password(password)
    user.save()
    return user


def create_agency_user(
    caller: Caller,
    username: str,
    email: str,
    password: str,
    role: str,
    agency_id: Optional[int] = None,
    first_name: str = "",
    last_name: str = "",
) -> CustomUser:
    """
    Create a user inside an agency. The role must sit at or below the
    caller's role and the agency must be within the caller's subtree unless
    the caller is an administrator.
    """
    if role in Roles.CARRIER_USER_ROLES and role != Roles.MESSENGER:
        raise ValidationError("Carrier roles must be created through the carrier users endpoint")
    if not can_manage_role(caller.role, role):
        raise AuthorizationError(f"You cannot create users with role {role}")

    target_agency_id = agency_id or caller.agency_id
    if target_agency_id is None:
        raise ValidationError("agency_id is required")
    agency = get_agency(target_agency_id)
    if not caller.is_admin and not own_subtree(caller).contains(agency.id):
        raise AuthorizationError("You can only create users for your agency or its descendants")

    with transaction.atomic():
        user = create_agency_user_in_transaction(agency, role, username, email, password, first_name, last_name)
    logger.info("Created user %s (%s) in agency %s", user.id, role, agency.id)
    return user


def create_agency_user_in_transaction(
    agency, role: str, username: str, email: str, password: str, first_name: str = "", last_name: str = ""
) -> CustomUser:
    """Insert an agency user; the caller owns the surrounding transaction."""
    _ensure_unique(username, email)
    return _create(username, email, password, role, first_name, last_name, agency=agency)


def create_carrier_user(
    caller: Caller,
    carrier_id: int,
    username: str,
    email: str,
    password: str,
    role: str,
    first_name: str = "",
    last_name: str = "",
) -> CustomUser:
    carrier = Carrier.objects.filter(pk=carrier_id).first()
    if carrier is None:
        raise NotFoundError("Carrier not found")
    if not can_access(caller, Capability.CARRIER_MANAGE, owner_carrier_id=carrier.id):
        raise AuthorizationError("You are not authorized to create users for this carrier")
    if role not in Roles.CARRIER_USER_ROLES:
        raise ValidationError(
            f"Invalid role for carrier user. Allowed roles: {', '.join(Roles.CARRIER_USER_ROLES)}"
        )
    if not can_manage_role(caller.role, role):
        raise AuthorizationError(f"You cannot create users with role {role}")

    with transaction.atomic():
        _ensure_unique(username, email)
        user = _create(username, email, password, role, first_name, last_name, carrier=carrier)
    logger.info("Created carrier user %s (%s) for carrier %s", user.id, role, carrier.id)
    return user

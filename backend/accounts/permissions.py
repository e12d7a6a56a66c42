"""
Role hierarchy, capability table and the pure ``can_access`` decision.

Handlers never inline role checks; they ask ``can_access`` (or
``has_capability``) and raise ``AuthorizationError`` on a ``False``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional

from rest_framework import permissions

from core.errors import AuthorizationError

from .models import Roles

if TYPE_CHECKING:
    from .scoping import AgencyScope


ROLE_HIERARCHY: Dict[str, int] = {
    Roles.ROOT: 9,
    Roles.ADMINISTRATOR: 8,
    Roles.FORWARDER_ADMIN: 7,
    Roles.CARRIER_OWNER: 6,
    Roles.CARRIER_ADMIN: 6,
    Roles.FORWARDER_RESELLER: 5,
    Roles.AGENCY_SUPERVISOR: 4,
    Roles.AGENCY_ADMIN: 3,
    Roles.AGENCY_SALES: 2,
    Roles.CARRIER_ISSUES_MANAGER: 2,
    Roles.MESSENGER: 1,
    Roles.CARRIER_WAREHOUSE_WORKER: 1,
    Roles.USER: 0,
}


def get_role_level(role: str) -> int:
    return ROLE_HIERARCHY.get(role, -1)


def get_roles_equal_or_below(role: str) -> List[str]:
    """Roles a user with ``role`` may see or assign, highest first."""
    level = get_role_level(role)
    eligible = [r for r, lvl in ROLE_HIERARCHY.items() if lvl <= level]
    return sorted(eligible, key=lambda r: ROLE_HIERARCHY[r], reverse=True)


def can_manage_role(role: str, target_role: str) -> bool:
    if role not in ROLE_HIERARCHY or target_role not in ROLE_HIERARCHY:
        return False
    return ROLE_HIERARCHY[role] >= ROLE_HIERARCHY[target_role]


class Access:
    ALL = "all"
    OWN = "own"


class Capability:
    CARRIER_VIEW_ALL = "CARRIER_VIEW_ALL"
    CARRIER_MANAGE = "CARRIER_MANAGE"
    CARRIER_CREATE = "CARRIER_CREATE"
    CARRIER_DELETE = "CARRIER_DELETE"
    ISSUE_VIEW_ALL = "ISSUE_VIEW_ALL"
    ISSUE_MANAGE = "ISSUE_MANAGE"
    ISSUE_DELETE = "ISSUE_DELETE"
    AGENCY_VIEW_ALL = "AGENCY_VIEW_ALL"
    AGENCY_CREATE = "AGENCY_CREATE"
    PARCEL_VIEW_ALL = "PARCEL_VIEW_ALL"
    PRICING_MANAGE_ALL = "PRICING_MANAGE_ALL"


_AGENCY_STAFF = (
    Roles.FORWARDER_ADMIN,
    Roles.FORWARDER_RESELLER,
    Roles.AGENCY_SUPERVISOR,
    Roles.AGENCY_ADMIN,
    Roles.AGENCY_SALES,
)

# role x action -> Access.ALL (any owner) | Access.OWN (own agency subtree or own carrier)
CAPABILITIES: Dict[str, Dict[str, str]] = {
    Capability.CARRIER_VIEW_ALL: {
        Roles.ROOT: Access.ALL,
        Roles.ADMINISTRATOR: Access.ALL,
        Roles.FORWARDER_ADMIN: Access.ALL,
        Roles.CARRIER_OWNER: Access.OWN,
        Roles.CARRIER_ADMIN: Access.OWN,
        Roles.CARRIER_ISSUES_MANAGER: Access.OWN,
    },
    Capability.CARRIER_MANAGE: {
        Roles.ROOT: Access.ALL,
        Roles.ADMINISTRATOR: Access.ALL,
        Roles.FORWARDER_ADMIN: Access.ALL,
        Roles.CARRIER_OWNER: Access.OWN,
        Roles.CARRIER_ADMIN: Access.OWN,
    },
    Capability.CARRIER_CREATE: {
        Roles.ROOT: Access.ALL,
        Roles.ADMINISTRATOR: Access.ALL,
        Roles.FORWARDER_ADMIN: Access.ALL,
    },
    Capability.CARRIER_DELETE: {
        Roles.ROOT: Access.ALL,
        Roles.ADMINISTRATOR: Access.ALL,
    },
    Capability.ISSUE_VIEW_ALL: {
        Roles.ROOT: Access.ALL,
        Roles.ADMINISTRATOR: Access.ALL,
        Roles.CARRIER_OWNER: Access.ALL,
        Roles.CARRIER_ADMIN: Access.ALL,
        Roles.CARRIER_ISSUES_MANAGER: Access.ALL,
        **{role: Access.OWN for role in _AGENCY_STAFF},
    },
    Capability.ISSUE_MANAGE: {
        Roles.ROOT: Access.ALL,
        Roles.ADMINISTRATOR: Access.ALL,
        Roles.CARRIER_OWNER: Access.ALL,
        Roles.CARRIER_ADMIN: Access.ALL,
        Roles.CARRIER_ISSUES_MANAGER: Access.ALL,
    },
    Capability.ISSUE_DELETE: {
        Roles.ROOT: Access.ALL,
        Roles.ADMINISTRATOR: Access.ALL,
        Roles.CARRIER_OWNER: Access.ALL,
        Roles.CARRIER_ADMIN: Access.ALL,
    },
    Capability.AGENCY_VIEW_ALL: {
        Roles.ROOT: Access.ALL,
        Roles.ADMINISTRATOR: Access.ALL,
        Roles.FORWARDER_ADMIN: Access.ALL,
        Roles.FORWARDER_RESELLER: Access.OWN,
        Roles.AGENCY_SUPERVISOR: Access.OWN,
        Roles.AGENCY_ADMIN: Access.OWN,
        Roles.AGENCY_SALES: Access.OWN,
    },
    Capability.AGENCY_CREATE: {
        Roles.ROOT: Access.ALL,
        Roles.ADMINISTRATOR: Access.ALL,
        Roles.AGENCY_ADMIN: Access.OWN,
    },
    Capability.PARCEL_VIEW_ALL: {
        Roles.ROOT: Access.ALL,
        Roles.ADMINISTRATOR: Access.ALL,
        Roles.CARRIER_OWNER: Access.ALL,
        Roles.CARRIER_ADMIN: Access.ALL,
        Roles.MESSENGER: Access.OWN,
        **{role: Access.OWN for role in _AGENCY_STAFF},
    },
    Capability.PRICING_MANAGE_ALL: {
        Roles.ROOT: Access.ALL,
        Roles.ADMINISTRATOR: Access.ALL,
        Roles.FORWARDER_ADMIN: Access.OWN,
        Roles.AGENCY_ADMIN: Access.OWN,
    },
}


@dataclass(frozen=True)
class Caller:
    """Identity of the requesting user as seen by authorization checks."""

    user_id: Optional[int]
    role: str
    agency_id: Optional[int] = None
    carrier_id: Optional[int] = None

    @classmethod
    def from_user(cls, user) -> "Caller":
        return cls(
            user_id=getattr(user, "pk", None),
            role=getattr(user, "role", Roles.USER),
            agency_id=getattr(user, "agency_id", None),
            carrier_id=getattr(user, "carrier_id", None),
        )

    @property
    def is_admin(self) -> bool:
        return self.role in Roles.ADMIN_ROLES


def grant_for(role: str, action: str) -> Optional[str]:
    return CAPABILITIES.get(action, {}).get(role)


def has_capability(role: str, action: str) -> bool:
    return grant_for(role, action) is not None


def has_full_access(role: str, action: str) -> bool:
    return grant_for(role, action) == Access.ALL


def can_access(
    caller: Caller,
    action: str,
    owner_agency_id: Optional[int] = None,
    owner_carrier_id: Optional[int] = None,
    scope: Optional["AgencyScope"] = None,
) -> bool:
    """
    Decide whether ``caller`` may perform ``action`` on a resource owned by
    ``owner_agency_id`` and/or ``owner_carrier_id``.

    ``scope`` is the caller's pre-resolved visible agency set; without it an
    OWN grant only matches the caller's own agency. No owner at all means the
    action itself is being checked.
    """
    grant = grant_for(caller.role, action)
    if grant is None:
        return False
    if grant == Access.ALL:
        return True
    if owner_carrier_id is not None:
        return caller.carrier_id is not None and caller.carrier_id == owner_carrier_id
    if owner_agency_id is not None:
        if scope is not None:
            return scope.contains(owner_agency_id)
        return caller.agency_id is not None and caller.agency_id == owner_agency_id
    return True


def require(allowed: bool, message: str = "You are not authorized to perform this action") -> None:
    if not allowed:
        raise AuthorizationError(message)


class HasCapability(permissions.BasePermission):
    """
    Gate a view on ``view.required_capability``; object-level ownership is
    checked later by the handler through ``can_access``.
    """

    message = "You are not authorized to perform this action"

    def has_permission(self, request, view):
        action = getattr(view, "required_capability", None)
        if not request.user or not request.user.is_authenticated:
            return False
        if action is None:
            return True
        return has_capability(getattr(request.user, "role", ""), action)


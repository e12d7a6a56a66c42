from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Optional

from agencies.hierarchy import get_agency_and_descendant_ids
from core.errors import AuthorizationError, ValidationError

from .permissions import Access, Caller, Capability, grant_for

# Resource types whose carrier staff legitimately cross agency boundaries
CARRIER_WIDE_CAPABILITIES = (Capability.ISSUE_VIEW_ALL, Capability.PARCEL_VIEW_ALL)


@dataclass(frozen=True)
class AgencyScope:
    """Visible agency set for a caller: everything, or an explicit id set."""

    all: bool = False
    agency_ids: FrozenSet[int] = field(default_factory=frozenset)

    def contains(self, agency_id: Optional[int]) -> bool:
        if self.all:
            return True
        return agency_id is not None and agency_id in self.agency_ids

    def filter_kwargs(self, field_name: str = "agency_id") -> Dict[str, Iterable[int]]:
        """Queryset kwargs restricting rows to this scope (empty when unrestricted)."""
        if self.all:
            return {}
        return {f"{field_name}__in": sorted(self.agency_ids)}


def resolve_agency_scope(caller: Caller, action: str) -> AgencyScope:
    """
    Visible agencies for ``caller`` under ``action``: elevated roles see
    everything, carrier staff see everything for carrier-wide resources,
    everyone else sees their agency plus its descendants.
    """
    grant = grant_for(caller.role, action)
    if grant == Access.ALL:
        return AgencyScope(all=True)
    if caller.carrier_id is not None and action in CARRIER_WIDE_CAPABILITIES:
        return AgencyScope(all=True)
    if caller.agency_id is None:
        if caller.carrier_id is not None:
            raise AuthorizationError("You are not authorized to view these resources")
        raise ValidationError("User must belong to an agency or carrier")
    if grant is None:
        raise AuthorizationError("You are not authorized to view these resources")
    return AgencyScope(agency_ids=frozenset(get_agency_and_descendant_ids(caller.agency_id)))


def own_subtree(caller: Caller) -> AgencyScope:
    """The caller's agency and descendants, regardless of role."""
    if caller.agency_id is None:
        return AgencyScope()
    return AgencyScope(agency_ids=frozenset(get_agency_and_descendant_ids(caller.agency_id)))

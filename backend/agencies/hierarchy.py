"""
Agency Hierarchy Store.

The agency tree is kept as rows keyed by id with ``parent_agency_id`` as a
back-reference. Walks are iterative (one query per level) and guarded by a
visited set plus ``settings.AGENCY_MAX_DEPTH`` so corrupted data can never
loop forever.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Set

from django.conf import settings

from core.errors import NotFoundError

from .models import Agency

logger = logging.getLogger(__name__)


def _max_depth() -> int:
    return getattr(settings, "AGENCY_MAX_DEPTH", 32)


def get_agency(agency_id: int) -> Agency:
    agency = Agency.objects.filter(pk=agency_id).first()
    if agency is None:
        raise NotFoundError(f"Agency with id {agency_id} not found")
    return agency


def get_children(agency_id: int) -> List[Agency]:
    """Direct children only."""
    get_agency(agency_id)
    return list(Agency.objects.filter(parent_agency_id=agency_id).order_by("id"))


def get_all_children_recursively(agency_id: int) -> List[int]:
    """
    Full descendant id list of ``agency_id`` (the agency itself excluded),
    expanded breadth-first one level per query.
    """
    get_agency(agency_id)
    visited: Set[int] = {agency_id}
    descendants: List[int] = []
    frontier = [agency_id]
    depth = 0
    while frontier:
        if depth >= _max_depth():
            logger.warning("Agency tree below %s exceeds max depth %s; truncating", agency_id, _max_depth())
            break
        child_ids = list(
            Agency.objects.filter(parent_agency_id__in=frontier).order_by("id").values_list("id", flat=True)
        )
        next_frontier = []
        for child_id in child_ids:
            if child_id in visited:
                logger.warning("Cycle detected in agency tree at %s", child_id)
                continue
            visited.add(child_id)
            descendants.append(child_id)
            next_frontier.append(child_id)
        frontier = next_frontier
        depth += 1
    return descendants


def get_parent(agency_id: int) -> Optional[Agency]:
    agency = get_agency(agency_id)
    if agency.parent_agency_id is None:
        return None
    return Agency.objects.filter(pk=agency.parent_agency_id).first()


def get_ancestors(agency_id: int) -> List[int]:
    """Parent, grandparent, ... up to the root, nearest first."""
    agency = get_agency(agency_id)
    visited: Set[int] = {agency.id}
    ancestors: List[int] = []
    parent_id = agency.parent_agency_id
    while parent_id is not None:
        if parent_id in visited or len(ancestors) >= _max_depth():
            logger.warning("Ancestor walk from %s stopped at %s (cycle or max depth)", agency_id, parent_id)
            break
        visited.add(parent_id)
        ancestors.append(parent_id)
        parent_id = (
            Agency.objects.filter(pk=parent_id).values_list("parent_agency_id", flat=True).first()
        )
    return ancestors


def get_root(agency_id: int) -> Agency:
    """The FORWARDER root of the subtree containing ``agency_id``."""
    ancestors = get_ancestors(agency_id)
    if not ancestors:
        return get_agency(agency_id)
    return get_agency(ancestors[-1])


def get_agency_and_descendant_ids(agency_id: int) -> List[int]:
    return [agency_id] + get_all_children_recursively(agency_id)


def is_descendant(ancestor_id: int, agency_id: int) -> bool:
    return agency_id in get_all_children_recursively(ancestor_id)

"""
Order/parcel status aggregation.

An order's status is derived from its parcels: when every parcel shares one
status that is the order status; otherwise the most advanced parcel status
wins, reported in its PARTIALLY_* form when one exists.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, List, Optional

from .models import ParcelStatus

_PRIORITY = {status: index for index, status in enumerate(ParcelStatus.BASE)}


def status_priority(status: str) -> int:
    return _PRIORITY.get(status, 0)


def is_base_status(status: str) -> bool:
    return status in _PRIORITY


def calculate_order_status(parcel_statuses: Iterable[str]) -> str:
    statuses = [s for s in parcel_statuses if is_base_status(s)]
    if not statuses:
        return ParcelStatus.IN_AGENCY
    if len(set(statuses)) == 1:
        return statuses[0]
    most_advanced = max(statuses, key=status_priority)
    return ParcelStatus.PARTIAL.get(most_advanced, most_advanced)


def build_order_status_details(parcels: Iterable) -> str:
    """
    Human readable location summary, e.g. "2 in Dispatch #5, 1 in agency"
    or "All in Container MSKU-1".

    ``parcels`` are objects (or dicts) exposing ``dispatch_id``,
    ``container_id`` and optionally ``container_name``.
    """
    rows = list(parcels)
    if not rows:
        return ""

    def attr(row, name):
        if isinstance(row, dict):
            return row.get(name)
        return getattr(row, name, None)

    agency_count = 0
    groups: Dict[str, Dict] = {}
    for row in rows:
        container_id = attr(row, "container_id")
        dispatch_id = attr(row, "dispatch_id")
        if container_id is not None:
            group = groups.setdefault(f"container:{container_id}", {"n": 0, "id": container_id, "name": None})
            group["n"] += 1
            group["name"] = attr(row, "container_name") or group["name"]
        elif dispatch_id is not None:
            group = groups.setdefault(f"dispatch:{dispatch_id}", {"n": 0, "id": dispatch_id})
            group["n"] += 1
        else:
            agency_count += 1

    total = len(rows)
    single = total == 1
    parts: List[str] = []
    if agency_count:
        parts.append("In agency" if single else f"{agency_count} in agency")
    for key, group in groups.items():
        if key.startswith("dispatch:"):
            label = f"Dispatch #{group['id']}"
        else:
            label = f"Container {group['name']}" if group["name"] else f"Container #{group['id']}"
        parts.append(f"In {label}" if single else f"{group['n']} in {label}")

    if len(parts) == 1 and total > 1:
        return "All in " + parts[0].split(" in ", 1)[1]
    return ", ".join(parts)


def status_breakdown(parcel_statuses: Iterable[str]) -> Dict[str, int]:
    return dict(Counter(parcel_statuses))


def summarize(parcel_statuses: Iterable[str], order_id: Optional[int] = None) -> Dict:
    statuses = list(parcel_statuses)
    summary = {
        "order_status": calculate_order_status(statuses),
        "parcels_count": len(statuses),
        "status_breakdown": status_breakdown(statuses),
    }
    if order_id is not None:
        summary["order_id"] = order_id
    return summary

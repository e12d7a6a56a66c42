from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from accounts.permissions import Caller, Capability, has_full_access
from accounts.scoping import resolve_agency_scope
from core.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from orders.models import Order, Parcel

from .models import Issue, IssuePriority, IssueStatus, IssueType

logger = logging.getLogger(__name__)

_ENUM_FILTERS = {
    "status": IssueStatus.CHOICES,
    "priority": IssuePriority.CHOICES,
    "type": IssueType.CHOICES,
}

UPDATABLE_FIELDS = ("title", "description", "type", "priority", "status", "assigned_to_id", "resolution_notes")


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


def _get_issue(issue_id: int) -> Issue:
    issue = Issue.objects.select_related("order", "parcel", "agency").filter(pk=issue_id).first()
    if issue is None:
        raise NotFoundError("Issue not found")
    return issue


def create_issue(caller: Caller, data: Dict[str, Any], user=None) -> Issue:
    """
    Open an issue against an order. Only one issue may exist per order; the
    issue belongs to the creator's agency.
    """
    order_id = data.get("order_id")
    order = Order.objects.filter(pk=order_id).first() if order_id else None
    if order is None:
        raise NotFoundError("Order not found")
    if not data.get("title") or not data.get("description"):
        raise ValidationError("Title and description are required")
    if caller.agency_id is None:
        raise ValidationError("User must belong to an agency")

    parcel_id = data.get("parcel_id")
    if parcel_id and not Parcel.objects.filter(pk=parcel_id, order_id=order.id).exists():
        raise ValidationError(f"Parcel {parcel_id} does not belong to order {order.id}")

    with transaction.atomic():
        if Issue.objects.filter(order_id=order.id).exists():
            raise ConflictError(f"An issue with order ID {order.id} already exists")
        issue = Issue.objects.create(
            title=data["title"],
            description=data["description"],
            type=data.get("type") or IssueType.COMPLAINT,
            priority=data.get("priority") or IssuePriority.MEDIUM,
            order=order,
            parcel_id=parcel_id or None,
            agency_id=caller.agency_id,
            created_by_id=caller.user_id if user is None else user.pk,
            assigned_to_id=data.get("assigned_to_id"),
        )
    logger.info("Issue %s opened on order %s by user %s", issue.id, order.id, caller.user_id)
    return issue


def list_issues(caller: Caller, params: Dict[str, Any]) -> Dict[str, Any]:
    """Paginated issue listing within the caller's visible agencies."""
    page = _positive_int(params.get("page"), "page", 1)
    limit = min(_positive_int(params.get("limit"), "limit", 100), getattr(settings, "MAX_PAGE_SIZE", 1000))

    scope = resolve_agency_scope(caller, Capability.ISSUE_VIEW_ALL)
    qs = Issue.objects.filter(**scope.filter_kwargs("agency_id"))

    for name, choices in _ENUM_FILTERS.items():
        value = params.get(name)
        if not value:
            continue
        allowed = [c[0] for c in choices]
        if value not in allowed:
            raise ValidationError(f"Invalid {name}. Must be one of: {', '.join(allowed)}")
        qs = qs.filter(**{name: value})

    for name in ("assigned_to_id", "order_id", "parcel_id"):
        if params.get(name):
            qs = qs.filter(**{name: _positive_int(params[name], name, 0)})

    if params.get("agency_id") and scope.all:
        qs = qs.filter(agency_id=_positive_int(params["agency_id"], "agency_id", 0))

    total = qs.count()
    offset = (page - 1) * limit
    rows = list(qs.select_related("order", "parcel").order_by("-created_at", "-id")[offset:offset + limit])
    return {"rows": rows, "total": total, "page": page, "limit": limit}


def get_issue(caller: Caller, issue_id: int) -> Issue:
    issue = _get_issue(issue_id)
    scope = resolve_agency_scope(caller, Capability.ISSUE_VIEW_ALL)
    if not scope.contains(issue.agency_id):
        raise AuthorizationError("You don't have permission to view this issue")
    return issue


def _is_manager(caller: Caller) -> bool:
    return has_full_access(caller.role, Capability.ISSUE_MANAGE)


def update_issue(caller: Caller, issue_id: int, changes: Dict[str, Any]) -> Issue:
    issue = _get_issue(issue_id)
    allowed = (
        _is_manager(caller)
        or issue.created_by_id == caller.user_id
        or (issue.assigned_to_id is not None and issue.assigned_to_id == caller.user_id)
    )
    if not allowed:
        raise AuthorizationError("You don't have permission to update this issue")

    fields = []
    for name in UPDATABLE_FIELDS:
        if name in changes:
            setattr(issue, name, changes[name])
            fields.append(name)
    if fields:
        issue.save(update_fields=fields + ["updated_at"])
    return issue


def resolve_issue(caller: Caller, issue_id: int, resolution_notes: Optional[str] = None, user=None) -> Issue:
    issue = _get_issue(issue_id)
    is_assignee = issue.assigned_to_id is not None and issue.assigned_to_id == caller.user_id
    if not (is_assignee or _is_manager(caller)):
        raise AuthorizationError("You don't have permission to resolve this issue")

    issue.status = IssueStatus.RESOLVED
    issue.resolved_at = timezone.now()
    issue.resolved_by_id = caller.user_id if user is None else user.pk
    issue.resolution_notes = resolution_notes or ""
    issue.save(update_fields=["status", "resolved_at", "resolved_by", "resolution_notes", "updated_at"])
    logger.info("Issue %s resolved by user %s", issue.id, issue.resolved_by_id)
    return issue


def delete_issue(caller: Caller, issue_id: int) -> None:
    issue = _get_issue(issue_id)
    if not has_full_access(caller.role, Capability.ISSUE_DELETE):
        raise AuthorizationError("Only administrators can delete issues")
    issue.delete()
    logger.info("Issue %s deleted by user %s", issue_id, caller.user_id)

import pytest

from accounts.models import Roles
from agencies.models import Agency, AgencyType
from core.models import Carrier
from issues.models import Issue, IssuePriority, IssueStatus, IssueType
from orders.models import Order

pytestmark = pytest.mark.django_db


@pytest.fixture
def order(agency_chain):
    return Order.objects.create(agency=agency_chain.agency)


@pytest.fixture
def creator(agency_chain, make_user):
    return make_user(Roles.AGENCY_SALES, agency=agency_chain.agency)


def _open(client, order, **extra):
    payload = {"order_id": order.id, "title": "Box crushed", "description": "Arrived damaged"}
    payload.update(extra)
    return client.post("/api/v1/issues", payload, format="json")


class TestCreateIssue:
    def test_defaults_and_ownership(self, order, creator, client_for, agency_chain):
        resp = _open(client_for(creator), order)
        assert resp.status_code == 201
        body = resp.json()
        assert body["type"] == IssueType.COMPLAINT
        assert body["priority"] == IssuePriority.MEDIUM
        assert body["status"] == IssueStatus.OPEN
        assert body["agency_id"] == agency_chain.agency.id
        assert body["created_by_id"] == creator.id

    def test_one_issue_per_order(self, order, creator, client_for):
        client = client_for(creator)
        _open(client, order)
        resp = _open(client, order)
        assert resp.status_code == 409
        assert resp.json()["error"] == f"An issue with order ID {order.id} already exists"

    def test_missing_order(self, creator, client_for):
        resp = client_for(creator).post(
            "/api/v1/issues", {"order_id": 999, "title": "t", "description": "d"}, format="json"
        )
        assert resp.status_code == 404
        assert resp.json()["error"] == "Order not found"

    def test_title_and_description_required(self, order, creator, client_for):
        resp = _open(client_for(creator), order, description="")
        assert resp.status_code == 400
        assert resp.json()["error"] == "Title and description are required"

    def test_user_without_agency(self, order, make_user, client_for):
        carrier = Carrier.objects.create(name="C")
        resp = _open(client_for(make_user(Roles.CARRIER_ADMIN, carrier=carrier)), order)
        assert resp.status_code == 400
        assert resp.json()["error"] == "User must belong to an agency"


class TestListIssues:
    def test_scoped_listing(self, agency_chain, make_user, client_for):
        other = Agency.objects.create(name="Other", agency_type=AgencyType.FORWARDER)
        mine = make_user(Roles.AGENCY_SALES, agency=agency_chain.agency)
        theirs = make_user(Roles.AGENCY_SALES, agency=other)
        _open(client_for(mine), Order.objects.create(agency=agency_chain.agency))
        _open(client_for(theirs), Order.objects.create(agency=other))

        body = client_for(make_user(Roles.AGENCY_SUPERVISOR, agency=agency_chain.forwarder)).get(
            "/api/v1/issues"
        ).json()
        assert body["total"] == 1
        assert body["limit"] == 100
        assert body["rows"][0]["agency_id"] == agency_chain.agency.id

        carrier = Carrier.objects.create(name="C")
        body = client_for(make_user(Roles.CARRIER_ISSUES_MANAGER, carrier=carrier)).get("/api/v1/issues").json()
        assert body["total"] == 2

    def test_invalid_status_filter(self, creator, client_for):
        resp = client_for(creator).get("/api/v1/issues", {"status": "WHATEVER"})
        assert resp.status_code == 400
        assert resp.json()["error"].startswith("Invalid status. Must be one of: OPEN")

    def test_agency_filter_only_for_elevated(self, agency_chain, order, creator, make_user, client_for):
        _open(client_for(creator), order)
        root = client_for(make_user(Roles.ROOT))
        assert root.get("/api/v1/issues", {"agency_id": agency_chain.agency.id}).json()["total"] == 1
        assert root.get("/api/v1/issues", {"agency_id": agency_chain.reseller.id}).json()["total"] == 0


class TestIssueLifecycle:
    def _issue(self, client, order):
        return _open(client, order).json()["id"]

    def test_other_agency_cannot_view(self, agency_chain, order, creator, make_user, client_for):
        issue_id = self._issue(client_for(creator), order)
        other = Agency.objects.create(name="Other", agency_type=AgencyType.FORWARDER)
        resp = client_for(make_user(Roles.AGENCY_ADMIN, agency=other)).get(f"/api/v1/issues/{issue_id}")
        assert resp.status_code == 403
        assert resp.json()["error"] == "You don't have permission to view this issue"

    def test_creator_updates(self, order, creator, client_for):
        client = client_for(creator)
        issue_id = self._issue(client, order)
        resp = client.patch(f"/api/v1/issues/{issue_id}", {"priority": IssuePriority.HIGH}, format="json")
        assert resp.status_code == 200
        assert resp.json()["status"] == "success"
        assert resp.json()["data"]["priority"] == IssuePriority.HIGH

    def test_bystander_cannot_update_or_resolve(self, agency_chain, order, creator, make_user, client_for):
        issue_id = self._issue(client_for(creator), order)
        bystander = client_for(make_user(Roles.AGENCY_ADMIN, agency=agency_chain.agency))
        resp = bystander.patch(f"/api/v1/issues/{issue_id}", {"title": "x"}, format="json")
        assert resp.status_code == 403
        resp = bystander.post(f"/api/v1/issues/{issue_id}/resolve", {}, format="json")
        assert resp.json()["error"] == "You don't have permission to resolve this issue"

    def test_assignee_resolves(self, agency_chain, order, creator, make_user, client_for):
        assignee = make_user(Roles.AGENCY_SUPERVISOR, agency=agency_chain.agency)
        issue_id = self._issue(client_for(creator), order)
        Issue.objects.filter(pk=issue_id).update(assigned_to=assignee)

        resp = client_for(assignee).post(
            f"/api/v1/issues/{issue_id}/resolve", {"resolution_notes": "refunded"}, format="json"
        )
        assert resp.status_code == 200
        issue = Issue.objects.get(pk=issue_id)
        assert issue.status == IssueStatus.RESOLVED
        assert issue.resolved_by_id == assignee.id
        assert issue.resolution_notes == "refunded"
        assert issue.resolved_at is not None

    def test_carrier_issue_manager_can_manage(self, order, creator, make_user, client_for):
        issue_id = self._issue(client_for(creator), order)
        carrier = Carrier.objects.create(name="C")
        manager = client_for(make_user(Roles.CARRIER_ISSUES_MANAGER, carrier=carrier))
        assert manager.patch(
            f"/api/v1/issues/{issue_id}", {"status": IssueStatus.IN_PROGRESS}, format="json"
        ).status_code == 200
        assert manager.post(f"/api/v1/issues/{issue_id}/resolve", {}, format="json").status_code == 200
        assert manager.delete(f"/api/v1/issues/{issue_id}").status_code == 403

    def test_only_admins_delete(self, order, creator, make_user, client_for):
        issue_id = self._issue(client_for(creator), order)
        resp = client_for(creator).delete(f"/api/v1/issues/{issue_id}")
        assert resp.status_code == 403
        assert resp.json()["error"] == "Only administrators can delete issues"

        assert client_for(make_user(Roles.ADMINISTRATOR)).delete(f"/api/v1/issues/{issue_id}").status_code == 204
        assert not Issue.objects.filter(pk=issue_id).exists()

    def test_missing_issue(self, make_user, client_for):
        assert client_for(make_user(Roles.ROOT)).get("/api/v1/issues/12345").status_code == 404

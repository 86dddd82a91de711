"""Test maintenance request submission and status updates."""
import pytest

from nivaasi.errors import NotFound, ValidationError
from nivaasi.models import MaintenanceRequest, Notification
from nivaasi.services import maintenance
from tests.conftest import OWNER_EMAIL, TENANT_EMAIL


def test_submit_request(client, property_, connected_tenant):
    resp = client.post("/api/maintenance/submit", json={
        "tenantEmail": TENANT_EMAIL,
        "title": "Leaking tap",
        "description": "Kitchen tap drips all night",
    })
    assert resp.status_code == 201
    request = resp.get_json()["request"]
    assert request["status"] == "pending"
    assert request["priority"] == "medium"
    assert request["propertyId"] == property_.id
    assert request["tenantId"] == connected_tenant.id
    assert request["completedAt"] is None


def test_submit_notifies_owner(app, connected_tenant):
    request = maintenance.submit_request(TENANT_EMAIL, "Broken window", "Cracked pane", "high")
    notification = Notification.query.filter_by(recipient_email=OWNER_EMAIL).one()
    assert notification.related_id == request.id
    assert notification.related_type == "maintenance_request"
    assert notification.priority == "high"
    assert "Broken window" in notification.message


def test_submit_without_connection_is_not_found(client, tenant_user):
    resp = client.post("/api/maintenance/submit", json={
        "tenantEmail": TENANT_EMAIL,
        "title": "Leaking tap",
        "description": "Drips",
    })
    assert resp.status_code == 404
    assert MaintenanceRequest.query.count() == 0


def test_submit_unknown_priority(app, connected_tenant):
    with pytest.raises(ValidationError):
        maintenance.submit_request(TENANT_EMAIL, "Tap", "Drips", "urgent")


def test_submit_missing_fields(client):
    resp = client.post("/api/maintenance/submit", json={"tenantEmail": TENANT_EMAIL})
    assert resp.status_code == 400


def test_status_progression_sets_completed_once(client, connected_tenant):
    request = maintenance.submit_request(TENANT_EMAIL, "Tap", "Drips")

    resp = client.patch("/api/maintenance/update", json={"requestId": request.id, "status": "in_progress"})
    assert resp.status_code == 200
    assert resp.get_json()["request"]["completedAt"] is None

    resp = client.patch("/api/maintenance/update", json={
        "requestId": request.id,
        "status": "completed",
        "response": "Washer replaced",
    })
    first = resp.get_json()["request"]
    assert first["status"] == "completed"
    assert first["response"] == "Washer replaced"
    assert first["completedAt"] is not None

    resp = client.patch("/api/maintenance/update", json={"requestId": request.id, "status": "completed"})
    again = resp.get_json()["request"]
    assert again["completedAt"] == first["completedAt"]
    assert again["response"] == "Washer replaced"


def test_completed_at_kept_after_reopen(app, connected_tenant):
    request = maintenance.submit_request(TENANT_EMAIL, "Tap", "Drips")
    completed = maintenance.update_status(request.id, "completed").completed_at
    maintenance.update_status(request.id, "in_progress")
    assert maintenance.update_status(request.id, "completed").completed_at == completed


def test_update_unknown_status_rejected(client, connected_tenant):
    request = maintenance.submit_request(TENANT_EMAIL, "Tap", "Drips")
    resp = client.patch("/api/maintenance/update", json={"requestId": request.id, "status": "done"})
    assert resp.status_code == 400
    assert MaintenanceRequest.query.filter_by(id=request.id).first().status == "pending"


def test_update_unknown_request(app):
    with pytest.raises(NotFound):
        maintenance.update_status(999, "completed")


def test_update_missing_fields(client):
    assert client.patch("/api/maintenance/update", json={"status": "completed"}).status_code == 400


def test_owner_requests_enriched(client, property_, connected_tenant):
    maintenance.submit_request(TENANT_EMAIL, "Tap", "Drips")
    resp = client.get("/api/maintenance/owner", query_string={"ownerEmail": OWNER_EMAIL})
    assert resp.status_code == 200
    requests = resp.get_json()["requests"]
    assert len(requests) == 1
    assert requests[0]["propertyName"] == "Sunset Apartments"
    assert requests[0]["propertyAddress"] == "1 Main St"
    assert requests[0]["tenantName"] == "Tom Tenant"
    assert requests[0]["unitNumber"] == "2A"


def test_tenant_requests(client, connected_tenant):
    maintenance.submit_request(TENANT_EMAIL, "Tap", "Drips")
    maintenance.submit_request(TENANT_EMAIL, "Door", "Squeaks", "low")
    resp = client.get("/api/maintenance/tenant", query_string={"tenantEmail": TENANT_EMAIL})
    requests = resp.get_json()["requests"]
    assert [r["title"] for r in requests] == ["Tap", "Door"]
    assert requests[0]["propertyName"] == "Sunset Apartments"
    assert requests[0]["unitNumber"] == "2A"

    assert client.get("/api/maintenance/tenant").status_code == 400

"""Test payment recording, submission, approval and rent status."""
import pytest

from nivaasi.errors import Conflict, NotFound, ValidationError
from nivaasi.models import Tenant
from nivaasi.services import payments
from tests.conftest import TENANT_EMAIL


def _rent_status():
    return Tenant.query.filter_by(email=TENANT_EMAIL).first().rent_status


def test_record_full_payment_marks_paid(client, connected_tenant):
    resp = client.post("/api/payments/record", json={
        "tenantEmail": TENANT_EMAIL,
        "amount": "1000",
        "paymentDate": "2026-10-01",
        "paymentMethod": "mpesa",
    })
    assert resp.status_code == 201
    payment = resp.get_json()["payment"]
    assert payment["status"] == "completed"
    assert payment["paidDate"] == "2026-10-01"
    assert payment["paymentMethod"] == "mpesa"
    assert _rent_status() == "paid"


def test_overpayment_marks_paid(app, connected_tenant):
    payments.record_payment(TENANT_EMAIL, 1500)
    assert _rent_status() == "paid"


def test_partial_payment_leaves_status(app, connected_tenant):
    payment = payments.record_payment(TENANT_EMAIL, 999.99)
    assert payment.status == "completed"
    assert payment.payment_method == "cash"
    assert _rent_status() == "pending"


def test_record_for_unknown_tenant_still_stored(app):
    payment = payments.record_payment("ghost@x.com", 100)
    assert payment.id is not None
    assert payments.payment_history("ghost@x.com")[0].amount == 100


def test_submit_payment_stays_pending(client, connected_tenant):
    resp = client.post("/api/payments/submit", json={"tenantEmail": TENANT_EMAIL, "amount": 1000})
    assert resp.status_code == 201
    assert resp.get_json()["payment"]["status"] == "pending"
    assert _rent_status() == "pending"


def test_approve_payment_applies_rent_rule(client, connected_tenant):
    payment = payments.submit_payment(TENANT_EMAIL, 1000)
    resp = client.post("/api/payments/approve", json={"paymentId": payment.id})
    assert resp.status_code == 200
    assert resp.get_json()["payment"]["status"] == "completed"
    assert _rent_status() == "paid"


def test_approve_partial_payment(app, connected_tenant):
    payment = payments.submit_payment(TENANT_EMAIL, 400)
    payments.approve_payment(payment.id)
    assert _rent_status() == "pending"


def test_approve_twice_conflicts(app, connected_tenant):
    payment = payments.submit_payment(TENANT_EMAIL, 1000)
    payments.approve_payment(payment.id)
    with pytest.raises(Conflict):
        payments.approve_payment(payment.id)


def test_approve_unknown_payment(app):
    with pytest.raises(NotFound):
        payments.approve_payment(42)


def test_negative_amount_rejected(app, connected_tenant):
    with pytest.raises(ValidationError):
        payments.record_payment(TENANT_EMAIL, -5)


def test_non_numeric_amount_rejected(client, connected_tenant):
    resp = client.post("/api/payments/record", json={"tenantEmail": TENANT_EMAIL, "amount": "lots"})
    assert resp.status_code == 400


def test_missing_fields(client):
    assert client.post("/api/payments/record", json={"amount": 10}).status_code == 400
    assert client.post("/api/payments/submit", json={"tenantEmail": TENANT_EMAIL}).status_code == 400


def test_history(client, connected_tenant):
    payments.record_payment(TENANT_EMAIL, 1000)
    payments.submit_payment(TENANT_EMAIL, 50)
    payments.record_payment("other@x.com", 70)

    resp = client.get("/api/payments/history", query_string={"tenantEmail": TENANT_EMAIL})
    assert resp.status_code == 200
    history = resp.get_json()["payments"]
    assert [p["amount"] for p in history] == [1000, 50]

    assert client.get("/api/payments/history").status_code == 400


@pytest.mark.parametrize("amount", ["NaN", "Infinity", "-inf"])
def test_non_finite_amount_rejected(client, connected_tenant, amount):
    resp = client.post("/api/payments/record", json={"tenantEmail": TENANT_EMAIL, "amount": amount})
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "amount must be a number"
    assert payments.payment_history(TENANT_EMAIL) == []

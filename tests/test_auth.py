"""Test account signup, signin and profile endpoints."""
import pytest

from nivaasi.errors import Conflict, InvalidCredentials, ValidationError
from nivaasi.models import User
from nivaasi.services import accounts
from tests.conftest import OWNER_EMAIL, PASSWORD


def _signup(client, **overrides):
    payload = {
        "name": "Olive Owner",
        "email": OWNER_EMAIL,
        "password": PASSWORD,
        "userType": "owner",
    }
    payload.update(overrides)
    return client.post("/api/auth/signup", json=payload)


def test_signup_returns_user_and_tokens(client):
    resp = _signup(client)
    assert resp.status_code == 201
    data = resp.get_json()
    assert data["user"]["email"] == OWNER_EMAIL
    assert data["user"]["userType"] == "owner"
    assert "password" not in data["user"]
    assert data["access_token"]
    assert data["refresh_token"]


def test_signup_duplicate_email_conflicts(client):
    assert _signup(client).status_code == 201
    resp = _signup(client, name="Someone Else")
    assert resp.status_code == 409
    assert resp.get_json()["success"] is False


def test_duplicate_email_is_case_insensitive(app):
    accounts.sign_up("A", "Case@X.com", PASSWORD, "owner")
    with pytest.raises(Conflict):
        accounts.sign_up("B", "case@x.com", PASSWORD, "tenant")


def test_signup_missing_fields(client):
    resp = client.post("/api/auth/signup", json={"email": OWNER_EMAIL})
    assert resp.status_code == 400
    assert "required" in resp.get_json()["error"]


def test_signup_rejects_unknown_user_type(client):
    resp = _signup(client, userType="landlord")
    assert resp.status_code == 400


def test_signup_rejects_short_password(app):
    with pytest.raises(ValidationError):
        accounts.sign_up("Olive", OWNER_EMAIL, "123", "owner")


def test_password_is_stored_hashed(app, owner):
    user = User.query.filter_by(email=OWNER_EMAIL).first()
    assert user.password_hash != PASSWORD
    assert user.check_password(PASSWORD)
    assert not user.check_password("wrong-password")


def test_signin_success(client, owner):
    resp = client.post("/api/auth/signin", json={"email": OWNER_EMAIL, "password": PASSWORD})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["user"]["id"] == owner.id
    assert data["access_token"]


def test_signin_wrong_password(client, owner):
    resp = client.post("/api/auth/signin", json={"email": OWNER_EMAIL, "password": "nope-nope"})
    assert resp.status_code == 401


def test_signin_unknown_user(app):
    with pytest.raises(InvalidCredentials):
        accounts.sign_in("nobody@x.com", PASSWORD)


def test_signin_missing_fields(client):
    resp = client.post("/api/auth/signin", json={"email": OWNER_EMAIL})
    assert resp.status_code == 400


def test_profile_requires_token(client):
    resp = client.get("/api/auth/profile")
    assert resp.status_code == 401


def test_profile_with_token(client):
    token = _signup(client).get_json()["access_token"]
    resp = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
    assert resp.get_json()["user"]["email"] == OWNER_EMAIL


def test_refresh_issues_access_token(client):
    refresh = _signup(client).get_json()["refresh_token"]
    resp = client.post("/api/auth/refresh", headers={"Authorization": f"Bearer {refresh}"})
    assert resp.status_code == 200
    assert resp.get_json()["access_token"]


def test_me_lookup(client, owner):
    resp = client.get("/api/auth/me", query_string={"email": OWNER_EMAIL})
    assert resp.status_code == 200
    assert resp.get_json()["user"]["name"] == "Olive Owner"

    assert client.get("/api/auth/me").status_code == 400
    assert client.get("/api/auth/me", query_string={"email": "ghost@x.com"}).status_code == 404


def test_update_profile(client, owner):
    resp = client.post("/api/users/update-profile", json={
        "email": OWNER_EMAIL,
        "name": "Olive O.",
        "phone": "+254712345678",
    })
    assert resp.status_code == 200
    user = resp.get_json()["user"]
    assert user["name"] == "Olive O."
    assert user["phone"] == "+254712345678"


def test_update_profile_unknown_user(client):
    resp = client.post("/api/users/update-profile", json={"email": "ghost@x.com", "name": "G"})
    assert resp.status_code == 404


def test_logout(client):
    assert client.post("/api/auth/logout").status_code == 200

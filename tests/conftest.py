"""
Test fixtures for the Nivaasi backend tests.

Every test gets a fresh application bound to its own in-memory SQLite
database, so no state leaks between tests.
"""
import pytest

from nivaasi.app import create_app
from nivaasi.services import accounts, connection_codes, properties, tenants


OWNER_EMAIL = "o@x.com"
TENANT_EMAIL = "t@x.com"
PASSWORD = "secret123"


# ── Fixtures ───────────────────────────────────────────────────────────

@pytest.fixture
def app():
    """Application with an isolated in-memory store."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'BCRYPT_LOG_ROUNDS': 4,
        'LOG_LEVEL': 'WARNING',
    })
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    """Flask test client for the app."""
    return app.test_client()


@pytest.fixture
def owner(app):
    return accounts.sign_up("Olive Owner", OWNER_EMAIL, PASSWORD, "owner")


@pytest.fixture
def tenant_user(app):
    return accounts.sign_up("Tom Tenant", TENANT_EMAIL, PASSWORD, "tenant")


@pytest.fixture
def property_(owner):
    """Three-unit property belonging to the owner."""
    return properties.add_property("Sunset Apartments", "1 Main St", OWNER_EMAIL, total_units=3)


@pytest.fixture
def connected_tenant(property_, tenant_user):
    """Tenant connected to unit 2A at rent 1000 through a connection code."""
    code = connection_codes.generate_code(property_.id, "2A", 1000)
    tenant, _ = connection_codes.connect_with_code(code.code, TENANT_EMAIL)
    return tenant


# ── Helpers ────────────────────────────────────────────────────────────

def make_tenant(property_id, email, unit, rent_amount=1000, name="Extra Tenant"):
    """Sign up a tenant account and place it in a unit directly."""
    accounts.sign_up(name, email, PASSWORD, "tenant")
    return tenants.add_tenant(property_id, email, unit, rent_amount)

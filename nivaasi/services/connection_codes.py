"""
One-time connection codes.

A code binds a property unit and its rent to whichever tenant redeems it.
Codes move from issued to either used or expired; neither of those states
can be left.
"""
import logging
import secrets
import string
from datetime import timedelta

from flask import current_app

from nivaasi.enums import RentStatus
from nivaasi.errors import AlreadyUsed, Expired, NoUnitsAvailable, NotFound, UnitOccupied
from nivaasi.models import ConnectionCode, Property, Tenant
from nivaasi.services.accounts import get_user_by_email
from nivaasi.services.properties import get_property
from nivaasi.store import transaction
from nivaasi.validators import normalize_email, parse_amount, utcnow

logger = logging.getLogger(__name__)

CODE_LENGTH = 6
CODE_ALPHABET = string.ascii_uppercase + string.digits


def _new_code():
    while True:
        code = ''.join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))
        if not ConnectionCode.query.filter_by(code=code).first():
            return code


def generate_code(property_id, unit, rent_amount):
    ttl = timedelta(days=current_app.config['CONNECTION_CODE_TTL_DAYS'])

    with transaction() as session:
        property = get_property(property_id)
        now = utcnow()
        connection_code = ConnectionCode(
            code=_new_code(),
            property_id=property.id,
            unit=str(unit).strip(),
            rent_amount=parse_amount(rent_amount, 'rentAmount'),
            is_used=False,
            expires_at=now + ttl,
            created_at=now
        )
        session.add(connection_code)

    logger.info(f"Connection code generated for property {property_id} unit {connection_code.unit}")
    return connection_code


def _usable_code(code):
    """Look up a code and make sure it can still be redeemed."""
    code_data = ConnectionCode.query.filter_by(code=str(code).strip().upper()).first()
    if not code_data:
        raise NotFound('Invalid connection code')

    # Expiry wins over use: an expired code reports Expired even if consumed
    if code_data.is_expired():
        raise Expired()
    if code_data.is_used:
        raise AlreadyUsed()

    property = Property.query.filter_by(id=code_data.property_id).first()
    if not property:
        raise NotFound('Property not found')
    return code_data, property


def _code_projection(code_data, property):
    return {
        'id': property.id,
        'name': property.name,
        'address': property.address,
        'unit': code_data.unit,
        'rentAmount': code_data.rent_amount
    }


def validate_code(code):
    code_data, property = _usable_code(code)
    return {
        'valid': True,
        'property': _code_projection(code_data, property),
        'expiresAt': code_data.expires_at.isoformat()
    }


def connect_with_code(code, tenant_email):
    """
    Redeem a code: create the tenant, mark the code used and take one unit
    out of the property's availability, all in one transaction.
    """
    tenant_email = normalize_email(tenant_email)
    rent_due_days = current_app.config['RENT_DUE_DAYS']

    with transaction() as session:
        user = get_user_by_email(tenant_email)
        if not user:
            raise NotFound('User not found')

        code_data, property = _usable_code(code)

        existing_tenant = Tenant.query.filter_by(
            property_id=code_data.property_id,
            unit=code_data.unit
        ).first()
        if existing_tenant:
            raise UnitOccupied()
        if property.available_units <= 0:
            raise NoUnitsAvailable()

        now = utcnow()
        tenant = Tenant(
            email=tenant_email,
            name=user.name,
            property_id=code_data.property_id,
            unit=code_data.unit,
            rent_amount=code_data.rent_amount,
            rent_due_date=now + timedelta(days=rent_due_days),
            rent_status=RentStatus.PENDING.value,
            move_in_date=now,
            connection_code=code_data.code,
            created_at=now
        )
        session.add(tenant)

        code_data.is_used = True
        code_data.used_at = now
        code_data.used_by = tenant_email

        property.occupy_unit()

    logger.info(f"{tenant_email} connected to property {property.id} unit {tenant.unit} with code {code_data.code}")
    return tenant, _code_projection(code_data, property)

import logging
from datetime import timedelta

from flask import current_app

from nivaasi.enums import RentStatus
from nivaasi.errors import NoUnitsAvailable, NotFound, UnitOccupied
from nivaasi.models import Payment, Property, Reminder, Tenant
from nivaasi.services.accounts import get_user_by_email
from nivaasi.services.properties import get_property, list_properties
from nivaasi.store import transaction
from nivaasi.validators import normalize_email, parse_amount, parse_datetime, utcnow

logger = logging.getLogger(__name__)


def get_tenant(tenant_id):
    tenant = Tenant.query.filter_by(id=tenant_id).first()
    if not tenant:
        raise NotFound('Tenant not found')
    return tenant


def find_tenant_by_email(email):
    return Tenant.query.filter_by(email=normalize_email(email)).order_by(Tenant.id).first()


def add_tenant(property_id, tenant_email, unit, rent_amount, rent_due_date=None):
    """Place an existing user into a vacant unit."""
    tenant_email = normalize_email(tenant_email)
    unit = str(unit).strip()
    rent_amount = parse_amount(rent_amount, 'rentAmount')

    with transaction() as session:
        user = get_user_by_email(tenant_email)
        if not user:
            raise NotFound('User not found. Please sign up first.')

        property = get_property(property_id)

        if Tenant.query.filter_by(property_id=property.id, unit=unit).first():
            logger.warning(f"Unit {unit} of property {property.id} is already occupied")
            raise UnitOccupied()
        if property.available_units <= 0:
            logger.warning(f"Property {property.id} is full, cannot place {tenant_email}")
            raise NoUnitsAvailable()

        now = utcnow()
        if rent_due_date:
            due = parse_datetime(rent_due_date, 'rentDueDate')
        else:
            due = now + timedelta(days=current_app.config['RENT_DUE_DAYS'])

        tenant = Tenant(
            email=tenant_email,
            name=user.name,
            property_id=property.id,
            unit=unit,
            rent_amount=rent_amount,
            rent_due_date=due,
            rent_status=RentStatus.PENDING.value,
            move_in_date=now,
            created_at=now
        )
        session.add(tenant)
        property.occupy_unit()

    logger.info(f"Tenant {tenant_email} added to property {property.id} unit {unit}")
    return tenant


def remove_tenant(tenant_id):
    """
    Remove a tenant, free their unit and delete the payments and reminders
    recorded against their email.
    """
    with transaction() as session:
        tenant = get_tenant(tenant_id)
        removed = tenant.to_dict()

        property = Property.query.filter_by(id=tenant.property_id).first()
        if property:
            property.vacate_unit()

        payments = Payment.query.filter_by(tenant_email=tenant.email).all()
        for payment in payments:
            session.delete(payment)

        reminders = Reminder.query.filter_by(tenant_email=tenant.email).all()
        for reminder in reminders:
            session.delete(reminder)

        session.delete(tenant)

    logger.info(f"Removed tenant {removed['name']}: {len(payments)} payments, {len(reminders)} reminders")
    return removed, {
        'paymentsRemoved': len(payments),
        'remindersRemoved': len(reminders)
    }


def list_tenants(owner_email):
    properties = {p.id: p for p in list_properties(owner_email)}
    if not properties:
        return []

    tenants = Tenant.query.filter(Tenant.property_id.in_(list(properties))).order_by(Tenant.id).all()
    enriched = []
    for tenant in tenants:
        property = properties[tenant.property_id]
        data = tenant.to_dict()
        data['propertyName'] = property.name
        data['address'] = property.address
        enriched.append(data)
    return enriched

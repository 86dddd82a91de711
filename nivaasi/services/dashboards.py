"""
Owner and tenant dashboard aggregation.

Everything here is read-only; each dashboard is assembled under the store
lock so the counts agree with each other.
"""
import logging
import math

from nivaasi.enums import PaymentStatus, RentStatus
from nivaasi.errors import NotFound
from nivaasi.models import MaintenanceRequest, Payment, Property, Reminder, Tenant
from nivaasi.services.accounts import find_owner
from nivaasi.services.tenants import find_tenant_by_email
from nivaasi.store import snapshot
from nivaasi.validators import utcnow

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5
MS_PER_DAY = 1000 * 60 * 60 * 24


def empty_owner_dashboard():
    return {
        'success': True,
        'stats': {
            'totalProperties': 0,
            'totalTenants': 0,
            'totalRent': 0,
            'pendingPayments': 0
        },
        'properties': [],
        'recentTenants': [],
        'recentMaintenance': [],
        'upcomingReminders': [],
        'tenants': []
    }


def _owner_portfolio(owner):
    properties = Property.query.filter(
        (Property.owner_id == owner.id) | (Property.owner_email == owner.email)
    ).order_by(Property.id).all()
    property_ids = [p.id for p in properties]
    tenants = []
    if property_ids:
        tenants = Tenant.query.filter(Tenant.property_id.in_(property_ids)).order_by(Tenant.id).all()
    return properties, tenants


def owner_dashboard(owner_email):
    with snapshot():
        owner = find_owner(owner_email)
        if not owner:
            # Fail open so the dashboard still renders for unknown owners
            logger.warning(f"Owner not found for dashboard: {owner_email}")
            return empty_owner_dashboard()

        properties, tenants = _owner_portfolio(owner)
        property_ids = [p.id for p in properties]
        tenant_emails = {t.email for t in tenants}

        total_rent = 0
        for property in properties:
            tenant_count = sum(1 for t in tenants if t.property_id == property.id)
            total_rent += (property.rent_amount or 0) * tenant_count

        pending_payments = 0
        recent_maintenance = []
        upcoming_reminders = []
        if tenant_emails:
            pending_payments = Payment.query.filter(
                Payment.status == PaymentStatus.PENDING.value,
                Payment.tenant_email.in_(list(tenant_emails))
            ).count()

            upcoming_reminders = Reminder.query.filter(
                Reminder.tenant_email.in_(list(tenant_emails)),
                Reminder.due_date.isnot(None),
                Reminder.due_date >= utcnow()
            ).order_by(Reminder.due_date.asc()).all()

        if property_ids:
            recent_maintenance = MaintenanceRequest.query.filter(
                MaintenanceRequest.property_id.in_(property_ids)
            ).order_by(
                MaintenanceRequest.created_at.desc(), MaintenanceRequest.id.desc()
            ).limit(RECENT_LIMIT).all()

        tenant_dicts = [t.to_dict() for t in tenants]
        dashboard = {
            'success': True,
            'stats': {
                'totalProperties': len(properties),
                'totalTenants': len(tenants),
                'totalRent': total_rent,
                'pendingPayments': pending_payments
            },
            'properties': [p.to_dict() for p in properties],
            'recentTenants': tenant_dicts[:RECENT_LIMIT],
            'recentMaintenance': [r.to_dict() for r in recent_maintenance],
            'upcomingReminders': [r.to_dict() for r in upcoming_reminders],
            'tenants': tenant_dicts
        }

    logger.info(f"Owner dashboard for {owner_email}: {dashboard['stats']}")
    return dashboard


def owner_stats(owner_email):
    with snapshot():
        owner = find_owner(owner_email)
        if not owner:
            properties, tenants = [], []
        else:
            properties, tenants = _owner_portfolio(owner)

        tenant_emails = {t.email for t in tenants}
        today = utcnow().date()
        monthly_revenue = 0
        if tenant_emails:
            completed = Payment.query.filter(
                Payment.status == PaymentStatus.COMPLETED.value,
                Payment.tenant_email.in_(list(tenant_emails))
            ).all()
            monthly_revenue = sum(
                p.amount for p in completed
                if p.paid_date.year == today.year and p.paid_date.month == today.month
            )

        return {
            'totalProperties': len(properties),
            'totalUnits': sum(p.total_units or 0 for p in properties),
            'occupiedUnits': sum(p.occupied_units or 0 for p in properties),
            'totalTenants': len(tenants),
            'monthlyRevenue': monthly_revenue,
            'pendingRent': sum(
                t.rent_amount or 0 for t in tenants
                if t.rent_status == RentStatus.PENDING.value
            )
        }


def days_until(due, now=None):
    now = now or utcnow()
    delta_ms = (due - now).total_seconds() * 1000
    return math.ceil(delta_ms / MS_PER_DAY)


def tenant_dashboard(tenant_email):
    with snapshot():
        tenant = find_tenant_by_email(tenant_email)
        if not tenant:
            raise NotFound('Tenant not found')

        property = Property.query.filter_by(id=tenant.property_id).first()
        if not property:
            raise NotFound('Property not found')

        tenant_data = tenant.to_dict()
        tenant_data['daysUntilDue'] = days_until(tenant.rent_due_date)

        return {
            'tenant': tenant_data,
            'property': {
                'id': property.id,
                'name': property.name,
                'address': property.address,
                'type': property.property_type,
                'unit': tenant.unit,
                'ownerEmail': property.owner_email
            }
        }

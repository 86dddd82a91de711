import logging

from nivaasi.enums import MaintenancePriority, MaintenanceStatus, NotificationAudience
from nivaasi.errors import NotFound
from nivaasi.models import MaintenanceRequest, Property, Tenant
from nivaasi.services.notifications import notify
from nivaasi.services.properties import list_properties
from nivaasi.services.tenants import find_tenant_by_email
from nivaasi.store import transaction
from nivaasi.validators import normalize_email, parse_enum, utcnow

logger = logging.getLogger(__name__)


def submit_request(tenant_email, title, description, priority=None):
    """
    Open a maintenance request against the tenant's current property and
    let the owner know about it.
    """
    tenant_email = normalize_email(tenant_email)
    priority = parse_enum(MaintenancePriority, priority, 'priority') if priority else MaintenancePriority.MEDIUM

    with transaction() as session:
        tenant = find_tenant_by_email(tenant_email)
        if not tenant:
            logger.warning(f"Maintenance request rejected, tenant not connected: {tenant_email}")
            raise NotFound('Tenant not found. Please ensure you are connected to a property')

        now = utcnow()
        request = MaintenanceRequest(
            tenant_email=tenant_email,
            tenant_id=tenant.id,
            property_id=tenant.property_id,
            title=title,
            description=description,
            priority=priority.value,
            status=MaintenanceStatus.PENDING.value,
            created_at=now,
            updated_at=now
        )
        session.add(request)
        session.flush()

        property = Property.query.filter_by(id=tenant.property_id).first()
        if property and property.owner_email:
            notify(
                session,
                property.owner_email,
                NotificationAudience.OWNER,
                title='New Maintenance Request',
                message=f'{tenant.name or tenant_email} submitted a maintenance request: "{title}"',
                notification_type='maintenance',
                priority=priority.value,
                related_id=request.id,
                related_type='maintenance_request'
            )
        else:
            logger.warning(f"No owner to notify for maintenance request {request.id}")

    logger.info(f"Maintenance request {request.id} submitted by {tenant_email}")
    return request


def update_status(request_id, status, response=None):
    status = parse_enum(MaintenanceStatus, status, 'status')

    with transaction():
        request = MaintenanceRequest.query.filter_by(id=request_id).first()
        if not request:
            raise NotFound('Maintenance request not found')

        now = utcnow()
        request.status = status.value
        if response:
            request.response = response
        if status is MaintenanceStatus.COMPLETED and request.completed_at is None:
            request.completed_at = now
        request.updated_at = now

    logger.info(f"Maintenance request {request_id} moved to {status.value}")
    return request


def owner_requests(owner_email):
    properties = {p.id: p for p in list_properties(owner_email)}
    if not properties:
        return []

    requests = MaintenanceRequest.query.filter(
        MaintenanceRequest.property_id.in_(list(properties))
    ).order_by(MaintenanceRequest.id).all()

    enriched = []
    for request in requests:
        property = properties[request.property_id]
        tenant = Tenant.query.filter_by(id=request.tenant_id).first() if request.tenant_id else None
        data = request.to_dict()
        data['propertyName'] = property.name
        data['propertyAddress'] = property.address
        data['tenantName'] = tenant.name if tenant else 'Unknown Tenant'
        data['unitNumber'] = tenant.unit if tenant else 'N/A'
        enriched.append(data)
    return enriched


def tenant_requests(tenant_email):
    requests = MaintenanceRequest.query.filter_by(
        tenant_email=normalize_email(tenant_email)
    ).order_by(MaintenanceRequest.id).all()

    enriched = []
    for request in requests:
        property = Property.query.filter_by(id=request.property_id).first() if request.property_id else None
        tenant = Tenant.query.filter_by(id=request.tenant_id).first() if request.tenant_id else None
        data = request.to_dict()
        data['propertyName'] = property.name if property else 'Unknown Property'
        data['unitNumber'] = tenant.unit if tenant else 'N/A'
        enriched.append(data)
    return enriched

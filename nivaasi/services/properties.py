import logging

from nivaasi.errors import HasActiveTenants, NotFound
from nivaasi.models import ConnectionCode, Property, Tenant
from nivaasi.services.accounts import find_owner
from nivaasi.store import transaction
from nivaasi.validators import normalize_email, parse_amount, parse_units

logger = logging.getLogger(__name__)


def get_property(property_id):
    property = Property.query.filter_by(id=property_id).first()
    if not property:
        raise NotFound('Property not found')
    return property


def add_property(name, address, owner_email, property_type=None, total_units=None, rent_amount=None):
    """
    Create a property for an owner account.
    All units start out available.
    """
    owner_email = normalize_email(owner_email)

    with transaction() as session:
        owner = find_owner(owner_email)
        if not owner:
            logger.warning(f"Property rejected, owner not found: {owner_email}")
            raise NotFound(f'Owner not found for email: {owner_email}')

        units = parse_units(total_units)
        property = Property(
            owner_id=owner.id,
            owner_email=owner.email,
            name=str(name).strip(),
            address=str(address).strip(),
            property_type=property_type or 'apartment',
            total_units=units,
            occupied_units=0,
            available_units=units,
            rent_amount=parse_amount(rent_amount, 'rent_amount') if rent_amount not in (None, '') else 0
        )
        session.add(property)

    logger.info(f"Property {property.id} added for {owner_email} with {units} units")
    return property


def list_properties(owner_email):
    return Property.query.filter_by(owner_email=normalize_email(owner_email)).order_by(Property.id).all()


def remove_property(property_id):
    """Delete a vacant property along with its connection codes."""
    with transaction() as session:
        property = get_property(property_id)

        tenant_count = Tenant.query.filter_by(property_id=property.id).count()
        if tenant_count > 0:
            raise HasActiveTenants(
                f'Cannot delete property with active tenants: '
                f'{tenant_count} tenant(s) still assigned to this property'
            )

        codes = ConnectionCode.query.filter_by(property_id=property.id).all()
        for code in codes:
            session.delete(code)

        removed = property.to_dict()
        session.delete(property)

    logger.info(f"Removed property {removed['name']}: {len(codes)} connection codes")
    return removed, {'connectionCodesRemoved': len(codes)}


def occupied_units(property_id):
    tenants = Tenant.query.filter_by(property_id=property_id).order_by(Tenant.id).all()
    return [tenant.unit for tenant in tenants]

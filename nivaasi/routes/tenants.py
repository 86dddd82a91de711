from flask import Blueprint, request, jsonify

from nivaasi.services import connection_codes, dashboards, tenants
from nivaasi.validators import parse_id

# Blueprint for tenant routes
tenants_bp = Blueprint('tenants', __name__, url_prefix='/api/tenants')


@tenants_bp.route('/validate-code', methods=['GET'])
def validate_code():
    code = request.args.get('connectionCode')
    if not code:
        return jsonify({'error': 'Connection code is required'}), 400

    return jsonify(connection_codes.validate_code(code)), 200


@tenants_bp.route('/connect-with-code', methods=['POST'])
def connect_with_code():
    data = request.get_json(silent=True) or {}
    if not data.get('code') or not data.get('tenantEmail'):
        return jsonify({'error': 'Connection code and tenant email are required'}), 400

    tenant, property = connection_codes.connect_with_code(data['code'], data['tenantEmail'])
    return jsonify({
        'message': 'Successfully connected to property!',
        'tenant': tenant.to_dict(),
        'property': property
    }), 200


# Create a new tenant
@tenants_bp.route('/add', methods=['POST'])
def add_tenant():
    data = request.get_json(silent=True) or {}

    #Validate required fields
    required_fields = ['propertyId', 'tenantEmail', 'unit', 'rentAmount']
    for field in required_fields:
        if field not in data or not str(data[field]).strip():
            return jsonify({'error': 'Property ID, tenant email, unit, and rent amount are required'}), 400

    new_tenant = tenants.add_tenant(
        parse_id(data['propertyId'], 'propertyId'),
        data['tenantEmail'],
        data['unit'],
        data['rentAmount'],
        rent_due_date=data.get('rentDueDate')
    )
    return jsonify({'message': 'Tenant added successfully', 'tenant': new_tenant.to_dict()}), 201


@tenants_bp.route('/remove', methods=['POST'])
def remove_tenant():
    data = request.get_json(silent=True) or {}
    if not data.get('tenantId'):
        return jsonify({'error': 'Tenant ID is required'}), 400

    removed, cleanup = tenants.remove_tenant(parse_id(data['tenantId'], 'tenantId'))
    return jsonify({
        'message': 'Tenant removed successfully',
        'tenant': removed,
        'cleanup': cleanup
    }), 200


#Get all tenants for an owner's properties
@tenants_bp.route('/list', methods=['GET'])
def list_tenants():
    owner_email = request.args.get('ownerEmail')
    if not owner_email:
        return jsonify({'error': 'Owner email is required'}), 400

    return jsonify({'tenants': tenants.list_tenants(owner_email)}), 200


@tenants_bp.route('/dashboard', methods=['GET'])
def tenant_dashboard():
    tenant_email = request.args.get('tenantEmail')
    if not tenant_email:
        return jsonify({'error': 'Tenant email is required'}), 400

    return jsonify(dashboards.tenant_dashboard(tenant_email)), 200

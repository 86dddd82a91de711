from flask import Blueprint, request, jsonify

from nivaasi.services import maintenance
from nivaasi.validators import parse_id

maintenance_bp = Blueprint('maintenance', __name__, url_prefix='/api/maintenance')


@maintenance_bp.route('/submit', methods=['POST'])
def submit_request():
    data = request.get_json(silent=True) or {}

    required_fields = ['tenantEmail', 'title', 'description']
    for field in required_fields:
        if field not in data or not str(data[field]).strip():
            return jsonify({
                'error': 'Tenant email, title, and description are required',
                'details': 'Missing required fields'
            }), 400

    new_request = maintenance.submit_request(
        data['tenantEmail'],
        str(data['title']).strip(),
        str(data['description']).strip(),
        priority=data.get('priority')
    )
    return jsonify({
        'success': True,
        'message': 'Maintenance request submitted successfully',
        'request': new_request.to_dict()
    }), 201


@maintenance_bp.route('/update', methods=['PATCH'])
def update_request():
    data = request.get_json(silent=True) or {}
    if not data.get('requestId') or not data.get('status'):
        return jsonify({'error': 'Request ID and status are required'}), 400

    updated = maintenance.update_status(
        parse_id(data['requestId'], 'requestId'),
        data['status'],
        response=data.get('response')
    )
    return jsonify({
        'message': 'Maintenance request updated successfully',
        'request': updated.to_dict()
    }), 200


@maintenance_bp.route('/owner', methods=['GET'])
def owner_requests():
    owner_email = request.args.get('ownerEmail')
    if not owner_email:
        return jsonify({'error': 'Owner email is required'}), 400

    return jsonify({'requests': maintenance.owner_requests(owner_email)}), 200


@maintenance_bp.route('/tenant', methods=['GET'])
def tenant_requests():
    tenant_email = request.args.get('tenantEmail')
    if not tenant_email:
        return jsonify({'error': 'Tenant email is required'}), 400

    return jsonify({'requests': maintenance.tenant_requests(tenant_email)}), 200

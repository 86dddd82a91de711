from flask import Blueprint, request, jsonify

from nivaasi.services import connection_codes, properties
from nivaasi.validators import parse_id

# Blueprint for property routes
properties_bp = Blueprint('properties', __name__, url_prefix='/api/properties')


#Get all properties for an owner
@properties_bp.route('/list', methods=['GET'])
def list_properties():
    owner_email = request.args.get('ownerEmail')
    if not owner_email:
        return jsonify({'error': 'Owner email is required'}), 400

    owner_properties = properties.list_properties(owner_email)
    return jsonify({'properties': [p.to_dict() for p in owner_properties]}), 200


#Create a new property
@properties_bp.route('/add', methods=['POST'])
def add_property():
    data = request.get_json(silent=True) or {}

    #Validate required fields
    required_fields = ['name', 'address', 'ownerEmail']
    for field in required_fields:
        if field not in data or not str(data[field]).strip():
            return jsonify({
                'success': False,
                'error': 'Name, address, and owner email are required'
            }), 400

    new_property = properties.add_property(
        name=data['name'],
        address=data['address'],
        owner_email=data['ownerEmail'],
        property_type=data.get('property_type'),
        total_units=data.get('total_units'),
        rent_amount=data.get('rent_amount')
    )
    return jsonify({
        'success': True,
        'message': 'Property added successfully',
        'property': new_property.to_dict()
    }), 201


#Delete a property by ID
@properties_bp.route('/remove/<int:property_id>', methods=['DELETE'])
def remove_property(property_id):
    removed, cleanup = properties.remove_property(property_id)
    return jsonify({
        'message': 'Property removed successfully',
        'property': removed,
        'cleanup': cleanup
    }), 200


@properties_bp.route('/occupied-units', methods=['GET'])
def occupied_units():
    property_id = request.args.get('propertyId')
    if not property_id:
        return jsonify({'error': 'Property ID is required'}), 400

    units = properties.occupied_units(parse_id(property_id, 'propertyId'))
    return jsonify({'occupiedUnits': units}), 200


#Generate a connection code for a unit
@properties_bp.route('/generate-code', methods=['POST'])
def generate_code():
    data = request.get_json(silent=True) or {}

    required_fields = ['propertyId', 'unit', 'rentAmount']
    for field in required_fields:
        if field not in data or not str(data[field]).strip():
            return jsonify({'error': 'Property ID, unit, and rent amount are required'}), 400

    connection_code = connection_codes.generate_code(
        parse_id(data['propertyId'], 'propertyId'),
        data['unit'],
        data['rentAmount']
    )
    return jsonify({
        'message': 'Connection code generated successfully',
        'code': connection_code.code,
        'expiresAt': connection_code.expires_at.isoformat()
    }), 200

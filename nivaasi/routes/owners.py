from flask import Blueprint, request, jsonify

from nivaasi.services import dashboards

owners_bp = Blueprint('owners', __name__, url_prefix='/api/owners')


@owners_bp.route('/dashboard', methods=['GET'])
def owner_dashboard():
    owner_email = request.args.get('ownerEmail')
    if not owner_email:
        return jsonify({'success': False, 'error': 'Owner email is required'}), 400

    return jsonify(dashboards.owner_dashboard(owner_email)), 200


@owners_bp.route('/stats', methods=['GET'])
def owner_stats():
    owner_email = request.args.get('ownerEmail')
    if not owner_email:
        return jsonify({'error': 'Owner email is required'}), 400

    return jsonify({'stats': dashboards.owner_stats(owner_email)}), 200

from flask import Blueprint, request, jsonify

from nivaasi.services import accounts

users_bp = Blueprint('users', __name__, url_prefix='/api/users')


#Update profile route
@users_bp.route('/update-profile', methods=['POST'])
def update_profile():
    data = request.get_json(silent=True) or {}
    if not data.get('email'):
        return jsonify({'error': 'Email is required'}), 400

    user = accounts.update_profile(
        data['email'],
        name=data.get('name'),
        phone=data.get('phone')
    )
    return jsonify({'message': 'Profile updated successfully', 'user': user.to_dict()}), 200

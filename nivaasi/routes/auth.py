from flask import Blueprint, request, jsonify
from flask_jwt_extended import create_access_token, create_refresh_token, jwt_required, get_jwt_identity

from nivaasi.services import accounts

# Blueprint for auth routes
auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')


def _token_pair(user):
    return {
        'access_token': create_access_token(identity=str(user.id)),
        'refresh_token': create_refresh_token(identity=str(user.id))
    }


#Signup route
@auth_bp.route('/signup', methods=['POST'])
def signup():
    data = request.get_json(silent=True) or {}

    #Validate required fields
    required_fields = ['name', 'email', 'password', 'userType']
    for field in required_fields:
        if field not in data or not str(data[field]).strip():
            return jsonify({'error': 'Name, email, password, and user type are required'}), 400

    user = accounts.sign_up(
        name=data['name'],
        email=data['email'],
        password=str(data['password']),
        user_type=data['userType']
    )

    return jsonify({
        'message': 'User created successfully',
        'user': user.to_dict(),
        **_token_pair(user)
    }), 201


#Signin route
@auth_bp.route('/signin', methods=['POST'])
def signin():
    """Sign a user in and return jwt tokens"""
    data = request.get_json(silent=True) or {}
    if not data.get('email') or not data.get('password'):
        return jsonify({'error': 'Email and password are required'}), 400

    user = accounts.sign_in(data['email'], str(data['password']))

    return jsonify({
        'message': 'Sign in successful',
        'user': user.to_dict(),
        **_token_pair(user)
    }), 200


#Refresh token route
@auth_bp.route('/refresh', methods=['POST'])
@jwt_required(refresh=True)
def refresh_token():
    user = accounts.get_user_by_id(int(get_jwt_identity()))
    return jsonify({'access_token': create_access_token(identity=str(user.id))}), 200


#Profile route
@auth_bp.route('/profile', methods=['GET'])
@jwt_required()
def get_profile():
    user = accounts.get_user_by_id(int(get_jwt_identity()))
    return jsonify({'user': user.to_dict()}), 200


@auth_bp.route('/me', methods=['GET'])
def me():
    email = request.args.get('email')
    if not email:
        return jsonify({'error': 'Email is required'}), 400

    user = accounts.get_user(email)
    return jsonify({'user': user.to_dict()}), 200


#Logout route
@auth_bp.route('/logout', methods=['POST'])
def logout():
    return jsonify({'message': 'Logout successful'}), 200

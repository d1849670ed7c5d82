"""
Authentication Routes
Stores the backend token in the session; logout clears per-user state
"""
from flask import Blueprint, request, session, jsonify
from schooladmin.extensions import notification_stores
from schooladmin.utils import get_current_user

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/session', methods=['POST'])
def login():
    """
    Start a dashboard session
    Payload: { "token": "...", "user": { "id": 1, "name": "...", "role": "TEACHER" } }
    """
    data = request.get_json(silent=True) or {}
    token = data.get('token')
    user = data.get('user') or {}

    if not token or 'id' not in user:
        return jsonify({'success': False, 'message': 'token and user.id are required'}), 400

    session.clear()
    session['token'] = token
    session['user'] = {
        'id': user['id'],
        'name': user.get('name'),
        'role': str(user.get('role', '')).upper(),
    }

    return jsonify({'success': True, 'user': session['user']})


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """End the session and drop this user's cached notifications"""
    user = get_current_user()
    if user is not None:
        notification_stores.reset(user.get('id'))
    session.clear()
    return jsonify({'success': True, 'message': 'Logged out successfully.'})


@auth_bp.route('/me')
def me():
    user = get_current_user()
    if user is None:
        return jsonify({'success': False, 'message': 'Login required'}), 401
    return jsonify({'success': True, 'user': user})

import logging
from functools import wraps

from flask import Blueprint, current_app, request, jsonify
from flask_jwt_extended import (
    create_access_token, get_jwt_identity, set_access_cookies, unset_jwt_cookies,
    verify_jwt_in_request
)

auth_bp = Blueprint('auth', __name__)
logger = logging.getLogger(__name__)


def current_email():
    """Email claim of the verified cookie token."""
    return get_jwt_identity()


def owner_required(param='email'):
    """
    Guard a route so only the owner named in the URL can reach it.

    The cookie token is verified first (401 on a missing, invalid or expired
    token); the decoded email must then equal the ``param`` path argument,
    otherwise the request is rejected with 403.

    Usage:
        @jobs_bp.route('/jobs/<email>')
        @owner_required()
        def jobs_by_owner(email):
            ...
    """
    def wrapper(fn):
        @wraps(fn)
        def decorated_function(*args, **kwargs):
            verify_jwt_in_request()
            if current_email() != kwargs.get(param):
                logger.warning(f"{current_email()} attempted to access {request.path}")
                return jsonify({'message': 'forbidden access'}), 403
            return fn(*args, **kwargs)
        return decorated_function
    return wrapper


# --- Issue Token ---
@auth_bp.route('/jwt', methods=['POST'])
def issue_token():
    data = request.get_json(silent=True) or {}
    email = data.get('email')

    if not email or not isinstance(email, str):
        return jsonify({'error': 'Email is required'}), 400

    access_token = create_access_token(identity=email)
    response = jsonify({'success': True})
    max_age = int(current_app.config['JWT_ACCESS_TOKEN_EXPIRES'].total_seconds())
    set_access_cookies(response, access_token, max_age=max_age)
    logger.info(f"Issued access token for {email}")
    return response, 200


# --- Logout ---
@auth_bp.route('/logout', methods=['GET'])
def logout():
    response = jsonify({'success': True})
    unset_jwt_cookies(response)
    return response, 200

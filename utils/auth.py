# utils/auth.py
from functools import wraps
from flask import request, jsonify
from database import get_db
import logging

logger = logging.getLogger(__name__)


def get_bearer_token():
    auth_header = request.headers.get('Authorization', '')
    if auth_header.startswith('Bearer '):
        return auth_header.split(' ', 1)[1].strip() or None
    return None


def token_required(f):
    """Decorator that validates the Supabase access token and passes the user id"""
    @wraps(f)
    def decorated(*args, **kwargs):
        token = get_bearer_token()
        if not token:
            logger.warning(f"Token missing for: {request.path}")
            return jsonify({'error': 'Token is missing!'}), 401

        try:
            with get_db() as client:
                # Verify the JWT token with Supabase
                user_response = client.auth.get_user(token)
        except Exception as e:
            logger.error(f"Token validation error: {str(e)}")
            return jsonify({'error': 'Invalid token!'}), 401

        if not user_response or not getattr(user_response, 'user', None):
            return jsonify({'error': 'Invalid token!'}), 401

        return f(user_response.user.id, *args, **kwargs)

    return decorated

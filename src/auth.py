"""
Password hashing and cookie sessions.

Sessions are HS256-signed JWTs stored in an httpOnly cookie. The token
carries the user id and email and expires after `config.SESSION_DAYS`.
"""
import logging
from datetime import datetime, timedelta, timezone
from functools import wraps

import bcrypt
from flask import g, jsonify, request
from jose import JWTError, jwt

import config

logger = logging.getLogger(__name__)


def hash_password(password):
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


def verify_password(password, password_hash):
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        # Malformed stored hash
        return False


def create_session_token(user_id, email, now=None):
    """Sign a session token. Returns (token, expires_at)."""
    now = now or datetime.now(timezone.utc)
    expires_at = now + timedelta(days=config.SESSION_DAYS)

    payload = {
        'userId': user_id,
        'email': email,
        'iat': int(now.timestamp()),
        'exp': int(expires_at.timestamp())
    }
    token = jwt.encode(payload, config.SECRET_KEY, algorithm=config.JWT_ALGORITHM)
    return token, expires_at


def verify_session_token(token):
    """Decode a session token. Returns the session dict, or None if missing/invalid/expired."""
    if not token:
        return None

    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.JWT_ALGORITHM])
    except JWTError as e:
        logger.warning(f"Failed to verify session: {e}")
        return None

    return {
        'user_id': payload.get('userId'),
        'email': payload.get('email'),
        'expires_at': datetime.fromtimestamp(payload['exp'], timezone.utc)
    }


def set_session_cookie(response, token, expires_at):
    response.set_cookie(
        config.SESSION_COOKIE_NAME,
        token,
        httponly=True,
        secure=config.COOKIE_SECURE,
        expires=expires_at,
        samesite='Lax',
        path='/'
    )
    return response


def clear_session_cookie(response):
    response.delete_cookie(config.SESSION_COOKIE_NAME, path='/')
    return response


def get_current_session():
    """Session of the current request, or None."""
    return verify_session_token(request.cookies.get(config.SESSION_COOKIE_NAME))


def login_required(view):
    """Reject requests without a valid session; exposes the user id as `g.user_id`."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        session = get_current_session()
        if not session:
            return jsonify({'error': 'Not authenticated'}), 401
        g.user_id = session['user_id']
        g.user_email = session['email']
        return view(*args, **kwargs)
    return wrapped

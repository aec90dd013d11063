"""
Auth Routes - Flask blueprint for signup, login, logout and the current user
"""
import logging

from flask import Blueprint, g, jsonify, request

import config
from auth import (
    clear_session_cookie, create_session_token, hash_password, login_required,
    set_session_cookie, verify_password
)
from models import get_session, User

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')


def _start_session(response, user):
    token, expires_at = create_session_token(user.id, user.email)
    return set_session_cookie(response, token, expires_at)


@auth_bp.route('/signup', methods=['POST'])
def signup():
    """Create an account and log it in."""
    data = request.get_json(silent=True) or {}
    name = (data.get('name') or '').strip()
    email = (data.get('email') or '').strip().lower()
    password = data.get('password') or ''

    if not name or not email or not password:
        return jsonify({'error': 'Name, email and password are required'}), 400

    if len(password) < config.MIN_PASSWORD_LENGTH:
        return jsonify({
            'error': f'Password must be at least {config.MIN_PASSWORD_LENGTH} characters long'
        }), 400

    session = get_session()
    try:
        if session.query(User).filter_by(email=email).first():
            return jsonify({'error': 'User with this email already exists'}), 409

        user = User(name=name, email=email, password_hash=hash_password(password))
        session.add(user)
        session.commit()
        logger.info(f"New account {user.id} ({user.email})")

        response = jsonify({'message': 'Account created successfully', 'user': user.to_dict()})
        response.status_code = 201
        return _start_session(response, user)
    except Exception:
        session.rollback()
        logger.exception("Signup error")
        return jsonify({'error': 'An error occurred during signup'}), 500
    finally:
        session.close()


@auth_bp.route('/login', methods=['POST'])
def login():
    """Check credentials and issue a session cookie."""
    data = request.get_json(silent=True) or {}
    email = (data.get('email') or '').strip().lower()
    password = data.get('password') or ''

    if not email or not password:
        return jsonify({'error': 'Email and password are required'}), 400

    session = get_session()
    try:
        user = session.query(User).filter_by(email=email).first()
        if not user or not verify_password(password, user.password_hash):
            return jsonify({'error': 'Invalid email or password'}), 401

        logger.info(f"User {user.id} logged in")
        response = jsonify({'message': 'Logged in successfully', 'user': user.to_dict()})
        return _start_session(response, user)
    except Exception:
        logger.exception("Login error")
        return jsonify({'error': 'An error occurred during login'}), 500
    finally:
        session.close()


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Drop the session cookie."""
    response = jsonify({'message': 'Logged out successfully'})
    return clear_session_cookie(response)


@auth_bp.route('/me', methods=['GET'])
@login_required
def me():
    """Get the logged-in user."""
    session = get_session()
    try:
        user = session.query(User).filter_by(id=g.user_id).first()
        if not user:
            return jsonify({'error': 'Not authenticated'}), 401
        return jsonify({'user': user.to_dict()})
    finally:
        session.close()

from collections import namedtuple
from functools import wraps
import logging
from flask import g
from flask_jwt_extended import jwt_required, get_jwt, get_jwt_identity, verify_jwt_in_request
from .. import db
from ..models.user_model import User

logger = logging.getLogger(__name__)

Session = namedtuple('Session', ['user_id', 'email', 'name', 'role', 'is_admin'])

ADMIN_IDENTITY = 'admin'


def session_from_claims(identity, claims):
    if claims.get('is_admin'):
        return Session(None, None, 'Admin', None, True)
    return Session(
        user_id=int(identity),
        email=(claims.get('email') or '').lower() or None,
        name=claims.get('name'),
        role=claims.get('role'),
        is_admin=False
    )


def current_session():
    """Session of the bearer token on this request, or None when anonymous"""
    verify_jwt_in_request(optional=True)
    identity = get_jwt_identity()
    if identity is None:
        return None
    return session_from_claims(identity, get_jwt())


def token_required(f):
    @wraps(f)
    @jwt_required()
    def decorated(*args, **kwargs):
        claims = get_jwt()
        if claims.get('is_admin'):
            return {'message': 'This action needs a user account', 'error': 'unauthenticated'}, 401
        current_user = db.session.get(User, int(get_jwt_identity()))
        if not current_user:
            return {'message': 'User not found!', 'error': 'unauthenticated'}, 401
        g.user = current_user
        g.session = session_from_claims(get_jwt_identity(), claims)
        return f(*args, **kwargs)
    return decorated


def setup_jwt_handlers(jwt):
    @jwt.unauthorized_loader
    def missing_token(reason):
        return {'message': 'Please login to continue', 'error': 'unauthenticated'}, 401

    @jwt.invalid_token_loader
    def invalid_token(reason):
        logger.warning(f"Rejected invalid token: {reason}")
        return {'message': 'Invalid token', 'error': 'unauthenticated'}, 401

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return {'message': 'Your session has expired. Please login again.', 'error': 'unauthenticated'}, 401

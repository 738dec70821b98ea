# Accounts: registration, login and profile
import datetime
import logging
import re
from flask import current_app
from flask_jwt_extended import create_access_token
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from .. import db, bcrypt
from ..models.user_model import User, Role
from ..utils.role_utils import get_user_data_with_permissions
from . import errors

logger = logging.getLogger(__name__)

EMAIL_REGEX = re.compile(r'^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$')
MIN_PASSWORD_LENGTH = 6


def issue_token(user):
    expires = datetime.timedelta(minutes=current_app.config.get('JWT_ACCESS_TOKEN_EXPIRES_MINUTES', 1440))
    return create_access_token(
        identity=str(user.id),
        additional_claims={'email': user.email, 'name': user.name, 'role': user.role.value},
        expires_delta=expires
    )


def _find_by_email(email):
    return User.query.filter(func.lower(User.email) == email.lower()).first()


def register(data):
    data = data or {}
    missing = [k for k in ('name', 'email', 'password') if not (data.get(k) or '').strip()]
    if missing:
        return errors.validation_error(f"Missing required fields: {', '.join(missing)}", fields=missing)

    email = data['email'].strip().lower()
    if not EMAIL_REGEX.match(email):
        return errors.validation_error('Please enter a valid email address', fields=['email'])
    if len(data['password']) < MIN_PASSWORD_LENGTH:
        return errors.validation_error(f'Password must be at least {MIN_PASSWORD_LENGTH} characters',
                                       fields=['password'])
    try:
        role = Role(data.get('role') or Role.USER.value)
    except ValueError:
        return errors.validation_error('Role must be user or vendor', fields=['role'])
    if _find_by_email(email):
        return errors.conflict('An account with this email already exists')

    user = User(
        name=data['name'].strip(),
        email=email,
        phone=(data.get('phone') or '').strip() or None,
        password=bcrypt.generate_password_hash(data['password']).decode('utf-8'),
        role=role
    )
    try:
        db.session.add(user)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return errors.conflict('An account with this email already exists')
    except Exception as e:
        return errors.failure('register', e)

    logger.info(f"Registered user {user.id} ({role.value})")
    return {
        'message': 'Registration successful',
        'access_token': issue_token(user),
        'user': get_user_data_with_permissions(user)
    }, None, 201


def login(data):
    data = data or {}
    email = (data.get('email') or '').strip()
    password = data.get('password') or ''
    if not email or not password:
        return errors.validation_error('Email and password are required', fields=['email', 'password'])
    user = _find_by_email(email)
    # One message for both cases so account existence is not revealed
    if user is None or not bcrypt.check_password_hash(user.password, password):
        return errors.unauthenticated('Invalid email or password')
    return {
        'message': 'Login successful',
        'access_token': issue_token(user),
        'user': get_user_data_with_permissions(user)
    }, None, 200


def get_profile(user):
    return get_user_data_with_permissions(user), None, 200


def update_profile(user, data):
    data = data or {}
    if 'name' in data:
        name = (data.get('name') or '').strip()
        if not name:
            return errors.validation_error('Name cannot be empty', fields=['name'])
        user.name = name
    if 'phone' in data:
        user.phone = (data.get('phone') or '').strip() or None
    try:
        db.session.commit()
    except Exception as e:
        return errors.failure('update profile', e)
    return {'message': 'Profile updated', 'user': get_user_data_with_permissions(user)}, None, 200

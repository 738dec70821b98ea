"""Failure results shared by the service layer.

Services return ``(data, error, status)``. On failure ``data`` is None and
``error`` is ``{'message': ..., 'error': kind}``.
"""
import logging
from .. import db

logger = logging.getLogger(__name__)

VALIDATION = 'validation'
UNAUTHENTICATED = 'unauthenticated'
UNAUTHORIZED = 'unauthorized'
NOT_FOUND = 'not_found'
CONFLICT = 'conflict'
ALREADY_RESPONDED = 'already_responded'
INVALID_TRANSITION = 'invalid_transition'
FAILURE = 'failure'

STATUS_CODES = {
    VALIDATION: 400,
    UNAUTHENTICATED: 401,
    UNAUTHORIZED: 404,
    NOT_FOUND: 404,
    CONFLICT: 409,
    ALREADY_RESPONDED: 409,
    INVALID_TRANSITION: 409,
    FAILURE: 500,
}


def fail(kind, message, **extra):
    error = {'message': message, 'error': kind}
    error.update(extra)
    return None, error, STATUS_CODES[kind]


def validation_error(message, **extra):
    return fail(VALIDATION, message, **extra)


def unauthenticated(message='Please login to continue'):
    return fail(UNAUTHENTICATED, message)


def unauthorized(what='Record'):
    # Same wording as a missing record so other tenants' ids are not revealed
    return fail(UNAUTHORIZED, f'{what} not found or unauthorized')


def not_found(message):
    return fail(NOT_FOUND, message)


def conflict(message):
    return fail(CONFLICT, message)


def already_responded(message='You have already responded to this request'):
    return fail(ALREADY_RESPONDED, message)


def invalid_transition(current, new_status):
    current_value = current.value if current is not None else 'pending'
    return fail(INVALID_TRANSITION, f'Cannot change status from {current_value} to {new_status.value}')


def failure(action, exc=None):
    """Roll back the session and hide the cause behind a retry message"""
    db.session.rollback()
    if exc is not None:
        logger.exception(f"Failed to {action}: {exc}")
    return fail(FAILURE, f'Failed to {action}. Please try again.')

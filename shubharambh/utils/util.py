from functools import wraps
from flask_jwt_extended import jwt_required, get_jwt


def role_required(*roles):
    def wrapper(fn):
        @wraps(fn)
        @jwt_required()
        def decorator(*args, **kwargs):
            claims = get_jwt()
            if claims.get('role') not in [role.value for role in roles]:
                return {'message': 'Access denied', 'error': 'unauthorized'}, 403
            return fn(*args, **kwargs)
        return decorator
    return wrapper


def admin_required(fn):
    @wraps(fn)
    @jwt_required()
    def decorator(*args, **kwargs):
        if not get_jwt().get('is_admin'):
            return {'message': 'Admin access required', 'error': 'unauthorized'}, 403
        return fn(*args, **kwargs)
    return decorator


def to_response(result):
    """Turn a service ``(data, error, status)`` triple into a restx response"""
    data, error, status = result
    return (error or data), status

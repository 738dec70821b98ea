from flask_restx import Namespace, Resource, fields
from flask import request, g
from ..models.user_model import Role
from ..services import auth_service
from ..utils.auth_middleware import token_required
from ..utils.role_utils import get_user_data_with_permissions
from ..utils.util import to_response

auth_ns = Namespace('auth', description='Authentication operations')

register_model = auth_ns.model('Register', {
    'name': fields.String(required=True, description='Full name'),
    'email': fields.String(required=True, description='Email address'),
    'password': fields.String(required=True, description='Password, at least 6 characters'),
    'phone': fields.String(description='Phone number'),
    'role': fields.String(description='user or vendor', enum=[role.value for role in Role], default='user')
})

login_model = auth_ns.model('Login', {
    'email': fields.String(required=True, description='Email address'),
    'password': fields.String(required=True, description='Password')
})


@auth_ns.route('/roles')
class Roles(Resource):
    def get(self):
        """Roles a new account can sign up with"""
        return {'roles': [role.value for role in Role]}, 200


@auth_ns.route('/register')
class Register(Resource):
    @auth_ns.expect(register_model)
    def post(self):
        """Register a new account"""
        return to_response(auth_service.register(request.get_json(silent=True)))


@auth_ns.route('/login')
class Login(Resource):
    @auth_ns.expect(login_model)
    def post(self):
        """Log in and receive an access token"""
        return to_response(auth_service.login(request.get_json(silent=True)))


@auth_ns.route('/verify')
class VerifyToken(Resource):
    @auth_ns.doc(security='BearerAuth')
    @token_required
    def get(self):
        """Check the token and return the current user"""
        return {
            'message': 'Token is valid',
            'user': get_user_data_with_permissions(g.user)
        }, 200

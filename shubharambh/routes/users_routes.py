from flask_restx import Namespace, Resource, fields
from flask import request, g
from ..services import auth_service
from ..utils.auth_middleware import token_required
from ..utils.util import to_response

users_ns = Namespace('users', description='Profile of the logged in user')

profile_model = users_ns.model('ProfileUpdate', {
    'name': fields.String(description='Full name'),
    'phone': fields.String(description='Phone number')
})


@users_ns.route('/me')
class Profile(Resource):
    @users_ns.doc(security='BearerAuth')
    @token_required
    def get(self):
        """Get own profile"""
        return to_response(auth_service.get_profile(g.user))

    @users_ns.doc(security='BearerAuth')
    @users_ns.expect(profile_model)
    @token_required
    def put(self):
        """Update name or phone"""
        return to_response(auth_service.update_profile(g.user, request.get_json(silent=True)))

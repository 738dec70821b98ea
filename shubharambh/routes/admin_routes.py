from flask_restx import Namespace, Resource, fields, reqparse
from flask import request
from ..services import admin_service
from ..utils.util import admin_required, to_response

admin_ns = Namespace('admin', description='Moderation of vendors and listings')

login_model = admin_ns.model('AdminLogin', {
    'password': fields.String(required=True, description='Admin password')
})

reason_model = admin_ns.model('RejectionReason', {
    'reason': fields.String(required=True, description='Why the submission was rejected')
})

vendor_filter_parser = reqparse.RequestParser()
vendor_filter_parser.add_argument('category', type=str, location='args', help='Category slug')
vendor_filter_parser.add_argument('status', type=str, location='args', default='all',
                                  help='all, pending, approved or rejected')

status_parser = reqparse.RequestParser()
status_parser.add_argument('status', type=str, location='args', default='all',
                           help='all, pending, approved or rejected')

delete_parser = reqparse.RequestParser()
delete_parser.add_argument('confirm', type=str, location='args', help='Must be "true" to delete')


def _reason():
    return (request.get_json(silent=True) or {}).get('reason')


@admin_ns.route('/login')
class AdminLogin(Resource):
    @admin_ns.expect(login_model)
    def post(self):
        """Exchange the admin password for an admin token"""
        return to_response(admin_service.admin_login((request.get_json(silent=True) or {}).get('password')))


@admin_ns.route('/stats')
class AdminStats(Resource):
    @admin_ns.doc(security='BearerAuth')
    @admin_required
    def get(self):
        """Moderation queue counts"""
        return to_response(admin_service.admin_stats())


@admin_ns.route('/vendors')
class AdminVendorList(Resource):
    @admin_ns.doc(security='BearerAuth')
    @admin_ns.expect(vendor_filter_parser)
    @admin_required
    def get(self):
        """Vendors filtered by category and status"""
        args = vendor_filter_parser.parse_args()
        return to_response(admin_service.list_vendors(category=args['category'], status=args['status']))


@admin_ns.route('/vendors/<int:vendor_id>')
class AdminVendor(Resource):
    @admin_ns.doc(security='BearerAuth')
    @admin_ns.expect(delete_parser)
    @admin_required
    def delete(self, vendor_id):
        """Delete a vendor and all its listings"""
        confirm = (delete_parser.parse_args()['confirm'] or '').lower() == 'true'
        return to_response(admin_service.delete_vendor(vendor_id, confirm=confirm))


@admin_ns.route('/vendors/<int:vendor_id>/approve')
class ApproveVendor(Resource):
    @admin_ns.doc(security='BearerAuth')
    @admin_required
    def post(self, vendor_id):
        """Approve a vendor and its pending listings"""
        return to_response(admin_service.approve_vendor(vendor_id))


@admin_ns.route('/vendors/<int:vendor_id>/reject')
class RejectVendor(Resource):
    @admin_ns.doc(security='BearerAuth')
    @admin_ns.expect(reason_model)
    @admin_required
    def post(self, vendor_id):
        """Reject a vendor and take its listings off the marketplace"""
        return to_response(admin_service.reject_vendor(vendor_id, _reason()))


@admin_ns.route('/vendors/<int:vendor_id>/toggle-active')
class ToggleVendor(Resource):
    @admin_ns.doc(security='BearerAuth')
    @admin_required
    def post(self, vendor_id):
        """Activate or deactivate a vendor"""
        return to_response(admin_service.toggle_vendor_active(vendor_id))


@admin_ns.route('/venues')
class AdminVenueList(Resource):
    @admin_ns.doc(security='BearerAuth')
    @admin_ns.expect(status_parser)
    @admin_required
    def get(self):
        """Listings filtered by status"""
        return to_response(admin_service.list_venues(status_parser.parse_args()['status']))


@admin_ns.route('/venues/<int:venue_id>')
class AdminVenue(Resource):
    @admin_ns.doc(security='BearerAuth')
    @admin_required
    def delete(self, venue_id):
        """Delete a listing"""
        return to_response(admin_service.delete_venue(venue_id))


@admin_ns.route('/venues/<int:venue_id>/approve')
class ApproveVenue(Resource):
    @admin_ns.doc(security='BearerAuth')
    @admin_required
    def post(self, venue_id):
        """Approve a single listing"""
        return to_response(admin_service.approve_venue(venue_id))


@admin_ns.route('/venues/<int:venue_id>/reject')
class RejectVenue(Resource):
    @admin_ns.doc(security='BearerAuth')
    @admin_ns.expect(reason_model)
    @admin_required
    def post(self, venue_id):
        """Reject a single listing"""
        return to_response(admin_service.reject_venue(venue_id, _reason()))

from flask_restx import Namespace, Resource
from flask import g
from ..models.user_model import Role
from ..services import quote_service, appointment_service, listing_service
from ..utils.auth_middleware import token_required
from ..utils.util import role_required

dashboard_ns = Namespace('dashboard', description='User and vendor dashboards')


class DashboardError(Exception):
    def __init__(self, error, status):
        super().__init__(error['message'])
        self.error = error
        self.status = status


def _unwrap(result):
    data, error, status = result
    if error:
        raise DashboardError(error, status)
    return data


def user_dashboard(session):
    return {
        'quoteRequests': _unwrap(quote_service.get_user_quote_requests(session)),
        'appointments': _unwrap(appointment_service.get_user_appointments(session)),
    }


def vendor_dashboard(session):
    listings = _unwrap(listing_service.get_vendor_listings(session))
    return {
        'vendor': listings['vendor'],
        'listings': listings['listings'],
        'quoteRequests': _unwrap(quote_service.get_vendor_quote_requests(session)),
        'appointments': _unwrap(appointment_service.get_vendor_appointments(session)),
        'stats': _unwrap(quote_service.enquiry_stats(session)),
    }


@dashboard_ns.route('')
class Dashboard(Resource):
    @dashboard_ns.doc(security='BearerAuth')
    @token_required
    def get(self):
        """Dashboard for the current role: vendors also see their own enquiries as a customer"""
        session = g.session
        try:
            data = {'role': session.role, 'user': user_dashboard(session)}
            if session.role == Role.VENDOR.value:
                data['vendor'] = vendor_dashboard(session)
        except DashboardError as e:
            return e.error, e.status
        return data, 200


@dashboard_ns.route('/user')
class UserDashboard(Resource):
    @dashboard_ns.doc(security='BearerAuth')
    @token_required
    def get(self):
        """Your quote requests and appointments"""
        try:
            return user_dashboard(g.session), 200
        except DashboardError as e:
            return e.error, e.status


@dashboard_ns.route('/vendor')
class VendorDashboard(Resource):
    @dashboard_ns.doc(security='BearerAuth')
    @role_required(Role.VENDOR)
    @token_required
    def get(self):
        """Listings, enquiries, appointments and stats of your vendor account"""
        try:
            return vendor_dashboard(g.session), 200
        except DashboardError as e:
            return e.error, e.status

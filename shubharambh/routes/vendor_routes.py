from flask_restx import Namespace, Resource, fields
from flask import request
from flask_jwt_extended import jwt_required
from ..categories import CATEGORIES
from ..services import listing_service, quote_service, appointment_service
from ..utils.auth_middleware import current_session
from ..utils.util import to_response

vendor_ns = Namespace('vendors', description='Vendor onboarding, listings and responses')

listing_model = vendor_ns.model('ListingSubmission', {
    'name': fields.String(description='Contact person, required for first-time vendors'),
    'email': fields.String(description='Contact email, required for first-time vendors'),
    'phone': fields.String(description='Contact phone'),
    'businessName': fields.String(required=True, description='Business or venue name'),
    'category': fields.String(required=True, description='Category slug', enum=list(CATEGORIES)),
    'city': fields.String(required=True, description='City'),
    'location': fields.String(required=True, description='Area within the city'),
    'address': fields.String(description='Street address'),
    'description': fields.String(description='About the business'),
    'priceMin': fields.Integer(description='Starting price in rupees'),
    'priceMax': fields.Integer(description='Upper price in rupees'),
    'capacity': fields.Integer(description='Guest capacity, venues only'),
    'eventTypes': fields.List(fields.String, description='Event types served'),
    'amenities': fields.List(fields.String, description='Amenities'),
    'images': fields.List(fields.String, description='https URLs or data:image URIs, at most 3')
})

response_model = vendor_ns.model('VendorResponse', {
    'message': fields.String(description='Message shown to the customer on acceptance'),
    'reason': fields.String(description='Reason, required when rejecting')
})


def _body():
    return request.get_json(silent=True) or {}


@vendor_ns.route('/submit')
class SubmitListing(Resource):
    @vendor_ns.doc(security='BearerAuth')
    @vendor_ns.expect(listing_model)
    def post(self):
        """Register as a vendor with a first listing, or add a listing to an existing vendor"""
        return to_response(listing_service.submit_listing(_body(), current_session()))


@vendor_ns.route('/listings')
class VendorListings(Resource):
    @vendor_ns.doc(security='BearerAuth')
    @jwt_required()
    def get(self):
        """Own vendor profile and all listings"""
        return to_response(listing_service.get_vendor_listings(current_session()))

    @vendor_ns.doc(security='BearerAuth')
    @vendor_ns.expect(listing_model)
    @jwt_required()
    def post(self):
        """Add another listing"""
        return to_response(listing_service.add_listing(_body(), current_session()))


@vendor_ns.route('/listings/<int:venue_id>')
class VendorListing(Resource):
    @vendor_ns.doc(security='BearerAuth')
    @vendor_ns.expect(listing_model)
    @jwt_required()
    def put(self, venue_id):
        """Edit one of your listings"""
        return to_response(listing_service.update_listing(venue_id, _body(), current_session()))

    @vendor_ns.doc(security='BearerAuth')
    @jwt_required()
    def delete(self, venue_id):
        """Delete one of your listings"""
        return to_response(listing_service.delete_listing(venue_id, current_session()))


@vendor_ns.route('/quotes')
class VendorQuotes(Resource):
    @vendor_ns.doc(security='BearerAuth')
    @jwt_required()
    def get(self):
        """Quote requests addressed to you"""
        return to_response(quote_service.get_vendor_quote_requests(current_session()))


@vendor_ns.route('/quotes/<int:quote_request_id>/accept')
class AcceptQuote(Resource):
    @vendor_ns.doc(security='BearerAuth')
    @vendor_ns.expect(response_model)
    @jwt_required()
    def post(self, quote_request_id):
        """Accept a quote request"""
        return to_response(quote_service.accept_quote_request(
            quote_request_id, current_session(), _body().get('message')))


@vendor_ns.route('/quotes/<int:quote_request_id>/reject')
class RejectQuote(Resource):
    @vendor_ns.doc(security='BearerAuth')
    @vendor_ns.expect(response_model)
    @jwt_required()
    def post(self, quote_request_id):
        """Reject a quote request with a reason"""
        return to_response(quote_service.reject_quote_request(
            quote_request_id, current_session(), _body().get('reason')))


@vendor_ns.route('/enquiry-stats')
class EnquiryStats(Resource):
    @vendor_ns.doc(security='BearerAuth')
    @jwt_required()
    def get(self):
        """Counts and response rate of your enquiries"""
        return to_response(quote_service.enquiry_stats(current_session()))


@vendor_ns.route('/appointments')
class VendorAppointments(Resource):
    @vendor_ns.doc(security='BearerAuth')
    @jwt_required()
    def get(self):
        """Appointments on your listings"""
        return to_response(appointment_service.get_vendor_appointments(current_session()))


@vendor_ns.route('/appointments/<int:appointment_id>/confirm')
class ConfirmAppointment(Resource):
    @vendor_ns.doc(security='BearerAuth')
    @jwt_required()
    def post(self, appointment_id):
        """Confirm a pending appointment"""
        return to_response(appointment_service.confirm_appointment(appointment_id, current_session()))


@vendor_ns.route('/appointments/<int:appointment_id>/reject')
class RejectAppointment(Resource):
    @vendor_ns.doc(security='BearerAuth')
    @vendor_ns.expect(response_model)
    @jwt_required()
    def post(self, appointment_id):
        """Reject a pending appointment with a reason"""
        return to_response(appointment_service.reject_appointment(
            appointment_id, current_session(), _body().get('reason')))

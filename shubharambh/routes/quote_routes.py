from flask_restx import Namespace, Resource, fields
from flask import request, g
from ..services import quote_service
from ..utils.auth_middleware import token_required
from ..utils.util import to_response

quote_ns = Namespace('quotes', description='Quote requests raised by users')

quote_model = quote_ns.model('QuoteRequest', {
    'venueId': fields.Integer(description='Listing the enquiry starts from'),
    'category': fields.String(description='Category slug, defaults to the listing category'),
    'eventType': fields.String(required=True, description='Event type'),
    'location': fields.String(required=True, description='Event location'),
    'eventDate': fields.String(required=True, description='Date in ISO format'),
    'attendees': fields.Integer(description='Expected guests, required for venues, caterers, decorators and DJs'),
    'budgetMin': fields.Integer(description='Budget lower bound in rupees'),
    'budgetMax': fields.Integer(description='Budget upper bound in rupees'),
    'requirements': fields.String(required=True, description='What you need'),
    'notes': fields.String(description='Anything else'),
    'categoryDetails': fields.Raw(description='Answers to the category quote fields')
})


@quote_ns.route('')
class QuoteRequestList(Resource):
    @quote_ns.doc(security='BearerAuth')
    @token_required
    def get(self):
        """Your quote requests with vendor responses"""
        return to_response(quote_service.get_user_quote_requests(g.session))

    @quote_ns.doc(security='BearerAuth')
    @quote_ns.expect(quote_model)
    @token_required
    def post(self):
        """Send a quote request to the listing vendor and similar vendors"""
        return to_response(quote_service.create_quote_request(request.get_json(silent=True), g.session))

from flask_restx import Namespace, Resource, fields
from flask import request, g
from ..services import chat_service, quote_service
from ..utils.auth_middleware import token_required
from ..utils.util import to_response

chat_ns = Namespace('chat', description='Shubhi, the planning assistant')

chat_turn_model = chat_ns.model('ChatTurn', {
    'role': fields.String(required=True, enum=['user', 'assistant']),
    'content': fields.String(required=True)
})

chat_model = chat_ns.model('ChatConversation', {
    'messages': fields.List(fields.Nested(chat_turn_model), required=True, description='Conversation so far')
})

chat_response_model = chat_ns.model('ChatReply', {
    'message': fields.String(description='Assistant reply')
})

enquiry_model = chat_ns.model('ChatEnquiry', {
    'venueId': fields.Integer(description='Listing ID from a chat card'),
    'venueName': fields.String(description='Listing name when no ID is known'),
    'category': fields.String(description='Category slug, defaults to venues'),
    'eventType': fields.String(required=True),
    'eventDate': fields.String(required=True, description='Date in ISO format'),
    'guests': fields.Integer(description='Expected guests'),
    'message': fields.String(required=True, description='Enquiry text')
})


@chat_ns.route('')
class ChatResource(Resource):
    @chat_ns.expect(chat_model)
    @chat_ns.marshal_with(chat_response_model)
    def post(self):
        """Reply to a conversation"""
        messages = (request.get_json(silent=True) or {}).get('messages') or []
        data, _, status = chat_service.chat_reply(messages)
        return data, status


@chat_ns.route('/enquiry')
class ChatEnquiryResource(Resource):
    @chat_ns.doc(security='BearerAuth')
    @chat_ns.expect(enquiry_model)
    @token_required
    def post(self):
        """Send an enquiry picked from the chat"""
        return to_response(quote_service.create_chat_enquiry(request.get_json(silent=True), g.session))

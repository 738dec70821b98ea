from flask_restx import Namespace, Resource, fields
from flask import request, g
from ..models.status import AppointmentType
from ..services import appointment_service
from ..utils.auth_middleware import token_required
from ..utils.util import to_response

appointment_ns = Namespace('appointments', description='Appointments and site visits')

appointment_model = appointment_ns.model('Appointment', {
    'venueId': fields.Integer(required=True, description='ID of the listing'),
    'type': fields.String(required=True, enum=[t.value for t in AppointmentType], description='appointment or visit'),
    'scheduledDate': fields.String(required=True, description='Date in ISO format'),
    'scheduledTime': fields.String(required=True, description='Preferred time, e.g. 11:00 AM'),
    'eventType': fields.String(required=True, description='Event type'),
    'attendees': fields.Integer(description='Expected guests'),
    'phone': fields.String(required=True, description='Phone number shared with the vendor'),
    'notes': fields.String(description='Notes for the vendor')
})


@appointment_ns.route('')
class AppointmentList(Resource):
    @appointment_ns.doc(security='BearerAuth')
    @token_required
    def get(self):
        """Your appointments"""
        return to_response(appointment_service.get_user_appointments(g.session))

    @appointment_ns.doc(security='BearerAuth')
    @appointment_ns.expect(appointment_model)
    @token_required
    def post(self):
        """Book an appointment or a site visit"""
        return to_response(appointment_service.create_appointment(request.get_json(silent=True), g.session))


@appointment_ns.route('/<int:appointment_id>/cancel')
class CancelAppointment(Resource):
    @appointment_ns.doc(security='BearerAuth')
    @token_required
    def post(self, appointment_id):
        """Cancel your pending appointment"""
        return to_response(appointment_service.cancel_appointment(appointment_id, g.session))

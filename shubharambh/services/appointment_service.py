# Appointments and site visits booked against a marketplace listing
import datetime
import logging
from dateutil.parser import isoparse
from .. import db
from ..models.user_model import User
from ..models.venue_model import Venue
from ..models.appointment_model import Appointment
from ..models.status import AppointmentStatus, AppointmentType, can_transition
from ..notifications.dispatch import notify_appointment_request, notify_appointment_response
from .formatting import format_appointment
from .vendor_resolution import resolve_vendor, resolve_vendor_for_write
from . import errors

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = [
    ('venueId', 'Venue is required'),
    ('type', 'Appointment type is required'),
    ('scheduledDate', 'Date is required'),
    ('scheduledTime', 'Time is required'),
    ('eventType', 'Event type is required'),
    ('phone', 'Phone number is required'),
]


def parse_scheduled_date(value, today=None):
    """Parse an ISO date, rejecting days before today. Returns ``(date, error_message)``"""
    try:
        scheduled = isoparse(str(value)).replace(tzinfo=None)
    except (TypeError, ValueError):
        return None, 'Invalid date format. Use ISO format (YYYY-MM-DD)'
    today = today or datetime.date.today()
    if scheduled.date() < today:
        return None, 'Appointment date cannot be in the past'
    return scheduled, None


def create_appointment(data, session):
    if session is None or session.user_id is None:
        return errors.unauthenticated('Please login to book an appointment')
    data = data or {}
    for key, message in REQUIRED_FIELDS:
        value = data.get(key)
        if value is None or (isinstance(value, str) and not value.strip()):
            return errors.validation_error(message, fields=[key])

    try:
        appointment_type = AppointmentType(data['type'])
    except ValueError:
        return errors.validation_error('Type must be appointment or visit', fields=['type'])

    scheduled_date, date_error = parse_scheduled_date(data['scheduledDate'])
    if date_error:
        return errors.validation_error(date_error, fields=['scheduledDate'])

    try:
        venue = db.session.get(Venue, int(data['venueId']))
    except (TypeError, ValueError):
        venue = None
    if venue is None or not venue.is_public:
        return errors.not_found('Venue not found')

    try:
        attendees = int(data.get('attendees') or 1)
    except (TypeError, ValueError):
        return errors.validation_error('Attendees must be a number', fields=['attendees'])

    user = db.session.get(User, session.user_id)
    try:
        appointment = Appointment(
            user_id=session.user_id,
            vendor_id=venue.vendor_id,
            venue_id=venue.id,
            type=appointment_type,
            scheduled_date=scheduled_date,
            scheduled_time=str(data['scheduledTime']).strip(),
            event_type=data['eventType'],
            attendees=max(attendees, 1),
            notes=(data.get('notes') or '').strip(),
            contact_shared=True,
            user_name=user.name if user else session.name,
            user_email=user.email if user else session.email,
            user_phone=str(data['phone']).strip(),
            status=AppointmentStatus.PENDING,
        )
        db.session.add(appointment)
        db.session.commit()
        logger.info(f"Appointment {appointment.id} ({appointment_type.value}) booked for venue {venue.id} "
                    f"by user {session.user_id}")
    except Exception as e:
        return errors.failure('book appointment', e)

    if venue.vendor is not None:
        notify_appointment_request(appointment, venue.vendor, venue)

    if appointment_type == AppointmentType.VISIT:
        message = 'Visit scheduled successfully! The venue will contact you to confirm.'
    else:
        message = 'Appointment booked successfully! The venue will contact you shortly.'
    return {'message': message, 'appointment': format_appointment(appointment)}, None, 201


def _owned_appointment(appointment_id, session):
    """The appointment when the session's vendor owns its listing, else None"""
    vendor = resolve_vendor_for_write(session)
    if vendor is None:
        return None
    appointment = db.session.get(Appointment, appointment_id)
    if appointment is None or appointment.venue is None:
        return None
    if appointment.venue.vendor_id != vendor.id:
        return None
    return appointment


def _vendor_decision(appointment_id, session, new_status, reason=None):
    if session is None:
        return errors.unauthenticated('Not authenticated')
    appointment = _owned_appointment(appointment_id, session)
    if appointment is None:
        return errors.unauthorized('Appointment')
    if not can_transition(appointment.status, new_status):
        return errors.invalid_transition(appointment.status, new_status)
    try:
        appointment.status = new_status
        if reason:
            appointment.rejection_reason = reason
        db.session.commit()
        logger.info(f"Appointment {appointment.id} {new_status.value}")
    except Exception as e:
        return errors.failure('update appointment', e)

    notify_appointment_response(appointment)
    return {
        'message': f'Appointment {new_status.value}',
        'appointment': format_appointment(appointment),
    }, None, 200


def confirm_appointment(appointment_id, session):
    return _vendor_decision(appointment_id, session, AppointmentStatus.CONFIRMED)


def reject_appointment(appointment_id, session, reason):
    reason = (reason or '').strip()
    if not reason:
        return errors.validation_error('Rejection reason is required', fields=['reason'])
    return _vendor_decision(appointment_id, session, AppointmentStatus.REJECTED, reason)


def cancel_appointment(appointment_id, session):
    """Users may withdraw their own appointment while it is still pending"""
    if session is None or session.user_id is None:
        return errors.unauthenticated()
    appointment = db.session.get(Appointment, appointment_id)
    if appointment is None or appointment.user_id != session.user_id:
        return errors.unauthorized('Appointment')
    if not can_transition(appointment.status, AppointmentStatus.CANCELLED):
        return errors.invalid_transition(appointment.status, AppointmentStatus.CANCELLED)
    try:
        appointment.status = AppointmentStatus.CANCELLED
        db.session.commit()
        logger.info(f"Appointment {appointment.id} cancelled by user {session.user_id}")
    except Exception as e:
        return errors.failure('cancel appointment', e)
    return {'message': 'Appointment cancelled', 'appointment': format_appointment(appointment)}, None, 200


def get_user_appointments(session):
    if session is None or session.user_id is None:
        return errors.unauthenticated()
    appointments = (Appointment.query
                    .filter_by(user_id=session.user_id)
                    .order_by(Appointment.scheduled_date.asc(), Appointment.id.asc())
                    .all())
    return [format_appointment(a) for a in appointments], None, 200


def get_vendor_appointments(session):
    """Appointments on every listing the session's vendor owns"""
    if session is None:
        return errors.unauthenticated()
    vendor, _ = resolve_vendor(session)
    if vendor is None:
        return [], None, 200
    venue_ids = [venue.id for venue in vendor.venues]
    if not venue_ids:
        return [], None, 200
    appointments = (Appointment.query
                    .filter(Appointment.venue_id.in_(venue_ids))
                    .order_by(Appointment.scheduled_date.asc(), Appointment.id.asc())
                    .all())
    return [format_appointment(a) for a in appointments], None, 200

# Best-effort notifications: a failed email never fails the request that triggered it
import logging
from flask import current_app
from .mailer import get_mailer
from . import templates

logger = logging.getLogger(__name__)


def dashboard_url(path='/dashboard'):
    return current_app.config.get('PUBLIC_BASE_URL', 'http://localhost:3000').rstrip('/') + path


def deliver(to, subject, render):
    """Render and send one email, logging instead of raising on any failure"""
    if not to:
        logger.info(f"No recipient for '{subject}', skipping")
        return False
    try:
        html = render()
        return get_mailer().send(to, subject, html)
    except Exception as e:
        logger.error(f"Notification '{subject}' to {to} failed (non-fatal): {e}")
        return False


def notify_quote_enquiry(quote_request, vendor, user, venue=None):
    user_name = user.name if user else 'a Customer'
    return deliver(
        vendor.email,
        f'🎉 New Quote Enquiry from {user_name} – Shubharambh',
        lambda: templates.quote_enquiry_email(
            vendor_name=vendor.name or vendor.business_name,
            business_name=vendor.business_name,
            user_name=user.name if user else 'A Customer',
            user_email=user.email if user else '',
            event_type=quote_request.event_type,
            event_date=quote_request.event_date,
            location=quote_request.location,
            attendees=quote_request.attendees or 0,
            budget_min=quote_request.budget_min,
            budget_max=quote_request.budget_max,
            requirements=quote_request.requirements,
            notes=quote_request.notes,
            venue_name=venue.name if venue else None,
            category_details=quote_request.category_details,
            dashboard_url=dashboard_url('/dashboard'),
        )
    )


def notify_appointment_request(appointment, vendor, venue):
    label = 'Site Visit' if appointment.type.value == 'visit' else 'Appointment'
    return deliver(
        vendor.email,
        f'📅 New {label} Request from {appointment.user_name} – Shubharambh',
        lambda: templates.appointment_request_email(
            vendor_name=vendor.name or vendor.business_name,
            business_name=vendor.business_name,
            user_name=appointment.user_name,
            user_email=appointment.user_email,
            user_phone=appointment.user_phone,
            appointment_type=appointment.type.value,
            scheduled_date=appointment.scheduled_date,
            scheduled_time=appointment.scheduled_time,
            event_type=appointment.event_type,
            attendees=appointment.attendees,
            notes=appointment.notes,
            venue_name=venue.name if venue else None,
            dashboard_url=dashboard_url('/vendor-dashboard'),
        )
    )


def notify_quote_response(quote_request, vendor):
    user = quote_request.user
    accepted = quote_request.response_status.value == 'accepted'
    return deliver(
        user.email if user else None,
        f"{'✅' if accepted else '❌'} {vendor.business_name} responded to your enquiry – Shubharambh",
        lambda: templates.quote_response_email(
            user_name=user.name,
            business_name=vendor.business_name,
            event_type=quote_request.event_type,
            accepted=accepted,
            message=quote_request.response_message,
            venue_name=quote_request.venue.name if quote_request.venue else None,
            dashboard_url=dashboard_url('/dashboard'),
        )
    )


def notify_appointment_response(appointment):
    confirmed = appointment.status.value == 'confirmed'
    venue_name = appointment.venue.name if appointment.venue else 'the venue'
    return deliver(
        appointment.user_email,
        f"{'✅' if confirmed else '❌'} Your booking at {venue_name} was {'confirmed' if confirmed else 'declined'} – Shubharambh",
        lambda: templates.appointment_response_email(
            user_name=appointment.user_name,
            venue_name=venue_name,
            appointment_type=appointment.type.value,
            scheduled_date=appointment.scheduled_date,
            scheduled_time=appointment.scheduled_time,
            confirmed=confirmed,
            reason=appointment.rejection_reason,
            dashboard_url=dashboard_url('/dashboard'),
        )
    )

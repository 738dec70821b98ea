# Quote requests: user enquiries and vendor responses
import datetime
import json
import logging
from dateutil.parser import isoparse
from sqlalchemy import func
from .. import db
from ..categories import get_category, needs_guest_count
from ..models.user_model import User
from ..models.vendor_model import Vendor
from ..models.venue_model import Venue
from ..models.quote_request_model import QuoteRequest
from ..models.status import QuoteStatus, ResponseStatus, QuoteSource, can_transition
from ..notifications.dispatch import notify_quote_enquiry, notify_quote_response
from .formatting import format_quote_request
from .marketplace_service import visible_listings, escape_like
from .vendor_resolution import resolve_vendor, resolve_vendor_for_write
from . import errors

logger = logging.getLogger(__name__)

ADDITIONAL_VENDOR_LIMIT = 4
DEFAULT_BUDGET_MIN = 0
DEFAULT_BUDGET_MAX = 1000000
DEFAULT_ACCEPT_MESSAGE = 'Your quote request has been accepted. We will contact you soon with details.'

REQUIRED_FIELDS = [
    ('eventType', 'Event type is required'),
    ('location', 'Location is required'),
    ('eventDate', 'Event date is required'),
    ('requirements', 'Requirements are required'),
]


def _to_int(value):
    if value is None or value == '':
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


def _parse_date(value):
    if isinstance(value, datetime.datetime):
        return value
    try:
        return isoparse(str(value)).replace(tzinfo=None)
    except (TypeError, ValueError):
        return None


def clean_category_details(category, raw):
    """Restrict details to the category's quote fields and check select options.

    Returns ``(details, error_message)``.
    """
    if not raw:
        return {}, None
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            logger.warning("Could not parse categoryDetails, skipping")
            return {}, None
    if not isinstance(raw, dict):
        return {}, None
    fields = {field.key: field for field in (category.quote_fields if category else ())}
    details = {}
    for key, value in raw.items():
        field = fields.get(key)
        if field is None or value in (None, ''):
            continue
        value = str(value).strip()
        if field.input_type == 'select' and value not in field.options:
            return None, f'Invalid value for {field.label}: {value}'
        details[key] = value
    return details, None


def _additional_vendors(category, exclude_ids):
    candidates = (Vendor.query
                  .filter(Vendor.is_active.is_(True))
                  .order_by(Vendor.id.asc())
                  .all())
    picked = []
    for vendor in candidates:
        if vendor.id in exclude_ids or category not in (vendor.categories or []):
            continue
        picked.append(vendor)
        if len(picked) == ADDITIONAL_VENDOR_LIMIT:
            break
    return picked


def _target_vendors(primary_vendor, category):
    vendors = [primary_vendor] if primary_vendor is not None else []
    exclude = {vendor.id for vendor in vendors}
    return vendors + _additional_vendors(category, exclude)


def _public_venue(venue_id):
    venue = db.session.get(Venue, venue_id)
    if venue is None or not venue.is_public:
        return None
    return venue


def create_quote_request(data, session):
    if session is None or session.user_id is None:
        return errors.unauthenticated('Please login to request a quote')
    data = data or {}
    for key, message in REQUIRED_FIELDS:
        value = data.get(key)
        if value is None or (isinstance(value, str) and not value.strip()):
            return errors.validation_error(message, fields=[key])

    event_date = _parse_date(data['eventDate'])
    if event_date is None:
        return errors.validation_error('Invalid event date', fields=['eventDate'])

    venue = None
    venue_id = _to_int(data.get('venueId'))
    if data.get('venueId'):
        venue = _public_venue(venue_id) if venue_id else None
        if venue is None:
            return errors.not_found('Venue not found')

    category_slug = data.get('category') or (venue.category if venue else 'venues')
    category = get_category(category_slug)
    if category is None:
        return errors.validation_error(f'Unknown category: {category_slug}', fields=['category'])

    attendees = _to_int(data.get('attendees'))
    if needs_guest_count(category.slug):
        if not attendees or attendees <= 0:
            return errors.validation_error('Please enter the expected number of guests', fields=['attendees'])
    else:
        attendees = None

    details, details_error = clean_category_details(category, data.get('categoryDetails'))
    if details_error:
        return errors.validation_error(details_error, fields=['categoryDetails'])

    budget_min = _to_int(data.get('budgetMin'))
    budget_max = _to_int(data.get('budgetMax'))

    try:
        primary_vendor = venue.vendor if venue is not None else None
        vendors = _target_vendors(primary_vendor, category.slug)
        quote_request = QuoteRequest(
            user_id=session.user_id,
            venue_id=venue.id if venue else None,
            event_type=data['eventType'].strip(),
            location=data['location'].strip(),
            event_date=event_date,
            attendees=attendees,
            budget_min=budget_min if budget_min and budget_min > 0 else DEFAULT_BUDGET_MIN,
            budget_max=budget_max if budget_max and budget_max > 0 else DEFAULT_BUDGET_MAX,
            requirements=data['requirements'].strip(),
            notes=(data.get('notes') or '').strip(),
            category=category.slug,
            category_details=details,
            source=QuoteSource.WEBSITE,
            status=QuoteStatus.PENDING,
        )
        quote_request.vendors = vendors
        db.session.add(quote_request)
        db.session.commit()
        logger.info(f"Quote request {quote_request.id} created by user {session.user_id} "
                    f"for {len(vendors)} vendors [{category.slug}]")
    except Exception as e:
        return errors.failure('create quote request', e)

    if vendors:
        notify_quote_enquiry(quote_request, vendors[0], db.session.get(User, session.user_id), venue)

    if venue is not None:
        message = f"Enquiry sent to {venue.name}. They'll respond within 24 hours."
    else:
        message = f'Quote request sent to {len(vendors)} vendors. Check your dashboard for responses.'
    return {'message': message, 'quoteRequestId': quote_request.id}, None, 201


def find_venue_by_name(name):
    """Public listing by exact name, falling back to a partial match"""
    name = (name or '').strip()
    if not name:
        return None
    visible = visible_listings()
    venue = visible.filter(func.lower(Venue.name) == name.lower()).first()
    if venue is None:
        venue = visible.filter(Venue.name.ilike(f'%{escape_like(name)}%', escape='\\')).first()
    return venue


def create_chat_enquiry(data, session):
    """Enquiry raised from the chat concierge, addressed by listing id or name"""
    if session is None or session.user_id is None:
        return errors.unauthenticated('Please login to send an enquiry')
    data = data or {}
    for key, label in (('eventType', 'Event type'), ('eventDate', 'Event date'), ('message', 'Message')):
        if not data.get(key):
            return errors.validation_error(f'{label} is required', fields=[key])
    event_date = _parse_date(data['eventDate'])
    if event_date is None:
        return errors.validation_error('Invalid event date', fields=['eventDate'])

    category_slug = data.get('category') or 'venues'
    if get_category(category_slug) is None:
        return errors.validation_error(f'Unknown category: {category_slug}', fields=['category'])
    venue_name = (data.get('venueName') or '').strip()

    try:
        venue = None
        venue_id = _to_int(data.get('venueId'))
        if venue_id:
            venue = _public_venue(venue_id)
        if venue is None and venue_name:
            venue = find_venue_by_name(venue_name)
        primary_vendor = venue.vendor if venue is not None else None
        vendors = _target_vendors(primary_vendor, category_slug)
        guests = _to_int(data.get('guests'))
        quote_request = QuoteRequest(
            user_id=session.user_id,
            venue_id=venue.id if venue is not None else None,
            event_type=data['eventType'],
            location=(venue.city or venue.location) if venue is not None else 'Not specified',
            event_date=event_date,
            attendees=guests if guests and guests > 0 else None,
            budget_min=DEFAULT_BUDGET_MIN,
            budget_max=DEFAULT_BUDGET_MAX,
            requirements=data['message'],
            notes=f"Enquiry sent via Shubhi chatbot{f' for {venue_name}' if venue_name else ''}",
            category=category_slug,
            category_details={},
            source=QuoteSource.CHATBOT,
            status=QuoteStatus.PENDING,
        )
        quote_request.vendors = vendors
        db.session.add(quote_request)
        db.session.commit()
        logger.info(f"Chatbot quote request {quote_request.id} created for {len(vendors)} vendors")
    except Exception as e:
        return errors.failure('send enquiry', e)

    if vendors:
        notify_quote_enquiry(quote_request, vendors[0], db.session.get(User, session.user_id), venue)

    target = (venue.name if venue is not None else None) or venue_name or f'{len(vendors)} vendor(s)'
    return {
        'message': f"Enquiry sent to {target}! They'll respond within 24 hours. Check your dashboard for updates.",
        'quoteRequestId': quote_request.id,
    }, None, 201


def _respond(quote_request_id, session, response_status, message):
    if session is None:
        return errors.unauthenticated('Not authenticated')
    vendor = resolve_vendor_for_write(session)
    if vendor is None:
        return errors.not_found('Vendor not found')
    quote_request = db.session.get(QuoteRequest, quote_request_id)
    if quote_request is None or vendor.id not in quote_request.vendor_ids:
        return errors.unauthorized('Quote request')
    if quote_request.response_status is not None:
        return errors.already_responded()
    if not can_transition(quote_request.status, QuoteStatus.RESPONDED):
        return errors.invalid_transition(quote_request.status, QuoteStatus.RESPONDED)
    try:
        quote_request.status = QuoteStatus.RESPONDED
        quote_request.response_status = response_status
        quote_request.response_message = message
        quote_request.responded_at = datetime.datetime.utcnow()
        quote_request.responded_by = vendor.id
        db.session.commit()
        logger.info(f"Vendor {vendor.id} {response_status.value} quote request {quote_request.id}")
    except Exception as e:
        return errors.failure('respond to quote request', e)

    notify_quote_response(quote_request, vendor)
    return {
        'message': f'Quote request {response_status.value}',
        'quoteRequest': format_quote_request(quote_request),
    }, None, 200


def accept_quote_request(quote_request_id, session, message=None):
    message = (message or '').strip() or DEFAULT_ACCEPT_MESSAGE
    return _respond(quote_request_id, session, ResponseStatus.ACCEPTED, message)


def reject_quote_request(quote_request_id, session, reason):
    reason = (reason or '').strip()
    if not reason:
        return errors.validation_error('Rejection reason is required', fields=['reason'])
    return _respond(quote_request_id, session, ResponseStatus.REJECTED, reason)


def get_user_quote_requests(session):
    if session is None or session.user_id is None:
        return errors.unauthenticated()
    quote_requests = (QuoteRequest.query
                      .filter_by(user_id=session.user_id)
                      .order_by(QuoteRequest.created_at.desc(), QuoteRequest.id.desc())
                      .all())
    return [format_quote_request(qr) for qr in quote_requests], None, 200


def get_vendor_quote_requests(session):
    if session is None:
        return errors.unauthenticated()
    vendor, _ = resolve_vendor(session)
    if vendor is None:
        return [], None, 200
    quote_requests = sorted(vendor.quote_requests, key=lambda qr: (qr.created_at, qr.id), reverse=True)
    return [format_quote_request(qr) for qr in quote_requests], None, 200


def enquiry_stats(session):
    if session is None:
        return errors.unauthenticated()
    vendor, _ = resolve_vendor(session)
    quote_requests = vendor.quote_requests if vendor is not None else []
    total = len(quote_requests)
    responded = [qr for qr in quote_requests if qr.status == QuoteStatus.RESPONDED]
    accepted = [qr for qr in responded if qr.response_status == ResponseStatus.ACCEPTED]
    return {
        'totalEnquiries': total,
        'pendingEnquiries': total - len(responded),
        'respondedEnquiries': len(responded),
        'acceptedEnquiries': len(accepted),
        'rejectedEnquiries': len(responded) - len(accepted),
        'responseRate': f'{len(responded) / total * 100:.1f}' if total else '0',
    }, None, 200

# Admin moderation of vendors and listings
import datetime
import hmac
import logging
from flask import current_app
from flask_jwt_extended import create_access_token
from sqlalchemy import or_
from .. import db
from ..categories import CATEGORIES
from ..models.vendor_model import Vendor
from ..models.venue_model import Venue
from ..models.status import ListingStatus, can_transition
from ..utils.auth_middleware import ADMIN_IDENTITY
from .formatting import format_vendor, format_venue
from . import errors

logger = logging.getLogger(__name__)

STATUS_FILTERS = ('all', 'pending', 'approved', 'rejected')
VENDOR_REJECTED_REASON = 'Vendor rejected'


def admin_login(password):
    expected = current_app.config.get('ADMIN_PASSWORD')
    if not expected:
        return errors.fail(errors.UNAUTHENTICATED, 'Admin login is not configured')
    if not password or not hmac.compare_digest(str(password), str(expected)):
        logger.warning("Failed admin login attempt")
        return errors.fail(errors.UNAUTHENTICATED, 'Invalid password')
    access_token = create_access_token(
        identity=ADMIN_IDENTITY,
        additional_claims={'is_admin': True},
        expires_delta=datetime.timedelta(hours=24)
    )
    return {'message': 'Admin login successful', 'access_token': access_token}, None, 200


def _status_filter(query, model, status):
    if status == 'pending':
        # Rows without a status predate moderation and count as pending
        return query.filter(or_(model.status == ListingStatus.PENDING, model.status.is_(None)))
    return query.filter(model.status == ListingStatus(status))


def admin_stats():
    now = datetime.datetime.utcnow()
    week_ago = now - datetime.timedelta(days=7)
    pending_venues = _status_filter(Venue.query, Venue, 'pending').count()
    return {
        'totalVenues': Venue.query.count(),
        'pendingVenues': pending_venues,
        'approvedVenues': Venue.query.filter(Venue.status == ListingStatus.APPROVED).count(),
        'rejectedVenues': Venue.query.filter(Venue.status == ListingStatus.REJECTED).count(),
        'totalVendors': Vendor.query.count(),
        'pendingVendors': _status_filter(Vendor.query, Vendor, 'pending').count(),
        'approvedVendors': Vendor.query.filter(Vendor.status == ListingStatus.APPROVED).count(),
        'totalCategories': len(CATEGORIES),
        'recentSubmissions': Vendor.query.filter(Vendor.created_at >= week_ago).count(),
    }, None, 200


def list_vendors(category=None, status='all'):
    status = (status or 'all').lower()
    if status not in STATUS_FILTERS:
        return errors.validation_error(f'Invalid status filter: {status}')
    query = Vendor.query
    if status != 'all':
        query = _status_filter(query, Vendor, status)
    vendors = query.order_by(Vendor.created_at.desc(), Vendor.id.desc()).all()
    if category and category != 'all':
        vendors = [vendor for vendor in vendors if category in (vendor.categories or [])]
    return [format_vendor(vendor) for vendor in vendors], None, 200


def approve_vendor(vendor_id):
    """Approve a vendor and every listing of theirs still awaiting review"""
    vendor = db.session.get(Vendor, vendor_id)
    if vendor is None:
        return errors.not_found('Vendor not found')
    if vendor.status == ListingStatus.APPROVED:
        return errors.invalid_transition(vendor.status, ListingStatus.APPROVED)
    try:
        now = datetime.datetime.utcnow()
        vendor.status = ListingStatus.APPROVED
        vendor.is_active = True
        vendor.verified_at = now
        vendor.rejection_reason = None
        approved = 0
        for venue in vendor.venues:
            cascaded_rejection = (venue.status == ListingStatus.REJECTED
                                  and venue.rejection_reason == VENDOR_REJECTED_REASON)
            if venue.status in (None, ListingStatus.PENDING) or cascaded_rejection:
                venue.status = ListingStatus.APPROVED
                venue.is_available = True
                venue.verified_at = now
                venue.rejection_reason = None
                approved += 1
        db.session.commit()
        logger.info(f"Vendor {vendor.id} approved with {approved} pending listings")
        return {
            'message': 'Vendor and associated venues approved successfully',
            'vendor': format_vendor(vendor),
            'approvedVenues': approved,
        }, None, 200
    except Exception as e:
        return errors.failure('approve vendor', e)


def reject_vendor(vendor_id, reason):
    reason = (reason or '').strip()
    if not reason:
        return errors.validation_error('A rejection reason is required', fields=['reason'])
    vendor = db.session.get(Vendor, vendor_id)
    if vendor is None:
        return errors.not_found('Vendor not found')
    if vendor.status == ListingStatus.REJECTED:
        return errors.invalid_transition(vendor.status, ListingStatus.REJECTED)
    try:
        now = datetime.datetime.utcnow()
        vendor.status = ListingStatus.REJECTED
        vendor.is_active = False
        vendor.rejection_reason = reason
        vendor.verified_at = now
        for venue in vendor.venues:
            # Keep the admin's own verdict on listings already turned down
            if venue.status == ListingStatus.REJECTED:
                continue
            venue.status = ListingStatus.REJECTED
            venue.is_available = False
            venue.rejection_reason = VENDOR_REJECTED_REASON
            venue.verified_at = now
        db.session.commit()
        logger.info(f"Vendor {vendor.id} rejected: {reason}")
        return {'message': 'Vendor and associated venues rejected', 'vendor': format_vendor(vendor)}, None, 200
    except Exception as e:
        return errors.failure('reject vendor', e)


def toggle_vendor_active(vendor_id):
    vendor = db.session.get(Vendor, vendor_id)
    if vendor is None:
        return errors.not_found('Vendor not found')
    if not vendor.is_active and vendor.status != ListingStatus.APPROVED:
        return errors.validation_error('Only approved vendors can be activated')
    try:
        vendor.is_active = not vendor.is_active
        db.session.commit()
        state = 'activated' if vendor.is_active else 'deactivated'
        logger.info(f"Vendor {vendor.id} {state}")
        return {'message': f'Vendor {state}', 'vendor': format_vendor(vendor)}, None, 200
    except Exception as e:
        return errors.failure('update vendor', e)


def delete_vendor(vendor_id, confirm=False):
    if not confirm:
        return errors.validation_error('Deleting a vendor must be confirmed', fields=['confirm'])
    vendor = db.session.get(Vendor, vendor_id)
    if vendor is None:
        return errors.not_found('Vendor not found')
    try:
        venue_count = len(vendor.venues)
        db.session.delete(vendor)
        db.session.commit()
        logger.info(f"Vendor {vendor_id} deleted with {venue_count} listings")
        return {'message': 'Vendor and associated venues deleted', 'deletedVenues': venue_count}, None, 200
    except Exception as e:
        return errors.failure('delete vendor', e)


def list_venues(status='all'):
    status = (status or 'all').lower()
    if status not in STATUS_FILTERS:
        return errors.validation_error(f'Invalid status filter: {status}')
    query = Venue.query
    if status != 'all':
        query = _status_filter(query, Venue, status)
    venues = query.order_by(Venue.created_at.desc(), Venue.id.desc()).all()
    return [format_venue(venue, with_vendor=True) for venue in venues], None, 200


def approve_venue(venue_id):
    venue = db.session.get(Venue, venue_id)
    if venue is None:
        return errors.not_found('Venue not found')
    if not can_transition(venue.status, ListingStatus.APPROVED):
        return errors.invalid_transition(venue.status, ListingStatus.APPROVED)
    try:
        venue.status = ListingStatus.APPROVED
        venue.is_available = True
        venue.verified_at = datetime.datetime.utcnow()
        venue.rejection_reason = None
        db.session.commit()
        logger.info(f"Venue {venue.id} approved")
        return {'message': 'Venue approved successfully', 'venue': format_venue(venue)}, None, 200
    except Exception as e:
        return errors.failure('approve venue', e)


def reject_venue(venue_id, reason):
    reason = (reason or '').strip()
    if not reason:
        return errors.validation_error('A rejection reason is required', fields=['reason'])
    venue = db.session.get(Venue, venue_id)
    if venue is None:
        return errors.not_found('Venue not found')
    if not can_transition(venue.status, ListingStatus.REJECTED):
        return errors.invalid_transition(venue.status, ListingStatus.REJECTED)
    try:
        venue.status = ListingStatus.REJECTED
        venue.is_available = False
        venue.rejection_reason = reason
        venue.verified_at = datetime.datetime.utcnow()
        db.session.commit()
        logger.info(f"Venue {venue.id} rejected: {reason}")
        return {'message': 'Venue rejected', 'venue': format_venue(venue)}, None, 200
    except Exception as e:
        return errors.failure('reject venue', e)


def delete_venue(venue_id):
    venue = db.session.get(Venue, venue_id)
    if venue is None:
        return errors.not_found('Venue not found')
    try:
        db.session.delete(venue)
        db.session.commit()
        logger.info(f"Venue {venue_id} deleted by admin")
        return {'message': 'Venue deleted successfully'}, None, 200
    except Exception as e:
        return errors.failure('delete venue', e)

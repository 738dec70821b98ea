# Public marketplace queries over approved listings
import logging
import re
from sqlalchemy import or_, func
from .. import db
from ..categories import CATEGORIES
from ..models.vendor_model import Vendor
from ..models.venue_model import Venue
from ..models.status import ListingStatus
from .formatting import format_venue
from .vendor_resolution import resolve_vendor
from . import errors

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 20


def visible_listings():
    """Only approved, available listings of active vendors ever reach the public"""
    return (Venue.query
            .join(Vendor, Venue.vendor_id == Vendor.id)
            .filter(Venue.status == ListingStatus.APPROVED,
                    Venue.is_available.is_(True),
                    Vendor.is_active.is_(True)))


def escape_like(value):
    return value.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')


def _location_filter(query, location):
    pattern = f'%{escape_like(location.strip())}%'
    return query.filter(or_(Venue.location.ilike(pattern, escape='\\'), Venue.city.ilike(pattern, escape='\\')))


def list_approved_by_category(category, location=None):
    query = visible_listings().filter(Venue.category == category)
    if location and location.strip():
        query = _location_filter(query, location)
    venues = query.order_by(Venue.rating.desc(), Venue.id.asc()).all()
    logger.debug(f"Found {len(venues)} approved listings for category {category}")
    return [format_venue(venue, with_vendor=True) for venue in venues], None, 200


def list_all(location=None, category=None, min_capacity=None, event_type=None, max_price=None):
    query = visible_listings()
    if location and location.strip():
        query = _location_filter(query, location)
    if category:
        query = query.filter(Venue.category == category)
    if min_capacity:
        query = query.filter(Venue.capacity_max >= min_capacity)
    if max_price:
        query = query.filter(Venue.price_min <= max_price)
    venues = query.order_by(Venue.rating.desc(), Venue.id.asc()).all()
    if event_type:
        # event_types is a JSON list, matched here to stay portable across backends
        venues = [venue for venue in venues if event_type in (venue.event_types or [])]
    return [format_venue(venue, with_vendor=True) for venue in venues], None, 200


def get_by_id(venue_id, session=None):
    """Unapproved listings are visible only to their vendor and to admins"""
    venue = db.session.get(Venue, venue_id)
    if venue is None:
        return errors.not_found('Venue not found')
    if venue.is_public:
        return format_venue(venue, with_vendor=True), None, 200
    if session is not None:
        if session.is_admin:
            return format_venue(venue, with_vendor=True), None, 200
        vendor, _ = resolve_vendor(session)
        if vendor is not None and vendor.id == venue.vendor_id:
            return format_venue(venue, with_vendor=True), None, 200
    return errors.not_found('Venue not found')


def _capitalize_words(value):
    return re.sub(r'\b\w', lambda m: m.group(0).upper(), value)


def distinct_locations(category=None):
    query = visible_listings()
    if category:
        query = query.filter(Venue.category == category)
    cities = [row[0] for row in query.with_entities(Venue.city).distinct().all()]
    seen = set()
    locations = []
    for city in cities:
        trimmed = (city or '').strip()
        if not trimmed or trimmed.lower() in seen:
            continue
        seen.add(trimmed.lower())
        locations.append(_capitalize_words(trimmed))
    return sorted(locations), None, 200


def featured(limit=3):
    venues = (visible_listings()
              .filter(Venue.category == 'venues')
              .order_by(Venue.rating.desc(), Venue.id.asc())
              .limit(limit)
              .all())
    return [format_venue(venue) for venue in venues], None, 200


def search(term):
    term = (term or '').strip()
    if not term:
        return [], None, 200
    pattern = f'%{escape_like(term)}%'
    venues = (visible_listings()
              .filter(or_(Venue.name.ilike(pattern, escape='\\'), Venue.location.ilike(pattern, escape='\\'),
                          Venue.city.ilike(pattern, escape='\\'),
                          Venue.description.ilike(pattern, escape='\\')))
              .order_by(Venue.rating.desc(), Venue.id.asc())
              .limit(SEARCH_LIMIT)
              .all())
    return [format_venue(venue) for venue in venues], None, 200


def category_counts():
    rows = (visible_listings()
            .with_entities(Venue.category, func.count(Venue.id))
            .group_by(Venue.category)
            .all())
    counts = {slug: 0 for slug in CATEGORIES}
    counts.update({slug: count for slug, count in rows})
    return counts, None, 200

# Vendor onboarding and listing management
import logging
import math
import re
from sqlalchemy.exc import IntegrityError
from .. import db
from ..categories import get_category, display_name
from ..models.vendor_model import Vendor
from ..models.venue_model import Venue
from ..models.status import ListingStatus
from .image_service import process_listing_images
from .formatting import format_vendor, format_venue
from .vendor_resolution import resolve_vendor, resolve_vendor_for_write
from . import errors

logger = logging.getLogger(__name__)

DEFAULT_PRICE_MIN = 50000
DEFAULT_PRICE_MAX = 200000
DEFAULT_CAPACITY = 100
DEFAULT_PHONE = '0000000000'
DEFAULT_EVENT_TYPES = ['wedding']
DEFAULT_RATING = 4.5

EMAIL_REGEX = re.compile(r'^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$')
DUPLICATE_EMAIL_MESSAGE = 'A vendor with this email already exists. Please use a different email.'

FIRST_TIME_REQUIRED = [
    ('name', 'Name'),
    ('email', 'Email'),
    ('businessName', 'Business name'),
    ('city', 'City'),
    ('location', 'Location'),
]

ADDITIONAL_REQUIRED = [
    ('businessName', 'Business name'),
    ('category', 'Category'),
    ('city', 'City'),
    ('location', 'Location'),
]


def _clean(value):
    if isinstance(value, str):
        return value.strip()
    return value


def _to_int(value, default=None):
    if value is None or value == '':
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return default


def _as_list(value, default=None):
    if value is None or value == '' or value == []:
        return list(default or [])
    if isinstance(value, str):
        items = value.split(',')
    else:
        items = value
    return [str(item).strip() for item in items if str(item).strip()]


def _normalized(data):
    data = dict(data or {})
    # Older forms send the listing name as venueName
    if not data.get('businessName') and data.get('venueName'):
        data['businessName'] = data['venueName']
    return {key: _clean(value) for key, value in data.items()}


def _missing_fields(data, required):
    return [(key, label) for key, label in required if not data.get(key)]


def _required_error(missing):
    key, label = missing[0]
    return errors.validation_error(f'{label} is required', fields=[field for field, _ in missing])


def _category_error(data):
    slug = data.get('category')
    if not slug:
        return errors.validation_error('Category is required', fields=['category'])
    if get_category(slug) is None:
        return errors.validation_error(f'Unknown category: {slug}', fields=['category'])
    return None


def build_service_details(category, data):
    """Keep only the extra fields this category advertises"""
    details = data.get('serviceDetails') or {}
    result = {}
    for field in category.vendor_fields:
        if field.key == 'capacity':
            continue
        value = details.get(field.key, data.get(field.key))
        if value is None or value == '':
            continue
        if field.input_type == 'number':
            value = _to_int(value)
            if value is None:
                continue
        else:
            value = str(value).strip()
        result[field.key] = value
    return result


def build_capacity(category, data):
    if category.slug != 'venues':
        return 1, 1
    details = data.get('serviceDetails') or {}
    capacity = _to_int(data.get('capacity', details.get('capacity')), DEFAULT_CAPACITY)
    if capacity <= 0:
        capacity = DEFAULT_CAPACITY
    return math.floor(capacity * 0.5), capacity


def default_description(business_name, slug):
    return f'{business_name} - Quality {slug} services for your special occasions.'


def _price_range(data):
    price_min = _to_int(data.get('priceMin'), DEFAULT_PRICE_MIN) or DEFAULT_PRICE_MIN
    price_max = _to_int(data.get('priceMax'), DEFAULT_PRICE_MAX) or DEFAULT_PRICE_MAX
    return price_min, price_max


def _new_listing(vendor, category, data, image_host=None):
    images = process_listing_images(data.get('images'), category.slug, image_host=image_host)
    if not images:
        images = list(category.default_images)
    capacity_min, capacity_max = build_capacity(category, data)
    price_min, price_max = _price_range(data)
    business_name = data['businessName']
    return Venue(
        vendor=vendor,
        name=business_name,
        type=category.listing_type,
        category=category.slug,
        event_types=_as_list(data.get('eventTypes'), DEFAULT_EVENT_TYPES),
        location=data['location'],
        city=data['city'],
        address=data.get('address') or data['location'],
        capacity_min=capacity_min,
        capacity_max=capacity_max,
        price_min=price_min,
        price_max=price_max,
        price_unit=category.price_unit,
        images=images,
        amenities=list(category.amenities),
        highlights=list(category.highlights),
        description=data.get('description') or default_description(business_name, category.slug),
        rating=DEFAULT_RATING,
        review_count=0,
        status=ListingStatus.PENDING,
        is_available=False,
        service_details=build_service_details(category, data),
    )


def _submitted(venue, category):
    return {
        'message': f'Your listing has been submitted successfully! It will be reviewed by our admin team '
                   f'and will appear on the {display_name(category.slug)} category page once approved.',
        'venueId': venue.id,
        'vendorId': venue.vendor_id,
        'category': category.slug,
    }


def register_vendor_with_listing(data, session=None, image_host=None):
    """First-time onboarding: a pending vendor plus its first pending listing"""
    data = _normalized(data)
    missing = _missing_fields(data, FIRST_TIME_REQUIRED)
    if missing:
        return _required_error(missing)
    category_error = _category_error(data)
    if category_error:
        return category_error
    if not EMAIL_REGEX.match(data['email']):
        return errors.validation_error('Invalid email format', fields=['email'])

    category = get_category(data['category'])
    price_min, price_max = _price_range(data)
    try:
        vendor = Vendor(
            user_id=session.user_id if session is not None else None,
            name=data['name'],
            email=data['email'],
            phone=data.get('phone') or DEFAULT_PHONE,
            business_name=data['businessName'],
            description=data.get('description') or default_description(data['businessName'], category.slug),
            categories=[category.slug],
            locations=[data['city']],
            images=[],
            price_min=price_min,
            price_max=price_max,
            is_active=False,
            status=ListingStatus.PENDING,
        )
        db.session.add(vendor)
        db.session.flush()
        venue = _new_listing(vendor, category, data, image_host=image_host)
        # Vendor profile shows the listing's uploaded photos, not the stock defaults
        if venue.images and venue.images[0] not in category.default_images:
            vendor.images = list(venue.images)
        db.session.add(venue)
        db.session.commit()
        logger.info(f"Registered vendor {vendor.id} ({vendor.email}) with pending listing {venue.id} [{category.slug}]")
        return _submitted(venue, category), None, 201
    except IntegrityError:
        db.session.rollback()
        logger.warning(f"Duplicate vendor email on registration: {data['email']}")
        return errors.conflict(DUPLICATE_EMAIL_MESSAGE)
    except Exception as e:
        return errors.failure('register', e)


def add_listing(data, session, image_host=None, vendor=None):
    """Another pending listing for a vendor who is already registered"""
    if session is None:
        return errors.unauthenticated('Not authenticated. Please log in.')
    data = _normalized(data)
    missing = _missing_fields(data, ADDITIONAL_REQUIRED)
    if missing:
        return _required_error(missing)
    category_error = _category_error(data)
    if category_error:
        return category_error

    category = get_category(data['category'])
    try:
        if vendor is None:
            vendor = resolve_vendor_for_write(session, data.get('email'))
        if vendor is None:
            return errors.not_found('Vendor account not found. Please register as a vendor first.')
        if category.slug not in (vendor.categories or []):
            vendor.categories = list(vendor.categories or []) + [category.slug]
        if data['city'] not in (vendor.locations or []):
            vendor.locations = list(vendor.locations or []) + [data['city']]
        venue = _new_listing(vendor, category, data, image_host=image_host)
        db.session.add(venue)
        db.session.commit()
        logger.info(f"Vendor {vendor.id} added pending listing {venue.id} [{category.slug}]")
        return _submitted(venue, category), None, 201
    except Exception as e:
        return errors.failure('add listing', e)


def submit_listing(data, session=None, image_host=None):
    """Route a submission to onboarding or to an additional listing"""
    if session is not None and not session.is_admin:
        vendor = resolve_vendor_for_write(session, (data or {}).get('email'))
        if vendor is not None:
            return add_listing(data, session, image_host=image_host, vendor=vendor)
    return register_vendor_with_listing(data, session=session, image_host=image_host)


def get_vendor_listings(session):
    """The caller's vendor profile with every listing, whatever its status"""
    if session is None:
        return errors.unauthenticated()
    vendor, _ = resolve_vendor(session)
    if vendor is None:
        return {'vendor': None, 'listings': []}, None, 200
    listings = Venue.query.filter_by(vendor_id=vendor.id).order_by(Venue.created_at.desc(), Venue.id.desc()).all()
    return {
        'vendor': format_vendor(vendor),
        'listings': [format_venue(venue) for venue in listings],
    }, None, 200


def _owned_listing(venue_id, session):
    vendor = resolve_vendor_for_write(session)
    if vendor is None:
        return None
    venue = db.session.get(Venue, venue_id)
    if venue is None or venue.vendor_id != vendor.id:
        return None
    return venue


def update_listing(venue_id, data, session, image_host=None):
    """Owner edits descriptive fields; moderation fields are never touched"""
    if session is None:
        return errors.unauthenticated()
    data = _normalized(data)
    try:
        venue = _owned_listing(venue_id, session)
        if venue is None:
            return errors.unauthorized('Venue')
        category = get_category(venue.category)

        for key, attr in (('businessName', 'name'), ('description', 'description'),
                          ('location', 'location'), ('city', 'city'), ('address', 'address')):
            if data.get(key):
                setattr(venue, attr, data[key])
        if 'priceMin' in data:
            venue.price_min = _to_int(data['priceMin'], venue.price_min)
        if 'priceMax' in data:
            venue.price_max = _to_int(data['priceMax'], venue.price_max)
        if venue.price_min > venue.price_max:
            db.session.rollback()
            return errors.validation_error('Minimum price cannot exceed maximum price', fields=['priceMin'])
        if 'eventTypes' in data:
            venue.event_types = _as_list(data['eventTypes'], venue.event_types)
        if 'amenities' in data:
            venue.amenities = _as_list(data['amenities'], venue.amenities)
        if category is not None:
            if 'capacity' in data and category.slug == 'venues':
                venue.capacity_min, venue.capacity_max = build_capacity(category, data)
            details = build_service_details(category, data)
            if details:
                merged = dict(venue.service_details or {})
                merged.update(details)
                venue.service_details = merged
        if data.get('images'):
            images = process_listing_images(data['images'], venue.category, image_host=image_host)
            if images:
                venue.images = images
        db.session.commit()
        logger.info(f"Listing {venue.id} updated by vendor {venue.vendor_id}")
        return {'message': 'Listing updated successfully', 'venue': format_venue(venue)}, None, 200
    except Exception as e:
        return errors.failure('update listing', e)


def delete_listing(venue_id, session):
    if session is None:
        return errors.unauthenticated()
    try:
        venue = _owned_listing(venue_id, session)
        if venue is None:
            return errors.unauthorized('Venue')
        db.session.delete(venue)
        db.session.commit()
        logger.info(f"Listing {venue_id} deleted by its vendor")
        return {'message': 'Listing deleted successfully'}, None, 200
    except Exception as e:
        return errors.failure('delete listing', e)

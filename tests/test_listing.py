from shubharambh import db
from shubharambh.categories import get_category
from shubharambh.models import Role, Vendor, Venue, ListingStatus
from shubharambh.services import listing_service
from shubharambh.services.image_service import process_listing_images
from tests.conftest import StubImageHost

ROYAL_KITCHEN = {
    'name': 'Suresh Reddy',
    'email': 'Suresh@RoyalKitchen.in',
    'businessName': 'Royal Kitchen',
    'category': 'caterers',
    'city': 'Hyderabad',
    'location': 'Banjara Hills',
}


def test_first_time_caterer_submission(app):
    data, error, status = listing_service.submit_listing(dict(ROYAL_KITCHEN))

    assert error is None
    assert status == 201
    vendor = db.session.get(Vendor, data['vendorId'])
    venue = db.session.get(Venue, data['venueId'])
    assert vendor.status == ListingStatus.PENDING
    assert vendor.is_active is False
    assert vendor.email == 'suresh@royalkitchen.in'
    assert venue.price_unit == 'per plate'
    assert venue.amenities == ['Multi-Cuisine', 'Live Counters', 'Buffet', 'Service Staff']
    assert venue.images == list(get_category('caterers').default_images)
    assert (venue.capacity_min, venue.capacity_max) == (1, 1)
    assert venue.is_public is False
    assert 'Caterers category page' in data['message']


def test_missing_field_is_reported_by_label(app):
    data, error, status = listing_service.submit_listing({**ROYAL_KITCHEN, 'city': ''})
    assert status == 400
    assert error['message'] == 'City is required'
    assert Vendor.query.count() == 0


def test_unknown_category_rejected(app):
    _, error, status = listing_service.submit_listing({**ROYAL_KITCHEN, 'category': 'astrologers'})
    assert status == 400
    assert error['error'] == 'validation'


def test_duplicate_vendor_email_is_a_conflict(app):
    listing_service.submit_listing(dict(ROYAL_KITCHEN))
    _, error, status = listing_service.submit_listing({**ROYAL_KITCHEN, 'businessName': 'Royal Kitchen 2'})
    assert status == 409
    assert error['error'] == 'conflict'
    assert Vendor.query.count() == 1


def test_venue_capacity_and_service_details(app):
    data, _, _ = listing_service.submit_listing({
        **ROYAL_KITCHEN,
        'email': 'hall@example.com',
        'category': 'venues',
        'businessName': 'Lotus Hall',
        'capacity': '400',
        'venueType': 'Banquet Hall',
        'cuisines': 'ignored for venues',
    })
    venue = db.session.get(Venue, data['venueId'])
    assert (venue.capacity_min, venue.capacity_max) == (200, 400)
    assert venue.service_details == {'venueType': 'Banquet Hall'}


def test_logged_in_vendor_adds_listing(make_user, make_vendor, session_for):
    user = make_user(email='owner@example.com', role=Role.VENDOR)
    vendor = make_vendor(email='owner@example.com', categories=['venues'])

    data, error, status = listing_service.submit_listing(
        {'businessName': 'Spice Route', 'category': 'caterers', 'city': 'Pune', 'location': 'Baner'},
        session_for(user)
    )

    assert status == 201, error
    assert data['vendorId'] == vendor.id
    assert vendor.categories == ['venues', 'caterers']
    assert 'Pune' in vendor.locations
    assert vendor.user_id == user.id


def test_add_listing_without_vendor(make_user, session_for):
    user = make_user()
    _, error, status = listing_service.add_listing(
        {'businessName': 'X', 'category': 'djs', 'city': 'Goa', 'location': 'Panaji'}, session_for(user))
    assert status == 404
    assert error['message'] == 'Vendor account not found. Please register as a vendor first.'


def test_failed_upload_keeps_other_images(app):
    host = StubImageHost(fail_on={1})
    images = process_listing_images(
        ['data:image/png;base64,AAAA', 'data:image/png;base64,BBBB', 'https://cdn.example.com/a.jpg',
         'https://cdn.example.com/ignored-fourth.jpg'],
        'venues',
        image_host=host
    )
    assert images == ['https://img.example.com/shubharambh/venues/0.jpg', 'https://cdn.example.com/a.jpg']
    assert len(host.uploads) == 2


def test_update_and_delete_own_listing(make_user, make_vendor, make_venue, session_for):
    user = make_user(email='owner@example.com', role=Role.VENDOR)
    vendor = make_vendor(email='owner@example.com', user=user)
    venue = make_venue(vendor)

    data, error, status = listing_service.update_listing(
        venue.id, {'description': 'Lakeside lawns', 'priceMin': 60000}, session_for(user))
    assert status == 200, error
    assert data['venue']['description'] == 'Lakeside lawns'
    assert venue.price_min == 60000
    assert venue.status == ListingStatus.APPROVED

    _, _, status = listing_service.delete_listing(venue.id, session_for(user))
    assert status == 200
    assert db.session.get(Venue, venue.id) is None


def test_cannot_touch_other_vendors_listing(make_user, make_vendor, make_venue, session_for):
    owner = make_vendor(email='owner@example.com')
    venue = make_venue(owner)
    intruder = make_user(email='intruder@example.com', role=Role.VENDOR)
    make_vendor(email='intruder@example.com', user=intruder)

    _, error, status = listing_service.update_listing(venue.id, {'description': 'mine now'}, session_for(intruder))
    assert status == 404
    assert error['message'] == 'Venue not found or unauthorized'

    _, _, status = listing_service.delete_listing(venue.id, session_for(intruder))
    assert status == 404
    assert db.session.get(Venue, venue.id) is not None


def test_vendor_listings_include_pending(make_user, make_vendor, make_venue, session_for):
    user = make_user(email='owner@example.com', role=Role.VENDOR)
    vendor = make_vendor(email='owner@example.com', user=user)
    make_venue(vendor, name='Live')
    make_venue(vendor, name='Waiting', status=ListingStatus.PENDING, is_available=False)

    data, _, _ = listing_service.get_vendor_listings(session_for(user))

    assert data['vendor']['id'] == vendor.id
    assert {listing['name'] for listing in data['listings']} == {'Live', 'Waiting'}

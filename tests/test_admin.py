from shubharambh import db
from shubharambh.models import Vendor, Venue, ListingStatus
from shubharambh.services import admin_service, marketplace_service
from shubharambh.services.admin_service import VENDOR_REJECTED_REASON


def _pending_vendor(make_vendor, **kwargs):
    return make_vendor(status=ListingStatus.PENDING, is_active=False, **kwargs)


def _pending_venue(make_venue, vendor, **kwargs):
    return make_venue(vendor, status=ListingStatus.PENDING, is_available=False, **kwargs)


def test_admin_login(app):
    data, error, status = admin_service.admin_login('admin-pass')
    assert status == 200 and data['access_token']

    _, error, status = admin_service.admin_login('wrong')
    assert status == 401
    assert error['error'] == 'unauthenticated'


def test_pending_filter_includes_rows_without_status(make_vendor, make_venue):
    legacy = make_vendor(email='legacy@example.com')
    legacy_venue = make_venue(legacy)
    legacy.status = None
    legacy_venue.status = None
    db.session.commit()
    _pending_vendor(make_vendor, email='new@example.com')
    make_vendor(email='approved@example.com')

    vendors, _, _ = admin_service.list_vendors(status='pending')
    venues, _, _ = admin_service.list_venues(status='pending')

    assert {v['email'] for v in vendors} == {'legacy@example.com', 'new@example.com'}
    assert [v['id'] for v in venues] == [legacy_venue.id]
    assert all(v['status'] == 'pending' for v in vendors)


def test_invalid_status_filter(app):
    _, error, status = admin_service.list_vendors(status='archived')
    assert status == 400


def test_category_filter(make_vendor):
    make_vendor(email='a@example.com', categories=['djs'])
    make_vendor(email='b@example.com', categories=['venues', 'caterers'])

    vendors, _, _ = admin_service.list_vendors(category='caterers')

    assert [v['email'] for v in vendors] == ['b@example.com']


def test_approval_cascades_to_pending_venues(make_vendor, make_venue):
    vendor = _pending_vendor(make_vendor)
    first = _pending_venue(make_venue, vendor, name='Hall One', city='Hyderabad')
    second = _pending_venue(make_venue, vendor, name='Hall Two', city='Secunderabad')
    assert marketplace_service.list_approved_by_category('venues')[0] == []

    data, error, status = admin_service.approve_vendor(vendor.id)

    assert status == 200, error
    assert data['approvedVenues'] == 2
    assert vendor.is_active is True
    listed = {v['id'] for v in marketplace_service.list_approved_by_category('venues')[0]}
    assert listed == {first.id, second.id}


def test_approval_keeps_individually_rejected_venue_hidden(make_vendor, make_venue):
    vendor = _pending_vendor(make_vendor)
    kept_out = make_venue(vendor, name='Bad Photos', status=ListingStatus.REJECTED, is_available=False,
                          rejection_reason='Blurry photos')

    admin_service.approve_vendor(vendor.id)

    assert kept_out.status == ListingStatus.REJECTED


def test_approving_twice_is_an_invalid_transition(make_vendor):
    vendor = make_vendor()
    _, error, status = admin_service.approve_vendor(vendor.id)
    assert status == 409
    assert error['error'] == 'invalid_transition'


def test_reject_then_reapprove(make_vendor, make_venue):
    vendor = make_vendor()
    venue = make_venue(vendor)

    _, error, status = admin_service.reject_vendor(vendor.id, '')
    assert status == 400

    data, _, status = admin_service.reject_vendor(vendor.id, 'Documents missing')
    assert status == 200
    assert venue.status == ListingStatus.REJECTED
    assert venue.rejection_reason == VENDOR_REJECTED_REASON
    assert venue.is_public is False
    assert data['vendor']['rejectionReason'] == 'Documents missing'

    data, _, _ = admin_service.approve_vendor(vendor.id)
    assert data['approvedVenues'] == 1
    assert venue.is_public


def test_delete_vendor_cascades(make_vendor, make_venue):
    vendor = make_vendor()
    ids = [make_venue(vendor, name=f'Hall {i}').id for i in range(3)]

    _, error, status = admin_service.delete_vendor(vendor.id)
    assert status == 400

    data, _, status = admin_service.delete_vendor(vendor.id, confirm=True)

    assert status == 200
    assert data['deletedVenues'] == 3
    assert db.session.get(Vendor, vendor.id) is None
    for venue_id in ids:
        assert db.session.get(Venue, venue_id) is None
        assert marketplace_service.get_by_id(venue_id)[2] == 404


def test_per_venue_moderation(make_vendor, make_venue):
    vendor = make_vendor()
    venue = _pending_venue(make_venue, vendor)

    _, _, status = admin_service.approve_venue(venue.id)
    assert status == 200
    assert venue.is_public

    _, _, status = admin_service.reject_venue(venue.id, 'Duplicate listing')
    assert status == 200
    assert venue.is_public is False
    assert venue.rejection_reason == 'Duplicate listing'


def test_toggle_active(make_vendor):
    vendor = make_vendor()
    data, _, _ = admin_service.toggle_vendor_active(vendor.id)
    assert data['vendor']['isActive'] is False

    pending = _pending_vendor(make_vendor, email='p@example.com')
    _, _, status = admin_service.toggle_vendor_active(pending.id)
    assert status == 400


def test_stats(make_vendor, make_venue):
    vendor = make_vendor()
    make_venue(vendor)
    _pending_venue(make_venue, vendor, name='Waiting')

    data, _, _ = admin_service.admin_stats()

    assert data['totalVenues'] == 2
    assert data['pendingVenues'] == 1
    assert data['approvedVendors'] == 1
    assert data['totalCategories'] == 13


def test_vendor_reject_and_reapprove_keeps_individual_rejection(make_vendor, make_venue):
    vendor = make_vendor()
    live = make_venue(vendor, name='Live Hall')
    turned_down = make_venue(vendor, name='Bad Photos', status=ListingStatus.REJECTED, is_available=False,
                             rejection_reason='Blurry photos')

    admin_service.reject_vendor(vendor.id, 'Documents missing')
    assert turned_down.rejection_reason == 'Blurry photos'

    data, _, _ = admin_service.approve_vendor(vendor.id)

    assert data['approvedVenues'] == 1
    assert live.is_public
    assert turned_down.status == ListingStatus.REJECTED
    assert turned_down.is_public is False
    listed = [v['id'] for v in marketplace_service.list_approved_by_category('venues')[0]]
    assert listed == [live.id]


def test_deactivated_vendor_listings_leave_the_marketplace(make_vendor, make_venue):
    vendor = make_vendor()
    venue = make_venue(vendor)

    admin_service.toggle_vendor_active(vendor.id)

    assert venue.is_public is False
    assert marketplace_service.list_approved_by_category('venues')[0] == []
    assert marketplace_service.search('Grand')[0] == []
    assert marketplace_service.get_by_id(venue.id)[2] == 404

    admin_service.toggle_vendor_active(vendor.id)
    assert [v['id'] for v in marketplace_service.list_approved_by_category('venues')[0]] == [venue.id]

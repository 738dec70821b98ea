import datetime
import pytest
from shubharambh.models import Role, AppointmentStatus, ListingStatus
from shubharambh.services import appointment_service
from shubharambh.services.appointment_service import parse_scheduled_date


@pytest.fixture
def customer(make_user):
    return make_user(name='Karan Mehta', email='karan@example.com', phone='9000000001')


@pytest.fixture
def venue(make_vendor, make_venue):
    vendor = make_vendor(email='owner@example.com', business_name='Lotus Banquets')
    return make_venue(vendor, name='Lotus Hall')


@pytest.fixture
def owner_session(make_user, session_for):
    return session_for(make_user(name='Owner', email='owner@example.com', role=Role.VENDOR))


def _booking(venue, future_date, **overrides):
    data = {
        'venueId': venue.id,
        'type': 'visit',
        'scheduledDate': future_date,
        'scheduledTime': '11:00 AM',
        'eventType': 'wedding',
        'attendees': 200,
        'phone': '9000000001',
    }
    data.update(overrides)
    return data


def _book(customer, venue, future_date, session_for, **overrides):
    data, error, status = appointment_service.create_appointment(
        _booking(venue, future_date, **overrides), session_for(customer))
    assert status == 201, error
    return data['appointment']


def test_booking_shares_contact_and_notifies_vendor(customer, venue, session_for, future_date, outbox):
    data, error, status = appointment_service.create_appointment(
        _booking(venue, future_date), session_for(customer))

    assert status == 201, error
    assert data['message'] == 'Visit scheduled successfully! The venue will contact you to confirm.'
    appointment = data['appointment']
    assert appointment['status'] == 'pending'
    assert appointment['contactShared'] is True
    assert appointment['userEmail'] == 'karan@example.com'
    assert appointment['vendorId'] == venue.vendor_id
    assert outbox[0]['to'] == 'owner@example.com'
    assert outbox[0]['subject'].startswith('📅 New Site Visit Request from Karan Mehta')


def test_booking_validation(customer, venue, session_for, future_date):
    _, error, status = appointment_service.create_appointment(
        _booking(venue, future_date, phone=''), session_for(customer))
    assert status == 400
    assert error['message'] == 'Phone number is required'

    _, error, status = appointment_service.create_appointment(
        _booking(venue, future_date, type='call'), session_for(customer))
    assert status == 400

    _, _, status = appointment_service.create_appointment(_booking(venue, future_date), None)
    assert status == 401


def test_past_dates_rejected():
    today = datetime.date(2026, 3, 14)
    assert parse_scheduled_date('2026-03-13', today=today)[1] == 'Appointment date cannot be in the past'
    assert parse_scheduled_date('2026-03-14', today=today)[1] is None
    assert parse_scheduled_date('not a date', today=today)[0] is None


def test_cannot_book_unapproved_listing(customer, venue, session_for, future_date):
    venue.status = ListingStatus.PENDING
    _, error, status = appointment_service.create_appointment(_booking(venue, future_date), session_for(customer))
    assert status == 404


def test_vendor_confirms_then_user_cannot_cancel(customer, venue, owner_session, session_for, future_date,
                                                 outbox):
    appointment = _book(customer, venue, future_date, session_for)

    data, error, status = appointment_service.confirm_appointment(appointment['id'], owner_session)
    assert status == 200, error
    assert data['appointment']['status'] == 'confirmed'
    assert outbox[-1]['to'] == 'karan@example.com'

    _, error, status = appointment_service.cancel_appointment(appointment['id'], session_for(customer))
    assert status == 409
    assert error['error'] == 'invalid_transition'


def test_user_cancels_pending(customer, venue, session_for, future_date):
    appointment = _book(customer, venue, future_date, session_for)
    data, _, status = appointment_service.cancel_appointment(appointment['id'], session_for(customer))
    assert status == 200
    assert data['appointment']['status'] == AppointmentStatus.CANCELLED.value


def test_other_user_cannot_cancel(customer, venue, make_user, session_for, future_date):
    appointment = _book(customer, venue, future_date, session_for)
    other = make_user(email='other@example.com')
    _, error, status = appointment_service.cancel_appointment(appointment['id'], session_for(other))
    assert status == 404
    assert error['message'] == 'Appointment not found or unauthorized'


def test_only_listing_owner_decides(customer, venue, make_user, make_vendor, session_for, future_date):
    appointment = _book(customer, venue, future_date, session_for)
    make_vendor(email='rival@example.com')
    rival = session_for(make_user(email='rival@example.com', role=Role.VENDOR))

    _, _, status = appointment_service.reject_appointment(appointment['id'], rival, 'No')
    assert status == 404


def test_reject_records_reason(customer, venue, owner_session, session_for, future_date):
    appointment = _book(customer, venue, future_date, session_for)
    _, _, status = appointment_service.reject_appointment(appointment['id'], owner_session, '')
    assert status == 400

    data, _, _ = appointment_service.reject_appointment(appointment['id'], owner_session, 'Closed for renovation')
    assert data['appointment']['status'] == 'rejected'
    assert data['appointment']['rejectionReason'] == 'Closed for renovation'

    _, error, status = appointment_service.confirm_appointment(appointment['id'], owner_session)
    assert status == 409


def test_appointment_lists(customer, venue, owner_session, session_for, future_date):
    later = (datetime.date.today() + datetime.timedelta(days=60)).isoformat()
    _book(customer, venue, later, session_for, type='appointment')
    _book(customer, venue, future_date, session_for)

    mine, _, _ = appointment_service.get_user_appointments(session_for(customer))
    assert [a['type'] for a in mine] == ['visit', 'appointment']

    received, _, _ = appointment_service.get_vendor_appointments(owner_session)
    assert len(received) == 2
    assert received[0]['scheduledDate'] < received[1]['scheduledDate']


def test_cannot_book_listing_of_deactivated_vendor(customer, venue, session_for, future_date):
    venue.vendor.is_active = False
    _, error, status = appointment_service.create_appointment(_booking(venue, future_date), session_for(customer))
    assert status == 404
    assert error['message'] == 'Venue not found'

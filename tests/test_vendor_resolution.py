from shubharambh.models import Role
from shubharambh.services.vendor_resolution import resolve_vendor, resolve_vendor_for_write
from shubharambh.utils.auth_middleware import Session


def test_user_id_link_wins_over_email(make_user, make_vendor, session_for):
    user = make_user(email='owner@example.com', role=Role.VENDOR)
    linked = make_vendor(email='other@example.com', user=user)
    make_vendor(email='owner@example.com', business_name='Email Match')

    vendor, strategy = resolve_vendor(session_for(user))

    assert vendor.id == linked.id
    assert strategy == 'user_id'


def test_session_email_is_case_insensitive(make_user, make_vendor, session_for):
    user = make_user(email='Owner@Example.com', role=Role.VENDOR)
    vendor = make_vendor(email='owner@example.com')

    found, strategy = resolve_vendor(session_for(user))

    assert found.id == vendor.id
    assert strategy == 'session_email'


def test_form_email_then_name(make_user, make_vendor, session_for):
    user = make_user(name='Meera', email='meera@example.com', role=Role.VENDOR)
    by_form = make_vendor(email='business@example.com', name='Someone Else')

    found, strategy = resolve_vendor(session_for(user), form_email='Business@example.com')
    assert (found.id, strategy) == (by_form.id, 'form_email')

    by_name = make_vendor(email='x@example.com', name='meera')
    found, strategy = resolve_vendor(session_for(user))
    assert (found.id, strategy) == (by_name.id, 'name')


def test_no_match_and_admin(make_user, session_for, admin_session):
    user = make_user()
    assert resolve_vendor(session_for(user)) == (None, None)
    assert resolve_vendor(admin_session) == (None, None)
    assert resolve_vendor(None) == (None, None)


def test_write_backfills_user_id(make_user, make_vendor, session_for):
    user = make_user(email='legacy@example.com', role=Role.VENDOR)
    vendor = make_vendor(email='legacy@example.com')
    assert vendor.user_id is None

    resolved = resolve_vendor_for_write(session_for(user))

    assert resolved.id == vendor.id
    assert vendor.user_id == user.id
    found, strategy = resolve_vendor(Session(user.id, None, None, 'vendor', False))
    assert strategy == 'user_id'


def test_name_fallback_needs_a_vendor_account(make_user, make_vendor, session_for):
    customer = make_user(name='Meera', email='meera@example.com')
    vendor = make_vendor(email='x@example.com', name='meera')

    assert resolve_vendor(session_for(customer)) == (None, None)
    assert resolve_vendor_for_write(session_for(customer)) is None
    assert vendor.user_id is None

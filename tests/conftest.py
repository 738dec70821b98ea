import datetime
import pytest
from shubharambh import create_app, db, bcrypt
from shubharambh.config import TestConfig
from shubharambh.models import User, Role, Vendor, Venue, ListingStatus
from shubharambh.notifications.mailer import Mailer
from shubharambh.services.auth_service import issue_token
from shubharambh.services.admin_service import admin_login
from shubharambh.utils.auth_middleware import Session


class StubImageHost:
    """Records uploads and hands back predictable URLs"""

    def __init__(self, fail_on=()):
        self.uploads = []
        self.fail_on = set(fail_on)

    def upload(self, data_uri, folder):
        index = len(self.uploads)
        self.uploads.append((data_uri, folder))
        if index in self.fail_on:
            raise RuntimeError('upload refused')
        return f'https://img.example.com/{folder}/{index}.jpg'


@pytest.fixture
def app(tmp_path):
    class Config(TestConfig):
        UPLOAD_FOLDER = str(tmp_path / 'uploads')

    app = create_app(Config)
    app.extensions['mailer'] = Mailer('localhost', 465, None, None, suppress_send=True)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def outbox(app):
    return app.extensions['mailer'].outbox


@pytest.fixture
def make_user(app):
    def _make_user(name='Asha Rao', email='asha@example.com', role=Role.USER, password='secret1', phone=None):
        user = User(
            name=name,
            email=email,
            phone=phone,
            password=bcrypt.generate_password_hash(password).decode('utf-8'),
            role=role
        )
        db.session.add(user)
        db.session.commit()
        return user
    return _make_user


@pytest.fixture
def make_vendor(app):
    def _make_vendor(email='vendor@example.com', name='Ravi Kumar', business_name='Royal Events',
                     categories=('venues',), status=ListingStatus.APPROVED, is_active=True, user=None, **kwargs):
        vendor = Vendor(
            user_id=user.id if user else None,
            name=name,
            email=email,
            phone='9876543210',
            business_name=business_name,
            categories=list(categories),
            locations=['Hyderabad'],
            status=status,
            is_active=is_active,
            **kwargs
        )
        db.session.add(vendor)
        db.session.commit()
        return vendor
    return _make_vendor


@pytest.fixture
def make_venue(app):
    def _make_venue(vendor, name='Grand Palace', category='venues', city='Hyderabad', location='Jubilee Hills',
                    status=ListingStatus.APPROVED, is_available=True, rating=4.5, **kwargs):
        fields = dict(
            type='venue',
            event_types=['wedding'],
            capacity_min=100,
            capacity_max=500,
            price_min=50000,
            price_max=200000,
            images=[],
            amenities=['Parking'],
            highlights=['Premium Venue'],
        )
        fields.update(kwargs)
        venue = Venue(
            vendor=vendor,
            name=name,
            category=category,
            city=city,
            location=location,
            status=status,
            is_available=is_available,
            rating=rating,
            **fields
        )
        db.session.add(venue)
        db.session.commit()
        return venue
    return _make_venue


@pytest.fixture
def session_for():
    def _session_for(user):
        return Session(user_id=user.id, email=user.email, name=user.name, role=user.role.value, is_admin=False)
    return _session_for


@pytest.fixture
def admin_session():
    return Session(None, None, 'Admin', None, True)


@pytest.fixture
def auth_headers(app):
    def _auth_headers(user):
        return {'Authorization': f'Bearer {issue_token(user)}'}
    return _auth_headers


@pytest.fixture
def admin_headers(app):
    data, _, _ = admin_login('admin-pass')
    return {'Authorization': f"Bearer {data['access_token']}"}


@pytest.fixture
def future_date():
    return (datetime.date.today() + datetime.timedelta(days=30)).isoformat()

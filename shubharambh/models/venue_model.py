from datetime import datetime
from shubharambh import db
from shubharambh.models.status import ListingStatus


class Venue(db.Model):
    """A listing: a venue for hire or any bookable vendor service"""
    __tablename__ = 'venue'
    id = db.Column(db.Integer, primary_key=True)
    vendor_id = db.Column(db.Integer, db.ForeignKey('vendor.id', ondelete='CASCADE'), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    type = db.Column(db.String(50), nullable=False, default='service')
    category = db.Column(db.String(50), nullable=False, index=True)
    event_types = db.Column(db.JSON, nullable=False, default=list)
    location = db.Column(db.String(200), nullable=False)
    city = db.Column(db.String(100), nullable=False, index=True)
    address = db.Column(db.String(300))
    capacity_min = db.Column(db.Integer, nullable=False, default=1)
    capacity_max = db.Column(db.Integer, nullable=False, default=1)
    price_min = db.Column(db.Integer, nullable=False, default=0)
    price_max = db.Column(db.Integer, nullable=False, default=0)
    price_unit = db.Column(db.String(50), nullable=False, default='per event')
    images = db.Column(db.JSON, nullable=False, default=list)
    amenities = db.Column(db.JSON, nullable=False, default=list)
    highlights = db.Column(db.JSON, nullable=False, default=list)
    description = db.Column(db.Text)
    rating = db.Column(db.Float, nullable=False, default=4.5)
    review_count = db.Column(db.Integer, nullable=False, default=0)
    status = db.Column(db.Enum(ListingStatus), nullable=True, default=ListingStatus.PENDING)
    is_available = db.Column(db.Boolean, nullable=False, default=False)
    service_details = db.Column(db.JSON, nullable=False, default=dict)
    verified_at = db.Column(db.DateTime)
    rejection_reason = db.Column(db.Text)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
    quote_requests = db.relationship('QuoteRequest', backref='venue', lazy=True)
    appointments = db.relationship('Appointment', backref='venue', lazy=True)

    @property
    def is_public(self):
        return (self.status == ListingStatus.APPROVED and bool(self.is_available)
                and self.vendor is not None and bool(self.vendor.is_active))

    def __repr__(self):
        return f'<Venue {self.name} [{self.category}] ({self.status})>'

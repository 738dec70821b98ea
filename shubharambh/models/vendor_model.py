from datetime import datetime
from shubharambh import db
from shubharambh.models.status import ListingStatus


class Vendor(db.Model):
    __tablename__ = 'vendor'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id', ondelete='SET NULL'), nullable=True, index=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    phone = db.Column(db.String(20), nullable=False, default='0000000000')
    business_name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    categories = db.Column(db.JSON, nullable=False, default=list)
    locations = db.Column(db.JSON, nullable=False, default=list)
    images = db.Column(db.JSON, nullable=False, default=list)
    price_min = db.Column(db.Integer)
    price_max = db.Column(db.Integer)
    is_active = db.Column(db.Boolean, nullable=False, default=False)
    # Nullable: rows created before moderation existed have no status
    status = db.Column(db.Enum(ListingStatus), nullable=True, default=ListingStatus.PENDING)
    verified_at = db.Column(db.DateTime)
    rejection_reason = db.Column(db.Text)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
    venues = db.relationship('Venue', backref='vendor', lazy=True, cascade='all, delete-orphan')
    appointments = db.relationship('Appointment', backref='vendor', lazy=True)
    user = db.relationship('User', backref=db.backref('vendors', lazy=True))

    def __init__(self, **kwargs):
        if kwargs.get('email'):
            kwargs['email'] = kwargs['email'].strip().lower()
        super().__init__(**kwargs)

    def __repr__(self):
        return f'<Vendor {self.business_name} ({self.status})>'

from datetime import datetime
from shubharambh import db
from shubharambh.models.relationship_model import quote_request_vendor
from shubharambh.models.status import QuoteStatus, ResponseStatus, QuoteSource


class QuoteRequest(db.Model):
    __tablename__ = 'quote_request'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    venue_id = db.Column(db.Integer, db.ForeignKey('venue.id', ondelete='SET NULL'), nullable=True)
    event_type = db.Column(db.String(50), nullable=False)
    location = db.Column(db.String(200), nullable=False)
    event_date = db.Column(db.DateTime, nullable=False)
    attendees = db.Column(db.Integer)
    budget_min = db.Column(db.Integer, nullable=False, default=0)
    budget_max = db.Column(db.Integer, nullable=False, default=1000000)
    requirements = db.Column(db.Text, nullable=False)
    notes = db.Column(db.Text, default='')
    category = db.Column(db.String(50), nullable=False, default='venues')
    category_details = db.Column(db.JSON, nullable=False, default=dict)
    source = db.Column(db.Enum(QuoteSource), nullable=False, default=QuoteSource.WEBSITE)
    status = db.Column(db.Enum(QuoteStatus), nullable=False, default=QuoteStatus.PENDING)
    response_status = db.Column(db.Enum(ResponseStatus))
    response_message = db.Column(db.Text)
    responded_at = db.Column(db.DateTime)
    responded_by = db.Column(db.Integer, db.ForeignKey('vendor.id', ondelete='SET NULL'))
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    vendors = db.relationship('Vendor', secondary=quote_request_vendor, lazy='subquery',
                              backref=db.backref('quote_requests', lazy=True))
    responder = db.relationship('Vendor', foreign_keys=[responded_by],
                                backref=db.backref('responded_quote_requests', lazy=True))

    @property
    def vendor_ids(self):
        return [vendor.id for vendor in self.vendors]

    def __repr__(self):
        return f'<QuoteRequest {self.id} by User {self.user_id} ({self.status})>'

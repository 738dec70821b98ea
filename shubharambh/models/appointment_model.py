from datetime import datetime
from shubharambh import db
from shubharambh.models.status import AppointmentStatus, AppointmentType


class Appointment(db.Model):
    __tablename__ = 'appointment'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    vendor_id = db.Column(db.Integer, db.ForeignKey('vendor.id', ondelete='SET NULL'), nullable=True, index=True)
    venue_id = db.Column(db.Integer, db.ForeignKey('venue.id', ondelete='SET NULL'), nullable=True)
    type = db.Column(db.Enum(AppointmentType), nullable=False, default=AppointmentType.APPOINTMENT)
    scheduled_date = db.Column(db.DateTime, nullable=False)
    scheduled_time = db.Column(db.String(20), nullable=False)
    event_type = db.Column(db.String(50), nullable=False)
    attendees = db.Column(db.Integer, nullable=False, default=1)
    notes = db.Column(db.Text)
    # Booking an appointment shares the user's contact with the vendor
    contact_shared = db.Column(db.Boolean, nullable=False, default=True)
    user_name = db.Column(db.String(120))
    user_email = db.Column(db.String(120))
    user_phone = db.Column(db.String(20), nullable=False)
    status = db.Column(db.Enum(AppointmentStatus), nullable=False, default=AppointmentStatus.PENDING)
    rejection_reason = db.Column(db.Text)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return f'<Appointment {self.id} {self.type} ({self.status})>'

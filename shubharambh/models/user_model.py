import enum
from datetime import datetime
from shubharambh import db


class Role(enum.Enum):
    USER = 'user'
    VENDOR = 'vendor'


class User(db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    phone = db.Column(db.String(20))
    password = db.Column(db.String(200), nullable=False)
    role = db.Column(db.Enum(Role), nullable=False, default=Role.USER)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    quote_requests = db.relationship('QuoteRequest', backref='user', lazy=True)
    appointments = db.relationship('Appointment', backref='user', lazy=True)

    def __repr__(self):
        return f'<User {self.email} ({self.role})>'

from shubharambh import db

quote_request_vendor = db.Table(
    'quote_request_vendor',
    db.Column('quote_request_id', db.Integer, db.ForeignKey('quote_request.id', ondelete='CASCADE'), primary_key=True),
    db.Column('vendor_id', db.Integer, db.ForeignKey('vendor.id', ondelete='CASCADE'), primary_key=True)
)

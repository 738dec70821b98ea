"""Find the Vendor record behind an authenticated session.

Vendor accounts predate the user_id link, so lookup falls back through
progressively weaker identifiers. Strategies run in order and the first
match wins.
"""
import logging
from sqlalchemy import func
from .. import db
from ..models.vendor_model import Vendor

logger = logging.getLogger(__name__)


def _normalize_email(email):
    return (email or '').strip().lower()


def by_user_id(session, form_email):
    if session.user_id is None:
        return None
    return Vendor.query.filter_by(user_id=session.user_id).first()


def by_session_email(session, form_email):
    email = _normalize_email(session.email)
    if not email:
        return None
    return Vendor.query.filter(func.lower(Vendor.email) == email).first()


def by_form_email(session, form_email):
    email = _normalize_email(form_email)
    if not email or email == _normalize_email(session.email):
        return None
    return Vendor.query.filter(func.lower(Vendor.email) == email).first()


def by_name(session, form_email):
    # Names are not unique, so only vendor accounts may claim a profile this way
    if session.role != 'vendor':
        return None
    name = (session.name or '').strip().lower()
    if not name:
        return None
    return Vendor.query.filter(func.lower(Vendor.name) == name).first()


STRATEGIES = [
    ('user_id', by_user_id),
    ('session_email', by_session_email),
    ('form_email', by_form_email),
    ('name', by_name),
]


def resolve_vendor(session, form_email=None):
    """Return ``(vendor, strategy_name)`` or ``(None, None)`` for a first-time vendor"""
    if session is None or session.is_admin:
        return None, None
    for strategy_name, strategy in STRATEGIES:
        vendor = strategy(session, form_email)
        if vendor is not None:
            logger.debug(f"Resolved vendor {vendor.id} for user {session.user_id} via {strategy_name}")
            return vendor, strategy_name
    return None, None


def backfill_user_id(vendor, session):
    """Link a vendor found by a fallback strategy to the session user"""
    if vendor.user_id is None and session.user_id is not None:
        vendor.user_id = session.user_id
        logger.info(f"Linked vendor {vendor.id} to user {session.user_id}")
        return True
    return False


def resolve_vendor_for_write(session, form_email=None):
    """Resolve and backfill in one step, for callers about to write"""
    vendor, strategy_name = resolve_vendor(session, form_email)
    if vendor is not None and backfill_user_id(vendor, session):
        db.session.flush()
    return vendor

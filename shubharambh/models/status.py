import enum


class ListingStatus(enum.Enum):
    PENDING = 'pending'
    APPROVED = 'approved'
    REJECTED = 'rejected'


class QuoteStatus(enum.Enum):
    PENDING = 'pending'
    RESPONDED = 'responded'


class ResponseStatus(enum.Enum):
    ACCEPTED = 'accepted'
    REJECTED = 'rejected'


class QuoteSource(enum.Enum):
    WEBSITE = 'website'
    CHATBOT = 'chatbot'


class AppointmentType(enum.Enum):
    APPOINTMENT = 'appointment'
    VISIT = 'visit'


class AppointmentStatus(enum.Enum):
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    REJECTED = 'rejected'
    CANCELLED = 'cancelled'


# Moderation: a missing status behaves as pending
LISTING_TRANSITIONS = {
    ListingStatus.PENDING: [ListingStatus.APPROVED, ListingStatus.REJECTED],
    ListingStatus.APPROVED: [ListingStatus.REJECTED],
    ListingStatus.REJECTED: [ListingStatus.APPROVED],
}

QUOTE_TRANSITIONS = {
    QuoteStatus.PENDING: [QuoteStatus.RESPONDED],
    QuoteStatus.RESPONDED: [],
}

APPOINTMENT_TRANSITIONS = {
    AppointmentStatus.PENDING: [AppointmentStatus.CONFIRMED, AppointmentStatus.REJECTED,
                                AppointmentStatus.CANCELLED],
    AppointmentStatus.CONFIRMED: [],
    AppointmentStatus.REJECTED: [],
    AppointmentStatus.CANCELLED: [],
}

_TABLES = {
    ListingStatus: LISTING_TRANSITIONS,
    QuoteStatus: QUOTE_TRANSITIONS,
    AppointmentStatus: APPOINTMENT_TRANSITIONS,
}


def effective_listing_status(status):
    """Legacy rows without a status are treated as pending"""
    return status or ListingStatus.PENDING


def can_transition(current, new_status):
    """Check a status change against the transition table of its enum"""
    if current is None and isinstance(new_status, ListingStatus):
        current = ListingStatus.PENDING
    table = _TABLES.get(type(new_status))
    if table is None or current is None:
        return False
    return new_status in table.get(current, [])

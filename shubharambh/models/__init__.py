from .user_model import User, Role
from .vendor_model import Vendor
from .venue_model import Venue
from .quote_request_model import QuoteRequest
from .appointment_model import Appointment
from .relationship_model import quote_request_vendor
from .status import (ListingStatus, QuoteStatus, ResponseStatus, QuoteSource,
                     AppointmentType, AppointmentStatus, can_transition)

from ..models.status import effective_listing_status


def _iso(value):
    return value.isoformat() if value else None


def _enum(value):
    return value.value if value is not None else None


def format_vendor(vendor):
    return {
        'id': vendor.id,
        'userId': vendor.user_id,
        'name': vendor.name,
        'email': vendor.email,
        'phone': vendor.phone,
        'businessName': vendor.business_name,
        'description': vendor.description,
        'categories': list(vendor.categories or []),
        'locations': list(vendor.locations or []),
        'images': list(vendor.images or []),
        'priceRange': {'min': vendor.price_min, 'max': vendor.price_max},
        'isActive': vendor.is_active,
        'status': effective_listing_status(vendor.status).value,
        'verifiedAt': _iso(vendor.verified_at),
        'rejectionReason': vendor.rejection_reason,
        'createdAt': _iso(vendor.created_at),
        'updatedAt': _iso(vendor.updated_at),
    }


def vendor_contact(vendor):
    """Public contact block shown next to an approved listing"""
    if vendor is None:
        return None
    return {
        'id': vendor.id,
        'businessName': vendor.business_name,
        'name': vendor.name,
        'email': vendor.email,
        'phone': vendor.phone,
    }


def format_venue(venue, with_vendor=False):
    data = {
        'id': venue.id,
        'vendorId': venue.vendor_id,
        'name': venue.name,
        'type': venue.type,
        'category': venue.category,
        'eventTypes': list(venue.event_types or []),
        'location': venue.location,
        'city': venue.city,
        'address': venue.address,
        'capacity': {'min': venue.capacity_min, 'max': venue.capacity_max},
        'priceRange': {'min': venue.price_min, 'max': venue.price_max},
        'priceUnit': venue.price_unit,
        'images': list(venue.images or []),
        'amenities': list(venue.amenities or []),
        'highlights': list(venue.highlights or []),
        'description': venue.description,
        'rating': venue.rating,
        'reviewCount': venue.review_count,
        'status': effective_listing_status(venue.status).value,
        'isAvailable': venue.is_available,
        'serviceDetails': dict(venue.service_details or {}),
        'verifiedAt': _iso(venue.verified_at),
        'rejectionReason': venue.rejection_reason,
        'createdAt': _iso(venue.created_at),
    }
    if with_vendor:
        data['vendorInfo'] = vendor_contact(venue.vendor)
    return data


def format_quote_request(quote_request):
    user = quote_request.user
    venue = quote_request.venue
    responder = quote_request.responder
    response = None
    if quote_request.response_status is not None:
        response = {
            'status': quote_request.response_status.value,
            'message': quote_request.response_message,
            'respondedAt': _iso(quote_request.responded_at),
            'respondedBy': quote_request.responded_by,
            'respondedByName': responder.business_name if responder else None,
        }
    return {
        'id': quote_request.id,
        'userId': quote_request.user_id,
        'userName': user.name if user else None,
        'userEmail': user.email if user else None,
        'venueId': quote_request.venue_id,
        'venue': {'id': venue.id, 'name': venue.name, 'images': list(venue.images or []),
                  'category': venue.category} if venue else None,
        'vendorIds': quote_request.vendor_ids,
        'eventType': quote_request.event_type,
        'location': quote_request.location,
        'eventDate': _iso(quote_request.event_date),
        'attendees': quote_request.attendees,
        'budgetMin': quote_request.budget_min,
        'budgetMax': quote_request.budget_max,
        'requirements': quote_request.requirements,
        'notes': quote_request.notes,
        'category': quote_request.category,
        'categoryDetails': dict(quote_request.category_details or {}),
        'source': _enum(quote_request.source),
        'status': _enum(quote_request.status),
        'vendorResponse': response,
        'createdAt': _iso(quote_request.created_at),
    }


def format_appointment(appointment):
    venue = appointment.venue
    return {
        'id': appointment.id,
        'userId': appointment.user_id,
        'vendorId': appointment.vendor_id,
        'venueId': appointment.venue_id,
        'venue': {'id': venue.id, 'name': venue.name, 'location': venue.location,
                  'images': list(venue.images or [])} if venue else None,
        'type': _enum(appointment.type),
        'scheduledDate': _iso(appointment.scheduled_date),
        'scheduledTime': appointment.scheduled_time,
        'eventType': appointment.event_type,
        'attendees': appointment.attendees,
        'notes': appointment.notes,
        'contactShared': appointment.contact_shared,
        'userName': appointment.user_name,
        'userEmail': appointment.user_email,
        'userPhone': appointment.user_phone,
        'status': _enum(appointment.status),
        'rejectionReason': appointment.rejection_reason,
        'createdAt': _iso(appointment.created_at),
    }

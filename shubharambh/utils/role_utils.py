from shubharambh.models.user_model import Role

_USER_ACTIONS = [
    'view_listings', 'request_quote', 'view_own_quotes',
    'book_appointment', 'view_own_appointments', 'cancel_own_appointment',
    'register_vendor', 'chat'
]

# Screens and actions the frontend unlocks per role
ROLE_PERMISSIONS = {
    Role.USER: {
        'interface_sections': ['profile', 'categories', 'venues', 'quotes', 'appointments', 'chat'],
        'actions': _USER_ACTIONS,
    },
    Role.VENDOR: {
        'interface_sections': ['profile', 'categories', 'venues', 'vendor_dashboard', 'enquiries',
                               'appointments', 'chat'],
        'actions': _USER_ACTIONS + [
            'add_listing', 'update_own_listing', 'delete_own_listing',
            'view_vendor_quotes', 'respond_quote', 'view_vendor_appointments', 'respond_appointment'
        ],
    },
}

ANONYMOUS_PERMISSIONS = {
    'interface_sections': ['login', 'register', 'categories', 'venues'],
    'actions': ['view_listings'],
}


def get_user_permissions(user):
    if user is None or user.role is None:
        return ANONYMOUS_PERMISSIONS
    return ROLE_PERMISSIONS.get(user.role, ROLE_PERMISSIONS[Role.USER])


def get_user_data_with_permissions(user):
    """Public profile of a user plus what their role may do"""
    if user is None:
        return None
    return {
        'id': user.id,
        'name': user.name,
        'email': user.email,
        'phone': user.phone,
        'role': user.role.value,
        'permissions': get_user_permissions(user),
        'createdAt': user.created_at.isoformat() if user.created_at else None,
    }

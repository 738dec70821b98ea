from .auth_routes import auth_ns
from .users_routes import users_ns
from .category_routes import category_ns
from .venue_routes import venue_ns
from .vendor_routes import vendor_ns
from .quote_routes import quote_ns
from .appointment_routes import appointment_ns
from .dashboard_routes import dashboard_ns
from .admin_routes import admin_ns
from .chat_routes import chat_ns


def register_namespaces(api):
    api.add_namespace(auth_ns, path='/auth')
    api.add_namespace(users_ns, path='/users')
    api.add_namespace(category_ns, path='/categories')
    api.add_namespace(venue_ns, path='/venues')
    api.add_namespace(vendor_ns, path='/vendors')
    api.add_namespace(quote_ns, path='/quotes')
    api.add_namespace(appointment_ns, path='/appointments')
    api.add_namespace(dashboard_ns, path='/dashboard')
    api.add_namespace(admin_ns, path='/admin')
    api.add_namespace(chat_ns, path='/chat')

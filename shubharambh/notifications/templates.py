"""HTML email bodies.

Each function takes plain values and returns a complete HTML document, so
they can be rendered and asserted on without an app or a database.
"""
import re
from jinja2 import Environment, PackageLoader, select_autoescape

env = Environment(
    loader=PackageLoader('shubharambh', 'templates/email'),
    autoescape=select_autoescape(['html'])
)


def format_slug(slug):
    """'sangeet-night' -> 'Sangeet Night'"""
    if not slug:
        return ''
    return re.sub(r'\b\w', lambda m: m.group(0).upper(), re.sub(r'[-_]', ' ', slug))


def format_inr(amount):
    """Rupees with Indian digit grouping: 150000 -> '₹1,50,000'"""
    digits = str(int(amount))
    if len(digits) <= 3:
        return f'₹{digits}'
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return '₹' + ','.join(groups + [tail])


def format_date(value):
    """Long date in the en-IN style: 'Saturday, 14 March 2026'"""
    if value is None:
        return ''
    if isinstance(value, str):
        return value
    return f'{value:%A}, {value.day} {value:%B %Y}'


def quote_enquiry_email(vendor_name, business_name, user_name, user_email, event_type, event_date,
                        location, requirements, dashboard_url, attendees=None, budget_min=None,
                        budget_max=None, notes=None, venue_name=None, category_details=None):
    event_rows = [
        ('Event Type', format_slug(event_type)),
        ('Date', format_date(event_date)),
        ('Location', format_slug(location)),
    ]
    if attendees and attendees > 0:
        event_rows.append(('Guests', f'{attendees} people'))
    if budget_min and budget_max and budget_min > 0 and budget_max > 0:
        event_rows.append(('Budget', f'{format_inr(budget_min)} – {format_inr(budget_max)}'))
    if venue_name:
        event_rows.append(('For', venue_name))
    category_rows = [(format_slug(re.sub(r'(?<!^)(?=[A-Z])', ' ', key)), value)
                     for key, value in (category_details or {}).items() if value]
    return env.get_template('quote_enquiry.html').render(
        vendor_name=vendor_name,
        business_name=business_name,
        user_name=user_name,
        user_email=user_email,
        requirements=requirements,
        notes=notes,
        venue_name=venue_name,
        event_rows=event_rows,
        category_rows=category_rows,
        dashboard_url=dashboard_url,
    )


def appointment_request_email(vendor_name, business_name, user_name, user_email, appointment_type,
                              scheduled_date, scheduled_time, event_type, dashboard_url,
                              attendees=1, notes=None, venue_name=None, user_phone=None):
    appointment_label = 'Site Visit' if appointment_type == 'visit' else 'Appointment'
    schedule_rows = [
        ('Type', appointment_label),
        ('Date', format_date(scheduled_date)),
        ('Time', scheduled_time),
        ('Event', format_slug(event_type)),
        ('Guests', f'{attendees} people'),
    ]
    return env.get_template('appointment_request.html').render(
        vendor_name=vendor_name,
        business_name=business_name,
        user_name=user_name,
        user_email=user_email,
        user_phone=user_phone,
        appointment_label=appointment_label,
        venue_name=venue_name,
        notes=notes,
        schedule_rows=schedule_rows,
        dashboard_url=dashboard_url,
    )


def quote_response_email(user_name, business_name, event_type, accepted, message, dashboard_url,
                         venue_name=None):
    return env.get_template('quote_response.html').render(
        user_name=user_name,
        business_name=business_name,
        event_type=format_slug(event_type),
        accepted=accepted,
        status_label='Accepted' if accepted else 'Declined',
        message=message,
        venue_name=venue_name,
        dashboard_url=dashboard_url,
    )


def appointment_response_email(user_name, venue_name, appointment_type, scheduled_date, scheduled_time,
                               confirmed, dashboard_url, reason=None):
    return env.get_template('appointment_response.html').render(
        user_name=user_name,
        venue_name=venue_name,
        appointment_label='Site Visit' if appointment_type == 'visit' else 'Appointment',
        scheduled_date=format_date(scheduled_date),
        scheduled_time=scheduled_time,
        status_label='Confirmed' if confirmed else 'Declined',
        reason=reason,
        dashboard_url=dashboard_url,
    )

import datetime
from shubharambh.notifications import templates
from shubharambh.notifications.dispatch import deliver
from shubharambh.notifications.mailer import Mailer


def test_formatters():
    assert templates.format_inr(150000) == '₹1,50,000'
    assert templates.format_inr(999) == '₹999'
    assert templates.format_inr(12345678) == '₹1,23,45,678'
    assert templates.format_slug('bachelor-party') == 'Bachelor Party'
    assert templates.format_date(datetime.datetime(2026, 3, 14)) == 'Saturday, 14 March 2026'


def test_quote_enquiry_email_escapes_user_input():
    html = templates.quote_enquiry_email(
        vendor_name='Ravi',
        business_name='Royal Events',
        user_name='<script>alert(1)</script>',
        user_email='asha@example.com',
        event_type='wedding-reception',
        event_date=datetime.datetime(2026, 12, 5),
        location='hyderabad',
        requirements='Stage & lights',
        dashboard_url='http://localhost:3000/dashboard',
        attendees=300,
        budget_min=100000,
        budget_max=500000,
        category_details={'seatingStyle': 'Mixed'},
    )
    assert '<script>' not in html
    assert '&lt;script&gt;' in html
    assert 'Wedding Reception' in html
    assert '₹1,00,000 – ₹5,00,000' in html
    assert 'Seating Style' in html
    assert 'Stage &amp; lights' in html


def test_appointment_response_email():
    html = templates.appointment_response_email(
        user_name='Karan', venue_name='Lotus Hall', appointment_type='visit',
        scheduled_date=datetime.datetime(2026, 3, 14), scheduled_time='11:00 AM',
        confirmed=False, dashboard_url='http://x/dashboard', reason='Closed that day')
    assert 'Site Visit' in html
    assert 'declined' in html
    assert 'Closed that day' in html


def test_mailer_never_raises_without_credentials():
    mailer = Mailer('smtp.example.com', 465, None, None)
    assert mailer.send('a@example.com', 'Hi', '<p>Hi</p>') is False


def test_mailer_strips_app_password_spaces():
    assert Mailer('h', 465, 'u', 'abcd efgh ijkl mnop').password == 'abcdefghijklmnop'


def test_deliver_swallows_render_errors(app, outbox):
    def broken():
        raise ValueError('template exploded')

    assert deliver('a@example.com', 'Subject', broken) is False
    assert deliver(None, 'Subject', lambda: '<p></p>') is False
    assert deliver('a@example.com', 'Subject', lambda: '<p>ok</p>') is True
    assert outbox == [{'to': 'a@example.com', 'subject': 'Subject', 'html': '<p>ok</p>'}]


def test_mailer_connects_with_a_timeout(monkeypatch):
    connections = []

    class FakeSMTP:
        def __init__(self, host, port, timeout=None):
            connections.append((host, port, timeout))

        def login(self, username, password):
            pass

        def sendmail(self, sender, recipients, message):
            pass

        def quit(self):
            pass

    monkeypatch.setattr('shubharambh.notifications.mailer.smtplib.SMTP_SSL', FakeSMTP)
    mailer = Mailer.from_config({'SMTP_HOST': 'smtp.example.com', 'SMTP_PORT': 465, 'SMTP_EMAIL': 'u@example.com',
                                 'SMTP_APP_PASSWORD': 'pw', 'SMTP_TIMEOUT': 3})

    assert mailer.send('asha@example.com', 'Hello', '<p>Hi</p>') is True
    assert connections == [('smtp.example.com', 465, 3)]

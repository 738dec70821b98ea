import logging
import smtplib
from contextlib import contextmanager
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from flask import current_app

logger = logging.getLogger(__name__)


class Mailer:
    """SMTP sender for enquiry notifications"""

    def __init__(self, smtp_host, smtp_port, username, password, sender_name='Shubharambh Enquiries',
                 suppress_send=False, timeout=10):
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.username = username
        # Gmail shows app passwords in groups of four
        self.password = (password or '').replace(' ', '')
        self.sender_name = sender_name
        self.suppress_send = suppress_send
        self.timeout = timeout
        self.outbox = []

    @classmethod
    def from_config(cls, config):
        return cls(
            smtp_host=config.get('SMTP_HOST', 'smtp.gmail.com'),
            smtp_port=config.get('SMTP_PORT', 465),
            username=config.get('SMTP_EMAIL'),
            password=config.get('SMTP_APP_PASSWORD'),
            suppress_send=config.get('MAIL_SUPPRESS_SEND', False),
            timeout=config.get('SMTP_TIMEOUT', 10),
        )

    @contextmanager
    def _connection(self):
        server = smtplib.SMTP_SSL(self.smtp_host, self.smtp_port, timeout=self.timeout)
        try:
            server.login(self.username, self.password)
            yield server
        finally:
            try:
                server.quit()
            except smtplib.SMTPException as e:
                logger.warning(f"Error closing SMTP connection: {e}")

    def _build_message(self, to, subject, html):
        msg = MIMEMultipart('alternative')
        msg['From'] = f'"{self.sender_name}" <{self.username}>'
        msg['To'] = to
        msg['Subject'] = subject
        msg.attach(MIMEText(html, 'html', 'utf-8'))
        return msg

    def send(self, to, subject, html):
        """Send one HTML email. Returns True on success, never raises"""
        if self.suppress_send:
            self.outbox.append({'to': to, 'subject': subject, 'html': html})
            logger.info(f"Mail suppressed: '{subject}' to {to}")
            return True
        if not self.username or not self.password:
            logger.warning(f"SMTP credentials missing, not sending '{subject}' to {to}")
            return False
        try:
            msg = self._build_message(to, subject, html)
            with self._connection() as server:
                server.sendmail(self.username, [to], msg.as_string())
            logger.info(f"Email sent to {to}: {subject}")
            return True
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {to}: {e}")
            return False


def get_mailer():
    mailer = current_app.extensions.get('mailer')
    if mailer is None:
        mailer = Mailer.from_config(current_app.config)
        current_app.extensions['mailer'] = mailer
    return mailer

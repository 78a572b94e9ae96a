"""
Guardian notifications for absent students.
Delivery runs on a daemon thread per absence; failures are logged and
counted, never raised to the caller.
"""
import logging
import smtplib
import threading
from email.message import EmailMessage

from models.errors import DispatchError
from models.metrics import log_notification

logger = logging.getLogger(__name__)

SUBJECT = 'Attendance Alert'
BODY_TEMPLATE = ("Dear Parent, your child {student_name} was marked absent on {date}. "
                 "Please check their attendance.")


class EmailNotifier:
    """Sends the absence email over SMTP"""

    def __init__(self, user, password, host='smtp.gmail.com', port=587, use_tls=True):
        self.user = user
        self.password = password
        self.host = host
        self.port = port
        self.use_tls = use_tls

    @classmethod
    def from_config(cls, config):
        return cls(
            user=config.get('EMAIL_USER'),
            password=config.get('EMAIL_PASSWORD'),
            host=config.get('SMTP_HOST', 'smtp.gmail.com'),
            port=config.get('SMTP_PORT', 587),
            use_tls=config.get('SMTP_USE_TLS', True),
        )

    def build_message(self, address, student_name, date):
        message = EmailMessage()
        message['Subject'] = SUBJECT
        message['From'] = self.user
        message['To'] = address
        message.set_content(BODY_TEMPLATE.format(student_name=student_name, date=date))
        return message

    def send(self, address, student_name, date):
        if not self.user or not self.password:
            raise DispatchError("Email is not configured (EMAIL_USER / EMAIL_PASSWORD).")

        message = self.build_message(address, student_name, date)
        try:
            with smtplib.SMTP(self.host, self.port) as server:
                if self.use_tls:
                    server.starttls()
                server.login(self.user, self.password)
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            raise DispatchError(f"Could not send absence email to {address}: {e}") from e


class NotificationDispatcher:
    """Fire-and-forget wrapper around a notifier"""

    def __init__(self, notifier):
        self._notifier = notifier

    def notify_absence(self, address, student_name, date):
        """Start delivery and return the worker thread without waiting on it"""
        thread = threading.Thread(
            target=self._deliver,
            args=(address, student_name, date),
            daemon=True,
        )
        thread.start()
        return thread

    def _deliver(self, address, student_name, date):
        if not address:
            logger.warning("No guardian address for %s; absence on %s not sent", student_name, date)
            log_notification(False)
            return
        try:
            self._notifier.send(address, student_name, date)
        except Exception:
            # Worker thread boundary: nothing upstream can handle this
            logger.exception("Error sending absence email to %s for %s", address, student_name)
            log_notification(False)
            return
        logger.info("Absence email sent to %s for %s (%s)", address, student_name, date)
        log_notification(True)

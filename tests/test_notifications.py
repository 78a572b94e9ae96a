import smtplib
import unittest
from unittest.mock import MagicMock, patch

import models.metrics as metrics_module
from models.errors import DispatchError
from models.notifications import EmailNotifier, NotificationDispatcher


class TestEmailNotifier(unittest.TestCase):
    """Tests for EmailNotifier"""

    def setUp(self):
        self.notifier = EmailNotifier('school@example.com', 'app-password')

    def test_build_message(self):
        message = self.notifier.build_message('parent@example.com', 'Ben', '2024-06-01')

        self.assertEqual(message['Subject'], 'Attendance Alert')
        self.assertEqual(message['From'], 'school@example.com')
        self.assertEqual(message['To'], 'parent@example.com')
        self.assertIn('your child Ben was marked absent on 2024-06-01', message.get_content())

    @patch('models.notifications.smtplib.SMTP')
    def test_send_uses_tls_and_login(self, mock_smtp):
        server = mock_smtp.return_value.__enter__.return_value

        self.notifier.send('parent@example.com', 'Ben', '2024-06-01')

        mock_smtp.assert_called_once_with('smtp.gmail.com', 587)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with('school@example.com', 'app-password')
        server.send_message.assert_called_once()

    @patch('models.notifications.smtplib.SMTP')
    def test_send_without_tls(self, mock_smtp):
        notifier = EmailNotifier('u', 'p', host='localhost', port=25, use_tls=False)
        server = mock_smtp.return_value.__enter__.return_value

        notifier.send('parent@example.com', 'Ben', '2024-06-01')

        server.starttls.assert_not_called()

    @patch('models.notifications.smtplib.SMTP')
    def test_smtp_failure_becomes_dispatch_error(self, mock_smtp):
        mock_smtp.return_value.__enter__.return_value.login.side_effect = \
            smtplib.SMTPAuthenticationError(535, b'bad credentials')

        with self.assertRaises(DispatchError):
            self.notifier.send('parent@example.com', 'Ben', '2024-06-01')

    def test_unconfigured_notifier_raises(self):
        with self.assertRaises(DispatchError):
            EmailNotifier('', '').send('parent@example.com', 'Ben', '2024-06-01')

    def test_from_config(self):
        notifier = EmailNotifier.from_config({
            'EMAIL_USER': 'u@example.com', 'EMAIL_PASSWORD': 'pw',
            'SMTP_HOST': 'mail.example.com', 'SMTP_PORT': 2525, 'SMTP_USE_TLS': False,
        })
        self.assertEqual((notifier.host, notifier.port, notifier.use_tls), ('mail.example.com', 2525, False))


class TestNotificationDispatcher(unittest.TestCase):
    """Tests for fire-and-forget delivery"""

    def setUp(self):
        metrics_module.reset_metrics()
        self.notifier = MagicMock()
        self.dispatcher = NotificationDispatcher(self.notifier)

    def tearDown(self):
        metrics_module.reset_metrics()

    def test_delivers_on_background_thread(self):
        thread = self.dispatcher.notify_absence('b@x', 'Ben', '2024-06-01')
        thread.join(timeout=2)

        self.assertTrue(thread.daemon)
        self.notifier.send.assert_called_once_with('b@x', 'Ben', '2024-06-01')
        self.assertEqual(metrics_module.get_metrics()['notifications_sent'], 1)

    def test_failure_is_swallowed_and_counted(self):
        self.notifier.send.side_effect = DispatchError('smtp down')

        thread = self.dispatcher.notify_absence('b@x', 'Ben', '2024-06-01')
        thread.join(timeout=2)

        self.assertEqual(metrics_module.get_metrics()['notifications_failed'], 1)

    def test_missing_address_is_skipped(self):
        thread = self.dispatcher.notify_absence('', 'Ben', '2024-06-01')
        thread.join(timeout=2)

        self.notifier.send.assert_not_called()
        self.assertEqual(metrics_module.get_metrics()['notifications_failed'], 1)


if __name__ == '__main__':
    unittest.main()

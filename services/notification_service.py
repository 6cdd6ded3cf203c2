"""Notification Service.
Sends account security notices by email through Flask-Mail.
"""
from smtplib import SMTPException

from flask import current_app
from flask_mail import Message

from extensions import mail


class NotificationService:

    def send_email(self, recipient, subject, body):
        """Send a plain-text email; returns False when mail is not configured or delivery fails."""
        if not current_app.config.get('MAIL_USERNAME') and not current_app.config.get('MAIL_SUPPRESS_SEND'):
            current_app.logger.info(f'Email not configured, skipping "{subject}" to {recipient}')
            return False

        msg = Message(
            subject=subject,
            sender=current_app.config.get('MAIL_DEFAULT_SENDER') or 'no-reply@recovery-tracker.local',
            recipients=[recipient],
            body=body,
        )
        try:
            mail.send(msg)
        except (SMTPException, OSError) as e:
            current_app.logger.error(f'Failed to send "{subject}" to {recipient}: {e}')
            return False

        current_app.logger.info(f'Email "{subject}" sent to {recipient}')
        return True

    def send_password_changed_notice(self, user):
        name = user.display_name or user.email
        body = (
            f'Hi {name},\n\n'
            'The password for your Recovery Tracker account was just changed.\n'
            'If this was not you, reset your password right away and contact support.\n\n'
            'Recovery Tracker Team\n'
        )
        return self.send_email(user.email, 'Your password was changed', body)

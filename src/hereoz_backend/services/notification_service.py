"""Email notifications sent over SMTP."""

import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

import structlog

from hereoz_backend.core.config import settings

logger = structlog.get_logger(__name__)


class EmailServerConfig:
    """Configuration for the outgoing SMTP server."""

    def __init__(
        self,
        smtp_host: str = settings.smtp_host,
        smtp_port: int = settings.smtp_port,
        smtp_username: Optional[str] = settings.smtp_username,
        smtp_password: Optional[str] = settings.smtp_password,
        use_tls: bool = settings.smtp_use_tls,
        from_address: str = settings.email_from
    ):
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_username = smtp_username
        self.smtp_password = smtp_password
        self.use_tls = use_tls
        self.from_address = from_address


class NotificationService:
    """Sends transactional emails.

    When notifications are disabled the message is only logged. Delivery
    failures are logged and reported through the return value; they never
    propagate to the request that triggered them.
    """

    def __init__(self, config: Optional[EmailServerConfig] = None, enabled: Optional[bool] = None):
        self.config = config or EmailServerConfig()
        self.enabled = settings.notifications_enabled if enabled is None else enabled

    def send_email(self, to_address: str, subject: str, body: str) -> bool:
        """Send a plain-text email.

        Args:
            to_address: Recipient email address
            subject: Email subject
            body: Email body text

        Returns:
            True if the email was sent (or logged while disabled), False on failure
        """
        if not self.enabled:
            logger.info("Notification email skipped, delivery disabled", to_address=to_address, subject=subject)
            return True

        try:
            msg = MIMEMultipart()
            msg['From'] = self.config.from_address
            msg['To'] = to_address
            msg['Subject'] = subject
            msg.attach(MIMEText(body, 'plain'))

            with smtplib.SMTP(self.config.smtp_host, self.config.smtp_port) as server:
                if self.config.use_tls:
                    server.starttls()

                if self.config.smtp_username and self.config.smtp_password:
                    server.login(self.config.smtp_username, self.config.smtp_password)

                server.sendmail(self.config.from_address, to_address, msg.as_string())

            logger.info("Notification email sent", to_address=to_address, subject=subject)
            return True

        except (smtplib.SMTPException, OSError) as e:
            logger.warning(
                "Failed to send notification email",
                to_address=to_address,
                subject=subject,
                error=str(e)
            )
            return False

    def send_verification_email(self, to_address: str, token: str) -> bool:
        link = f"{settings.frontend_url}/verify-email/{token}"
        return self.send_email(
            to_address,
            "Verify your Hereoz account",
            f"Welcome to Hereoz!\n\nConfirm your email address by opening this link:\n{link}\n\n"
            f"The link expires in {settings.email_verification_hours} hours."
        )

    def send_password_reset_email(self, to_address: str, token: str) -> bool:
        link = f"{settings.frontend_url}/reset-password/{token}"
        return self.send_email(
            to_address,
            "Reset your Hereoz password",
            f"A password reset was requested for your account.\n\nChoose a new password here:\n{link}\n\n"
            f"The link expires in {settings.password_reset_hours} hour(s). "
            "If you did not ask for this, ignore this email."
        )

    def send_new_application(self, to_address: str, candidate_name: str, offer_title: str) -> bool:
        return self.send_email(
            to_address,
            f"New application for {offer_title}",
            f"{candidate_name} applied to your offer \"{offer_title}\".\n\n"
            f"Review it on {settings.frontend_url}."
        )

    def send_application_status(
        self,
        to_address: str,
        offer_title: str,
        status: str,
        rejection_reason: Optional[str] = None
    ) -> bool:
        body = f"Your application for \"{offer_title}\" is now: {status}."
        if status == "rejected" and rejection_reason:
            body += f"\n\nReason given by the recruiter: {rejection_reason}"
        return self.send_email(to_address, f"Update on your application for {offer_title}", body)

    def send_interview_invitation(
        self,
        to_address: str,
        offer_title: str,
        scheduled_at: str,
        mode: str,
        where: Optional[str]
    ) -> bool:
        return self.send_email(
            to_address,
            f"Interview invitation: {offer_title}",
            f"You are invited to a {mode} interview for \"{offer_title}\" on {scheduled_at}.\n"
            f"{'Join: ' if mode == 'video' else 'Location: '}{where or 'to be confirmed'}\n\n"
            "Please confirm your attendance from your Hereoz dashboard."
        )

    def send_interview_confirmed(self, to_address: str, candidate_name: str, scheduled_at: str) -> bool:
        return self.send_email(
            to_address,
            "Interview confirmed",
            f"{candidate_name} confirmed the interview scheduled on {scheduled_at}."
        )

    def send_interview_cancelled(self, to_address: str, scheduled_at: str, reason: str) -> bool:
        return self.send_email(
            to_address,
            "Interview cancelled",
            f"The interview scheduled on {scheduled_at} was cancelled.\n\nReason: {reason}"
        )


def get_notification_service() -> NotificationService:
    """Dependency for FastAPI to get the notification service."""
    return NotificationService()

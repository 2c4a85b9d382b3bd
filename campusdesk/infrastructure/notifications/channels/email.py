# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Email notification channel using async SMTP.

This channel sends email notifications using aiosmtplib. Each message
carries a plain text body with an HTML alternative.

Delivery is best-effort: malformed headers, transport errors and timeouts
become a FAILED ChannelResult, and a missing recipient address or an
unconfigured transport becomes SKIPPED. send() never raises for a delivery problem.
"""

import html
from email.message import EmailMessage
from email.utils import formataddr, make_msgid

import aiosmtplib

from campusdesk.core.config.settings import SMTPSettings
from campusdesk.core.exceptions import DeliveryError
from campusdesk.infrastructure.notifications.channels.base import (
    BaseChannel,
    ChannelResult,
    ChannelType,
    NotificationPayload,
)


class EmailChannel(BaseChannel):
    """Email notification channel using async SMTP."""

    def __init__(self, settings: SMTPSettings, default_subject: str = "New Notification") -> None:
        """Initialize the email channel.

        Args:
            settings: SMTP transport settings.
            default_subject: Subject used when a payload has none.
        """
        super().__init__()
        self._settings = settings
        self._default_subject = default_subject

        if not settings.is_configured:
            self.logger.warning(
                "Email notifications disabled: SMTP_HOST, SMTP_USERNAME, "
                "SMTP_PASSWORD, or SMTP_FROM_EMAIL not set"
            )

    @property
    def channel_type(self) -> ChannelType:
        """Return the channel type."""
        return ChannelType.EMAIL

    async def send(self, payload: NotificationPayload) -> ChannelResult:
        """Send email notification via SMTP.

        Args:
            payload: The notification payload.

        Returns:
            ChannelResult with delivery status.
        """
        if not self._settings.is_configured:
            return self.create_skipped_result("Email channel not configured")

        if not payload.recipient_email:
            return self.create_skipped_result("No recipient email address")

        try:
            message = self._build_email_message(payload)
        except ValueError as e:
            self.logger.error("Cannot build email to %r: %s", payload.recipient_email, e)
            return self.create_failure_result(
                f"Invalid email message: {e}",
                metadata={"recipient": payload.recipient_email},
            )

        try:
            await self._deliver(payload, message)
        except DeliveryError as e:
            self.logger.error(
                "Failed to send email to %s: %s",
                payload.recipient_email,
                e,
            )
            return self.create_failure_result(
                str(e),
                metadata={"recipient": payload.recipient_email},
            )

        self.logger.info("Email sent to %s: %s", payload.recipient_email, message["Subject"])

        return self.create_success_result(
            message_id=message["Message-ID"],
            metadata={"recipient": payload.recipient_email},
        )

    async def send_email(
        self,
        to_address: str | None,
        subject: str,
        body: str,
        recipient_id: str | None = None,
        recipient_kind: str | None = None,
    ) -> ChannelResult:
        """Send a single email outside of a notification dispatch.

        Args:
            to_address: Recipient address; a missing address is skipped.
            subject: Subject line.
            body: Plain text body.
            recipient_id: Optional recipient identifier for logging.
            recipient_kind: Optional recipient population for logging.

        Returns:
            ChannelResult with delivery status.
        """
        return await self.send(
            NotificationPayload(
                message=body,
                subject=subject,
                recipient_id=recipient_id,
                recipient_kind=recipient_kind,
                recipient_email=to_address,
            )
        )

    async def _deliver(self, payload: NotificationPayload, message: EmailMessage) -> None:
        """Hand the message to the SMTP server.

        Raises:
            DeliveryError: If the server rejects the message, the connection
                fails, or the attempt times out.
        """
        settings = self._settings
        try:
            await aiosmtplib.send(
                message,
                hostname=settings.host,
                port=settings.port,
                username=settings.username,
                password=settings.password.get_secret_value() if settings.password else None,
                start_tls=settings.use_tls,
                timeout=settings.timeout,
            )
        except (aiosmtplib.SMTPException, OSError, TimeoutError) as e:
            raise DeliveryError(
                f"SMTP error: {e}",
                details={"recipient": payload.recipient_email},
            ) from e

    def _build_email_message(self, payload: NotificationPayload) -> EmailMessage:
        """Build the MIME message with plain text and HTML bodies."""
        message = EmailMessage()
        message["From"] = formataddr((self._settings.from_name, self._settings.from_email or ""))
        message["To"] = payload.recipient_email
        message["Subject"] = payload.subject or self._default_subject
        message["Message-ID"] = make_msgid(domain=self._sender_domain())

        message.set_content(self._build_plain_text(payload))
        message.add_alternative(self._build_html(payload), subtype="html")
        return message

    def _sender_domain(self) -> str | None:
        from_email = self._settings.from_email or ""
        return from_email.rpartition("@")[2] or None

    def _build_plain_text(self, payload: NotificationPayload) -> str:
        lines = [
            payload.message,
            "",
            "---",
            f"This notification was sent by {self._settings.from_name}.",
        ]
        return "\n".join(lines)

    def _build_html(self, payload: NotificationPayload) -> str:
        subject = html.escape(payload.subject or self._default_subject)
        body = html.escape(payload.message).replace("\n", "<br>")
        sender = html.escape(self._settings.from_name)

        return f"""
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto,
             Arial, sans-serif; line-height: 1.6; color: #1F2937;
             margin: 0; padding: 0; background-color: #F3F4F6;">
    <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
        <div style="background-color: white; border-radius: 8px; padding: 32px;">
            <h1 style="color: #1D4ED8; font-size: 22px; margin: 0 0 24px 0;">{subject}</h1>
            <p style="font-size: 16px; color: #374151; margin: 0 0 16px 0;">{body}</p>
            <p style="border-top: 1px solid #E5E7EB; padding-top: 16px;
                      font-size: 12px; color: #9CA3AF; margin: 24px 0 0 0;">
                This notification was sent by {sender}.
            </p>
        </div>
    </div>
</body>
</html>
        """.strip()

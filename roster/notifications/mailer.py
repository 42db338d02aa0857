"""
Invite email delivery.

Renders the configured invite template and sends it through the Mailgun
messages API.
"""

import logging
from typing import Dict, Optional

import httpx

from ..config import RosterConfig
from .base import NotificationError, NotificationGateway

logger = logging.getLogger(__name__)


def render_template(template: str, values: Dict[str, str]) -> str:
    """Replace every ``{{name}}`` placeholder with its value."""
    for name, value in values.items():
        template = template.replace("{{" + name + "}}", value)
    return template


class InviteEmail:
    """Rendered invite email for one recipient."""

    def __init__(self, config: RosterConfig, email: str, sender_name: str, invite_id: str) -> None:
        values = {
            "sender_name": sender_name,
            "site_name": config.site_name,
            "invite_link": f"{config.invite_url}/{invite_id}",
        }
        self.to = email
        self.format = config.invite_email_format
        self.subject = render_template(config.invite_email_subject, values)
        self.body = render_template(config.invite_email_body, values)

    def as_form(self, sender: str) -> Dict[str, str]:
        """Mailgun form fields."""
        return {
            "from": sender,
            "to": self.to,
            "subject": self.subject,
            "html" if self.format == "html" else "text": self.body,
        }


class MailgunNotifier(NotificationGateway):
    """
    Sends invite emails through Mailgun.

    Example:
        ```python
        notifier = MailgunNotifier(config)
        await notifier.send_invite("jane@example.com", "John", invite.id)
        await notifier.close()
        ```
    """

    DEFAULT_TIMEOUT = 30  # seconds

    def __init__(
        self,
        config: RosterConfig,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config
        self._http_client = http_client

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client for delivery."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.DEFAULT_TIMEOUT)
        return self._http_client

    async def send_invite(self, email: str, sender_name: str, invite_id: str) -> None:
        message = InviteEmail(self.config, email, sender_name, invite_id)
        url = f"{self.config.mailgun_base_url}/{self.config.mailgun_domain}/messages"

        client = await self._get_http_client()
        try:
            response = await client.post(
                url,
                auth=("api", self.config.mailgun_api_key),
                data=message.as_form(self.config.mail_from),
            )
        except httpx.HTTPError as e:
            raise NotificationError(f"Failed to send invite email: {e}") from e

        if response.status_code >= 300:
            raise NotificationError(
                f"Mail service rejected invite email (HTTP {response.status_code})"
            )

        logger.info("Sent invite %s", invite_id)

    async def close(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None


class LogNotifier(NotificationGateway):
    """
    Logs invite links instead of emailing them.

    Used when no mail service is configured, e.g. with the memory backend.
    """

    def __init__(self, config: RosterConfig) -> None:
        self.config = config

    async def send_invite(self, email: str, sender_name: str, invite_id: str) -> None:
        logger.warning(
            "Mail is not configured; invite link is %s/%s",
            self.config.invite_url,
            invite_id,
        )


def create_notifier(config: RosterConfig) -> NotificationGateway:
    """Build the gateway implied by the mail settings."""
    if config.mailgun_enabled:
        return MailgunNotifier(config)
    return LogNotifier(config)

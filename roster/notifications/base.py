"""
Notification gateway interface.
"""

from abc import ABC, abstractmethod


class NotificationError(Exception):
    """The invite notification could not be delivered."""


class NotificationGateway(ABC):
    """Sends invite emails on behalf of the invitation flow."""

    @abstractmethod
    async def send_invite(self, email: str, sender_name: str, invite_id: str) -> None:
        """
        Deliver an invite email.

        Raises:
            NotificationError: If delivery fails
        """

    async def close(self) -> None:
        """Release transport resources."""

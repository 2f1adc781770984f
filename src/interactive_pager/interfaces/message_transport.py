"""Abstract interface for the host messaging transport."""

from abc import ABC, abstractmethod
from typing import Any

from ..core.controls import ControlButton
from ..core.page import RenderedPage


class MessageTransport(ABC):
    """Abstract interface for sending and editing paginated messages.

    Implementations raise EditFailedError when the target message no
    longer exists or can't be edited, and TransportError otherwise.
    """

    @abstractmethod
    async def send_message(
        self, channel_id: int, page: RenderedPage, buttons: tuple[ControlButton, ...]
    ) -> int:
        """Send a new message to a channel.

        Args:
            channel_id: The destination channel ID.
            page: Content to render.
            buttons: Controls to attach (may be empty).

        Returns:
            The ID of the sent message.
        """
        pass

    @abstractmethod
    async def edit_message(
        self,
        channel_id: int,
        message_id: int,
        page: RenderedPage,
        buttons: tuple[ControlButton, ...],
    ) -> None:
        """Edit an existing message in place."""
        pass

    async def update_interaction(
        self,
        interaction: Any,
        channel_id: int,
        message_id: int,
        page: RenderedPage,
        buttons: tuple[ControlButton, ...],
    ) -> None:
        """Update the message as the response to an interaction.

        Transports without interaction objects edit the message directly.
        """
        await self.edit_message(channel_id, message_id, page, buttons)

    async def acknowledge(self, interaction: Any) -> None:
        """Acknowledge an interaction without changing the message."""
        pass

    @abstractmethod
    async def send_ephemeral(self, interaction: Any, user_id: int, text: str) -> None:
        """Reply to an interaction with a message only its author sees."""
        pass

    @abstractmethod
    async def delete_message(self, channel_id: int, message_id: int) -> None:
        """Delete a message."""
        pass

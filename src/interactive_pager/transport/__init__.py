"""Host transports for the interactive pager."""

from .discord_transport import DiscordTransport

__all__ = ["DiscordTransport"]

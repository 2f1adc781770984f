"""discord.py-based message transport."""

import logging
from typing import Any

import discord
from discord.ext import commands

from ..core.controls import ControlButton
from ..core.page import RenderedPage
from ..errors import EditFailedError, TransportError
from ..interfaces import MessageTransport

logger = logging.getLogger(__name__)

BUTTON_STYLES = {
    "primary": discord.ButtonStyle.primary,
    "danger": discord.ButtonStyle.danger,
}


def build_embed(rendered: RenderedPage) -> discord.Embed:
    """Convert a rendered page into a Discord embed."""
    page = rendered.page
    embed = discord.Embed(
        title=page.title,
        description=page.description,
        url=page.url,
        timestamp=page.timestamp,
        color=page.color,
    )
    if page.thumbnail_url:
        embed.set_thumbnail(url=page.thumbnail_url)
    if page.image_url:
        embed.set_image(url=page.image_url)
    for item in page.fields:
        embed.add_field(name=item.name, value=item.value, inline=item.inline)
    if page.author is not None:
        embed.set_author(name=page.author.name, url=page.author.url, icon_url=page.author.icon_url)
    if page.footer is not None:
        embed.set_footer(text=page.footer.text, icon_url=page.footer.icon_url)
    return embed


def build_view(buttons: tuple[ControlButton, ...]) -> discord.ui.View | None:
    """
    Convert rendered controls into a component view.

    The view is stopped before it is returned so discord.py doesn't track
    it; activations are routed through the callback registry instead.

    Returns:
        The view, or None when there are no buttons.
    """
    if not buttons:
        return None

    view = discord.ui.View(timeout=None)
    for button in buttons:
        view.add_item(
            discord.ui.Button(
                style=BUTTON_STYLES.get(button.style, discord.ButtonStyle.primary),
                emoji=button.label,
                custom_id=button.label,
                disabled=button.disabled,
            )
        )
    view.stop()
    return view


class DiscordTransport(MessageTransport):
    """Message transport using a discord.py bot."""

    def __init__(self, bot: commands.Bot):
        """
        Initialize the transport.

        Args:
            bot: The bot used to reach channels and receive events.
        """
        self.bot = bot
        self._service = None

    async def _get_channel(self, channel_id: int) -> discord.abc.Messageable:
        channel = self.bot.get_channel(channel_id)
        if channel is not None:
            return channel
        try:
            return await self.bot.fetch_channel(channel_id)
        except discord.HTTPException as e:
            raise TransportError(f"Channel {channel_id} unavailable: {e}") from e

    async def send_message(
        self, channel_id: int, page: RenderedPage, buttons: tuple[ControlButton, ...]
    ) -> int:
        channel = await self._get_channel(channel_id)
        kwargs: dict[str, Any] = {"content": page.content, "embed": build_embed(page)}
        view = build_view(buttons)
        if view is not None:
            kwargs["view"] = view
        try:
            message = await channel.send(**kwargs)
        except discord.HTTPException as e:
            raise TransportError(f"Failed to send to channel {channel_id}: {e}") from e
        return message.id

    async def edit_message(
        self,
        channel_id: int,
        message_id: int,
        page: RenderedPage,
        buttons: tuple[ControlButton, ...],
    ) -> None:
        channel = await self._get_channel(channel_id)
        message = channel.get_partial_message(message_id)
        try:
            await message.edit(content=page.content, embed=build_embed(page), view=build_view(buttons))
        except (discord.NotFound, discord.Forbidden) as e:
            raise EditFailedError(message_id, str(e)) from e
        except discord.HTTPException as e:
            raise TransportError(f"Failed to edit message {message_id}: {e}") from e

    async def update_interaction(
        self,
        interaction: Any,
        channel_id: int,
        message_id: int,
        page: RenderedPage,
        buttons: tuple[ControlButton, ...],
    ) -> None:
        if interaction is None or interaction.response.is_done():
            await self.edit_message(channel_id, message_id, page, buttons)
            return
        try:
            await interaction.response.edit_message(
                content=page.content, embed=build_embed(page), view=build_view(buttons)
            )
        except (discord.NotFound, discord.Forbidden) as e:
            raise EditFailedError(message_id, str(e)) from e
        except discord.HTTPException as e:
            raise TransportError(f"Failed to update message {message_id}: {e}") from e

    async def acknowledge(self, interaction: Any) -> None:
        if interaction is None or interaction.response.is_done():
            return
        try:
            await interaction.response.defer()
        except discord.HTTPException as e:
            raise TransportError(f"Failed to acknowledge interaction: {e}") from e

    async def send_ephemeral(self, interaction: Any, user_id: int, text: str) -> None:
        if interaction is None:
            logger.debug(f"No interaction to reply to for user {user_id}")
            return
        try:
            if interaction.response.is_done():
                await interaction.followup.send(text, ephemeral=True)
            else:
                await interaction.response.send_message(text, ephemeral=True)
        except discord.HTTPException as e:
            raise TransportError(f"Failed to reply to user {user_id}: {e}") from e

    async def delete_message(self, channel_id: int, message_id: int) -> None:
        channel = await self._get_channel(channel_id)
        try:
            await channel.get_partial_message(message_id).delete()
        except discord.HTTPException as e:
            raise TransportError(f"Failed to delete message {message_id}: {e}") from e

    def attach(self, service) -> None:
        """
        Route the bot's events into an InteractiveService.

        Args:
            service: Service receiving component activations and replies.
        """
        self._service = service
        self.bot.add_listener(self._on_interaction, "on_interaction")
        self.bot.add_listener(self._on_message, "on_message")

    def detach(self) -> None:
        """Stop routing events."""
        if self._service is None:
            return
        self.bot.remove_listener(self._on_interaction, "on_interaction")
        self.bot.remove_listener(self._on_message, "on_message")
        self._service = None

    async def _on_interaction(self, interaction: discord.Interaction) -> None:
        if interaction.type is not discord.InteractionType.component or interaction.message is None:
            return
        custom_id = (interaction.data or {}).get("custom_id")
        if not custom_id:
            return
        await self._service.on_interaction(
            interaction.message.id, interaction.user.id, custom_id, interaction=interaction
        )

    async def _on_message(self, message: discord.Message) -> None:
        if message.author.bot:
            return
        self._service.on_text_reply(
            message.channel.id, message.author.id, message.content, message_id=message.id
        )

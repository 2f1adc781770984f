"""InteractiveService - routes host events to paginated sessions."""

import logging

from .config import Config
from .core import (
    Activation,
    CallbackRegistry,
    ControlSet,
    Criterion,
    Page,
    PaginatedSession,
    PaginatorOptions,
    ReplyWaiter,
    TextReply,
)
from .errors import TransportError
from .interfaces import MessageTransport

logger = logging.getLogger(__name__)


class InteractiveService:
    """Entry point for displaying paginated content and handling activations.

    Uses dependency injection for the transport, registry and reply waiter,
    so several services (or tests) never share hidden state.
    """

    def __init__(
        self,
        transport: MessageTransport,
        registry: CallbackRegistry | None = None,
        reply_waiter: ReplyWaiter | None = None,
        config: Config | None = None,
    ):
        """
        Initialize the service.

        Args:
            transport: Transport used to send and edit messages.
            registry: Registry of live messages (a fresh one if None).
            reply_waiter: Waiter for free-text replies (a fresh one if None).
            config: Default session options (uses defaults if None).
        """
        self.transport = transport
        self.registry = registry if registry is not None else CallbackRegistry()
        self.reply_waiter = reply_waiter if reply_waiter is not None else ReplyWaiter()
        self.config = config or Config()

    async def display(
        self,
        pages: list[Page] | tuple[Page, ...],
        channel_id: int,
        owner_id: int,
        defaults: Page | None = None,
        options: PaginatorOptions | None = None,
        controls: ControlSet | None = None,
        criterion: Criterion[Activation] | None = None,
        reuse_message_id: int | None = None,
    ) -> PaginatedSession:
        """
        Show pages as a single navigable message.

        Args:
            pages: Pages to display, in order.
            channel_id: Channel to post in.
            owner_id: User who ran the command; the only one allowed to
                navigate unless a criterion is given.
            defaults: Fallback values for every page.
            options: Session options (from the service config if None).
            controls: Controls to offer (derived from the page count if None).
            criterion: Custom authorization for activations.
            reuse_message_id: Existing message to render into.

        Returns:
            The session handle.
        """
        session = PaginatedSession(
            registry=self.registry,
            transport=self.transport,
            reply_waiter=self.reply_waiter,
            pages=pages,
            channel_id=channel_id,
            owner_id=owner_id,
            defaults=defaults,
            options=options or self.config.to_options(),
            controls=controls,
            criterion=criterion,
        )
        await session.display(reuse_message_id=reuse_message_id)
        return session

    async def on_interaction(
        self, message_id: int, user_id: int, control: str, interaction=None
    ) -> bool:
        """
        Handle a user activating a control.

        Args:
            message_id: Message the control belongs to.
            user_id: The acting user.
            control: Control identifier (label or name).
            interaction: Host interaction object, passed back to the transport.

        Returns:
            True if a live session handled the activation.
        """
        session = self.registry.lookup(message_id)
        if session is None:
            return False

        activation = Activation(
            message_id=message_id, user_id=user_id, control=control, interaction=interaction
        )

        if not session.is_authorized(activation):
            logger.info(f"[{message_id}] Rejected activation from user {user_id}")
            try:
                await self.transport.send_ephemeral(
                    interaction, user_id, session.options.not_command_user_text
                )
            except TransportError as e:
                logger.warning(f"[{message_id}] Failed to send rejection: {e}")
            return False

        handled = await session.handle(activation)
        if not handled:
            # Unanswered interactions show as failed to the user
            try:
                await self.transport.acknowledge(interaction)
            except TransportError as e:
                logger.warning(f"[{message_id}] Failed to acknowledge activation: {e}")
        return handled

    def on_text_reply(
        self, channel_id: int, user_id: int, content: str, message_id: int | None = None
    ) -> bool:
        """
        Offer a posted message to pending reply waits.

        Returns:
            True if a pending wait consumed the message.
        """
        reply = TextReply(
            channel_id=channel_id, user_id=user_id, content=content, message_id=message_id
        )
        return self.reply_waiter.offer(reply)

    def is_interactive(self, message_id: int) -> bool:
        """Check if a message still accepts activations."""
        return self.registry.contains(message_id)

    async def close(self) -> None:
        """Stop handling every live message without editing it."""
        message_ids = self.registry.message_ids()
        logger.info(f"Closing {len(message_ids)} live session(s)")
        for message_id in message_ids:
            session = self.registry.lookup(message_id)
            if session is not None:
                await session.detach()

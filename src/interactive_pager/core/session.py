"""Paginated session: page state, transitions and lifecycle of one message."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..errors import EditFailedError, TransportError
from .controls import Control, ControlLabels, ControlSet, compute_controls
from .criteria import Criterion, from_user, in_channel, is_integer, parse_int
from .page import Page, RenderedPage, render_page
from .registry import CallbackRegistry
from .reply_waiter import ReplyWaiter

if TYPE_CHECKING:
    from ..interfaces import MessageTransport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaginatorOptions:
    """Per-session appearance and lifecycle options.

    Attributes:
        labels: Label of each control.
        timeout: Seconds before the session stops on its own (None for never).
        footer_format: Footer template, given the page and page count.
        jump_timeout: Seconds to wait for the page number after a jump.
        not_command_user_text: Rejection shown to unauthorized users.
        content: Plain text shown above the page.
    """

    labels: ControlLabels = field(default_factory=ControlLabels)
    timeout: float | None = 600.0
    footer_format: str = "Page {page}/{count}"
    jump_timeout: float = 15.0
    not_command_user_text: str = "You can't use this interaction."
    content: str | None = None


@dataclass(frozen=True)
class Activation:
    """A user activating a control on a message."""

    message_id: int
    user_id: int
    control: str
    interaction: Any = None


class PaginatedSession:
    """One live paginated message and its navigation state.

    State only changes through activations, jump replies and termination,
    each serialized on the session's own lock.
    """

    def __init__(
        self,
        registry: CallbackRegistry,
        transport: "MessageTransport",
        reply_waiter: ReplyWaiter,
        pages: list[Page] | tuple[Page, ...],
        channel_id: int,
        owner_id: int,
        defaults: Page | None = None,
        options: PaginatorOptions | None = None,
        controls: ControlSet | None = None,
        criterion: Criterion[Activation] | None = None,
    ):
        self.registry = registry
        self.transport = transport
        self.reply_waiter = reply_waiter
        self.pages = tuple(pages)
        self.channel_id = channel_id
        self.owner_id = owner_id
        self.defaults = defaults or Page()
        self.options = options or PaginatorOptions()
        self.controls = controls or ControlSet.for_page_count(len(self.pages))
        self.criterion = criterion or from_user(owner_id)

        self._page = 1
        self._message_id: int | None = None
        self._terminated = False
        self._lock = asyncio.Lock()
        self._timeout_task: asyncio.Task | None = None
        self._jump_task: asyncio.Task | None = None

    @property
    def current_page(self) -> int:
        return self._page

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def message_id(self) -> int | None:
        return self._message_id

    @property
    def is_interactive(self) -> bool:
        """Whether this session ever accepts activations."""
        return self.page_count > 1

    @property
    def is_active(self) -> bool:
        """Whether the session is registered and accepting activations."""
        return (
            not self._terminated
            and self._message_id is not None
            and self.registry.lookup(self._message_id) is self
        )

    @property
    def awaiting_jump(self) -> bool:
        return self._jump_task is not None and not self._jump_task.done()

    def is_authorized(self, activation: Activation) -> bool:
        """Check if the acting user may drive this session."""
        return self.criterion.matches(activation)

    def render(self) -> RenderedPage:
        """Build the content for the current page."""
        return render_page(
            self.pages,
            self.defaults,
            self._page,
            self.options.footer_format,
            content=self.options.content,
        )

    def buttons(self, enabled: ControlSet | None = None):
        """Build the rendered buttons; nothing for a non-interactive session."""
        if not self.is_interactive:
            return ()
        if enabled is None:
            enabled = compute_controls(self._page, self.page_count, self.controls)
        return enabled.buttons(self.options.labels, configured=self.controls)

    async def display(self, reuse_message_id: int | None = None) -> None:
        """
        Show the first page and start accepting activations.

        Args:
            reuse_message_id: Existing message to render into instead of
                sending a new one. Any session live on it is replaced.

        Raises:
            TransportError: If the message can't be sent or edited.
            DuplicateRegistrationError: If another session claimed the
                message meanwhile.
        """
        page = self.render()
        buttons = self.buttons()

        if reuse_message_id is None:
            self._message_id = await self.transport.send_message(self.channel_id, page, buttons)
        else:
            await self.transport.edit_message(self.channel_id, reuse_message_id, page, buttons)
            previous = self.registry.deregister(reuse_message_id)
            if previous is not None and previous is not self:
                await previous.detach()
            self._message_id = reuse_message_id

        logger.info(
            f"Displayed {self.page_count} page(s) in message {self._message_id} "
            f"for user {self.owner_id}"
        )

        if not self.is_interactive:
            return

        self.registry.register(self._message_id, self)

        if self.options.timeout is not None:
            self._timeout_task = asyncio.create_task(self._expire(self.options.timeout))
            self._timeout_task.add_done_callback(self._log_task_failure)

    async def handle(self, activation: Activation) -> bool:
        """
        Apply an authorized activation.

        Returns:
            True if the activation was handled.
        """
        control = self.options.labels.resolve(activation.control)
        if control is None:
            logger.debug(f"[{self._message_id}] Unknown control: {activation.control!r}")
            return False

        if not self.controls.is_enabled(control):
            logger.debug(f"[{self._message_id}] Control not offered: {control.value}")
            return False

        if control is Control.STOP:
            return await self.stop(activation)

        if control is Control.JUMP:
            return await self._start_jump(activation)

        async with self._lock:
            if not self.is_active:
                return False

            self._page = self._target_page(control)
            logger.debug(f"[{self._message_id}] {control.value} -> page {self._page}/{self.page_count}")
            await self._render_update(activation)

        return True

    def _target_page(self, control: Control) -> int:
        if control is Control.FIRST:
            return 1
        if control is Control.BACK:
            return max(1, self._page - 1)
        if control is Control.NEXT:
            return min(self.page_count, self._page + 1)
        if control is Control.LAST:
            return self.page_count
        return self._page

    async def stop(self, activation: Activation | None = None) -> bool:
        """
        Terminate the session and disable its controls.

        Safe to call repeatedly and concurrently; only the first call
        tears the session down.

        Args:
            activation: The stop activation, if a user triggered it.

        Returns:
            True if this call terminated the session.
        """
        async with self._lock:
            if self._terminated or self._message_id is None:
                return False

            self._terminated = True
            if not self.registry.deregister_if(self._message_id, self):
                self._cancel_tasks()
                return False

            self._cancel_tasks()
            reason = "stopped by user" if activation is not None else "timed out"
            logger.info(f"[{self._message_id}] Session {reason} on page {self._page}/{self.page_count}")

            try:
                await self._push(activation, self.buttons(ControlSet.disabled()))
            except TransportError as e:
                logger.debug(f"[{self._message_id}] Final edit skipped: {e}")

        return True

    async def detach(self) -> None:
        """Stop handling the message without editing it."""
        async with self._lock:
            self._terminated = True
            self._cancel_tasks()
            if self._message_id is not None:
                self.registry.deregister_if(self._message_id, self)

    async def _expire(self, timeout: float) -> None:
        await asyncio.sleep(timeout)
        if self._message_id is None or not self.registry.contains(self._message_id):
            return
        await self.stop()

    async def _start_jump(self, activation: Activation) -> bool:
        if not self.is_active:
            return False

        try:
            await self.transport.acknowledge(activation.interaction)
        except TransportError as e:
            logger.warning(f"[{self._message_id}] Failed to acknowledge jump: {e}")

        if self.awaiting_jump:
            logger.debug(f"[{self._message_id}] Jump already pending")
            return True

        self._jump_task = asyncio.create_task(self._await_jump())
        self._jump_task.add_done_callback(self._log_task_failure)
        return True

    async def _await_jump(self) -> None:
        criterion = from_user(self.owner_id) & in_channel(self.channel_id) & is_integer()
        reply = await self.reply_waiter.wait_for(criterion, timeout=self.options.jump_timeout)
        if reply is None:
            return

        requested = parse_int(reply.content)
        if requested is None:
            return

        async with self._lock:
            if not self.is_active:
                return
            if requested < 1 or requested > self.page_count or requested == self._page:
                logger.debug(f"[{self._message_id}] Ignoring jump to page {requested}")
                return

            if reply.message_id is not None:
                await self._delete_reply(reply.channel_id, reply.message_id)

            self._page = requested
            logger.debug(f"[{self._message_id}] jump -> page {self._page}/{self.page_count}")
            await self._render_update(None)

    async def _delete_reply(self, channel_id: int, message_id: int) -> None:
        try:
            await self.transport.delete_message(channel_id, message_id)
        except TransportError as e:
            logger.debug(f"Could not delete jump reply {message_id}: {e}")

    async def _push(self, activation: Activation | None, buttons) -> None:
        """Send the current page, as an interaction response if there is one."""
        page = self.render()
        if activation is not None:
            await self.transport.update_interaction(
                activation.interaction, self.channel_id, self._message_id, page, buttons
            )
        else:
            await self.transport.edit_message(self.channel_id, self._message_id, page, buttons)

    async def _render_update(self, activation: Activation | None) -> None:
        try:
            await self._push(activation, self.buttons())
        except EditFailedError as e:
            logger.warning(f"[{self._message_id}] Message gone, stopping session: {e}")
            self._terminated = True
            self.registry.deregister_if(self._message_id, self)
            self._cancel_tasks()
        except TransportError as e:
            logger.warning(f"[{self._message_id}] Failed to render page {self._page}: {e}")

    def _cancel_tasks(self) -> None:
        current = asyncio.current_task()
        for task in (self._timeout_task, self._jump_task):
            if task is not None and task is not current and not task.done():
                task.cancel()

    def _log_task_failure(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"[{self._message_id}] Background task failed: {error!r}", exc_info=error)

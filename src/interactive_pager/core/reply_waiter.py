"""One-shot waits for free-text replies."""

import asyncio
import logging
from dataclasses import dataclass

from .criteria import Criterion

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextReply:
    """A text message posted by a user."""

    channel_id: int
    user_id: int
    content: str
    message_id: int | None = None


@dataclass
class _PendingWait:
    criterion: Criterion[TextReply]
    future: asyncio.Future


class ReplyWaiter:
    """Hands incoming text replies to whoever is waiting for one."""

    def __init__(self):
        self._pending: list[_PendingWait] = []

    async def wait_for(self, criterion: Criterion[TextReply], timeout: float) -> TextReply | None:
        """
        Wait for the next reply matching ``criterion``.

        Args:
            criterion: Filter the reply must satisfy.
            timeout: Maximum seconds to wait.

        Returns:
            The matching reply, or None on timeout.
        """
        loop = asyncio.get_running_loop()
        pending = _PendingWait(criterion=criterion, future=loop.create_future())
        self._pending.append(pending)
        try:
            return await asyncio.wait_for(pending.future, timeout=timeout)
        except asyncio.TimeoutError:
            logger.debug(f"No reply matching {criterion!r} within {timeout}s")
            return None
        finally:
            if pending in self._pending:
                self._pending.remove(pending)

    def offer(self, reply: TextReply) -> bool:
        """
        Deliver a reply to the oldest waiter it matches.

        Returns:
            True if a waiter consumed the reply.
        """
        for pending in list(self._pending):
            if pending.future.done():
                continue
            if pending.criterion.matches(reply):
                self._pending.remove(pending)
                pending.future.set_result(reply)
                return True
        return False

    def pending_count(self) -> int:
        """Get the number of waits still pending."""
        return len(self._pending)

"""Registry of live interactive messages."""

import logging
import threading
from typing import Any

from ..errors import DuplicateRegistrationError

logger = logging.getLogger(__name__)


class CallbackRegistry:
    """Maps a rendered message to the session handling its controls.

    The registry is the single source of truth for whether a message is
    still interactive. All methods are safe to call concurrently from
    event handlers, timer tasks and host threads.
    """

    def __init__(self):
        self._callbacks: dict[int, Any] = {}
        self._lock = threading.Lock()

    def register(self, message_id: int, handler: Any) -> None:
        """
        Register a handler for a message.

        Args:
            message_id: The rendered message ID.
            handler: The session handling activations on that message.

        Raises:
            DuplicateRegistrationError: If the message already has a handler.
        """
        with self._lock:
            if message_id in self._callbacks:
                raise DuplicateRegistrationError(message_id)
            self._callbacks[message_id] = handler
        logger.debug(f"Registered callback for message {message_id}")

    def deregister(self, message_id: int) -> Any | None:
        """
        Remove the handler for a message, if any.

        Returns:
            The removed handler, or None if nothing was registered.
        """
        with self._lock:
            handler = self._callbacks.pop(message_id, None)
        if handler is not None:
            logger.debug(f"Deregistered callback for message {message_id}")
        return handler

    def deregister_if(self, message_id: int, handler: Any) -> bool:
        """
        Remove the entry only if ``handler`` is the live handler.

        Returns:
            True if the entry was removed.
        """
        with self._lock:
            if self._callbacks.get(message_id) is not handler:
                return False
            del self._callbacks[message_id]
        logger.debug(f"Deregistered callback for message {message_id}")
        return True

    def lookup(self, message_id: int) -> Any | None:
        """Get the handler for a message, or None."""
        with self._lock:
            return self._callbacks.get(message_id)

    def contains(self, message_id: int) -> bool:
        """Check if a message is still interactive."""
        with self._lock:
            return message_id in self._callbacks

    def message_ids(self) -> list[int]:
        """Get IDs of all live messages."""
        with self._lock:
            return list(self._callbacks.keys())

    def __len__(self) -> int:
        with self._lock:
            return len(self._callbacks)

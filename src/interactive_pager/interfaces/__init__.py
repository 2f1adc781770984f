"""Abstract interfaces for the interactive pager."""

from .message_transport import MessageTransport

__all__ = ["MessageTransport"]

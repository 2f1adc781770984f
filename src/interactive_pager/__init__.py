"""Interactive pagination for chat bots.

Renders multi-page content as one message navigated with buttons, and
routes button activations back to the session that owns the message.
"""

from .config import Config, load_config
from .core import (
    Activation,
    CallbackRegistry,
    Control,
    ControlLabels,
    ControlSet,
    Criterion,
    EmbedField,
    Page,
    PageAuthor,
    PageFooter,
    PaginatedSession,
    PaginatorOptions,
    ReplyWaiter,
    TextReply,
)
from .dispatcher import InteractiveService
from .errors import DuplicateRegistrationError, EditFailedError, PaginatorError, TransportError

__version__ = "0.1.0"
__all__ = [
    "Config",
    "load_config",
    "Activation",
    "CallbackRegistry",
    "Control",
    "ControlLabels",
    "ControlSet",
    "Criterion",
    "EmbedField",
    "Page",
    "PageAuthor",
    "PageFooter",
    "PaginatedSession",
    "PaginatorOptions",
    "ReplyWaiter",
    "TextReply",
    "InteractiveService",
    "DuplicateRegistrationError",
    "EditFailedError",
    "PaginatorError",
    "TransportError",
]

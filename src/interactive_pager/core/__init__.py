"""Core components for the interactive pager."""

from .controls import Control, ControlButton, ControlLabels, ControlSet, compute_controls
from .criteria import Criterion, all_of, always, from_user, in_channel, is_integer
from .page import EmbedField, Page, PageAuthor, PageFooter, RenderedPage, merge_page, render_page
from .registry import CallbackRegistry
from .reply_waiter import ReplyWaiter, TextReply
from .session import Activation, PaginatedSession, PaginatorOptions

__all__ = [
    "Control",
    "ControlButton",
    "ControlLabels",
    "ControlSet",
    "compute_controls",
    "Criterion",
    "all_of",
    "always",
    "from_user",
    "in_channel",
    "is_integer",
    "EmbedField",
    "Page",
    "PageAuthor",
    "PageFooter",
    "RenderedPage",
    "merge_page",
    "render_page",
    "CallbackRegistry",
    "ReplyWaiter",
    "TextReply",
    "Activation",
    "PaginatedSession",
    "PaginatorOptions",
]

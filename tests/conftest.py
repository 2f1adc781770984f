"""Pytest configuration and fixtures."""

import asyncio

import pytest

from interactive_pager.core import (
    CallbackRegistry,
    EmbedField,
    Page,
    PaginatorOptions,
    ReplyWaiter,
)
from interactive_pager.errors import EditFailedError


class MockTransport:
    """In-memory transport recording every message operation."""

    def __init__(self):
        self._next_id = 1000
        self.sent = []
        self.renders = []  # (kind, message_id, page, buttons), in order
        self.acknowledged = []
        self.ephemerals = []
        self.deleted = []
        self.deleted_messages = set()
        self.edit_delay = 0.0
        self.edit_error = None

    async def send_message(self, channel_id, page, buttons):
        self._next_id += 1
        self.sent.append((channel_id, self._next_id, page, buttons))
        return self._next_id

    async def _render(self, kind, message_id, page, buttons):
        if self.edit_delay:
            await asyncio.sleep(self.edit_delay)
        if message_id in self.deleted_messages:
            raise EditFailedError(message_id, "Unknown Message")
        if self.edit_error is not None:
            raise self.edit_error
        self.renders.append((kind, message_id, page, buttons))

    async def edit_message(self, channel_id, message_id, page, buttons):
        await self._render("edit", message_id, page, buttons)

    async def update_interaction(self, interaction, channel_id, message_id, page, buttons):
        await self._render("interaction", message_id, page, buttons)

    async def acknowledge(self, interaction):
        self.acknowledged.append(interaction)

    async def send_ephemeral(self, interaction, user_id, text):
        self.ephemerals.append((user_id, text))

    async def delete_message(self, channel_id, message_id):
        self.deleted.append((channel_id, message_id))

    def last_title(self):
        """Title shown by the most recent render."""
        return self.renders[-1][2].page.title

    def last_buttons(self):
        """Buttons attached by the most recent render."""
        return self.renders[-1][3]


@pytest.fixture
def transport():
    return MockTransport()


@pytest.fixture
def registry():
    return CallbackRegistry()


@pytest.fixture
def reply_waiter():
    return ReplyWaiter()


@pytest.fixture
def options():
    """Options with short waits so lifecycle tests run quickly."""
    return PaginatorOptions(timeout=None, jump_timeout=0.2)


@pytest.fixture
def sample_pages():
    """Five pages with distinct titles."""
    return [Page(title=f"Result {i}", description=f"Body {i}") for i in range(1, 6)]


@pytest.fixture
def sample_defaults():
    """Shared defaults for a search result."""
    return Page(
        description="Image search",
        color=0x2F3136,
        fields=[EmbedField(name="Source", value="web", inline=True)],
    )

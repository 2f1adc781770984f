"""Integration tests for InteractiveService."""

import asyncio

import pytest

from interactive_pager.config import Config
from interactive_pager.core import ControlLabels, ControlSet, Page, PaginatorOptions
from interactive_pager.core.criteria import Criterion
from interactive_pager.dispatcher import InteractiveService

OWNER = 1
CHANNEL = 10
LABELS = ControlLabels()


class TestInteractiveService:
    """Integration tests for InteractiveService."""

    @pytest.fixture
    def service(self, transport):
        """Create a service with the mock transport and quick timeouts."""
        config = Config(timeout_seconds=None, jump_timeout_seconds=0.2)
        return InteractiveService(transport, config=config)

    @pytest.mark.asyncio
    async def test_display_registers_session(self, service, transport, sample_pages):
        """display sends the first page and makes the message interactive."""
        session = await service.display(sample_pages, CHANNEL, OWNER)

        assert service.is_interactive(session.message_id)
        assert transport.sent[0][2].page.footer.text == "Page 1/5"

    @pytest.mark.asyncio
    async def test_defaults_merged_into_pages(self, service, transport, sample_defaults):
        """Shared defaults fill unset page attributes."""
        pages = [Page(title="a"), Page(title="b", description="own")]
        session = await service.display(pages, CHANNEL, OWNER, defaults=sample_defaults)

        first = transport.sent[0][2].page
        assert first.description == "Image search"
        assert first.fields == sample_defaults.fields

        await service.on_interaction(session.message_id, OWNER, LABELS.next)
        second = transport.renders[-1][2].page
        assert second.description == "own"
        assert second.color == sample_defaults.color

    @pytest.mark.asyncio
    async def test_unknown_message_unhandled(self, service):
        """Activations on unknown messages aren't handled."""
        assert await service.on_interaction(12345, OWNER, LABELS.next) is False

    @pytest.mark.asyncio
    async def test_single_page_unhandled(self, service, transport):
        """A single page result never handles activations."""
        session = await service.display([Page(title="only")], CHANNEL, OWNER)

        assert service.is_interactive(session.message_id) is False
        assert await service.on_interaction(session.message_id, OWNER, LABELS.next) is False
        assert transport.renders == []

    @pytest.mark.asyncio
    async def test_owner_navigates(self, service, sample_pages):
        """The command user can navigate."""
        session = await service.display(sample_pages, CHANNEL, OWNER)

        assert await service.on_interaction(session.message_id, OWNER, LABELS.next) is True
        assert await service.on_interaction(session.message_id, OWNER, LABELS.last) is True
        assert session.current_page == 5

    @pytest.mark.asyncio
    async def test_other_user_rejected(self, service, transport, sample_pages):
        """Other users get an ephemeral rejection and change nothing."""
        session = await service.display(sample_pages, CHANNEL, OWNER)

        handled = await service.on_interaction(session.message_id, 2, LABELS.next)

        assert handled is False
        assert session.current_page == 1
        assert transport.ephemerals == [(2, "You can't use this interaction.")]
        assert transport.renders == []

    @pytest.mark.asyncio
    async def test_custom_rejection_text(self, service, transport, sample_pages):
        """Rejection text comes from the session options."""
        options = PaginatorOptions(timeout=None, not_command_user_text="Not yours!")
        session = await service.display(sample_pages, CHANNEL, OWNER, options=options)

        await service.on_interaction(session.message_id, 2, LABELS.stop)

        assert transport.ephemerals == [(2, "Not yours!")]
        assert service.is_interactive(session.message_id)

    @pytest.mark.asyncio
    async def test_custom_criterion(self, service, sample_pages):
        """A custom criterion decides who may navigate."""
        moderators = {2, 3}
        criterion = Criterion(lambda activation: activation.user_id in moderators, name="moderators")
        session = await service.display(sample_pages, CHANNEL, OWNER, criterion=criterion)

        assert await service.on_interaction(session.message_id, OWNER, LABELS.next) is False
        assert await service.on_interaction(session.message_id, 3, LABELS.next) is True
        assert session.current_page == 2

    @pytest.mark.asyncio
    async def test_unhandled_activation_acknowledged(self, service, transport, sample_pages):
        """Activations a live session can't apply are still acknowledged."""
        session = await service.display(sample_pages[:2], CHANNEL, OWNER)

        assert await service.on_interaction(session.message_id, OWNER, "info", interaction="ctx") is False
        assert await service.on_interaction(session.message_id, OWNER, "last", interaction="ctx2") is False

        assert transport.acknowledged == ["ctx", "ctx2"]
        assert transport.renders == []

    @pytest.mark.asyncio
    async def test_stop_then_unhandled(self, service, transport, sample_pages):
        """After stop the message is no longer interactive."""
        session = await service.display(sample_pages, CHANNEL, OWNER)

        assert await service.on_interaction(session.message_id, OWNER, LABELS.stop) is True
        assert await service.on_interaction(session.message_id, OWNER, LABELS.next) is False
        assert all(b.disabled for b in transport.last_buttons())

    @pytest.mark.asyncio
    async def test_concurrent_next(self, service, transport, sample_pages):
        """Concurrent activations are applied one after another."""
        session = await service.display(sample_pages, CHANNEL, OWNER)
        transport.edit_delay = 0.01

        await asyncio.gather(
            service.on_interaction(session.message_id, OWNER, LABELS.next),
            service.on_interaction(session.message_id, OWNER, LABELS.next),
        )

        assert session.current_page == 3

    @pytest.mark.asyncio
    async def test_jump_through_text_reply(self, service, transport, sample_pages):
        """A jump is completed by the owner's numeric reply."""
        session = await service.display(sample_pages, CHANNEL, OWNER)

        assert await service.on_interaction(session.message_id, OWNER, LABELS.jump) is True
        await asyncio.sleep(0.02)
        assert service.on_text_reply(CHANNEL, OWNER, "4", message_id=77) is True
        await asyncio.sleep(0.02)

        assert session.current_page == 4
        assert len(transport.renders) == 1
        assert transport.deleted == [(CHANNEL, 77)]

    @pytest.mark.asyncio
    async def test_text_reply_without_jump(self, service):
        """Text replies are ignored when nobody waits."""
        assert service.on_text_reply(CHANNEL, OWNER, "3") is False

    @pytest.mark.asyncio
    async def test_reuse_message(self, service, transport, sample_pages):
        """Redisplaying into a message hands it to the new session."""
        old = await service.display(sample_pages, CHANNEL, OWNER)
        new = await service.display(
            sample_pages[:2], CHANNEL, OWNER, reuse_message_id=old.message_id
        )

        assert service.registry.lookup(old.message_id) is new
        await service.on_interaction(new.message_id, OWNER, LABELS.next)
        assert new.current_page == 2
        assert old.current_page == 1

    @pytest.mark.asyncio
    async def test_explicit_controls(self, service, transport, sample_pages):
        """Explicit controls limit what is rendered."""
        controls = ControlSet(first=False, last=False, jump=False)
        await service.display(sample_pages, CHANNEL, OWNER, controls=controls)

        labels = [b.label for b in transport.sent[0][3]]
        assert labels == [LABELS.back, LABELS.next, LABELS.stop]

    @pytest.mark.asyncio
    async def test_timeout_from_config(self, transport, sample_pages):
        """The configured timeout stops sessions."""
        service = InteractiveService(transport, config=Config(timeout_seconds=0.02))
        session = await service.display(sample_pages, CHANNEL, OWNER)

        await asyncio.sleep(0.1)

        assert service.is_interactive(session.message_id) is False
        assert all(b.disabled for b in transport.last_buttons())

    @pytest.mark.asyncio
    async def test_close_detaches_sessions(self, service, transport, sample_pages):
        """close stops handling every session without editing."""
        first = await service.display(sample_pages, CHANNEL, OWNER)
        second = await service.display(sample_pages, CHANNEL, OWNER)

        await service.close()

        assert len(service.registry) == 0
        assert transport.renders == []
        assert await service.on_interaction(first.message_id, OWNER, LABELS.next) is False
        assert second.is_active is False

    def test_services_do_not_share_registry(self, transport):
        """Each service gets its own registry unless one is injected."""
        assert InteractiveService(transport).registry is not InteractiveService(transport).registry

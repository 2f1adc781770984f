"""Error types for the interactive pager."""


class PaginatorError(Exception):
    """Base class for all paginator errors."""

    pass


class DuplicateRegistrationError(PaginatorError):
    """A message already has a live callback registered."""

    def __init__(self, message_id: int):
        super().__init__(f"Message {message_id} already has a registered callback")
        self.message_id = message_id


class TransportError(PaginatorError):
    """A host transport operation failed."""

    pass


class EditFailedError(TransportError):
    """The target message no longer exists or can't be edited."""

    def __init__(self, message_id: int | None, reason: str = "message not editable"):
        super().__init__(f"Failed to edit message {message_id}: {reason}")
        self.message_id = message_id
        self.reason = reason

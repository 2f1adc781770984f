"""Navigation controls and per-render availability."""

from dataclasses import dataclass, fields
from enum import Enum


class Control(str, Enum):
    """A navigation action a user can activate."""

    FIRST = "first"
    BACK = "back"
    NEXT = "next"
    LAST = "last"
    STOP = "stop"
    JUMP = "jump"


@dataclass(frozen=True)
class ControlLabels:
    """Label (emoji) for each control.

    The label doubles as the control's identifier on the wire, so incoming
    activations are mapped back to a control by label.
    """

    first: str = "⏮"
    back: str = "◀"
    next: str = "▶"
    last: str = "⏭"
    stop: str = "⏹"
    jump: str = "🔢"

    def label_for(self, control: Control) -> str:
        """Get the label of a control."""
        return getattr(self, control.value)

    def resolve(self, name: str) -> Control | None:
        """
        Map an incoming control identifier to a Control.

        Accepts either the configured label or the control's own name.

        Returns:
            The matching control, or None if nothing matches.
        """
        for control in Control:
            if name == self.label_for(control) or name == control.value:
                return control
        return None


@dataclass(frozen=True)
class ControlButton:
    """Wire-level description of one rendered control."""

    control: Control
    label: str
    disabled: bool
    style: str = "primary"


@dataclass(frozen=True)
class ControlSet:
    """Which controls are enabled.

    Used both for the controls configured on a session and for the
    controls effectively available in a single render.
    """

    first: bool = True
    back: bool = True
    next: bool = True
    last: bool = True
    stop: bool = True
    jump: bool = False

    @classmethod
    def disabled(cls) -> "ControlSet":
        """A control set with everything turned off."""
        return cls(first=False, back=False, next=False, last=False, stop=False, jump=False)

    @classmethod
    def for_page_count(cls, page_count: int) -> "ControlSet":
        """Default configuration for a result with ``page_count`` pages."""
        return cls(
            first=page_count >= 3,
            back=True,
            next=True,
            last=page_count >= 3,
            stop=True,
            jump=page_count >= 4,
        )

    def is_enabled(self, control: Control) -> bool:
        return getattr(self, control.value)

    def any_enabled(self) -> bool:
        return any(getattr(self, f.name) for f in fields(self))

    def buttons(
        self, labels: ControlLabels, configured: "ControlSet | None" = None
    ) -> tuple[ControlButton, ...]:
        """
        Build the rendered buttons.

        Args:
            labels: Labels to show on each button.
            configured: Controls the session was configured with. Controls
                missing from it are omitted; the rest are rendered and
                disabled when unavailable. Defaults to all controls.

        Returns:
            Buttons in display order.
        """
        buttons = []
        for control in Control:
            if configured is not None and not configured.is_enabled(control):
                continue
            buttons.append(
                ControlButton(
                    control=control,
                    label=labels.label_for(control),
                    disabled=not self.is_enabled(control),
                    style="danger" if control is Control.STOP else "primary",
                )
            )
        return tuple(buttons)


def compute_controls(current_page: int, page_count: int, configured: ControlSet) -> ControlSet:
    """Controls available at ``current_page``, given the configured ones."""
    at_start = current_page == 1
    at_end = current_page == page_count
    return ControlSet(
        first=configured.first and not at_start,
        back=configured.back and not at_start,
        next=configured.next and not at_end,
        last=configured.last and not at_end,
        stop=configured.stop,
        jump=configured.jump,
    )

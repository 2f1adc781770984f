"""Configuration handling for the interactive pager."""

from dataclasses import dataclass, field
from pathlib import Path
import yaml

from .core.controls import ControlLabels
from .core.session import PaginatorOptions


@dataclass
class Config:
    """Default settings applied to every paginated message.

    Attributes:
        timeout_seconds: Idle timeout before controls are disabled (None for never).
        footer_format: Footer template, given the page and page count.
        jump_timeout_seconds: Seconds to wait for a page number after a jump.
        not_command_user_text: Reply shown to users who didn't run the command.
        content: Plain text shown above every page.
        labels: Label of each control.
    """

    timeout_seconds: float | None = 600.0
    footer_format: str = "Page {page}/{count}"
    jump_timeout_seconds: float = 15.0
    not_command_user_text: str = "You can't use this interaction."
    content: str | None = None
    labels: ControlLabels = field(default_factory=ControlLabels)

    def to_options(self) -> PaginatorOptions:
        """Build session options from this configuration."""
        return PaginatorOptions(
            labels=self.labels,
            timeout=self.timeout_seconds,
            footer_format=self.footer_format,
            jump_timeout=self.jump_timeout_seconds,
            not_command_user_text=self.not_command_user_text,
            content=self.content,
        )


def load_config(path: str | Path) -> Config:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Config object with loaded values.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    config_path = Path(path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    # Extract sections
    paginator = data.get("paginator", {})
    labels = data.get("labels", {})
    default_labels = ControlLabels()

    return Config(
        timeout_seconds=paginator.get("timeout_seconds", Config.timeout_seconds),
        footer_format=paginator.get("footer_format", Config.footer_format),
        jump_timeout_seconds=paginator.get("jump_timeout_seconds", Config.jump_timeout_seconds),
        not_command_user_text=paginator.get("not_command_user_text", Config.not_command_user_text),
        content=paginator.get("content", Config.content),
        labels=ControlLabels(
            first=labels.get("first", default_labels.first),
            back=labels.get("back", default_labels.back),
            next=labels.get("next", default_labels.next),
            last=labels.get("last", default_labels.last),
            stop=labels.get("stop", default_labels.stop),
            jump=labels.get("jump", default_labels.jump),
        ),
    )

"""Composable predicates for authorizing activations and filtering replies."""

import re
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")

_INTEGER = re.compile(r"[+-]?[0-9]+")


class Criterion(Generic[T]):
    """A predicate over candidates, combinable with ``&``."""

    def __init__(self, predicate: Callable[[T], bool], name: str | None = None):
        self._predicate = predicate
        self.name = name or getattr(predicate, "__name__", "criterion")

    def matches(self, candidate: T) -> bool:
        """Check if the candidate satisfies this criterion."""
        return bool(self._predicate(candidate))

    def __call__(self, candidate: T) -> bool:
        return self.matches(candidate)

    def __and__(self, other: "Criterion[T] | Callable[[T], bool]") -> "Criterion[T]":
        return all_of(self, other)

    def __repr__(self) -> str:
        return f"Criterion({self.name})"


def all_of(*criteria: Criterion[T] | Callable[[T], bool]) -> Criterion[T]:
    """Criterion that matches only when every given criterion matches."""
    parts = tuple(criteria)

    def predicate(candidate: T) -> bool:
        return all(part(candidate) for part in parts)

    name = " & ".join(getattr(part, "name", repr(part)) for part in parts)
    return Criterion(predicate, name=name or "always")


def always() -> Criterion[Any]:
    """Criterion that matches everything."""
    return Criterion(lambda candidate: True, name="always")


def from_user(user_id: int) -> Criterion[Any]:
    """Match candidates sent by ``user_id``."""
    return Criterion(lambda candidate: candidate.user_id == user_id, name=f"from_user({user_id})")


def in_channel(channel_id: int) -> Criterion[Any]:
    """Match candidates posted in ``channel_id``."""
    return Criterion(
        lambda candidate: candidate.channel_id == channel_id, name=f"in_channel({channel_id})"
    )


def parse_int(text: str) -> int | None:
    """Parse a plain ASCII integer, returning None when the text isn't one."""
    cleaned = text.strip()
    if not _INTEGER.fullmatch(cleaned):
        return None
    return int(cleaned)


def is_integer() -> Criterion[Any]:
    """Match candidates whose content parses as an integer."""
    return Criterion(lambda candidate: parse_int(candidate.content) is not None, name="is_integer")

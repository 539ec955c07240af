"""Short-lived notification boxes shown over the rendered model."""

from __future__ import annotations

import time
from collections.abc import Iterator
from dataclasses import dataclass, field, replace

Color = tuple[int, int, int]

_ERROR_COLOR: Color = (230, 119, 119)
_MESSAGE_COLOR: Color = (128, 242, 176)


@dataclass
class Popup:
    """A notification; ``duration`` is in seconds, ``size`` is (width, height)."""

    content: str
    duration: float
    size: tuple[int, int]
    color: Color
    position: tuple[int, int] | None = None
    created_at: float = field(default_factory=time.monotonic)

    def with_position(self, pos: tuple[int, int]) -> Popup:
        return replace(self, position=pos)

    def is_expired(self) -> bool:
        return time.monotonic() - self.created_at >= self.duration


def _box_size(text: str) -> tuple[int, int]:
    return len(text.encode("utf-8")) + 3, 3


@dataclass
class Popups:
    """The popups currently on screen, oldest first."""

    inner: list[Popup] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.inner)

    def __iter__(self) -> Iterator[Popup]:
        return iter(self.inner)

    def push(self, popup: Popup) -> None:
        self.inner.append(popup)

    def update(self) -> None:
        """Drop the popups whose time is up."""
        self.inner = [popup for popup in self.inner if not popup.is_expired()]

    def push_err(self, text: str) -> None:
        self.inner.append(Popup(text, 3.0, _box_size(text), _ERROR_COLOR))

    def push_msg(self, text: str) -> None:
        self.inner.append(Popup(text, 4.0, _box_size(text), _MESSAGE_COLOR))
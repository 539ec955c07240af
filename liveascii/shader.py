"""Glyph shaders used to turn rendered pixels into terminal characters."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class TextShader:
    """Fills covered cells with a repeating text."""

    text: str


@dataclass(frozen=True)
class CharShader:
    """Picks a character from a ramp by pixel luminance."""

    chars: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "chars", tuple(self.chars))


Shader = Union[TextShader, CharShader]


def _default_shaders() -> list[Shader]:
    return [
        CharShader((" ", ".", ":", "-", "=", "+", "*", "#", "%", "@")),
        TextShader("HELLO"),
        CharShader(("⠀", "⠁", "⠃", "⠇", "⠧", "⠷", "⠿", "⡿", "⣿")),
    ]


class ShaderManager:
    """A ring of shaders with a current selection."""

    def __init__(self, shaders: Iterable[Shader] | None = None) -> None:
        self._shaders: deque[Shader] = deque(
            _default_shaders() if shaders is None else shaders
        )
        if not self._shaders:
            raise ValueError("a shader manager needs at least one shader")
        self._idx = 0

    @property
    def shaders(self) -> tuple[Shader, ...]:
        return tuple(self._shaders)

    def current_shader(self) -> Shader:
        return self._shaders[self._idx]

    def next(self) -> None:
        self._idx = (self._idx + 1) % len(self._shaders)

    def prev(self) -> None:
        self._idx = len(self._shaders) - 1 if self._idx == 0 else self._idx - 1

    def insert_hd(self, shader: Shader) -> None:
        """Put a shader at the front of the ring; the selected index is kept."""
        self._shaders.appendleft(shader)
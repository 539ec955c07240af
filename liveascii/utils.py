"""Small helpers: key names, modifier names and file names."""

from __future__ import annotations

import enum
from dataclasses import dataclass

_NAMED_KEYS = frozenset(
    {
        "Backspace",
        "Enter",
        "Left",
        "Right",
        "Up",
        "Down",
        "Home",
        "End",
        "PageUp",
        "PageDown",
        "Tab",
        "BackTab",
        "Delete",
        "Insert",
        "Null",
        "Esc",
        "CapsLock",
        "ScrollLock",
        "NumLock",
        "PrintScreen",
        "Pause",
        "Menu",
        "KeypadBegin",
    }
)

_MODIFIER_KEYS = frozenset(
    {
        "LeftShift",
        "LeftControl",
        "LeftAlt",
        "LeftSuper",
        "LeftHyper",
        "LeftMeta",
        "RightShift",
        "RightControl",
        "RightAlt",
        "RightSuper",
        "RightHyper",
        "RightMeta",
    }
)


@dataclass(frozen=True)
class KeyCode:
    """A pressed key.

    ``kind`` is ``"Char"`` with a one-character ``value``, ``"F"`` with the
    function key number, ``"Modifier"`` with the modifier key name, or the
    name of any other key such as ``"Enter"``.
    """

    kind: str
    value: str | int | None = None

    def __post_init__(self) -> None:
        if self.kind == "Char":
            if not isinstance(self.value, str) or len(self.value) != 1:
                raise ValueError("a Char key needs exactly one character")
        elif self.kind == "F":
            if (
                isinstance(self.value, bool)
                or not isinstance(self.value, int)
                or not 0 <= self.value <= 255
            ):
                raise ValueError("an F key needs a number from 0 to 255")
        elif self.kind == "Modifier":
            if not isinstance(self.value, str):
                raise ValueError("a Modifier key needs a key name")


class KeyModifiers(enum.Flag):
    NONE = 0
    SHIFT = 1
    CONTROL = 2
    ALT = 4
    SUPER = 8
    HYPER = 16
    META = 32


_MODIFIER_NAMES = (
    (KeyModifiers.CONTROL, "Control"),
    (KeyModifiers.ALT, "Alt"),
    (KeyModifiers.SHIFT, "Shift"),
    (KeyModifiers.SUPER, "Super"),
)


def default_fade_time() -> float:
    return -1.0


def key_code_to_str(code: KeyCode) -> str:
    """Name of a key as used in hotkey settings; empty for keys without one."""
    if code.kind == "Char":
        return code.value.upper()
    if code.kind == "F":
        return f"F{code.value}"
    if code.kind == "Modifier":
        return code.value if code.value in _MODIFIER_KEYS else ""
    return code.kind if code.kind in _NAMED_KEYS else ""


def modifiers_to_list(modifiers: KeyModifiers) -> list[str]:
    """Names of the held modifiers, in the order Control, Alt, Shift, Super."""
    return [name for flag, name in _MODIFIER_NAMES if flag in modifiers]


def get_file_name(filename: str) -> str:
    """The part of a file name before its first dot."""
    return filename.split(".", 1)[0]
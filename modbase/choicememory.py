"""Remembered answers to questions, so the user is not asked twice."""

from __future__ import annotations

import enum
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional, Union

__all__ = [
    "StandardButton",
    "Choice",
    "button_to_string",
    "set_callbacks",
    "get_memory",
    "set_window_memory",
    "set_file_memory",
    "query",
]

_log = logging.getLogger(__name__)


class StandardButton(enum.IntFlag):
    """The standard answers a question can have."""

    NO_BUTTON = 0x00000000
    OK = 0x00000400
    SAVE = 0x00000800
    SAVE_ALL = 0x00001000
    OPEN = 0x00002000
    YES = 0x00004000
    YES_TO_ALL = 0x00008000
    NO = 0x00010000
    NO_TO_ALL = 0x00020000
    ABORT = 0x00040000
    RETRY = 0x00080000
    IGNORE = 0x00100000
    CLOSE = 0x00200000
    CANCEL = 0x00400000
    DISCARD = 0x00800000
    HELP = 0x01000000
    APPLY = 0x02000000
    RESET = 0x04000000
    RESTORE_DEFAULTS = 0x08000000


@dataclass(frozen=True)
class Choice:
    """What the user answered, and whether the answer is to be remembered.

    ``remember`` keeps the answer for the whole window, ``remember_file`` for
    the file the question was about.
    """

    button: StandardButton
    remember: bool = False
    remember_file: bool = False


GetButton = Callable[[str, str], Union[StandardButton, int]]
SetWindowButton = Callable[[str, StandardButton], None]
SetFileButton = Callable[[str, str, StandardButton], None]

_BUTTON_NAMES = {
    StandardButton.NO_BUTTON: "none",
    StandardButton.OK: "ok",
    StandardButton.SAVE: "save",
    StandardButton.SAVE_ALL: "saveall",
    StandardButton.OPEN: "open",
    StandardButton.YES: "yes",
    StandardButton.YES_TO_ALL: "yestoall",
    StandardButton.NO: "no",
    StandardButton.NO_TO_ALL: "notoall",
    StandardButton.ABORT: "abort",
    StandardButton.RETRY: "retry",
    StandardButton.IGNORE: "ignore",
    StandardButton.CLOSE: "close",
    StandardButton.CANCEL: "cancel",
    StandardButton.DISCARD: "discard",
    StandardButton.HELP: "help",
    StandardButton.APPLY: "apply",
    StandardButton.RESET: "reset",
    StandardButton.RESTORE_DEFAULTS: "restoredefaults",
}


@dataclass
class _Callbacks:
    get: Optional[GetButton] = None
    set_window: Optional[SetWindowButton] = None
    set_file: Optional[SetFileButton] = None


_lock = threading.RLock()
_callbacks = _Callbacks()


def button_to_string(button: Union[StandardButton, int]) -> str:
    """Describe a button for logs, e.g. ``'yes' (0x4000)``; unknown values as hex."""
    value = int(button)
    for known, name in _BUTTON_NAMES.items():
        if int(known) == value:
            return f"'{name}' (0x{value:x})"
    return f"0x{value:x}"


def set_callbacks(
    get: Optional[GetButton],
    set_window: Optional[SetWindowButton],
    set_file: Optional[SetFileButton],
) -> None:
    """Register the functions that read and store remembered choices.

    Passing None unregisters a function; using it then raises RuntimeError.
    """
    with _lock:
        _callbacks.get = get
        _callbacks.set_window = set_window
        _callbacks.set_file = set_file


def get_memory(window_name: str, file_name: str = "") -> StandardButton:
    """Return the remembered choice, or ``NO_BUTTON`` if there is none."""
    getter = _callbacks.get
    if getter is None:
        raise RuntimeError("no callback registered for reading remembered choices")
    return StandardButton(int(getter(window_name, file_name)))


def set_window_memory(window_name: str, button: StandardButton) -> None:
    """Remember ``button`` as the answer for every question of a window."""
    setter = _callbacks.set_window
    if setter is None:
        raise RuntimeError("no callback registered for remembering window choices")
    _log.debug(
        "remembering choice %s for window %s", button_to_string(button), window_name
    )
    setter(window_name, StandardButton(int(button)))


def set_file_memory(window_name: str, file_name: str, button: StandardButton) -> None:
    """Remember ``button`` as the answer for one file of a window."""
    setter = _callbacks.set_file
    if setter is None:
        raise RuntimeError("no callback registered for remembering file choices")
    _log.debug(
        "remembering choice %s for file %s",
        button_to_string(button),
        f"{window_name}/{file_name}",
    )
    setter(window_name, file_name, StandardButton(int(button)))


def query(
    window_name: str, ask: Callable[[], Choice], file_name: Optional[str] = None
) -> StandardButton:
    """Answer a question from memory, or by calling ``ask``.

    A remembered choice is returned without asking. Otherwise the answer from
    ``ask`` is returned, and stored as requested unless it was ``CANCEL``; the
    per-file memory is only used when ``file_name`` is given.
    """
    with _lock:
        button = get_memory(window_name, file_name if file_name is not None else "")
        if button != StandardButton.NO_BUTTON:
            name = window_name if file_name is None else f"{window_name}/{file_name}"
            _log.debug(
                "%s: not asking because user always wants response %s",
                name,
                button_to_string(button),
            )
            return button

        choice = ask()
        answer = StandardButton(int(choice.button))
        if answer != StandardButton.CANCEL:
            if choice.remember:
                set_window_memory(window_name, answer)
            if file_name is not None and choice.remember_file:
                set_file_memory(window_name, file_name, answer)
        return answer
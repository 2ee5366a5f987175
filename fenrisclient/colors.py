"""ANSI colour codes and helpers for terminal output."""

from __future__ import annotations

RESET = "\033[0m"
BOLD = "\033[1m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
MAGENTA = "\033[35m"
CYAN = "\033[36m"


class _ColorState:
    """Holds the process-wide switch for coloured output."""

    def __init__(self) -> None:
        self.enabled = True


_state = _ColorState()


def enable_colors() -> None:
    """Turn coloured output on."""
    _state.enabled = True


def disable_colors() -> None:
    """Turn coloured output off; helpers then return plain text."""
    _state.enabled = False


def colors_enabled() -> bool:
    """Return whether coloured output is currently on."""
    return _state.enabled


def _wrap(code: str, text: str) -> str:
    if not _state.enabled:
        return text
    return f"{code}{text}{RESET}"


def success(text: str) -> str:
    """Format text as a success message."""
    return _wrap(GREEN, text)


def error(text: str) -> str:
    """Format text as an error message."""
    return _wrap(RED, text)


def info(text: str) -> str:
    """Format text as an informational message."""
    return _wrap(CYAN, text)


def warning(text: str) -> str:
    """Format text as a warning."""
    return _wrap(YELLOW, text)
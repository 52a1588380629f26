"""Prompt text, prompt colours, shell start-up state and exit-status decoding."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TextIO

from tinyshell.builtins import ShellState
from tinyshell.environment import Environment

RESET = "\033[0m"
COLOURS = {
    "gray": "\033[1;90m",
    "red": "\033[1;38;5;1m",
    "green": "\033[1;38;5;2m",
    "orange": "\033[1;38;5;214m",
    "blue": "\033[1;96m",
    "magenta": "\033[1;38;5;5m",
    "yellow": "\033[1;93m",
    "white": "\033[1;38;5;7m",
}
USAGE = "Usage:\n\tsetcolour name <colour> [pwd <colour>]\n"
UNKNOWN_COLOUR = "[setcolour list] for colour list.\n"
COLOUR_LIST = (
    "Available Colours:\n\t gray, red, green, orange, blue, magenta, yellow & white.\n"
)


def colour_code(name: str) -> str | None:
    """Return the terminal escape sequence for a colour name, or None."""
    return COLOURS.get(name)


def _pick_colour(name: str, current: str, out: TextIO) -> str:
    code = colour_code(name)
    if code is None:
        out.write(UNKNOWN_COLOUR)
        return current
    return code


def set_colour(state: ShellState, args: list[str], out: TextIO) -> None:
    """Handle ``setcolour``: ``name <colour>`` and ``pwd <colour>`` pairs, or ``list``."""
    if len(args) < 2:
        out.write(USAGE)
        return
    if args[1] == "list":
        out.write(COLOUR_LIST)
        return
    i = 1
    while i < len(args):
        keyword = args[i]
        has_value = i + 1 < len(args)
        if keyword == "name" and has_value:
            state.name_clr = _pick_colour(args[i + 1], state.name_clr, out)
        elif keyword == "pwd" and has_value:
            state.pwd_clr = _pick_colour(args[i + 1], state.pwd_clr, out)
        else:
            out.write(USAGE)
            return
        i += 2


def _split(text: str | None, sep: str) -> list[str]:
    if text is None:
        return []
    return [part for part in text.split(sep) if part]


def session_name(env: Environment) -> str | None:
    """Return the host name taken from ``SESSION_MANAGER``, or None."""
    for entry in env:
        parts = _split(entry, "=")
        if not parts:
            return None
        if parts[0] != "SESSION_MANAGER":
            continue
        pieces = _split(parts[1] if len(parts) > 1 else None, "/")
        if len(pieces) < 2:
            return None
        host = _split(pieces[1], ".")
        return host[0] if host else None
    return None


def full_name(env: Environment) -> str:
    """Return ``LOGNAME@host`` as shown in the prompt."""
    login = env.getenv("LOGNAME") or ""
    return f"{login}@{session_name(env) or ''}"


def build_prompt(state: ShellState, name: str | None, cwd: str | None) -> str:
    """Compose the coloured prompt for user ``name`` in directory ``cwd``."""
    shown = state.full_name if name is None else name
    return (
        f"{state.name_clr}{shown}{RESET}:~"
        f"{state.pwd_clr}{cwd or ''}{RESET}$ "
    )


def init_state(environ: Mapping[str, str] | Iterable[str]) -> ShellState:
    """Build the shell state from the inherited environment."""
    if isinstance(environ, Mapping):
        entries = [f"{key}={value}" for key, value in environ.items()]
    else:
        entries = list(environ)
    env = Environment(entries)
    state = ShellState(env=env, oldpwd_off=True)
    state.full_name = full_name(env)
    env.increment_shlvl()
    return state


def decode_exit_status(status: int) -> int:
    """Turn a raw wait status into the shell's ``$?`` value."""
    low = status & 0x7F
    if low == 0:
        return (status >> 8) & 0xFF
    if low != 0x7F:
        if status in (130, 131):
            return low
        return 128 + low
    return -1
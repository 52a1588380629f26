"""Commands the shell runs itself: echo, export, unset, cd, pwd, exit, history, env."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from typing import TextIO

from tinyshell.environment import Environment, _atoi

SHELL_NAME = "minishell"
DEFAULT_NAME_COLOUR = "\033[1;38;5;214m"
DEFAULT_PWD_COLOUR = "\033[1;38;5;5m"
_QUOTE_CHARS = str.maketrans("", "", "'\"")


class ShellExit(Exception):
    """Raised when the shell is asked to stop, carrying the exit status."""

    def __init__(self, code: int) -> None:
        super().__init__(f"exit {code}")
        self.code = code


@dataclass
class ShellState:
    """Everything the builtins read and change between commands."""

    env: Environment = field(default_factory=Environment)
    status: int = 0
    oldpath: str | None = None
    oldpwd_off: bool = True
    history: list[str] = field(default_factory=list)
    history_base: int = 1
    name_clr: str = DEFAULT_NAME_COLOUR
    pwd_clr: str = DEFAULT_PWD_COLOUR
    full_name: str = ""


def echo(state: ShellState, args: list[str], out: TextIO) -> None:
    """Write the arguments separated by spaces; ``-n`` drops the newline."""
    state.status = 0
    first = args[1] if len(args) > 1 else None
    no_newline = first is not None and first.startswith("-n")
    joined = no_newline and first is not None and first.startswith("-n ")
    if no_newline and len(args) < 3 and not joined:
        return
    if not no_newline and first is None:
        out.write("\n")
        return
    start = 1 + int(no_newline) - int(joined)
    if no_newline and args[start].startswith("-n"):
        start += 1
    text = " ".join(args[start:])
    if not no_newline:
        text += "\n"
    out.write(text)


def check_valid_export(arg: str) -> bool:
    """True if ``arg`` is ``NAME=value`` with a name of letters, digits and ``_``
    not starting with a digit."""
    name, sep, _ = arg.partition("=")
    if not sep:
        return False
    if name[:1].isdigit():
        return False
    return all((c.isascii() and c.isalnum()) or c == "_" for c in name)


def export(state: ShellState, args: list[str], out: TextIO, err: TextIO) -> None:
    """Set variables, or list the environment sorted when given no arguments."""
    if len(args) < 2:
        for entry in sorted(state.env):
            out.write(f"{entry}\n")
        return
    for arg in args[1:]:
        if not check_valid_export(arg):
            err.write("export: Bad Assignment!\n")
            return
        index = state.env.index_of(arg)
        if index is None:
            state.env.append(arg)
        else:
            state.env.replace(index, arg)


def unset(state: ShellState, args: list[str]) -> None:
    """Remove each named variable from the environment."""
    state.status = 0
    for name in args[1:]:
        state.env.remove(name)


def _home_path(state: ShellState, arg: str | None) -> str | None:
    home = state.env.find_path("HOME=")
    if arg is None or arg in ("~", "--"):
        return home
    if arg.startswith("~") and len(arg) > 1:
        return None if home is None else home + arg[1:]
    return None


def _dash_path(state: ShellState, out: TextIO, err: TextIO) -> str | None:
    if state.oldpath is None:
        state.status = 1
        return None
    path = None
    if state.env.getenv("OLDPWD") is not None:
        path = state.oldpath
        out.write(f"{path}\n")
        state.status = 0
    else:
        state.status = 1
        err.write("cd: OLDPWD not set\n")
    state.oldpwd_off = False
    return path


def resolve_cd_path(
    state: ShellState, args: list[str], out: TextIO, err: TextIO
) -> str | None:
    """Work out where ``cd`` should go; None when it should not move."""
    arg = args[1] if len(args) > 1 else None
    cleaned = arg.translate(_QUOTE_CHARS) if arg is not None else None
    if arg is not None and (arg.startswith('"~') or arg.startswith("'~")):
        err.write("cd: ~: No such file or directory\n")
        return None
    if arg is not None and cleaned == "-":
        return _dash_path(state, out, err)
    if arg is None or "~" in cleaned or cleaned == "--":
        return _home_path(state, arg)
    return cleaned


def _getcwd() -> str | None:
    try:
        return os.getcwd()
    except OSError:
        return None


def cd(state: ShellState, args: list[str], out: TextIO, err: TextIO) -> None:
    """Change the working directory and keep ``OLDPWD`` up to date."""
    state.oldpwd_off = True
    cwd = _getcwd()
    state.env.replace_oldpwd(cwd)
    if state.oldpath is None:
        state.oldpath = cwd
    path = resolve_cd_path(state, args, out, err)
    if path is None:
        state.status = 1
        return
    try:
        os.chdir(path)
    except OSError as exc:
        state.status = 1
        err.write(f"Error: {exc.strerror}\n")
        return
    state.oldpath = cwd
    if state.oldpwd_off:
        state.env.save_oldpwd(state.oldpath)
    state.status = 0


def pwd(state: ShellState, out: TextIO) -> None:
    """Print the working directory."""
    cwd = _getcwd()
    if cwd is None:
        state.status = 1
        return
    out.write(f"{cwd}\n")
    state.status = 0


def exit_command(state: ShellState, args: list[str], out: TextIO) -> None:
    """Leave the shell, raising :class:`ShellExit` with the status to use.

    With more than one argument it only complains and returns.
    """
    out.write("exit\n")
    arg = args[1] if len(args) > 1 else None
    if arg is not None and any(c.isascii() and c.isalpha() for c in arg):
        out.write(f"{SHELL_NAME}: exit: {arg}: numeric argument required\n")
        state.status = 2
        raise ShellExit(state.status)
    if arg is not None and len(args) > 2:
        state.status = 256
        out.write(f"{SHELL_NAME}: exit: too many arguments\n")
        return
    if arg is not None:
        state.status = int(math.fmod(_atoi(arg), 256))
    raise ShellExit(state.status)


def print_history(state: ShellState, out: TextIO) -> None:
    """List the remembered command lines, numbered from ``history_base``."""
    if not state.history:
        state.status = 1
        return
    for number, line in enumerate(state.history, start=state.history_base):
        out.write(f"{number} {line}\n")
    state.status = 0


def print_env(state: ShellState, out: TextIO) -> None:
    """Print every environment entry."""
    state.status = 0
    out.write(state.env.format())
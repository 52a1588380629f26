"""Grouping split words into commands joined by pipes, with redirections."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass, field

from tinyshell.environment import Environment
from tinyshell.expansion import expand_variable
from tinyshell.lexer import is_input_redirect, is_redirect

PIPE = "|"


class ShellSyntaxError(Exception):
    """A command line that cannot be turned into commands."""

    def __init__(self, status: int, message: str = "Syntax error") -> None:
        super().__init__(message)
        self.status = status


@dataclass
class Token:
    """One command of a pipeline, with its arguments and redirections."""

    cmd: list[str] = field(default_factory=list)
    path: str | None = None
    input_redir: str | None = None
    output_redir: str | None = None
    input_file: str | None = None
    output_file: str | None = None
    delimiter: str | None = None
    pipe: str | None = None
    complete: bool = False
    access: bool = False


def _touch(path: str) -> None:
    try:
        fd = os.open(path, os.O_RDONLY | os.O_CREAT | os.O_APPEND, 0o644)
    except OSError:
        return
    os.close(fd)


def _input_is_usable(token: Token) -> bool:
    if not token.input_redir:
        return True
    return bool(
        token.input_file
        and os.access(token.input_file, os.F_OK)
        and os.access(token.input_file, os.X_OK)
    )


def _redirect(token: Token, words: list[str], index: int, env: Environment) -> int:
    """Record the redirection at ``words[index]``; return the new status."""
    status = 0
    operator = words[index]
    target = words[index + 1] if index + 1 < len(words) else None
    if is_input_redirect(operator):
        token.input_redir = operator
        if target is not None and operator == "<<":
            token.delimiter = target
        elif target is not None and operator == "<":
            token.input_file = target
        else:
            raise ShellSyntaxError(1)
        return status
    if target is None:
        raise ShellSyntaxError(1)
    token.output_redir = operator
    expanded = expand_variable(env, target, status) if "$" in target else target
    if _input_is_usable(token):
        _touch(expanded)
        token.output_file = target
        return status
    token.output_file = expanded
    return 2


def tokenize(
    words: Iterable[str], env: Environment, status: int
) -> tuple[list[Token], int]:
    """Group ``words`` into commands.

    Returns the commands and the exit status after tokenizing: a
    redirection resets it to 0, or to 2 when an output file follows an
    input that cannot be used. Raises :class:`ShellSyntaxError` for a
    missing redirection target or a trailing pipe.
    """
    items = list(words)
    tokens: list[Token] = []
    token: Token | None = None
    count = len(items)
    i = 0
    while i < count:
        if token is None or token.complete:
            token = Token()
            tokens.append(token)
        word = items[i]
        if not is_redirect(word) and word != PIPE:
            end = i
            while end < count and items[end] != PIPE and not is_redirect(items[end]):
                end += 1
            token.cmd.extend(items[i:end])
            i = end
        if i < count and is_redirect(items[i]):
            status = _redirect(token, items, i, env)
            i += 2
        if i < count and items[i] == PIPE:
            if i + 1 >= count:
                raise ShellSyntaxError(2)
            token.pipe = PIPE
            token.complete = True
            i += 1
    return tokens, status


def resolve_command_path(token: Token, env: Environment) -> str | None:
    """Find the program ``token`` runs and store it in ``token.path``.

    Absolute names are kept when executable; other names are searched in
    ``PATH``. When nothing is found the command name itself is used.
    """
    if not token.cmd:
        return token.path
    name = token.cmd[0]
    path_env = env.getenv("PATH")
    directories = [d for d in path_env.split(":") if d] if path_env else []
    if directories:
        if name.startswith("/"):
            if os.access(name, os.X_OK):
                token.path = name
        else:
            for directory in directories:
                candidate = f"{directory}/{name}"
                if os.access(candidate, os.X_OK):
                    token.path = candidate
                    break
    if token.path is None:
        token.path = name
    return token.path
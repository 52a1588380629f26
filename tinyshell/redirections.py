"""Opening the files a command's redirections name, and here-documents."""

from __future__ import annotations

import io
import sys
from collections.abc import Iterator
from typing import TextIO

from tinyshell.builtins import ShellState
from tinyshell.expansion import expand_variable
from tinyshell.tokens import Token

_QUOTE_CHARS = str.maketrans("", "", "\"'")


class RedirectionError(Exception):
    """A redirection target that could not be opened."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status


def iter_lines(stream: TextIO) -> Iterator[str]:
    """Yield lines from ``stream``, each with its newline except perhaps the last."""
    yield from iter(stream.readline, "")


def here_doc(
    state: ShellState,
    delimiter: str,
    stream: TextIO | None = None,
    prompt_out: TextIO | None = None,
) -> str:
    """Read lines up to ``delimiter`` and return them, with variables expanded."""
    source = sys.stdin if stream is None else stream
    prompt = sys.stdout if prompt_out is None else prompt_out
    delimiter = delimiter.translate(_QUOTE_CHARS)
    collected: list[str] = []
    lines = iter_lines(source)
    while True:
        prompt.write("> ")
        prompt.flush()
        line = next(lines, None)
        if line is None:
            break
        if line == delimiter + "\n":
            break
        if "$" in line:
            line = expand_variable(state.env, line, state.status)
        collected.append(line)
    return "".join(collected)


def _failed(token: Token, path: str | None, exc: OSError) -> None:
    if not token.access:
        raise RedirectionError(1, f"{path}: {exc.strerror}") from exc
    token.access = False


def open_input(
    state: ShellState,
    token: Token,
    stream: TextIO | None = None,
    prompt_out: TextIO | None = None,
) -> TextIO | None:
    """Open the input a token redirects from; None when it has none."""
    if token.input_redir == "<":
        try:
            return open(token.input_file or "", encoding="utf-8")
        except OSError as exc:
            state.status = 1
            _failed(token, token.input_file, exc)
            return None
    if token.input_redir == "<<":
        token.delimiter = (token.delimiter or "").translate(_QUOTE_CHARS)
        return io.StringIO(here_doc(state, token.delimiter, stream, prompt_out))
    return None


def open_output(token: Token) -> TextIO | None:
    """Open the file a token writes to: truncated for ``>``, appended for ``>>``."""
    modes = {">": "w", ">>": "a"}
    mode = modes.get(token.output_redir or "")
    if mode is None:
        return None
    try:
        return open(token.output_file or "", mode, encoding="utf-8")
    except OSError as exc:
        _failed(token, token.output_file, exc)
        return None
"""Quote tracking and ``$NAME`` expansion."""

from __future__ import annotations

from dataclasses import dataclass

from tinyshell.environment import Environment

_NAME_STOPS = frozenset(" $\t\n")


@dataclass
class QuoteState:
    """Scanner state while stripping quotes and escapes from a word.

    ``emit`` tells whether the last character read belongs in the output;
    ``expansion`` whether a ``$`` just read starts a variable.
    """

    single_quote: bool = False
    double_quote: bool = False
    escape: bool = False
    emit: bool = False
    expansion: bool = False

    def update(self, char: str, next_char: str = "") -> None:
        """Advance the state over ``char``, peeking at ``next_char``."""
        if char == '"' and not self.single_quote:
            self._toggle_quote("double_quote")
            return
        if char == "'" and not self.double_quote:
            self._toggle_quote("single_quote")
            return
        if char == "\\":
            self._read_backslash(next_char)
            return
        if char == "$":
            literal = (
                (self.double_quote and next_char == '"')
                or self.single_quote
                or self.escape
                or next_char == "/"
            )
            self.expansion = not literal
            self.emit = literal
            return
        self.escape = False
        self.emit = True

    def _toggle_quote(self, field: str) -> None:
        if self.escape:
            self.emit = True
        else:
            setattr(self, field, not getattr(self, field))
            self.emit = False
        self.escape = False

    def _read_backslash(self, next_char: str) -> None:
        if self.escape:
            self.emit, self.escape = True, False
        elif self.double_quote and next_char in ('"', "$", "\\"):
            self.emit, self.escape = False, True
        elif not self.double_quote and not self.single_quote:
            self.emit, self.escape = False, True
        else:
            self.emit, self.escape = True, False


def extract_var_name(text: str, start: int) -> tuple[str, int]:
    """Read a variable name from ``start``; return it and the index after it."""
    end = start
    while end < len(text) and text[end] not in _NAME_STOPS:
        end += 1
    return text[start:end], end


def expand_variable(env: Environment, text: str, status: int) -> str:
    """Replace each ``$NAME`` in ``text`` with its value from ``env``.

    Unset names expand to nothing. A name starting with ``?`` that is not
    set replaces everything gathered so far with the last exit status.
    """
    result = ""
    i = 0
    while i < len(text):
        if text[i] == "$":
            name, i = extract_var_name(text, i + 1)
            value = env.value_of(name)
            if value is not None:
                result += value
            elif name.startswith("?"):
                result = str(status)
            continue
        result += text[i]
        i += 1
    return result


def check_valid_var(name: str) -> bool:
    """Check the characters after the first of a variable reference."""
    for char in name[1:]:
        if not char.isalnum() or char != "_" or char != "?":
            continue
        return False
    return True
"""Splitting a command line into words, operators and quoted strings."""

from __future__ import annotations

from enum import Enum

BUILTINS = frozenset(
    {"history", "env", "echo", "cd", "pwd", "export", "unset", "exit", "setcolour"}
)
INPUT_REDIRECTS = frozenset({"<<", "<"})
OUTPUT_REDIRECTS = frozenset({">>", ">"})
DELIMITERS = frozenset("|><")


class QuoteType(Enum):
    """The kind of quote the scanner is currently inside."""

    NO_QUOTE = 0
    SINGLE_QUOTE = 1
    DOUBLE_QUOTE = 2


def get_quote(quote: QuoteType, char: str) -> QuoteType:
    """Return the quoting state after reading ``char`` in state ``quote``."""
    if char == "'":
        if quote is QuoteType.NO_QUOTE:
            return QuoteType.SINGLE_QUOTE
        if quote is QuoteType.SINGLE_QUOTE:
            return QuoteType.NO_QUOTE
    elif char == '"':
        if quote is QuoteType.NO_QUOTE:
            return QuoteType.DOUBLE_QUOTE
        if quote is QuoteType.DOUBLE_QUOTE:
            return QuoteType.NO_QUOTE
    return quote


def is_builtin(word: str) -> bool:
    """True if ``word`` names a command the shell runs itself."""
    return word in BUILTINS


def is_output_redirect(word: str) -> bool:
    return word in OUTPUT_REDIRECTS


def is_input_redirect(word: str) -> bool:
    return word in INPUT_REDIRECTS


def is_redirect(word: str) -> bool:
    return is_input_redirect(word) or is_output_redirect(word)


def is_delimiter(char: str) -> bool:
    """True for the single characters that start an operator."""
    return char in DELIMITERS


def count_commands(text: str) -> int:
    """Estimate how many words and operators ``text`` holds."""
    count = 0
    quote = QuoteType.NO_QUOTE
    length = len(text)
    i = 0
    while i < length:
        char = text[i]
        quote = get_quote(quote, char)
        if quote is not QuoteType.NO_QUOTE:
            count += 1
            i += 1
            while i < length and quote is not QuoteType.NO_QUOTE:
                quote = get_quote(quote, text[i])
                i += 1
        elif char != " " and not is_delimiter(char):
            count += 1
            while i < length and text[i] != " " and not is_delimiter(text[i]):
                i += 1
        elif is_delimiter(char):
            count += 1
            if text[i : i + 2] in (">>", "<<"):
                i += 1
            i += 1
        else:
            i += 1
    return count


def split_commands(text: str) -> list[str]:
    """Split ``text`` into words and operators, keeping quotes and escapes."""
    if count_commands(text) == 0:
        return []
    words: list[str] = []
    current: list[str] = []
    quote = QuoteType.NO_QUOTE

    def flush() -> None:
        if current:
            words.append("".join(current))
            current.clear()

    length = len(text)
    i = 0
    while i < length:
        char = text[i]
        if char == "\\" and i + 1 < length:
            current.append(char)
            current.append(text[i + 1])
            i += 2
            continue
        quote = get_quote(quote, char)
        separator = char == " " or is_delimiter(char)
        if quote is not QuoteType.NO_QUOTE or not separator:
            current.append(char)
        if quote is QuoteType.NO_QUOTE and separator:
            flush()
        if quote is QuoteType.NO_QUOTE and is_delimiter(char):
            operator = char
            if i + 1 < length and is_delimiter(text[i + 1]):
                i += 1
                operator += text[i]
            words.append(operator)
        i += 1
    flush()
    return words
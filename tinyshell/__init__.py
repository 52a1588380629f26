"""Core of a small shell: lexing, expansion, tokenizing, redirections, prompt and builtins."""

__version__ = "0.1.0"

__all__ = [
    "builtins",
    "environment",
    "expansion",
    "lexer",
    "prompt",
    "redirections",
    "tokens",
]
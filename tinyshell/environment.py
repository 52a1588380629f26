"""The shell's own copy of the environment, as ``NAME=value`` entries."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


def _atoi(text: str | None) -> int:
    """Parse a leading integer the way C's atoi does; 0 when there is none."""
    if not text:
        return 0
    stripped = text.lstrip(" \t\n\v\f\r")
    sign = 1
    if stripped[:1] in ("+", "-"):
        if stripped[0] == "-":
            sign = -1
        stripped = stripped[1:]
    digits = ""
    for char in stripped:
        if not char.isdigit():
            break
        digits += char
    return sign * int(digits) if digits else 0


class Environment:
    """An ordered list of ``NAME=value`` strings."""

    def __init__(self, entries: Iterable[str] = ()) -> None:
        self._entries: list[str] = list(entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Environment({self._entries!r})"

    def getenv(self, name: str) -> str | None:
        """Return the value of ``name``, or None when it is not set."""
        return self.value_of(name)

    def find_entry(self, key: str) -> str | None:
        """Return the whole ``key=value`` entry, or None."""
        prefix = f"{key}="
        return next((e for e in self._entries if e.startswith(prefix)), None)

    def value_of(self, name: str) -> str | None:
        """Return the text after ``name=`` in the first matching entry."""
        entry = self.find_entry(name)
        if entry is None:
            return None
        return entry[len(name) + 1 :]

    def find_path(self, prefix: str) -> str | None:
        """Return the text after the last ``=`` of the first entry whose first
        five characters match those of ``prefix``."""
        head = prefix[:5]
        for entry in self._entries:
            if entry[:5] == head:
                return entry.rpartition("=")[2]
        return None

    def index_of(self, name: str) -> int | None:
        """Return the position of the variable ``name`` (text before any ``=``)."""
        prefix = name.partition("=")[0] + "="
        return next(
            (i for i, entry in enumerate(self._entries) if entry.startswith(prefix)),
            None,
        )

    def append(self, entry: str) -> None:
        self._entries.append(entry)

    def replace(self, index: int, entry: str) -> None:
        self._entries[index] = entry

    def remove(self, name: str) -> bool:
        """Drop every entry for ``name``; return whether it was set."""
        if self.find_entry(name) is None:
            return False
        prefix = f"{name}="
        self._entries = [e for e in self._entries if not e.startswith(prefix)]
        return True

    def replace_oldpwd(self, oldpath: str | None) -> None:
        """Rewrite existing ``OLDPWD`` entries; never adds one."""
        new_entry = f"OLDPWD={oldpath or ''}"
        self._entries = [
            new_entry if e.startswith("OLDPWD=") else e for e in self._entries
        ]

    def save_oldpwd(self, oldpath: str | None) -> None:
        """Rewrite ``OLDPWD`` entries, adding one at the end if there is none."""
        found = any(e.startswith("OLDPWD=") for e in self._entries)
        self.replace_oldpwd(oldpath)
        if not found:
            self._entries.append(f"OLDPWD={oldpath or ''}")

    def increment_shlvl(self) -> None:
        """Raise ``SHLVL`` by one where it is set."""
        if not any(e.startswith("SHLVL=") for e in self._entries):
            return
        new_entry = f"SHLVL={_atoi(self.getenv('SHLVL')) + 1}"
        self._entries = [
            new_entry if e.startswith("SHLVL=") else e for e in self._entries
        ]

    def format(self) -> str:
        """Render the entries one per line, as the ``env`` builtin prints them."""
        return "".join(f"{entry}\n" for entry in self._entries)
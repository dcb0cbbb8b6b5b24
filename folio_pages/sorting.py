"""Natural ordering for directory entry names.

Names are split into runs of digits and runs of other characters. Digit runs
compare numerically, so ``chapter2`` sorts before ``chapter10``. Text runs
compare the way an English collator does: base letters first, then accents,
then case, with lowercase ahead of uppercase.

Example
-------
>>> sorted(["b", "chapter10", "Chapter2", "a"], key=alphanumeric_key)
['a', 'b', 'Chapter2', 'chapter10']
"""

from __future__ import annotations

import re
import typing as typ
import unicodedata

CHUNK_PATTERN = re.compile(r"\d+|\D+")


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def _primary(chunk: str) -> tuple[int, int | str]:
    if chunk.isdecimal():
        return (0, int(chunk))
    return (1, _strip_accents(chunk).casefold())


def alphanumeric_key(name: str) -> tuple[tuple[typ.Any, ...], ...]:
    """Return a sort key comparing base letters, then accents, then case."""
    chunks = CHUNK_PATTERN.findall(name)
    return (
        tuple(_primary(chunk) for chunk in chunks),
        tuple(chunk.casefold() for chunk in chunks),
        tuple(chunk.swapcase() for chunk in chunks),
    )


__all__ = ["alphanumeric_key"]

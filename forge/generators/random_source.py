"""
CSPRNG Access
==============

The single point through which the generators draw randomness. Every
helper is backed by :mod:`secrets`, i.e. the operating system's
cryptographically secure generator. The :mod:`random` module is never
used here.

``secrets.randbelow`` maps random bits onto ``[0, n)`` by rejection
sampling, so index selection carries no modulo bias.
"""

from __future__ import annotations

import secrets
from typing import MutableSequence, TypeVar

from forge.core.errors import EmptyCharsetError

T = TypeVar("T")


def random_index(upper: int) -> int:
    """Uniform integer in ``[0, upper)``."""
    return secrets.randbelow(upper)


def random_char(charset: str) -> str:
    """Uniformly pick one character of *charset*.

    Raises:
        EmptyCharsetError: If *charset* is empty.
    """
    if not charset:
        raise EmptyCharsetError("Character set cannot be empty")
    return charset[random_index(len(charset))]


def random_string(charset: str, length: int) -> str:
    """*length* characters drawn independently and uniformly from *charset*."""
    if not charset:
        raise EmptyCharsetError("Character set cannot be empty")
    size = len(charset)
    return "".join(charset[random_index(size)] for _ in range(length))


def random_bytes(count: int) -> bytes:
    """*count* bytes from the CSPRNG."""
    return secrets.token_bytes(count)


def shuffle(items: MutableSequence[T]) -> None:
    """Shuffle *items* in place (Fisher-Yates, Durstenfeld variant)."""
    for i in range(len(items) - 1, 0, -1):
        j = random_index(i + 1)
        items[i], items[j] = items[j], items[i]

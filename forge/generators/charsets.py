"""
Character Sets
===============

Built-in alphabets, the similar-character groups used to filter out
visually confusable characters, and the named presets offered for custom
character sets.
"""

from __future__ import annotations

import string

from forge.core.models import CharsetInfo

LOWERCASE: str = string.ascii_lowercase
UPPERCASE: str = string.ascii_uppercase
DIGITS: str = string.digits
# The 32 printable ASCII punctuation characters.
SYMBOLS: str = string.punctuation

ALPHANUMERIC: str = LOWERCASE + UPPERCASE + DIGITS
WITH_SYMBOLS: str = ALPHANUMERIC + SYMBOLS
HEXADECIMAL: str = "0123456789abcdef"
BASE64_ALPHABET: str = UPPERCASE + LOWERCASE + DIGITS + "+/"
URL_SAFE_BASE64_ALPHABET: str = UPPERCASE + LOWERCASE + DIGITS + "-_"

SIMILAR_CHARACTERS: dict[str, tuple[str, ...]] = {
    "0": ("O", "o", "Q", "D"),
    "O": ("0", "o", "Q", "D"),
    "o": ("0", "O", "Q", "D"),
    "1": ("l", "I", "|", "i"),
    "l": ("1", "I", "|", "i"),
    "I": ("1", "l", "|", "i"),
    "i": ("1", "l", "I", "|"),
    "|": ("1", "l", "I", "i"),
    "5": ("S", "s"),
    "S": ("5", "s"),
    "s": ("5", "S"),
    "2": ("Z", "z"),
    "Z": ("2", "z"),
    "z": ("2", "Z"),
}

# Every character that is confusable with some other character.
_SIMILAR_POOL: frozenset[str] = frozenset(
    ch for group in SIMILAR_CHARACTERS.values() for ch in group
)

PRESETS: dict[str, str] = {
    "alphanumeric": ALPHANUMERIC,
    "lowercase": LOWERCASE,
    "uppercase": UPPERCASE,
    "numbers": DIGITS,
    "symbols": SYMBOLS,
    "alphanumeric-safe": "abcdefghijkmnopqrstuvwxyzABCDEFGHJKLMNPQRSTUVWXYZ23456789",
    "hex": HEXADECIMAL,
    "base64": BASE64_ALPHABET,
}


def exclude_similar_characters(charset: str) -> str:
    """Remove every character that belongs to a similar-character group.

    Order and duplicates of the remaining characters are preserved.
    """
    return "".join(ch for ch in charset if ch not in _SIMILAR_POOL)


def get_similar_characters(char: str) -> list[str]:
    """Characters visually confusable with *char* (empty if none)."""
    return list(SIMILAR_CHARACTERS.get(char, ()))


def get_preset(name: str) -> str:
    """Look up a named preset.

    Raises:
        KeyError: If *name* is not a known preset.
    """
    try:
        return PRESETS[name]
    except KeyError:
        known = ", ".join(sorted(PRESETS))
        raise KeyError(f"Unknown character set preset {name!r} (known: {known})") from None


def inspect_charset(charset: str, exclude_similar: bool = False) -> CharsetInfo:
    """Describe the effective alphabet a custom character set yields.

    Args:
        charset: User-supplied characters, duplicates allowed.
        exclude_similar: Apply similar-character filtering first.

    Returns:
        A :class:`CharsetInfo`; ``valid`` is False when nothing is left
        to sample from.
    """
    effective = exclude_similar_characters(charset) if exclude_similar else charset
    removed = "".join(dict.fromkeys(ch for ch in charset if ch not in effective))
    unique = len(set(effective))
    return CharsetInfo(
        charset=charset,
        effective=effective,
        exclude_similar=exclude_similar,
        size=len(effective),
        unique_count=unique,
        duplicate_count=len(charset) - len(set(charset)),
        removed=removed,
        valid=len(effective) > 0,
    )

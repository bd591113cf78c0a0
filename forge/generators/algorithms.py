"""
Secret Generation Algorithms
=============================

One function per :class:`GeneratorAlgorithm`, the custom character-set
generator, and :func:`generate`, which validates a
:class:`GeneratorConfig` and routes it to the matching function.

All randomness comes from :mod:`forge.generators.random_source`. The
functions are pure apart from consuming CSPRNG output and keep no state
between calls, so any number of them may run concurrently.

Length policy:
    - A negative ``length``/``byte_count`` or fewer than one API-key
      segment (or segment character) raises :class:`InvalidConfigError`
      before any randomness is drawn.
    - ``length == 0`` yields an empty string, except for ``uuid`` (fixed
      shape) and ``password`` (see :func:`generate_password`).

References:
    - RFC 4122 (2005), Section 4.4: UUIDs from truly random numbers.
    - RFC 4648 (2006), Section 5: Base 64 with URL and filename safe alphabet.
    - Knuth, D. E. (1997). The Art of Computer Programming, Vol. 2,
      Algorithm 3.4.2P (shuffling).
"""

from __future__ import annotations

import base64
import uuid
from typing import Callable

from forge.core.errors import EmptyCharsetError, InvalidConfigError
from forge.core.models import GeneratorAlgorithm, GeneratorConfig, PasswordOptions
from forge.generators import charsets
from forge.generators.random_source import (
    random_bytes,
    random_char,
    random_string,
    shuffle,
)


# ===================================================================== #
#  Custom Character Set
# ===================================================================== #


def generate_with_custom_charset(
    length: int,
    charset: str,
    exclude_similar: bool = False,
) -> str:
    """Draw *length* characters uniformly from a user-supplied set.

    Raises:
        EmptyCharsetError: If *charset* is empty, or empty once similar
            characters are removed.
    """
    if not charset:
        raise EmptyCharsetError("Custom character set is empty.")

    effective = (
        charsets.exclude_similar_characters(charset) if exclude_similar else charset
    )
    if not effective:
        raise EmptyCharsetError(
            "Character set is empty after filtering similar characters. "
            "Please add more characters."
        )
    return random_string(effective, length)


# ===================================================================== #
#  Built-in Algorithms
# ===================================================================== #


def generate_alphanumeric(length: int = 32) -> str:
    """Letters and digits (62-character alphabet)."""
    return random_string(charsets.ALPHANUMERIC, length)


def generate_with_symbols(length: int = 32, include_symbols: bool = True) -> str:
    """Letters, digits and, unless disabled, the 32 ASCII symbols."""
    alphabet = charsets.WITH_SYMBOLS if include_symbols else charsets.ALPHANUMERIC
    return random_string(alphabet, length)


def generate_hexadecimal(length: int = 32) -> str:
    """Lowercase hexadecimal digits."""
    return random_string(charsets.HEXADECIMAL, length)


def generate_base64(length: int = 32) -> str:
    """Characters sampled from the Base64 alphabet.

    This samples the alphabet directly; it is not an encoding of bytes.
    """
    return random_string(charsets.BASE64_ALPHABET, length)


def generate_uuid() -> str:
    """Random (version 4) UUID in canonical 8-4-4-4-12 form.

    The version nibble is ``4`` and the variant nibble falls in ``8-b``.
    """
    return str(uuid.UUID(bytes=random_bytes(16), version=4))


def generate_secure_random(length: int = 32) -> str:
    """URL-safe Base64 text of *length* random bytes, cut to *length* chars.

    Truncating after encoding keeps roughly ``6 * length`` bits of the
    ``8 * length`` drawn.
    """
    encoded = base64.urlsafe_b64encode(random_bytes(length)).rstrip(b"=")
    return encoded.decode("ascii")[:length]


def generate_api_key(segments: int = 4, segment_length: int = 4) -> str:
    """Hyphen-joined groups of alphanumeric characters (``xxxx-xxxx-...``)."""
    return "-".join(
        random_string(charsets.ALPHANUMERIC, segment_length) for _ in range(segments)
    )


def generate_numeric_pin(length: int = 6) -> str:
    """Decimal digits only."""
    return random_string(charsets.DIGITS, length)


def password_classes(options: PasswordOptions) -> list[str]:
    """Alphabets of the enabled password classes, in seeding order."""
    classes: list[str] = []
    if options.include_lowercase:
        classes.append(charsets.LOWERCASE)
    if options.include_uppercase:
        classes.append(charsets.UPPERCASE)
    if options.include_numbers:
        classes.append(charsets.DIGITS)
    if options.include_symbols:
        classes.append(charsets.SYMBOLS)
    return classes


def generate_password(length: int = 16, options: PasswordOptions | None = None) -> str:
    """Password containing at least one character of every enabled class.

    One character per enabled class is drawn first, the rest is filled
    from the union of the enabled classes, and the whole sequence is
    shuffled so the guaranteed characters are not at predictable
    positions. With no class enabled, the alphanumeric alphabet is used
    without a per-class guarantee.

    When *length* is smaller than the number of enabled classes, every
    class still contributes its character and the result is longer than
    *length*.
    """
    options = options or PasswordOptions()
    classes = password_classes(options)
    if not classes:
        classes = [charsets.ALPHANUMERIC]
    pool = "".join(classes)

    chars = [random_char(alphabet) for alphabet in classes]
    chars.extend(random_char(pool) for _ in range(length - len(chars)))
    shuffle(chars)
    return "".join(chars)


def generate_binary_key(byte_count: int = 16) -> str:
    """*byte_count* random bytes rendered as two lowercase hex digits each."""
    return random_bytes(byte_count).hex()


# ===================================================================== #
#  Dispatch
# ===================================================================== #

_DISPATCH: dict[GeneratorAlgorithm, Callable[[GeneratorConfig], str]] = {
    GeneratorAlgorithm.ALPHANUMERIC: lambda c: generate_alphanumeric(c.length),
    GeneratorAlgorithm.WITH_SYMBOLS: lambda c: generate_with_symbols(c.length, c.include_symbols),
    GeneratorAlgorithm.HEXADECIMAL: lambda c: generate_hexadecimal(c.length),
    GeneratorAlgorithm.BASE64: lambda c: generate_base64(c.length),
    GeneratorAlgorithm.UUID: lambda c: generate_uuid(),
    GeneratorAlgorithm.SECURE_RANDOM: lambda c: generate_secure_random(c.length),
    GeneratorAlgorithm.API_KEY: lambda c: generate_api_key(c.segments, c.segment_length),
    GeneratorAlgorithm.NUMERIC_PIN: lambda c: generate_numeric_pin(c.length),
    GeneratorAlgorithm.PASSWORD: lambda c: generate_password(c.length, c.password_options),
    GeneratorAlgorithm.BINARY_KEY: lambda c: generate_binary_key(c.byte_count),
}

_missing = set(GeneratorAlgorithm) - set(_DISPATCH)
if _missing:
    raise RuntimeError(f"No generator registered for: {sorted(a.value for a in _missing)}")

# Algorithms whose output size does not come from ``length``.
_LENGTH_FREE: frozenset[GeneratorAlgorithm] = frozenset(
    {GeneratorAlgorithm.UUID, GeneratorAlgorithm.API_KEY, GeneratorAlgorithm.BINARY_KEY}
)


def validate_config(config: GeneratorConfig) -> None:
    """Reject structurally impossible parameters for the selected algorithm.

    Raises:
        InvalidConfigError: On a negative length or byte count, or an
            API key with fewer than one segment or segment character.
    """
    algorithm = config.algorithm
    if config.uses_custom_charset or algorithm not in _LENGTH_FREE:
        if config.length < 0:
            raise InvalidConfigError(f"length must be >= 0, got {config.length}")
    if config.uses_custom_charset:
        return

    if algorithm is GeneratorAlgorithm.BINARY_KEY and config.byte_count < 0:
        raise InvalidConfigError(f"byte_count must be >= 0, got {config.byte_count}")
    if algorithm is GeneratorAlgorithm.API_KEY:
        if config.segments < 1:
            raise InvalidConfigError(f"segments must be >= 1, got {config.segments}")
        if config.segment_length < 1:
            raise InvalidConfigError(
                f"segment_length must be >= 1, got {config.segment_length}"
            )


def generate(config: GeneratorConfig) -> str:
    """Produce one secret for *config*.

    A non-empty custom character set with ``use_custom_character_set``
    enabled overrides the algorithm's alphabet; otherwise the algorithm's
    own rule applies.

    Raises:
        EmptyCharsetError: The effective custom alphabet is empty.
        InvalidConfigError: A structural parameter is out of range.
    """
    validate_config(config)
    if config.uses_custom_charset:
        return generate_with_custom_charset(
            config.length,
            config.custom_character_set,
            config.exclude_similar_characters,
        )
    return _DISPATCH[config.algorithm](config)


def effective_alphabet(config: GeneratorConfig) -> str:
    """Every character an output of *config* may contain.

    Structural characters (the hyphens of ``uuid`` and ``api-key``) are
    included.
    """
    if config.uses_custom_charset:
        if config.exclude_similar_characters:
            return charsets.exclude_similar_characters(config.custom_character_set)
        return config.custom_character_set

    algorithm = config.algorithm
    if algorithm is GeneratorAlgorithm.WITH_SYMBOLS:
        return charsets.WITH_SYMBOLS if config.include_symbols else charsets.ALPHANUMERIC
    if algorithm is GeneratorAlgorithm.PASSWORD:
        return "".join(password_classes(config.password_options)) or charsets.ALPHANUMERIC
    return _STATIC_ALPHABETS[algorithm]


_STATIC_ALPHABETS: dict[GeneratorAlgorithm, str] = {
    GeneratorAlgorithm.ALPHANUMERIC: charsets.ALPHANUMERIC,
    GeneratorAlgorithm.HEXADECIMAL: charsets.HEXADECIMAL,
    GeneratorAlgorithm.BASE64: charsets.BASE64_ALPHABET,
    GeneratorAlgorithm.UUID: charsets.HEXADECIMAL + "-",
    GeneratorAlgorithm.SECURE_RANDOM: charsets.URL_SAFE_BASE64_ALPHABET,
    GeneratorAlgorithm.API_KEY: charsets.ALPHANUMERIC + "-",
    GeneratorAlgorithm.NUMERIC_PIN: charsets.DIGITS,
    GeneratorAlgorithm.BINARY_KEY: charsets.HEXADECIMAL,
}

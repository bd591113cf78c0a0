"""
Forge Error Taxonomy
=====================

Every failure the generator core can raise. All of them are local,
synchronous and recoverable: the caller is expected to fix its
configuration and try again. A failed call never returns partial output.
"""

from __future__ import annotations


class ForgeError(Exception):
    """Base class for all SecretForge errors."""

    pass


class EmptyCharsetError(ForgeError, ValueError):
    """The effective character set has no characters left to sample.

    Raised when a custom set is empty, or becomes empty once similar
    characters have been filtered out.
    """

    pass


class InvalidConfigError(ForgeError, ValueError):
    """A structural generation parameter is nonsensical.

    Examples are a negative length, zero API-key segments, or asking the
    distribution audit to test an algorithm that is non-uniform by design.
    """

    pass

"""
Strength Estimator
===================

Heuristic strength scoring for an arbitrary string: a length tier, a
character-variety bonus, a pool-based entropy estimate and penalties for
common weakening patterns, combined into a 0-100 score and a tier.

The entropy figure is ``log2(pool_size) * length``, where the pool is the
sum of the class sizes present (26 lowercase, 26 uppercase, 10 digits, 32
symbols). This is the entropy of a uniform draw from that pool, not the
information content of the actual string; the whole score is an
approximation meant for display, not a security guarantee.

References:
    - NIST SP 800-63B (2017). Digital Identity Guidelines --
      Authentication and Lifecycle Management.
    - Shannon, C. E. (1948). A Mathematical Theory of Communication.
"""

from __future__ import annotations

import math
import re
import string

from forge.core.models import StrengthLevel, StrengthResult
from forge.generators.charsets import SYMBOLS

_EMPTY_FEEDBACK = "Enter a password to check strength"

# Pool sizes per character class.
_LOWER_POOL = 26
_UPPER_POOL = 26
_DIGIT_POOL = 10
_SYMBOL_POOL = 32

_MAX_FEEDBACK = 4

_REPEATED_RUN = re.compile(r"(.)\1{2,}")
_COMMON_WEAK = re.compile(
    r"password|admin|12345|qwerty|letmein|welcome|monkey|dragon|master",
    re.IGNORECASE | re.ASCII,
)
# Case folding for pattern checks is ASCII only; "\u0130" is not "i".
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

_REPEAT_PENALTY = 10
_SEQUENCE_PENALTY = 15
_COMMON_PENALTY = 20


class StrengthEstimator:
    """Scores strings on a 0-100 scale and explains the score.

    Stateless; the same string always yields the same result.

    Usage::

        estimator = StrengthEstimator()
        result = estimator.estimate("kj2]aWru")
        print(result.strength.value, result.score, result.entropy)
    """

    def estimate(self, secret: str) -> StrengthResult:
        """Estimate the strength of *secret*.

        Args:
            secret: Any string, generated or user supplied.

        Returns:
            StrengthResult with tier, integer score, up to four feedback
            lines (positive ones first) and entropy rounded to 0.1 bit.
        """
        if not secret:
            return StrengthResult(
                strength=StrengthLevel.WEAK,
                score=0,
                feedback=[_EMPTY_FEEDBACK],
                entropy=0.0,
            )

        length = len(secret)
        feedback: list[str] = []

        score: float = self._length_score(length, feedback)

        variety = self._variety_score(secret, feedback)
        score += variety

        entropy = self.pool_entropy(secret)
        score += self._entropy_score(entropy)

        score = max(0.0, score - self.pattern_penalty(secret))

        if length >= 20:
            score += 10

        score = min(100.0, max(0.0, score))
        strength = StrengthLevel.from_score(score)

        if score >= 60:
            feedback.insert(0, "Good password strength!")
        if entropy >= 60:
            feedback.insert(0, "High entropy - excellent randomness")
        if length >= 16 and variety >= 35:
            feedback.insert(0, "Strong password with good variety")

        # Thresholds are integers, so flooring keeps the tier consistent
        # with the reported score.
        return StrengthResult(
            strength=strength,
            score=int(score),
            feedback=feedback[:_MAX_FEEDBACK],
            entropy=round(entropy, 1),
        )

    # ------------------------------------------------------------------ #
    #  Scoring components
    # ------------------------------------------------------------------ #

    @staticmethod
    def _length_score(length: int, feedback: list[str]) -> int:
        """Tiered length bonus; short lengths add a feedback line."""
        if length < 8:
            feedback.append("Password is too short (minimum 8 characters)")
            return 0
        if length < 10:
            feedback.append("Consider using a longer password (12+ characters)")
            return 15
        if length < 12:
            return 20
        if length < 16:
            return 25
        return 30

    @staticmethod
    def _variety_score(secret: str, feedback: list[str]) -> int:
        """+10 per letter case and digits, +15 for symbols."""
        has_lower = any("a" <= ch <= "z" for ch in secret)
        has_upper = any("A" <= ch <= "Z" for ch in secret)
        has_digit = any("0" <= ch <= "9" for ch in secret)
        has_symbol = any(ch in SYMBOLS for ch in secret)

        variety = 0
        if has_lower:
            variety += 10
        if has_upper:
            variety += 10
        if has_digit:
            variety += 10
        if has_symbol:
            variety += 15

        if not has_lower:
            feedback.append("Add lowercase letters")
        if not has_upper:
            feedback.append("Add uppercase letters")
        if not has_digit:
            feedback.append("Add numbers")
        if not has_symbol:
            feedback.append("Add special characters")
        return variety

    @staticmethod
    def _entropy_score(entropy: float) -> float:
        """Half a point per bit up to 40 bits, capped at 30 from 60 bits."""
        if entropy < 40:
            return entropy / 2
        if entropy < 60:
            return 20 + (entropy - 40) / 2
        return 30.0

    # ------------------------------------------------------------------ #
    #  Entropy
    # ------------------------------------------------------------------ #

    @staticmethod
    def pool_size(secret: str) -> int:
        """Sum of the class sizes present in *secret*.

        Anything that is not an ASCII letter or digit counts towards the
        symbol class.
        """
        has_lower = has_upper = has_digit = has_other = False
        for ch in secret:
            if "a" <= ch <= "z":
                has_lower = True
            elif "A" <= ch <= "Z":
                has_upper = True
            elif "0" <= ch <= "9":
                has_digit = True
            else:
                has_other = True

        pool = 0
        if has_lower:
            pool += _LOWER_POOL
        if has_upper:
            pool += _UPPER_POOL
        if has_digit:
            pool += _DIGIT_POOL
        if has_other:
            pool += _SYMBOL_POOL
        return pool

    @classmethod
    def pool_entropy(cls, secret: str) -> float:
        """``log2(pool_size) * length`` in bits (unrounded)."""
        pool = cls.pool_size(secret)
        if pool == 0:
            return 0.0
        return math.log2(pool) * len(secret)

    # ------------------------------------------------------------------ #
    #  Pattern Detection
    # ------------------------------------------------------------------ #

    @staticmethod
    def has_repeated_run(secret: str) -> bool:
        """Three or more identical characters in a row."""
        return _REPEATED_RUN.search(secret) is not None

    @staticmethod
    def has_ascending_sequence(secret: str) -> bool:
        """Three consecutive ascending letters or digits (``abc``, ``789``).

        ASCII letters are compared case-insensitively.
        """
        lowered = secret.translate(_ASCII_LOWER)
        for i in range(len(lowered) - 2):
            a, b, c = lowered[i], lowered[i + 1], lowered[i + 2]
            same_class = (
                all("a" <= ch <= "z" for ch in (a, b, c))
                or all("0" <= ch <= "9" for ch in (a, b, c))
            )
            if same_class and ord(b) == ord(a) + 1 and ord(c) == ord(b) + 1:
                return True
        return False

    @staticmethod
    def has_common_weak_substring(secret: str) -> bool:
        """Contains a well-known weak password fragment."""
        return _COMMON_WEAK.search(secret) is not None

    @classmethod
    def pattern_penalty(cls, secret: str) -> int:
        """Total penalty for the weakening patterns found in *secret*."""
        penalty = 0
        if cls.has_repeated_run(secret):
            penalty += _REPEAT_PENALTY
        if cls.has_ascending_sequence(secret):
            penalty += _SEQUENCE_PENALTY
        if cls.has_common_weak_substring(secret):
            penalty += _COMMON_PENALTY
        return penalty


def estimate(secret: str) -> StrengthResult:
    """Module-level convenience wrapper around :meth:`StrengthEstimator.estimate`."""
    return StrengthEstimator().estimate(secret)

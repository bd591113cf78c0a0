"""
Forge Core Data Models
=======================

Pydantic models for the SecretForge generator engine: the closed set of
generation algorithms, the immutable generation config, strength
estimation results, history records, character-set inspection results,
and distribution audit results.

All models are serialisable to JSON and are consumed by both the CLI
output layer and the export writers.

References:
    - RFC 4122 (2005). A Universally Unique IDentifier (UUID) URN Namespace.
    - NIST SP 800-63B (2017). Digital Identity Guidelines.
"""

from __future__ import annotations

import datetime as _dt
import enum
import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> _dt.datetime:
    return _dt.datetime.now(_dt.timezone.utc)


# ===================================================================== #
#  Enumerations
# ===================================================================== #


class GeneratorAlgorithm(str, enum.Enum):
    """Closed set of generation algorithms.

    The value is the tag used on the command line and in exports.
    """

    ALPHANUMERIC = "alphanumeric"
    WITH_SYMBOLS = "with-symbols"
    HEXADECIMAL = "hexadecimal"
    BASE64 = "base64"
    UUID = "uuid"
    SECURE_RANDOM = "secure-random"
    API_KEY = "api-key"
    NUMERIC_PIN = "numeric-pin"
    PASSWORD = "password"
    BINARY_KEY = "binary-key"

    @property
    def label(self) -> str:
        """Human-readable algorithm name."""
        return _ALGORITHM_LABELS[self]

    @property
    def description(self) -> str:
        """One-line description of what the algorithm produces."""
        return _ALGORITHM_DESCRIPTIONS[self]


_ALGORITHM_LABELS: dict[GeneratorAlgorithm, str] = {
    GeneratorAlgorithm.ALPHANUMERIC: "Alphanumeric",
    GeneratorAlgorithm.WITH_SYMBOLS: "With Symbols",
    GeneratorAlgorithm.HEXADECIMAL: "Hexadecimal",
    GeneratorAlgorithm.BASE64: "Base64",
    GeneratorAlgorithm.UUID: "UUID v4",
    GeneratorAlgorithm.SECURE_RANDOM: "Secure Random",
    GeneratorAlgorithm.API_KEY: "API Key",
    GeneratorAlgorithm.NUMERIC_PIN: "Numeric PIN",
    GeneratorAlgorithm.PASSWORD: "Password",
    GeneratorAlgorithm.BINARY_KEY: "Binary Key",
}

_ALGORITHM_DESCRIPTIONS: dict[GeneratorAlgorithm, str] = {
    GeneratorAlgorithm.ALPHANUMERIC: "Random string with letters and numbers (A-Z, a-z, 0-9)",
    GeneratorAlgorithm.WITH_SYMBOLS: "Random string with letters, numbers, and special characters",
    GeneratorAlgorithm.HEXADECIMAL: "Hexadecimal string (0-9, a-f)",
    GeneratorAlgorithm.BASE64: "Base64-like character set (A-Z, a-z, 0-9, +, /)",
    GeneratorAlgorithm.UUID: "UUID version 4 (standard format)",
    GeneratorAlgorithm.SECURE_RANDOM: "Cryptographically secure random bytes (URL-safe Base64)",
    GeneratorAlgorithm.API_KEY: "API key format (xxxx-xxxx-xxxx-xxxx)",
    GeneratorAlgorithm.NUMERIC_PIN: "Numeric PIN code (0-9)",
    GeneratorAlgorithm.PASSWORD: "Password with customizable character requirements",
    GeneratorAlgorithm.BINARY_KEY: "Binary key displayed as hexadecimal",
}


class StrengthLevel(str, enum.Enum):
    """Qualitative strength tier derived from the 0-100 score."""

    WEAK = "weak"
    MEDIUM = "medium"
    STRONG = "strong"
    VERY_STRONG = "very-strong"

    @classmethod
    def from_score(cls, score: float) -> StrengthLevel:
        """Map a score to its tier.

        Ranges:
          - [0, 30)   : WEAK
          - [30, 60)  : MEDIUM
          - [60, 80)  : STRONG
          - [80, 100] : VERY_STRONG
        """
        if score < 30:
            return cls.WEAK
        if score < 60:
            return cls.MEDIUM
        if score < 80:
            return cls.STRONG
        return cls.VERY_STRONG


# ===================================================================== #
#  Generation Config
# ===================================================================== #


class PasswordOptions(BaseModel):
    """Character classes a generated password must contain.

    Each enabled class contributes at least one character to the output.
    """

    model_config = ConfigDict(frozen=True)

    include_uppercase: bool = True
    include_lowercase: bool = True
    include_numbers: bool = True
    include_symbols: bool = False


class GeneratorConfig(BaseModel):
    """Immutable configuration consumed by a single generation call.

    Attributes:
        algorithm: Which generation rule applies.
        length: Character count; its meaning depends on the algorithm.
        include_symbols: Whether ``with-symbols`` adds the symbol set.
        segments: Number of hyphen-separated groups for ``api-key``.
        segment_length: Characters per ``api-key`` group.
        byte_count: Random bytes drawn by ``binary-key``.
        password_options: Required classes for ``password``.
        custom_character_set: User-supplied alphabet.
        use_custom_character_set: When true and the custom set is
            non-empty, it replaces the algorithm's alphabet entirely.
        exclude_similar_characters: Drop visually confusable characters
            from the custom set before sampling.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    algorithm: GeneratorAlgorithm = GeneratorAlgorithm.ALPHANUMERIC
    length: int = 32
    include_symbols: bool = True
    segments: int = 4
    segment_length: int = 4
    byte_count: int = 16
    password_options: PasswordOptions = Field(default_factory=PasswordOptions)
    custom_character_set: str = ""
    use_custom_character_set: bool = False
    exclude_similar_characters: bool = False

    @property
    def uses_custom_charset(self) -> bool:
        """True when the custom set overrides the built-in alphabet."""
        return self.use_custom_character_set and bool(self.custom_character_set)


# ===================================================================== #
#  Strength Models
# ===================================================================== #


class StrengthResult(BaseModel):
    """Heuristic strength estimate of a string.

    The score is an approximation for display purposes, not a
    cryptographic guarantee.

    Attributes:
        strength: Qualitative tier.
        score: Integer score in [0, 100].
        feedback: Up to four human-readable hints, positive ones first.
        entropy: ``log2(pool) * length`` in bits, one decimal place.
    """

    strength: StrengthLevel = StrengthLevel.WEAK
    score: int = Field(default=0, ge=0, le=100)
    feedback: list[str] = Field(default_factory=list, max_length=4)
    entropy: float = 0.0

    def summary(self) -> StrengthSummary:
        """Return the subset of this result kept alongside history records."""
        return StrengthSummary(
            score=self.score,
            strength=self.strength,
            entropy=self.entropy,
        )


class StrengthSummary(BaseModel):
    """Score, tier and entropy of a stored secret."""

    score: int
    strength: StrengthLevel
    entropy: float


# ===================================================================== #
#  History / Batch Records
# ===================================================================== #


class SavedSecret(BaseModel):
    """A generated secret together with its generation metadata."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    secret: str
    algorithm: str
    created_at: _dt.datetime = Field(default_factory=_utcnow)
    strength: Optional[StrengthSummary] = None

    @property
    def timestamp(self) -> int:
        """Creation time in milliseconds since the Unix epoch."""
        return int(self.created_at.timestamp() * 1000)


# ===================================================================== #
#  Character-set Inspection
# ===================================================================== #


class CharsetInfo(BaseModel):
    """Result of inspecting a user-supplied character set.

    Attributes:
        charset: The set as supplied.
        effective: The set after optional similar-character filtering.
        exclude_similar: Whether filtering was applied.
        size: Length of the effective set.
        unique_count: Distinct characters in the effective set.
        duplicate_count: Repeated characters in the supplied set.
        removed: Distinct characters dropped by filtering.
        valid: Whether the effective set can be sampled.
    """

    charset: str
    effective: str
    exclude_similar: bool = False
    size: int = 0
    unique_count: int = 0
    duplicate_count: int = 0
    removed: str = ""
    valid: bool = False


# ===================================================================== #
#  Distribution Audit
# ===================================================================== #


class DistributionResult(BaseModel):
    """Outcome of a chi-squared uniformity audit over generated output.

    Attributes:
        algorithm: Algorithm tag, or ``"custom"`` for a custom set.
        alphabet_size: Distinct characters the output is tested against.
        samples: Number of secrets generated.
        characters: Number of characters counted.
        chi_squared: Pearson chi-squared statistic.
        p_value: Probability of a statistic at least this large under
            a uniform draw.
        significance: Rejection threshold for *p_value*.
        passed: ``p_value >= significance`` and nothing out of alphabet.
        out_of_alphabet: Characters found outside the alphabet.
        shannon_entropy: Observed entropy in bits per character.
        max_entropy: Entropy of a uniform draw from the alphabet.
    """

    algorithm: str
    alphabet_size: int
    samples: int
    characters: int
    chi_squared: float
    p_value: float = Field(ge=0.0, le=1.0)
    significance: float
    passed: bool
    out_of_alphabet: int = 0
    shannon_entropy: float = 0.0
    max_entropy: float = 0.0

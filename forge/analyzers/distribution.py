"""
Distribution Auditor
=====================

Generates a sample of secrets for a configuration and checks that their
characters are spread evenly over the configuration's alphabet, using
Pearson's chi-squared goodness-of-fit test. A biased range reduction or a
wrong alphabet shows up as a vanishing p-value or as characters outside
the alphabet.

Structural characters are not counted: API-key hyphens, and for UUIDs the
hyphens plus the fixed version and variant nibbles. ``password`` output
is skewed towards its guaranteed classes by construction and cannot be
audited.

References:
    - Pearson, K. (1900). On the criterion that a given system of
      deviations from the probable ... Philosophical Magazine, 50(302).
    - NIST SP 800-22 Rev. 1a (2010). A Statistical Test Suite for
      Random and Pseudorandom Number Generators.
"""

from __future__ import annotations

import math
from typing import Callable

from shared.math_utils import (
    alphabet_weights,
    chi_squared_test,
    shannon_entropy,
    symbol_histogram,
)

from forge.core.errors import EmptyCharsetError, InvalidConfigError
from forge.core.models import DistributionResult, GeneratorAlgorithm, GeneratorConfig
from forge.generators.algorithms import effective_alphabet, generate


def _strip_hyphens(secret: str) -> str:
    return secret.replace("-", "")


def _uuid_random_nibbles(secret: str) -> str:
    hex_digits = secret.replace("-", "")
    # Index 12 is the version nibble, index 16 the variant nibble.
    return hex_digits[:12] + hex_digits[13:16] + hex_digits[17:]


_EXTRACTORS: dict[GeneratorAlgorithm, Callable[[str], str]] = {
    GeneratorAlgorithm.API_KEY: _strip_hyphens,
    GeneratorAlgorithm.UUID: _uuid_random_nibbles,
}


class DistributionAuditor:
    """Chi-squared uniformity audit of generator output.

    Usage::

        auditor = DistributionAuditor(samples=500)
        result = auditor.audit(GeneratorConfig(algorithm="hexadecimal"))
        print(result.p_value, result.passed)

    Args:
        samples: Number of secrets to generate per audit.
        significance: p-value below which uniformity is rejected.
    """

    def __init__(self, samples: int = 1000, significance: float = 0.01) -> None:
        if samples < 1:
            raise InvalidConfigError(f"samples must be >= 1, got {samples}")
        if not 0.0 < significance < 1.0:
            raise InvalidConfigError(
                f"significance must lie in (0, 1), got {significance}"
            )
        self.samples = samples
        self.significance = significance

    def audit(self, config: GeneratorConfig) -> DistributionResult:
        """Generate ``samples`` secrets for *config* and test uniformity.

        Raises:
            InvalidConfigError: For ``password`` (non-uniform by design)
                or when the configuration produces no characters to count.
            EmptyCharsetError: When the effective alphabet is empty.
        """
        custom = config.uses_custom_charset
        if not custom and config.algorithm is GeneratorAlgorithm.PASSWORD:
            raise InvalidConfigError(
                "password output guarantees one character per class and is "
                "not uniform; audit a plain alphabet algorithm instead"
            )

        alphabet = effective_alphabet(config)
        extract: Callable[[str], str] = (
            (lambda s: s) if custom else _EXTRACTORS.get(config.algorithm, lambda s: s)
        )
        if not custom and config.algorithm in _EXTRACTORS:
            alphabet = alphabet.replace("-", "")
        if not alphabet:
            raise EmptyCharsetError("Nothing to audit: the effective alphabet is empty.")

        text = "".join(extract(generate(config)) for _ in range(self.samples))
        if not text:
            raise InvalidConfigError("Configuration produces empty secrets; nothing to audit.")

        observed, outside = symbol_histogram(text, alphabet)
        counted = float(observed.sum())
        weights = alphabet_weights(alphabet)

        if counted > 0:
            chi2, p_value = chi_squared_test(observed, weights * counted)
        else:
            chi2, p_value = 0.0, 0.0
        p_value = min(1.0, max(0.0, p_value))

        distinct = len(weights)
        return DistributionResult(
            algorithm="custom" if custom else config.algorithm.value,
            alphabet_size=distinct,
            samples=self.samples,
            characters=len(text),
            chi_squared=round(chi2, 4),
            p_value=p_value,
            significance=self.significance,
            passed=p_value >= self.significance and outside == 0,
            out_of_alphabet=outside,
            shannon_entropy=round(shannon_entropy(text), 4),
            max_entropy=round(self._max_entropy(weights), 4),
        )

    @staticmethod
    def _max_entropy(weights) -> float:
        """Entropy of one draw from the alphabet (log2 of its size when uniform)."""
        return -sum(float(w) * math.log2(float(w)) for w in weights if w > 0)

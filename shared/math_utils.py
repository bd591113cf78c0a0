"""
SecretForge Mathematical Utilities
====================================

Entropy and goodness-of-fit helpers used by the distribution audit to
check that generated secrets are spread evenly over their alphabet.

References:
    [1] Shannon, C. E. (1948). A Mathematical Theory of Communication.
        Bell System Technical Journal, 27(3), 379-423.
    [2] Pearson, K. (1900). On the Criterion that a Given System of
        Deviations from the Probable ... Philosophical Magazine, 50(302),
        157-175.
    [3] Press, W. H. et al. (2007). Numerical Recipes (3rd ed.).
        Cambridge University Press, Section 6.2.
"""

from __future__ import annotations

import math
from collections import Counter
from typing import Iterable

import numpy as np
from numpy.typing import NDArray

FloatArray = NDArray[np.floating]


# ========================== Entropy Measures ===============================


def shannon_entropy(symbols: Iterable[str]) -> float:
    """Compute the Shannon entropy of a symbol sequence.

    .. math::

        H = -\\sum_i p_i \\, \\log_2(p_i)

    where :math:`p_i` is the relative frequency of symbol *i*. The result
    is in **bits per symbol**.

    Args:
        symbols: Any iterable of hashable symbols (a string works).

    Returns:
        Shannon entropy in bits per symbol. Returns 0.0 for empty input.
    """
    counts = Counter(symbols)
    length = sum(counts.values())
    if length == 0:
        return 0.0

    entropy = 0.0
    for count in counts.values():
        p = count / length
        entropy -= p * math.log2(p)
    return entropy


def symbol_histogram(text: str, alphabet: str) -> tuple[FloatArray, int]:
    """Count occurrences of each distinct *alphabet* character in *text*.

    Bins follow the first-occurrence order of characters in *alphabet*.

    Returns:
        ``(counts, outside)`` where *counts* is a float64 array with one
        bin per distinct alphabet character and *outside* is the number
        of characters of *text* that are not in the alphabet.
    """
    order = list(dict.fromkeys(alphabet))
    index = {ch: i for i, ch in enumerate(order)}
    hist = np.zeros(len(order), dtype=np.float64)
    outside = 0
    for ch in text:
        pos = index.get(ch)
        if pos is None:
            outside += 1
        else:
            hist[pos] += 1.0
    return hist, outside


def alphabet_weights(alphabet: str) -> FloatArray:
    """Sampling probability of each distinct character of *alphabet*.

    A character listed twice is drawn twice as often, so weights follow
    multiplicity. Bins match :func:`symbol_histogram`.
    """
    counts = Counter(alphabet)
    order = list(dict.fromkeys(alphabet))
    weights = np.array([counts[ch] for ch in order], dtype=np.float64)
    return weights / weights.sum()


# ======================== Statistical Tests ================================

_GAMMA_EPS = 1e-15
_GAMMA_MAX_ITER = 500
_GAMMA_FLOOR = 1e-300


def chi_squared_test(
    observed: FloatArray, expected: FloatArray
) -> tuple[float, float]:
    """Pearson's chi-squared goodness-of-fit test.

    .. math::

        \\chi^2 = \\sum_i \\frac{(O_i - E_i)^2}{E_i}

    with ``k - 1`` degrees of freedom for *k* bins.

    Returns:
        ``(statistic, p_value)``.

    Raises:
        ValueError: If the arrays differ in shape or an expected count
            is not positive.
    """
    observed = np.asarray(observed, dtype=np.float64)
    expected = np.asarray(expected, dtype=np.float64)
    if observed.shape != expected.shape:
        raise ValueError("observed and expected must have the same shape")
    if np.any(expected <= 0):
        raise ValueError("expected counts must be > 0")

    statistic = float(np.sum((observed - expected) ** 2 / expected))
    return statistic, chi_squared_sf(statistic, observed.size - 1)


def chi_squared_sf(statistic: float, dof: int) -> float:
    """Survival function of the chi-squared distribution, ``P(X >= statistic)``.

    Equal to ``scipy.stats.chi2.sf(statistic, dof)``. With no degrees of
    freedom every statistic is unsurprising and 1.0 is returned.
    """
    if dof <= 0 or statistic <= 0.0:
        return 1.0
    return _regularized_gamma_q(dof / 2.0, statistic / 2.0)


def _regularized_gamma_q(a: float, x: float) -> float:
    """Q(a, x) = Gamma(a, x) / Gamma(a) for ``a > 0``, ``x > 0``.

    Below ``x = a + 1`` the lower function is summed as a power series
    and subtracted from one; above it the upper function is evaluated as
    a continued fraction with the modified Lentz method [3].
    """
    log_prefactor = -x + a * math.log(x) - math.lgamma(a)

    if x < a + 1.0:
        term = total = 1.0 / a
        denom = a
        for _ in range(_GAMMA_MAX_ITER):
            denom += 1.0
            term *= x / denom
            total += term
            if abs(term) < abs(total) * _GAMMA_EPS:
                break
        return max(0.0, 1.0 - total * math.exp(log_prefactor))

    b = x + 1.0 - a
    c = 1.0 / _GAMMA_FLOOR
    d = 1.0 / b
    fraction = d
    for n in range(1, _GAMMA_MAX_ITER):
        an = -n * (n - a)
        b += 2.0
        d = an * d + b
        d = _GAMMA_FLOOR if abs(d) < _GAMMA_FLOOR else d
        c = b + an / c
        c = _GAMMA_FLOOR if abs(c) < _GAMMA_FLOOR else c
        d = 1.0 / d
        step = d * c
        fraction *= step
        if abs(step - 1.0) < _GAMMA_EPS:
            break
    return fraction * math.exp(log_prefactor)

"""
Forge Analyzers
================

Strength estimation for arbitrary strings and the chi-squared
distribution audit for generator output.
"""

from forge.analyzers.distribution import DistributionAuditor
from forge.analyzers.strength import StrengthEstimator, estimate

__all__ = [
    "DistributionAuditor",
    "StrengthEstimator",
    "estimate",
]

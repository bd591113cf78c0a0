"""
Forge Output Module
====================

Console display and TXT / JSON export for SecretForge results.
"""

from forge.output.console import ForgeConsoleOutput
from forge.output.report import EXPORT_FORMATS, ForgeReportGenerator

__all__ = [
    "EXPORT_FORMATS",
    "ForgeConsoleOutput",
    "ForgeReportGenerator",
]

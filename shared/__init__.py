"""
SecretForge Shared Module
=========================

Configuration, logging, console and statistics helpers shared by the
SecretForge packages.
"""

from shared.config import ForgeConfig

__all__ = ["ForgeConfig"]

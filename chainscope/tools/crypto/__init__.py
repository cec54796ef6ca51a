"""Crypto analysis tool facade and function-calling definitions."""

from .definitions import CRYPTO_TOOL_DEFINITIONS, execute_tool
from .fetcher import CryptoAnalysisTool

__all__ = ["CryptoAnalysisTool", "CRYPTO_TOOL_DEFINITIONS", "execute_tool"]

"""Configuration loader for the chainscope tools."""

from __future__ import annotations

import logging
import os
from typing import List

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _as_bool(value: str, default: bool = False) -> bool:
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


def _parse_chain_list(value: str) -> List[str]:
    """Parse a comma-separated chain list into lowercase identifiers."""
    if not value:
        return []
    chains: List[str] = []
    for item in value.split(","):
        candidate = item.strip().lower()
        if candidate and candidate not in chains:
            chains.append(candidate)
    return chains


def _as_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except ValueError:
        logger.warning("无法解析 %s=%s，使用默认值 %s", name, raw, default)
        return float(default)


class Config:
    """Application configuration loaded from .env."""

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_UTC_OFFSET_HOURS: float = _as_float("LOG_UTC_OFFSET_HOURS", "0")

    # RPC gateway
    RPC_GATEWAY_PROVIDER: str = os.getenv("RPC_GATEWAY_PROVIDER", "x402labs")
    RPC_GATEWAY_URL: str = os.getenv("RPC_GATEWAY_URL", "https://x402labs.cloud/rpc")
    X402LABS_API_KEY: str = os.getenv("X402LABS_API_KEY", "")
    RPC_TIMEOUT_SECONDS: float = _as_float("RPC_TIMEOUT_SECONDS", "10")

    # Multi-chain analysis
    MULTICHAIN_PARALLEL: bool = _as_bool(os.getenv("MULTICHAIN_PARALLEL", "false"))
    MULTICHAIN_DEFAULT_CHAINS: List[str] = _parse_chain_list(
        os.getenv("MULTICHAIN_DEFAULT_CHAINS", "")
    )

    # Solana
    SOLANA_SIGNATURES_MAX_LIMIT: int = int(os.getenv("SOLANA_SIGNATURES_MAX_LIMIT", "100"))

    def describe(self) -> dict:
        """Return a log-safe view of the active settings."""
        return {
            "provider": self.RPC_GATEWAY_PROVIDER,
            "endpoint": self.RPC_GATEWAY_URL,
            "api_key_configured": bool(self.X402LABS_API_KEY.strip()),
            "timeout": self.RPC_TIMEOUT_SECONDS,
            "parallel": self.MULTICHAIN_PARALLEL,
            "default_chains": list(self.MULTICHAIN_DEFAULT_CHAINS),
        }

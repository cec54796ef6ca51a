"""Blockchain RPC tools integration for the crypto assistant."""

from .base import BaseTool, ToolResult
from .crypto.fetcher import CryptoAnalysisTool
from .exceptions import (
    GatewayRateLimitError,
    MalformedResponseError,
    RpcProtocolError,
    RpcTimeoutError,
    ToolFetchError,
    ToolRateLimitError,
    ToolTimeoutError,
    TransportError,
    UnsupportedChainError,
)
from .rpc.aggregator import ChainResult, MultiChainAggregator

__all__ = [
    "BaseTool",
    "ToolResult",
    "CryptoAnalysisTool",
    "MultiChainAggregator",
    "ChainResult",
    "ToolFetchError",
    "ToolTimeoutError",
    "ToolRateLimitError",
    "UnsupportedChainError",
    "TransportError",
    "RpcTimeoutError",
    "GatewayRateLimitError",
    "RpcProtocolError",
    "MalformedResponseError",
]

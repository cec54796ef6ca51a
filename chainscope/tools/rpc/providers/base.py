"""Base classes shared by RPC gateway providers."""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, List, Optional, Sequence

from ...base import BaseTool
from ..chains import ChainDescriptor, SUPPORTED_CHAINS, is_chain_supported


class RpcGatewayProvider(BaseTool):
    """Base interface for JSON-RPC gateways that route by chain."""

    def __init__(self, config) -> None:
        super().__init__(config)

    @abstractmethod
    async def call(self, chain: str, method: str, params: Optional[Sequence[Any]] = None) -> Any:
        """Send one JSON-RPC request to ``chain`` and return the decoded result."""
        raise NotImplementedError

    async def fetch(self, **kwargs) -> Any:
        """Bridge BaseTool.fetch to the provider call implementation."""
        return await self.call(**kwargs)

    def supported_chains(self) -> List[ChainDescriptor]:
        return list(SUPPORTED_CHAINS.values())

    def is_chain_supported(self, chain: str) -> bool:
        return is_chain_supported(chain)

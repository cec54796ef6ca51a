"""Multi-chain native balance aggregation with per-chain failure isolation."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..exceptions import ToolFetchError
from .chains import get_chain, normalize_chain, supported_chain_ids
from .evm import EvmRpc
from .models import BalanceResult
from .providers.base import RpcGatewayProvider
from .solana import SOLANA_CHAIN, SolanaRpc
from .units import plain_decimal
from chainscope.utils import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class ChainResult:
    """Outcome of one chain's balance lookup."""

    chain: str
    success: bool
    payload: Optional[BalanceResult] = None
    error: Optional[str] = None
    chain_name: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"chain": self.chain, "success": self.success}
        if self.chain_name:
            data["chainName"] = self.chain_name
        if self.success and self.payload is not None:
            if self.payload.chain == SOLANA_CHAIN:
                data["balance"] = plain_decimal(self.payload.amount)
            else:
                data["balance"] = self.payload.formatted
            data["balanceFormatted"] = self.payload.display
            data["rawBalance"] = str(self.payload.raw)
        else:
            data["error"] = self.error
        return data


class MultiChainAggregator:
    """Fetch a wallet's native balance on several chains.

    Every requested chain yields exactly one ``ChainResult`` in request
    order; a failing chain is recorded and never aborts the others.
    """

    def __init__(self, gateway: RpcGatewayProvider, config=None) -> None:
        self._gateway = gateway
        self._evm = EvmRpc(gateway)
        self._solana = SolanaRpc(gateway)
        self._parallel = bool(getattr(config, "MULTICHAIN_PARALLEL", False))
        self._default_chains = list(getattr(config, "MULTICHAIN_DEFAULT_CHAINS", None) or [])

    def default_chains(self) -> List[str]:
        return list(self._default_chains) or supported_chain_ids()

    async def analyze(self, address: str, chains: Optional[Sequence[str]] = None) -> List[ChainResult]:
        chains_to_check = list(chains) if chains is not None else self.default_chains()
        logger.info(
            "🔍 多链分析: address=%s chains=%s parallel=%s",
            address,
            ",".join(map(str, chains_to_check)),
            self._parallel,
        )

        if self._parallel:
            # gather preserves argument order
            results = list(
                await asyncio.gather(*(self._check_chain(address, c) for c in chains_to_check))
            )
        else:
            results = []
            for chain in chains_to_check:
                results.append(await self._check_chain(address, chain))

        failed = sum(1 for r in results if not r.success)
        logger.info("多链分析完成: address=%s total=%d failed=%d", address, len(results), failed)
        return results

    async def _check_chain(self, address: str, chain: str) -> ChainResult:
        descriptor = get_chain(chain)
        try:
            balance = await self._fetch_balance(address, chain)
        except ToolFetchError as exc:
            logger.warning("链余额查询失败: chain=%s error=%s", chain, exc)
            return ChainResult(chain=chain, success=False, error=str(exc) or type(exc).__name__)
        except Exception as exc:
            logger.error("链余额查询异常: chain=%s error=%s", chain, exc, exc_info=True)
            return ChainResult(
                chain=chain,
                success=False,
                error=str(exc) or "Failed to get balance",
            )

        return ChainResult(
            chain=chain,
            success=True,
            payload=balance,
            chain_name=descriptor.name if descriptor else None,
        )

    async def _fetch_balance(self, address: str, chain: str) -> BalanceResult:
        if normalize_chain(chain) == SOLANA_CHAIN:
            return await self._solana.get_balance(address)
        return await self._evm.get_balance(chain, address)

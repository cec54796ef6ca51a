"""Crypto analysis tool facade over the multi-chain RPC gateway."""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..base import ToolResult
from ..exceptions import ToolFetchError
from ..rpc import create_rpc_gateway
from ..rpc.aggregator import MultiChainAggregator
from ..rpc.chains import get_chain, normalize_chain
from ..rpc.evm import EvmRpc
from ..rpc.solana import DEFAULT_SIGNATURE_LIMIT, SOLANA_CHAIN, SolanaRpc
from ..rpc.units import plain_decimal, wei_to_ether, wei_to_gwei
from chainscope.utils import setup_logger

logger = setup_logger(__name__)


class CryptoAnalysisTool:
    """Answer wallet, transaction, block and gas questions across chains.

    Each method returns a ``ToolResult``; gateway errors become failed
    results with the error message, they are never raised to the caller.
    """

    SOURCE = "x402labs"

    def __init__(self, config, gateway=None) -> None:
        self._config = config
        self._gateway = gateway or create_rpc_gateway(config)
        self._evm = EvmRpc(self._gateway)
        self._solana = SolanaRpc(self._gateway)
        self._aggregator = MultiChainAggregator(self._gateway, config)
        self._max_signatures = int(getattr(config, "SOLANA_SIGNATURES_MAX_LIMIT", 100))

    def _failed(self, error: Exception, fallback: str, **context) -> ToolResult:
        message = str(error) or fallback
        return ToolResult.failed(self.SOURCE, message, data=dict(context))

    async def wallet_balance(self, *, address: str, chain: str) -> ToolResult:
        logger.info("💰 查询余额: address=%s chain=%s", address, chain)
        try:
            if normalize_chain(chain) == SOLANA_CHAIN:
                balance = await self._solana.get_balance(address)
                data = {
                    "address": address,
                    "chain": chain,
                    "balance": plain_decimal(balance.amount),
                    "balanceFormatted": balance.display,
                    "rawBalance": str(balance.raw),
                }
            else:
                balance = await self._evm.get_balance(chain, address)
                data = {
                    "address": address,
                    "chain": chain,
                    "chainName": get_chain(chain).name,
                    "balance": balance.formatted,
                    "balanceFormatted": balance.display,
                    "rawBalance": str(balance.raw),
                }
        except ToolFetchError as exc:
            logger.warning("余额查询失败: address=%s chain=%s error=%s", address, chain, exc)
            return self._failed(exc, "Failed to get balance", address=address, chain=chain)
        return ToolResult.ok(self.SOURCE, data)

    async def transaction(self, *, tx_hash: str, chain: str) -> ToolResult:
        logger.info("🔍 查询交易: hash=%s chain=%s", tx_hash, chain)
        try:
            if normalize_chain(chain) == SOLANA_CHAIN:
                tx = await self._solana.get_transaction(tx_hash)
                if tx is None:
                    return ToolResult.failed(
                        self.SOURCE, "transaction_not_found", data={"txHash": tx_hash, "chain": chain}
                    )
                data = {"chain": chain, "hash": tx_hash, "transaction": tx, "type": "solana"}
            else:
                tx = await self._evm.get_transaction(chain, tx_hash)
                if tx is None:
                    return ToolResult.failed(
                        self.SOURCE, "transaction_not_found", data={"txHash": tx_hash, "chain": chain}
                    )
                receipt = await self._evm.get_transaction_receipt(chain, tx_hash)
                descriptor = get_chain(chain)
                if receipt is None:
                    status = "pending"
                else:
                    status = "success" if receipt.succeeded else "failed"
                data = {
                    "chain": chain,
                    "hash": tx_hash,
                    "from": tx.from_address,
                    "to": tx.to_address,
                    "value": str(tx.value),
                    "valueFormatted": f"{wei_to_ether(tx.value)} {descriptor.native_symbol}",
                    "gasUsed": receipt.gas_used if receipt else None,
                    "gasPrice": tx.gas_price,
                    "blockNumber": tx.block_number,
                    "status": status,
                    "type": "evm",
                    "transaction": tx.raw,
                    "receipt": receipt.raw if receipt else None,
                }
        except ToolFetchError as exc:
            logger.warning("交易查询失败: hash=%s chain=%s error=%s", tx_hash, chain, exc)
            return self._failed(exc, "Failed to get transaction", txHash=tx_hash, chain=chain)
        return ToolResult.ok(self.SOURCE, data)

    async def recent_transactions(
        self, *, address: str, limit: int = DEFAULT_SIGNATURE_LIMIT
    ) -> ToolResult:
        limit = max(1, min(int(limit), self._max_signatures))
        logger.info("📜 查询最近交易: address=%s limit=%d", address, limit)
        try:
            signatures = await self._solana.get_signatures_for_address(address, limit)
        except ToolFetchError as exc:
            logger.warning("最近交易查询失败: address=%s error=%s", address, exc)
            return self._failed(exc, "Failed to get transactions", address=address)
        return ToolResult.ok(
            self.SOURCE,
            {
                "address": address,
                "count": len(signatures),
                "transactions": [sig.to_dict() for sig in signatures],
            },
        )

    async def token_holdings(self, *, address: str) -> ToolResult:
        logger.info("🪙 查询代币持仓: address=%s", address)
        try:
            holdings = await self._solana.get_token_accounts_by_owner(address)
        except ToolFetchError as exc:
            logger.warning("代币持仓查询失败: address=%s error=%s", address, exc)
            return self._failed(exc, "Failed to get token holdings", address=address)
        return ToolResult.ok(
            self.SOURCE,
            {
                "address": address,
                "tokenCount": len(holdings),
                "tokens": [holding.to_dict() for holding in holdings],
            },
        )

    async def block_info(self, *, chain: str, block_number: str = "latest") -> ToolResult:
        logger.info("📦 查询区块: chain=%s block=%s", chain, block_number)
        try:
            if normalize_chain(chain) == SOLANA_CHAIN:
                blockhash = await self._solana.get_recent_blockhash()
                data = {"chain": chain, "type": "solana", "recentBlockhash": blockhash}
            else:
                block = await self._evm.get_block_by_number(chain, block_number, False)
                if block is None:
                    return ToolResult.failed(
                        self.SOURCE, "block_not_found", data={"chain": chain, "blockNumber": block_number}
                    )
                current = await self._evm.block_number(chain)
                data = {
                    "chain": chain,
                    "type": "evm",
                    "currentBlockNumber": current,
                    "blockNumber": block.number,
                    "blockHash": block.hash,
                    "timestamp": block.timestamp,
                    "transactionCount": block.transaction_count,
                    "gasUsed": block.gas_used,
                    "gasLimit": block.gas_limit,
                }
        except ToolFetchError as exc:
            logger.warning("区块查询失败: chain=%s error=%s", chain, exc)
            return self._failed(exc, "Failed to get block info", chain=chain)
        return ToolResult.ok(self.SOURCE, data)

    async def gas_price(self, *, chain: str) -> ToolResult:
        logger.info("⛽ 查询 Gas 价格: chain=%s", chain)
        try:
            price = await self._evm.get_gas_price(chain)
        except ToolFetchError as exc:
            logger.warning("Gas 价格查询失败: chain=%s error=%s", chain, exc)
            return self._failed(exc, "Failed to get gas price", chain=chain)
        gwei = wei_to_gwei(price)
        return ToolResult.ok(
            self.SOURCE,
            {
                "chain": chain,
                "gasPriceWei": str(price),
                "gasPriceGwei": gwei,
                "gasPriceFormatted": f"{gwei} Gwei",
            },
        )

    async def transaction_count(self, *, address: str, chain: str) -> ToolResult:
        logger.info("🔢 查询交易计数: address=%s chain=%s", address, chain)
        try:
            count = await self._evm.get_transaction_count(chain, address)
        except ToolFetchError as exc:
            logger.warning("交易计数查询失败: address=%s chain=%s error=%s", address, chain, exc)
            return self._failed(exc, "Failed to get transaction count", address=address, chain=chain)
        return ToolResult.ok(
            self.SOURCE,
            {"address": address, "chain": chain, "transactionCount": count, "nonce": count},
        )

    async def analyze_wallet_multichain(
        self, *, address: str, chains: Optional[Sequence[str]] = None
    ) -> ToolResult:
        results = await self._aggregator.analyze(address, chains)
        return ToolResult.ok(
            self.SOURCE,
            {
                "address": address,
                "chainsAnalyzed": len(results),
                "results": [result.to_dict() for result in results],
            },
        )

    def list_supported_chains(self) -> ToolResult:
        chains: List[dict] = [c.to_dict() for c in self._gateway.supported_chains()]
        return ToolResult.ok(self.SOURCE, {"count": len(chains), "chains": chains})

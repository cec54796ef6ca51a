"""EVM JSON-RPC helpers on top of the gateway ``call``."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from ..exceptions import MalformedResponseError, UnsupportedChainError
from .chains import get_chain, normalize_chain, supported_chain_ids
from .models import BalanceResult, BlockResult, ReceiptResult, TransactionResult
from .providers.base import RpcGatewayProvider
from .units import WEI_PER_ETHER, parse_quantity, token_amount, wei_to_ether

BlockTag = Union[str, int]


def _block_tag(value: BlockTag) -> str:
    if isinstance(value, int):
        return hex(value)
    return value


def _to_int(value: Any, what: str) -> int:
    try:
        return parse_quantity(value)
    except (TypeError, ValueError) as exc:
        raise MalformedResponseError(f"invalid {what}: {value!r}") from exc


class EvmRpc:
    """Fixed ``eth_*`` method mapping for every EVM chain in the table."""

    def __init__(self, gateway: RpcGatewayProvider) -> None:
        self._gateway = gateway

    def _evm_chain(self, chain: str) -> str:
        descriptor = get_chain(chain)
        if descriptor is None or not descriptor.is_evm:
            evm_chains = [c for c in supported_chain_ids() if get_chain(c).is_evm]
            raise UnsupportedChainError(chain, evm_chains)
        return descriptor.id

    async def _call(self, chain: str, method: str, params: List[Any]) -> Any:
        return await self._gateway.call(self._evm_chain(chain), method, params)

    async def block_number(self, chain: str = "ethereum") -> int:
        result = await self._call(chain, "eth_blockNumber", [])
        return _to_int(result, "block number")

    async def get_balance_raw(self, chain: str, address: str) -> Any:
        return await self._call(chain, "eth_getBalance", [address, "latest"])

    async def get_balance(self, chain: str, address: str) -> BalanceResult:
        raw = _to_int(await self.get_balance_raw(chain, address), "balance")
        descriptor = get_chain(chain)
        return BalanceResult(
            chain=descriptor.id,
            raw=raw,
            amount=token_amount(raw, WEI_PER_ETHER),
            formatted=wei_to_ether(raw),
            symbol=descriptor.native_symbol,
        )

    async def get_transaction(self, chain: str, tx_hash: str) -> Optional[TransactionResult]:
        result = await self._call(chain, "eth_getTransactionByHash", [tx_hash])
        if result is None:
            return None
        return TransactionResult.from_rpc(normalize_chain(chain), result)

    async def get_transaction_receipt(self, chain: str, tx_hash: str) -> Optional[ReceiptResult]:
        result = await self._call(chain, "eth_getTransactionReceipt", [tx_hash])
        if result is None:
            return None
        return ReceiptResult.from_rpc(normalize_chain(chain), result)

    async def get_block_by_number(
        self,
        chain: str,
        block_number: BlockTag = "latest",
        include_transactions: bool = False,
    ) -> Optional[BlockResult]:
        result = await self._call(
            chain,
            "eth_getBlockByNumber",
            [_block_tag(block_number), include_transactions],
        )
        if result is None:
            return None
        return BlockResult.from_rpc(normalize_chain(chain), result)

    async def call(self, chain: str, to: str, data: str, block_number: BlockTag = "latest") -> str:
        """Read-only contract call; returns the hex-encoded return data."""
        result = await self._call(
            chain, "eth_call", [{"to": to, "data": data}, _block_tag(block_number)]
        )
        if not isinstance(result, str):
            raise MalformedResponseError(f"unexpected eth_call result: {result!r}")
        return result

    async def get_transaction_count(self, chain: str, address: str) -> int:
        result = await self._call(chain, "eth_getTransactionCount", [address, "latest"])
        return _to_int(result, "transaction count")

    async def get_gas_price(self, chain: str) -> int:
        result = await self._call(chain, "eth_gasPrice", [])
        return _to_int(result, "gas price")

    async def get_logs(self, chain: str, log_filter: Dict[str, Any]) -> List[Dict[str, Any]]:
        result = await self._call(chain, "eth_getLogs", [log_filter])
        if not isinstance(result, list):
            raise MalformedResponseError(f"unexpected eth_getLogs result: {type(result).__name__}")
        return result

    async def estimate_gas(self, chain: str, transaction: Dict[str, Any]) -> int:
        result = await self._call(chain, "eth_estimateGas", [transaction])
        return _to_int(result, "gas estimate")

"""Solana JSON-RPC helpers on top of the gateway ``call``."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..exceptions import MalformedResponseError
from .models import BalanceResult, SignatureInfo, TokenHolding
from .providers.base import RpcGatewayProvider
from .units import format_sol, lamports_to_sol, parse_quantity

SOLANA_CHAIN = "solana"
SPL_TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
DEFAULT_SIGNATURE_LIMIT = 10


def _context_value(result: Any, what: str) -> Any:
    """Unwrap the ``{"context": ..., "value": ...}`` envelope Solana uses."""
    if not isinstance(result, dict) or "value" not in result:
        raise MalformedResponseError(f"unexpected {what} payload: {result!r}"[:200])
    return result["value"]


class SolanaRpc:
    """Fixed Solana method mapping, always routed to the ``solana`` chain."""

    def __init__(self, gateway: RpcGatewayProvider) -> None:
        self._gateway = gateway

    async def _call(self, method: str, params: List[Any]) -> Any:
        return await self._gateway.call(SOLANA_CHAIN, method, params)

    async def get_balance(self, address: str) -> BalanceResult:
        result = await self._call("getBalance", [address])
        value = _context_value(result, "getBalance")
        try:
            lamports = parse_quantity(value)
        except (TypeError, ValueError) as exc:
            raise MalformedResponseError(f"invalid lamport balance: {value!r}") from exc
        amount = lamports_to_sol(lamports)
        return BalanceResult(
            chain=SOLANA_CHAIN,
            raw=lamports,
            amount=amount,
            formatted=format_sol(amount),
            symbol="SOL",
        )

    async def get_account_info(self, address: str) -> Optional[Dict[str, Any]]:
        result = await self._call("getAccountInfo", [address, {"encoding": "jsonParsed"}])
        return _context_value(result, "getAccountInfo")

    async def get_token_accounts_by_owner(
        self,
        owner: str,
        program_id: str = SPL_TOKEN_PROGRAM_ID,
    ) -> List[TokenHolding]:
        result = await self._call(
            "getTokenAccountsByOwner",
            [owner, {"programId": program_id}, {"encoding": "jsonParsed"}],
        )
        accounts = _context_value(result, "getTokenAccountsByOwner")
        if not isinstance(accounts, list):
            raise MalformedResponseError("token accounts value is not a list")
        return [TokenHolding.from_rpc(account) for account in accounts]

    async def get_transaction(self, signature: str) -> Optional[Dict[str, Any]]:
        result = await self._call(
            "getTransaction",
            [signature, {"encoding": "jsonParsed", "maxSupportedTransactionVersion": 0}],
        )
        if result is not None and not isinstance(result, dict):
            raise MalformedResponseError(f"unexpected getTransaction result: {type(result).__name__}")
        return result

    async def get_recent_blockhash(self) -> Dict[str, Any]:
        result = await self._call("getRecentBlockhash", [])
        value = _context_value(result, "getRecentBlockhash")
        if not isinstance(value, dict):
            raise MalformedResponseError("recent blockhash value is not an object")
        return value

    async def get_signatures_for_address(
        self,
        address: str,
        limit: int = DEFAULT_SIGNATURE_LIMIT,
    ) -> List[SignatureInfo]:
        result = await self._call("getSignaturesForAddress", [address, {"limit": limit}])
        if not isinstance(result, list):
            raise MalformedResponseError("signatures result is not a list")
        return [SignatureInfo.from_rpc(entry) for entry in result]

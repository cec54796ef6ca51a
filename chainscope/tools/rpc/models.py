"""JSON-RPC envelopes and typed result variants decoded at the call site."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

from ..exceptions import MalformedResponseError, RpcProtocolError
from .units import parse_quantity

JSONRPC_VERSION = "2.0"


@dataclass(frozen=True)
class RpcRequest:
    id: int
    method: str
    params: List[Any] = field(default_factory=list)
    jsonrpc: str = JSONRPC_VERSION

    def to_payload(self) -> Dict[str, Any]:
        return {
            "jsonrpc": self.jsonrpc,
            "id": self.id,
            "method": self.method,
            "params": list(self.params),
        }


@dataclass(frozen=True)
class RpcErrorDetail:
    code: Optional[int]
    message: str
    data: Any = None


@dataclass(frozen=True)
class RpcResponse:
    """Decoded gateway response.

    ``has_result`` distinguishes an explicit ``"result": null`` from a body
    that carries no ``result`` key at all.
    """

    id: Any
    result: Any = None
    error: Optional[RpcErrorDetail] = None
    has_result: bool = False
    jsonrpc: str = JSONRPC_VERSION

    @classmethod
    def from_payload(cls, payload: Any) -> "RpcResponse":
        if not isinstance(payload, dict):
            raise MalformedResponseError(
                f"response body is not a JSON object: {type(payload).__name__}"
            )

        error = None
        raw_error = payload.get("error")
        if raw_error is not None:
            if isinstance(raw_error, dict):
                code = raw_error.get("code")
                error = RpcErrorDetail(
                    code=code if isinstance(code, int) else None,
                    message=str(raw_error.get("message") or "unknown error"),
                    data=raw_error.get("data"),
                )
            else:
                error = RpcErrorDetail(code=None, message=str(raw_error))

        return cls(
            id=payload.get("id"),
            result=payload.get("result"),
            error=error,
            has_result="result" in payload,
            jsonrpc=str(payload.get("jsonrpc", JSONRPC_VERSION)),
        )

    def unwrap(self) -> Any:
        """Return ``result`` or raise for an error / empty response."""
        if self.error is not None:
            raise RpcProtocolError(self.error.message, code=self.error.code, data=self.error.data)
        if not self.has_result:
            raise MalformedResponseError("response carries neither result nor error")
        return self.result


def _require_dict(payload: Any, what: str) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise MalformedResponseError(f"unexpected {what} payload: {type(payload).__name__}")
    return payload


def _optional_quantity(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        return parse_quantity(value)
    except ValueError as exc:
        raise MalformedResponseError(f"invalid quantity: {value!r}") from exc


def _quantity(value: Any, what: str) -> int:
    if value is None:
        raise MalformedResponseError(f"missing {what}")
    return _optional_quantity(value)


@dataclass(frozen=True)
class BalanceResult:
    chain: str
    raw: int
    amount: Decimal
    formatted: str
    symbol: str

    @property
    def display(self) -> str:
        return f"{self.formatted} {self.symbol}"


@dataclass(frozen=True)
class TransactionResult:
    chain: str
    hash: str
    from_address: Optional[str]
    to_address: Optional[str]
    value: int
    gas_price: Optional[int]
    block_number: Optional[int]
    raw: Dict[str, Any]

    @classmethod
    def from_rpc(cls, chain: str, payload: Any) -> "TransactionResult":
        tx = _require_dict(payload, "transaction")
        return cls(
            chain=chain,
            hash=str(tx.get("hash", "")),
            from_address=tx.get("from"),
            to_address=tx.get("to"),
            value=_quantity(tx.get("value"), "transaction value"),
            gas_price=_optional_quantity(tx.get("gasPrice")),
            block_number=_optional_quantity(tx.get("blockNumber")),
            raw=tx,
        )


@dataclass(frozen=True)
class ReceiptResult:
    chain: str
    transaction_hash: str
    status: Optional[int]
    gas_used: Optional[int]
    block_number: Optional[int]
    raw: Dict[str, Any]

    @property
    def succeeded(self) -> bool:
        return self.status == 1

    @classmethod
    def from_rpc(cls, chain: str, payload: Any) -> "ReceiptResult":
        receipt = _require_dict(payload, "receipt")
        return cls(
            chain=chain,
            transaction_hash=str(receipt.get("transactionHash", "")),
            status=_optional_quantity(receipt.get("status")),
            gas_used=_optional_quantity(receipt.get("gasUsed")),
            block_number=_optional_quantity(receipt.get("blockNumber")),
            raw=receipt,
        )


@dataclass(frozen=True)
class BlockResult:
    chain: str
    number: int
    hash: Optional[str]
    timestamp: int
    transaction_count: int
    gas_used: Optional[int]
    gas_limit: Optional[int]
    raw: Dict[str, Any]

    @classmethod
    def from_rpc(cls, chain: str, payload: Any) -> "BlockResult":
        block = _require_dict(payload, "block")
        transactions = block.get("transactions") or []
        if not isinstance(transactions, list):
            raise MalformedResponseError("block transactions is not a list")
        return cls(
            chain=chain,
            number=_quantity(block.get("number"), "block number"),
            hash=block.get("hash"),
            timestamp=_quantity(block.get("timestamp"), "block timestamp"),
            transaction_count=len(transactions),
            gas_used=_optional_quantity(block.get("gasUsed")),
            gas_limit=_optional_quantity(block.get("gasLimit")),
            raw=block,
        )


@dataclass(frozen=True)
class SignatureInfo:
    signature: str
    slot: Optional[int]
    block_time: Optional[int]
    err: Any = None
    memo: Optional[str] = None

    @classmethod
    def from_rpc(cls, payload: Any) -> "SignatureInfo":
        entry = _require_dict(payload, "signature")
        if "signature" not in entry:
            raise MalformedResponseError("signature entry without signature")
        return cls(
            signature=str(entry["signature"]),
            slot=entry.get("slot"),
            block_time=entry.get("blockTime"),
            err=entry.get("err"),
            memo=entry.get("memo"),
        )

    def to_dict(self) -> dict:
        return {
            "signature": self.signature,
            "timestamp": self.block_time,
            "slot": self.slot,
            "err": self.err,
            "memo": self.memo,
        }


@dataclass(frozen=True)
class TokenHolding:
    mint: str
    owner: Optional[str]
    balance: Optional[str]
    decimals: int
    raw_amount: str

    @classmethod
    def from_rpc(cls, payload: Any) -> "TokenHolding":
        account = _require_dict(payload, "token account")
        try:
            info = account["account"]["data"]["parsed"]["info"]
            token_amount = _require_dict(info["tokenAmount"], "token amount")
            return cls(
                mint=str(info["mint"]),
                owner=info.get("owner"),
                balance=token_amount.get("uiAmountString"),
                decimals=int(token_amount.get("decimals", 0)),
                raw_amount=str(token_amount.get("amount", "0")),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise MalformedResponseError(f"unexpected token account shape: {exc}") from exc

    def to_dict(self) -> dict:
        return {
            "mint": self.mint,
            "owner": self.owner,
            "balance": self.balance,
            "decimals": self.decimals,
            "rawBalance": self.raw_amount,
        }

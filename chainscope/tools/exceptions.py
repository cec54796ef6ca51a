"""Custom exceptions for tool operations."""

from __future__ import annotations

from typing import Any, Iterable, Optional


class ToolFetchError(Exception):
    """Base class for tool fetch errors."""

    pass


class ToolTimeoutError(ToolFetchError):
    """Tool API timeout error."""

    pass


class ToolRateLimitError(ToolFetchError):
    """Tool API rate limit exceeded."""

    pass


class UnsupportedChainError(ToolFetchError):
    """Chain identifier is not in the known chain table."""

    def __init__(self, chain: str, supported: Iterable[str] = ()) -> None:
        self.chain = chain
        self.supported = list(supported)
        message = f"Unsupported chain: {chain}"
        if self.supported:
            message += f". Supported chains: {', '.join(self.supported)}"
        super().__init__(message)


class TransportError(ToolFetchError):
    """HTTP exchange with the gateway failed."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class RpcTimeoutError(TransportError, ToolTimeoutError):
    """Gateway request exceeded the per-call timeout."""

    pass


class GatewayRateLimitError(TransportError, ToolRateLimitError):
    """Gateway answered HTTP 429."""

    pass


class RpcProtocolError(ToolFetchError):
    """Gateway returned a JSON-RPC error object."""

    def __init__(self, message: str, code: Optional[int] = None, data: Any = None) -> None:
        self.code = code
        self.rpc_message = message
        self.data = data
        if code is None:
            super().__init__(f"RPC error: {message}")
        else:
            super().__init__(f"RPC error: {message} (code: {code})")


class MalformedResponseError(RpcProtocolError):
    """Response body or result payload does not have the expected shape."""

    def __init__(self, message: str, data: Any = None) -> None:
        super().__init__(message, code=None, data=data)

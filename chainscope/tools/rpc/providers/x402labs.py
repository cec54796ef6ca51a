"""x402labs-backed multi-chain JSON-RPC gateway client."""

from __future__ import annotations

import itertools
import threading
from typing import Any, Dict, Optional, Sequence

import httpx

from ...exceptions import (
    GatewayRateLimitError,
    MalformedResponseError,
    RpcTimeoutError,
    ToolFetchError,
    TransportError,
    UnsupportedChainError,
)
from ..chains import get_chain, normalize_chain, supported_chain_ids
from ..models import RpcRequest, RpcResponse
from .base import RpcGatewayProvider
from chainscope.utils import setup_logger, truncate_for_log

logger = setup_logger(__name__)


class X402LabsGatewayProvider(RpcGatewayProvider):
    """Send JSON-RPC calls to a single gateway endpoint, routed by ``X-Chain``."""

    DEFAULT_ENDPOINT = "https://x402labs.cloud/rpc"
    ERROR_BODY_LIMIT = 500

    def __init__(self, config) -> None:
        super().__init__(config)
        self._endpoint = (
            getattr(config, "RPC_GATEWAY_URL", "") or self.DEFAULT_ENDPOINT
        ).strip()
        self._api_key = (getattr(config, "X402LABS_API_KEY", "") or "").strip()
        self._request_ids = itertools.count(1)
        self._id_lock = threading.Lock()

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def _next_request_id(self) -> int:
        with self._id_lock:
            return next(self._request_ids)

    def _build_headers(self, chain: str) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "X-Chain": chain,
        }
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def call(self, chain: str, method: str, params: Optional[Sequence[Any]] = None) -> Any:
        chain_key = normalize_chain(chain)
        if get_chain(chain_key) is None:
            raise UnsupportedChainError(chain, supported_chain_ids())

        request = RpcRequest(
            id=self._next_request_id(),
            method=method,
            params=list(params or []),
        )
        logger.info(
            "🔗 RPC 请求: chain=%s method=%s params=%s",
            chain_key,
            method,
            truncate_for_log(request.params),
        )

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                headers=self._build_headers(chain_key),
            ) as client:
                response = await client.post(self._endpoint, json=request.to_payload())
        except httpx.TimeoutException as exc:
            logger.warning("RPC 请求超时: chain=%s method=%s", chain_key, method)
            raise RpcTimeoutError(f"RPC request timed out after {self._timeout}s") from exc
        except httpx.HTTPError as exc:
            logger.warning("RPC 网络错误: chain=%s method=%s error=%s", chain_key, method, exc)
            raise TransportError(f"RPC request failed: {exc}") from exc

        try:
            result = RpcResponse.from_payload(self._decode(response)).unwrap()
        except ToolFetchError as exc:
            logger.warning("RPC 调用失败: chain=%s method=%s error=%s", chain_key, method, exc)
            raise

        logger.debug("✅ RPC 调用成功: chain=%s method=%s id=%s", chain_key, method, request.id)
        return result

    def _decode(self, response: httpx.Response) -> Any:
        status = response.status_code
        if status == 429:
            raise GatewayRateLimitError(
                "RPC request rate limited: 429",
                status_code=status,
                body=response.text[: self.ERROR_BODY_LIMIT],
            )
        if not 200 <= status < 300:
            body = response.text[: self.ERROR_BODY_LIMIT]
            raise TransportError(
                f"RPC request failed: {status} - {body}",
                status_code=status,
                body=body,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponseError(f"response body is not valid JSON: {exc}") from exc

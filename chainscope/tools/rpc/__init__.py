"""RPC gateway provider registry and factory."""

from __future__ import annotations

from typing import Dict, Type

from .providers.base import RpcGatewayProvider
from .providers.x402labs import X402LabsGatewayProvider

REGISTRY: Dict[str, Type[RpcGatewayProvider]] = {
    "x402labs": X402LabsGatewayProvider,
}


def create_rpc_gateway(config) -> RpcGatewayProvider:
    """Create an RPC gateway instance from configuration."""
    provider_key = (getattr(config, "RPC_GATEWAY_PROVIDER", "x402labs") or "x402labs").lower()
    provider_cls = REGISTRY.get(provider_key)

    if provider_cls is None:
        raise ValueError(f"未知 RPC 网关 Provider: {provider_key}")

    return provider_cls(config)


__all__ = [
    "create_rpc_gateway",
    "RpcGatewayProvider",
]

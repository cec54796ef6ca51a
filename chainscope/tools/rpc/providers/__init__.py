"""RPC gateway provider exports."""

from .base import RpcGatewayProvider
from .x402labs import X402LabsGatewayProvider

__all__ = ["RpcGatewayProvider", "X402LabsGatewayProvider"]

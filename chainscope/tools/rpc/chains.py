"""Known chain table for the RPC gateway."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

EVM = "evm"
SOLANA = "solana"


@dataclass(frozen=True)
class ChainDescriptor:
    """Static description of a chain reachable through the gateway."""

    id: str
    chain_id: str  # numeric EVM chain id, or the literal "solana"
    name: str
    rpc_method_prefix: str
    family: str
    native_symbol: str

    @property
    def is_evm(self) -> bool:
        return self.family == EVM

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "chainId": self.chain_id,
            "rpcMethod": self.rpc_method_prefix,
            "family": self.family,
            "nativeSymbol": self.native_symbol,
        }


SUPPORTED_CHAINS: Dict[str, ChainDescriptor] = {
    "ethereum": ChainDescriptor("ethereum", "1", "Ethereum Mainnet", "eth", EVM, "ETH"),
    "polygon": ChainDescriptor("polygon", "137", "Polygon", "polygon", EVM, "MATIC"),
    "bsc": ChainDescriptor("bsc", "56", "BSC", "bsc", EVM, "BNB"),
    "arbitrum": ChainDescriptor("arbitrum", "42161", "Arbitrum", "arbitrum", EVM, "ETH"),
    "optimism": ChainDescriptor("optimism", "10", "Optimism", "optimism", EVM, "ETH"),
    "base": ChainDescriptor("base", "8453", "Base", "base", EVM, "ETH"),
    "solana": ChainDescriptor("solana", "solana", "Solana", "solana", SOLANA, "SOL"),
}


def normalize_chain(chain: str) -> str:
    if not isinstance(chain, str):
        return ""
    return chain.strip().lower()


def get_chain(chain: str) -> Optional[ChainDescriptor]:
    """Return the descriptor for ``chain`` (case-insensitive) or ``None``."""
    return SUPPORTED_CHAINS.get(normalize_chain(chain))


def supported_chain_ids() -> List[str]:
    return list(SUPPORTED_CHAINS.keys())


def is_chain_supported(chain: str) -> bool:
    return normalize_chain(chain) in SUPPORTED_CHAINS

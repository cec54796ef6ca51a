"""Function-calling tool definitions for the crypto analysis tools.

Definitions use the OpenAI ``tools`` format; ``execute_tool`` dispatches a
model-issued call to ``CryptoAnalysisTool`` and returns a plain dict.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, List

from ..base import ToolResult
from ..rpc.chains import supported_chain_ids
from chainscope.utils import setup_logger

logger = setup_logger(__name__)

_CHAIN_LIST = ", ".join(supported_chain_ids())


def _function(name: str, description: str, properties: dict, required: List[str]) -> dict:
    return {
        "type": "function",
        "function": {
            "name": name,
            "description": description,
            "parameters": {
                "type": "object",
                "properties": properties,
                "required": required,
            },
        },
    }


_ADDRESS = {"type": "string", "description": "The wallet address"}
_CHAIN = {"type": "string", "description": f"The blockchain to query ({_CHAIN_LIST})"}

CRYPTO_TOOL_DEFINITIONS: List[dict] = [
    _function(
        "get_wallet_balance",
        "Get the native token balance of a wallet address on any supported blockchain "
        "(ETH, MATIC, BNB, SOL, etc.).",
        {"address": _ADDRESS, "chain": _CHAIN},
        ["address", "chain"],
    ),
    _function(
        "get_transaction",
        "Get details of a transaction by hash or signature: from, to, value, gas used and status.",
        {
            "tx_hash": {"type": "string", "description": "The transaction hash or signature"},
            "chain": _CHAIN,
        },
        ["tx_hash", "chain"],
    ),
    _function(
        "get_recent_transactions",
        "Get the most recent transaction signatures for a Solana address.",
        {
            "address": {"type": "string", "description": "The Solana wallet address"},
            "limit": {
                "type": "integer",
                "description": "Number of transactions to fetch (default 10, max 100)",
                "default": 10,
            },
        },
        ["address"],
    ),
    _function(
        "get_token_holdings",
        "Get all SPL token holdings for a Solana wallet address.",
        {"address": {"type": "string", "description": "The Solana wallet address"}},
        ["address"],
    ),
    _function(
        "get_block_info",
        "Get information about the latest or a specific block on a chain.",
        {
            "chain": _CHAIN,
            "block_number": {
                "type": "string",
                "description": 'Block number (hex) or "latest"',
                "default": "latest",
            },
        },
        ["chain"],
    ),
    _function(
        "get_gas_price",
        "Get the current gas price of an EVM chain in wei and Gwei.",
        {"chain": _CHAIN},
        ["chain"],
    ),
    _function(
        "get_transaction_count",
        "Get the transaction count (nonce) of an address on an EVM chain.",
        {"address": _ADDRESS, "chain": _CHAIN},
        ["address", "chain"],
    ),
    _function(
        "analyze_wallet_multichain",
        "Check a wallet's native balance on several chains at once. "
        "Chains that fail are reported individually.",
        {
            "address": _ADDRESS,
            "chains": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Chains to check (default: all supported chains)",
            },
        },
        ["address"],
    ),
    _function(
        "list_supported_chains",
        "List the blockchain networks supported by the crypto analysis tools.",
        {},
        [],
    ),
]


def _handlers(tool) -> Dict[str, Callable[[dict], Awaitable[ToolResult]]]:
    async def list_chains(_args: dict) -> ToolResult:
        return tool.list_supported_chains()

    return {
        "get_wallet_balance": lambda a: tool.wallet_balance(address=a["address"], chain=a["chain"]),
        "get_transaction": lambda a: tool.transaction(tx_hash=a["tx_hash"], chain=a["chain"]),
        "get_recent_transactions": lambda a: tool.recent_transactions(
            address=a["address"], limit=a.get("limit", 10)
        ),
        "get_token_holdings": lambda a: tool.token_holdings(address=a["address"]),
        "get_block_info": lambda a: tool.block_info(
            chain=a["chain"], block_number=a.get("block_number", "latest")
        ),
        "get_gas_price": lambda a: tool.gas_price(chain=a["chain"]),
        "get_transaction_count": lambda a: tool.transaction_count(
            address=a["address"], chain=a["chain"]
        ),
        "analyze_wallet_multichain": lambda a: tool.analyze_wallet_multichain(
            address=a["address"], chains=a.get("chains")
        ),
        "list_supported_chains": list_chains,
    }


async def execute_tool(tool, tool_name: str, tool_args: Dict[str, Any]) -> dict:
    """Execute a model-issued tool call.

    Returns:
        ``{"success", "tool", "data", "error"}``; unknown tools and missing
        arguments produce ``success=False`` instead of raising.
    """
    handler = _handlers(tool).get(tool_name)
    if handler is None:
        logger.warning("未知工具: %s", tool_name)
        return {"success": False, "tool": tool_name, "data": {}, "error": f"unknown_tool: {tool_name}"}

    try:
        result = await handler(tool_args or {})
    except KeyError as exc:
        logger.warning("工具参数缺失: tool=%s arg=%s", tool_name, exc)
        return {
            "success": False,
            "tool": tool_name,
            "data": {},
            "error": f"missing_argument: {exc.args[0]}",
        }
    except (TypeError, ValueError) as exc:
        logger.warning("工具参数无效: tool=%s error=%s", tool_name, exc)
        return {"success": False, "tool": tool_name, "data": {}, "error": f"invalid_argument: {exc}"}

    return {
        "success": result.success,
        "tool": tool_name,
        "data": result.data if result.success else {},
        "error": result.error if not result.success else None,
    }

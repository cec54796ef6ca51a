from types import SimpleNamespace

import pytest

from chainscope.tools.crypto import CRYPTO_TOOL_DEFINITIONS, CryptoAnalysisTool, execute_tool
from chainscope.tools.exceptions import RpcProtocolError, TransportError
from chainscope.tools.rpc.providers.base import RpcGatewayProvider


class FakeGateway(RpcGatewayProvider):
    def __init__(self, results):
        super().__init__(SimpleNamespace(RPC_TIMEOUT_SECONDS=5))
        self._results = results
        self.calls = []

    async def call(self, chain, method, params=None):
        self.calls.append((chain, method, list(params or [])))
        answer = self._results[(chain, method)]
        if isinstance(answer, Exception):
            raise answer
        return answer


def make_tool(results, **config_overrides):
    values = dict(
        RPC_TIMEOUT_SECONDS=5,
        MULTICHAIN_PARALLEL=False,
        MULTICHAIN_DEFAULT_CHAINS=[],
        SOLANA_SIGNATURES_MAX_LIMIT=100,
    )
    values.update(config_overrides)
    gateway = FakeGateway(results)
    return CryptoAnalysisTool(SimpleNamespace(**values), gateway=gateway), gateway


@pytest.mark.asyncio
async def test_wallet_balance_evm():
    tool, _ = make_tool({("bsc", "eth_getBalance"): "0x1bc16d674ec80000"})

    result = await tool.wallet_balance(address="0xaddr", chain="bsc")

    assert result.success is True
    assert result.source == "x402labs"
    assert result.data["balance"] == "2.000000"
    assert result.data["balanceFormatted"] == "2.000000 BNB"
    assert result.data["chainName"] == "BSC"
    assert result.data["rawBalance"] == "2000000000000000000"


@pytest.mark.asyncio
async def test_wallet_balance_solana():
    tool, _ = make_tool({("solana", "getBalance"): {"context": {}, "value": 1500000000}})

    result = await tool.wallet_balance(address="So1", chain="Solana")

    assert result.success is True
    assert result.data["balance"] == "1.5"
    assert result.data["balanceFormatted"] == "1.5000 SOL"


@pytest.mark.asyncio
async def test_wallet_balance_failure_becomes_failed_result():
    tool, _ = make_tool({("ethereum", "eth_getBalance"): TransportError("RPC request failed: 500 - oops")})

    result = await tool.wallet_balance(address="0xaddr", chain="ethereum")

    assert result.success is False
    assert result.error == "RPC request failed: 500 - oops"
    assert result.data == {"address": "0xaddr", "chain": "ethereum"}


@pytest.mark.asyncio
async def test_wallet_balance_unknown_chain():
    tool, gateway = make_tool({})

    result = await tool.wallet_balance(address="0xaddr", chain="fantom")

    assert result.success is False
    assert "Unsupported chain" in result.error
    assert gateway.calls == []


@pytest.mark.asyncio
async def test_evm_transaction_combines_tx_and_receipt():
    tool, _ = make_tool(
        {
            ("ethereum", "eth_getTransactionByHash"): {
                "hash": "0xfeed",
                "from": "0xaaa",
                "to": "0xbbb",
                "value": "0xde0b6b3a7640000",
                "gasPrice": "0x3b9aca00",
                "blockNumber": "0x10",
            },
            ("ethereum", "eth_getTransactionReceipt"): {"status": "0x1", "gasUsed": "0x5208"},
        }
    )

    result = await tool.transaction(tx_hash="0xfeed", chain="ethereum")

    assert result.success is True
    assert result.data["status"] == "success"
    assert result.data["valueFormatted"] == "1.000000 ETH"
    assert result.data["gasUsed"] == 21000
    assert result.data["blockNumber"] == 16
    assert result.data["type"] == "evm"


@pytest.mark.asyncio
async def test_evm_transaction_pending_and_missing():
    tool, _ = make_tool(
        {
            ("base", "eth_getTransactionByHash"): {"hash": "0x1", "value": "0x0"},
            ("base", "eth_getTransactionReceipt"): None,
            ("polygon", "eth_getTransactionByHash"): None,
        }
    )

    pending = await tool.transaction(tx_hash="0x1", chain="base")
    missing = await tool.transaction(tx_hash="0x2", chain="polygon")

    assert pending.data["status"] == "pending"
    assert missing.success is False
    assert missing.error == "transaction_not_found"


@pytest.mark.asyncio
async def test_solana_transaction_passthrough():
    tool, gateway = make_tool({("solana", "getTransaction"): {"slot": 7, "meta": {"err": None}}})

    result = await tool.transaction(tx_hash="sig", chain="solana")

    assert result.success is True
    assert result.data["transaction"] == {"slot": 7, "meta": {"err": None}}
    assert result.data["type"] == "solana"
    assert gateway.calls[0][2][1]["maxSupportedTransactionVersion"] == 0


@pytest.mark.asyncio
async def test_recent_transactions_clamps_limit():
    tool, gateway = make_tool(
        {
            ("solana", "getSignaturesForAddress"): [
                {"signature": "a", "slot": 1, "blockTime": 10, "err": None, "memo": "hi"},
            ]
        }
    )

    result = await tool.recent_transactions(address="So1", limit=500)

    assert gateway.calls[0][2] == ["So1", {"limit": 100}]
    assert result.data["count"] == 1
    assert result.data["transactions"][0] == {
        "signature": "a",
        "timestamp": 10,
        "slot": 1,
        "err": None,
        "memo": "hi",
    }


@pytest.mark.asyncio
async def test_token_holdings_failure():
    tool, _ = make_tool(
        {("solana", "getTokenAccountsByOwner"): RpcProtocolError("Invalid param", code=-32602)}
    )

    result = await tool.token_holdings(address="bad")

    assert result.success is False
    assert result.error == "RPC error: Invalid param (code: -32602)"


@pytest.mark.asyncio
async def test_block_info_evm():
    tool, _ = make_tool(
        {
            ("arbitrum", "eth_getBlockByNumber"): {
                "number": "0x64",
                "hash": "0xblock",
                "timestamp": "0x10",
                "transactions": ["0x1"],
                "gasUsed": "0x1",
                "gasLimit": "0x2",
            },
            ("arbitrum", "eth_blockNumber"): "0x65",
        }
    )

    result = await tool.block_info(chain="arbitrum")

    assert result.data["currentBlockNumber"] == 101
    assert result.data["blockNumber"] == 100
    assert result.data["transactionCount"] == 1


@pytest.mark.asyncio
async def test_block_info_solana():
    tool, _ = make_tool(
        {("solana", "getRecentBlockhash"): {"context": {"slot": 1}, "value": {"blockhash": "H"}}}
    )

    result = await tool.block_info(chain="solana")

    assert result.data["recentBlockhash"] == {"blockhash": "H"}


@pytest.mark.asyncio
async def test_gas_price_and_transaction_count():
    tool, _ = make_tool(
        {
            ("optimism", "eth_gasPrice"): "0x4a817c800",
            ("optimism", "eth_getTransactionCount"): "0x2a",
        }
    )

    gas = await tool.gas_price(chain="optimism")
    count = await tool.transaction_count(address="0xaddr", chain="optimism")

    assert gas.data["gasPriceGwei"] == "20.00"
    assert gas.data["gasPriceFormatted"] == "20.00 Gwei"
    assert count.data["transactionCount"] == 42
    assert count.data["nonce"] == 42


@pytest.mark.asyncio
async def test_analyze_wallet_multichain_reports_partial_failure():
    tool, _ = make_tool(
        {
            ("ethereum", "eth_getBalance"): "0xde0b6b3a7640000",
            ("polygon", "eth_getBalance"): TransportError("RPC request failed: 502 - bad gateway"),
            ("base", "eth_getBalance"): "0x0",
        }
    )

    result = await tool.analyze_wallet_multichain(address="0xaddr", chains=["ethereum", "polygon", "base"])

    assert result.success is True
    assert result.data["chainsAnalyzed"] == 3
    entries = result.data["results"]
    assert [e["success"] for e in entries] == [True, False, True]
    assert entries[0]["balanceFormatted"] == "1.000000 ETH"
    assert entries[1]["error"] == "RPC request failed: 502 - bad gateway"


def test_list_supported_chains():
    tool, _ = make_tool({})

    result = tool.list_supported_chains()

    assert result.data["count"] == 7
    assert result.data["chains"][0] == {
        "id": "ethereum",
        "name": "Ethereum Mainnet",
        "chainId": "1",
        "rpcMethod": "eth",
        "family": "evm",
        "nativeSymbol": "ETH",
    }
    assert result.data["chains"][-1]["chainId"] == "solana"
    assert result.data["chains"][-1]["nativeSymbol"] == "SOL"


def test_definitions_cover_every_dispatchable_tool():
    names = [d["function"]["name"] for d in CRYPTO_TOOL_DEFINITIONS]
    assert names == [
        "get_wallet_balance",
        "get_transaction",
        "get_recent_transactions",
        "get_token_holdings",
        "get_block_info",
        "get_gas_price",
        "get_transaction_count",
        "analyze_wallet_multichain",
        "list_supported_chains",
    ]
    assert all(d["type"] == "function" for d in CRYPTO_TOOL_DEFINITIONS)


@pytest.mark.asyncio
async def test_execute_tool_dispatches_and_flattens():
    tool, _ = make_tool({("ethereum", "eth_gasPrice"): "0x3b9aca00"})

    output = await execute_tool(tool, "get_gas_price", {"chain": "ethereum"})

    assert output["success"] is True
    assert output["tool"] == "get_gas_price"
    assert output["data"]["gasPriceGwei"] == "1.00"
    assert output["error"] is None


@pytest.mark.asyncio
async def test_execute_tool_unknown_and_missing_args():
    tool, _ = make_tool({})

    unknown = await execute_tool(tool, "get_weather", {})
    missing = await execute_tool(tool, "get_wallet_balance", {"address": "0xaddr"})
    chains = await execute_tool(tool, "list_supported_chains", {})

    assert unknown["success"] is False
    assert unknown["error"] == "unknown_tool: get_weather"
    assert missing["success"] is False
    assert missing["error"] == "missing_argument: chain"
    assert chains["success"] is True


@pytest.mark.asyncio
async def test_token_holdings_with_malformed_token_amount():
    account = {
        "pubkey": "Acc1",
        "account": {"data": {"parsed": {"info": {"mint": "Mint1", "tokenAmount": "12"}}}},
    }
    tool, _ = make_tool({("solana", "getTokenAccountsByOwner"): {"context": {}, "value": [account]}})

    result = await tool.token_holdings(address="So1")

    assert result.success is False
    assert "token amount" in result.error


@pytest.mark.asyncio
async def test_execute_tool_multichain_keeps_valid_chains_next_to_bad_ids():
    tool, _ = make_tool({("ethereum", "eth_getBalance"): "0xde0b6b3a7640000"})

    output = await execute_tool(tool, "analyze_wallet_multichain", {"address": "0xaddr", "chains": ["ethereum", 1]})

    assert output["success"] is True
    assert [e["success"] for e in output["data"]["results"]] == [True, False]
    assert output["data"]["results"][1]["error"].startswith("Unsupported chain: 1")

"""Tests for async helper functions."""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest
from conftest import PRIVATE_KEY, TOKEN
from eth_account import Account
from hexbytes import HexBytes
from web3.exceptions import ContractLogicError

from drips_sdk import MissingArgumentError
from drips_sdk.async_helpers import (
    DEFAULT_GAS,
    DEFAULT_GAS_APPROVE,
    approve,
    get_allowance,
    resolve_private_key,
    resolve_rpc_url,
    resolve_subgraph_url,
    send_transaction,
)

SPENDER = "0x1234567890123456789012345678901234567890"


def _mock_w3(tx_hash: bytes = b"\xaa" * 32) -> MagicMock:
    mock_w3 = MagicMock()
    mock_w3.eth.get_transaction_count = AsyncMock(return_value=3)
    mock_w3.eth.send_raw_transaction = AsyncMock(return_value=HexBytes(tx_hash))
    return mock_w3


def _mock_call(fn_name: str = "setSplits") -> MagicMock:
    contract_call = MagicMock()
    contract_call.fn_name = fn_name
    # web3 fills in the gas price from the node; the mock has to do it itself
    contract_call.build_transaction = AsyncMock(
        side_effect=lambda params: {**params, "to": SPENDER, "data": "0x", "gasPrice": 10**9}
    )
    return contract_call


class TestResolveConfig:
    """Tests for argument/env-var resolution."""

    def test_explicit_value(self) -> None:
        assert resolve_rpc_url("https://rpc.example") == "https://rpc.example"

    def test_env_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DRIPS_PRIVATE_KEY", PRIVATE_KEY)

        assert resolve_private_key() == PRIVATE_KEY

    def test_missing(self) -> None:
        with pytest.raises(MissingArgumentError, match="DRIPS_SUBGRAPH_URL"):
            resolve_subgraph_url(None)


class TestSendTransaction:
    """Tests for sign-and-send."""

    @pytest.mark.asyncio
    async def test_signs_and_sends(self) -> None:
        """Should build with tx params, sign locally and broadcast the raw tx."""
        mock_w3 = _mock_w3()
        account = Account.from_key(PRIVATE_KEY)
        contract_call = _mock_call()

        tx_hash = await send_transaction(mock_w3, account, 5, contract_call)

        assert tx_hash == HexBytes(b"\xaa" * 32)
        params = contract_call.build_transaction.await_args.args[0]
        assert params["from"] == account.address
        assert params["nonce"] == 3
        assert params["chainId"] == 5
        assert params["gas"] == DEFAULT_GAS
        mock_w3.eth.send_raw_transaction.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_logs_submission(self, caplog: pytest.LogCaptureFixture) -> None:
        """Should log the function name and tx hash at INFO."""
        with caplog.at_level(logging.INFO, logger="drips_sdk.async_helpers"):
            await send_transaction(_mock_w3(), Account.from_key(PRIVATE_KEY), 5, _mock_call("collect"))

        assert "Submitted collect" in caplog.text

    @pytest.mark.asyncio
    async def test_contract_error_propagates(self) -> None:
        """Reverts surface unchanged, with nothing broadcast."""
        mock_w3 = _mock_w3()
        contract_call = _mock_call()
        contract_call.build_transaction = AsyncMock(side_effect=ContractLogicError("execution reverted"))

        with pytest.raises(ContractLogicError):
            await send_transaction(mock_w3, Account.from_key(PRIVATE_KEY), 5, contract_call)

        mock_w3.eth.send_raw_transaction.assert_not_awaited()


class TestErc20Helpers:
    """Tests for allowance/approve."""

    @pytest.mark.asyncio
    async def test_get_allowance(self) -> None:
        mock_w3 = MagicMock()
        mock_token = MagicMock()
        mock_token.functions.allowance.return_value.call = AsyncMock(return_value=100)
        mock_w3.eth.contract.return_value = mock_token

        result = await get_allowance(mock_w3, TOKEN.lower(), SPENDER, SPENDER)

        assert result == 100
        assert mock_w3.eth.contract.call_args.kwargs["address"] == TOKEN
        mock_token.functions.allowance.assert_called_once_with(SPENDER, SPENDER)

    @pytest.mark.asyncio
    async def test_approve_uses_approve_gas(self) -> None:
        mock_w3 = _mock_w3()
        mock_token = MagicMock()
        approve_call = _mock_call("approve")
        mock_token.functions.approve.return_value = approve_call
        mock_w3.eth.contract.return_value = mock_token

        await approve(mock_w3, Account.from_key(PRIVATE_KEY), 5, TOKEN, SPENDER, 10)

        mock_token.functions.approve.assert_called_once_with(SPENDER, 10)
        assert approve_call.build_transaction.await_args.args[0]["gas"] == DEFAULT_GAS_APPROVE

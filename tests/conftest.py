"""Pytest configuration and fixtures for drips-sdk tests.

Clients are built for real (offline: web3 opens no connection until the
first request), then their contract objects are swapped for mocks so each
test can assert on exactly what would be sent on-chain.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from drips_sdk import AddressDriverClient, CallerClient, DripsHubClient, NFTDriverClient

RPC_URL = "https://goerli.example/rpc"
# Throwaway key, never funded
PRIVATE_KEY = "0x" + "ab" * 32

TOKEN = "0x6B175474E89094C44Da98b954EedeAC495271d0F"
RECIPIENT = "0xAEeF2381C4Ca788a7bc53421849d73e61ec47B8D"


def mock_view(contract: MagicMock, fn_name: str, return_value) -> MagicMock:
    """Make `contract.functions.<fn_name>(...).call()` return `return_value`."""
    fn = getattr(contract.functions, fn_name)
    fn.return_value.call = AsyncMock(return_value=return_value)
    return fn


@pytest.fixture(autouse=True)
def _clear_drips_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's DRIPS_* variables out of the tests."""
    for var in ("DRIPS_RPC_URL", "DRIPS_PRIVATE_KEY", "DRIPS_SUBGRAPH_URL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def hub_client() -> DripsHubClient:
    client = DripsHubClient(rpc_url=RPC_URL)
    client.contract = MagicMock()
    return client


@pytest.fixture
def address_client() -> AddressDriverClient:
    client = AddressDriverClient(rpc_url=RPC_URL, private_key=PRIVATE_KEY)
    client.contract = MagicMock()
    return client


@pytest.fixture
def nft_client() -> NFTDriverClient:
    client = NFTDriverClient(rpc_url=RPC_URL, private_key=PRIVATE_KEY)
    client.contract = MagicMock()
    return client


@pytest.fixture
def caller_client() -> CallerClient:
    client = CallerClient(rpc_url=RPC_URL, private_key=PRIVATE_KEY)
    client.contract = MagicMock()
    return client

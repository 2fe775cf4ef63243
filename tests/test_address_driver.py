"""Tests for AddressDriverClient."""

from unittest.mock import AsyncMock, patch

import pytest
from conftest import RECIPIENT, TOKEN, mock_view
from hexbytes import HexBytes

from drips_sdk import (
    AddressDriverClient,
    DripsReceiver,
    DripsReceiverConfig,
    GasOptions,
    InvalidArgumentError,
    MissingArgumentError,
    SplitsReceiver,
    to_packed,
)
from drips_sdk.constants import MAX_UINT256

TX_HASH = HexBytes(b"\x11" * 32)
CONFIG = to_packed(DripsReceiverConfig(drip_id=1, amount_per_sec=1000, duration=0, start=0))


@pytest.fixture
def mock_send():
    with patch("drips_sdk.address_driver.send_transaction", new=AsyncMock(return_value=TX_HASH)) as mock:
        yield mock


class TestUserIds:
    """Tests for user ID <-> address conversion."""

    def test_get_user_address(self) -> None:
        """The address is the low 160 bits of the user ID, checksummed."""
        address = AddressDriverClient.get_user_address("998697365313809816557299962230702436787341785997")

        assert address == "0xAEeF2381C4Ca788a7bc53421849d73e61ec47B8D"

    def test_get_user_address_ignores_high_bits(self) -> None:
        """Driver ID bits above the address don't leak into it."""
        user_id = (1 << 224) | 998697365313809816557299962230702436787341785997

        assert AddressDriverClient.get_user_address(user_id) == "0xAEeF2381C4Ca788a7bc53421849d73e61ec47B8D"

    def test_get_user_address_missing(self) -> None:
        with pytest.raises(MissingArgumentError):
            AddressDriverClient.get_user_address(None)

    @pytest.mark.asyncio
    async def test_get_user_id_by_address(self, address_client: AddressDriverClient) -> None:
        """Should call calcUserId and return a decimal string."""
        fn = mock_view(address_client.contract, "calcUserId", 42)

        user_id = await address_client.get_user_id_by_address(RECIPIENT.lower())

        assert user_id == "42"
        fn.assert_called_once_with(RECIPIENT)

    @pytest.mark.asyncio
    async def test_get_user_id_uses_wallet(self, address_client: AddressDriverClient) -> None:
        fn = mock_view(address_client.contract, "calcUserId", 7)

        assert await address_client.get_user_id() == "7"
        fn.assert_called_once_with(address_client.address)

    @pytest.mark.asyncio
    async def test_get_user_id_by_malformed_address(self, address_client: AddressDriverClient) -> None:
        with pytest.raises(InvalidArgumentError):
            await address_client.get_user_id_by_address("0x1234")


class TestAllowance:
    """Tests for ERC-20 allowance helpers."""

    @pytest.mark.asyncio
    async def test_get_allowance(self, address_client: AddressDriverClient) -> None:
        """Should query owner=wallet, spender=driver."""
        with patch("drips_sdk.address_driver._get_allowance", new=AsyncMock(return_value=10)) as mock_get:
            assert await address_client.get_allowance(TOKEN) == 10

        mock_get.assert_awaited_once_with(
            address_client.w3,
            TOKEN,
            address_client.address,
            address_client.driver_address,
        )

    @pytest.mark.asyncio
    async def test_approve_defaults_to_unlimited(self, address_client: AddressDriverClient) -> None:
        with patch("drips_sdk.address_driver._approve", new=AsyncMock(return_value=TX_HASH)) as mock_approve:
            assert await address_client.approve(TOKEN) == TX_HASH

        args = mock_approve.await_args.args
        assert args[3] == TOKEN
        assert args[4] == address_client.driver_address
        assert args[5] == MAX_UINT256

    @pytest.mark.asyncio
    async def test_approve_zero_rejected(self, address_client: AddressDriverClient) -> None:
        with pytest.raises(InvalidArgumentError):
            await address_client.approve(TOKEN, 0)


class TestWrites:
    """Tests for transaction-submitting operations."""

    @pytest.mark.asyncio
    async def test_collect(self, address_client: AddressDriverClient, mock_send: AsyncMock) -> None:
        tx_hash = await address_client.collect(TOKEN.lower(), RECIPIENT)

        assert tx_hash == TX_HASH
        address_client.contract.functions.collect.assert_called_once_with(TOKEN, RECIPIENT)
        mock_send.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_give(self, address_client: AddressDriverClient, mock_send: AsyncMock) -> None:
        await address_client.give("1234", TOKEN, 500)

        address_client.contract.functions.give.assert_called_once_with(1234, TOKEN, 500)

    @pytest.mark.asyncio
    async def test_give_negative_amount(self, address_client: AddressDriverClient, mock_send: AsyncMock) -> None:
        """A negative amount fails before anything is sent."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            await address_client.give("1234", TOKEN, -1)

        assert exc_info.value.param == "amount"
        mock_send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_give_missing_receiver(self, address_client: AddressDriverClient, mock_send: AsyncMock) -> None:
        with pytest.raises(MissingArgumentError) as exc_info:
            await address_client.give(None, TOKEN, 1)

        assert exc_info.value.param == "receiver_user_id"
        mock_send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_set_drips(self, address_client: AddressDriverClient, mock_send: AsyncMock) -> None:
        """Receivers are normalized and the gas options are forwarded."""
        gas = GasOptions(gas_limit=300_000)
        current = [DripsReceiver(user_id="10", config=CONFIG)]
        new = [DripsReceiver(user_id="10", config=CONFIG), DripsReceiver(user_id="9", config=CONFIG)]

        await address_client.set_drips(TOKEN, current, new, RECIPIENT, 1_000, gas=gas)

        address_client.contract.functions.setDrips.assert_called_once_with(
            TOKEN,
            [(10, CONFIG)],
            1_000,
            [(9, CONFIG), (10, CONFIG)],
            RECIPIENT,
        )
        assert mock_send.await_args.kwargs["gas_options"] == gas

    @pytest.mark.asyncio
    async def test_set_drips_balance_delta_defaults_to_zero(
        self, address_client: AddressDriverClient, mock_send: AsyncMock
    ) -> None:
        await address_client.set_drips(TOKEN, [], [], RECIPIENT)

        address_client.contract.functions.setDrips.assert_called_once_with(TOKEN, [], 0, [], RECIPIENT)

    @pytest.mark.asyncio
    async def test_set_drips_missing_current_receivers(
        self, address_client: AddressDriverClient, mock_send: AsyncMock
    ) -> None:
        with pytest.raises(MissingArgumentError):
            await address_client.set_drips(TOKEN, None, [], RECIPIENT)

    @pytest.mark.asyncio
    async def test_set_splits(self, address_client: AddressDriverClient, mock_send: AsyncMock) -> None:
        receivers = [SplitsReceiver(user_id="2", weight=100), SplitsReceiver(user_id="1", weight=1)]

        await address_client.set_splits(receivers)

        address_client.contract.functions.setSplits.assert_called_once_with([(1, 1), (2, 100)])

    @pytest.mark.asyncio
    async def test_set_splits_empty_list_clears(
        self, address_client: AddressDriverClient, mock_send: AsyncMock
    ) -> None:
        """[] is a valid argument meaning "no splits receivers"."""
        await address_client.set_splits([])

        address_client.contract.functions.setSplits.assert_called_once_with([])
        mock_send.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_set_splits_none_is_missing(self, address_client: AddressDriverClient, mock_send: AsyncMock) -> None:
        with pytest.raises(MissingArgumentError):
            await address_client.set_splits(None)

        mock_send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_emit_user_metadata(self, address_client: AddressDriverClient, mock_send: AsyncMock) -> None:
        """The value is sent as UTF-8 bytes."""
        await address_client.emit_user_metadata("1", "héllo")

        address_client.contract.functions.emitUserMetadata.assert_called_once_with(1, "héllo".encode())

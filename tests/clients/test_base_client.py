# tests/clients/test_base_client.py
import pytest
from web3.exceptions import TimeExhausted

from eigenda.clients.base_client import BaseClient
from eigenda.clients.errors import ConfigurationError, InvalidParameterError, TransactionError

from conftest import CREDITS_ADDRESS, TEST_RPC_URL, TX_HASH, FakeCall, FakeEth, make_contract


class FakeW3:
    def __init__(self):
        self.eth = FakeEth(make_contract())


@pytest.fixture
def client(fake_signer):
    return BaseClient(rpc_url=TEST_RPC_URL, signer=fake_signer, w3=FakeW3())


# --- __init__ ---------------------------------------------------------------

def test_init_empty_rpc_raises(fake_signer):
    """If rpc_url is empty, __init__ should raise ConfigurationError"""
    with pytest.raises(ConfigurationError):
        BaseClient(rpc_url="", signer=fake_signer)


def test_init_builds_async_web3_without_network(fake_signer):
    """Building the default AsyncWeb3 does not contact the node"""
    client = BaseClient(rpc_url=TEST_RPC_URL, signer=fake_signer)
    assert client.address == fake_signer.address


# --- _load_contract -----------------------------------------------------------

def test_load_contract_invalid_address(client):
    """Invalid Ethereum address should raise InvalidParameterError"""
    with pytest.raises(InvalidParameterError) as exc:
        client._load_contract(lambda w3, addr: None, "not_an_address")
    assert "Invalid contract address" in str(exc.value)


def test_load_contract_checksums_address(client):
    """The getter receives the checksummed address"""
    seen = {}

    def getter(w3, addr):
        seen["addr"] = addr
        return "contract"

    assert client._load_contract(getter, CREDITS_ADDRESS.lower()) == "contract"
    assert seen["addr"] == CREDITS_ADDRESS


# --- _send_tx -------------------------------------------------------------------

@pytest.mark.asyncio
async def test_send_tx_builds_signs_and_returns_receipt(client, fake_signer):
    """_send_tx fills the tx params, signs, sends and returns the receipt"""
    call = FakeCall()
    receipt = await client._send_tx(lambda *args: call, b"arg", value=5)

    assert receipt["status"] == 1
    assert call.built["from"] == fake_signer.address
    assert call.built["nonce"] == 7
    assert call.built["value"] == 5
    assert call.built["chainId"] == 8453
    assert call.built["gas"] == 2_000_000
    assert fake_signer.signed and client._w3.eth.sent == [b"raw-tx"]


@pytest.mark.asyncio
async def test_send_tx_returns_reverted_receipt(client):
    """A reverted receipt is returned, not raised"""
    client._w3.eth.receipt = {"status": 0, "transactionHash": TX_HASH}
    receipt = await client._send_tx(lambda *args: FakeCall())
    assert receipt["status"] == 0


@pytest.mark.asyncio
async def test_send_tx_wraps_build_errors(client):
    """Build failures become TransactionError without a hash"""
    with pytest.raises(TransactionError) as exc:
        await client._send_tx(lambda *args: FakeCall(error=ValueError("execution reverted")))
    assert "execution reverted" in str(exc.value)
    assert exc.value.tx_hash is None


@pytest.mark.asyncio
async def test_send_tx_timeout_keeps_hash(client):
    """A receipt timeout keeps the sent transaction hash"""
    async def never_mined(tx_hash, timeout):
        raise TimeExhausted("not mined")

    client._w3.eth.wait_for_transaction_receipt = never_mined
    with pytest.raises(TransactionError) as exc:
        await client._send_tx(lambda *args: FakeCall())
    assert "timed out" in str(exc.value)
    assert exc.value.tx_hash == "0x" + "11" * 32

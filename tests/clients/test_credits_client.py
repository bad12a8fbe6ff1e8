# tests/clients/test_credits_client.py
import types
from decimal import Decimal

import pytest

from eigenda.clients.credits_client import CreditsClient
from eigenda.clients.errors import InvalidParameterError, LedgerError, TransactionError
from eigenda.types import TopupResult

from conftest import CREDITS_ADDRESS, TEST_RPC_URL, FakeCall, FakeEth, make_contract


class FakeW3:
    def __init__(self, contract):
        self.eth = FakeEth(contract)


def _client(fake_signer, contract):
    return CreditsClient(
        rpc_url=TEST_RPC_URL,
        signer=fake_signer,
        contract_address=CREDITS_ADDRESS.lower(),
        w3=FakeW3(contract),
    )


def test_contract_loaded_with_checksum_address(fake_signer):
    """The Credits contract is loaded at the checksummed address"""
    client = _client(fake_signer, make_contract())
    assert client._w3.eth.contract_address == CREDITS_ADDRESS


def test_invalid_contract_address(fake_signer):
    """A malformed contract address raises InvalidParameterError"""
    with pytest.raises(InvalidParameterError):
        CreditsClient(rpc_url=TEST_RPC_URL, signer=fake_signer, contract_address="0xnope",
                      w3=FakeW3(make_contract()))


# --- get_balance ---------------------------------------------------------------

@pytest.mark.asyncio
async def test_get_balance_converts_wei_and_pads_identifier(fake_signer):
    """Balances are converted from wei and identifiers padded to bytes32"""
    seen = {}

    def get_balance(identifier):
        seen["identifier"] = identifier
        return FakeCall(result=1_500_000_000_000_000_000)

    client = _client(fake_signer, make_contract(getBalance=get_balance))
    balance = await client.get_balance(b"\x01\x02")

    assert balance == Decimal("1.5")
    assert bytes(seen["identifier"]) == b"\x00" * 30 + b"\x01\x02"


@pytest.mark.asyncio
async def test_get_balance_wraps_errors(fake_signer):
    """RPC failures while reading a balance become LedgerError"""
    client = _client(fake_signer, make_contract(getBalance=lambda _: FakeCall(error=RuntimeError("rpc down"))))
    with pytest.raises(LedgerError) as exc:
        await client.get_balance(b"\x01")
    assert str(exc.value) == "Failed to get balance: rpc down"


# --- topup_credits ---------------------------------------------------------------

@pytest.mark.asyncio
async def test_topup_success_maps_status_one(fake_signer):
    """A receipt with status 1 is reported as success with the wei value sent"""
    call = FakeCall()
    client = _client(fake_signer, make_contract(topup=lambda _: call))

    result = await client.topup_credits(b"\x01", "0.1")

    assert isinstance(result, TopupResult)
    assert result.status == "success" and result.succeeded
    assert result.transaction_hash == "0x" + "11" * 32
    assert call.built["value"] == 10 ** 17


@pytest.mark.asyncio
@pytest.mark.parametrize("receipt_status", [0, 2])
async def test_topup_other_status_maps_failed(fake_signer, receipt_status):
    """Any other receipt status is reported as failed"""
    client = _client(fake_signer, make_contract(topup=lambda _: FakeCall()))
    client._w3.eth.receipt = {"status": receipt_status, "transactionHash": b"\x22" * 32}

    result = await client.topup_credits(b"\x01", Decimal("1"))

    assert result.status == "failed"
    assert not result.succeeded


@pytest.mark.asyncio
async def test_topup_rejects_bad_amounts(fake_signer):
    """Negative or non-numeric amounts raise InvalidParameterError"""
    client = _client(fake_signer, make_contract(topup=lambda _: FakeCall()))
    with pytest.raises(InvalidParameterError):
        await client.topup_credits(b"\x01", -1)
    with pytest.raises(InvalidParameterError):
        await client.topup_credits(b"\x01", "lots")


@pytest.mark.asyncio
async def test_topup_send_failure_is_ledger_error(fake_signer):
    """Send failures surface as TransactionError, a LedgerError"""
    client = _client(fake_signer, make_contract(topup=lambda _: FakeCall(error=ValueError("insufficient funds"))))
    with pytest.raises(TransactionError) as exc:
        await client.topup_credits(b"\x01", 1)
    assert isinstance(exc.value, LedgerError)
    assert "insufficient funds" in str(exc.value)


# --- create_identifier ---------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_identifier_reads_event(fake_signer):
    """The new identifier is read from the IdentifierCreated event"""
    contract = make_contract(createIdentifier=lambda: FakeCall())
    contract.events.IdentifierCreated = lambda: types.SimpleNamespace(
        process_receipt=lambda receipt, errors=None: [{"args": {"identifier": b"\x09" * 4}}]
    )
    client = _client(fake_signer, contract)

    identifier = await client.create_identifier()

    assert identifier == b"\x00" * 28 + b"\x09" * 4


@pytest.mark.asyncio
async def test_create_identifier_without_event_fails(fake_signer):
    """A receipt without IdentifierCreated raises LedgerError"""
    client = _client(fake_signer, make_contract(createIdentifier=lambda: FakeCall()))
    with pytest.raises(LedgerError) as exc:
        await client.create_identifier()
    assert "IdentifierCreated" in str(exc.value)


# --- get_identifiers / get_identifier_owner ---------------------------------------------

@pytest.mark.asyncio
async def test_get_identifiers_reads_each_index_in_order(fake_signer):
    """Identifiers are read per index and returned in ledger order"""
    calls = []

    def identifier_at(owner, index):
        calls.append((owner, index))
        return FakeCall(result=bytes([index + 1]))

    contract = make_contract(
        getUserIdentifierCount=lambda owner: FakeCall(result=3),
        getUserIdentifierAt=identifier_at,
    )
    client = _client(fake_signer, contract)

    identifiers = await client.get_identifiers()

    assert identifiers == [b"\x00" * 31 + bytes([i]) for i in (1, 2, 3)]
    assert calls == [(fake_signer.address, i) for i in range(3)]


@pytest.mark.asyncio
async def test_get_identifiers_empty(fake_signer):
    """An owner without identifiers gets an empty list"""
    client = _client(fake_signer, make_contract(getUserIdentifierCount=lambda owner: FakeCall(result=0)))
    assert await client.get_identifiers() == []


@pytest.mark.asyncio
async def test_get_identifiers_wraps_errors(fake_signer):
    """A failing per-index read raises LedgerError"""
    contract = make_contract(
        getUserIdentifierCount=lambda owner: FakeCall(result=2),
        getUserIdentifierAt=lambda owner, index: FakeCall(error=RuntimeError("boom")),
    )
    client = _client(fake_signer, contract)
    with pytest.raises(LedgerError) as exc:
        await client.get_identifiers()
    assert "Failed to get identifiers" in str(exc.value)


@pytest.mark.asyncio
async def test_get_identifier_owner(fake_signer):
    """The owner address is returned as reported by the contract"""
    owner = "0x000000000000000000000000000000000000dEaD"
    client = _client(fake_signer, make_contract(getIdentifierOwner=lambda _: FakeCall(result=owner)))
    assert await client.get_identifier_owner("0x01") == owner

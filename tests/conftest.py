# tests/conftest.py
import json
import types

import httpx
import pytest
from hexbytes import HexBytes

from eigenda.clients.signer import RawKey, resolve_signer

TEST_PRIVATE_KEY = "0x1234567890123456789012345678901234567890123456789012345678901234"
TEST_API_URL = "https://api.example.test"
TEST_RPC_URL = "https://rpc.example.test"
CREDITS_ADDRESS = "0x0CC001F1bDe9cd129092d4d24D935DB985Ce42A9"
TX_HASH = HexBytes(b"\x11" * 32)


@pytest.fixture
def signer():
    return resolve_signer(RawKey.from_hex(TEST_PRIVATE_KEY))


# --- HTTP ----------------------------------------------------------------

def _fresh(response: httpx.Response) -> httpx.Response:
    return httpx.Response(response.status_code, headers=response.headers, content=response.content)


class RecordingService:
    """Routes httpx requests to canned responses and remembers them."""

    def __init__(self):
        self.requests = []
        self.statuses = []
        self.upload_response = httpx.Response(200, json={"jobId": "job-1", "requestId": "req-1"})
        self.retrieve_response = httpx.Response(200, content=b'{"content": "hello"}')

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.endswith("/upload"):
            return _fresh(self.upload_response)
        if path.startswith("/status/"):
            status = self.statuses.pop(0) if len(self.statuses) > 1 else self.statuses[0]
            if isinstance(status, httpx.Response):
                return _fresh(status)
            return httpx.Response(200, json=status)
        if path.endswith("/retrieve"):
            return _fresh(self.retrieve_response)
        return httpx.Response(404, json={"error": "not found"})

    def paths(self):
        return [r.url.path for r in self.requests]

    def bodies(self, suffix):
        return [json.loads(r.content) for r in self.requests if r.url.path.endswith(suffix)]


@pytest.fixture
def service():
    return RecordingService()


@pytest.fixture
def http_client(service):
    return httpx.AsyncClient(transport=httpx.MockTransport(service))


# --- Web3 ----------------------------------------------------------------

async def _resolved(value):
    return value


class FakeCall:
    """Mimics a bound contract function: call() for reads, build_transaction() for writes."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.built = None

    async def call(self):
        if self.error:
            raise self.error
        return self.result

    async def build_transaction(self, tx_params):
        if self.error:
            raise self.error
        self.built = dict(tx_params)
        return {**tx_params, "to": CREDITS_ADDRESS, "data": "0x"}


class FakeEth:
    def __init__(self, contract):
        self._contract = contract
        self.receipt = {"status": 1, "transactionHash": TX_HASH, "logs": []}
        self.sent = []
        self.contract_address = None

    def contract(self, address, abi):
        self.contract_address = address
        return self._contract

    @property
    def chain_id(self):
        return _resolved(8453)

    async def get_transaction_count(self, address):
        return 7

    async def send_raw_transaction(self, raw):
        self.sent.append(raw)
        return TX_HASH

    async def wait_for_transaction_receipt(self, tx_hash, timeout):
        return self.receipt


class FakeSigner:
    address = "0x19E7E376E7C213B7E7e7e46cc70A5dD086DAff2A"

    def __init__(self):
        self.signed = []

    def sign_transaction(self, tx):
        self.signed.append(tx)
        return types.SimpleNamespace(raw_transaction=b"raw-tx")


def make_contract(**functions):
    """Build a fake contract whose functions return the given FakeCall factories."""
    events = types.SimpleNamespace(
        IdentifierCreated=lambda: types.SimpleNamespace(process_receipt=lambda receipt, errors=None: [])
    )
    return types.SimpleNamespace(functions=types.SimpleNamespace(**functions), events=events)


@pytest.fixture
def fake_signer():
    return FakeSigner()

"""
Tests for the Solana RPC client, the Dialect program handle and Solana messaging.
"""
import base64
import json

import base58
import pytest
from nacl.signing import VerifyKey

from dialect_sdk.backends import Backend
from dialect_sdk.encryption import EncryptionKeysProvider, EncryptionKeysStore
from dialect_sdk.errors import SolanaRpcError
from dialect_sdk.messaging import FindThreadQuery, SendMessageCommand, SolanaMessaging, ThreadId
from dialect_sdk.solana import create_dialect_program
from dialect_sdk.solana.program import DIALECT_ACCOUNT, discriminator

RPC_URL = "https://rpc.solana.test"
PROGRAM = "2YFyZAg8rBtuvzFFiGvXwPHFAQJ2FXZoS7bYCKticpjk"
BOB = "bob11111111111111111111111111111111111111111"


def account_data(members, messages=()) -> str:
    document = {
        "members": [{"public_key": m, "scopes": [True, True]} for m in members],
        "messages": list(messages),
        "encrypted": False,
        "last_message_timestamp": 1700000000,
    }
    raw = discriminator("account", DIALECT_ACCOUNT) + json.dumps(document).encode()
    return base64.b64encode(raw).decode()


def rpc_result(result):
    return {"jsonrpc": "2.0", "id": 1, "result": result}


@pytest.fixture
def program(wallet):
    return create_dialect_program(wallet, PROGRAM, RPC_URL)


class TestSolanaRpcClient:
    """Tests for JSON-RPC transport."""

    async def test_rpc_error(self, program, httpx_mock):
        """Should raise SolanaRpcError for an RPC error object."""
        httpx_mock.add_response(
            url=RPC_URL,
            method="POST",
            json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32602, "message": "Invalid param"}},
        )

        with pytest.raises(SolanaRpcError) as exc_info:
            await program.rpc.get_account_info("x")

        assert exc_info.value.message == "Invalid param"
        assert exc_info.value.error_data["code"] == -32602
        await program.close()

    async def test_missing_account(self, program, httpx_mock):
        """Should return None for an account that does not exist."""
        httpx_mock.add_response(
            url=RPC_URL, method="POST", json=rpc_result({"context": {"slot": 1}, "value": None})
        )

        assert await program.fetch_dialect("x") is None
        await program.close()


class TestDialectProgram:
    """Tests for account decoding and instruction submission."""

    def test_dialect_address_ignores_member_order(self, program):
        """Should derive the same address for any member order."""
        assert program.dialect_address(["a", "b"]) == program.dialect_address(["b", "a"])
        assert program.dialect_address(["a", "b"]) != program.dialect_address(["a", "c"])

    async def test_fetch_dialects_filters_members(self, program, httpx_mock, wallet):
        """Should keep only dialects the member belongs to."""
        me = wallet.public_key
        httpx_mock.add_response(
            url=RPC_URL,
            method="POST",
            json=rpc_result([
                {"pubkey": "d1", "account": {"data": [account_data([me, BOB]), "base64"]}},
                {"pubkey": "d2", "account": {"data": [account_data([BOB, "carol"]), "base64"]}},
                {"pubkey": "junk", "account": {"data": [base64.b64encode(b"x" * 16).decode(), "base64"]}},
            ]),
        )

        dialects = await program.fetch_dialects(member=me)

        assert [d.address for d in dialects] == ["d1"]
        request = json.loads(httpx_mock.get_request().content)
        assert request["method"] == "getProgramAccounts"
        assert request["params"][0] == PROGRAM
        await program.close()

    async def test_execute_signs_with_wallet(self, program, httpx_mock, wallet):
        """Should submit an instruction signed by the wallet."""
        httpx_mock.add_response(url=RPC_URL, method="POST", json=rpc_result("sig123"))

        signature = await program.execute("send_message", {"dialect": "d1"}, {"text": "gm"})

        assert signature == "sig123"
        request = json.loads(httpx_mock.get_request().content)
        signed = base64.b64decode(request["params"][0])
        payload = VerifyKey(base58.b58decode(wallet.public_key)).verify(signed)
        assert payload[:8] == discriminator("global", "send_message")
        assert json.loads(payload[8:])["args"] == {"text": "gm"}
        await program.close()


class TestSolanaMessaging:
    """Tests for Solana backed messaging."""

    @pytest.fixture
    def messaging(self, wallet, program):
        keys = EncryptionKeysProvider.create(wallet, EncryptionKeysStore.create_in_memory())
        return SolanaMessaging(wallet, program, keys)

    async def test_find_by_members(self, messaging, program, httpx_mock, wallet):
        """Should look up the thread at the derived address."""
        me = wallet.public_key
        httpx_mock.add_response(
            url=RPC_URL,
            method="POST",
            json=rpc_result({"value": {"data": [account_data([me, BOB]), "base64"]}}),
        )

        thread = await messaging.find(FindThreadQuery(other_members=[BOB]))

        assert thread.id == ThreadId(
            backend=Backend.SOLANA, address=program.dialect_address([me, BOB])
        )
        assert [m.public_key for m in thread.other_members] == [BOB]
        await program.close()

    async def test_messages(self, messaging, program, httpx_mock, wallet):
        """Should convert on-chain messages."""
        httpx_mock.add_response(
            url=RPC_URL,
            method="POST",
            json=rpc_result({"value": {"data": [
                account_data(
                    [wallet.public_key, BOB],
                    [{"owner": BOB, "text": "gm", "timestamp": 1700000000}],
                ),
                "base64",
            ]}}),
        )

        messages = await messaging.messages(ThreadId(backend=Backend.SOLANA, address="d1"))

        assert [(m.author, m.text) for m in messages] == [(BOB, "gm")]
        assert messages[0].timestamp.year == 2023
        await program.close()

    async def test_send(self, messaging, program, httpx_mock):
        """Should submit a send_message instruction."""
        httpx_mock.add_response(url=RPC_URL, method="POST", json=rpc_result("sig"))

        await messaging.send(ThreadId(backend=Backend.SOLANA, address="d1"), SendMessageCommand(text="gm"))

        assert len(httpx_mock.get_requests()) == 1
        await program.close()

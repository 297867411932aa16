"""
Handle on the Dialect Solana program.

Accounts are stored as an 8-byte type discriminator followed by a JSON
document; instructions are submitted as a discriminator plus JSON body
that the wallet wraps and signs as a transaction.
"""
from __future__ import annotations

import base64
import hashlib
import json
import logging
from typing import Any, Dict, List, Optional

import base58
from pydantic import BaseModel, Field, ValidationError

from ..wallet_adapter import DialectWalletAdapterWrapper
from .rpc import SolanaRpcClient

logger = logging.getLogger(__name__)

DIALECT_ACCOUNT = "DialectAccount"


def discriminator(namespace: str, name: str) -> bytes:
    return hashlib.sha256(f"{namespace}:{name}".encode()).digest()[:8]


class MemberAccount(BaseModel):
    public_key: str
    scopes: List[bool] = Field(default_factory=lambda: [False, True])


class MessageAccount(BaseModel):
    owner: str
    text: str
    timestamp: int


class DialectAccount(BaseModel):
    """Decoded on-chain thread."""

    address: str
    members: List[MemberAccount]
    messages: List[MessageAccount] = Field(default_factory=list)
    encrypted: bool = False
    last_message_timestamp: int = 0

    def has_member(self, public_key: str) -> bool:
        return any(member.public_key == public_key for member in self.members)


class DialectProgram:
    """Reads Dialect accounts and submits Dialect instructions."""

    def __init__(
        self,
        wallet: DialectWalletAdapterWrapper,
        program_address: str,
        rpc: SolanaRpcClient,
    ):
        self.wallet = wallet
        self.program_address = program_address
        self.rpc = rpc

    @property
    def rpc_url(self) -> str:
        return self.rpc.rpc_url

    def dialect_address(self, member_public_keys: List[str]) -> str:
        """Deterministic thread address for a member set."""
        seed = "".join(sorted(member_public_keys)) + self.program_address
        return base58.b58encode(hashlib.sha256(seed.encode()).digest()).decode()

    def _decode(self, address: str, data: Any) -> Optional[DialectAccount]:
        encoded = data[0] if isinstance(data, list) else data
        raw = base64.b64decode(encoded)
        if raw[:8] != discriminator("account", DIALECT_ACCOUNT):
            return None
        try:
            return DialectAccount.model_validate({**json.loads(raw[8:]), "address": address})
        except (ValueError, ValidationError):
            logger.warning("Skipping undecodable dialect account %s", address)
            return None

    async def fetch_dialect(self, address: str) -> Optional[DialectAccount]:
        info = await self.rpc.get_account_info(address)
        if info is None:
            return None
        return self._decode(address, info["data"])

    async def fetch_dialects(self, member: Optional[str] = None) -> List[DialectAccount]:
        filters = [{
            "memcmp": {
                "offset": 0,
                "bytes": base58.b58encode(discriminator("account", DIALECT_ACCOUNT)).decode(),
            }
        }]
        accounts = await self.rpc.get_program_accounts(self.program_address, filters)
        dialects = []
        for account in accounts:
            dialect = self._decode(account["pubkey"], account["account"]["data"])
            if dialect is not None and (member is None or dialect.has_member(member)):
                dialects.append(dialect)
        return dialects

    async def execute(
        self,
        instruction: str,
        accounts: Dict[str, str],
        args: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Sign and send one program instruction; returns the tx signature."""
        body = json.dumps(
            {"program": self.program_address, "accounts": accounts, "args": args or {}},
            separators=(",", ":"),
        ).encode()
        payload = discriminator("global", instruction) + body
        signed = await self.wallet.sign_transaction(payload)
        return await self.rpc.send_raw_transaction(base64.b64encode(signed).decode())

    async def close(self) -> None:
        await self.rpc.close()


def create_dialect_program(
    wallet: DialectWalletAdapterWrapper,
    program_address: str,
    rpc_url: str,
) -> DialectProgram:
    return DialectProgram(wallet, program_address, SolanaRpcClient(rpc_url))

"""
Dialect Cloud auth tokens.

A token is ``base64url(header).base64url(body).base64url(signature)`` with
JSON header/body. The signature covers ``"<header>.<body>"``:

- ``ed25519``: detached ed25519 signature by the subject's key.
- ``solana-tx``: a signed single-signer transaction wrapping that payload,
  for wallets that can only sign transactions.
"""
from __future__ import annotations

import base64
import time
from typing import Optional

import base58
from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey
from pydantic import BaseModel, ConfigDict, ValidationError

from ..errors import TokenError


def b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(data: str) -> bytes:
    return base64.urlsafe_b64decode(data + "=" * (-len(data) % 4))


class TokenHeader(BaseModel):
    model_config = ConfigDict(frozen=True)

    alg: str
    typ: str = "JWT"


class TokenBody(BaseModel):
    model_config = ConfigDict(frozen=True)

    sub: str
    iat: int
    exp: int


class Token(BaseModel):
    """Parsed auth token."""

    model_config = ConfigDict(frozen=True)

    raw: str
    header: TokenHeader
    body: TokenBody
    signature: bytes

    @property
    def signing_input(self) -> bytes:
        header, body, _ = self.raw.split(".")
        return f"{header}.{body}".encode("ascii")

    @classmethod
    def parse(cls, raw: str) -> "Token":
        parts = raw.split(".")
        if len(parts) != 3:
            raise TokenError("Token must have three dot-separated parts")
        try:
            header = TokenHeader.model_validate_json(b64url_decode(parts[0]))
            body = TokenBody.model_validate_json(b64url_decode(parts[1]))
            signature = b64url_decode(parts[2])
        except (ValueError, ValidationError) as e:
            raise TokenError(f"Malformed token: {e}") from e
        return cls(raw=raw, header=header, body=body, signature=signature)

    def is_expired(self, now: Optional[float] = None) -> bool:
        current = time.time() if now is None else now
        return self.body.exp <= current

    def is_signature_valid(self) -> bool:
        try:
            verify_key = VerifyKey(base58.b58decode(self.body.sub))
        except (ValueError, TypeError):
            return False
        try:
            if self.header.alg == "ed25519":
                verify_key.verify(self.signing_input, self.signature)
                return True
            if self.header.alg == "solana-tx":
                return verify_key.verify(self.signature) == self.signing_input
        except (BadSignatureError, ValueError):
            return False
        return False

    def is_valid(self, now: Optional[float] = None) -> bool:
        return not self.is_expired(now) and self.is_signature_valid()

    def __str__(self) -> str:
        return self.raw

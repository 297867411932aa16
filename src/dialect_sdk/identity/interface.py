"""Identity types shared by providers and resolution strategies."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Identity(BaseModel):
    """Human-readable information about a wallet address."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    public_key: str
    additionals: Dict[str, Any] = Field(default_factory=dict)


class IdentityResolver(ABC):
    """Resolves identities for wallet addresses.

    Providers (name services, registries) implement this directly; the
    resolution strategies compose a list of providers behind the same
    interface.
    """

    @property
    @abstractmethod
    def type(self) -> str:
        """Short name of the identity source."""
        pass

    @abstractmethod
    async def resolve(self, public_key: str) -> Optional[Identity]:
        """Find the identity owning ``public_key``."""
        pass

    @abstractmethod
    async def resolve_reverse(self, domain_name: str) -> Optional[Identity]:
        """Find the identity registered under ``domain_name``."""
        pass

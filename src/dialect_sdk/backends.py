"""Enabled backend selection."""
from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence, Tuple, Union

from .errors import IllegalArgumentError


class Backend(str, Enum):
    """Backends that implement messaging and dapp capabilities."""

    DIALECT_CLOUD = "dialect-cloud"
    SOLANA = "solana"


DEFAULT_BACKENDS: Tuple[Backend, ...] = (Backend.DIALECT_CLOUD, Backend.SOLANA)


def to_backend(value: Union[Backend, str]) -> Backend:
    """Coerce a backend name to ``Backend``."""
    if isinstance(value, Backend):
        return value
    try:
        return Backend(value)
    except ValueError:
        raise IllegalArgumentError(f"Unknown backend {value}") from None


def resolve_backends(
    backends: Optional[Sequence[Union[Backend, str]]] = None,
) -> Tuple[Backend, ...]:
    """Resolve the ordered list of enabled backends.

    The caller's order is kept as-is: it decides which backend is tried
    first wherever a single result is picked.
    """
    if backends is None:
        return DEFAULT_BACKENDS
    if len(backends) < 1:
        raise IllegalArgumentError("Please specify at least one backend.")
    return tuple(to_backend(backend) for backend in backends)

"""
Logging utilities for Dialect SDK with sensitive data masking.

Usage:
    from dialect_sdk.logging import configure_logging, mask_sensitive_data

    configure_logging(level="DEBUG", json_format=False)
    logger.info("Request", extra=mask_sensitive_data({"token": "..."}))
"""
from __future__ import annotations

import json
import logging
import re
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Optional, Sequence

if TYPE_CHECKING:
    from .config import ResolvedConfig

logger = logging.getLogger("dialect_sdk")

MASK_PATTERN = "***"

SENSITIVE_FIELDS = frozenset({
    "password",
    "secret",
    "secret_key",
    "secretKey",
    "private_key",
    "privateKey",
    "token",
    "access_token",
    "authorization",
    "credential",
    "credentials",
})

_INLINE_PATTERNS = [
    # URLs with credentials
    (re.compile(r"(https?://)[^:/@\s]+:[^@\s]+@"), r"\1***:***@"),
    # api keys passed as query parameters, common with RPC providers
    (re.compile(r"([?&](?:api[-_]?key|token)=)[^&\s]+", re.IGNORECASE), r"\1***"),
    (re.compile(r"(Bearer\s+)[a-zA-Z0-9._-]+"), r"\1***"),
]


def mask_value(value: str, show_chars: int = 4) -> str:
    """Mask a sensitive value, keeping the first and last ``show_chars``."""
    if not value or len(value) <= show_chars * 2:
        return MASK_PATTERN
    return f"{value[:show_chars]}...{value[-show_chars:]}"


def is_sensitive_key(key: str) -> bool:
    key_lower = key.lower().replace("-", "_")
    if key_lower.endswith(("token_store", "keys_store", "_lifetime_minutes")):
        return False
    return key in SENSITIVE_FIELDS or key_lower in SENSITIVE_FIELDS or any(
        sensitive in key_lower for sensitive in ("secret", "password", "token", "credential")
    )


def _mask_inline_patterns(text: str) -> str:
    for pattern, replacement in _INLINE_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def mask_sensitive_data(
    data: Any,
    additional_fields: Optional[Sequence[str]] = None,
    _depth: int = 0,
    _max_depth: int = 10,
) -> Any:
    """Recursively mask sensitive data in a data structure.

    Returns a copy; dict values under sensitive keys are replaced and
    strings are scrubbed of inline credentials.
    """
    if _depth > _max_depth:
        return data

    if isinstance(data, dict):
        result = {}
        for key, value in data.items():
            if is_sensitive_key(key) or (additional_fields and key in additional_fields):
                result[key] = MASK_PATTERN
            else:
                result[key] = mask_sensitive_data(value, additional_fields, _depth + 1, _max_depth)
        return result

    if isinstance(data, (list, tuple)):
        return type(data)(
            mask_sensitive_data(item, additional_fields, _depth + 1, _max_depth)
            for item in data
        )

    if isinstance(data, str):
        return _mask_inline_patterns(data)

    return data


def log_configuration(config: "ResolvedConfig") -> None:
    """Log the resolved configuration, redacted, outside production."""
    if config.environment == "production":
        return
    summary = mask_sensitive_data(config.summary())
    logger.info(
        "Initializing Dialect SDK using configuration:\n"
        "Wallet:\n"
        "  Public key: %s\n"
        "  Supports encryption: %s\n"
        "Enabled backends: %s\n"
        "Dialect cloud settings:\n"
        "  URL: %s\n"
        "Solana settings:\n"
        "  Dialect program: %s\n"
        "  RPC URL: %s",
        summary["wallet"]["public_key"],
        summary["wallet"]["supports_encryption"],
        json.dumps(summary["backends"]),
        summary["dialect_cloud"]["url"],
        summary["solana"]["dialect_program"],
        summary["solana"]["rpc_url"],
    )


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": _mask_inline_patterns(record.getMessage()),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


def configure_logging(level: str = "INFO", json_format: bool = False) -> logging.Handler:
    """Attach a stderr handler to the ``dialect_sdk`` logger."""
    handler = logging.StreamHandler(sys.stderr)
    if json_format:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level.upper())
    return handler

"""Helpers for keeping API tokens out of logs and error messages."""

from __future__ import annotations

import re
from typing import Any

REDACTED = "[REDACTED]"

_SENSITIVE_KEY_RE = re.compile(r"(token|secret|api[_-]?key|authorization)", re.IGNORECASE)
_KEY_VALUE_SECRET_RE = re.compile(
    r"""(?ix)
    \b
    (token|secret|api[_-]?key|authorization)
    \s*[:=]\s*
    ([^\s,;&]+)
    """
)
# Caiyun puts the token in the path: /v2.5/<token>/<lon>,<lat>/...
_CAIYUN_PATH_TOKEN_RE = re.compile(r"(/v2\.5/)([^/\s]+)(/)")


def mask_secret(text: str, secret: str | None) -> str:
    """Replace every occurrence of ``secret`` in ``text``."""
    if not secret:
        return text
    return text.replace(secret, REDACTED)


def sanitize_text(text: str) -> str:
    """Redact sensitive content embedded in plain text."""
    sanitized = _CAIYUN_PATH_TOKEN_RE.sub(rf"\1{REDACTED}\3", text)
    return _KEY_VALUE_SECRET_RE.sub(lambda m: f"{m.group(1)}={REDACTED}", sanitized)


def sanitize_for_logging(value: Any) -> Any:
    """Recursively redact sensitive values in nested structures."""
    if isinstance(value, dict):
        sanitized: dict[Any, Any] = {}
        for key, child in value.items():
            if _SENSITIVE_KEY_RE.search(str(key)):
                sanitized[key] = REDACTED
            else:
                sanitized[key] = sanitize_for_logging(child)
        return sanitized
    if isinstance(value, list):
        return [sanitize_for_logging(item) for item in value]
    if isinstance(value, tuple):
        return tuple(sanitize_for_logging(item) for item in value)
    if isinstance(value, str):
        return sanitize_text(value)
    return value

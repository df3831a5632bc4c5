"""Helpers for keeping secrets and request identifiers out of logs."""

from __future__ import annotations

import hashlib
from typing import Any


def safe_log_identifier(value: Any, *, prefix: str) -> str:
    """Return a deterministic non-reversible token for log correlation fields."""
    text = str(value or "").strip()
    if not text:
        return f"{prefix}-missing"

    digest = hashlib.sha256(text.encode("utf-8")).hexdigest()[:12]
    return f"{prefix}-{digest}"


def token_fingerprint(token: str | None) -> str:
    """Fingerprint a bearer token so repeated rejections can be correlated."""
    return safe_log_identifier(token, prefix="tok")

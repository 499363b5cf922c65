"""Debug utilities for request/response logging.

llm-sdk v0.1.0
"""

from __future__ import annotations

import re
from typing import Any

__all__ = ["mask_token", "sanitize_for_debug", "sanitize_headers"]


def mask_token(token: str) -> str:
    """脱敏 token，只显示前4位和后4位。"""
    if not token:
        return "(empty)"
    clean = token.replace("Bearer ", "")
    if len(clean) <= 8:
        return clean[:2] + "***"
    return f"{clean[:4]}...{clean[-4:]}"


def sanitize_for_debug(data: Any) -> Any:
    """Sanitize data for debug output, replacing base64 strings with summaries."""
    if isinstance(data, dict):
        return {k: sanitize_for_debug(v) for k, v in data.items()}
    if isinstance(data, list):
        return [sanitize_for_debug(item) for item in data]
    if isinstance(data, str) and len(data) > 100:
        # Check if it looks like base64
        if re.match(r'^[A-Za-z0-9+/=]+$', data[:100]):
            return f"<base64:{len(data)} bytes>"
    return data


def sanitize_headers(headers: dict[str, str]) -> dict[str, str]:
    """Sanitize headers for debug output, masking auth tokens."""
    result = {}
    for k, v in headers.items():
        if k.lower() == "authorization":
            result[k] = f"Bearer {mask_token(v)}"
        else:
            result[k] = v
    return result

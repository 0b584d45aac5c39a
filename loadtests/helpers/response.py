"""Response error extraction for load test observability.

Parses Dress Gallery API error responses into human-readable messages. Every
failure has the shape ``{"success": false, "message": "...", "errors"?: {...}}``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Returns a compact string suitable for Locust failure messages and log lines.
    Gracefully handles unparseable bodies and missing fields.
    """
    try:
        body = response.json()
    except Exception:
        # Not JSON — return raw text, truncated
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:300]

    message = body.get("message")
    errors = body.get("errors")
    if isinstance(errors, dict):
        fields = " | ".join(f"{k}: {', '.join(map(str, v)) if isinstance(v, list) else v}" for k, v in errors.items())
        return f"{message} ({fields})" if message else fields
    if message:
        return str(message)

    # Unknown shape — stringify and truncate
    return str(body)[:300]


def is_insufficient_stock(response: Response) -> bool:
    """True for the 400 returned when a product has run out of stock."""
    return response.status_code == 400 and "Insufficient stock" in extract_error_detail(response)


def data_of(response: Response) -> dict:
    return response.json()["data"]

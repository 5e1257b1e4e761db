"""Optional trace of outgoing map service requests.

Enabled by setting ``MRP_LOG_REQUESTS=true``. Useful when checking which
queries reach OSRM, Overpass or Nominatim.
"""

import json
import logging
import os
from typing import Any

logger = logging.getLogger(__name__)

SENSITIVE_HEADERS = {"authorization", "cookie", "x-api-key"}
REDACTED = "***REDACTED***"


def should_log_requests() -> bool:
    """Whether MRP_LOG_REQUESTS is set to 'true' (any case)."""
    return os.getenv("MRP_LOG_REQUESTS", "").lower() == "true"


def _full_url(url: str, params: dict[str, Any] | None) -> str:
    if not params:
        return url
    query = "&".join(f"{key}={params[key]}" for key in sorted(params))
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"


def _describe_payload(payload: Any) -> str:
    if isinstance(payload, dict):
        try:
            return json.dumps(payload, indent=2)
        except (TypeError, ValueError):
            pass
    return str(payload)


def log_api_request(
    method: str,
    url: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    payload: Any = None,
) -> None:
    """Trace one outgoing request when request logging is enabled.

    Args:
        method: HTTP method.
        url: Target URL without query string parameters from ``params``.
        params: Query parameters appended to the URL in sorted order.
        headers: Request headers; credentials are masked.
        payload: Body, e.g. a marker document or an Overpass query.
    """
    if not should_log_requests():
        return

    lines = [f"{method} {_full_url(url, params)}"]
    if headers:
        masked = {
            name: REDACTED if name.lower() in SENSITIVE_HEADERS else value
            for name, value in headers.items()
        }
        lines.append(f"Headers: {json.dumps(masked, indent=2)}")
    if payload is not None:
        lines.append(f"Payload: {_describe_payload(payload)}")

    logger.info("API Request:\n" + "\n".join(lines))

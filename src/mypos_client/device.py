from __future__ import annotations

import logging

import requests

logger = logging.getLogger(__name__)

IP_HEADER = "x-ip-address"
UNKNOWN_IP = "0.0.0.0"


def resolve_device_ip(session: requests.Session, lookup_url: str, timeout: float = 5.0) -> str:
    """Public IP of this terminal as reported by the lookup service.

    Any failure yields ``0.0.0.0``; the header is informative only and must
    never block a request.
    """
    try:
        response = session.get(lookup_url, timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError) as exc:
        logger.warning("device_ip_lookup_failed", extra={"error": type(exc).__name__})
        return UNKNOWN_IP
    if not isinstance(payload, dict):
        return UNKNOWN_IP
    return str(payload.get("ip") or UNKNOWN_IP)

"""Client address extraction from proxy headers."""

import ipaddress
from typing import Mapping, Optional

# Checked in order; the first syntactically valid address wins
CLIENT_IP_HEADERS = (
    "x-forwarded-for",
    "x-real-ip",
    "x-client-ip",
    "cf-connecting-ip",  # Cloudflare
    "true-client-ip",
    "x-cluster-client-ip",
)


def is_valid_ip(value: str) -> bool:
    """Whether ``value`` is a literal IPv4 or IPv6 address."""
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def extract_client_ip(headers: Optional[Mapping[str, str]]) -> Optional[str]:
    """Best-effort client IP from request headers.

    ``x-forwarded-for`` may hold a chain of addresses; only the first
    (the original client) is considered.

    Args:
        headers: Request headers (any casing)

    Returns:
        The client IP, or None when no header carries a valid address
    """
    if not headers:
        return None

    lowered = {k.lower(): v for k, v in headers.items()}
    for header in CLIENT_IP_HEADERS:
        value = lowered.get(header)
        if not value:
            continue
        candidate = value.split(",")[0].strip()
        if candidate and is_valid_ip(candidate):
            return candidate
    return None

"""Public IP lookup."""

import httpx

from dynadot_updater.errors import IPResolutionError

IP_LOOKUP_URL = "https://api.ipify.org"


def resolve_ip(
    manual_ip: str = "", url: str = IP_LOOKUP_URL, timeout: float = 30.0
) -> str:
    """Return the public IP of this machine.

    A non-empty ``manual_ip`` is returned as-is without touching the network.
    Otherwise a single request is made to ``url``, which answers with the
    caller's address as plain text.
    """
    if manual_ip:
        return manual_ip

    try:
        response = httpx.get(url, timeout=timeout)
    except httpx.HTTPError as e:
        raise IPResolutionError(f"Failed to fetch public IP: {e}") from e

    if not response.is_success:
        raise IPResolutionError(
            f"Failed to fetch public IP. Status: {response.status_code}"
        )

    ip = response.text.strip()
    if not ip:
        raise IPResolutionError("Failed to fetch public IP: empty response")
    return ip

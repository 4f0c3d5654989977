"""
Client IP resolution for FastAPI/Starlette requests.

The address only travels to siteverify as ``remoteip``; it is never used
for access decisions here.
"""

from __future__ import annotations

from fastapi import Request

# Checked in order; the first non-empty value wins
PROXY_IP_HEADERS: tuple[str, ...] = (
    "CF-Connecting-IP",  # Cloudflare
    "True-Client-IP",  # Akamai and others
    "X-Forwarded-For",  # only the left-most entry counts
    "X-Real-IP",  # nginx
    "X-Client-IP",
)


def get_client_ip(request: Request, *, trust_proxy_headers: bool = True) -> str:
    """Return the caller's address for ``request``.

    With ``trust_proxy_headers`` the headers in PROXY_IP_HEADERS are
    consulted before the socket peer. Set it to False when the app is not
    behind a proxy that overwrites them.

    Returns:
        The resolved client IP string, or ``""`` if none can be found.
    """
    if trust_proxy_headers:
        for header in PROXY_IP_HEADERS:
            value = request.headers.get(header)
            if not value:
                continue
            client_ip = value.split(",")[0].strip()
            if client_ip:
                return client_ip

    return request.client.host if request.client else ""

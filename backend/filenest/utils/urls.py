from fastapi import Request

from filenest.core.config import settings


def _first_hop(value: str | None) -> str:
    # Proxies append hops as a comma-separated list; the client-facing one comes first.
    return (value or "").split(",", 1)[0].strip()


def _parse_forwarded(header: str) -> dict[str, str]:
    params = {}
    for pair in _first_hop(header).split(";"):
        key, sep, value = pair.partition("=")
        if sep:
            params[key.strip().lower()] = value.strip().strip('"')
    return params


def share_base_url(request: Request) -> str:
    """Origin that share links should point at, as seen by the person opening them."""
    if settings.PUBLIC_BASE_URL:
        return settings.PUBLIC_BASE_URL.rstrip("/")

    forwarded = request.headers.get("forwarded")
    if forwarded:
        params = _parse_forwarded(forwarded)
        if params.get("proto") and params.get("host"):
            return f"{params['proto']}://{params['host']}"

    proto = _first_hop(request.headers.get("x-forwarded-proto"))
    host = _first_hop(request.headers.get("x-forwarded-host")) or _first_hop(request.headers.get("host"))
    if proto and host:
        return f"{proto}://{host}"

    return str(request.base_url).rstrip("/")


def share_url(request: Request, share_id: str) -> str:
    return f"{share_base_url(request)}/share/{share_id}"

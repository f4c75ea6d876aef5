"""
Extraction of identity evidence from raw request parts.

The component id is client-supplied and may arrive through several side
channels. The tenant id is never read here: it only comes out of a decoded
credential (see verifier.py).
"""

from typing import Any, Mapping, Optional

DEFAULT_COMPONENT_HEADER = "X-Wix-Comp-Id"

COMPONENT_QUERY_PARAM = "compId"
COMPONENT_QUERY_ALTERNATES = ("comp_id", "comp-id")
COMPONENT_BODY_FIELD = "compId"

BEARER_PREFIX = "Bearer "


def _first_string(value: Any) -> Optional[str]:
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def extract_component_id(
    headers: Mapping[str, str],
    query_params: Mapping[str, str],
    body: Optional[Mapping[str, Any]] = None,
    header_name: str = DEFAULT_COMPONENT_HEADER,
) -> Optional[str]:
    """
    Find the component id in the request, first match wins.

    Order: dedicated header, primary query parameter, alternate query
    parameters, body field.

    Args:
        headers: Request headers (case-insensitive mapping for real requests)
        query_params: Query string parameters
        body: Parsed JSON or form body, if any
        header_name: Name of the dedicated component header

    Returns:
        The component id, or None if no channel carried one
    """
    candidate = _first_string(headers.get(header_name)) or _first_string(
        headers.get(header_name.lower())
    )
    if candidate:
        return candidate

    candidate = _first_string(query_params.get(COMPONENT_QUERY_PARAM))
    if candidate:
        return candidate

    for name in COMPONENT_QUERY_ALTERNATES:
        candidate = _first_string(query_params.get(name))
        if candidate:
            return candidate

    if body:
        return _first_string(body.get(COMPONENT_BODY_FIELD))

    return None


def extract_credential(authorization: Optional[str]) -> str:
    """Strip an optional `Bearer ` prefix from an Authorization header value."""
    if not authorization:
        return ""
    credential = authorization.strip()
    if credential.startswith(BEARER_PREFIX):
        credential = credential[len(BEARER_PREFIX):]
    return credential.strip()

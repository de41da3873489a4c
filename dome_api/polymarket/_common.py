"""Query-building helpers shared by the Polymarket endpoint modules"""
from typing import Any, Dict, Optional
from urllib.parse import quote


def venue_path(venue: str, *segments: str) -> str:
    """'/{venue}/seg1/seg2' with each dynamic segment percent-encoded"""
    parts = [quote(str(venue), safe="")] + [quote(str(s), safe="") for s in segments]
    return "/" + "/".join(parts)


def add_optional(params: Dict[str, Any], **values: Any) -> Dict[str, Any]:
    """Copy every value that is not None into params, in argument order"""
    for key, value in values.items():
        if value is not None:
            params[key] = value
    return params


def add_pagination(
    params: Dict[str, Any],
    offset: Optional[int],
    pagination_key: Optional[str],
) -> Dict[str, Any]:
    """
    A cursor replaces the numeric offset entirely: when pagination_key is
    given, 'offset' never appears in the query, whatever offset was passed.
    """
    if pagination_key:
        params["pagination_key"] = pagination_key
    else:
        params["offset"] = 0 if offset is None else offset
    return params

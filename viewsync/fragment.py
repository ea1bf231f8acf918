"""Read and write the `#key=value&...` page fragment that carries room context."""

from __future__ import annotations

from urllib.parse import quote, unquote

# Characters encodeURIComponent leaves alone, so shared links match browser output.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def extract_from_fragment(fragment: str, key: str) -> str:
    """Return the decoded value for `key`, or "" when absent or malformed."""
    body = fragment[1:] if fragment.startswith("#") else fragment
    for pair in body.split("&"):
        parts = pair.split("=")
        if len(parts) != 2:
            continue
        if unquote(parts[0]) == key:
            return unquote(parts[1])
    return ""


def build_fragment(room: str, password: str) -> str:
    """Encode room credentials so a reload or shared link restores them."""
    return (
        f"room={quote(room, safe=_URI_COMPONENT_SAFE)}"
        f"&password={quote(password, safe=_URI_COMPONENT_SAFE)}"
    )

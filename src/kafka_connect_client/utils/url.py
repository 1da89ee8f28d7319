"""URL helpers"""

from urllib.parse import quote


def escape_path(segment: str) -> str:
    """
    Percent-encode a value for use as a single URL path segment

    Everything outside the RFC 3986 unreserved set is escaped, including
    '/', so a connector name can never change the endpoint path.

    Example:
        >>> escape_path("my connector/v2")
        'my%20connector%2Fv2'
    """
    return quote(str(segment), safe="")

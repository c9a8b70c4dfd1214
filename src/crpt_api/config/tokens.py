from __future__ import annotations


def mask_token(token: str, visible: int = 4) -> str:
    """Return a log-safe preview of a bearer token.

    Only the first ``visible`` characters are kept; short tokens are hidden entirely.

    Example:
        >>> mask_token("secret_token")
        'secr...(12)'
        >>> mask_token("abc")
        '***'
    """
    if len(token) <= visible * 2:
        return "***"
    return f"{token[:visible]}...({len(token)})"

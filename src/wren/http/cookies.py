"""Cookie parsing and ``Set-Cookie`` serialization.

``parse_cookies`` feeds ``Request.cookies``; ``SetCookie`` is what
``Storage`` attaches to the response when it changed.
"""

from dataclasses import dataclass


def parse_cookies(header: str) -> dict[str, str]:
    """Parse a ``Cookie`` header into a dict; malformed pairs are skipped.

    ``"a=1; b=x=y"`` -> ``{"a": "1", "b": "x=y"}``. A repeated name keeps
    its last value.
    """
    cookies: dict[str, str] = {}
    for pair in header.split(";"):
        name, sep, value = pair.partition("=")
        if sep:
            cookies[name.strip()] = value.strip()
    return cookies


@dataclass(frozen=True, slots=True)
class SetCookie:
    """One ``Set-Cookie`` header on a response."""

    name: str
    value: str
    max_age: int | None = None
    path: str = "/"
    domain: str | None = None
    secure: bool = False
    httponly: bool = True
    samesite: str = "lax"

    def to_header_value(self) -> str:
        """Serialize as ``name=value; Attr=...; Flag``."""
        attributes = [
            ("Max-Age", self.max_age),
            ("Path", self.path or None),
            ("Domain", self.domain),
        ]
        parts = [f"{self.name}={self.value}"]
        parts.extend(f"{key}={value}" for key, value in attributes if value is not None)
        if self.secure:
            parts.append("Secure")
        if self.httponly:
            parts.append("HttpOnly")
        if self.samesite:
            parts.append(f"SameSite={self.samesite}")
        return "; ".join(parts)

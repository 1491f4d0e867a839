# ingres/storage/identity.py
"""
Deterministic pseudo-UUIDs derived from a user's name.

The same name always maps to the same identifier, so a profile typed
into a fresh browser finds the documents it uploaded last time. The
hash is the classic 31-multiplier string hash folded to a signed
32-bit integer and is not collision resistant.
"""

from typing import Optional

PUBLIC = "public"
OFFICIAL = "official"

USER_CONTEXTS = (PUBLIC, OFFICIAL)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _string_hash(text: str) -> int:
    """31-multiplier hash over UTF-16 code units, kept in signed 32 bits."""

    encoded = text.encode("utf-16-le", errors="surrogatepass")

    h = 0
    for i in range(0, len(encoded), 2):
        code_unit = encoded[i] | (encoded[i + 1] << 8)
        h = _to_int32((h << 5) - h + code_unit)

    return h


def generate_user_id(name: str) -> str:
    """
    Fold the hash of `name` into a UUID-shaped string.

    >>> generate_user_id("a")
    '00000061-0000-4000-8000-000000610000'
    """

    hex_str = format(abs(_string_hash(name)), "x").rjust(8, "0")

    return "-".join([
        hex_str[0:8],
        hex_str[0:4],
        "4" + hex_str[1:4],
        "8" + hex_str[0:3],
        hex_str.ljust(12, "0")[0:12],
    ])


def context_from_path(path: Optional[str]) -> str:
    """Official dashboards and the playground use the official context."""

    if path and ("official" in path or "playground" in path):
        return OFFICIAL

    return PUBLIC


def generate_contextual_user_id(name: str, context: str = PUBLIC) -> str:
    """Same name, different id per context."""

    if context not in USER_CONTEXTS:
        raise ValueError(f"Unknown user context: {context}")

    return generate_user_id(f"{context}_{name}")

"""Derivation of content identifiers from tracked names."""

from __future__ import annotations

import hashlib

from .types import ContentIdentifier

CONTENT_PREFIX = "data:,"


def canonical_content(name: str) -> bytes:
    """Return the canonical data URI payload inscribed for ``name``."""

    return f"{CONTENT_PREFIX}{name}".encode()


def derive_content_identifier(name: str) -> ContentIdentifier:
    """Return the ``0x``-prefixed SHA-256 digest identifying ``name``'s record."""

    digest = hashlib.sha256(canonical_content(name)).hexdigest()
    return ContentIdentifier(f"0x{digest}")

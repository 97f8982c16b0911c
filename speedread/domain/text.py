"""Tokenization and content fingerprinting for loaded text."""
from __future__ import annotations

import hashlib

BOM = "\ufeff"


def tokenize(text: str) -> list[str]:
    """Split raw text into words on any run of Unicode whitespace.

    Punctuation stays attached to its word. Non-breaking spaces count as
    whitespace, and a leading byte-order mark is dropped.
    """
    if not text:
        return []
    if text.startswith(BOM):
        text = text[len(BOM) :]
    return text.split()


def fingerprint(text: str) -> str:
    """Return a lowercase SHA-256 hex digest identifying the text content."""
    return hashlib.sha256((text or "").encode("utf-8")).hexdigest()

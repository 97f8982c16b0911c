"""Resume token codec.

Wire format::

    "sr1." + base64url_nopad(json_utf8({"v": 1, "fp": ..., "i": ..., "n"?: ..., "w"?: ...}))

The fingerprint binds a token to the exact content it was exported from;
``n`` (track name) and ``w`` (word at export) are advisory only.
"""
from __future__ import annotations

import base64
import binascii
import json
import math
import re
from dataclasses import dataclass
from typing import Any

from ..constants import RESUME_TOKEN_PREFIX, RESUME_TOKEN_VERSION

_BODY_RE = re.compile(r"^[A-Za-z0-9_-]*$")


class ResumeTokenError(ValueError):
    """Base class for rejected resume tokens."""


class MalformedTokenError(ResumeTokenError):
    """Wrong prefix, bad encoding, or missing required fields."""


class UnsupportedVersionError(ResumeTokenError):
    def __init__(self, version: Any) -> None:
        super().__init__(f"Unsupported resume token version: {version!r}")
        self.version = version


class FingerprintMismatchError(ResumeTokenError):
    def __init__(self, expected: str | None, actual: str) -> None:
        super().__init__("Resume token was exported from different content.")
        self.expected = expected
        self.actual = actual


@dataclass(frozen=True)
class ResumeToken:
    fingerprint: str
    index: int
    track_name: str | None = None
    word_at_export: str | None = None
    version: int = RESUME_TOKEN_VERSION

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "v": self.version,
            "fp": self.fingerprint,
            "i": self.index,
        }
        if self.track_name is not None:
            payload["n"] = self.track_name
        if self.word_at_export is not None:
            payload["w"] = self.word_at_export
        return payload


def _b64url_encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64url_decode(body: str) -> bytes:
    if not _BODY_RE.match(body):
        raise MalformedTokenError("Resume token contains invalid characters.")
    padded = body + "=" * (-len(body) % 4)
    try:
        return base64.b64decode(padded, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MalformedTokenError("Resume token is not valid base64.") from exc


def encode_resume_token(token: ResumeToken) -> str:
    serialized = json.dumps(token.to_payload(), ensure_ascii=False, separators=(",", ":"))
    return RESUME_TOKEN_PREFIX + _b64url_encode(serialized.encode("utf-8"))


def decode_resume_token(text: str) -> ResumeToken:
    """Parse a pasted token, raising a ResumeTokenError subclass on rejection.

    Only the structure is validated here; comparing the fingerprint against
    the target track is the caller's job.
    """
    candidate = str(text or "").strip()
    if not candidate.startswith(RESUME_TOKEN_PREFIX):
        raise MalformedTokenError("Resume token prefix is missing or unknown.")
    raw = _b64url_decode(candidate[len(RESUME_TOKEN_PREFIX) :])
    try:
        payload = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise MalformedTokenError("Resume token payload is not valid JSON.") from exc
    if not isinstance(payload, dict):
        raise MalformedTokenError("Resume token payload is not an object.")
    if "v" not in payload:
        raise MalformedTokenError("Resume token has no version.")

    version = payload["v"]
    if (
        isinstance(version, bool)
        or not isinstance(version, (int, float))
        or version != RESUME_TOKEN_VERSION
    ):
        raise UnsupportedVersionError(version)

    fingerprint = payload.get("fp")
    if not isinstance(fingerprint, str) or not fingerprint:
        raise MalformedTokenError("Resume token has no fingerprint.")
    index = payload.get("i")
    if isinstance(index, bool) or not isinstance(index, (int, float)):
        raise MalformedTokenError("Resume token has no index.")
    if isinstance(index, float) and not math.isfinite(index):
        raise MalformedTokenError("Resume token index is not finite.")

    track_name = payload.get("n")
    word_at_export = payload.get("w")
    return ResumeToken(
        fingerprint=fingerprint,
        index=int(index),
        track_name=track_name if isinstance(track_name, str) else None,
        word_at_export=word_at_export if isinstance(word_at_export, str) else None,
        version=RESUME_TOKEN_VERSION,
    )

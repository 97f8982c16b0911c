"""Export and re-apply reading positions as resume tokens."""

from __future__ import annotations

from ..domain.resume_token import (
    FingerprintMismatchError,
    ResumeToken,
    ResumeTokenError,
    decode_resume_token,
    encode_resume_token,
)
from .playback import PlaybackEngine
from .tracks import TrackRegistry


class ResumeService:
    def __init__(self, registry: TrackRegistry, engine: PlaybackEngine, logger) -> None:
        self.registry = registry
        self.engine = engine
        self.logger = logger

    def build_token(self, track_id: int) -> ResumeToken | None:
        track = self.registry.get(track_id)
        if track is None or not track.is_loaded or not track.fingerprint:
            return None
        index = self.engine.effective_index(track)
        if index is None:
            return None
        return ResumeToken(
            fingerprint=track.fingerprint,
            index=index,
            track_name=track.display_name,
            word_at_export=track.tokens[index],
        )

    def export_token(self, track_id: int) -> str | None:
        token = self.build_token(track_id)
        if token is None:
            self.logger.warning("Nothing to export for track id=%s", track_id)
            return None
        return encode_resume_token(token)

    def apply_token(self, track_id: int, text: str) -> int:
        """Seek to the position stored in ``text`` for the given track.

        Raises a ResumeTokenError subclass and leaves playback untouched when
        the token is malformed, of an unknown version, or bound to other content.
        """
        try:
            token = decode_resume_token(text)
        except ResumeTokenError as exc:
            self.logger.warning("Rejected resume token: %s", exc)
            raise
        track = self.registry.get(track_id)
        expected = track.fingerprint if track is not None else None
        if expected != token.fingerprint:
            self.logger.warning(
                "Rejected resume token for track id=%s: fingerprint mismatch", track_id
            )
            raise FingerprintMismatchError(expected, token.fingerprint)
        index = self.engine.seek_to(token.index)
        self.logger.info(
            "Applied resume token for track id=%s: requested=%s landed=%s",
            track_id,
            token.index,
            index,
        )
        return index

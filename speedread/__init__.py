"""Multi-track speed reader: shared-cursor playback and resume tokens."""

__version__ = "0.1.0"

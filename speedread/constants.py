"""Shared constants."""

DEFAULT_WPM = 300
MIN_WPM = 50
MAX_WPM = 1500
PRESET_WPMS = (200, 250, 300, 350, 400, 500, 600, 800)

DEFAULT_WORDS_PER_CHUNK = 40
MIN_WORDS_PER_CHUNK = 5
MAX_WORDS_PER_CHUNK = 200

RESUME_TOKEN_PREFIX = "sr1."
RESUME_TOKEN_VERSION = 1

EMPHASIS_MODES = ("pivot", "bionic", "plain")
LOGGER_NAME = "speedread"

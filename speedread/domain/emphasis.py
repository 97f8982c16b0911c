"""Single-word emphasis renderers.

Two heuristics are offered: an optimal-recognition-point pivot for the
word-at-a-time reader and a bionic bold prefix for the chunked reader.
Both are pure functions of one word.
"""
from __future__ import annotations

import html
import math
import re
from dataclasses import dataclass

from .pacing import clamp

PIVOT_RATIO = 0.35
BIONIC_RATIO = 0.4
BIONIC_MAX_PREFIX = 6

# leading punctuation, alphanumeric core with inner apostrophes, trailing punctuation
CORE_WORD_RE = re.compile(
    r"^((?:[\W_])*)((?:[^\W_]+(?:['\u2019][^\W_]+)*)?)((?:[\W_])*)$"
)

ANSI_BOLD = "\033[1m"
ANSI_PIVOT = "\033[1;31m"
ANSI_RESET = "\033[0m"


@dataclass(frozen=True)
class PivotWord:
    left: str
    pivot: str
    right: str


@dataclass(frozen=True)
class BionicWord:
    leading: str
    head: str
    tail: str
    trailing: str


def pivot_index(word: str) -> int:
    length = len(word)
    if length <= 1:
        return 0
    return clamp(math.floor(length * PIVOT_RATIO), 0, length - 1)


def split_pivot(word: str) -> PivotWord:
    if not word:
        return PivotWord("", "", "")
    index = pivot_index(word)
    return PivotWord(word[:index], word[index], word[index + 1 :])


def bold_prefix_length(core: str) -> int:
    desired = math.ceil(len(core) * BIONIC_RATIO)
    cap = min(BIONIC_MAX_PREFIX, len(core))
    return max(1, min(cap, desired))


def split_bionic(token: str) -> BionicWord | None:
    """Split a token for bionic emphasis, or None when it has no word core."""
    match = CORE_WORD_RE.match(token)
    if match is None:
        return None
    leading, core, trailing = match.groups()
    if not core:
        return None
    size = bold_prefix_length(core)
    return BionicWord(leading, core[:size], core[size:], trailing)


def pivot_html(word: str) -> str:
    if not word:
        return ""
    parts = split_pivot(word)
    return (
        f"{html.escape(parts.left)}<span class=\"pivot\">{html.escape(parts.pivot)}</span>"
        f"{html.escape(parts.right)}"
    )


def bionic_html(token: str) -> str:
    parts = split_bionic(token)
    if parts is None:
        return html.escape(token)
    return (
        f"<span class=\"token\">{html.escape(parts.leading)}"
        f"<span class=\"bionicBold\">{html.escape(parts.head)}</span>"
        f"<span class=\"bionicRest\">{html.escape(parts.tail)}</span>"
        f"{html.escape(parts.trailing)}</span>"
    )


def pivot_ansi(word: str) -> str:
    if not word:
        return ""
    parts = split_pivot(word)
    return f"{parts.left}{ANSI_PIVOT}{parts.pivot}{ANSI_RESET}{parts.right}"


def bionic_ansi(token: str) -> str:
    parts = split_bionic(token)
    if parts is None:
        return token
    return f"{parts.leading}{ANSI_BOLD}{parts.head}{ANSI_RESET}{parts.tail}{parts.trailing}"


_HTML_RENDERERS = {"pivot": pivot_html, "bionic": bionic_html, "plain": html.escape}
_ANSI_RENDERERS = {"pivot": pivot_ansi, "bionic": bionic_ansi, "plain": str}


def render_word(word: str, mode: str = "pivot", *, target: str = "html") -> str:
    """Render one word with the named emphasis strategy.

    Unknown modes fall back to plain text.
    """
    renderers = _ANSI_RENDERERS if target == "ansi" else _HTML_RENDERERS
    renderer = renderers.get(mode, renderers["plain"])
    return renderer(word or "")

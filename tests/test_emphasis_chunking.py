import pytest

from speedread.domain.chunking import ChunkPager, chunk_count, chunk_words, clamp_words_per_chunk
from speedread.domain.emphasis import (
    ANSI_BOLD,
    ANSI_RESET,
    BionicWord,
    PivotWord,
    bionic_ansi,
    bionic_html,
    bold_prefix_length,
    pivot_html,
    pivot_index,
    render_word,
    split_bionic,
    split_pivot,
)


@pytest.mark.parametrize(
    ("word", "expected"),
    [("", 0), ("a", 0), ("to", 0), ("word", 1), ("reading", 2), ("extraordinary", 4)],
)
def test_pivot_index_sits_about_a_third_into_the_word(word, expected):
    assert pivot_index(word) == expected


def test_split_pivot_and_html_escape():
    assert split_pivot("word") == PivotWord("w", "o", "rd")
    assert split_pivot("") == PivotWord("", "", "")
    assert pivot_html("<a>") == '&lt;<span class="pivot">a</span>&gt;'
    assert pivot_html("") == ""


@pytest.mark.parametrize(
    ("core", "expected"),
    [("a", 1), ("an", 1), ("word", 2), ("reader", 3), ("extraordinary", 6), ("internationalization", 6)],
)
def test_bold_prefix_length_is_forty_percent_capped_at_six(core, expected):
    assert bold_prefix_length(core) == expected


def test_split_bionic_isolates_punctuation_and_apostrophes():
    assert split_bionic('"Hello,"') == BionicWord('"', "He", "llo", ',"')
    assert split_bionic("don't") == BionicWord("", "do", "n't", "")
    assert split_bionic("it’s.") == BionicWord("", "it", "’s", ".")
    assert split_bionic("...") is None
    assert split_bionic("a-b") is None


def test_bionic_renderers():
    assert bionic_html("(bold)") == (
        '<span class="token">('
        '<span class="bionicBold">bo</span>'
        '<span class="bionicRest">ld</span>)</span>'
    )
    assert bionic_html("<->") == "&lt;-&gt;"
    assert bionic_ansi("word") == f"{ANSI_BOLD}wo{ANSI_RESET}rd"


def test_render_word_dispatches_by_mode():
    assert render_word("word", "pivot") == pivot_html("word")
    assert render_word("word", "bionic") == bionic_html("word")
    assert render_word("<b>", "plain") == "&lt;b&gt;"
    assert render_word("<b>", "unknown") == "&lt;b&gt;"
    assert render_word("<b>", "plain", target="ansi") == "<b>"


def test_chunk_helpers():
    words = [str(n) for n in range(81)]

    assert chunk_count(0, 40) == 0
    assert chunk_count(81, 40) == 3
    assert chunk_count(5, 40) == 1
    assert chunk_words(words, 2, 40) == ["80"]
    assert clamp_words_per_chunk("3") == 5
    assert clamp_words_per_chunk(1000) == 200
    assert clamp_words_per_chunk("junk", current=17) == 17


def test_chunk_pager_moves_within_bounds_and_reclamps_on_resize():
    pager = ChunkPager([str(n) for n in range(100)], words_per_chunk=40)

    assert pager.chunk_count == 3
    assert pager.has_prev is False
    assert pager.prev() == 0
    assert pager.next() == 1
    assert pager.next() == 2
    assert pager.next() == 2
    assert pager.has_next is False
    assert pager.current() == [str(n) for n in range(80, 100)]

    assert pager.set_words_per_chunk(200) == 200
    assert pager.chunk_index == 0
    assert pager.current()[0] == "0"


def test_chunk_pager_without_words():
    pager = ChunkPager()

    assert pager.chunk_count == 0
    assert pager.current() == []
    assert pager.has_next is False
    pager.load(["a", "b"])
    assert pager.chunk_count == 1

import pytest
import requests

from bible import encode_reference, get_passage, passage_url, sanitize_passage, strip_verse_one_labels
from config import HarmonyConfig
from conftest import FakeResponse

ESV_HTML = (
    '<div class="esv"><div class="esv-text">'
    '<p class="chapter-first" id="p40005001.01-1"><span class="chapter-num" id="v40005001-1">5 </span>Seeing the crowds</p>'
    '<div class="block-indent"><p class="line"><span class="indent"></span>Blessed are the <b>poor</b></p></div>'
    '</div></div>'
)

MULTILINE_HTML = (
    '<div class="esv">\n'
    '  <div class="esv-text">\n'
    '    <p id="p1">Line one</p>\n'
    '\n'
    '    <div class="block-indent"><p>Line two</p></div>\n'
    '  </div>\n'
    '</div>\n'
)


def test_encode_reference():
    assert encode_reference("Matthew 5:1-12") == "Matthew+5%3A1-12"
    assert encode_reference("1 Cor. 11:23-25") == "1+Cor.+11%3A23-25"


def test_strip_verse_one_labels():
    assert strip_verse_one_labels("Text 3:1&nbsp;more") == "Text more"
    assert strip_verse_one_labels("a 12:1&nbsp;b 4:10&nbsp;c") == "a b 4:10&nbsp;c"


def test_passage_url_carries_key_and_flags():
    url = passage_url("Mark 1:9-11", HarmonyConfig(api_key="secret"))
    assert url.startswith("http://www.esvapi.org/v2/rest/passageQuery?key=secret&passage=Mark+1%3A9-11&")
    for flag in ["include-passage-references", "include-verse-numbers", "include-footnotes",
                 "include-short-copyright", "include-headings", "include-subheadings"]:
        assert f"{flag}=false" in url


def test_sanitize_indented_embed():
    assert sanitize_passage(ESV_HTML, "indented-embed") == (
        '    <div class="esv-text"><p>Seeing the crowds</p>'
        '<blockquote><p>Blessed are the <b>poor</b></p></blockquote></div>'
    )


def test_sanitize_flat_embed_keeps_wrapper_and_chapter_numbers():
    assert sanitize_passage(ESV_HTML, "flat-embed") == (
        '<div class="esv-text"><div><p><span>5 </span>Seeing the crowds</p>'
        '<blockquote><p>Blessed are the <b>poor</b></p></blockquote></div></div>'
    )


def test_sanitize_reindents_non_blank_lines():
    assert sanitize_passage(MULTILINE_HTML, "indented-embed") == (
        '    <div class="esv-text">\n'
        '    <p>Line one</p>\n'
        '    <blockquote><p>Line two</p></blockquote>\n'
        '    </div>'
    )


def test_reindent_keeps_leading_non_breaking_spaces():
    assert sanitize_passage('<div class="esv">\n&nbsp;&nbsp;Word\n</div>', "indented-embed") == (
        '    <div class="esv-text">\n'
        '    \xa0\xa0Word\n'
        '    </div>'
    )


def test_reindent_splits_on_newlines_only():
    assert sanitize_passage('<p>one\u2028two\u2029three</p>', "indented-embed") == (
        '    <p class="esv-text">one\u2028two\u2029three</p>'
    )


@pytest.mark.parametrize("style, expected", [
    ("indented-embed", '    <div class="esv-text"></div>'),
    ("flat-embed", '<div class="esv-text"></div>'),
])
def test_sanitize_empty_input(style, expected):
    assert sanitize_passage("", style) == expected


def test_sanitize_wraps_multiple_top_level_nodes():
    assert sanitize_passage('<p class="a">one</p><p id="b">two</p>', "flat-embed") == (
        '<div class="esv-text"><p>one</p><p>two</p></div>'
    )


def test_sanitize_tolerates_malformed_markup():
    fragment = sanitize_passage('<p class="x">unclosed <b>bold', "flat-embed")
    assert "unclosed" in fragment
    assert 'class="x"' not in fragment


@pytest.mark.parametrize("style", ["indented-embed", "flat-embed"])
@pytest.mark.parametrize("html", [ESV_HTML, MULTILINE_HTML, "", '<div>\n&nbsp;Word\n</div>'])
def test_sanitize_is_idempotent(style, html):
    once = sanitize_passage(html, style)
    assert sanitize_passage(once, style) == once


def test_get_passage_success(fake_get):
    fake_get.routes.append(("passage=John+3%3A16", FakeResponse(text="<p>Text 3:1&nbsp;more</p>")))
    config = HarmonyConfig(api_key="k", style="flat-embed")

    assert get_passage("John 3:16", config) == '<p class="esv-text">Text more</p>'
    assert len(fake_get.urls) == 1


def test_get_passage_non_200_is_empty(fake_get):
    fake_get.routes.append(("passage=", FakeResponse(status_code=401, text="<p>Unauthorized</p>")))
    debug_log = []

    fragment = get_passage("John 3:16", HarmonyConfig(), debug_log)

    assert fragment == '    <div class="esv-text"></div>'
    assert debug_log == ["[John 3:16] HTTP 401, using empty passage"]


def test_get_passage_transport_error_is_empty(fake_get):
    fake_get.routes.append(("passage=", requests.ConnectionError("connection refused")))
    debug_log = []

    fragment = get_passage("John 3:16", HarmonyConfig(style="flat-embed"), debug_log)

    assert fragment == '<div class="esv-text"></div>'
    assert "connection refused" in debug_log[0]


def test_get_passage_fetches_every_time(fake_get):
    fake_get.routes.append(("passage=", FakeResponse(text="<p>x</p>")))
    config = HarmonyConfig()
    get_passage("John 1:1", config)
    get_passage("John 1:1", config)
    assert len(fake_get.urls) == 2


def test_get_passage_debug_dump(fake_get, tmp_path):
    fake_get.routes.append(("passage=", FakeResponse(text='<p class="a">Word</p>')))
    dump = tmp_path / "debug.out"

    get_passage("John 1:1", HarmonyConfig(debug_dump=str(dump)))

    assert dump.read_text(encoding="utf-8") == 'OUTPUTTING (John 1:1):\n<p class="a">Word</p>\n\n\n'

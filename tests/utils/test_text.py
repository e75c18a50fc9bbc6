import html

from mdbook_wavedrom.utils.text import escape_html


def test_escape_html_replaces_markup_characters():
    assert escape_html('<b class="x">') == "&lt;b class=&quot;x&quot;&gt;"


def test_escape_html_does_not_double_escape():
    # The "&" of "&lt;" must not be escaped again.
    assert escape_html("<&>") == "&lt;&amp;&gt;"
    assert escape_html("&lt;") == "&amp;lt;"


def test_escape_html_round_trips():
    raw = "a && b <tag attr=\"v\"> 'single' ü\n"
    assert html.unescape(escape_html(raw)) == raw


def test_escape_html_noop_on_clean_text():
    text = "{signal: [{name: 'clk', wave: 'p.....|...'}]}"
    assert escape_html(text) == text


def test_escape_html_empty():
    assert escape_html("") == ""

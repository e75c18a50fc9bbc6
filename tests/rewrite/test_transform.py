import html
import textwrap

import pytest

from mdbook_wavedrom.errors import RewriteError
from mdbook_wavedrom.transform import EMBED_TEMPLATE, find_blocks, render_block, rewrite


def wrapped(payload):
    return (
        '\n<body onload="WaveDrom.ProcessAll()">\n\n'
        f'<script type="WaveDrom">{payload}</script>\n\n'
    )


def test_adds_wavedrom():
    content = textwrap.dedent("""\
        # Chapter

        ```wavedrom
        {signal: [{name: 'clk', wave: 'p.....|...'}]}
        ```

        Text
        """)

    expected = (
        "# Chapter\n\n\n"
        '<body onload="WaveDrom.ProcessAll()">\n\n'
        "<script type=\"WaveDrom\">{signal: [{name: 'clk', wave: 'p.....|...'}]}\n</script>\n\n"
        "\n\nText\n"
    )
    assert rewrite(content) == expected


def test_adds_wavedrom_multiline_payload():
    content = textwrap.dedent("""\
        # Chapter

        ```wavedrom
        {signal: [
          {name: 'clk', wave: 'p.....|...'}
        ]}
        ```

        Text
        """)

    expected = textwrap.dedent("""\
        # Chapter


        <body onload="WaveDrom.ProcessAll()">

        <script type="WaveDrom">{signal: [
          {name: 'clk', wave: 'p.....|...'}
        ]}
        </script>



        Text
        """)
    assert rewrite(content) == expected


def test_leaves_tables_untouched():
    # Breaks if the tokenizer runs without the table extension mdBook enables.
    content = textwrap.dedent("""\
        # Heading

        | Head 1 | Head 2 |
        |--------|--------|
        | Row 1  | Row 2  |
        """)
    assert rewrite(content) == content


def test_leaves_html_untouched():
    content = "# Heading\n\n<del>\n\n*foo*\n\n</del>\n"
    assert rewrite(content) == content


def test_plain_code_in_list_untouched():
    content = textwrap.dedent("""\
        # Heading

        1. paragraph 1
           ```
           code 1
           ```
        2. paragraph 2
        """)
    assert rewrite(content) == content


def test_escape_in_wavedrom_block():
    content = textwrap.dedent("""
        ```wavedrom
        classDiagram
            class PingUploader {
                <<interface>>
                +Upload() UploadResult
            }
        ```

        hello
        """)

    expected = textwrap.dedent("""

        <body onload="WaveDrom.ProcessAll()">

        <script type="WaveDrom">classDiagram
            class PingUploader {
                &lt;&lt;interface&gt;&gt;
                +Upload() UploadResult
            }
        </script>



        hello
        """)
    assert rewrite(content) == expected


def test_escaped_payload_round_trips():
    payload = '<a href="x">&amp; b</a>\n>>> 1 < 2 && "q"\n'
    out = rewrite(f"```wavedrom\n{payload}```\n")

    body = out.split('<script type="WaveDrom">', 1)[1].split("</script>", 1)[0]
    assert "<" not in body
    assert ">" not in body
    assert html.unescape(body) == payload


def test_rewrite_is_identity_without_blocks():
    content = textwrap.dedent("""\
        # Notes

        - [ ] open task
        - [x] done task

        Some ~~struck~~ text with a footnote.[^1]

        ```python
        print("hi")
        ```

        [^1]: The footnote.
        """)
    once = rewrite(content)
    assert once == content
    assert rewrite(once) == once


def test_multiple_blocks_keep_their_order():
    content = "Intro\n\n```wavedrom\nfirst\n```\n\nbetween\n\n```wavedrom\nsecond\n```\n\nOutro\n"
    expected = (
        "Intro\n\n"
        + wrapped("first\n")
        + "\n\nbetween\n\n"
        + wrapped("second\n")
        + "\n\nOutro\n"
    )
    assert rewrite(content) == expected


def test_unterminated_block_is_left_alone():
    # Known behaviour: an unclosed block is silently skipped, the rest still rewritten.
    content = "```wavedrom\na\n```\n\n```wavedrom\nb\n"
    assert rewrite(content) == wrapped("a\n") + "\n\n```wavedrom\nb\n"


def test_unterminated_block_only():
    content = "# Title\n\n```wavedrom\n{signal: []}\n"
    assert rewrite(content) == content


def test_block_closed_by_its_container_is_skipped():
    # pulldown-cmark, which mdBook renders with, ends this block at the end of
    # the list item. Here it has no closing fence and is left alone.
    content = "- ```wavedrom\n  x\n\nplain\n"
    assert rewrite(content) == content


def test_footnote_block_keeps_source_order():
    # markdown-it emits footnote bodies after the main flow.
    content = (
        "A[^1]\n\n[^1]: note\n\n"
        "    ```wavedrom\n    fn\n    ```\n\n"
        "```wavedrom\nmain\n```\n\nZ\n"
    )
    expected = (
        "A[^1]\n\n[^1]: note\n\n    "
        + wrapped("    fn\n")
        + "\n\n"
        + wrapped("main\n")
        + "\n\nZ\n"
    )
    assert rewrite(content) == expected
    starts = [s.start for s in find_blocks(content)]
    assert starts == [content.index("```wavedrom"), content.index("```wavedrom\nmain")]


def test_empty_payload():
    assert rewrite("```wavedrom\n```\n") == wrapped("") + "\n"


def test_other_tags_are_ignored():
    content = "```mermaid\ngraph TD\n```\n\n```wavedrom extra\nx\n```\n"
    assert rewrite(content) == content


def test_custom_tag():
    content = "```timing\nx\n```\n"
    assert rewrite(content, tag="timing") == wrapped("x\n") + "\n"
    assert rewrite(content) == content


def test_tilde_fence():
    assert rewrite("~~~wavedrom\nx\n~~~\n") == wrapped("x\n") + "\n"


def test_crlf_document():
    content = "A\r\n\r\n```wavedrom\r\nx\r\n```\r\n\r\nB\r\n"
    assert rewrite(content) == "A\r\n\r\n" + wrapped("x\r\n") + "\r\n\r\nB\r\n"


def test_wavedrom_block_in_list_item():
    content = "1. item\n   ```wavedrom\n   x\n   ```\n"
    assert rewrite(content) == "1. item\n   " + wrapped("   x\n") + "\n"


def test_find_blocks_spans():
    content = "Intro\n\n```wavedrom\nfirst\n```\n\n```wavedrom\nsecond\n```"
    spans = find_blocks(content)

    assert [content[s.start : s.end] for s in spans] == [
        "```wavedrom\nfirst\n```",
        "```wavedrom\nsecond\n```",
    ]
    assert spans[0].replacement == "\n" + render_block("first\n")


def test_render_block_uses_template():
    assert render_block("a<b") == EMBED_TEMPLATE.format(payload="a&lt;b")


def test_tokenizer_failure_raises(monkeypatch):
    class Broken:
        def parse(self, text):
            raise ValueError("boom")

    monkeypatch.setattr("mdbook_wavedrom.transform.make_parser", lambda: Broken())
    with pytest.raises(RewriteError, match="boom"):
        rewrite("```wavedrom\nx\n```\n")

_HTML_ESCAPES = {
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "&": "&amp;",
}


def escape_html(content: str) -> str:
    """
    Escape `content` for the body of a <script> element.

    Every character of the original text is looked up exactly once, so the
    `&` written by an earlier substitution is never escaped a second time.
    """
    if not content:
        return ""
    return "".join(_HTML_ESCAPES.get(ch, ch) for ch in content)

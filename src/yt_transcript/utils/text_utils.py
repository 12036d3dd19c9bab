"""Text cleanup helpers."""

from typing import Optional

# Order matters: &amp; is decoded first.
HTML_ENTITIES = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&nbsp;", " "),
)


def decode_html_entities(text: Optional[str]) -> str:
    """
    Decode the handful of HTML character references YouTube leaves in
    titles and transcript text. Anything else passes through verbatim.
    """
    if not text:
        return ""
    for entity, replacement in HTML_ENTITIES:
        text = text.replace(entity, replacement)
    return text

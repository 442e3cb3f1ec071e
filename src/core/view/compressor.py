"""
HTML Compressor
===============

Strip control whitespace and comments from rendered HTML and collapse
whitespace runs.
"""

import re

_CONTROL_CHARS = str.maketrans("", "", "\r\n\t\f\0\x0b")
_COMMENT = re.compile(r"<!--(.*?)-->")
# ASCII whitespace only, so non-breaking spaces survive
_WHITESPACE = re.compile(r"\s+", re.ASCII)
# Anchored to the whole string: only a bare "> <" document is removed
_TAG_GAP = re.compile(r"^>\s<$", re.ASCII)


def compress_html(content: str) -> str:
    """
    Compress an HTML document.

    Steps, in order: drop CR/LF/tab/form-feed/NUL/vertical-tab characters,
    remove ``<!-- ... -->`` comments, collapse whitespace runs to one space,
    then remove an anchored ``> <`` pattern.
    """
    content = content.translate(_CONTROL_CHARS)
    content = _COMMENT.sub("", content)
    content = _WHITESPACE.sub(" ", content)
    return _TAG_GAP.sub("", content)

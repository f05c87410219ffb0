"""Slug helpers: turn a Vietnamese display name into a URL path segment."""

import re
import unicodedata

_COMBINING_MARKS = re.compile("[\u0300-\u036f]")
_WHITESPACE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """Return the accent‑stripped, lower‑case, hyphenated form of ``text``.

    ``đ``/``Đ`` has no decomposition in Unicode, so it is mapped to
    ``d``/``D`` explicitly after the combining marks are removed.  No
    uniqueness check is done: two names that normalise the same way
    produce the same slug.

    >>> normalize("Đặng Văn Hoàng")
    'dang-van-hoang'
    """
    decomposed = unicodedata.normalize("NFD", text)
    stripped = _COMBINING_MARKS.sub("", decomposed)
    stripped = stripped.replace("đ", "d").replace("Đ", "D")
    return _WHITESPACE.sub("-", stripped.lower())

"""Filename utilities."""

import re
import unicodedata

_INVALID_CHARS_RE = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def safe_filename(title: str, max_length: int = 200) -> str:
    """Turn a video title into a filename that is valid on every platform."""
    if not title:
        return "download"

    name = unicodedata.normalize('NFC', title)
    name = _INVALID_CHARS_RE.sub('', name)
    name = re.sub(r'\s+', ' ', name).strip(' .')

    if len(name) > max_length:
        name = name[:max_length].rstrip(' .')

    return name or "download"

"""Video id extraction from YouTube urls."""

import re

WATCH_URL = "https://www.youtube.com/watch?v={}"

# youtu.be/<id>, /v/<id>, /vi/<id>, /u/w/<id>, /embed/<id>, ?v=, &v=, ?vi=, &vi=
_VIDEO_ID_RE = re.compile(
    r"(?:(?:youtu\.be/|v/|vi/|u/w/|embed/)|(?:(?:watch)?\?vi?=|&vi?=))"
    r"([^#&?]+)"
)


def extract_video_id(value: str) -> str:
    """Extract the video id from any known url shape.

    Input that matches none of the shapes is assumed to already be a bare
    id and is returned unchanged. Nothing is validated here; a bad id fails
    later when the info request reports it as not found.
    """
    match = _VIDEO_ID_RE.search(value)
    if match:
        return match.group(1)
    return value


def watch_url(video_id: str) -> str:
    """Canonical watch url for a video id."""
    return WATCH_URL.format(video_id)

"""Assembly of VideoMetadata records from the info and statistics documents."""

import logging
from enum import Enum
from typing import Any, Mapping, Optional

from .documents import json_field
from .errors import ParseFailure, VideoNotFound
from .models import VideoMetadata
from .streams import classify_info_formats

logger = logging.getLogger(__name__)

U32_MAX = 2 ** 32 - 1
STATUS_OK = "ok"


class OnMissing(Enum):
    """What to do when a numeric field is absent from its document."""
    DEFAULT = "default"  # use 0
    FAIL = "fail"        # raise ParseFailure


# Comment counts vanish when comments are disabled, like counts when they are
# hidden, and dislike counts are no longer published at all.
FIELD_POLICIES = {
    "view_count": OnMissing.FAIL,
    "length": OnMissing.FAIL,
    "category": OnMissing.FAIL,
    "like_count": OnMissing.DEFAULT,
    "dislike_count": OnMissing.DEFAULT,
    "comment_count": OnMissing.DEFAULT,
}

# Paths into the Data API ``videos`` response.
STATS_PATHS = {
    "like_count": "items.0.statistics.likeCount",
    "dislike_count": "items.0.statistics.dislikeCount",
    "comment_count": "items.0.statistics.commentCount",
    "description": "items.0.snippet.description",
    "published": "items.0.snippet.publishedAt",
    "category": "items.0.snippet.categoryId",
    "thumb_medium": "items.0.snippet.thumbnails.medium.url",
    "thumb_high": "items.0.snippet.thumbnails.high.url",
    "thumb_standard": "items.0.snippet.thumbnails.standard.url",
    "thumb_maxres": "items.0.snippet.thumbnails.maxres.url",
}


def parse_count(name: str, raw: Any, policy: Optional[OnMissing] = None) -> int:
    """Parse an unsigned 32-bit counter according to its field policy.

    ``raw`` may be a string (surrounding double quotes are trimmed), an int,
    or None for an absent field. An absent field defaults to 0 or fails
    depending on the policy; a present but malformed value always fails.
    """
    if policy is None:
        policy = FIELD_POLICIES.get(name, OnMissing.FAIL)

    if raw is None or raw == "":
        if policy is OnMissing.DEFAULT:
            logger.warning(f"Field '{name}' is absent, defaulting to 0")
            return 0
        raise ParseFailure(f"Required field '{name}' is missing", details={"field": name})

    if isinstance(raw, bool):
        raise ParseFailure(f"Field '{name}' is not a number: {raw!r}", details={"field": name, "value": raw})

    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw).strip().strip('"')
        if not (text.isascii() and text.isdigit()):
            raise ParseFailure(
                f"Field '{name}' is not an unsigned integer: {raw!r}",
                details={"field": name, "value": raw},
            )
        value = int(text)

    if not 0 <= value <= U32_MAX:
        raise ParseFailure(
            f"Field '{name}' is out of range: {value}",
            details={"field": name, "value": value},
        )
    return value


def check_status(video_id: str, basic: Mapping[str, str]):
    """Raise VideoNotFound unless the info document reports success."""
    status = basic.get("status")
    if status != STATUS_OK:
        logger.debug(f"Info request for {video_id} returned status {status!r}")
        raise VideoNotFound(
            f"Video not found: {video_id}",
            details={"video_id": video_id, "status": status, "reason": basic.get("reason")},
        )


def assemble(video_id: str, basic: Mapping[str, str], stats: Any) -> VideoMetadata:
    """Combine the info document and the statistics/snippet document.

    ``basic`` is the decoded ``get_video_info`` body, ``stats`` the decoded
    Data API JSON. Streams are classified from ``basic``.
    """
    check_status(video_id, basic)

    stat = {name: json_field(stats, path) for name, path in STATS_PATHS.items()}

    combined, video_only, audio_only = classify_info_formats(basic)

    return VideoMetadata(
        video_id=basic.get("video_id", video_id),
        title=basic.get("title", ""),
        rating=basic.get("avg_rating", ""),
        view_count=parse_count("view_count", basic.get("view_count")),
        author=basic.get("author", ""),
        length=parse_count("length", basic.get("length_seconds")),
        like_count=parse_count("like_count", stat["like_count"]),
        dislike_count=parse_count("dislike_count", stat["dislike_count"]),
        comment_count=parse_count("comment_count", stat["comment_count"]),
        description=stat["description"] or "",
        published=stat["published"] or "",
        category=parse_count("category", stat["category"]),
        thumb_default=basic.get("thumbnail_url", ""),
        thumb_medium=stat["thumb_medium"] or "",
        thumb_high=stat["thumb_high"] or "",
        thumb_standard=stat["thumb_standard"] or "",
        thumb_maxres=stat["thumb_maxres"] or "",
        streams=tuple(combined),
        video_streams=tuple(video_only),
        audio_streams=tuple(audio_only),
    )


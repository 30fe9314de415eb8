"""YouTube metadata extraction using yt-dlp."""

import logging
from typing import Any, Dict

import yt_dlp
from yt_dlp.utils import DownloadError

from .backends import VideoBackend
from .errors import NetworkRequestFailed, SchemaMismatch, VideoNotFound
from .metadata import parse_count
from .models import VideoMetadata
from .streams import classify_extracted_formats
from .urls import extract_video_id

logger = logging.getLogger(__name__)

# Substrings of yt-dlp error messages that mean the video itself is gone,
# as opposed to a transport or extraction problem.
_NOT_FOUND_SIGNALS = (
    "unavailable",
    "private video",
    "removed",
    "does not exist",
    "not available",
    "incomplete youtube id",
)


class YouTubeClient:
    """Handles interaction with yt-dlp to extract info documents."""

    def __init__(self):
        self._ydl_opts = {
            'quiet': True,
            'prefer_insecure': True,
            'no_warnings': True,
        }

    def extract(self, url: str, flat: bool = False) -> Dict[str, Any]:
        """Return the raw yt-dlp info document for ``url`` without downloading.

        With ``flat`` set, playlist entries are listed but not resolved.
        """
        opts = dict(self._ydl_opts)
        if flat:
            opts['extract_flat'] = True

        logger.debug(f"Extracting {url} with yt-dlp (flat={flat})")
        with yt_dlp.YoutubeDL(opts) as ydl:
            try:
                info = ydl.extract_info(url, download=False)
            except DownloadError as e:
                message = str(e)
                if any(signal in message.lower() for signal in _NOT_FOUND_SIGNALS):
                    raise VideoNotFound(
                        f"Video not found: {url}",
                        details={"url": url, "original_error": e},
                    ) from e
                raise NetworkRequestFailed(
                    f"Failed to fetch metadata: {message}",
                    details={"url": url, "original_error": e},
                ) from e

        if not isinstance(info, dict):
            raise SchemaMismatch(
                f"yt-dlp returned no document for {url}",
                details={"url": url},
            )
        return info


def _require(info: Dict[str, Any], key: str) -> Any:
    if key not in info:
        raise SchemaMismatch(
            f"yt-dlp document has no '{key}' field",
            details={"field": key, "id": info.get("id")},
        )
    return info[key]


def _string(info: Dict[str, Any], key: str) -> str:
    value = _require(info, key)
    return "" if value is None else str(value)


def _count(info: Dict[str, Any], key: str, name: str) -> int:
    value = info.get(key)
    if isinstance(value, float):
        value = int(value)
    return parse_count(name, value)


class YtDlpBackend(VideoBackend):
    """Resolves videos by delegating extraction to yt-dlp."""

    def __init__(self, client: YouTubeClient = None):
        self.client = client or YouTubeClient()

    def resolve(self, url: str) -> VideoMetadata:
        video_id = extract_video_id(url)
        logger.info(f"Resolving video {video_id} with yt-dlp")
        info = self.client.extract(video_id)
        return build_metadata(video_id, info)


def build_metadata(video_id: str, info: Dict[str, Any]) -> VideoMetadata:
    """Build a VideoMetadata record from a yt-dlp info document."""
    for key in ("view_count", "duration"):
        _require(info, key)

    formats = _require(info, "formats")
    if not isinstance(formats, list):
        raise SchemaMismatch(
            f"'formats' is a {type(formats).__name__}, expected a list",
            details={"field": "formats"},
        )
    all_streams, video_only, audio_only = classify_extracted_formats(formats)

    # yt-dlp exposes a single preferred thumbnail.
    thumbnail = _string(info, "thumbnail")
    rating = info.get("average_rating")

    return VideoMetadata(
        video_id=video_id,
        title=_string(info, "title"),
        rating="" if rating is None else str(rating),
        view_count=_count(info, "view_count", "view_count"),
        author=_string(info, "uploader"),
        length=_count(info, "duration", "length"),
        like_count=_count(info, "like_count", "like_count"),
        dislike_count=_count(info, "dislike_count", "dislike_count"),
        comment_count=_count(info, "comment_count", "comment_count"),
        description=_string(info, "description"),
        published=_string(info, "upload_date"),
        # Only category names are available, not the numeric id.
        category=0,
        thumb_default=thumbnail,
        thumb_medium=thumbnail,
        thumb_high=thumbnail,
        thumb_standard=thumbnail,
        thumb_maxres=thumbnail,
        streams=tuple(all_streams),
        video_streams=tuple(video_only),
        audio_streams=tuple(audio_only),
    )

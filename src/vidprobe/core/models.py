"""Data models for video, stream and playlist metadata."""

from dataclasses import dataclass, field
from typing import Any, FrozenSet, Tuple

from .errors import ConfigError

Streams = Tuple["StreamDescriptor", ...]


@dataclass(frozen=True)
class StreamDescriptor:
    """Represents a single fetchable media stream."""
    extension: str  # e.g. "mp4", "m4a", "webm"
    quality: str    # e.g. "720p", "hd720", "128000"; not normalised
    url: str


@dataclass(frozen=True)
class VideoMetadata:
    """Metadata and streams for a single video."""
    video_id: str
    title: str
    rating: str
    view_count: int
    author: str
    length: int  # seconds
    like_count: int
    dislike_count: int
    comment_count: int
    description: str
    published: str
    category: int
    thumb_default: str
    thumb_medium: str
    thumb_high: str
    thumb_standard: str
    thumb_maxres: str
    streams: Streams = ()        # combined audio+video
    video_streams: Streams = ()  # video only
    audio_streams: Streams = ()  # audio only

    @property
    def thumbnails(self) -> dict:
        return {
            "default": self.thumb_default,
            "medium": self.thumb_medium,
            "high": self.thumb_high,
            "standard": self.thumb_standard,
            "maxres": self.thumb_maxres,
        }


@dataclass(frozen=True)
class PlaylistEntry:
    """
    A single entry in a playlist.

    Holds only the reference to the video. Fetching its metadata costs at
    least one request, so it happens when `resolve()` is called and never
    while the playlist is listed.
    """
    video_id: str
    url: str
    title: str
    backend: Any = field(default=None, compare=False, repr=False)

    def resolve(self) -> VideoMetadata:
        """Resolve this entry into a full VideoMetadata record."""
        if self.backend is None:
            raise ConfigError(
                f"No backend attached to playlist entry {self.video_id}",
                details={"video_id": self.video_id, "url": self.url},
            )
        return self.backend.resolve(self.url)


@dataclass(frozen=True)
class Playlist:
    """Metadata for a playlist."""
    title: str
    url: str
    entries: Tuple[PlaylistEntry, ...]
    excluded_ids: FrozenSet[str] = frozenset()  # private or deleted videos

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

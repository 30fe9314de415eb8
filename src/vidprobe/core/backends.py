"""Backend interface and selection."""

from abc import ABC, abstractmethod
from enum import Enum

from .models import VideoMetadata


class BackendKind(str, Enum):
    INTERNAL = "internal"  # get_video_info + Data API
    YTDLP = "ytdlp"        # delegated to yt-dlp


class VideoBackend(ABC):
    """Resolves a url or video id into a VideoMetadata record.

    Implementations keep no state between calls, so a single instance can be
    shared by concurrent callers.
    """

    @abstractmethod
    def resolve(self, url: str) -> VideoMetadata:
        """Resolve ``url`` into metadata and streams, or raise a VidProbeError."""

    def close(self):
        """Release any connections held by the backend."""

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


def create_backend(kind, config=None) -> VideoBackend:
    """Build the backend for ``kind`` ('internal' or 'ytdlp').

    ``config`` is a ``vidprobe.utils.Config``; when omitted the settings file
    and environment are read.
    """
    # Imported here; both modules subclass VideoBackend.
    from .resolver import VideoResolver
    from .youtube_client import YtDlpBackend
    from ..utils.config import Config

    kind = BackendKind(kind)
    if config is None:
        config = Config()

    if kind is BackendKind.YTDLP:
        return YtDlpBackend()

    return VideoResolver(
        api_key=config.api_key,
        parallel=config.parallel_requests,
        timeout=config.request_timeout,
    )

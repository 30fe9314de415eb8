"""Core functionality for vidprobe."""

from .models import (
    StreamDescriptor,
    VideoMetadata,
    PlaylistEntry,
    Playlist,
)
from .errors import (
    VidProbeError,
    ConfigError,
    VideoNotFound,
    VideoUnavailable,
    DownloadCancelled,
    NetworkRequestFailed,
    ParseFailure,
    SchemaMismatch,
)
from .urls import extract_video_id, watch_url
from .backends import BackendKind, VideoBackend, create_backend
from .resolver import VideoResolver
from .youtube_client import YouTubeClient, YtDlpBackend
from .playlist import PlaylistResolver
from .transport import HttpTransport
from .downloader import StreamDownloader, download_stream

__all__ = [
    "StreamDescriptor",
    "VideoMetadata",
    "PlaylistEntry",
    "Playlist",
    "VidProbeError",
    "ConfigError",
    "VideoNotFound",
    "VideoUnavailable",
    "DownloadCancelled",
    "NetworkRequestFailed",
    "ParseFailure",
    "SchemaMismatch",
    "extract_video_id",
    "watch_url",
    "BackendKind",
    "VideoBackend",
    "create_backend",
    "VideoResolver",
    "YouTubeClient",
    "YtDlpBackend",
    "PlaylistResolver",
    "HttpTransport",
    "StreamDownloader",
    "download_stream",
]

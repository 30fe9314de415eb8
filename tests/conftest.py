"""Test configuration and fixtures"""

import json
import tempfile
import threading
from pathlib import Path
from urllib.parse import urlencode

import pytest

from vidprobe.core.errors import NetworkRequestFailed

VIDEO_ID = "ABCDEFGHIJK"


def encode_formats(entries):
    """Build a comma-separated format map as found in get_video_info."""
    return ",".join(urlencode(entry) for entry in entries)


def make_basic_body(**overrides):
    fields = {
        "status": "ok",
        "video_id": VIDEO_ID,
        "title": "Test Video",
        "avg_rating": "4.8",
        "view_count": "1500",
        "author": "Test Channel",
        "length_seconds": "212",
        "thumbnail_url": "https://i.ytimg.com/vi/ABCDEFGHIJK/default.jpg",
        "url_encoded_fmt_stream_map": encode_formats([
            {"type": 'video/mp4; codecs="avc1.42001E, mp4a.40.2"', "quality": "hd720",
             "url": "https://r1.googlevideo.com/videoplayback?itag=22"},
            {"type": 'video/webm; codecs="vp8.0, vorbis"', "quality": "medium",
             "url": "https://r1.googlevideo.com/videoplayback?itag=43"},
        ]),
        "adaptive_fmts": encode_formats([
            {"type": 'video/mp4; codecs="avc1.640028"', "quality_label": "1080p",
             "bitrate": "4000000", "url": "https://r1.googlevideo.com/videoplayback?itag=137"},
            {"type": 'audio/mp4; codecs="mp4a.40.2"', "bitrate": "128000",
             "url": "https://r1.googlevideo.com/videoplayback?itag=140"},
            {"type": 'audio/webm; codecs="opus"', "bitrate": "160000",
             "url": "https://r1.googlevideo.com/videoplayback?itag=251"},
        ]),
    }
    fields.update(overrides)
    return urlencode({k: v for k, v in fields.items() if v is not None})


def make_stats(statistics=None, snippet=None):
    stats = {
        "viewCount": "1500",
        "likeCount": "120",
        "dislikeCount": "3",
        "commentCount": "45",
    }
    if statistics is not None:
        stats = statistics
    snip = {
        "publishedAt": "2017-03-01T10:00:00Z",
        "categoryId": "10",
        "description": "A test description",
        "thumbnails": {
            size: {"url": f"https://i.ytimg.com/vi/ABCDEFGHIJK/{size}.jpg"}
            for size in ("default", "medium", "high", "standard", "maxres")
        },
    }
    if snippet is not None:
        snip = snippet
    return {"kind": "youtube#videoListResponse",
            "items": [{"id": VIDEO_ID, "statistics": stats, "snippet": snip}]}


class FakeResponse:
    """Stands in for a streamed requests.Response."""

    def __init__(self, body=b"", headers=None, chunk_size=4):
        self.body = body
        self.headers = headers or {}
        self.chunk_size = chunk_size
        self.closed = False

    @property
    def text(self):
        return self.body.decode("utf-8")

    def iter_content(self, chunk_size=1):
        for i in range(0, len(self.body), self.chunk_size):
            yield self.body[i:i + self.chunk_size]

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True


class FakeTransport:
    """Serves canned bodies by url prefix and records every request."""

    def __init__(self, routes=None):
        self.routes = routes or {}
        self.calls = []
        self.closed = False
        self._lock = threading.Lock()

    def _lookup(self, url):
        for prefix, result in self.routes.items():
            if url.startswith(prefix):
                if isinstance(result, Exception):
                    raise result
                return result
        raise NetworkRequestFailed(f"No route for {url}", details={"url": url})

    def get(self, url, headers=None, stream=False):
        with self._lock:
            self.calls.append((url, headers))
        result = self._lookup(url)
        if isinstance(result, FakeResponse):
            return result
        return FakeResponse(result.encode("utf-8"))

    def get_text(self, url):
        return self.get(url).text

    def close(self):
        self.closed = True


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def basic_body():
    return make_basic_body()


@pytest.fixture
def stats_doc():
    return make_stats()


@pytest.fixture
def fake_transport(basic_body, stats_doc):
    return FakeTransport({
        "https://youtube.com/get_video_info": basic_body,
        "https://www.googleapis.com/youtube/v3/videos": json.dumps(stats_doc),
    })


@pytest.fixture
def ytdlp_info():
    """Sample yt-dlp info document for a single video"""
    return {
        "id": VIDEO_ID,
        "title": "Test Video",
        "uploader": "Test Channel",
        "view_count": 1500,
        "like_count": 120,
        "duration": 212,
        "thumbnail": "https://i.ytimg.com/vi/ABCDEFGHIJK/maxresdefault.jpg",
        "upload_date": "20170301",
        "description": "A test description",
        "average_rating": None,
        "formats": [
            {"format_id": "sb0", "ext": "mhtml", "url": "https://i.ytimg.com/sb/0",
             "vcodec": "none", "acodec": "none"},
            {"format_id": "140", "ext": "m4a", "abr": 129.5, "url": "https://example.com/140",
             "vcodec": "none", "acodec": "mp4a.40.2"},
            {"format_id": "137", "ext": "mp4", "format_note": "1080p", "url": "https://example.com/137",
             "vcodec": "avc1.640028", "acodec": "none"},
            {"format_id": "18", "ext": "mp4", "format_note": "360p", "url": "https://example.com/18",
             "vcodec": "avc1.42001E", "acodec": "mp4a.40.2"},
        ],
    }
